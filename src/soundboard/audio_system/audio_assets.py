"""
Audio Assets - Audio files kept next to the library document
"""

import shutil
import uuid
from pathlib import Path
from typing import Union

import eyed3

# Suppress eyed3 logging noise
eyed3.log.setLevel("ERROR")


AUDIO_EXTENSIONS = ('.mp3', '.wav', '.m4a', '.flac', '.ogg', '.aac')


class AudioAssets:
    """
    Stores audio files in the storage directory under generated names.

    Sounds only keep the bare file name; paths are always rebuilt from the
    configured storage directory.
    """

    def __init__(self, storage_dir: Union[str, Path], logger):
        """
        Args:
            storage_dir: Directory shared with the library document
            logger: ClassLogger instance for logging
        """
        self.storage_dir = Path(storage_dir)
        self.logger = logger

    def resolve(self, audio_file_name: str) -> Path:
        """Full path of a stored audio file"""
        return self.storage_dir / audio_file_name

    def exists(self, audio_file_name: str) -> bool:
        return self.resolve(audio_file_name).is_file()

    def new_recording_path(self, extension: str) -> Path:
        """Unused path for a new recording, e.g. recording-<uuid>.ogg"""
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        return self.storage_dir / f"recording-{uuid.uuid4()}.{extension}"

    def import_file(self, source: Union[str, Path]) -> str:
        """
        Copy an external audio file into storage verbatim.

        The copy is named <uuid>.<lowercased extension> so imports never clash.

        Args:
            source: Path of the file to import

        Returns:
            The stored file name

        Raises:
            FileNotFoundError: If source does not exist
            OSError: If the copy fails
        """
        source = Path(source)
        if not source.is_file():
            raise FileNotFoundError(f"Audio file not found: {source}")

        if source.suffix.lower() not in AUDIO_EXTENSIONS:
            self.logger.warning(f"Importing file with unusual extension: {source.name}")

        extension = source.suffix.lower()
        file_name = f"{uuid.uuid4()}{extension}"

        self.storage_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, self.resolve(file_name))
        self.logger.info(f'Imported "{source.name}" as {file_name}')
        return file_name

    def discard(self, audio_file_name: str) -> None:
        """Delete a stored file that no sound ended up using"""
        try:
            self.resolve(audio_file_name).unlink(missing_ok=True)
            self.logger.debug(f"Discarded unused {audio_file_name}")
        except OSError as e:
            self.logger.warning(f"Failed to discard {audio_file_name}: {e}")

    def suggest_name(self, source: Union[str, Path]) -> str:
        """
        Suggest a display name for an audio file.

        Uses the ID3 title tag when there is one, otherwise the file stem.
        """
        source = Path(source)
        try:
            audio_file = eyed3.load(str(source))
            if audio_file and audio_file.tag and audio_file.tag.title:
                title = str(audio_file.tag.title).strip()
                if title:
                    return title
        except Exception as e:
            self.logger.warning(f"Failed to read tags from {source}: {e}")

        return source.stem.replace("_", " ").strip() or source.name
