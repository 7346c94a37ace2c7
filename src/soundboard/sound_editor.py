"""
Sound Editor - Turns user input into a sound record
"""

from pathlib import Path
from typing import Optional, Union

from .audio_system.audio_assets import AudioAssets
from .library_system.sound_library import SoundLibrary
from .library_system.sound_record import (
    DEFAULT_COLOR,
    Color,
    ColorAppearance,
    SoundRecord,
    validate_audio_file_name,
)


class SoundEditor:
    """
    Form state for creating a new sound or editing an existing one.

    Editing keeps the original id, so committing replaces the sound in place.
    """

    def __init__(self, assets: AudioAssets, logger, sound_to_edit: Optional[SoundRecord] = None):
        """
        Args:
            assets: Storage that imported audio is copied into
            logger: ClassLogger instance for logging
            sound_to_edit: Existing sound to edit, or None to create a new one
        """
        self.assets = assets
        self.logger = logger
        self.sound_to_edit = sound_to_edit

        self.name = ""
        self.color: Color = DEFAULT_COLOR
        self.audio_file_name: Optional[str] = None
        self._color_chosen = False
        # Copied into storage by this editor and not committed yet
        self._imported_file_name: Optional[str] = None

        if sound_to_edit is not None:
            self.name = sound_to_edit.name
            self.audio_file_name = sound_to_edit.audio_file_name
            if isinstance(sound_to_edit.appearance, ColorAppearance):
                self.color = sound_to_edit.appearance.color

    @property
    def is_editing(self) -> bool:
        return self.sound_to_edit is not None

    @property
    def can_save(self) -> bool:
        """A sound needs a non-blank name and an audio file"""
        return bool(self.name.strip()) and self.audio_file_name is not None

    def set_color(self, color: Union[Color, str]) -> None:
        self.color = Color.parse(color) if isinstance(color, str) else color
        self._color_chosen = True

    def import_file(self, source: Union[str, Path]) -> str:
        """
        Copy an audio file into storage and use it for this sound.

        Fills in a suggested name when the name is still blank. A file
        imported earlier by this editor is discarded.

        Returns:
            The stored file name
        """
        file_name = self.assets.import_file(source)
        self.discard_import()
        self._imported_file_name = file_name
        self.audio_file_name = file_name
        if not self.name.strip():
            self.name = self.assets.suggest_name(source)
        return file_name

    def discard_import(self) -> None:
        """Delete the uncommitted imported file, if any"""
        if self._imported_file_name is None:
            return
        self.assets.discard(self._imported_file_name)
        if self.audio_file_name == self._imported_file_name:
            self.audio_file_name = self.sound_to_edit.audio_file_name if self.sound_to_edit else None
        self._imported_file_name = None

    def attach_recording(self, recording_path: Union[str, Path]) -> None:
        """Use a finished recording (already in storage) for this sound"""
        recording_path = Path(recording_path)
        if recording_path.parent.resolve() != self.assets.storage_dir.resolve():
            raise ValueError(f"Recording is not in the storage directory: {recording_path}")
        self.discard_import()
        self.audio_file_name = validate_audio_file_name(recording_path.name)

    def build(self) -> SoundRecord:
        """
        Create the sound record from the form.

        Raises:
            ValueError: If the name is blank or no audio was chosen
        """
        if not self.name.strip():
            raise ValueError("Sound name must not be empty")
        if self.audio_file_name is None:
            raise ValueError("No audio selected")

        if self.sound_to_edit is None:
            return SoundRecord.create(self.name, self.audio_file_name, ColorAppearance(self.color))

        # A legacy image sound keeps its image unless a color was picked
        appearance = self.sound_to_edit.appearance
        if isinstance(appearance, ColorAppearance) or self._color_chosen:
            appearance = ColorAppearance(self.color)

        return self.sound_to_edit.with_changes(
            name=self.name,
            appearance=appearance,
            audio_file_name=self.audio_file_name,
        )

    def commit(self, library: SoundLibrary) -> SoundRecord:
        """
        Build the record and hand it to the library (update when editing, add otherwise).

        An imported file is deleted again when the form cannot be saved.
        """
        try:
            sound = self.build()
        except ValueError:
            self.discard_import()
            raise
        self._imported_file_name = None
        if self.is_editing:
            library.update(sound)
        else:
            library.add(sound)
        self.logger.debug(f'{"Edited" if self.is_editing else "Created"} sound "{sound.name}"')
        return sound
