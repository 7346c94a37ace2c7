"""
Soundboard configuration
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


# Environment variable that overrides the default storage directory
STORAGE_DIR_ENV = "SOUNDBOARD_HOME"
DEFAULT_STORAGE_DIR = Path.home() / ".soundboard"
DEFAULT_LIBRARY_FILE_NAME = "sounds.json"


@dataclass
class RecordingConfig:
    """Microphone recording settings"""
    sample_rate: int = 44100
    channels: int = 1
    format: str = "OGG"      # soundfile container
    subtype: str = "VORBIS"  # soundfile codec
    extension: str = "ogg"


@dataclass
class SoundboardConfig:
    """Main soundboard configuration"""

    # Directory holding the library document and every audio asset
    storage_dir: Path
    library_file_name: str = DEFAULT_LIBRARY_FILE_NAME

    recording: RecordingConfig = field(default_factory=RecordingConfig)

    # Bypass the audio device (MockPlaybackController)
    use_mock_audio: bool = False

    # Logging
    log_dir: Optional[Path] = None
    log_level: int = logging.INFO

    def __post_init__(self):
        self.storage_dir = Path(self.storage_dir)
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir)

    @property
    def library_path(self) -> Path:
        """Full path of the persisted library document"""
        return self.storage_dir / self.library_file_name

    def validate(self) -> None:
        """Basic validation of configuration"""
        if not self.library_file_name:
            raise ValueError("Library file name must not be empty")

        if Path(self.library_file_name).name != self.library_file_name:
            raise ValueError(f"Library file name must not contain path separators: {self.library_file_name}")

        if self.storage_dir.exists() and not self.storage_dir.is_dir():
            raise ValueError(f"Storage path is not a directory: {self.storage_dir}")

        if self.recording.sample_rate <= 0:
            raise ValueError(f"Recording sample rate must be positive, got {self.recording.sample_rate}")

        if self.recording.channels not in (1, 2):
            raise ValueError(f"Recording channels must be 1 or 2, got {self.recording.channels}")

        if not self.recording.extension or "." in self.recording.extension:
            raise ValueError(f"Recording extension must be a bare suffix, got {self.recording.extension!r}")


def default_config(storage_dir: Optional[Path] = None, use_mock_audio: bool = False) -> SoundboardConfig:
    """
    Create the default configuration.

    Args:
        storage_dir: Explicit storage directory; falls back to $SOUNDBOARD_HOME, then ~/.soundboard
        use_mock_audio: Disable the audio device

    Returns:
        SoundboardConfig with logs written under <storage_dir>/logs
    """
    if storage_dir is None:
        env_dir = os.environ.get(STORAGE_DIR_ENV)
        storage_dir = Path(env_dir) if env_dir else DEFAULT_STORAGE_DIR

    storage_dir = Path(storage_dir).expanduser()
    return SoundboardConfig(
        storage_dir=storage_dir,
        use_mock_audio=use_mock_audio,
        log_dir=storage_dir / "logs",
    )
