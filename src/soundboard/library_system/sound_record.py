"""
Sound Record - One soundboard entry and its appearance variants
"""

import uuid
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Union

import pygame


@dataclass(frozen=True)
class Color:
    """8-bit RGBA color"""
    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self):
        for channel in (self.red, self.green, self.blue, self.alpha):
            if not isinstance(channel, int) or not (0 <= channel <= 255):
                raise ValueError(f"Color channels must be integers in 0-255, got {channel!r}")

    @classmethod
    def parse(cls, value: str) -> "Color":
        """
        Parse a color name ("yellow") or hex string ("#ffcc00", "#ffcc00ff").

        Raises:
            ValueError: If pygame does not recognise the value
        """
        parsed = pygame.Color(value.strip())
        return cls(parsed.r, parsed.g, parsed.b, parsed.a)

    def to_bytes(self) -> bytes:
        return bytes((self.red, self.green, self.blue, self.alpha))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Color":
        if len(data) != 4:
            raise ValueError(f"Color payload must be 4 bytes, got {len(data)}")
        return cls(data[0], data[1], data[2], data[3])

    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}{self.alpha:02x}"


# New sounds start red; records carrying no appearance at all fall back to it too
DEFAULT_COLOR = Color(255, 0, 0)


@dataclass(frozen=True)
class ImageAppearance:
    """Legacy appearance: optional background image bytes (None shows the default glyph)"""
    image_data: Optional[bytes] = None


@dataclass(frozen=True)
class ColorAppearance:
    """Current appearance: a solid tile color"""
    color: Color = DEFAULT_COLOR


Appearance = Union[ImageAppearance, ColorAppearance]


def new_sound_id() -> str:
    return str(uuid.uuid4())


def validate_audio_file_name(audio_file_name: str) -> str:
    """
    Check that an audio reference is a bare file name.

    Raises:
        ValueError: If empty or containing path components
    """
    if not isinstance(audio_file_name, str) or not audio_file_name:
        raise ValueError("Audio file name must be a non-empty string")
    if audio_file_name in (".", "..") or Path(audio_file_name).name != audio_file_name \
            or "/" in audio_file_name or "\\" in audio_file_name:
        raise ValueError(f"Audio file name must not contain path separators: {audio_file_name!r}")
    return audio_file_name


@dataclass(frozen=True, eq=False)
class SoundRecord:
    """
    One soundboard entry.

    Records compare and hash by id only, so an edited copy of a record is
    the same entity as the original.
    """
    id: str
    name: str
    appearance: Appearance
    audio_file_name: str

    def __post_init__(self):
        if not self.id:
            raise ValueError("Sound id must not be empty")
        trimmed = self.name.strip() if isinstance(self.name, str) else ""
        if not trimmed:
            raise ValueError("Sound name must not be empty")
        object.__setattr__(self, "name", trimmed)
        if not isinstance(self.appearance, (ImageAppearance, ColorAppearance)):
            raise ValueError(f"Unsupported appearance: {self.appearance!r}")
        validate_audio_file_name(self.audio_file_name)

    @classmethod
    def create(cls, name: str, audio_file_name: str,
               appearance: Optional[Appearance] = None) -> "SoundRecord":
        """Create a record with a fresh id (red tile unless an appearance is given)"""
        return cls(
            id=new_sound_id(),
            name=name,
            appearance=appearance if appearance is not None else ColorAppearance(),
            audio_file_name=audio_file_name,
        )

    def with_changes(self, **changes) -> "SoundRecord":
        """Copy of this record with some fields replaced; the id is kept"""
        if "id" in changes:
            raise ValueError("Sound id cannot be reassigned")
        return replace(self, **changes)

    def same_content(self, other: "SoundRecord") -> bool:
        """Field-by-field comparison (== only compares ids)"""
        return (
            self.id == other.id and
            self.name == other.name and
            self.appearance == other.appearance and
            self.audio_file_name == other.audio_file_name
        )

    def audio_path(self, storage_dir: Path) -> Path:
        """Resolve the audio reference against the current storage directory"""
        return Path(storage_dir) / self.audio_file_name

    def __eq__(self, other):
        if not isinstance(other, SoundRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)
