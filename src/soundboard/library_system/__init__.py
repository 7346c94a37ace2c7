"""
Library System Module

Provides the sound record model, the JSON storage codec and the persisted
sound library.
"""

from .sound_record import (
    SoundRecord, Color, ColorAppearance, ImageAppearance, Appearance, DEFAULT_COLOR
)
from .codec import CodecError, DecodeResult, encode_sounds, decode_sounds
from .sound_library import SoundLibrary, LibraryState

__all__ = [
    'SoundRecord',
    'Color',
    'ColorAppearance',
    'ImageAppearance',
    'Appearance',
    'DEFAULT_COLOR',
    'CodecError',
    'DecodeResult',
    'encode_sounds',
    'decode_sounds',
    'SoundLibrary',
    'LibraryState',
]
