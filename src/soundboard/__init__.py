"""
Soundboard - persisted sound library with single-voice playback
"""

import os

# Keep pygame quiet on import (set before any pygame import)
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from .config import SoundboardConfig, RecordingConfig, default_config
from .sound_editor import SoundEditor

__version__ = "1.0.0"

__all__ = [
    'SoundboardConfig',
    'RecordingConfig',
    'default_config',
    'SoundEditor',
]
