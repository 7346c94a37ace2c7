"""
Audio System Module

Provides single-voice playback, microphone recording and audio file
storage for the soundboard.
"""

from .audio_assets import AudioAssets, AUDIO_EXTENSIONS
from .audio_recorder import AudioRecorder
from .playback_controller import PlaybackController
from .mock_playback_controller import MockPlaybackController

__all__ = [
    'AudioAssets',
    'AUDIO_EXTENSIONS',
    'AudioRecorder',
    'PlaybackController',
    'MockPlaybackController',
]
