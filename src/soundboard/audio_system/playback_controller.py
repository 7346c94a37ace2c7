"""
Playback Controller - Plays one sound at a time
"""

import os
import time
from pathlib import Path
from typing import Optional, Union

import pygame

from ..library_system.sound_record import SoundRecord


class PlaybackController:
    """
    Controls audio playback for the soundboard.

    Uses the pygame music stream, which holds a single voice: starting a
    sound stops whatever was playing before.
    """

    def __init__(self, storage_dir: Union[str, Path], logger, mixer=None):
        """
        Initialize the playback controller with the pygame mixer.

        Args:
            storage_dir: Directory holding the audio files
            logger: ClassLogger instance for logging
            mixer: pygame.mixer compatible module (defaults to pygame.mixer)

        Raises:
            pygame.error: If no audio device can be opened
        """
        self.storage_dir = Path(storage_dir)
        self.logger = logger
        self.current_record: Optional[SoundRecord] = None
        self.volume = 1.0

        self.mixer = mixer if mixer is not None else pygame.mixer
        if not self.mixer.get_init():
            self.mixer.init()

        self.mixer.music.stop()

    def play(self, record: SoundRecord) -> bool:
        """
        Play a sound, stopping the one currently playing.

        Failures are logged and leave the controller idle; nothing is raised.

        Args:
            record: Sound to play

        Returns:
            True if playback started, False on error
        """
        self.stop()

        audio_path = record.audio_path(self.storage_dir)
        if not audio_path.is_file():
            self.logger.error(f'Audio file for "{record.name}" not found: {audio_path}')
            return False

        try:
            self.mixer.music.load(str(audio_path))
            self.mixer.music.set_volume(self.volume)
            self.mixer.music.play()
        except Exception as e:
            self.logger.error(f'Failed to play "{record.name}" from {audio_path}: {e}')
            return False

        self.current_record = record
        self.logger.info(f'Playing "{record.name}" ({os.path.basename(audio_path)})')
        return True

    def stop(self) -> None:
        """Stop the currently playing sound"""
        self.mixer.music.stop()
        self.current_record = None

    def is_playing(self) -> bool:
        """
        Check if a sound is currently playing.

        Returns:
            True if a sound is playing, False otherwise
        """
        return self.current_record is not None and bool(self.mixer.music.get_busy())

    def wait_until_finished(self, timeout: Optional[float] = None, poll_interval: float = 0.1) -> bool:
        """
        Block while a sound is playing.

        Returns:
            True if playback finished, False on timeout
        """
        start_time = time.time()
        while self.is_playing():
            if timeout is not None and time.time() - start_time >= timeout:
                return False
            time.sleep(poll_interval)
        return True

    def set_volume(self, volume: float) -> None:
        """
        Set playback volume.

        Args:
            volume: Volume level (0.0 to 1.0)
        """
        self.volume = min(max(volume, 0.0), 1.0)
        self.mixer.music.set_volume(self.volume)

    def shutdown(self) -> None:
        """Stop playback and release the audio device"""
        self.stop()
        if self.mixer.get_init():
            self.mixer.quit()
