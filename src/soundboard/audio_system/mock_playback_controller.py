"""
Mock Playback Controller - No-op implementation for machines without an audio device
"""

import time
from pathlib import Path
from typing import Optional, Union

from ..library_system.sound_record import SoundRecord


class MockPlaybackController:
    """
    Mock implementation of PlaybackController that performs no audio operations.

    Simulates playback for a fixed duration after play() is called, or until
    stop() or another play() call. Missing audio files fail the same way they
    do on the real controller.
    """

    def __init__(self, storage_dir: Union[str, Path], logger, playback_duration: float = 3.0):
        """
        Initialize mock playback controller.

        Args:
            storage_dir: Directory holding the audio files
            logger: ClassLogger instance for logging
            playback_duration: Seconds a simulated sound lasts
        """
        self.storage_dir = Path(storage_dir)
        self.logger = logger
        self.current_record: Optional[SoundRecord] = None
        self.volume = 1.0

        # Playback simulation state
        self._playback_start_time: Optional[float] = None
        self._playback_duration = playback_duration

        self.logger.info("🔇 MockPlaybackController initialized (audio disabled)")

    def play(self, record: SoundRecord) -> bool:
        """Mock: Check the audio file exists and start simulated playback"""
        self.stop()

        audio_path = record.audio_path(self.storage_dir)
        if not audio_path.is_file():
            self.logger.error(f'Mock: Audio file for "{record.name}" not found: {audio_path}')
            return False

        self.current_record = record
        self._playback_start_time = time.time()
        self.logger.info(f'Mock: Playing "{record.name}" ({audio_path.name})')
        return True

    def stop(self) -> None:
        """Mock: Stop simulated playback"""
        if self._playback_start_time is not None:
            self.logger.info("Mock: Stopped playback")
        self._playback_start_time = None
        self.current_record = None

    def is_playing(self) -> bool:
        """True until the simulated duration runs out or stop() is called"""
        if self._playback_start_time is None:
            return False

        elapsed = time.time() - self._playback_start_time
        if elapsed >= self._playback_duration:
            self._playback_start_time = None
            self.current_record = None
            return False

        return True

    def wait_until_finished(self, timeout: Optional[float] = None, poll_interval: float = 0.1) -> bool:
        """Mock: Block until the simulated sound ends"""
        start_time = time.time()
        while self.is_playing():
            if timeout is not None and time.time() - start_time >= timeout:
                return False
            time.sleep(poll_interval)
        return True

    def set_volume(self, volume: float) -> None:
        """Mock: Remember the volume only"""
        self.volume = min(max(volume, 0.0), 1.0)

    def shutdown(self) -> None:
        """Mock: Stop simulated playback"""
        self.stop()
