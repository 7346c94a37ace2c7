"""
Audio Recorder - Records microphone input into the storage directory
"""

import time
from pathlib import Path
from typing import Callable, List, Optional

import numpy as np
import soundfile as sf

from ..config import RecordingConfig
from .audio_assets import AudioAssets


def _default_stream_factory() -> Callable:
    # Imported on first use: sounddevice needs the PortAudio library at import time
    import sounddevice as sd
    return sd.InputStream


class AudioRecorder:
    """
    Records from the default input device to a new file in storage.

    Frames are collected by the input stream callback and written as one
    compressed file (single-channel Ogg Vorbis by default) when recording
    stops.
    """

    def __init__(self, recording_config: RecordingConfig, assets: AudioAssets, logger,
                 stream_factory: Optional[Callable] = None):
        """
        Args:
            recording_config: Sample rate, channels and file format
            assets: Storage for the finished recording
            logger: ClassLogger instance for logging
            stream_factory: sounddevice.InputStream compatible factory (defaults to sounddevice's)
        """
        self.config = recording_config
        self.assets = assets
        self.logger = logger
        self._stream_factory = stream_factory

        self._stream = None
        self._output_path: Optional[Path] = None
        self._frames: List[np.ndarray] = []

    @property
    def is_recording(self) -> bool:
        return self._stream is not None

    def start(self) -> Path:
        """
        Start recording.

        Returns:
            Path the recording will be written to

        Raises:
            RuntimeError: If already recording
            OSError: If the input device cannot be opened
        """
        if self._stream is not None:
            raise RuntimeError("Recording already in progress")

        factory = self._stream_factory or _default_stream_factory()
        output_path = self.assets.new_recording_path(self.config.extension)
        self._frames = []

        try:
            stream = factory(
                samplerate=self.config.sample_rate,
                channels=self.config.channels,
                dtype="float32",
                callback=self._on_audio,
            )
            stream.start()
        except Exception as e:
            # sounddevice.PortAudioError derives from Exception only
            self.logger.error(f"Failed to open input device: {e}", exception=e)
            raise OSError(f"Cannot record: {e}") from e

        self._stream = stream
        self._output_path = output_path
        self.logger.info(f"🎙️ Recording to {output_path.name}")
        return output_path

    def stop(self) -> Optional[Path]:
        """
        Stop recording and write the file.

        Returns:
            Path of the written recording, or None if nothing was recorded

        Raises:
            OSError: If the recording cannot be written
        """
        if self._stream is None:
            return None

        stream, self._stream = self._stream, None
        output_path, self._output_path = self._output_path, None
        try:
            stream.stop()
            stream.close()
        except Exception as e:
            self.logger.warning(f"Failed to close input stream: {e}")

        if not self._frames:
            self.logger.warning("No audio captured, recording discarded")
            return None

        data = np.concatenate(self._frames)
        self._frames = []
        try:
            sf.write(
                str(output_path), data, self.config.sample_rate,
                format=self.config.format, subtype=self.config.subtype,
            )
        except (sf.SoundFileError, RuntimeError) as e:
            self.logger.error(f"Failed to write {output_path.name}: {e}", exception=e)
            output_path.unlink(missing_ok=True)
            raise OSError(f"Cannot save recording: {e}") from e
        duration = len(data) / float(self.config.sample_rate)
        self.logger.info(f"Recorded {duration:.1f}s to {output_path.name}")
        return output_path

    def record_for(self, seconds: float) -> Optional[Path]:
        """Record for a fixed number of seconds"""
        self.start()
        try:
            time.sleep(seconds)
        finally:
            path = self.stop()
        return path

    def _on_audio(self, indata, frames, time_info, status) -> None:
        if status:
            self.logger.warning(f"Input stream status: {status}")
        self._frames.append(indata.copy())
