"""Tests for microphone recording."""

import numpy as np
import pytest

from soundboard.audio_system import audio_recorder
from soundboard.audio_system.audio_assets import AudioAssets
from soundboard.app import main
from soundboard.audio_system.audio_recorder import AudioRecorder
from soundboard.config import RecordingConfig


class FakeInputStream:
    """Delivers a fixed number of blocks to the callback on start()"""

    instances = []

    def __init__(self, samplerate, channels, dtype, callback, blocks=3):
        self.samplerate = samplerate
        self.channels = channels
        self.dtype = dtype
        self.callback = callback
        self.blocks = blocks
        self.started = False
        self.closed = False
        FakeInputStream.instances.append(self)

    def start(self):
        self.started = True
        for _ in range(self.blocks):
            block = np.full((1024, self.channels), 0.5, dtype=self.dtype)
            self.callback(block, len(block), None, None)

    def stop(self):
        self.started = False

    def close(self):
        self.closed = True


@pytest.fixture
def written(monkeypatch):
    """Capture soundfile writes instead of encoding audio"""
    calls = []

    def fake_write(path, data, samplerate, format=None, subtype=None):
        calls.append(dict(path=path, data=data, samplerate=samplerate, format=format, subtype=subtype))

    monkeypatch.setattr(audio_recorder.sf, "write", fake_write)
    return calls


@pytest.fixture
def recorder(storage_dir, logger):
    FakeInputStream.instances.clear()
    return AudioRecorder(RecordingConfig(), AudioAssets(storage_dir, logger), logger,
                         stream_factory=FakeInputStream)


def test_records_mono_ogg_into_storage(recorder, written, storage_dir):
    path = recorder.start()
    assert recorder.is_recording

    result = recorder.stop()

    assert result == path
    assert path.parent == storage_dir
    assert path.suffix == ".ogg"
    assert not recorder.is_recording

    stream = FakeInputStream.instances[0]
    assert stream.samplerate == 44100
    assert stream.channels == 1
    assert stream.closed

    assert len(written) == 1
    assert written[0]["path"] == str(path)
    assert written[0]["data"].shape == (3 * 1024, 1)
    assert written[0]["samplerate"] == 44100
    assert (written[0]["format"], written[0]["subtype"]) == ("OGG", "VORBIS")


def test_nothing_captured_writes_nothing(storage_dir, logger, written):
    def silent_stream(**kwargs):
        return FakeInputStream(blocks=0, **kwargs)

    recorder = AudioRecorder(RecordingConfig(), AudioAssets(storage_dir, logger), logger,
                             stream_factory=silent_stream)
    recorder.start()

    assert recorder.stop() is None
    assert written == []


def test_cannot_start_twice(recorder, written):
    recorder.start()
    with pytest.raises(RuntimeError):
        recorder.start()
    recorder.stop()


def test_stop_without_start(recorder, written):
    assert recorder.stop() is None


def test_record_for(recorder, written):
    path = recorder.record_for(0.01)

    assert path is not None
    assert written[0]["path"] == str(path)


class BrokenDeviceError(Exception):
    """Stands in for sounddevice.PortAudioError, which is not an OSError"""


def broken_stream(**kwargs):
    raise BrokenDeviceError("Error querying device -1")


def test_unavailable_device_raises_oserror(storage_dir, logger):
    recorder = AudioRecorder(RecordingConfig(), AudioAssets(storage_dir, logger), logger,
                             stream_factory=broken_stream)

    with pytest.raises(OSError):
        recorder.start()
    assert not recorder.is_recording


def test_write_failure_raises_oserror(recorder, monkeypatch):
    def failing_write(path, *args, **kwargs):
        open(path, "wb").close()
        raise RuntimeError("Error opening file: unsupported format")

    monkeypatch.setattr(audio_recorder.sf, "write", failing_write)
    path = recorder.start()

    with pytest.raises(OSError):
        recorder.stop()
    assert not path.exists()


def test_record_command_reports_device_error(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(audio_recorder, "_default_stream_factory", lambda: broken_stream)
    storage = tmp_path / "home"

    code = main(["--storage-dir", str(storage), "--mock-audio", "record", "Hello", "--seconds", "0.01"])

    assert code == 1
    assert "❌" in capsys.readouterr().out
    assert list(storage.glob("recording-*")) == []
