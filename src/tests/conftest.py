"""Shared test fixtures."""

import logging
from pathlib import Path

import pygame
import pytest

from soundboard.library_system import SoundLibrary
from soundboard.utils import HybridLogger


class FakeMusic:
    """Stand-in for pygame.mixer.music that records what it was asked to do"""

    def __init__(self):
        self.loaded = None
        self.playing = False
        self.volume = 1.0
        self.calls = []
        self.fail_next_load = False

    def load(self, path):
        self.calls.append(("load", path))
        if self.fail_next_load:
            self.fail_next_load = False
            raise pygame.error("Unrecognized audio format")
        self.loaded = path
        # pygame resets the music volume on load
        self.volume = 1.0

    def play(self):
        self.calls.append(("play", self.loaded))
        self.playing = True

    def stop(self):
        self.calls.append(("stop",))
        self.playing = False

    def get_busy(self):
        return self.playing

    def set_volume(self, volume):
        self.volume = volume


class FakeMixer:
    """Stand-in for pygame.mixer"""

    def __init__(self, initialized=True):
        self.music = FakeMusic()
        self.initialized = initialized
        self.init_calls = 0

    def get_init(self):
        return (44100, -16, 2) if self.initialized else None

    def init(self):
        self.init_calls += 1
        self.initialized = True

    def quit(self):
        self.initialized = False


@pytest.fixture
def logger():
    """Console-only ClassLogger at DEBUG level"""
    hybrid_logger = HybridLogger("soundboard-tests", log_dir=None)
    yield hybrid_logger.get_class_logger("Test", logging.DEBUG)
    hybrid_logger.cleanup()


@pytest.fixture
def storage_dir(tmp_path) -> Path:
    path = tmp_path / "storage"
    path.mkdir()
    return path


@pytest.fixture
def fake_mixer():
    return FakeMixer()


@pytest.fixture
def uninitialized_mixer():
    return FakeMixer(initialized=False)


@pytest.fixture
def make_library(storage_dir, logger):
    """Factory for loaded libraries on the test storage dir; closes them afterwards"""
    libraries = []

    def factory(directory=None, autoload=True):
        library = SoundLibrary(directory or storage_dir, logger, autoload=autoload)
        if autoload:
            assert library.wait_until_loaded(5.0)
        libraries.append(library)
        return library

    yield factory

    for library in libraries:
        library.close(5.0)


@pytest.fixture
def audio_file(storage_dir):
    """Factory writing a placeholder audio file into storage"""
    def factory(name="laugh.m4a"):
        path = storage_dir / name
        path.write_bytes(b"\x00" * 64)
        return path
    return factory
