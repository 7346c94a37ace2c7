"""Tests for the per-class logger."""

import logging

import pytest

from soundboard.utils import HybridLogger


@pytest.fixture
def file_logger(tmp_path):
    hybrid_logger = HybridLogger("soundboard-log-test", log_dir=tmp_path)
    yield hybrid_logger
    hybrid_logger.cleanup()


def _read_log(hybrid_logger):
    hybrid_logger.cleanup()
    return hybrid_logger.log_file.read_text(encoding="utf-8")


def test_file_output_has_class_name(file_logger):
    file_logger.get_class_logger("SoundLibrary").info("Loaded 3 sounds")

    content = _read_log(file_logger)

    assert "[INFO] [SoundLibrary] Loaded 3 sounds" in content
    assert "\033[" not in content


def test_level_filtering_per_class(file_logger):
    quiet = file_logger.get_class_logger("Quiet", logging.WARNING)
    quiet.info("hidden")
    quiet.warning("shown")

    content = _read_log(file_logger)

    assert "hidden" not in content
    assert "[WARNING] [Quiet] shown" in content


def test_error_with_exception_details(file_logger):
    logger = file_logger.get_class_logger("Player")
    try:
        raise ValueError("bad audio")
    except ValueError as e:
        logger.error("Failed to play", exception=e)

    content = _read_log(file_logger)

    assert "Failed to play | Type: ValueError" in content
    assert "Traceback" in content


def test_console_output_goes_to_stderr(capsys):
    hybrid_logger = HybridLogger("soundboard-log-test", log_dir=None)
    try:
        hybrid_logger.get_main_logger().warning("disk almost full")
    finally:
        hybrid_logger.cleanup()

    captured = capsys.readouterr()
    assert "[WARNING] [Main] disk almost full" in captured.err
    assert captured.out == ""


def test_same_class_logger_is_reused():
    hybrid_logger = HybridLogger("soundboard-log-test", log_dir=None)
    try:
        assert hybrid_logger.get_class_logger("A") is hybrid_logger.get_class_logger("A")
        assert hybrid_logger.log_file is None
    finally:
        hybrid_logger.cleanup()
