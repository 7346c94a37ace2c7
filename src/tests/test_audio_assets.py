"""Tests for audio file storage and import."""

from types import SimpleNamespace

import pytest

from soundboard.audio_system import audio_assets
from soundboard.audio_system.audio_assets import AudioAssets


@pytest.fixture
def assets(storage_dir, logger):
    return AudioAssets(storage_dir, logger)


@pytest.fixture
def external_file(tmp_path):
    path = tmp_path / "outside" / "Big_Laugh.MP3"
    path.parent.mkdir()
    path.write_bytes(b"ID3-ish payload")
    return path


def test_import_copies_under_generated_name(assets, external_file, storage_dir):
    file_name = assets.import_file(external_file)

    assert file_name.endswith(".mp3")
    assert file_name != external_file.name
    assert (storage_dir / file_name).read_bytes() == external_file.read_bytes()
    assert external_file.exists()
    assert assets.exists(file_name)


def test_importing_twice_gives_two_files(assets, external_file):
    assert assets.import_file(external_file) != assets.import_file(external_file)


def test_import_missing_file_raises(assets, tmp_path):
    with pytest.raises(FileNotFoundError):
        assets.import_file(tmp_path / "nope.mp3")


def test_discard_removes_stored_file(assets, external_file):
    file_name = assets.import_file(external_file)

    assets.discard(file_name)
    assets.discard(file_name)

    assert not assets.exists(file_name)
    assert external_file.exists()


def test_resolve_joins_storage_dir(assets, storage_dir):
    assert assets.resolve("laugh.m4a") == storage_dir / "laugh.m4a"
    assert not assets.exists("laugh.m4a")


def test_new_recording_path(assets, storage_dir):
    path = assets.new_recording_path("ogg")

    assert path.parent == storage_dir
    assert path.name.startswith("recording-")
    assert path.suffix == ".ogg"
    assert not path.exists()


def test_suggest_name_uses_title_tag(assets, external_file, monkeypatch):
    tagged = SimpleNamespace(tag=SimpleNamespace(title="  Evil Laugh "))
    monkeypatch.setattr(audio_assets.eyed3, "load", lambda path: tagged)

    assert assets.suggest_name(external_file) == "Evil Laugh"


def test_suggest_name_falls_back_to_file_stem(assets, external_file, monkeypatch):
    monkeypatch.setattr(audio_assets.eyed3, "load", lambda path: None)

    assert assets.suggest_name(external_file) == "Big Laugh"


def test_suggest_name_survives_tag_errors(assets, external_file, monkeypatch):
    def broken_load(path):
        raise OSError("unreadable")

    monkeypatch.setattr(audio_assets.eyed3, "load", broken_load)

    assert assets.suggest_name(external_file) == "Big Laugh"
