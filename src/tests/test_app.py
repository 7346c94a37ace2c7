"""End-to-end tests for the command line front end (audio device mocked)."""

import json

import pytest

from soundboard.app import main


@pytest.fixture
def run(tmp_path, capsys):
    storage = tmp_path / "home"

    def runner(*args):
        code = main(["--storage-dir", str(storage), "--mock-audio", *args])
        return code, capsys.readouterr().out

    runner.storage = storage
    return runner


@pytest.fixture
def clip(tmp_path):
    path = tmp_path / "laugh.wav"
    path.write_bytes(b"RIFF....WAVE")
    return path


def _document(run):
    return json.loads((run.storage / "sounds.json").read_text())


def test_list_empty(run):
    code, out = run("list")

    assert code == 0
    assert "No sounds yet" in out


def test_add_list_and_play(run, clip):
    code, out = run("add", "Laugh", str(clip), "--color", "yellow")
    assert code == 0
    assert 'Added "Laugh"' in out

    document = _document(run)
    assert [entry["name"] for entry in document] == ["Laugh"]
    assert (run.storage / document[0]["audioFileName"]).is_file()

    code, out = run("list")
    assert code == 0
    assert "Laugh" in out
    assert "#ffff00ff" in out

    code, out = run("play", "0")
    assert code == 0
    assert 'Playing "Laugh"' in out

    code, out = run("play", document[0]["id"])
    assert code == 0


def test_edit_keeps_order(run, clip):
    run("add", "Laugh", str(clip))
    run("add", "Boing", str(clip))
    laugh_id = _document(run)[0]["id"]

    code, _ = run("edit", laugh_id, "--name", "Giggle")

    assert code == 0
    document = _document(run)
    assert [entry["name"] for entry in document] == ["Giggle", "Boing"]
    assert document[0]["id"] == laugh_id


def test_remove_by_position_and_id(run, clip):
    run("add", "Laugh", str(clip))
    run("add", "Boing", str(clip))

    code, _ = run("remove", "--position", "0")
    assert code == 0
    assert [entry["name"] for entry in _document(run)] == ["Boing"]

    code, out = run("remove", "--position", "5")
    assert code == 1
    assert "out of range" in out

    boing_id = _document(run)[0]["id"]
    assert run("remove", boing_id)[0] == 0
    assert run("remove", boing_id)[0] == 0
    assert _document(run) == []


def test_unknown_sound(run):
    code, out = run("play", "nope")

    assert code == 1
    assert "Sound not found" in out


def test_play_with_missing_audio(run, clip):
    run("add", "Laugh", str(clip))
    (run.storage / _document(run)[0]["audioFileName"]).unlink()

    code, out = run("play", "0")

    assert code == 1
    assert "Could not play" in out


def test_bad_color_is_reported(run, clip):
    code, out = run("add", "Laugh", str(clip), "--color", "not-a-color")

    assert code == 1
    assert not (run.storage / "sounds.json").exists()
