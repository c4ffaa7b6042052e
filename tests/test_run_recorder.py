"""
Tests for run recording.
"""

import json

import pytest

from gridfall.recording import EventEmitter, RunRecorder, run_name_for_game

GAME_ID = "ab" * 32


def read_events(recorder):
    with open(recorder.events_file) as f:
        return [json.loads(line) for line in f]


def test_run_named_after_game(tmp_path):
    recorder = RunRecorder(str(tmp_path / "runs"))

    name = recorder.create_run(GAME_ID)

    assert name == run_name_for_game(GAME_ID) == "game_abababababab"
    assert recorder.get_run_path() == tmp_path / "runs" / name
    assert recorder.get_run_path().is_dir()
    assert recorder.game_id == GAME_ID


def test_custom_run_name(tmp_path):
    recorder = RunRecorder(str(tmp_path))
    assert recorder.create_run(GAME_ID, "game_one") == "game_one"
    assert (tmp_path / "game_one").is_dir()


def test_same_game_cannot_be_recorded_twice(tmp_path):
    RunRecorder(str(tmp_path)).create_run(GAME_ID)
    with pytest.raises(FileExistsError):
        RunRecorder(str(tmp_path)).create_run(GAME_ID)


def test_events_are_sequenced_and_tagged(tmp_path):
    recorder = RunRecorder(str(tmp_path))
    recorder.create_run(GAME_ID)
    emitter = EventEmitter(recorder)

    emitter.emit_player_joined("0xa", 1)
    emitter.emit_refund("0xa", 50)

    events = read_events(recorder)
    assert [e["event_type"] for e in events] == ["player_joined", "refund"]
    assert [e["sequence"] for e in events] == [0, 1]
    assert all(e["game_id"] == GAME_ID for e in events)
    assert events[1]["data"] == {"player": "0xa", "amount": 50}


def test_metadata_carries_game_id(tmp_path):
    recorder = RunRecorder(str(tmp_path))
    recorder.create_run(GAME_ID)
    EventEmitter(recorder).emit_game_start(GAME_ID, ["0xa"], [])

    recorder.save_metadata({"players": ["0xa"]})

    metadata = json.loads(recorder.metadata_file.read_text())
    assert metadata == {"players": ["0xa"], "game_id": GAME_ID, "events_recorded": 1}


def test_record_before_create_run_is_ignored(tmp_path):
    recorder = RunRecorder(str(tmp_path))
    recorder.record_event("action", {})
    recorder.save_metadata({"players": []})
    assert list(tmp_path.iterdir()) == []


def test_emitter_without_recorder():
    EventEmitter().emit_game_start("g", ["0xa"], ["0xa"])


def test_unserializable_event_is_logged(tmp_path, caplog):
    recorder = RunRecorder(str(tmp_path))
    recorder.create_run(GAME_ID)
    emitter = EventEmitter(recorder)

    emitter.emit_action({"when": object()}, None)
    emitter.emit_refund("0xa", 50)

    assert "Error recording event action" in caplog.text
    assert [e["sequence"] for e in read_events(recorder)] == [0]


def test_list_runs(tmp_path):
    recorder = RunRecorder(str(tmp_path))
    recorder.create_run("a" * 64)
    recorder.save_metadata({})
    EventEmitter(recorder).emit_game_over(["0xa", "0xb"], {}, {})

    recorder.create_run("b" * 64)
    (tmp_path / "notes.txt").write_text("not a run")

    runs = recorder.list_runs()

    assert [r["name"] for r in runs] == [run_name_for_game("a" * 64), run_name_for_game("b" * 64)]
    assert runs[0]["game_id"] == "a" * 64
    assert runs[0]["event_count"] == 1
    assert runs[0]["winner_count"] == 2
    assert runs[1]["has_events"] is False
    assert "metadata" not in runs[1]
