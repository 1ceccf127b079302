"""
Unit tests for workout history persistence.
"""

import json
from datetime import datetime, timezone

import pytest

from formcoach.session import (
    Exercise,
    HistoryStore,
    InMemoryHistoryStore,
    JsonHistoryStore,
    Session,
    SessionSummary,
)


def make_summary(reps=3, target=3):
    exercise = Exercise(id="ex-1", name="Squats", category="strength", difficulty="beginner")
    session = Session(exercise=exercise, target_reps=target, current_reps=reps)
    return SessionSummary.from_session(
        session, when=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc))


class TestSessionSummary:
    def test_from_session(self):
        summary = make_summary(reps=12, target=10)
        assert summary.exercise_name == "Squats"
        assert summary.reps == 12
        assert summary.target_reps == 10
        assert summary.timestamp == "2024-05-01T12:30:00+00:00"

    def test_default_timestamp_is_utc(self):
        exercise = Exercise(id="ex-1", name="Squats")
        summary = SessionSummary.from_session(Session(exercise=exercise, target_reps=1))
        assert summary.timestamp.endswith("+00:00")


class TestJsonHistoryStore:
    """Test suite for the JSON file store."""

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonHistoryStore(str(tmp_path / "history.json")).all() == []

    def test_append_persists(self, tmp_path):
        path = tmp_path / "history.json"
        store = JsonHistoryStore(str(path))
        store.append(make_summary(reps=3))
        store.append(make_summary(reps=5, target=5))

        reloaded = JsonHistoryStore(str(path)).all()
        assert [s.reps for s in reloaded] == [3, 5]
        assert reloaded[0] == make_summary(reps=3)

        with open(path, encoding="utf-8") as handle:
            raw = json.load(handle)
        assert raw[1]["exercise_name"] == "Squats"
        assert raw[1]["target_reps"] == 5
        assert not (tmp_path / "history.json.tmp").exists()

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "history.json"
        JsonHistoryStore(str(path)).append(make_summary())
        assert path.exists()

    def test_rejects_non_list_file(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text('{"reps": 3}', encoding="utf-8")
        with pytest.raises(ValueError):
            JsonHistoryStore(str(path)).append(make_summary())


def test_in_memory_store_returns_copy():
    store = InMemoryHistoryStore()
    store.append(make_summary())
    store.all().clear()
    assert len(store.all()) == 1


def test_history_store_is_abstract():
    with pytest.raises(TypeError):
        HistoryStore()

    class AppendOnly(HistoryStore):
        def append(self, summary):
            return None

    with pytest.raises(TypeError):
        AppendOnly()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
