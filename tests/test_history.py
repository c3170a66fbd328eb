"""Tests for bounded command history."""

import json
import logging

import pytest

from linewise.constants import HISTORY_STORAGE_KEY
from linewise.errors import StorageError
from linewise.history import HistoryStore
from linewise.storage import JsonFileStore, MemoryStore


class FailingStore:
    """Store whose every operation fails."""

    def get(self, key):
        raise StorageError("disk unavailable")

    def set(self, key, value):
        raise StorageError("disk unavailable")


class TestRecord:
    """Test adding entries."""

    def test_record_appends_oldest_first(self, history):
        history.record("help")
        history.record("list")

        assert history.all() == ["help", "list"]

    def test_duplicate_moves_to_end(self, history):
        for line in ["a", "b", "c", "a"]:
            history.record(line)

        assert history.all() == ["b", "c", "a"]
        assert len(history) == 3

    def test_blank_lines_ignored(self, history):
        history.record("")
        history.record("   ")

        assert history.all() == []

    def test_oldest_evicted_past_limit(self):
        history = HistoryStore(max_size=100)
        for i in range(101):
            history.record(f"cmd {i}")

        entries = history.all()
        assert len(entries) == 100
        assert entries[0] == "cmd 1"
        assert entries[-1] == "cmd 100"

    def test_lines_kept_verbatim(self, history):
        history.record("  Echo  Spaced ")

        assert history.all() == ["  Echo  Spaced "]

    def test_all_returns_copy(self, history):
        history.record("help")
        history.all().append("tampered")

        assert history.all() == ["help"]

    def test_invalid_max_size(self):
        with pytest.raises(ValueError):
            HistoryStore(max_size=0)


class TestSearch:
    def test_prefix_matches_in_order(self, history):
        for line in ["history", "help", "hist", "list"]:
            history.record(line)

        assert history.search("hi") == ["history", "hist"]

    def test_search_is_case_sensitive(self, history):
        history.record("Help")

        assert history.search("he") == []

    def test_empty_prefix_returns_nothing(self, history):
        history.record("help")

        assert history.search("") == []


class TestClear:
    def test_clear_empties_and_persists(self, memory_store, history):
        history.record("help")
        history.clear()

        assert history.all() == []
        assert json.loads(memory_store.get(HISTORY_STORAGE_KEY)) == []


class TestPersistence:
    """Test loading and saving through key/value stores."""

    def test_saved_as_json_list_under_key(self, memory_store, history):
        history.record("help")
        history.record("list")

        assert json.loads(memory_store.get(HISTORY_STORAGE_KEY)) == ["help", "list"]

    def test_loaded_on_construction(self):
        store = MemoryStore({HISTORY_STORAGE_KEY: json.dumps(["a", "b"])})

        assert HistoryStore(store).all() == ["a", "b"]

    def test_load_trims_to_max_size(self):
        store = MemoryStore({HISTORY_STORAGE_KEY: json.dumps(["a", "b", "c"])})

        assert HistoryStore(store, max_size=2).all() == ["b", "c"]

    def test_file_round_trip(self, temp_dir):
        path = temp_dir / "history.json"
        HistoryStore(JsonFileStore(str(path))).record("echo persisted")

        assert HistoryStore(JsonFileStore(str(path))).all() == ["echo persisted"]

    def test_corrupt_payload_starts_empty(self, caplog):
        store = MemoryStore({HISTORY_STORAGE_KEY: "{not json"})

        with caplog.at_level(logging.WARNING, logger="linewise"):
            history = HistoryStore(store)

        assert history.all() == []
        assert any("history_storage_error" in r.getMessage() for r in caplog.records)

    def test_wrong_payload_shape_starts_empty(self):
        store = MemoryStore({HISTORY_STORAGE_KEY: json.dumps({"a": 1})})

        assert HistoryStore(store).all() == []

    def test_storage_failures_are_swallowed(self, caplog):
        with caplog.at_level(logging.WARNING, logger="linewise"):
            history = HistoryStore(FailingStore())
            history.record("help")
            history.clear()

        assert history.all() == []
        failures = [r for r in caplog.records if "history_storage_error" in r.getMessage()]
        assert len(failures) == 3

    def test_in_memory_state_survives_save_failure(self):
        history = HistoryStore(FailingStore())
        history.record("help")

        assert history.all() == ["help"]

    def test_custom_key(self, memory_store):
        HistoryStore(memory_store, key="other").record("x")

        assert memory_store.get("other") is not None
        assert memory_store.get(HISTORY_STORAGE_KEY) is None
