"""Tests for history module."""

import json
import threading
from pathlib import Path

from MDPreview.history import MAX_RECENT, HistoryStore, default_history_path, push_recent


class TestPushRecent:
    def test_adds_to_front(self):
        assert push_recent(["a/b"], "c/d") == ["c/d", "a/b"]

    def test_moves_existing_to_front(self):
        assert push_recent(["a/b", "c/d", "e/f"], "e/f") == ["e/f", "a/b", "c/d"]

    def test_caps_length(self):
        recent = [f"o/r{i}" for i in range(MAX_RECENT)]
        result = push_recent(recent, "o/new")
        assert len(result) == MAX_RECENT
        assert result[0] == "o/new"
        assert f"o/r{MAX_RECENT - 1}" not in result


class TestHistoryStore:
    def test_empty_when_file_missing(self, tmp_path: Path):
        store = HistoryStore(tmp_path / "history.json")
        assert store.recent == []
        assert store.last_repo is None

    def test_add_persists_and_sets_last_repo(self, tmp_path: Path):
        path = tmp_path / "nested" / "history.json"
        store = HistoryStore(path)
        store.add("a/b")
        store.add("c/d")

        reloaded = HistoryStore(path)
        assert reloaded.recent == ["c/d", "a/b"]
        assert reloaded.last_repo == "c/d"

    def test_clear_keeps_last_repo(self, tmp_path: Path):
        path = tmp_path / "history.json"
        store = HistoryStore(path)
        store.add("a/b")
        store.clear()

        reloaded = HistoryStore(path)
        assert reloaded.recent == []
        assert reloaded.last_repo == "a/b"

    def test_recent_is_a_copy(self, tmp_path: Path):
        store = HistoryStore(tmp_path / "history.json")
        store.add("a/b")
        store.recent.append("x/y")
        assert store.recent == ["a/b"]

    def test_corrupt_file_ignored(self, tmp_path: Path):
        path = tmp_path / "history.json"
        path.write_text("{not json", encoding="utf-8")
        store = HistoryStore(path)
        assert store.recent == []

    def test_unknown_version_ignored(self, tmp_path: Path):
        path = tmp_path / "history.json"
        path.write_text(json.dumps({"version": 99, "recent": ["a/b"]}), encoding="utf-8")
        assert HistoryStore(path).recent == []

    def test_non_string_entries_dropped(self, tmp_path: Path):
        path = tmp_path / "history.json"
        path.write_text(
            json.dumps({"version": 1, "recent": ["a/b", 3, None], "last_repo": 5}),
            encoding="utf-8",
        )
        store = HistoryStore(path)
        assert store.recent == ["a/b"]
        assert store.last_repo is None

    def test_write_failure_is_not_raised(self, tmp_path: Path):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        store = HistoryStore(blocker / "history.json")
        store.add("a/b")
        assert store.recent == ["a/b"]


class TestDefaultHistoryPath:
    def test_env_override(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("MDPREVIEW_HOME", str(tmp_path))
        assert default_history_path() == tmp_path / "history.json"

    def test_home_default(self, monkeypatch):
        monkeypatch.delenv("MDPREVIEW_HOME", raising=False)
        assert default_history_path() == Path.home() / ".mdpreview" / "history.json"


class TestConcurrentUpdates:
    def test_adds_from_many_threads_are_all_kept(self, tmp_path: Path):
        path = tmp_path / "history.json"
        store = HistoryStore(path)
        names = [f"o/r{i}" for i in range(8)]

        threads = [threading.Thread(target=store.add, args=(name,)) for name in names]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(store.recent) == sorted(names)
        assert sorted(HistoryStore(path).recent) == sorted(names)
