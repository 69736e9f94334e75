"""Recently viewed repositories, persisted as a small JSON file."""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "MDPREVIEW_HOME"
MAX_RECENT = 10
_HISTORY_VERSION = 1


def default_history_path() -> Path:
    home = os.environ.get(HOME_ENV_VAR)
    base = Path(home) if home else Path.home() / ".mdpreview"
    return base / "history.json"


def push_recent(recent: list[str], full_name: str, limit: int = MAX_RECENT) -> list[str]:
    """Return *recent* with *full_name* moved to the front, capped at *limit*."""
    return [full_name, *(r for r in recent if r != full_name)][:limit]


class HistoryStore:
    """Recent repositories (most recent first) and the last opened one.

    A missing or unreadable file means an empty history; write failures
    are logged and otherwise ignored. One store is shared by every app
    session, so updates are serialized.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path if path is not None else default_history_path()
        self._recent: list[str] = []
        self._last_repo: str | None = None
        self._lock = threading.Lock()
        self._load()

    @property
    def recent(self) -> list[str]:
        return list(self._recent)

    @property
    def last_repo(self) -> str | None:
        return self._last_repo

    def add(self, full_name: str) -> None:
        with self._lock:
            self._recent = push_recent(self._recent, full_name)
            self._last_repo = full_name
            self._persist()

    def clear(self) -> None:
        with self._lock:
            self._recent = []
            self._persist()

    def _load(self) -> None:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable history file %s", self._path)
            return
        if not isinstance(data, dict) or data.get("version") != _HISTORY_VERSION:
            return

        recent = data.get("recent")
        if isinstance(recent, list):
            self._recent = [r for r in recent if isinstance(r, str)][:MAX_RECENT]
        last = data.get("last_repo")
        if isinstance(last, str) and last:
            self._last_repo = last

    def _persist(self) -> None:
        payload = {
            "version": _HISTORY_VERSION,
            "recent": self._recent,
            "last_repo": self._last_repo,
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError:
            logger.warning("Failed to write history file %s", self._path)
