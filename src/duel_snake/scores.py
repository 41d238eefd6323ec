"""Leaderboard score sinks."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int
    recorded_at: float


class ScoreSink(Protocol):
    """Receives final scores once per occupant at match end."""

    def record(self, name: str, score: int) -> None: ...


def _ranked(entries: list[ScoreEntry], limit: int) -> list[ScoreEntry]:
    ordered = sorted(entries, key=lambda e: (-e.score, e.recorded_at))
    return ordered[:limit]


class InMemoryScoreStore:
    """Process-local leaderboard."""

    def __init__(self) -> None:
        self.entries: list[ScoreEntry] = []

    def record(self, name: str, score: int) -> None:
        self.entries.append(ScoreEntry(name, score, time.time()))

    def top(self, limit: int = 10) -> list[ScoreEntry]:
        return _ranked(self.entries, limit)


class JsonScoreStore:
    """Leaderboard persisted to a JSON file.

    The file holds every recorded entry; writes go to a temporary file in
    the same directory that then replaces the original.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> list[ScoreEntry]:
        if not self.path.exists():
            return []
        raw = json.loads(self.path.read_text())
        return [ScoreEntry(**item) for item in raw.get("entries", [])]

    def _write(self, entries: list[ScoreEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps({"entries": [asdict(e) for e in entries]}, indent=2)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as fh:
                fh.write(payload)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def record(self, name: str, score: int) -> None:
        entries = self._load()
        entries.append(ScoreEntry(name, score, time.time()))
        self._write(entries)
        logger.info("Recorded score %d for %r.", score, name)

    def top(self, limit: int = 10) -> list[ScoreEntry]:
        return _ranked(self._load(), limit)
