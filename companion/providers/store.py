"""Mood history stores: in-memory and a JSONL file."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from companion.models.mood import MoodEntry
from companion.providers.base import MoodStore

log = logging.getLogger("companion.providers.store")


class InMemoryMoodStore(MoodStore):
    """Process-local history. Used in development and tests."""

    def __init__(self) -> None:
        self._entries: list[MoodEntry] = []

    async def append(self, entry: MoodEntry) -> None:
        self._entries.append(entry)

    async def history(self, uid: str, limit: int = 10) -> list[MoodEntry]:
        mine = [e for e in self._entries if e.uid == uid]
        mine.sort(key=lambda e: e.timestamp, reverse=True)
        return mine[:limit]


class JsonlMoodStore(MoodStore):
    """Append-only JSONL file, one entry per line in store (camelCase) keys.

    File access runs in a worker thread so the event loop never blocks on disk.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    async def append(self, entry: MoodEntry) -> None:
        line = json.dumps(entry.model_dump(mode="json", by_alias=True))
        async with self._lock:
            await asyncio.to_thread(self._write_line, line)

    async def history(self, uid: str, limit: int = 10) -> list[MoodEntry]:
        async with self._lock:
            lines = await asyncio.to_thread(self._read_lines)

        entries = [e for e in (self._parse(line) for line in lines) if e and e.uid == uid]
        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries[:limit]

    def _write_line(self, line: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")

    def _read_lines(self) -> list[str]:
        if not self._path.exists():
            return []
        return self._path.read_text(encoding="utf-8").splitlines()

    def _parse(self, line: str) -> Optional[MoodEntry]:
        line = line.strip()
        if not line:
            return None
        try:
            data = json.loads(line)
        except json.JSONDecodeError:
            log.warning("Skipping corrupt line in %s", self._path)
            return None
        if not isinstance(data, dict):
            log.warning("Skipping non-object line in %s", self._path)
            return None
        try:
            return MoodEntry.model_validate(data)
        except ValidationError as e:
            log.warning("Skipping invalid entry in %s: %s", self._path, e.error_count())
            return None
