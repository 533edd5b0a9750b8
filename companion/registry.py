"""In-process registries for chat sessions and bookings.

Entries are looked up by an opaque URL-safe id.  Each lookup refreshes the
entry; entries idle for longer than ``idle_ttl`` seconds are dropped, and
the least recently used ones go first once ``max_entries`` is reached.
"""

from __future__ import annotations

import logging
import secrets
import time
from collections import OrderedDict
from typing import Callable, Generic, Optional, TypeVar

log = logging.getLogger("companion.registry")

T = TypeVar("T")


class Registry(Generic[T]):
    def __init__(
        self,
        name: str,
        max_entries: int,
        idle_ttl: float,
        on_evict: Optional[Callable[[T], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._name = name
        self._max_entries = max_entries
        self._idle_ttl = idle_ttl
        self._on_evict = on_evict
        self._clock = clock
        # id -> (last_seen, value), least recently used first
        self._entries: OrderedDict[str, tuple[float, T]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: str) -> bool:
        return entry_id in self._entries

    def add(self, value: T) -> str:
        self.evict()
        while len(self._entries) >= self._max_entries:
            oldest = next(iter(self._entries))
            self._drop(oldest, "capacity")

        entry_id = secrets.token_urlsafe(18)
        self._entries[entry_id] = (self._clock(), value)
        return entry_id

    def get(self, entry_id: str) -> Optional[T]:
        self.evict()
        found = self._entries.get(entry_id)
        if found is None:
            return None
        self._entries[entry_id] = (self._clock(), found[1])
        self._entries.move_to_end(entry_id)
        return found[1]

    def remove(self, entry_id: str) -> Optional[T]:
        found = self._entries.pop(entry_id, None)
        return found[1] if found else None

    def snapshot(self) -> dict[str, T]:
        self.evict()
        return {entry_id: value for entry_id, (_, value) in self._entries.items()}

    def evict(self) -> int:
        """Drop idle entries; returns how many were removed."""
        cutoff = self._clock() - self._idle_ttl
        expired = [eid for eid, (seen, _) in self._entries.items() if seen < cutoff]
        for entry_id in expired:
            self._drop(entry_id, "idle")
        return len(expired)

    def _drop(self, entry_id: str, reason: str) -> None:
        _, value = self._entries.pop(entry_id)
        log.info("Evicted %s %s (%s)", self._name, entry_id, reason)
        if self._on_evict:
            self._on_evict(value)
