"""
Per-key advisory locks for scratch files.

Jobs that share a raw or processed key serialize; jobs on disjoint keys run
concurrently. Entries are dropped once no task holds or waits on them.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.users = 0


class KeyLocks:
    """In-memory map of key -> asyncio.Lock, reference counted."""

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}

    @asynccontextmanager
    async def hold(self, *keys: str) -> AsyncIterator[None]:
        """Hold the locks for all distinct keys; sorted acquisition avoids deadlock."""
        ordered = sorted(set(keys))
        entries = []
        for key in ordered:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.users += 1
            entries.append((key, entry))
        acquired: list[_Entry] = []
        try:
            for _, entry in entries:
                await entry.lock.acquire()
                acquired.append(entry)
            yield
        finally:
            for entry in reversed(acquired):
                entry.lock.release()
            for key, entry in entries:
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[key]

    def held_keys(self) -> set[str]:
        """Keys currently locked by some task."""
        return {key for key, entry in self._entries.items() if entry.lock.locked()}

    def __len__(self) -> int:
        return len(self._entries)
