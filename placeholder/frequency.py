"""Per-key occurrence counters kept sorted by count."""

from __future__ import annotations

from threading import Lock
from typing import Any, Generic, TypeVar

from placeholder.models import FrequencyEntry, SizePair
from placeholder.recency import DEFAULT_TOP_LIMIT

K = TypeVar("K")


class FrequencyTable(Generic[K]):
    """
    Occurrence counts ordered by count, highest first.

    New keys are inserted at the front and the table is then stable-sorted by
    count, so among equal counts a freshly seen key ranks above older ones
    while an incremented key keeps its place relative to its new peers.
    """

    def __init__(self) -> None:
        self._entries: list[FrequencyEntry[K]] = []
        self._lock = Lock()

    def record(self, key: K) -> None:
        with self._lock:
            for entry in self._entries:
                if entry.key == key:
                    entry.count += 1
                    break
            else:
                self._entries.insert(0, FrequencyEntry(key=key))

            if not self._entries or self._entries[0].count == 0:
                return
            self._entries.sort(key=lambda entry: entry.count, reverse=True)

    def count(self, key: K) -> int:
        with self._lock:
            for entry in self._entries:
                if entry.key == key:
                    return entry.count
        return 0

    def top_recent(self, n: int = DEFAULT_TOP_LIMIT) -> list[FrequencyEntry[K]]:
        with self._lock:
            return [
                FrequencyEntry(key=entry.key, count=entry.count)
                for entry in self._entries[: max(n, 0)]
            ]

    def top_recent_json(self, n: int = DEFAULT_TOP_LIMIT) -> list[dict[str, Any]]:
        return [self._entry_to_json(entry) for entry in self.top_recent(n)]

    def _entry_to_json(self, entry: FrequencyEntry[K]) -> dict[str, Any]:
        return {"key": entry.key, "n": entry.count}

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class SizeFrequencyTable(FrequencyTable[SizePair]):
    """Most requested image sizes."""

    def _entry_to_json(self, entry: FrequencyEntry[SizePair]) -> dict[str, Any]:
        return {**entry.key.to_json(), "n": entry.count}


class ReferrerFrequencyTable(FrequencyTable[str]):
    """Most frequent ``Referer`` header values."""

    def _entry_to_json(self, entry: FrequencyEntry[str]) -> dict[str, Any]:
        return {"ref": entry.key, "n": entry.count}
