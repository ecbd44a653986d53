"""Most-recent-first lists without duplicates."""

from __future__ import annotations

from threading import Lock
from typing import Generic, TypeVar

from placeholder.models import SizePair

T = TypeVar("T")

DEFAULT_TOP_LIMIT = 10


class RecencyList(Generic[T]):
    """Ordered values, most recently recorded first, each value at most once."""

    def __init__(self) -> None:
        self._items: list[T] = []
        self._lock = Lock()

    def record(self, value: T) -> None:
        with self._lock:
            try:
                self._items.remove(value)
            except ValueError:
                pass
            self._items.insert(0, value)

    def top_recent(self, n: int = DEFAULT_TOP_LIMIT) -> list[T]:
        with self._lock:
            return self._items[: max(n, 0)]

    def snapshot(self) -> list[T]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class SizeRecencyList(RecencyList[SizePair]):
    """Recently requested image sizes."""

    def top_recent_json(self, n: int = DEFAULT_TOP_LIMIT) -> list[dict[str, int]]:
        return [size.to_json() for size in self.top_recent(n)]
