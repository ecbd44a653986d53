"""Timestamp log answering "how many hits in the last N ms" queries."""

from __future__ import annotations

from collections.abc import Sequence
from threading import Lock
from time import time

DEFAULT_WINDOWS_MS: tuple[int, ...] = (5000, 10000, 15000)


def now_ms() -> int:
    return int(time() * 1000)


class HitWindow:
    """
    Append-only hit log.

    Every stored hit is tested against every window, so a hit inside the 5s
    window is also counted in the 10s and 15s windows. Old hits are kept until
    ``clear`` unless ``retention_ms`` is set, in which case hits older than
    the retention period are dropped whenever a new hit is recorded.
    """

    def __init__(self, *, retention_ms: int | None = None) -> None:
        if retention_ms is not None and retention_ms < 1:
            raise ValueError("retention_ms must be >= 1")
        self._hits: list[int] = []
        self._retention_ms = retention_ms
        self._lock = Lock()

    def record(self, at_ms: int) -> None:
        with self._lock:
            self._hits.append(at_ms)
            if self._retention_ms is not None:
                cutoff = at_ms - self._retention_ms
                self._hits = [hit for hit in self._hits if hit > cutoff]

    def window_counts(
        self,
        at_ms: int,
        windows: Sequence[int] = DEFAULT_WINDOWS_MS,
    ) -> list[int]:
        counts = [0] * len(windows)
        with self._lock:
            for hit in self._hits:
                for idx, window in enumerate(windows):
                    if hit > at_ms - window:
                        counts[idx] += 1
        return counts

    def clear(self) -> None:
        with self._lock:
            self._hits.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)
