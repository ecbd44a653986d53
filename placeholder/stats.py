"""In-memory usage analytics for served images."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
from threading import Lock
from typing import Any
from urllib.parse import quote

from placeholder.frequency import ReferrerFrequencyTable, SizeFrequencyTable
from placeholder.hits import DEFAULT_WINDOWS_MS, HitWindow
from placeholder.models import SizePair
from placeholder.recency import DEFAULT_TOP_LIMIT, RecencyList, SizeRecencyList

logger = logging.getLogger("placeholder.stats")

# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_.".
_URI_COMPONENT_SAFE = "!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_request_path(path: str, square: str | None, text: str | None) -> str:
    """Rebuild the canonical request path including ``square`` and ``text``."""

    if square is not None:
        path = f"{path}?square={square}"
        if text is not None:
            path = f"{path}&text={encode_uri_component(text)}"
    elif text is not None:
        path = f"{path}?text={encode_uri_component(text)}"
    return path


class StatsStore:
    """Owns every analytics collection for one application instance."""

    def __init__(
        self,
        *,
        hit_windows_ms: Sequence[int] = DEFAULT_WINDOWS_MS,
        hit_retention_ms: int | None = None,
    ) -> None:
        self.paths: RecencyList[str] = RecencyList()
        self.sizes = SizeRecencyList()
        self.texts: RecencyList[str] = RecencyList()
        self.popular_sizes = SizeFrequencyTable()
        self.referrers = ReferrerFrequencyTable()
        self.hits = HitWindow(retention_ms=hit_retention_ms)
        self._hit_windows_ms = tuple(hit_windows_ms)
        self._lock = Lock()

    def record_request(
        self,
        path: str,
        size: SizePair | tuple[int, int],
        square: str | None,
        text: str | None,
        referrer: str | None,
        now_ms: int,
    ) -> None:
        """
        Record one served image request in every collection.

        ``square``, ``text`` and ``referrer`` are ``None`` when the request did
        not carry them. The size is validated before anything is recorded.
        Afterwards each collection is updated independently: a failure in one
        is logged and does not stop the others, and the first failure is
        re-raised once all of them have been attempted.

        Raises:
            InvalidDimension: when ``size`` is not made of positive integers.
        """

        if not isinstance(size, SizePair):
            width, height = size
            size = SizePair(width=width, height=height)

        steps: list[tuple[str, Callable[[], None]]] = [
            ("paths", lambda: self.paths.record(build_request_path(path, square, text))),
            ("sizes", lambda: self.sizes.record(size)),
        ]
        if text is not None:
            steps.append(("texts", lambda: self.texts.record(text)))
        steps.append(("popular_sizes", lambda: self.popular_sizes.record(size)))
        if referrer is not None:
            steps.append(("referrers", lambda: self.referrers.record(referrer)))
        steps.append(("hits", lambda: self.hits.record(now_ms)))

        first_error: Exception | None = None
        with self._lock:
            for name, step in steps:
                try:
                    step()
                except Exception as exc:
                    logger.exception("stats_collection_record_failed collection=%s", name)
                    if first_error is None:
                        first_error = exc
        if first_error is not None:
            raise first_error

    def recent_paths(self, n: int = DEFAULT_TOP_LIMIT) -> list[str]:
        return self.paths.top_recent(n)

    def recent_sizes(self, n: int = DEFAULT_TOP_LIMIT) -> list[dict[str, int]]:
        return self.sizes.top_recent_json(n)

    def recent_texts(self, n: int = DEFAULT_TOP_LIMIT) -> list[str]:
        return self.texts.top_recent(n)

    def top_sizes(self, n: int = DEFAULT_TOP_LIMIT) -> list[dict[str, Any]]:
        return self.popular_sizes.top_recent_json(n)

    def top_referrers(self, n: int = DEFAULT_TOP_LIMIT) -> list[dict[str, Any]]:
        return self.referrers.top_recent_json(n)

    def hit_counts(self, now_ms: int) -> list[dict[str, Any]]:
        counts = self.hits.window_counts(now_ms, self._hit_windows_ms)
        return [
            {"title": _window_title(window), "count": count}
            for window, count in zip(self._hit_windows_ms, counts)
        ]

    def reset_all(self) -> None:
        with self._lock:
            self.paths.clear()
            self.sizes.clear()
            self.texts.clear()
            self.popular_sizes.clear()
            self.referrers.clear()
            self.hits.clear()
        logger.info("stats_reset")


def _window_title(window_ms: int) -> str:
    if window_ms % 1000 == 0:
        return f"{window_ms // 1000}s"
    return f"{window_ms}ms"
