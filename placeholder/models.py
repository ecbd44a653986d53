"""Value types shared by the analytics collections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from placeholder.validation import InvalidDimension, coerce_positive_int

K = TypeVar("K")


@dataclass(frozen=True, slots=True)
class SizePair:
    """Requested image dimensions."""

    width: int
    height: int

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if not isinstance(value, int) or coerce_positive_int(value) is None:
                raise InvalidDimension(value, f"SizePair.{name} must be a positive integer, got {value!r}")

    def to_json(self) -> dict[str, int]:
        return {"w": self.width, "h": self.height}


@dataclass(slots=True)
class FrequencyEntry(Generic[K]):
    """A key and the number of times it has been recorded."""

    key: K
    count: int = 1
