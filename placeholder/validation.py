"""Image request parameter validation and its error taxonomy."""

from __future__ import annotations

import math
import re

DEFAULT_MAX_DIMENSION = 2000

_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII)
_RADIX_PATTERN = re.compile(r"0([xXoObB])([0-9a-fA-F]+)", re.ASCII)
_RADIX_BASES = {"x": 16, "o": 8, "b": 2}


class DimensionValidationError(ValueError):
    """Base error for rejected image request parameters."""

    status_code = 400

    def __init__(self, raw_value: object, message: str) -> None:
        super().__init__(message)
        self.raw_value = raw_value


class InvalidDimension(DimensionValidationError):
    """Width or height is not a positive integer."""

    status_code = 404


class DimensionTooLarge(DimensionValidationError):
    """Width or height exceeds the configured maximum."""

    status_code = 403


class InvalidSquareValue(DimensionValidationError):
    """The ``square`` query parameter is not a positive integer."""

    status_code = 400


def coerce_positive_int(raw: object) -> int | None:
    """
    Convert ``raw`` to a positive integer, returning ``None`` when it is not one.

    Strings follow the browser ``Number()`` grammar: surrounding whitespace is
    ignored, an empty string counts as zero, ASCII decimal and exponent
    notation is accepted and so are unsigned ``0x``/``0o``/``0b`` literals.
    ``"10.0"`` and ``"0x10"`` are therefore 10 and 16, while ``"10.5"``,
    ``"1_000"`` and non-ASCII digits are rejected.
    """

    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 1 else None
    if isinstance(raw, float):
        number = raw
    elif isinstance(raw, str):
        stripped = raw.strip()
        if not stripped:
            return None
        if _DECIMAL_PATTERN.fullmatch(stripped):
            number = float(stripped)
        elif match := _RADIX_PATTERN.fullmatch(stripped):
            try:
                value = int(match.group(2), _RADIX_BASES[match.group(1).lower()])
            except ValueError:
                return None
            return value if value >= 1 else None
        else:
            return None
    else:
        return None

    if not math.isfinite(number) or not number.is_integer() or number < 1:
        return None
    return int(number)


def parse_dimensions(
    raw_width: object,
    raw_height: object,
    *,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
) -> tuple[int, int]:
    """
    Parse both dimensions of an image request.

    Both values are checked for being positive integers before either is
    checked against ``max_dimension``, so ``/img/0/2500`` is a 404 rather than
    a 403.
    """

    width = coerce_positive_int(raw_width)
    height = coerce_positive_int(raw_height)
    if width is None:
        raise InvalidDimension(raw_width, f"Width must be a positive integer, got {raw_width!r}")
    if height is None:
        raise InvalidDimension(raw_height, f"Height must be a positive integer, got {raw_height!r}")
    if width > max_dimension or height > max_dimension:
        raise DimensionTooLarge(
            (raw_width, raw_height),
            f"Dimensions must be at most {max_dimension}, got {width}x{height}",
        )
    return width, height


def parse_square(raw: str | None) -> int | None:
    """Parse the optional ``square`` size; ``None`` means it was not supplied."""

    if raw is None:
        return None
    value = coerce_positive_int(raw)
    if value is None:
        raise InvalidSquareValue(raw, f"square must be a positive integer, got {raw!r}")
    return value
