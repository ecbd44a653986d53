import pytest

from placeholder.models import SizePair
from placeholder.validation import (
    DimensionTooLarge,
    InvalidDimension,
    InvalidSquareValue,
    coerce_positive_int,
    parse_dimensions,
    parse_square,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("10", 10),
        (" 7 ", 7),
        ("10.0", 10),
        ("1e2", 100),
        (3, 3),
        ("0", None),
        ("-1", None),
        ("", None),
        ("10.5", None),
        ("abc", None),
        ("inf", None),
        ("nan", None),
        ("5.", 5),
        ("+8", 8),
        ("0x10", 16),
        ("0X1f", 31),
        ("0b11", 3),
        ("0o17", 15),
        ("0x0", None),
        ("-0x10", None),
        ("0o9", None),
        ("1_000", None),
        ("\u0665", None),
        ("\uff11\uff10", None),
        ("Infinity", None),
        ("1e400", None),
        (True, None),
        (None, None),
    ],
)
def test_coerce_positive_int(raw: object, expected: int | None) -> None:
    assert coerce_positive_int(raw) == expected


def test_parse_dimensions_accepts_valid_values() -> None:
    assert parse_dimensions("50", "2000") == (50, 2000)


def test_parse_dimensions_invalid_before_too_large() -> None:
    with pytest.raises(InvalidDimension) as exc_info:
        parse_dimensions("2500", "0")
    assert exc_info.value.status_code == 404


def test_parse_dimensions_rejects_oversized() -> None:
    with pytest.raises(DimensionTooLarge) as exc_info:
        parse_dimensions("50", "2500")
    assert exc_info.value.status_code == 403


def test_parse_dimensions_respects_custom_maximum() -> None:
    with pytest.raises(DimensionTooLarge):
        parse_dimensions("101", "50", max_dimension=100)


def test_parse_square() -> None:
    assert parse_square(None) is None
    assert parse_square("10") == 10
    for raw in ["-1", "0", "", "2.5", "big"]:
        with pytest.raises(InvalidSquareValue) as exc_info:
            parse_square(raw)
        assert exc_info.value.status_code == 400


def test_size_pair_rejects_non_positive_values() -> None:
    assert SizePair(1, 2) == SizePair(width=1, height=2)
    for width, height in [(0, 10), (10, -1), (1.5, 10), ("10", 10)]:
        with pytest.raises(InvalidDimension):
            SizePair(width, height)  # type: ignore[arg-type]
