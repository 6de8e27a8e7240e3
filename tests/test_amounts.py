from __future__ import annotations

import pytest

from calltracer.core import format_compact, format_units, parse_amount, trim_address


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (5, 5),
        ("0x10", 16),
        ("0X0", 0),
        ("0x", 0),
        ("42", 42),
        (" 7 ", 7),
        ("-1", None),
        (-1, None),
        (True, None),
        ("1.5", None),
        ("0xzz", None),
        (None, None),
        (2**256, None),
    ],
)
def test_parse_amount(value: object, expected: int | None) -> None:
    assert parse_amount(value) == expected


def test_format_units_is_exact() -> None:
    assert format_units(10**30 + 1, 18) == "1000000000000.000000000000000001"
    assert format_units(-1_500_000, 6) == "-1.5"
    assert format_units(42, 0) == "42"
    assert format_units(0, 18) == "0"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1234.5", "1.23K"),
        ("1500000", "1.5M"),
        ("2000000000", "2B"),
        ("12", "12"),
        ("0.00012345", "0.000123"),
        ("0", "0"),
        ("999950", "1M"),
        ("999.95", "1K"),
        ("999999999999", "1000B"),
        ("n/a", "n/a"),
    ],
)
def test_format_compact(value: str, expected: str) -> None:
    assert format_compact(value) == expected


def test_trim_address() -> None:
    assert trim_address("0x" + "ab" * 20) == "0xabab...abab"
    assert trim_address("") == ""
