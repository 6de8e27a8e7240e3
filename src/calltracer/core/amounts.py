"""Amount parsing and human-readable formatting helpers."""

from __future__ import annotations

import math

_MAX_UINT256 = 2**256 - 1


def parse_amount(value: object) -> int | None:
    """Parse a call value or event argument into a non-negative integer.

    Accepts ints, ``0x``-prefixed hex strings and decimal strings. Returns
    ``None`` for anything else, including negatives and values that do not
    fit in 256 bits.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        amount = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            if text[:2].lower() == "0x":
                amount = int(text[2:], 16) if len(text) > 2 else 0
            else:
                if not text.isdigit():
                    return None
                amount = int(text, 10)
        except ValueError:
            return None
    else:
        return None
    if amount < 0 or amount > _MAX_UINT256:
        return None
    return amount


def is_zero_value(value: object) -> bool:
    return value is None or parse_amount(value) == 0


def format_units(amount: int, decimals: int) -> str:
    """Scale a raw integer amount by ``10**decimals`` without losing precision."""
    sign = "-" if amount < 0 else ""
    magnitude = abs(amount)
    if decimals <= 0:
        return f"{sign}{magnitude}"
    whole, fraction = divmod(magnitude, 10**decimals)
    fraction_text = str(fraction).rjust(decimals, "0").rstrip("0")
    if not fraction_text:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{fraction_text}"


_COMPACT_SCALES = ((1e9, "B"), (1e6, "M"), (1e3, "K"), (1.0, ""))


def format_compact(value: str) -> str:
    """Shorten a decimal string to three significant digits with a K/M/B suffix."""
    try:
        number = float(value)
    except ValueError:
        return value
    if not math.isfinite(number):
        return value

    magnitude = abs(number)
    if number != 0 and magnitude < 1:
        return repr(float(f"{number:.3g}"))
    index = next(
        (i for i, (threshold, _) in enumerate(_COMPACT_SCALES) if magnitude >= threshold),
        len(_COMPACT_SCALES) - 1,
    )
    threshold, suffix = _COMPACT_SCALES[index]
    text = _three_significant(number / threshold)
    # rounding can carry into the next scale, e.g. 999950 -> "1000K"
    if index > 0 and abs(float(text)) >= 1000:
        threshold, suffix = _COMPACT_SCALES[index - 1]
        text = _three_significant(number / threshold)
    return text + suffix


def _three_significant(number: float) -> str:
    integer_digits = len(str(int(abs(number))))
    text = f"{number:.{max(0, 3 - integer_digits)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def trim_address(address: str) -> str:
    if not address:
        return ""
    return f"{address[:6]}...{address[-4:]}"
