"""Tolerant scalar parsing for upstream price values."""

from __future__ import annotations

import math
from typing import Any

# Persian (U+06F0..) and Arabic-Indic (U+0660..) digits, plus Arabic separators.
_DIGIT_TABLE = str.maketrans(
    {
        **{chr(0x06F0 + i): str(i) for i in range(10)},
        **{chr(0x0660 + i): str(i) for i in range(10)},
        "٫": ".",
        "٬": ",",
    }
)


def to_number(value: Any) -> int | float | None:
    """Return a finite number for ``value`` or None when it cannot be read.

    Strings are trimmed, localized digits are translated and thousands
    separators are removed before parsing. Never raises.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    text = value.strip().translate(_DIGIT_TABLE).replace(",", "")
    if not text or "_" in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def to_text(value: Any) -> str:
    """Return ``value`` stripped when it is a string, else an empty string."""
    return value.strip() if isinstance(value, str) else ""
