"""Normalization helpers.

Centralizes defensive parsing and placeholder handling.  Every helper
returns ``None`` for values it cannot interpret so callers can leave the
corresponding attribute untouched.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

# Strings some decoders emit for "not available".
_SENTINELS = frozenset({"", "--", "nan", "none", "null"})


def is_sentinel(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and value.strip().lower() in _SENTINELS:
        return True
    return isinstance(value, float) and math.isnan(value)


def safe_float(value: Any) -> float | None:
    # JSON booleans are not measurements.
    if isinstance(value, bool) or is_sentinel(value):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(round(parsed))


def safe_str(value: Any) -> str | None:
    if is_sentinel(value):
        return None
    if isinstance(value, bool):
        return "1" if value else "0"
    if not isinstance(value, (str, int, float)):
        return None
    text = str(value).strip()
    return text if text else None


def safe_position(value: Any) -> int | None:
    """Map a switch reading to 1 (on/open) or 0 (off/closed); ``None`` when unreadable."""
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, str):
        text = value.strip().upper()
        if text in {"OPEN", "ON", "1"}:
            return 1
        if text in {"CLOSED", "CLOSE", "OFF", "0"}:
            return 0
        return None
    return safe_int(value)


def parse_sensor_id(value: Any, *, hex_text: bool = False) -> int | None:
    """Parse a numeric sensor id.

    rtl_433 reports most ids as integers; TPMS decoders report them as hex
    strings (``"0x1f2e3d"`` or ``"1f2e3d"``), which *hex_text* enables.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if not isinstance(value, str):
        return None
    text = value.strip().lower()
    if not text:
        return None
    try:
        if text.startswith("0x") or hex_text:
            return int(text, 16)
        return int(text, 10)
    except ValueError:
        return None


def clean_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Lowercase keys and drop sentinel values.

    The first spelling of a key wins when a record carries the same key in
    different cases.
    """
    cleaned: dict[str, Any] = {}
    for key, value in record.items():
        if not isinstance(key, str):
            continue
        if is_sentinel(value):
            continue
        lowered = key.strip().lower()
        if lowered not in cleaned:
            cleaned[lowered] = value
    return cleaned
