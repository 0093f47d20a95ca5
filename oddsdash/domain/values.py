"""Lenient scalar coercion: bad input becomes None instead of raising."""
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Optional

_TRUTHY = {"y", "yes", "true", "t", "1"}


def to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            num = float(value)
        except OverflowError:
            return None
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            num = float(text)
        except (ValueError, OverflowError):
            return None
    return num if math.isfinite(num) else None


def to_integer(value: Any) -> Optional[int]:
    num = to_number(value)
    if num is None or not num.is_integer():
        return None
    return int(num)


def to_boolean(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value != 0
    return str(value).strip().lower() in _TRUTHY


def clean_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    text = str(value).strip()
    return text or None
