#!/usr/bin/env python3
"""
CLEVIS VALUE STRINGIFICATION
----------------------------
Canonical text for scalar leaves of either structured format. A TOML `8080`
and a YAML `8080` must come out as the same string, or no link between a
TOML manifest and a YAML manifest could ever match.
"""

import datetime
import math
from decimal import Decimal
from typing import Any


def format_float(value: float) -> str:
    """
    Minimal plain-decimal form: `1.5`, `3`, `100000000000000000000`,
    `0.00000015`. Never an exponent, never a trailing `.0`.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    # repr() is the shortest round-tripping form; Decimal expands its exponent.
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def format_temporal(value: Any) -> str:
    """
    ISO-8601, with a zero UTC offset written as `Z`. Fractional seconds keep
    only their significant digits: `07:32:00.5`, not `07:32:00.500000`.
    """
    text = value.isoformat()
    micros = getattr(value, "microsecond", 0)
    if micros:
        # the fraction sits right after the seconds, before any offset
        cut = len(value.replace(microsecond=0, tzinfo=None).isoformat())
        fraction = f"{micros:06d}".rstrip("0")
        text = f"{text[:cut]}.{fraction}{text[cut + 7:]}"
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def stringify_scalar(value: Any) -> str:
    """
    Converts a resolved leaf to its canonical string.

    Raises:
        TypeError: `value` is not a scalar. Navigators check first.
    """
    if value is None:
        return "null"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return format_temporal(value)
    raise TypeError(f"Cannot stringify non-scalar value of type {type(value).__name__}")
