"""Encoder: Value tree → wire text."""

from __future__ import annotations

import math
from datetime import datetime, timezone

from .config import CodecOptions, DEFAULT_OPTIONS
from .errors import EncodeError
from .escaping import CLOSE, SEPARATOR, escape_key, escape_value
from .values import (
    Value,
    VBool,
    VDate,
    VDict,
    VList,
    VNull,
    VNumber,
    VText,
    _Absent,
)

_NULL_TOKEN = ":null"


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def encode(value: Value | _Absent, options: CodecOptions | None = None) -> str | None:
    """Encode *value* to wire text.

    Returns ``None`` for a top-level ``Absent``. Top-level containers lose
    their trailing ``;`` run unless ``options.trim`` is off.
    """
    options = options or DEFAULT_OPTIONS
    res = encode_nested(value)
    if res is not None and options.trim:
        res = res.rstrip(CLOSE)
    return res


def encode_nested(value: Value | _Absent) -> str | None:
    """Encode *value* as a child token (no trimming)."""
    if isinstance(value, _Absent):
        return None
    if isinstance(value, VNull):
        return _NULL_TOKEN
    if isinstance(value, VBool):
        return ":" + ("true" if value.value else "false")
    if isinstance(value, VNumber):
        return ":" + escape_value(format_number(value.value))
    if isinstance(value, VText):
        return "=" + escape_value(value.value)
    if isinstance(value, VDate):
        return "~" + escape_value(format_date(value.value))
    if isinstance(value, VList):
        return _encode_list(value)
    if isinstance(value, VDict):
        return _encode_dict(value)
    raise EncodeError(f"Cannot encode type {type(value).__name__}")


def _encode_list(value: VList) -> str:
    parts = []
    for item in value.items:
        token = encode_nested(item)
        parts.append(_NULL_TOKEN if token is None else token)
    return "@" + SEPARATOR.join(parts) + CLOSE


def _encode_dict(value: VDict) -> str:
    parts = []
    for key, item in value.entries.items():
        token = encode_nested(item)
        if token is None:
            continue
        parts.append(escape_key(key) + token)
    return "$" + SEPARATOR.join(parts) + CLOSE


# ---------------------------------------------------------------------------
# Scalar text forms
# ---------------------------------------------------------------------------

def format_number(v: float) -> str:
    """Decimal text for *v*, matching JavaScript's number-to-string."""
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "Infinity" if v > 0 else "-Infinity"
    if v == int(v) and abs(v) < 1e21:
        return str(int(v))
    return repr(v)


def format_date(dt: datetime) -> str:
    """ISO-8601 UTC text with millisecond precision, e.g. ``2024-01-15T10:20:30.123Z``.

    Naive datetimes are taken to be UTC already.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        f".{dt.microsecond // 1000:03d}Z"
    )
