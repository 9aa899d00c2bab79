"""Bridge between plain Python data and qsval Values."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from .config import CodecOptions
from .decoder import decode
from .encoder import encode
from .errors import EncodeError
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

_VALUE_TYPES = (VNull, VBool, VNumber, VText, VDate, VList, VDict)


def from_python(obj) -> Value | _Absent:
    """Convert plain Python data to a Value.

    - ``None`` → VNull, ``bool`` → VBool, ``int``/``float`` → VNumber
    - ``str`` → VText
    - ``datetime`` → VDate (naive means UTC); a bare ``date`` becomes midnight UTC
    - ``list``/``tuple`` → VList, ``dict`` → VDict (keys via ``str()``)
    - ``Absent`` and existing Values pass through unchanged
    """
    if obj is None:
        return VNull()
    if isinstance(obj, (_Absent, *_VALUE_TYPES)):
        return obj
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return VBool(obj)
    if isinstance(obj, (int, float)):
        try:
            return VNumber(float(obj))
        except OverflowError as exc:
            raise EncodeError(
                f"Integer too large to encode ({obj.bit_length()} bits)"
            ) from exc
    if isinstance(obj, str):
        return VText(obj)
    if isinstance(obj, datetime):
        return VDate(obj)
    if isinstance(obj, date):
        return VDate(datetime.combine(obj, time(), tzinfo=timezone.utc))
    if isinstance(obj, (list, tuple)):
        return VList([from_python(v) for v in obj])
    if isinstance(obj, dict):
        return VDict({str(k): from_python(v) for k, v in obj.items()})
    raise EncodeError(f"Cannot encode type {type(obj).__name__}")


def to_python(value: Value):
    """Convert a Value back to plain Python data."""
    if isinstance(value, VNull):
        return None
    if isinstance(value, (VBool, VNumber, VText, VDate)):
        return value.value
    if isinstance(value, VList):
        return [to_python(v) for v in value.items]
    if isinstance(value, VDict):
        return {k: to_python(v) for k, v in value.entries.items()}
    raise TypeError(f"Not a qsval Value: {type(value).__name__}")


def serialize(obj, options: CodecOptions | None = None) -> str | None:
    """Encode plain Python data; ``None`` when *obj* is ``Absent``."""
    return encode(from_python(obj), options)


def deserialize(text: str, options: CodecOptions | None = None):
    """Decode wire text to plain Python data."""
    return to_python(decode(text, options))
