"""qsval — compact URL-safe encoding for nested JSON-like values."""

from .config import CodecOptions, DEFAULT_OPTIONS
from .convert import deserialize, from_python, serialize, to_python
from .decoder import decode
from .encoder import encode
from .errors import DepthError, EncodeError, ParseError, QsvalError, ScalarError
from .repl import QsvalRepl
from .values import (
    Absent,
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

__all__ = [
    "encode",
    "decode",
    "serialize",
    "deserialize",
    "from_python",
    "to_python",
    "CodecOptions",
    "DEFAULT_OPTIONS",
    "Absent",
    "Value",
    "VBool",
    "VDate",
    "VDict",
    "VList",
    "VNull",
    "VNumber",
    "VText",
    "_Absent",
    "QsvalError",
    "ParseError",
    "DepthError",
    "ScalarError",
    "EncodeError",
    "QsvalRepl",
]
