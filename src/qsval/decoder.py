"""Decoder: wire text → Value tree.

A left-to-right, non-backtracking recursive descent parser. The leading
tag character of each token selects the value kind::

    =  text        :  null / bool / number     ~  date
    @  list        $  dict
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from .config import CodecOptions, DEFAULT_OPTIONS
from .errors import DepthError, ParseError, ScalarError
from .escaping import (
    KEY_TERMINATORS,
    SEPARATOR,
    VALUE_TERMINATORS,
    TokenReader,
    transport_decode,
)
from .values import Value, VBool, VDate, VDict, VList, VNull, VNumber, VText

logger = logging.getLogger(__name__)

# Leading decimal literal, read the way JavaScript parseFloat reads it.
_NUMBER_RE = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def decode(text: str, options: CodecOptions | None = None) -> Value:
    """Decode wire *text* into a Value.

    Characters after the first complete value are ignored.
    """
    options = options or DEFAULT_OPTIONS
    reader = TokenReader(transport_decode(text))
    try:
        value = _Parser(reader, options).parse_value(0)
    except RecursionError as exc:
        raise DepthError(
            reader.pos, reader.peek(),
            f"Nesting too deep to decode at position {reader.pos}",
        ) from exc
    if not reader.at_end():
        logger.debug("ignoring %d trailing chars after position %d",
                     len(reader.text) - reader.pos, reader.pos)
    return value


# ---------------------------------------------------------------------------
# Scalar text forms
# ---------------------------------------------------------------------------

def parse_scalar(token: str, strict: bool = False) -> Value | None:
    """Interpret the text of a ``:`` token; ``None`` when it is not a scalar.

    A number may be followed by junk (``12abc`` reads as 12) unless
    *strict* is set, in which case the whole token must be the number.
    """
    if token == "true":
        return VBool(True)
    if token == "false":
        return VBool(False)
    if token in ("null", "NaN"):
        return VNull()
    m = _NUMBER_RE.fullmatch(token) if strict else _NUMBER_RE.match(token)
    if m is None:
        return None
    return VNumber(float(m.group(1)))


def parse_date(token: str) -> datetime | None:
    """Parse ISO-8601 text into an aware datetime; ``None`` if invalid."""
    text = token[:-1] + "+00:00" if token.endswith(("Z", "z")) else token
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class _Parser:
    __slots__ = ("reader", "options")

    def __init__(self, reader: TokenReader, options: CodecOptions) -> None:
        self.reader = reader
        self.options = options

    def parse_value(self, depth: int) -> Value:
        reader = self.reader
        start = reader.pos
        tag = reader.advance()

        if tag == "=":
            return VText(reader.read_token(VALUE_TERMINATORS))

        if tag == ":":
            token = reader.read_token(VALUE_TERMINATORS)
            value = parse_scalar(token, self.options.strict_scalars)
            if value is not None:
                return value
            if self.options.strict_scalars:
                raise ScalarError(start, tag, f"Invalid scalar {token!r} at position {start}")
            # Lossy fallback: unreadable scalars become null
            return VNull()

        if tag == "~":
            token = reader.read_token(VALUE_TERMINATORS)
            dt = parse_date(token)
            if dt is None:
                raise ParseError(start, tag, f"Invalid date {token!r} at position {start}")
            return VDate(dt)

        if tag == "@":
            self._check_depth(start, tag, depth)
            items: list[Value] = []
            if not reader.at_close():
                while True:
                    items.append(self.parse_value(depth + 1))
                    if reader.at_close():
                        break
                    self._expect_separator()
            reader.advance()
            return VList(items)

        if tag == "$":
            self._check_depth(start, tag, depth)
            entries: dict[str, Value] = {}
            if not reader.at_close():
                while True:
                    key = reader.read_token(KEY_TERMINATORS)
                    entries[key] = self.parse_value(depth + 1)
                    if reader.at_close():
                        break
                    self._expect_separator()
            reader.advance()
            return VDict(entries)

        raise ParseError(start, tag)

    def _check_depth(self, pos: int, tag: str, depth: int) -> None:
        if depth >= self.options.max_depth:
            raise DepthError(
                pos, tag,
                f"Nesting deeper than {self.options.max_depth} at position {pos}",
            )

    def _expect_separator(self) -> None:
        reader = self.reader
        if reader.peek() != SEPARATOR:
            raise ParseError(reader.pos, reader.peek(),
                             f"Expected {SEPARATOR!r} at position {reader.pos}")
        reader.advance()
