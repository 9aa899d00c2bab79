"""Exception hierarchy for qsval."""

from __future__ import annotations


class QsvalError(Exception):
    """Base class for every error raised by qsval."""


class ParseError(QsvalError, ValueError):
    """Malformed wire text.

    ``position`` is the index into the transport-decoded input and
    ``char`` the offending character (``""`` at end of input).
    """

    def __init__(self, position: int, char: str, message: str | None = None) -> None:
        self.position = position
        self.char = char
        if message is None:
            if char:
                message = f"Unexpected char {char!r} at position {position}"
            else:
                message = f"Unexpected end of input at position {position}"
        super().__init__(message)


class DepthError(ParseError):
    """Nesting deeper than the configured ``max_depth``."""


class ScalarError(ParseError):
    """Unparseable ``:`` token when strict scalars are enabled."""


class EncodeError(QsvalError, TypeError):
    """Value that has no wire representation."""
