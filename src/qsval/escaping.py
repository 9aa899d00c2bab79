"""Escaping layer: reserved character classes, transport encoding and the token reader."""

from __future__ import annotations

import re
from urllib.parse import quote, unquote

ESCAPE = "/"

KEY_RESERVED = frozenset("=~:@$/")
VALUE_RESERVED = frozenset("&;/")
KEY_TERMINATORS = frozenset("=~:@$")
VALUE_TERMINATORS = frozenset("&;")

SEPARATOR = "&"
CLOSE = ";"

# Characters encodeURI leaves alone besides alphanumerics and "-_.~".
_URI_SAFE = ";,/?:@&=+$!*'()#"


def _class_pattern(chars: frozenset[str]) -> re.Pattern[str]:
    return re.compile("([" + re.escape("".join(sorted(chars))) + "])")


_KEY_RE = _class_pattern(KEY_RESERVED)
_VALUE_RE = _class_pattern(VALUE_RESERVED)
_PATTERNS = {KEY_RESERVED: _KEY_RE, VALUE_RESERVED: _VALUE_RE}


# ---------------------------------------------------------------------------
# Encoding side
# ---------------------------------------------------------------------------

def transport_encode(text: str) -> str:
    """Percent-encode *text* the way ``encodeURI`` does."""
    return quote(text, safe=_URI_SAFE)


def transport_decode(text: str) -> str:
    """Undo :func:`transport_encode` over a whole wire string."""
    return unquote(text)


def escape(text: str, reserved: frozenset[str]) -> str:
    """Prefix every character of *reserved* with ``/`` then transport-encode."""
    pattern = _PATTERNS.get(reserved) or _class_pattern(reserved)
    return transport_encode(pattern.sub(r"/\1", text))


def escape_key(key: str) -> str:
    escaped = escape(key, KEY_RESERVED)
    # A bare leading ";" would read as the close of an empty object.
    if escaped.startswith(CLOSE):
        escaped = ESCAPE + escaped
    return escaped


def escape_value(text: str) -> str:
    return escape(text, VALUE_RESERVED)


# ---------------------------------------------------------------------------
# Decoding side
# ---------------------------------------------------------------------------

class TokenReader:
    """Forward-only cursor over transport-decoded wire text."""

    __slots__ = ("text", "pos")

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def at_close(self) -> bool:
        """True at end of input or on an unescaped ``;``."""
        return self.at_end() or self.text[self.pos] == CLOSE

    def peek(self) -> str:
        """Current character, ``""`` at end of input."""
        if self.at_end():
            return ""
        return self.text[self.pos]

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self.peek()
        self.pos += 1
        return ch

    def read_token(self, terminators: frozenset[str]) -> str:
        """Read up to the next unescaped terminator or end of input.

        The terminator itself is not consumed. ``/`` makes the following
        character literal; a ``/`` that is the last character of the input
        stands for an escaped ``;``.
        """
        text = self.text
        end = len(text)
        buf: list[str] = []
        while self.pos < end:
            ch = text[self.pos]
            if ch == ESCAPE:
                self.pos += 1
                if self.pos == end:
                    buf.append(CLOSE)
                    break
                ch = text[self.pos]
            elif ch in terminators:
                break
            buf.append(ch)
            self.pos += 1
        return "".join(buf)
