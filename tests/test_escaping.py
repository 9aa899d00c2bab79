"""Tests for qsval.escaping."""

from qsval.escaping import (
    KEY_TERMINATORS,
    VALUE_TERMINATORS,
    TokenReader,
    escape,
    escape_key,
    escape_value,
    transport_decode,
    transport_encode,
)


# ---------------------------------------------------------------------------
# escape_value / escape_key
# ---------------------------------------------------------------------------

def test_escape_value_reserved():
    assert escape_value("x&y;z/w") == "x/&y/;z//w"

def test_escape_value_leaves_tags():
    assert escape_value("a=b:c@d$e~f") == "a=b:c@d$e~f"

def test_escape_key_reserved():
    assert escape_key("=~:@$/") == "/=/~/:/@/$//"

def test_escape_key_leaves_separators():
    assert escape_key("a&b") == "a&b"

def test_escape_key_leading_close():
    assert escape_key(";x") == "/;x"

def test_escape_key_inner_close():
    assert escape_key("x;y") == "x;y"

def test_escape_custom_class():
    assert escape("a+b", frozenset("+")) == "a/+b"


# ---------------------------------------------------------------------------
# transport layer
# ---------------------------------------------------------------------------

def test_transport_encode_space_and_unicode():
    assert transport_encode("a b") == "a%20b"
    assert transport_encode("é") == "%C3%A9"

def test_transport_encode_percent():
    assert transport_encode("100%") == "100%25"

def test_transport_encode_keeps_structure():
    assert transport_encode("$a//b=x/&y/;z@~:") == "$a//b=x/&y/;z@~:"

def test_transport_decode():
    assert transport_decode("a%20b%C3%A9") == "a bé"

def test_escape_value_then_transport():
    assert escape_value("a b&") == "a%20b/&"


# ---------------------------------------------------------------------------
# TokenReader
# ---------------------------------------------------------------------------

def test_read_token_stops_at_terminator():
    r = TokenReader("abc&def")
    assert r.read_token(VALUE_TERMINATORS) == "abc"
    assert r.pos == 3
    assert r.peek() == "&"

def test_read_token_to_end():
    r = TokenReader("abc")
    assert r.read_token(VALUE_TERMINATORS) == "abc"
    assert r.at_end()

def test_read_token_escape_wins():
    r = TokenReader("a/&b/;c//d;")
    assert r.read_token(VALUE_TERMINATORS) == "a&b;c/d"
    assert r.peek() == ";"

def test_read_token_escape_at_end_is_close():
    r = TokenReader("ab/")
    assert r.read_token(VALUE_TERMINATORS) == "ab;"
    assert r.at_end()

def test_read_token_key_terminators():
    r = TokenReader("name=value")
    assert r.read_token(KEY_TERMINATORS) == "name"
    assert r.peek() == "="

def test_read_token_key_keeps_separators():
    r = TokenReader("a&b;c:1")
    assert r.read_token(KEY_TERMINATORS) == "a&b;c"

def test_read_token_escaped_tag_in_key():
    r = TokenReader("a/:b:1")
    assert r.read_token(KEY_TERMINATORS) == "a:b"

def test_at_close():
    assert TokenReader(";").at_close()
    assert TokenReader("").at_close()
    assert not TokenReader("&").at_close()

def test_advance_past_end():
    r = TokenReader("")
    assert r.advance() == ""
    assert r.at_end()
