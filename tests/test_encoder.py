"""Tests for qsval.encoder."""

from datetime import datetime, timedelta, timezone

import pytest

from qsval import CodecOptions, EncodeError
from qsval.encoder import encode, encode_nested, format_date, format_number
from qsval.values import Absent, VBool, VDate, VDict, VList, VNull, VNumber, VText


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

class TestScalars:
    def test_null(self):
        assert encode(VNull()) == ":null"

    def test_bools(self):
        assert encode(VBool(True)) == ":true"
        assert encode(VBool(False)) == ":false"

    def test_integral_number(self):
        assert encode(VNumber(1)) == ":1"
        assert encode(VNumber(-5)) == ":-5"

    def test_fractional_number(self):
        assert encode(VNumber(1.5)) == ":1.5"

    def test_text(self):
        assert encode(VText("hello")) == "=hello"

    def test_text_reserved(self):
        assert encode(VText("x&y")) == "=x/&y"

    def test_text_space_and_unicode(self):
        assert encode(VText("a bé")) == "=a%20b%C3%A9"

    def test_date(self):
        dt = datetime(2024, 1, 15, 10, 20, 30, 123456, tzinfo=timezone.utc)
        assert encode(VDate(dt)) == "~2024-01-15T10:20:30.123Z"


class TestFormatNumber:
    def test_large(self):
        assert format_number(1e21) == "1e+21"

    def test_below_threshold(self):
        assert format_number(1e20) == "100000000000000000000"

    def test_non_finite(self):
        assert format_number(float("inf")) == "Infinity"
        assert format_number(float("-inf")) == "-Infinity"
        assert format_number(float("nan")) == "NaN"


class TestFormatDate:
    def test_naive_is_utc(self):
        assert format_date(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"

    def test_offset_converted(self):
        dt = datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))
        assert format_date(dt) == "2024-01-01T10:00:00.000Z"

    def test_small_year_padded(self):
        assert format_date(datetime(33, 4, 3)) == "0033-04-03T00:00:00.000Z"


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

class TestContainers:
    def test_list(self):
        assert encode(VList([VNumber(1), VText("a")])) == "@:1&=a"

    def test_list_untrimmed(self):
        assert encode_nested(VList([VNumber(1)])) == "@:1;"

    def test_trim_disabled(self):
        value = VList([VList([VNumber(1)])])
        assert encode(value, CodecOptions(trim=False)) == "@@:1;;"
        assert encode(value) == "@@:1"

    def test_empty_list(self):
        assert encode(VList([])) == "@"

    def test_empty_dict(self):
        assert encode(VDict({})) == "$"

    def test_absent_in_list_is_null(self):
        assert encode(VList([VNumber(1), Absent, VNumber(3)])) == "@:1&:null&:3"

    def test_dict(self):
        assert encode(VDict({"a": VNumber(1), "b": VText("x")})) == "$a:1&b=x"

    def test_absent_in_dict_omitted(self):
        with_absent = VDict({"a": VNumber(1), "b": Absent})
        assert encode(with_absent) == encode(VDict({"a": VNumber(1)})) == "$a:1"

    def test_null_in_dict_kept(self):
        assert encode(VDict({"a": VNull()})) == "$a:null"

    def test_key_escaped(self):
        assert encode(VDict({"a/b": VText("x&y;z")})) == "$a//b=x/&y/;z"

    def test_nested_dict(self):
        value = VDict({"to": VDict({"me": VText("test")}), "n": VNumber(2)})
        assert encode(value) == "$to$me=test;&n:2"

    def test_key_order_preserved(self):
        assert encode(VDict({"z": VNumber(1), "a": VNumber(2)})) == "$z:1&a:2"


# ---------------------------------------------------------------------------
# Top level
# ---------------------------------------------------------------------------

def test_top_level_absent():
    assert encode(Absent) is None

def test_trailing_escaped_close_trimmed():
    assert encode(VText("x;")) == "=x/"

def test_unsupported_type():
    with pytest.raises(EncodeError):
        encode(42)

def test_encode_error_is_type_error():
    with pytest.raises(TypeError):
        encode(VList([object()]))
