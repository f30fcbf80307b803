"""
Tests for csvtable/tokenizer.py
"""

import pytest

from csvtable.tokenizer import tokenize


def test_simple_fields():
    assert tokenize("a,b,c") == ["a", "b", "c"]


def test_trailing_and_leading_empty_fields_are_kept():
    """Field count equals the number of delimiter-separated segments."""
    assert tokenize(",a,,") == ["", "a", "", ""]


def test_empty_record_is_one_empty_field():
    assert tokenize("") == [""]


def test_enclosed_field_with_delimiter():
    assert tokenize('1,"Smith, John",3') == ["1", "Smith, John", "3"]


def test_doubled_enclosure_is_unescaped():
    """A field serialized as "a""b" parses back to a"b."""
    assert tokenize('"a""b"') == ['a"b']


def test_enclosed_field_with_newline():
    assert tokenize('"a\nb",c') == ["a\nb", "c"]


def test_empty_enclosed_field():
    assert tokenize('"",x') == ["", "x"]


def test_only_doubled_enclosures():
    assert tokenize('""""') == ['"']


def test_unenclosed_field_keeps_mid_field_enclosure():
    """Quotes inside an unquoted field are literal, as spreadsheets export them."""
    assert tokenize('5" screen,ok') == ['5" screen', "ok"]


def test_text_after_closing_enclosure_is_appended():
    assert tokenize('"ab"cd,e') == ["abcd", "e"]


def test_unterminated_enclosed_field_takes_rest_of_record():
    assert tokenize('a,"open, still open') == ["a", "open, still open"]


@pytest.mark.parametrize(
    "record, delimiter, enclosure, expected",
    [
        ("a;b;'c;d'", ";", "'", ["a", "b", "c;d"]),
        ("x\t|y\t|\tz", "\t", "|", ["x", "y\t", "z"]),
        ("1|2|'it''s'", "|", "'", ["1", "2", "it's"]),
    ],
)
def test_custom_dialects(record, delimiter, enclosure, expected):
    assert tokenize(record, delimiter, enclosure) == expected
