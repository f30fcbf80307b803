"""
Tests for csvtable/encoding.py
"""

import codecs

import pytest

from csvtable import DecodingError, InvalidConfigurationError
from csvtable.encoding import EncodingResolver


@pytest.mark.parametrize(
    "raw, expected",
    [
        (codecs.BOM_UTF8 + b"a,b", "utf-8-sig"),
        (codecs.BOM_UTF16_LE + "a".encode("utf-16-le"), "utf-16"),
        (codecs.BOM_UTF32_LE + "a".encode("utf-32-le"), "utf-32"),
        (b"plain,ascii\n", None),
    ],
)
def test_detect_bom(raw, expected):
    assert EncodingResolver.detect_bom(raw) == expected


def test_detect_ascii_and_empty_as_utf8():
    assert EncodingResolver.detect(b"id,name\n1,x\n") == "utf-8"
    assert EncodingResolver.detect(b"") == "utf-8"


def test_normalize():
    assert EncodingResolver.normalize("UTF8") == "utf-8"
    assert EncodingResolver.same("latin-1", "ISO-8859-1")

    with pytest.raises(InvalidConfigurationError) as exc_info:
        EncodingResolver.normalize("no-such-codec", "output_encoding")
    assert exc_info.value.option == "output_encoding"


def test_is_auto():
    assert EncodingResolver.is_auto(None)
    assert EncodingResolver.is_auto(" AUTO ")
    assert not EncodingResolver.is_auto("utf-8")


def test_decode_strips_bom_and_reports_encoding():
    text, encoding = EncodingResolver.decode(codecs.BOM_UTF8 + b"a,b", "UTF-8")

    assert text == "a,b"
    assert encoding == "UTF-8"


def test_decode_invalid_bytes():
    with pytest.raises(DecodingError) as exc_info:
        EncodingResolver.decode(b"ok\xff", "utf-8")
    assert exc_info.value.encoding == "utf-8"


def test_incremental_decoder_handles_split_characters():
    decoder = EncodingResolver.incremental_decoder("utf-8")
    data = "ñ".encode("utf-8")

    assert decoder.decode(data[:1]) == ""
    assert decoder.decode(data[1:], final=True) == "ñ"


def test_transcode():
    assert EncodingResolver.transcode("abc", "latin-1") == ("abc", False)
    assert EncodingResolver.transcode("€5", "latin-1") == ("?5", True)
    assert EncodingResolver.transcode("€5", "cp1252") == ("€5", False)
