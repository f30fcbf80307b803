"""
Tests for csvtable/config.py and csvtable/models.py (ParserConfig)
"""

import pytest

from csvtable import InvalidConfigurationError, ParserConfig, Table
from csvtable.config import get_settings


# ============================================================================
# ParserConfig validation
# ============================================================================

def test_defaults():
    config = ParserConfig()

    assert config.delimiter == ","
    assert config.enclosure == '"'
    assert config.headers is False
    assert "text/csv" in config.mime_types


@pytest.mark.parametrize(
    "options, option_name",
    [
        ({"delimiter": ",,"}, "delimiter"),
        ({"delimiter": ""}, "delimiter"),
        ({"enclosure": "\n"}, "enclosure"),
        ({"delimiter": '"'}, "enclosure"),
        ({"enclosure": " "}, "enclosure"),
        ({"enclosure": "\t", "delimiter": ";"}, "enclosure"),
        ({"input_encoding": "no-such-codec"}, "input_encoding"),
        ({"output_encoding": "auto"}, "output_encoding"),
        ({"line_terminator": "\n\n"}, "line_terminator"),
        ({"chunk_size": 0}, "chunk_size"),
        ({"mime_types": "text/csv"}, "mime_types"),
    ],
)
def test_invalid_options(options, option_name):
    with pytest.raises(InvalidConfigurationError) as exc_info:
        ParserConfig(**options)

    assert exc_info.value.option == option_name


def test_whitespace_enclosure_is_rejected_before_any_row_is_stored():
    with pytest.raises(InvalidConfigurationError):
        Table([[""], ["x"]], enclosure=" ")
    with pytest.raises(InvalidConfigurationError):
        Table().set_enclosure("\t")


def test_auto_input_encoding_is_accepted():
    assert ParserConfig(input_encoding="auto").input_encoding == "auto"


def test_unknown_option_is_rejected():
    with pytest.raises(InvalidConfigurationError):
        ParserConfig().with_options(separator=";")
    with pytest.raises(InvalidConfigurationError):
        Table(separator=";")


def test_with_options_returns_validated_copy():
    config = ParserConfig()
    changed = config.with_options(delimiter=";")

    assert changed.delimiter == ";"
    assert config.delimiter == ","


def test_with_mime_type_does_not_duplicate():
    config = ParserConfig()

    assert config.with_mime_type("text/csv") is config
    assert config.with_mime_type("text/x-csv").mime_types[-1] == "text/x-csv"


# ============================================================================
# Settings from environment
# ============================================================================

def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("CSV_DELIMITER", ";")
    monkeypatch.setenv("CSV_HEADERS", "true")
    monkeypatch.setenv("CSV_MIME_TYPES", '["text/csv"]')
    get_settings.cache_clear()

    config = ParserConfig.from_settings()

    assert config.delimiter == ";"
    assert config.headers is True
    assert config.mime_types == ("text/csv",)


def test_settings_from_env_file(tmp_path):
    (tmp_path / ".env").write_text("CSV_ENCLOSURE=\"'\"\nCSV_OUTPUT_ENCODING=cp1252\n")
    get_settings.cache_clear()

    table = Table()

    assert table.enclosure == "'"
    assert table.output_encoding == "cp1252"


def test_explicit_options_override_settings(monkeypatch):
    monkeypatch.setenv("CSV_DELIMITER", ";")
    get_settings.cache_clear()

    assert Table(delimiter="|").delimiter == "|"


def test_invalid_settings_value_fails_at_construction(monkeypatch):
    monkeypatch.setenv("CSV_DELIMITER", "::")
    get_settings.cache_clear()

    with pytest.raises(InvalidConfigurationError):
        Table()
