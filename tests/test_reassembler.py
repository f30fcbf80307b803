"""
Tests for csvtable/reassembler.py

Logical records are rebuilt from physical lines by tracking the parity of
enclosure characters; blank lines are dropped and every line break form is
normalized to LF.
"""

import logging

from csvtable.reassembler import (
    LineReassembler,
    iter_records,
    split_physical_lines,
    split_records,
)


# ============================================================================
# Physical line splitting
# ============================================================================

def test_split_physical_lines_all_terminators():
    """CRLF, LFCR, CR and LF each count as a single line break."""
    assert split_physical_lines("a\r\nb\n\rc\rd\ne") == ["a", "b", "c", "d", "e"]


def test_split_physical_lines_trailing_newline_leaves_empty_line():
    assert split_physical_lines("a\nb\n") == ["a", "b", ""]


# ============================================================================
# Record reassembly
# ============================================================================

def test_multiline_quoted_field_is_one_record():
    """A newline inside quotes joins two physical lines into one record."""
    records = split_records('"a\nb",c\nd,e')
    assert records == ['"a\nb",c', "d,e"]


def test_embedded_crlf_is_normalized_to_lf():
    records = split_records('"line1\r\nline2",x\r\ny,z\r\n')
    assert records == ['"line1\nline2",x', "y,z"]


def test_blank_lines_are_skipped():
    """Input "a,b\\n\\nc,d" yields exactly two records."""
    assert split_records("a,b\n\nc,d") == ["a,b", "c,d"]


def test_whitespace_only_lines_are_skipped():
    assert split_records("a,b\n   \n\t\nc,d\n") == ["a,b", "c,d"]


def test_blank_line_inside_quotes_is_preserved():
    records = split_records('"first\n\nthird",x\nnext,row')
    assert records == ['"first\n\nthird",x', "next,row"]


def test_escaped_quotes_keep_parity_even():
    """Doubled enclosures do not open a multi-line record."""
    records = split_records('"say ""hi""",1\n2,3')
    assert records == ['"say ""hi""",1', "2,3"]


def test_custom_enclosure():
    records = split_records("'a\nb';c\nd;e", enclosure="'")
    assert records == ["'a\nb';c", "d;e"]


def test_iter_records_is_lazy():
    records = iter_records("a\nb\nc")
    assert next(records) == "a"
    assert next(records) == "b"


def test_empty_input_has_no_records():
    assert split_records("") == []
    assert split_records("\n\n\r\n") == []


# ============================================================================
# LineReassembler state machine
# ============================================================================

def test_feed_returns_none_while_quote_is_open():
    reassembler = LineReassembler('"')

    assert reassembler.feed('1,"multi') is None
    assert reassembler.pending is True
    assert reassembler.feed("line") is None
    assert reassembler.feed('value",2') == '1,"multi\nline\nvalue",2'
    assert reassembler.pending is False


def test_feed_counts_records_and_lines():
    reassembler = LineReassembler('"')
    for line in ["a", "", '"b', 'c"']:
        reassembler.feed(line)

    assert reassembler.records_emitted == 2
    assert reassembler.lines_consumed == 4


def test_unterminated_quote_is_flushed_best_effort(caplog):
    """An open quote at end of input is emitted as the final record and logged."""
    with caplog.at_level(logging.WARNING, logger="csvtable.reassembler"):
        records = split_records('a,b\n"never closed,c\nd')

    assert records == ["a,b", '"never closed,c\nd']
    assert "Unterminated enclosed field" in caplog.text


def test_flush_without_pending_data_returns_none():
    reassembler = LineReassembler('"')
    assert reassembler.flush() is None
    assert reassembler.feed("x,y") == "x,y"
    assert reassembler.flush() is None
