"""
Tests for the header line tokenizer.

Quoting and escaping are where header parsers usually break, so most of the
cases here are about what happens inside double quotes.

Run: pytest tests/ -v
"""

from __future__ import annotations

import pytest

from vcf_header.exceptions import (
    ErrorKind,
    InvalidHeaderError,
    MalformedLineError,
    UnterminatedQuoteError,
)
from vcf_header.models import TagPair
from vcf_header.tokenizer import tokenize


def _as_dict(line: str) -> dict[str, str]:
    return {p.name: p.value for p in tokenize(line)}


# ═══════════════════════════════════════════════════════════════════════
# WELL-FORMED LINES
# ═══════════════════════════════════════════════════════════════════════


class TestBasicTokenizing:
    def test_simple_line(self):
        pairs = tokenize('<ID=SnpCluster,Description="SNPs found in clusters">')
        assert pairs == [
            TagPair(name="ID", value="SnpCluster"),
            TagPair(name="Description", value="SNPs found in clusters"),
        ]

    def test_order_is_preserved(self):
        pairs = tokenize("<C=3,A=1,B=2>")
        assert [p.name for p in pairs] == ["C", "A", "B"]

    def test_empty_body_yields_nothing(self):
        assert tokenize("<>") == []

    def test_whitespace_only_body_yields_nothing(self):
        assert tokenize("<   >") == []

    def test_whitespace_after_comma_is_skipped(self):
        values = _as_dict("<ID=X,   Number=1,\tType=Integer>")
        assert list(values) == ["ID", "Number", "Type"]

    def test_tag_name_is_trimmed(self):
        assert _as_dict("<ID =X>") == {"ID": "X"}

    def test_unquoted_value_kept_verbatim(self):
        assert _as_dict("<ID=X,Number= 1 >")["Number"] == " 1 "

    def test_unquoted_value_may_contain_brackets(self):
        assert _as_dict('<ID=X,Description=<Y>>') == {"ID": "X", "Description": "<Y>"}

    def test_unquoted_value_with_inner_quote_is_not_a_quoted_value(self):
        assert _as_dict('<ID=a"b>') == {"ID": 'a"b'}

    def test_empty_unquoted_value(self):
        assert _as_dict("<ID=,Number=1>") == {"ID": "", "Number": "1"}

    def test_value_may_contain_equals(self):
        assert _as_dict("<ID=a=b>") == {"ID": "a=b"}

    def test_duplicate_names_are_both_emitted(self):
        pairs = tokenize("<ID=1,ID=2>")
        assert [p.value for p in pairs] == ["1", "2"]


# ═══════════════════════════════════════════════════════════════════════
# QUOTED VALUES
# ═══════════════════════════════════════════════════════════════════════


class TestQuotedValues:
    def test_comma_inside_quotes(self):
        assert _as_dict('<ID=X,Description="a, b, c">')["Description"] == "a, b, c"

    def test_escaped_quotes(self):
        values = _as_dict(r'<ID=ANNOTATION,Description="ANNOTATION != \"NA\" || ANNOTATION <= 0.01">')
        assert values == {
            "ID": "ANNOTATION",
            "Description": 'ANNOTATION != "NA" || ANNOTATION <= 0.01',
        }

    def test_escaped_backslash_and_quotes(self):
        values = _as_dict(r'<ID=ANNOTATION,Description="ANNOTATION \\= \"NA\" || ANNOTATION <= 0.01">')
        assert values["Description"] == r'ANNOTATION \= "NA" || ANNOTATION <= 0.01'

    def test_two_quoted_values(self):
        values = _as_dict(
            r'<ID=ANNOTATION,Description="ANNOTATION \\= \"NA\" || ANNOTATION <= 0.01", '
            r'Description2="foo\"bar">'
        )
        assert len(values) == 3
        assert values["Description"] == r'ANNOTATION \= "NA" || ANNOTATION <= 0.01'
        assert values["Description2"] == 'foo"bar'

    def test_backslash_before_other_char_is_kept(self):
        values = _as_dict(r'<ID=ANNOTATION,Description="ANNOTATION \n with a newline in it">')
        assert values["Description"] == r"ANNOTATION \n with a newline in it"
        assert "\n" not in values["Description"]

    def test_escaped_backslash_decodes_to_one(self):
        assert _as_dict(r'<D="\\">')["D"] == "\\"

    def test_escaped_quote_decodes_to_quote(self):
        assert _as_dict(r'<D="\"">')["D"] == '"'

    def test_double_backslash_then_quote_closes(self):
        # \\ is one escaped backslash, so the following quote terminates
        assert _as_dict(r'<D="a\\",ID=X>') == {"D": "a\\", "ID": "X"}

    def test_whitespace_after_closing_quote_allowed(self):
        assert _as_dict('<Description="a"  ,ID=X>') == {"Description": "a", "ID": "X"}

    def test_empty_quoted_value(self):
        assert _as_dict('<Description="">') == {"Description": ""}


# ═══════════════════════════════════════════════════════════════════════
# MALFORMED LINES
# ═══════════════════════════════════════════════════════════════════════


class TestUnterminatedQuotes:
    def test_unclosed_quote(self):
        with pytest.raises(UnterminatedQuoteError, match="Unclosed quote"):
            tokenize(r'<ID=ANNOTATION,Description="ANNOTATION \n with a newline in it>')

    def test_escaped_quote_at_end_is_not_a_terminator(self):
        with pytest.raises(UnterminatedQuoteError):
            tokenize(r'<ID=ANNOTATION,Description="ANNOTATION \n with a newline in it\">')

    def test_lone_backslash_at_end(self):
        with pytest.raises(UnterminatedQuoteError):
            tokenize('<D="abc\\>')

    def test_error_carries_kind_and_tag(self):
        with pytest.raises(InvalidHeaderError) as exc_info:
            tokenize('<ID=X,Description="open>')
        assert exc_info.value.code == ErrorKind.UNTERMINATED_QUOTE
        assert exc_info.value.details["tag"] == "Description"


class TestMalformedLines:
    @pytest.mark.parametrize("line", ["", "<", ">", "ID=X>", "<ID=X", "ID=X", " <ID=X>"])
    def test_missing_brackets(self, line):
        with pytest.raises(MalformedLineError, match="enclosed"):
            tokenize(line)

    def test_segment_without_equals(self):
        with pytest.raises(MalformedLineError, match="Missing '='"):
            tokenize("<ID=X,Flag>")

    def test_trailing_comma(self):
        with pytest.raises(MalformedLineError, match="Missing '='"):
            tokenize("<ID=X,>")

    def test_empty_tag_name(self):
        with pytest.raises(MalformedLineError, match="Invalid tag name"):
            tokenize("<=X>")

    def test_quote_in_tag_name(self):
        with pytest.raises(MalformedLineError, match="Invalid tag name"):
            tokenize('<"ID"=X>')

    def test_text_after_closing_quote(self):
        with pytest.raises(MalformedLineError, match="after quoted value"):
            tokenize('<Description="a"b,ID=X>')

    def test_malformed_kind(self):
        with pytest.raises(InvalidHeaderError) as exc_info:
            tokenize("ID=X")
        assert exc_info.value.code == ErrorKind.MALFORMED_LINE
