"""Tests for query sanitization and term extraction."""

import pytest
from text_processing import MAX_QUERY_LENGTH, extract_terms, sanitize_query


# ─── Sanitization Tests ──────────────────────────────────────────────────────

class TestSanitizeQuery:
    """Test removal of unsafe characters and length limiting."""

    def test_removes_html_brackets(self):
        assert sanitize_query("<script>alert(1)</script>") == "scriptalert(1)/script"

    def test_removes_braces_brackets_and_quotes(self):
        assert sanitize_query("""{a}[b]'c'"d\"""") == "abcd"

    def test_trims_whitespace(self):
        assert sanitize_query("   data breach  ") == "data breach"

    def test_keeps_useful_punctuation(self):
        assert sanitize_query("section 66-a, (it act) & 43a?") == "section 66-a, (it act) & 43a?"

    def test_truncates_to_max_length(self):
        assert len(sanitize_query("a" * 300)) == 200
        assert MAX_QUERY_LENGTH == 200

    def test_custom_max_length(self):
        assert sanitize_query("abcdef", max_length=3) == "abc"

    @pytest.mark.parametrize("value", [None, 42, ["query"], {"q": 1}, ""])
    def test_non_string_or_empty_yields_empty(self, value):
        assert sanitize_query(value) == ""

    @pytest.mark.parametrize("query", [
        "plain query",
        "  <b>bold</b>  ",
        "a" * 199 + " b",
        " " + "x" * 250,
        "'\"{}[]<>",
        "\t tabbed\nnewline ",
    ])
    def test_idempotent(self, query):
        once = sanitize_query(query)
        assert sanitize_query(once) == once

    def test_truncation_does_not_leave_trailing_space(self):
        result = sanitize_query("a" * 199 + " b")
        assert not result.endswith(" ")


# ─── Term Extraction Tests ───────────────────────────────────────────────────

class TestExtractTerms:
    """Test splitting queries into search terms."""

    def test_lowercases_and_splits(self):
        assert extract_terms("Identity THEFT") == ["identity", "theft"]

    def test_splits_on_whitespace_runs(self):
        assert extract_terms("  data \t breach\n\nact  ") == ["data", "breach", "act"]

    def test_keeps_duplicates_and_order(self):
        assert extract_terms("fine b fine") == ["fine", "b", "fine"]

    def test_blank_query(self):
        assert extract_terms("   ") == []
        assert extract_terms("") == []

    @pytest.mark.parametrize("value", [None, 3.5, object()])
    def test_non_string(self, value):
        assert extract_terms(value) == []

    def test_terms_from_raw_query(self):
        # highlight terms for a typed query, without building a search session
        assert extract_terms(sanitize_query(" <Ransomware> {attack} ")) == ["ransomware", "attack"]
