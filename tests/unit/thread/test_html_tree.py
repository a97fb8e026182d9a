"""
Unit tests for HTML tree helpers (html_tree.py).
"""

from unittest.mock import patch

import pytest

from case_timeline.thread.html_tree import is_text_node, parse_fragment, plain_text


class TestPlainText:
    """Tests for plain_text() function."""

    @pytest.mark.unit
    def test_plain_text_decodes_entities(self):
        """Test entities count as the character they stand for."""
        assert plain_text("<p>a&amp;b&nbsp;c</p>") == "a&b\xa0c"

    @pytest.mark.unit
    def test_plain_text_keeps_whitespace(self):
        """Test whitespace is not normalized."""
        assert plain_text("<p>a \n b</p>\n<p>c</p>") == "a \n b\nc"

    @pytest.mark.unit
    def test_plain_text_skips_comments(self):
        """Test comments are not text."""
        assert plain_text("a<!-- hidden -->b") == "ab"

    @pytest.mark.unit
    def test_plain_text_empty(self):
        assert plain_text("") == ""
        assert plain_text(None) == ""

    @pytest.mark.unit
    def test_plain_text_of_broken_fragment(self):
        """Test unbalanced fragments still yield their text."""
        assert plain_text("</div>tail<p>x") == "tailx"


class TestParseFragment:
    """Tests for parse_fragment() function."""

    @pytest.mark.unit
    def test_parse_failure_returns_none(self):
        """Test a parser error is reported as None."""
        with patch(
            "case_timeline.thread.html_tree.BeautifulSoup",
            side_effect=ValueError("rejected"),
        ):
            assert parse_fragment("<p>x</p>") is None

    @pytest.mark.unit
    def test_text_nodes(self):
        """Test which nodes count as text."""
        soup = parse_fragment("<p>a<!--c--></p>")
        paragraph = soup.p
        text, comment = paragraph.contents

        assert is_text_node(text)
        assert not is_text_node(comment)
        assert not is_text_node(paragraph)
