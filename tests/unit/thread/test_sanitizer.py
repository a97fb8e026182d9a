"""
Unit tests for HTML noise removal (sanitizer.py).

Tests cover:
- head/style/script block removal
- XML prolog removal
- Office namespace elements (paired, self-closing, stray)
- Untouched content
- Empty input
"""

import pytest

from case_timeline.thread.sanitizer import (
    remove_blocks,
    remove_namespace_tags,
    sanitize_html,
)
from tests.fixtures.email_bodies import OFFICE_NOISE


class TestSanitizeHtml:
    """Tests for sanitize_html() function."""

    @pytest.mark.unit
    def test_sanitize_office_document(self):
        """Test full cleanup of a Word-generated body."""
        result = sanitize_html(OFFICE_NOISE)

        assert result == '<html><body><p class="MsoNormal">Hello</p><p>World</p></body></html>'

    @pytest.mark.unit
    def test_sanitize_empty(self):
        """Test handling of None and empty string."""
        assert sanitize_html(None) == ""
        assert sanitize_html("") == ""

    @pytest.mark.unit
    def test_sanitize_leaves_content_untouched(self):
        """Test that ordinary markup passes through byte-for-byte."""
        html = '<div class="x">Hi &amp; bye<br>\n<a href="http://a.b">link</a></div>'
        assert sanitize_html(html) == html

    @pytest.mark.unit
    def test_sanitize_xml_prolog(self):
        """Test removing the <?xml ...?> prolog."""
        assert sanitize_html('<?xml version="1.0"?><p>x</p>') == "<p>x</p>"

    @pytest.mark.unit
    def test_sanitize_does_not_touch_similar_tags(self):
        """Test that <wbr>, <video> and <option> are not namespace tags."""
        html = "<p>a<wbr>b</p><video></video><option>o</option>"
        assert sanitize_html(html) == html


class TestRemoveBlocks:
    """Tests for remove_blocks() function."""

    @pytest.mark.unit
    def test_remove_blocks_case_insensitive(self):
        """Test that mixed-case tags are removed."""
        html = "<HEAD><Title>t</Title></HEAD><Script>x()</SCRIPT><p>keep</p>"
        assert remove_blocks(html) == "<p>keep</p>"

    @pytest.mark.unit
    def test_remove_blocks_multiline(self):
        """Test blocks spanning several lines."""
        html = "<style>\n.a {\n color: red;\n}\n</style>\n<p>keep</p>"
        assert remove_blocks(html) == "\n<p>keep</p>"

    @pytest.mark.unit
    def test_remove_multiple_blocks(self):
        """Test that every block is removed, not only the first."""
        html = "<style>a</style>x<style>b</style>y"
        assert remove_blocks(html) == "xy"


class TestRemoveNamespaceTags:
    """Tests for remove_namespace_tags() function."""

    @pytest.mark.unit
    def test_remove_paired_element_with_content(self):
        """Test that paired elements are removed with their content."""
        assert remove_namespace_tags("a<o:p>&nbsp;</o:p>b") == "ab"

    @pytest.mark.unit
    def test_remove_self_closing(self):
        """Test removing self-closing namespace tags."""
        assert remove_namespace_tags('a<v:fill type="tile"/>b') == "ab"

    @pytest.mark.unit
    def test_remove_stray_tags(self):
        """Test that unpaired open and close tags leave nothing dangling."""
        assert remove_namespace_tags("a<o:p>b") == "ab"
        assert remove_namespace_tags("a</w:r>b") == "ab"

    @pytest.mark.unit
    def test_remove_nested_same_name(self):
        """Test nested namespace elements leave no leftover close tag."""
        result = remove_namespace_tags("x<o:p><o:p>y</o:p></o:p>z")
        assert "o:p" not in result
        assert result.startswith("x")
        assert result.endswith("z")
