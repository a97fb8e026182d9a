"""
HTML tree helpers shared by the truncator and the linkifier.

Fragments are parsed with BeautifulSoup's built-in ``html.parser`` builder, which
produces a tree of tags (name, attributes, ordered children) and tolerates
unbalanced markup.
"""

from typing import Optional

import structlog
from bs4 import BeautifulSoup, NavigableString
from bs4.element import PageElement, PreformattedString

logger = structlog.get_logger(__name__)


def parse_fragment(html: str) -> Optional[BeautifulSoup]:
    """
    Parse an HTML fragment into a tree.

    Args:
        html: HTML content (may be malformed)

    Returns:
        BeautifulSoup tree, or None if the markup could not be parsed
    """
    try:
        return BeautifulSoup(html, "html.parser")
    except Exception as e:
        logger.warning("html_parse_failed", error=str(e), html_length=len(html))
        return None


def is_text_node(node: PageElement) -> bool:
    """True for character data; comments, doctypes and CDATA are not text."""
    return isinstance(node, NavigableString) and not isinstance(
        node, PreformattedString
    )


def tree_text(root: PageElement) -> str:
    """Concatenate every text node under ``root`` in document order."""
    if is_text_node(root):
        return str(root)
    if not hasattr(root, "descendants"):
        return ""
    return "".join(str(node) for node in root.descendants if is_text_node(node))


def plain_text(html: Optional[str]) -> str:
    """
    Plain-text content of an HTML fragment.

    Entities are decoded and no whitespace is normalized, so the length is the
    character count the truncation budget is measured against.

    Args:
        html: HTML content

    Returns:
        Text content, or the input unchanged if it cannot be parsed
    """
    if not html:
        return ""

    soup = parse_fragment(html)
    if soup is None:
        return html
    return tree_text(soup)
