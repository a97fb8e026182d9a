"""
Bare URL linkification for HTML fragments.

Only text nodes are rewritten, and never inside an existing anchor, script or
style element, so running the linkifier on its own output changes nothing.
"""

import re
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString
from bs4.element import PageElement

from .html_tree import is_text_node, parse_fragment

# Parentheses and quotes end a URL; trailing sentence punctuation is trimmed.
URL_PATTERN = re.compile(r"(?:https?|ftp)://[^\s<>()\"]+", re.IGNORECASE)
TRAILING_PUNCTUATION = ".,;:!?'\""

SKIP_ANCESTORS = ["a", "script", "style"]


def _trim_url(url: str) -> str:
    return url.rstrip(TRAILING_PUNCTUATION)


def _is_linkable(node: PageElement) -> bool:
    return is_text_node(node) and node.find_parent(SKIP_ANCESTORS) is None


def _linkify_node(soup: BeautifulSoup, node: NavigableString) -> bool:
    """Replace one text node with text and anchor pieces. Returns True if changed."""
    text = str(node)
    pieces: List[PageElement] = []
    position = 0

    for match in URL_PATTERN.finditer(text):
        url = _trim_url(match.group(0))
        if "://" not in url or url.endswith("://"):
            continue

        start = match.start()
        end = start + len(url)
        if start > position:
            pieces.append(NavigableString(text[position:start]))

        # Serialized with attributes sorted by name: href, rel, target
        anchor = soup.new_tag(
            "a", attrs={"href": url, "rel": "noopener noreferrer", "target": "_blank"}
        )
        anchor.string = url
        pieces.append(anchor)
        position = end

    if not pieces:
        return False

    if position < len(text):
        pieces.append(NavigableString(text[position:]))

    node.replace_with(*pieces)
    return True


def linkify_soup(soup: BeautifulSoup) -> int:
    """
    Wrap bare URLs of a parsed document in anchors, in place.

    Args:
        soup: Parsed document

    Returns:
        Number of text nodes rewritten
    """
    candidates = [node for node in soup.find_all(string=True) if _is_linkable(node)]
    return sum(1 for node in candidates if _linkify_node(soup, node))


def linkify(html: Optional[str]) -> str:
    """
    Convert bare http, https and ftp URLs into clickable links.

    Links open in a new tab. Text already inside an anchor is left alone, which
    makes the operation idempotent.

    Args:
        html: HTML fragment

    Returns:
        Re-serialized HTML with URLs linked; the input unchanged if it could
        not be parsed
    """
    if not html:
        return ""

    soup = parse_fragment(html)
    if soup is None:
        return html

    linkify_soup(soup)
    return soup.decode()
