"""
HTML noise removal for email bodies.

Email clients (Outlook and Word in particular) emit document heads, embedded
stylesheets, scripts, an XML prolog and Office namespace elements (``o:``,
``v:``, ``w:``). None of it is visible content, and all of it confuses boundary
detection and character budgeting, so it is removed before anything else runs.
"""

import re
from typing import Optional

_FLAGS = re.DOTALL | re.IGNORECASE

# Block elements removed together with their content
_BLOCK_PATTERNS = [
    re.compile(r"<head\b[^>]*>.*?</head\s*>", _FLAGS),
    re.compile(r"<style\b[^>]*>.*?</style\s*>", _FLAGS),
    re.compile(r"<script\b[^>]*>.*?</script\s*>", _FLAGS),
]

_XML_PROLOG_PATTERN = re.compile(r"<\?xml.*?\?>", _FLAGS)

# Office namespaces: o: (Office), v: (VML), w: (Word)
_NS = r"(?:o|v|w)"
_NS_SELF_CLOSING_PATTERN = re.compile(rf"<{_NS}:[\w.-]+\b[^>]*/>", _FLAGS)
_NS_PAIRED_PATTERN = re.compile(
    rf"<({_NS}:[\w.-]+)\b[^>]*>.*?</\1\s*>",
    _FLAGS,
)
_NS_STRAY_TAG_PATTERN = re.compile(rf"</?{_NS}:[\w.-]+\b[^>]*>", _FLAGS)


def remove_blocks(html: str) -> str:
    """Remove <head>, <style> and <script> blocks with their content."""
    for pattern in _BLOCK_PATTERNS:
        html = pattern.sub("", html)
    return html


def remove_namespace_tags(html: str) -> str:
    """
    Remove o:, v: and w: namespace elements.

    Self-closing tags go first, then paired elements with their content, then
    any open or close tag left without a partner.
    """
    html = _NS_SELF_CLOSING_PATTERN.sub("", html)
    html = _NS_PAIRED_PATTERN.sub("", html)
    html = _NS_STRAY_TAG_PATTERN.sub("", html)
    return html


def sanitize_html(html: Optional[str]) -> str:
    """
    Strip non-content markup from a raw email body.

    Args:
        html: Raw HTML body (None allowed)

    Returns:
        HTML without head/style/script blocks, XML prolog or Office namespace
        elements. Everything else is left byte-for-byte intact.
    """
    if not html:
        return ""

    html = remove_blocks(html)
    html = _XML_PROLOG_PATTERN.sub("", html)
    html = remove_namespace_tags(html)

    return html
