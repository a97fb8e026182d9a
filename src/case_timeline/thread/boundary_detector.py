"""
Reply boundary detection.

Finds where the new part of an email ends and the quoted history begins, using
reply-header signatures from common mail clients in several languages. The
patterns run against sanitized HTML, so header blocks may contain inline tags
(``<b>From:</b>``, ``<br>``, mailto anchors).
"""

import re
from typing import List, Optional, Pattern, Tuple

from .html_tree import plain_text

NO_BOUNDARY = -1
DEFAULT_SNAP_DISTANCE = 100

# Upper bound on the text between the two halves of a reply header.
_GAP = r"[\s\S]{1,300}?"

# Optional <b>/<strong> wrapper around a header label
_BOLD_OPEN = r"(?:<(?:b|strong)\b[^>]*>\s*)?"
_BOLD_CLOSE = r"(?:\s*</(?:b|strong)\s*>)?"


def _header_block(from_label: str, sent_label: str) -> str:
    """'From: ... Sent:' header block, plain or bold-tag form."""
    return (
        rf"{_BOLD_OPEN}\b{from_label}\s*:{_BOLD_CLOSE}"
        rf"[\s\S]{{1,500}}?"
        rf"{_BOLD_OPEN}\b{sent_label}\s*:"
    )


# "<" that opens a tag, as opposed to a literal less-than sign in text
_TAG_OPEN = re.compile(r"<[/!?A-Za-z]")


# Order only matters for readability: the earliest match in the body wins.
REPLY_BOUNDARY_PATTERNS: List[Tuple[Pattern[str], str]] = [
    # "On <date>, <person> wrote:"
    (re.compile(rf"\bOn\s{_GAP}\bwrote\s*:"), "english_reply_header"),
    (re.compile(rf"\bLe\s{_GAP}\ba\s+écrit\s*:"), "french_reply_header"),
    (re.compile(rf"\bIl\s{_GAP}\bha\s+scritto\s*:"), "italian_reply_header"),
    (re.compile(rf"\bAm\s{_GAP}\bschrieb\b[^:<]{{0,100}}:"), "german_reply_header"),
    (re.compile(rf"\bEl\s{_GAP}\bescribió\s*:"), "spanish_reply_header"),
    # "-----Original Message-----" and friends
    (
        re.compile(
            r"-{2,}\s*(?:Original Message|Forwarded message|Messaggio originale|"
            r"Messaggio inoltrato|Message d'origine|Message transféré|"
            r"Mensaje original|Ursprüngliche Nachricht)\s*-{2,}",
            re.IGNORECASE,
        ),
        "original_message_separator",
    ),
    # Outlook header blocks
    (re.compile(_header_block("From", "Sent"), re.IGNORECASE), "english_header_block"),
    (re.compile(_header_block("De", "Envoyé"), re.IGNORECASE), "french_header_block"),
    (re.compile(_header_block("Da", "Inviato"), re.IGNORECASE), "italian_header_block"),
    (re.compile(_header_block("Von", "Gesendet"), re.IGNORECASE), "german_header_block"),
    # Outlook plain-text separator line
    (re.compile(r"_{10,}"), "underscore_separator"),
    # Client quote containers
    (
        re.compile(r"<div\b[^>]*\bclass=[\"']?[^\"'>]*\bgmail_quote\b", re.IGNORECASE),
        "gmail_quote_container",
    ),
    (
        re.compile(r"<div\b[^>]*\bid=[\"']?divRplyFwdMsg\b", re.IGNORECASE),
        "outlook_reply_container",
    ),
]


def is_inside_tag(html: str, index: int) -> bool:
    """Whether an offset falls between a tag's '<' and its closing '>'."""
    last_lt = html.rfind("<", 0, index)
    if last_lt == -1 or last_lt < html.rfind(">", 0, index):
        return False
    return _TAG_OPEN.match(html, last_lt) is not None


def _search_outside_tags(pattern: Pattern[str], html: str) -> Optional[int]:
    """Start of the first match that does not begin inside a tag's attributes."""
    position = 0
    while True:
        match = pattern.search(html, position)
        if match is None:
            return None
        if not is_inside_tag(html, match.start()):
            return match.start()
        position = match.start() + 1


def find_first_match(html: str) -> Optional[Tuple[int, str]]:
    """
    Find the leftmost reply signature in the body.

    Matches starting inside a tag (an ``alt`` or ``title`` text quoting a
    reply header) are skipped.

    Args:
        html: Sanitized HTML

    Returns:
        Tuple of (start_offset, pattern_name), or None if nothing matched
    """
    best: Optional[Tuple[int, str]] = None
    for pattern, name in REPLY_BOUNDARY_PATTERNS:
        start = _search_outside_tags(pattern, html)
        if start is not None and (best is None or start < best[0]):
            best = (start, name)
    return best


def snap_to_tag_boundary(
    html: str, index: int, max_distance: int = DEFAULT_SNAP_DISTANCE
) -> int:
    """
    Move a split offset back to just after the closest preceding '>'.

    The offset is only moved when that '>' is at most ``max_distance``
    characters away; otherwise it is returned unchanged.

    Args:
        html: Sanitized HTML
        index: Raw split offset
        max_distance: Maximum look-back in characters

    Returns:
        Snapped offset
    """
    last_gt = html.rfind(">", 0, index)
    if last_gt != -1 and index - last_gt <= max_distance:
        return last_gt + 1
    return index


def find_reply_boundary(
    html: str, max_snap_distance: int = DEFAULT_SNAP_DISTANCE
) -> int:
    """
    Offset where the quoted history starts.

    Args:
        html: Sanitized HTML
        max_snap_distance: Look-back used when snapping to a tag boundary

    Returns:
        Split offset, or NO_BOUNDARY (-1) if no reply signature was found
    """
    if not html:
        return NO_BOUNDARY

    match = find_first_match(html)
    if match is None:
        return NO_BOUNDARY

    return snap_to_tag_boundary(html, match[0], max_snap_distance)


def is_natural_split(html: str, boundary: int, budget: int) -> bool:
    """
    Whether a detected boundary can be used as the split point as-is.

    Args:
        html: Sanitized HTML
        boundary: Offset returned by find_reply_boundary
        budget: Character budget for new content (0 = unlimited)

    Returns:
        True if the text before the boundary fits in the budget
    """
    if boundary == NO_BOUNDARY:
        return False
    if budget == 0:
        return True
    return len(plain_text(html[:boundary])) <= budget
