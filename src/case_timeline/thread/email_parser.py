"""
Email thread reduction.

Splits a raw HTML email body into the new message and its quoted history:

1. Sanitize the markup
2. Look for a reply boundary (natural split)
3. Fall back to a character-budgeted structural split when there is no
   boundary, or when the text before it exceeds the budget
4. Linkify both parts

The result depends only on the input, so re-parsing on refresh is safe.
"""

from typing import Optional

import structlog

from ..models.parse_result import ParseResult
from .boundary_detector import (
    DEFAULT_SNAP_DISTANCE,
    NO_BOUNDARY,
    find_reply_boundary,
    is_natural_split,
)
from .linkifier import linkify
from .sanitizer import sanitize_html
from .truncator import DEFAULT_TRUNCATION_MARKER, truncate_html

logger = structlog.get_logger(__name__)


def split_thread(
    html: str,
    budget: int = 0,
    marker: str = DEFAULT_TRUNCATION_MARKER,
    snap_distance: int = DEFAULT_SNAP_DISTANCE,
) -> ParseResult:
    """
    Split sanitized HTML into new content and history, without linkifying.

    Args:
        html: Sanitized HTML
        budget: Plain-text budget for new content (0 = unlimited)
        marker: Text appended when new content is truncated
        snap_distance: Look-back used to snap the boundary to a tag end

    Returns:
        ParseResult
    """
    if not html:
        return ParseResult.empty()

    boundary = find_reply_boundary(html, snap_distance)

    if boundary == NO_BOUNDARY:
        return truncate_html(html, "", budget, marker)

    if is_natural_split(html, boundary, budget):
        return ParseResult(
            new_content=html[:boundary],
            history_content=html[boundary:],
            has_history=True,
        )

    return truncate_html(html[:boundary], html[boundary:], budget, marker)


def parse_email_body(
    raw_html: Optional[str],
    budget: int = 0,
    marker: str = DEFAULT_TRUNCATION_MARKER,
    snap_distance: int = DEFAULT_SNAP_DISTANCE,
) -> ParseResult:
    """
    Reduce a raw email body to its new content plus collapsible history.

    Malformed markup never raises: if any step fails, the sanitized body is
    returned whole as new content with no history.

    Args:
        raw_html: Raw HTML body (None allowed)
        budget: Plain-text budget for new content (0 = unlimited)
        marker: Text appended when new content is truncated
        snap_distance: Look-back used to snap the boundary to a tag end

    Returns:
        ParseResult with linkified new content and history

    Examples:
        >>> result = parse_email_body(
        ...     "Thanks!<br>On Mon, Jan 1 2024 at 9:00 AM John wrote:<br>Hi", 1000
        ... )
        >>> result.has_history
        True
        >>> result.history_content
        'On Mon, Jan 1 2024 at 9:00 AM John wrote:<br/>Hi'
    """
    html = sanitize_html(raw_html)
    if not html:
        return ParseResult.empty()

    try:
        result = split_thread(html, budget, marker, snap_distance)
        return ParseResult(
            new_content=linkify(result.new_content),
            history_content=linkify(result.history_content),
            has_history=result.has_history,
        )
    except Exception as e:
        logger.warning(
            "email_parse_degraded",
            error=str(e),
            html_length=len(html),
            exc_info=True,
        )
        return ParseResult(new_content=html, history_content="", has_history=False)
