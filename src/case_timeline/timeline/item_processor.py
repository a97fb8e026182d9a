"""
Timeline item processing.

Turns raw TimelineItem records into renderable ProcessedItem records: email
bodies are reduced to new content plus history, every item gets a plain-text
preview, category flags and style directives.
"""

import html as html_module
import re
from typing import Iterable, List, Optional

import structlog
from pydantic.alias_generators import to_camel

from ..config import Settings, settings as default_settings
from ..logging_config import item_log_context
from ..models.timeline import Category, ProcessedItem, TimelineItem
from ..thread.email_parser import parse_email_body
from ..thread.sanitizer import sanitize_html

logger = structlog.get_logger(__name__)

PREVIEW_MAX_LENGTH = 400
PREVIEW_PLACEHOLDER = "Click to view content..."

BOX_CLASS = "slds-box slds-box_x-small slds-m-bottom_small"
INTERNAL_BOX_CLASS = f"{BOX_CLASS} internal-note"
OUTGOING_BADGE_CLASS = "slds-badge outgoing-email-badge"
INCOMING_BADGE_CLASS = "slds-badge slds-theme_success"

_TAG_PATTERN = re.compile(r"<[^>]+>")
_WHITESPACE_PATTERN = re.compile(r"\s+")

# Keys the data service may send for values computed here, e.g. a stale
# historyBody. Extra fields under these names are dropped.
_COMPUTED_KEYS = frozenset(
    key
    for name in ProcessedItem.model_fields
    if name not in TimelineItem.model_fields
    for key in (name, to_camel(name))
)


def build_preview_text(
    html: Optional[str],
    max_length: int = PREVIEW_MAX_LENGTH,
    placeholder: str = PREVIEW_PLACEHOLDER,
) -> str:
    """
    Plain-text preview of an HTML body.

    Args:
        html: HTML content
        max_length: Maximum preview length in characters
        placeholder: Returned when the body has no visible text

    Returns:
        Single-line text without markup
    """
    if not html:
        return placeholder

    text = _TAG_PATTERN.sub("", sanitize_html(html))
    text = html_module.unescape(text)
    text = _WHITESPACE_PATTERN.sub(" ", text).strip()

    return text[:max_length] or placeholder


def style_directives(item: TimelineItem) -> dict:
    """CSS classes for the item box and email direction badge."""
    return {
        "row_style": "",
        "box_class": INTERNAL_BOX_CLASS if item.is_internal else BOX_CLASS,
        "email_badge_class": (
            OUTGOING_BADGE_CLASS if item.is_outgoing else INCOMING_BADGE_CLASS
        ),
    }


def category_flags(category: Category) -> dict:
    return {
        "is_email_category": category == Category.EMAIL,
        "is_public_category": category == Category.PUBLIC,
        "is_internal_category": category == Category.INTERNAL,
        "is_system_category": category == Category.SYSTEM,
    }


def process_item(item: TimelineItem, config: Settings = default_settings) -> ProcessedItem:
    """
    Build the renderable record for one timeline item.

    Args:
        item: Raw timeline item
        config: Engine settings (budget, preview, UI defaults)

    Returns:
        ProcessedItem with the same id as the input
    """
    if item.category == Category.EMAIL:
        with item_log_context(item.id, item.category.value):
            result = parse_email_body(
                item.body,
                budget=config.email_char_budget,
                marker=config.truncation_marker,
                snap_distance=config.boundary_snap_distance,
            )
        body = result.new_content
        history_body = result.history_content
        has_history = result.has_history
    else:
        body = item.body or ""
        history_body = ""
        has_history = False

    data = item.model_dump()
    stale_keys = [key for key in item.model_extra or {} if key in _COMPUTED_KEYS]
    for key in stale_keys:
        del data[key]
    if stale_keys:
        logger.debug("timeline_item_stale_fields_dropped", item_id=item.id, keys=stale_keys)

    data.update(
        body=body,
        history_body=history_body,
        has_history=has_history,
        preview_text=build_preview_text(
            body, config.preview_max_length, config.preview_placeholder
        ),
        history_expanded=config.history_expanded_default,
        is_expanded=config.item_expanded_default,
        **category_flags(item.category),
        **style_directives(item),
    )
    return ProcessedItem(**data)


def process_items(
    items: Iterable[TimelineItem], config: Settings = default_settings
) -> List[ProcessedItem]:
    """
    Process a fetch batch in order.

    Each item is handled independently; the output keeps the input order.
    """
    processed = [process_item(item, config) for item in items]

    logger.info(
        "timeline_items_processed",
        items_count=len(processed),
        emails_count=sum(1 for p in processed if p.is_email_category),
        with_history_count=sum(1 for p in processed if p.has_history),
    )

    return processed
