# Timeline item processing and view state

from .item_processor import build_preview_text, process_item, process_items
from .loader import TimelineDataSource, TimelineLoader, validate_items
from .view import (
    TimelineViewState,
    collapse_all,
    filtered_view,
    has_data,
    toggle_expanded,
    toggle_history,
)

__all__ = [
    "build_preview_text",
    "process_item",
    "process_items",
    "TimelineDataSource",
    "TimelineLoader",
    "validate_items",
    "TimelineViewState",
    "filtered_view",
    "has_data",
    "toggle_history",
    "toggle_expanded",
    "collapse_all",
]
