# Data models for the case timeline

from .parse_result import ParseResult
from .timeline import (
    Category,
    ProcessedItem,
    SortDirection,
    TimelineItem,
    TimelinePage,
)

__all__ = [
    "ParseResult",
    "Category",
    "SortDirection",
    "TimelineItem",
    "ProcessedItem",
    "TimelinePage",
]
