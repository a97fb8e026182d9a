"""
Timeline item models.

This module defines the records exchanged with the data-fetch collaborator
(TimelineItem) and the rendering collaborator (ProcessedItem, TimelinePage).
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..version import get_engine_versions


class Category(str, Enum):
    """Timeline item categories."""

    EMAIL = "Email"
    PUBLIC = "Public"
    INTERNAL = "Internal"
    SYSTEM = "System"


class SortDirection(str, Enum):
    """Timeline sort order."""

    NEWEST_FIRST = "desc"
    OLDEST_FIRST = "asc"


class TimelineItem(BaseModel):
    """
    A raw timeline entry as returned by the data service.

    Accepts both snake_case and the camelCase keys used by the data service
    (``createdDate``, ``isInternal``...). Unknown keys are kept as extra fields.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(description="Stable record identifier")
    category: Category = Field(description="Email, Public, Internal or System")
    body: Optional[str] = Field(None, description="Raw HTML body")
    created_date: datetime = Field(description="Creation timestamp")
    is_internal: bool = Field(False, description="Visible to internal users only")
    is_outgoing: bool = Field(False, description="Sent from the case team")

    # Display-only pass-through fields
    title: Optional[str] = Field(None, description="Item title")
    author_name: Optional[str] = Field(None, description="Author display name")
    record_id: Optional[str] = Field(None, description="Related record to navigate to")

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Timeline item id must not be empty")
        return value


class ProcessedItem(TimelineItem):
    """
    Renderable timeline entry.

    ``body`` holds the processed new content; the raw body is not kept.
    Records are immutable: UI toggles produce a replacement via ``model_copy``.
    """

    history_body: str = Field("", description="Quoted history HTML")
    has_history: bool = Field(False, description="Whether history_body can be shown")
    preview_text: str = Field("", description="Plain-text preview")

    # UI state
    history_expanded: bool = False
    is_expanded: bool = True

    # Category flags
    is_email_category: bool = False
    is_public_category: bool = False
    is_internal_category: bool = False
    is_system_category: bool = False

    # Style directives
    row_style: str = ""
    box_class: str = ""
    email_badge_class: str = ""


class TimelinePage(BaseModel):
    """One page of processed items plus the pagination cursor."""

    items: List[ProcessedItem] = Field(default_factory=list)
    has_more: bool = Field(False, description="True iff the page was a full batch")
    next_before: Optional[datetime] = Field(
        None, description="Reference timestamp for fetching the next (older) page"
    )
    engine_versions: Dict[str, str] = Field(default_factory=get_engine_versions)
