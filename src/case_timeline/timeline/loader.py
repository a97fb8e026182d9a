"""
Timeline page loading.

The data service that stores timeline records is an external collaborator; this
module defines the contract it must satisfy and wraps it with validation and
item processing.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence

import structlog
from pydantic import ValidationError

from ..config import Settings, settings as default_settings
from ..models.timeline import TimelineItem, TimelinePage
from .item_processor import process_items

logger = structlog.get_logger(__name__)


class TimelineDataSource(ABC):
    """
    Abstract data service for timeline records.

    Implementations fetch records newest-first, older than a reference
    timestamp, and answer whether anything was added since a given time.
    """

    @abstractmethod
    async def fetch_page(
        self, case_id: str, before: Optional[datetime], limit: int
    ) -> Sequence[Mapping[str, Any]]:
        """
        Fetch up to ``limit`` records created before ``before``.

        Args:
            case_id: Case whose timeline is loaded
            before: Reference timestamp (None for the most recent page)
            limit: Page size

        Returns:
            Raw records (camelCase or snake_case keys)
        """

    @abstractmethod
    async def has_new_items(self, case_id: str, since: datetime) -> bool:
        """Whether records were created after ``since``."""


def validate_items(records: Sequence[Mapping[str, Any]]) -> List[TimelineItem]:
    """
    Validate raw records into TimelineItem models.

    Raises:
        ValueError: If a record is missing its id or is otherwise invalid
    """
    items = []
    for position, record in enumerate(records):
        try:
            items.append(TimelineItem.model_validate(record))
        except ValidationError as e:
            raise ValueError(f"Invalid timeline record at position {position}: {e}") from e
    return items


class TimelineLoader:
    """Fetch, validate and process timeline pages."""

    def __init__(self, source: TimelineDataSource, config: Settings = default_settings):
        self.source = source
        self.config = config

    async def load_page(
        self, case_id: str, before: Optional[datetime] = None
    ) -> TimelinePage:
        """
        Load one page of processed items.

        Args:
            case_id: Case whose timeline is loaded
            before: Reference timestamp from the previous page (None for first)

        Returns:
            TimelinePage; has_more is True iff a full batch was returned

        Raises:
            ValueError: If case_id is empty or a record is invalid
        """
        if not case_id:
            raise ValueError("case_id is required")

        limit = self.config.page_size
        records = await self.source.fetch_page(case_id, before, limit)
        items = validate_items(records)
        processed = process_items(items, self.config)

        page = TimelinePage(
            items=processed,
            has_more=len(records) == limit,
            next_before=min((item.created_date for item in items), default=None),
        )

        logger.info(
            "timeline_page_loaded",
            case_id=case_id,
            before=before.isoformat() if before else None,
            items_count=len(processed),
            has_more=page.has_more,
        )

        return page

    async def check_for_updates(self, case_id: str, since: datetime) -> bool:
        """Poll the data service for records newer than ``since``."""
        if not case_id:
            raise ValueError("case_id is required")

        has_new = await self.source.has_new_items(case_id, since)
        logger.debug("timeline_poll", case_id=case_id, has_new=has_new)
        return has_new
