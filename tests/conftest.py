"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Test settings
- Raw timeline records and items
- Fixed timestamps
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

import pytest

from case_timeline.config import Settings
from case_timeline.models.timeline import TimelineItem
from .fixtures.email_bodies import LONG_PLAIN_BODY, SIMPLE_REPLY


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        log_level="INFO",
        log_json=False,  # Easier to read in tests
        email_char_budget=400,
        page_size=3,
    )


@pytest.fixture
def fixed_timestamp() -> datetime:
    """
    Provide fixed timestamp for deterministic testing.

    Returns:
        Fixed timezone-aware datetime
    """
    return datetime(2026, 2, 12, 10, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def raw_records(fixed_timestamp) -> List[Dict[str, Any]]:
    """
    Raw records as returned by the data service (camelCase keys).

    Returns:
        Four records, one per category, one minute apart
    """
    return [
        {
            "id": "a01",
            "category": "Email",
            "body": SIMPLE_REPLY,
            "createdDate": fixed_timestamp.isoformat(),
            "isInternal": False,
            "isOutgoing": False,
            "title": "Re: printer",
        },
        {
            "id": "a02",
            "category": "Public",
            "body": "<p>Customer <b>comment</b></p>",
            "createdDate": (fixed_timestamp + timedelta(minutes=1)).isoformat(),
            "isInternal": False,
            "isOutgoing": False,
        },
        {
            "id": "a03",
            "category": "Internal",
            "body": "<p>Escalate to tier 2</p>",
            "createdDate": (fixed_timestamp + timedelta(minutes=2)).isoformat(),
            "isInternal": True,
            "isOutgoing": False,
        },
        {
            "id": "a04",
            "category": "System",
            "body": "",
            "createdDate": (fixed_timestamp + timedelta(minutes=3)).isoformat(),
            "isInternal": False,
            "isOutgoing": False,
        },
    ]


@pytest.fixture
def timeline_items(raw_records) -> List[TimelineItem]:
    """Validated TimelineItem models for raw_records."""
    return [TimelineItem.model_validate(record) for record in raw_records]


@pytest.fixture
def long_email_item(fixed_timestamp) -> TimelineItem:
    """Outgoing email with 5000 characters and no reply header."""
    return TimelineItem(
        id="e99",
        category="Email",
        body=LONG_PLAIN_BODY,
        created_date=fixed_timestamp,
        is_outgoing=True,
    )


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
