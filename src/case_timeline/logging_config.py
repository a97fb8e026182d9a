"""
Structured logging configuration using structlog.

Engine modules log through ``structlog.get_logger(__name__)``. While an item is
processed its id and category are bound as context variables, so every event
emitted by the thread reduction steps can be traced back to the item.

The library never configures logging on import. The embedding application
calls ``setup_logging()`` once at startup, before the first
``TimelineLoader.load_page``; until then structlog's defaults apply.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import structlog

from .config import settings


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure structlog processors and rendering.

    Args:
        level: Minimum log level name (defaults to settings.log_level)
        json_output: Render JSON lines instead of console output
            (defaults to settings.log_json)
    """
    level = level or settings.log_level
    json_output = settings.log_json if json_output is None else json_output

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if json_output
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def item_log_context(item_id: str, category: str) -> Iterator[None]:
    """Bind the timeline item being processed to all log events in the block."""
    with structlog.contextvars.bound_contextvars(item_id=item_id, category=category):
        yield
