"""
Parse result model for the email thread reduction engine.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of splitting an email body into new content and quoted history.

    Attributes:
        new_content: HTML shown by default
        history_content: HTML of the quoted history, hidden by default
        has_history: Whether there is history to reveal
    """

    new_content: str = ""
    history_content: str = ""
    has_history: bool = False

    @classmethod
    def empty(cls) -> "ParseResult":
        return cls("", "", False)
