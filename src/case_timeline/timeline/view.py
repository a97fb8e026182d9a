"""
Timeline view state.

Category filters, sort order and per-item toggles. Every operation returns new
records; nothing is mutated in place, so the filtered view can be recomputed
from scratch whenever the state changes.
"""

from typing import Callable, List, Sequence

from pydantic import BaseModel, ConfigDict

from ..models.timeline import Category, ProcessedItem, SortDirection

_CATEGORY_FLAGS = {
    Category.EMAIL: "show_email",
    Category.PUBLIC: "show_public",
    Category.INTERNAL: "show_internal",
    Category.SYSTEM: "show_system",
}


class TimelineViewState(BaseModel):
    """Which categories are shown and in what order."""

    model_config = ConfigDict(frozen=True)

    show_email: bool = True
    show_public: bool = True
    show_internal: bool = True
    show_system: bool = False
    sort_direction: SortDirection = SortDirection.NEWEST_FIRST

    def is_category_visible(self, category: Category) -> bool:
        return getattr(self, _CATEGORY_FLAGS[Category(category)])

    def with_category(self, category: Category, visible: bool) -> "TimelineViewState":
        """Return a copy with one category shown or hidden."""
        return self.model_copy(update={_CATEGORY_FLAGS[Category(category)]: visible})

    def toggle_sort(self) -> "TimelineViewState":
        direction = (
            SortDirection.OLDEST_FIRST
            if self.sort_direction == SortDirection.NEWEST_FIRST
            else SortDirection.NEWEST_FIRST
        )
        return self.model_copy(update={"sort_direction": direction})

    @property
    def sort_label(self) -> str:
        if self.sort_direction == SortDirection.NEWEST_FIRST:
            return "Newest First"
        return "Oldest First"

    @property
    def sort_icon(self) -> str:
        if self.sort_direction == SortDirection.NEWEST_FIRST:
            return "utility:arrowdown"
        return "utility:arrowup"


def filtered_view(
    items: Sequence[ProcessedItem], state: TimelineViewState
) -> List[ProcessedItem]:
    """
    Visible items in display order.

    Items of hidden categories are dropped, the rest are sorted by creation
    date. Items with equal timestamps keep their relative order.

    Args:
        items: Processed items
        state: Current view state

    Returns:
        New list; the input sequence is not modified
    """
    visible = [item for item in items if state.is_category_visible(item.category)]
    return sorted(
        visible,
        key=lambda item: item.created_date,
        reverse=state.sort_direction == SortDirection.NEWEST_FIRST,
    )


def has_data(items: Sequence[ProcessedItem], state: TimelineViewState) -> bool:
    return len(filtered_view(items, state)) > 0


def _replace_where(
    items: Sequence[ProcessedItem],
    item_id: str,
    update: Callable[[ProcessedItem], dict],
) -> List[ProcessedItem]:
    return [
        item.model_copy(update=update(item)) if item.id == item_id else item
        for item in items
    ]


def toggle_history(items: Sequence[ProcessedItem], item_id: str) -> List[ProcessedItem]:
    """Show or hide the quoted history of one item."""
    return _replace_where(
        items, item_id, lambda item: {"history_expanded": not item.history_expanded}
    )


def toggle_expanded(items: Sequence[ProcessedItem], item_id: str) -> List[ProcessedItem]:
    """Expand or collapse the body of one item."""
    return _replace_where(
        items, item_id, lambda item: {"is_expanded": not item.is_expanded}
    )


def collapse_all(items: Sequence[ProcessedItem]) -> List[ProcessedItem]:
    """Hide the history of every item."""
    return [item.model_copy(update={"history_expanded": False}) for item in items]
