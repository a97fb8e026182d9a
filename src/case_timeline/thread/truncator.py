"""
Character-budgeted structural HTML split.

When an email has no usable reply boundary, the body is cut at a plain-text
character count instead. The cut is made on the parsed tree, not on the string:
every element that straddles the cut is cloned, so both the kept part ("head")
and the deferred part ("tail") are well-formed and keep their ancestors'
formatting.
"""

from dataclasses import dataclass
from copy import copy

import structlog
from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag

from ..models.parse_result import ParseResult
from .html_tree import is_text_node, parse_fragment, tree_text

logger = structlog.get_logger(__name__)

DEFAULT_TRUNCATION_MARKER = "..."
HISTORY_SEPARATOR = "<br/><hr/>"


@dataclass
class _SplitState:
    """Running character count shared across the recursive walk."""

    factory: BeautifulSoup
    budget: int
    count: int = 0
    reached: bool = False


@dataclass
class SplitTrees:
    """Head and tail trees produced by split_tree()."""

    head: BeautifulSoup
    tail: BeautifulSoup


def _append_text(parent: Tag, node: PageElement, text: str) -> None:
    if text:
        # Keep the string subclass (Script, Stylesheet...) of the original node
        parent.append(node.__class__(text))


def _split_children(node: Tag, head: Tag, tail: Tag, state: _SplitState) -> None:
    for child in list(node.children):
        if is_text_node(child):
            text = str(child)
            if state.reached:
                _append_text(tail, child, text)
                continue

            remaining = state.budget - state.count
            if len(text) <= remaining:
                _append_text(head, child, text)
                state.count += len(text)
            else:
                _append_text(head, child, text[:remaining])
                _append_text(tail, child, text[remaining:])
                state.count = state.budget
                state.reached = True
            continue

        if not isinstance(child, Tag) or not child.contents:
            # Comments, <br>, <img>, empty containers: no text to split
            (tail if state.reached else head).append(copy(child))
            continue

        head_clone = _clone_element(state.factory, child)
        tail_clone = _clone_element(state.factory, child)
        _split_children(child, head_clone, tail_clone, state)

        if head_clone.contents:
            head.append(head_clone)
        if tail_clone.contents:
            tail.append(tail_clone)


def _clone_element(factory: BeautifulSoup, element: Tag) -> Tag:
    """Shallow clone: same name and attributes, no children."""
    attrs = {
        key: list(value) if isinstance(value, list) else value
        for key, value in element.attrs.items()
    }
    return factory.new_tag(element.name, attrs=attrs)


def split_tree(soup: BeautifulSoup, budget: int) -> SplitTrees:
    """
    Split a parsed document at ``budget`` plain-text characters.

    Walks the tree depth-first in document order. Text fills the head until the
    budget is used up; the text node that crosses the budget is cut in two, and
    everything after it goes to the tail. An element is attached to a side only
    if that side received some of its content.

    Args:
        soup: Parsed document
        budget: Number of characters to keep in the head

    Returns:
        SplitTrees with the head and tail documents
    """
    head = BeautifulSoup("", "html.parser")
    tail = BeautifulSoup("", "html.parser")
    _split_children(soup, head, tail, _SplitState(factory=head, budget=budget))
    return SplitTrees(head=head, tail=tail)


def join_history(tail_html: str, history_html: str) -> str:
    """Prepend a truncated tail to an existing history fragment."""
    if tail_html and history_html:
        return f"{tail_html}{HISTORY_SEPARATOR}{history_html}"
    return tail_html or history_html


def truncate_html(
    html: str,
    history_html: str = "",
    budget: int = 0,
    marker: str = DEFAULT_TRUNCATION_MARKER,
) -> ParseResult:
    """
    Keep ``budget`` characters of text as new content and defer the rest.

    Args:
        html: Sanitized HTML to reduce
        history_html: History already split off downstream (may be empty)
        budget: Plain-text character budget (0 = unlimited)
        marker: Text appended to truncated new content

    Returns:
        ParseResult; has_history is always True when a cut was made
    """
    if not html or budget == 0:
        return ParseResult(html or "", history_html, bool(history_html))

    soup = parse_fragment(html)
    if soup is None:
        return ParseResult(html, history_html, bool(history_html))

    text_length = len(tree_text(soup))
    if text_length <= budget:
        return ParseResult(html, history_html, bool(history_html))

    trees = split_tree(soup, budget)
    head_html = trees.head.decode() + marker
    tail_html = trees.tail.decode()

    logger.debug(
        "structural_truncation",
        budget=budget,
        text_length=text_length,
        head_length=len(head_html),
        tail_length=len(tail_html),
        had_history=bool(history_html),
    )

    return ParseResult(
        new_content=head_html,
        history_content=join_history(tail_html, history_html),
        has_history=True,
    )
