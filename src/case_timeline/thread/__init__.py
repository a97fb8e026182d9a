# Email thread reduction engine

from .boundary_detector import (
    NO_BOUNDARY,
    REPLY_BOUNDARY_PATTERNS,
    find_reply_boundary,
    is_natural_split,
    snap_to_tag_boundary,
)
from .email_parser import parse_email_body, split_thread
from .html_tree import parse_fragment, plain_text
from .linkifier import linkify
from .sanitizer import sanitize_html
from .truncator import HISTORY_SEPARATOR, split_tree, truncate_html

__all__ = [
    "parse_email_body",
    "split_thread",
    "sanitize_html",
    "find_reply_boundary",
    "is_natural_split",
    "snap_to_tag_boundary",
    "NO_BOUNDARY",
    "REPLY_BOUNDARY_PATTERNS",
    "truncate_html",
    "split_tree",
    "HISTORY_SEPARATOR",
    "linkify",
    "parse_fragment",
    "plain_text",
]
