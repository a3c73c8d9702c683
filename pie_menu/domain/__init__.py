"""Domain model for menu descriptions and session outcomes."""

from .errors import (
    MenuParseError,
    MenuRejectedError,
    PieMenuError,
    PresentationError,
    SessionBusyError,
)
from .menu import (
    MenuNode,
    format_menu_tree,
    item_identifier,
    sibling_segments,
    split_item_identifier,
)
from .outcome import MenuCancelled, MenuSelected, Outcome
from .parser import parse_menu_description

__all__ = [
    "MenuCancelled",
    "MenuNode",
    "MenuParseError",
    "MenuRejectedError",
    "MenuSelected",
    "Outcome",
    "PieMenuError",
    "PresentationError",
    "SessionBusyError",
    "format_menu_tree",
    "item_identifier",
    "parse_menu_description",
    "sibling_segments",
    "split_item_identifier",
]
