"""Marshalling boundary between bus calls and the session state machine."""
from __future__ import annotations

from ..constants import DEFAULT_MAX_DEPTH, DEFAULT_MAX_ITEMS, SHOW_MENU_FAILED
from ..domain.errors import MenuParseError, MenuRejectedError, SessionBusyError
from ..domain.menu import format_menu_tree
from ..domain.parser import parse_menu_description
from .session import SessionManager


class MenuEndpoint:
    """Turn a raw ShowMenu call into a session id or the generic failure code."""

    def __init__(
        self,
        sessions: SessionManager,
        logger,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_items: int = DEFAULT_MAX_ITEMS,
        debug_tree: bool = False,
    ) -> None:
        self.sessions = sessions
        self.logger = logger
        self.max_depth = max_depth
        self.max_items = max_items
        self.debug_tree = bool(debug_tree)

    def show_menu(self, description: str) -> int:
        try:
            menu = parse_menu_description(
                description,
                max_depth=self.max_depth,
                max_items=self.max_items,
            )
        except MenuParseError as exc:
            self.logger.warning("Failed to parse menu: %s", exc)
            return SHOW_MENU_FAILED

        if self.debug_tree:
            self.logger.debug("Requested menu:\n%s", format_menu_tree(menu))

        try:
            return self.sessions.begin(menu)
        except SessionBusyError as exc:
            self.logger.info("Menu request refused: %s", exc)
        except MenuRejectedError as exc:
            self.logger.warning("Menu request rejected: %s", exc)
        except Exception:
            self.logger.exception("Unexpected failure while starting a menu session")
        return SHOW_MENU_FAILED
