"""Application layer orchestration."""

from .composer import ComposedMenu, MenuComposer
from .endpoint import MenuEndpoint
from .ports import ContentSource, MenuEntry, MenuPresenter, SessionNotifier
from .session import ActiveSession, OutcomeTicket, SessionManager, SessionState

__all__ = [
    "ActiveSession",
    "ComposedMenu",
    "ContentSource",
    "MenuComposer",
    "MenuEndpoint",
    "MenuEntry",
    "MenuPresenter",
    "OutcomeTicket",
    "SessionManager",
    "SessionNotifier",
    "SessionState",
]
