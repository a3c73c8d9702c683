"""Error taxonomy for menu sessions."""

from __future__ import annotations


class PieMenuError(Exception):
    """Base class for all pie menu failures."""


class MenuParseError(PieMenuError):
    """The serialized menu description is malformed."""


class MenuRejectedError(PieMenuError):
    """The description is well formed but cannot be shown."""


class SessionBusyError(PieMenuError):
    """A menu is already being shown."""

    def __init__(self, active_id: int) -> None:
        super().__init__(f"Session {active_id} is still active.")
        self.active_id = active_id


class PresentationError(PieMenuError):
    """The display layer could not show a menu."""
