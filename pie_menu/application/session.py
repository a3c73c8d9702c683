"""Single-flight menu session state machine."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from ..constants import NO_SESSION
from ..domain.errors import MenuRejectedError, SessionBusyError
from ..domain.menu import MenuNode
from ..domain.outcome import MenuCancelled, MenuSelected, Outcome
from .ports import MenuPresenter, SessionNotifier


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True)
class ActiveSession:
    id: int
    menu: MenuNode


def _call_now(callback: Callable[[], None]) -> None:
    callback()


class OutcomeTicket:
    """One-shot outcome channel handed to the presenter for one session."""

    def __init__(self, session_id: int, resolve: Callable[[int, Outcome], bool]) -> None:
        self.session_id = session_id
        self._resolve = resolve
        self._lock = threading.Lock()
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    def select(self, item: str) -> None:
        self._settle(MenuSelected(item=str(item)))

    def cancel(self) -> None:
        self._settle(MenuCancelled())

    def _settle(self, outcome: Outcome) -> None:
        with self._lock:
            if self._resolved:
                return
            self._resolved = True
        self._resolve(self.session_id, outcome)


class SessionManager:
    """Owns the single active session and the correlation id counter.

    ``begin`` moves Idle -> Active and hands the menu to the presenter;
    ``complete`` moves Active -> Idle and then notifies the captured id.
    The (state, id, menu) triple is only touched under ``_lock`` and the
    notifier is always called after the lock is released, so a re-entrant
    ``begin`` from inside a notification sees the session as finished.
    """

    def __init__(
        self,
        presenter: MenuPresenter,
        notifier: SessionNotifier,
        logger,
        *,
        allow_empty_menus: bool = False,
        defer: Callable[[Callable[[], None]], object] | None = None,
    ) -> None:
        self.presenter = presenter
        self.notifier = notifier
        self.logger = logger
        self.allow_empty_menus = bool(allow_empty_menus)
        self._defer = defer or _call_now
        self._lock = threading.Lock()
        self._last_id = NO_SESSION
        self._active: ActiveSession | None = None

    @property
    def state(self) -> SessionState:
        with self._lock:
            return SessionState.ACTIVE if self._active is not None else SessionState.IDLE

    @property
    def current_id(self) -> int:
        with self._lock:
            return self._active.id if self._active is not None else NO_SESSION

    @property
    def current_menu(self) -> MenuNode | None:
        with self._lock:
            return self._active.menu if self._active is not None else None

    @property
    def last_id(self) -> int:
        return self._last_id

    def begin(self, menu: MenuNode) -> int:
        """Start a session for ``menu`` and return its id without waiting for the user."""
        with self._lock:
            if self._active is not None:
                raise SessionBusyError(self._active.id)
            if menu.is_empty and not self.allow_empty_menus:
                raise MenuRejectedError(f"Menu {menu.name!r} has no items.")
            self._last_id += 1
            session = ActiveSession(id=self._last_id, menu=menu)
            self._active = session

        self.logger.info(
            "Session %s started: %r with %s items",
            session.id,
            menu.name,
            menu.count() - 1,
        )
        ticket = OutcomeTicket(session.id, self._complete_session)
        try:
            self.presenter.display(menu, ticket.select, ticket.cancel)
        except Exception:
            self.logger.exception("Failed to show menu for session %s", session.id)
            self._defer(ticket.cancel)
        return session.id

    def complete(self, outcome: Outcome) -> bool:
        """Finish whatever session is active. Returns False when already idle."""
        with self._lock:
            session = self._active
            self._active = None
        if session is None:
            self.logger.debug("Ignoring %s: no active session", type(outcome).__name__)
            return False
        self._notify(session.id, outcome)
        return True

    def shutdown(self) -> None:
        """Dismiss the presenter and report any open session as cancelled."""
        if self.current_id == NO_SESSION:
            return
        try:
            self.presenter.dismiss()
        except Exception:
            self.logger.exception("Failed to dismiss menu during shutdown")
        self.complete(MenuCancelled())

    def _complete_session(self, session_id: int, outcome: Outcome) -> bool:
        with self._lock:
            session = self._active
            if session is None or session.id != session_id:
                session = None
            else:
                self._active = None
        if session is None:
            self.logger.debug(
                "Ignoring %s for session %s: not the active session",
                type(outcome).__name__,
                session_id,
            )
            return False
        self._notify(session.id, outcome)
        return True

    def _notify(self, session_id: int, outcome: Outcome) -> None:
        try:
            if isinstance(outcome, MenuSelected):
                self.logger.info("Session %s selected %r", session_id, outcome.item)
                self.notifier.notify_selected(session_id, outcome.item)
            else:
                self.logger.info("Session %s cancelled", session_id)
                self.notifier.notify_cancelled(session_id)
        except Exception:
            self.logger.exception("Failed to report outcome of session %s", session_id)
