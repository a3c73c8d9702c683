"""Presenter for sessions without a display server."""
from __future__ import annotations

from typing import Any, Callable

from ..domain.menu import MenuNode


class HeadlessMenuPresenter:
    """Resolves every displayed menu as cancelled on the next loop iteration."""

    def __init__(self, schedule: Callable[[Callable[[], None]], Any], logger) -> None:
        self.schedule = schedule
        self.logger = logger
        self._pending: Any = None

    def display(
        self,
        menu: MenuNode,
        on_select: Callable[[str], None],
        on_cancel: Callable[[], None],
    ) -> None:
        self.logger.info("No display available; menu %r will be cancelled", menu.name)
        self._pending = self.schedule(on_cancel)

    def dismiss(self) -> None:
        pending = self._pending
        self._pending = None
        cancel = getattr(pending, "cancel", None)
        if callable(cancel):
            cancel()
