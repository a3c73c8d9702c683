"""Application-level ports for presentation, notification and content."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence

from ..domain.menu import MenuNode


class MenuPresenter(Protocol):
    """Shows a menu tree and reports exactly one terminal choice.

    ``display`` must return without calling either callback. Later it calls
    ``on_select`` with the item identifier or ``on_cancel``, once. Failures
    after ``display`` returned are reported as ``on_cancel``.
    """

    def display(
        self,
        menu: MenuNode,
        on_select: Callable[[str], None],
        on_cancel: Callable[[], None],
    ) -> None: ...

    def dismiss(self) -> None: ...


class SessionNotifier(Protocol):
    """Delivers session outcomes to remote clients."""

    def notify_selected(self, session_id: int, item: str) -> None: ...

    def notify_cancelled(self, session_id: int) -> None: ...


@dataclass(frozen=True)
class MenuEntry:
    """One enumerated item: a label, an icon token and an opaque activation handle."""

    name: str
    icon: str
    handle: Any = None
    children: tuple["MenuEntry", ...] = ()


class ContentSource(Protocol):
    """Enumerates desktop content for one category."""

    def entries(self, category: str) -> Sequence[MenuEntry]: ...
