"""Client-side helpers for requesting a menu over D-Bus."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from ..constants import DEFAULT_BUS_NAME, DEFAULT_OBJECT_PATH, SHOW_MENU_FAILED
from .dbus_service import PieMenuInterface

STATUS_SELECTED = "selected"
STATUS_CANCELLED = "cancelled"
STATUS_REJECTED = "rejected"
STATUS_TIMEOUT = "timeout"


@dataclass(frozen=True)
class MenuEvent:
    kind: str
    session_id: int
    item: str = ""


@dataclass(frozen=True)
class MenuRequestResult:
    status: str
    session_id: int
    item: Optional[str] = None

    def to_dict(self) -> dict:
        return {"status": self.status, "id": self.session_id, "item": self.item}


async def wait_for_outcome(
    events: "asyncio.Queue[MenuEvent]",
    session_id: int,
    timeout: float | None = None,
) -> MenuRequestResult:
    """Consume events until one carries ``session_id``; others are dropped."""

    async def _match() -> MenuRequestResult:
        while True:
            event = await events.get()
            if event.session_id != session_id:
                continue
            if event.kind == STATUS_SELECTED:
                return MenuRequestResult(STATUS_SELECTED, session_id, event.item)
            return MenuRequestResult(STATUS_CANCELLED, session_id)

    try:
        return await asyncio.wait_for(_match(), timeout)
    except asyncio.TimeoutError:
        return MenuRequestResult(STATUS_TIMEOUT, session_id)


async def _forward(stream: AsyncIterator, kind: str, queue: "asyncio.Queue[MenuEvent]") -> None:
    async for payload in stream:
        if kind == STATUS_SELECTED:
            session_id, item = payload
            await queue.put(MenuEvent(kind, int(session_id), str(item)))
        else:
            await queue.put(MenuEvent(kind, int(payload)))


async def request_menu(
    description: str,
    *,
    bus_name: str = DEFAULT_BUS_NAME,
    object_path: str = DEFAULT_OBJECT_PATH,
    timeout: float | None = None,
) -> MenuRequestResult:
    """Show a menu through a running server and wait for its outcome."""
    proxy = PieMenuInterface.new_proxy(bus_name, object_path)
    queue: asyncio.Queue[MenuEvent] = asyncio.Queue()
    watchers = [
        asyncio.create_task(_forward(proxy.on_select.catch(), STATUS_SELECTED, queue)),
        asyncio.create_task(_forward(proxy.on_cancel.catch(), STATUS_CANCELLED, queue)),
    ]
    try:
        # Let the signal subscriptions start before the call can be answered.
        await asyncio.sleep(0)
        session_id = await proxy.show_menu(description)
        if session_id == SHOW_MENU_FAILED or session_id <= 0:
            return MenuRequestResult(STATUS_REJECTED, SHOW_MENU_FAILED)
        return await wait_for_outcome(queue, session_id, timeout)
    finally:
        for watcher in watchers:
            watcher.cancel()
        await asyncio.gather(*watchers, return_exceptions=True)
