"""D-Bus surface of the pie menu server."""
from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from sdbus import (
    DbusInterfaceCommonAsync,
    dbus_method_async,
    dbus_signal_async,
)

from ..constants import DBUS_INTERFACE_NAME, SHOW_MENU_FAILED

if TYPE_CHECKING:
    from ..application.endpoint import MenuEndpoint


class PieMenuInterface(DbusInterfaceCommonAsync, interface_name=DBUS_INTERFACE_NAME):
    """ShowMenu method plus the OnSelect/OnCancel signals.

    Method and signal names are the wire contract and are pinned explicitly.
    """

    def __init__(self, endpoint: "MenuEndpoint | None" = None) -> None:
        super().__init__()
        self._endpoint = endpoint

    def bind_endpoint(self, endpoint: "MenuEndpoint") -> None:
        self._endpoint = endpoint

    @dbus_method_async(
        input_signature="s",
        result_signature="i",
        input_args_names=("description",),
        result_args_names=("id",),
        method_name="ShowMenu",
    )
    async def show_menu(self, description: str) -> int:
        if self._endpoint is None:
            return SHOW_MENU_FAILED
        return self._endpoint.show_menu(description)

    @dbus_signal_async(
        "is",
        signal_args_names=("id", "item"),
        signal_name="OnSelect",
    )
    def on_select(self) -> Tuple[int, str]:
        raise NotImplementedError

    @dbus_signal_async(
        "i",
        signal_args_names=("id",),
        signal_name="OnCancel",
    )
    def on_cancel(self) -> int:
        raise NotImplementedError


class DbusSessionNotifier:
    """SessionNotifier that emits the interface signals."""

    def __init__(self, interface: PieMenuInterface, logger) -> None:
        self.interface = interface
        self.logger = logger

    def notify_selected(self, session_id: int, item: str) -> None:
        self.logger.debug("Emitting OnSelect(%s, %r)", session_id, item)
        self.interface.on_select.emit((session_id, item))

    def notify_cancelled(self, session_id: int) -> None:
        self.logger.debug("Emitting OnCancel(%s)", session_id)
        self.interface.on_cancel.emit(session_id)
