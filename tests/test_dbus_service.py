import asyncio
from types import SimpleNamespace

import pytest

pytest.importorskip("sdbus")

from pie_menu.constants import DBUS_INTERFACE_NAME
from pie_menu.integrations.dbus_service import DbusSessionNotifier, PieMenuInterface


class _Logger:
    def __init__(self):
        self.debugs = []

    def debug(self, message, *args):
        self.debugs.append(message % args if args else message)


def _interface(emitted):
    return SimpleNamespace(
        on_select=SimpleNamespace(emit=lambda args: emitted.append(("OnSelect", args))),
        on_cancel=SimpleNamespace(emit=lambda args: emitted.append(("OnCancel", args))),
    )


def test_notifier_emits_signal_payloads():
    emitted = []
    logger = _Logger()
    notifier = DbusSessionNotifier(_interface(emitted), logger)

    notifier.notify_selected(3, "Apps/Mail")
    notifier.notify_cancelled(4)

    assert emitted == [("OnSelect", (3, "Apps/Mail")), ("OnCancel", 4)]
    assert logger.debugs == ["Emitting OnSelect(3, 'Apps/Mail')", "Emitting OnCancel(4)"]


class _Endpoint:
    def __init__(self, result):
        self.result = result
        self.requests = []

    def show_menu(self, description):
        self.requests.append(description)
        return self.result


def test_wire_names_and_signatures_are_pinned():
    members = vars(PieMenuInterface)
    show_menu = members["show_menu"]
    on_select = members["on_select"]
    on_cancel = members["on_cancel"]

    assert DBUS_INTERFACE_NAME == "org.gnome.Shell.Extensions.GnomePie2"
    assert (show_menu.method_name, show_menu.input_signature, show_menu.result_signature) == (
        "ShowMenu",
        "s",
        "i",
    )
    assert (on_select.signal_name, on_select.signal_signature) == ("OnSelect", "is")
    assert (on_cancel.signal_name, on_cancel.signal_signature) == ("OnCancel", "i")


def test_show_menu_fails_until_an_endpoint_is_bound():
    interface = PieMenuInterface()
    endpoint = _Endpoint(7)

    assert asyncio.run(interface.show_menu('{"name": "x", "icon": "y"}')) == -1

    interface.bind_endpoint(endpoint)

    assert asyncio.run(interface.show_menu("menu")) == 7
    assert endpoint.requests == ["menu"]
