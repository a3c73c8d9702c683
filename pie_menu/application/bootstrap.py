"""Application bootstrap assembly for bus, session and presentation services."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ..config import AppConfig
from ..domain.errors import PresentationError
from ..integrations.dbus_service import DbusSessionNotifier, PieMenuInterface
from ..ui.headless import HeadlessMenuPresenter
from .endpoint import MenuEndpoint
from .ports import MenuPresenter
from .session import SessionManager

Scheduler = Callable[[Callable[[], None]], Any]


@dataclass(frozen=True)
class AppServices:
    interface: PieMenuInterface
    presenter: MenuPresenter
    sessions: SessionManager
    endpoint: MenuEndpoint
    tk_root: Any = None


def build_presenter(config: AppConfig, logger, schedule: Scheduler) -> tuple[MenuPresenter, Any]:
    """Create the Tk presenter, or the headless one when no display is usable."""
    if config.headless:
        logger.info("Headless mode enabled; menus are cancelled without being shown.")
        return HeadlessMenuPresenter(schedule, logger), None
    try:
        from ..ui.tk_presenter import TkMenuPresenter, create_tk_root

        root = create_tk_root()
    except (ImportError, PresentationError) as exc:
        logger.warning("Menu display unavailable (%s); running headless.", exc)
        return HeadlessMenuPresenter(schedule, logger), None
    return TkMenuPresenter(root, logger), root


def initialize_app_services(
    *,
    config: AppConfig,
    logger,
    schedule: Scheduler,
) -> AppServices:
    """Construct all runtime services and return a typed service bundle."""
    interface = PieMenuInterface()
    notifier = DbusSessionNotifier(interface, logger)
    presenter, tk_root = build_presenter(config, logger, schedule)
    sessions = SessionManager(
        presenter,
        notifier,
        logger,
        allow_empty_menus=config.allow_empty_menus,
        defer=schedule,
    )
    endpoint = MenuEndpoint(
        sessions,
        logger,
        max_depth=config.max_depth,
        max_items=config.max_items,
        debug_tree=config.debug_tree,
    )
    interface.bind_endpoint(endpoint)
    logger.info(
        "Menu services ready (presenter=%s allow_empty=%s max_depth=%s max_items=%s)",
        type(presenter).__name__,
        config.allow_empty_menus,
        config.max_depth,
        config.max_items,
    )
    return AppServices(
        interface=interface,
        presenter=presenter,
        sessions=sessions,
        endpoint=endpoint,
        tk_root=tk_root,
    )
