"""Asyncio main loop that exports the menu service on the session bus."""
from __future__ import annotations

import asyncio
import signal

from sdbus import request_default_bus_name_async, sd_bus_open_user, set_default_bus

from .application.bootstrap import AppServices, initialize_app_services
from .config import AppConfig


def _install_signal_handlers(loop: asyncio.AbstractEventLoop, stop: asyncio.Event, logger) -> None:
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, stop.set)
        except (NotImplementedError, RuntimeError):
            logger.debug("Signal handler for %s not supported here", signum)


def _shutdown(services: AppServices, logger) -> None:
    services.sessions.shutdown()
    if services.tk_root is not None:
        try:
            services.tk_root.destroy()
        except Exception:
            logger.exception("Failed to destroy Tk root")


async def serve(config: AppConfig, logger, *, stop: asyncio.Event | None = None) -> None:
    loop = asyncio.get_running_loop()
    stop = stop or asyncio.Event()
    _install_signal_handlers(loop, stop, logger)

    set_default_bus(sd_bus_open_user())
    services = initialize_app_services(config=config, logger=logger, schedule=loop.call_soon)
    await request_default_bus_name_async(config.bus_name)
    services.interface.export_to_dbus(config.object_path)
    logger.info("Serving %s at %s", config.bus_name, config.object_path)

    pump = None
    run_event_pump = getattr(services.presenter, "run_event_pump", None)
    if callable(run_event_pump):
        pump = asyncio.create_task(run_event_pump(config.ui_poll_ms, stop))
    try:
        await stop.wait()
    finally:
        logger.info("Stopping menu server")
        stop.set()
        if pump is not None:
            await asyncio.gather(pump, return_exceptions=True)
        _shutdown(services, logger)
