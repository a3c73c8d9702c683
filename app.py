"""Desktop entrypoint for the pie menu server."""

from __future__ import annotations

import asyncio

from pie_menu.config import load_config
from pie_menu.logging_config import setup_logging
from pie_menu.server import serve
from pie_menu.utils import env_flag

CONFIG = load_config()
logger = setup_logging(CONFIG)
SKIP_APP_INIT = env_flag("PIE_MENU_SKIP_APP_INIT")

logger.info("Starting pie menu server")
logger.info("Log file: %s", CONFIG.log_file)
logger.debug(
    "Log config: LOG_LEVEL=%s FILE_LOG_LEVEL=%s LOG_DIR=%s PIE_MENU_BUS_NAME=%s "
    "PIE_MENU_OBJECT_PATH=%s PIE_MENU_MAX_DEPTH=%s PIE_MENU_MAX_ITEMS=%s "
    "PIE_MENU_ALLOW_EMPTY=%s PIE_MENU_UI_POLL_MS=%s PIE_MENU_HEADLESS=%s "
    "PIE_MENU_DEBUG_TREE=%s",
    CONFIG.log_level,
    CONFIG.file_log_level,
    CONFIG.log_dir,
    CONFIG.bus_name,
    CONFIG.object_path,
    CONFIG.max_depth,
    CONFIG.max_items,
    CONFIG.allow_empty_menus,
    CONFIG.ui_poll_ms,
    CONFIG.headless,
    CONFIG.debug_tree,
)


def launch() -> None:
    if SKIP_APP_INIT:
        logger.info("PIE_MENU_SKIP_APP_INIT enabled; launch skipped")
        return
    try:
        asyncio.run(serve(CONFIG, logger))
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    launch()
