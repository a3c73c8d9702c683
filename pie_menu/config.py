"""Configuration loading from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .constants import (
    DEFAULT_BUS_NAME,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_ITEMS,
    DEFAULT_OBJECT_PATH,
)
from .utils import env_flag, env_str, parse_int_env, resolve_path


@dataclass(frozen=True)
class AppConfig:
    log_level: str
    file_log_level: str
    log_dir: str
    log_file: str
    bus_name: str = DEFAULT_BUS_NAME
    object_path: str = DEFAULT_OBJECT_PATH
    max_depth: int = DEFAULT_MAX_DEPTH
    max_items: int = DEFAULT_MAX_ITEMS
    allow_empty_menus: bool = False
    ui_poll_ms: int = 20
    headless: bool = False
    debug_tree: bool = False


def load_config() -> AppConfig:
    base_dir = str(Path(__file__).resolve().parents[1])
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    file_log_level = os.getenv("FILE_LOG_LEVEL", "DEBUG").upper()
    log_dir = resolve_path(os.getenv("LOG_DIR", "logs"), base_dir)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(
        log_dir, f"server_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.log"
    )
    return AppConfig(
        log_level=log_level,
        file_log_level=file_log_level,
        log_dir=log_dir,
        log_file=log_file,
        bus_name=env_str("PIE_MENU_BUS_NAME", DEFAULT_BUS_NAME),
        object_path=env_str("PIE_MENU_OBJECT_PATH", DEFAULT_OBJECT_PATH),
        max_depth=parse_int_env(
            "PIE_MENU_MAX_DEPTH", DEFAULT_MAX_DEPTH, min_value=1, max_value=64
        ),
        max_items=parse_int_env(
            "PIE_MENU_MAX_ITEMS", DEFAULT_MAX_ITEMS, min_value=1, max_value=10000
        ),
        allow_empty_menus=env_flag("PIE_MENU_ALLOW_EMPTY"),
        ui_poll_ms=parse_int_env("PIE_MENU_UI_POLL_MS", 20, min_value=5, max_value=500),
        headless=env_flag("PIE_MENU_HEADLESS"),
        debug_tree=env_flag("PIE_MENU_DEBUG_TREE"),
    )
