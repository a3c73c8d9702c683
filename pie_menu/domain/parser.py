"""Validating parser for serialized menu descriptions."""
from __future__ import annotations

import json
from typing import Any

from ..constants import DEFAULT_MAX_DEPTH, DEFAULT_MAX_ITEMS
from .errors import MenuParseError
from .menu import MenuNode


def parse_menu_description(
    raw: str | bytes,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_items: int = DEFAULT_MAX_ITEMS,
) -> MenuNode:
    """Decode a JSON menu description into a MenuNode tree.

    Every level must be an object with string ``name`` and ``icon`` fields and
    may carry an ``items`` array of the same shape. Unknown keys are ignored.
    Raises MenuParseError on any violation; a partial tree is never returned.
    An empty root is accepted here; whether it may be shown is decided by the
    session layer.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MenuParseError(f"description is not valid UTF-8: {exc}") from exc
    if not isinstance(raw, str):
        raise MenuParseError(f"description must be a string, got {type(raw).__name__}")
    try:
        payload = json.loads(raw)
    except RecursionError as exc:
        raise MenuParseError("description is nested too deeply") from exc
    except ValueError as exc:
        raise MenuParseError(f"invalid JSON: {exc}") from exc
    budget = [max_items]
    return _build_node(payload, "menu", 0, max_depth, budget)


def _build_node(
    payload: Any,
    where: str,
    depth: int,
    max_depth: int,
    budget: list[int],
) -> MenuNode:
    if depth > max_depth:
        raise MenuParseError(f"{where}: nesting exceeds {max_depth} levels")
    if not isinstance(payload, dict):
        raise MenuParseError(f"{where}: expected object, got {_type_name(payload)}")
    budget[0] -= 1
    if budget[0] < 0:
        raise MenuParseError(f"{where}: menu has too many items")

    name = _require_string(payload, "name", where)
    icon = _require_string(payload, "icon", where)

    raw_items = payload.get("items")
    if raw_items is None:
        raw_items = []
    if not isinstance(raw_items, list):
        raise MenuParseError(f"{where}.items: expected array, got {_type_name(raw_items)}")

    children = tuple(
        _build_node(item, f"{where}.items[{index}]", depth + 1, max_depth, budget)
        for index, item in enumerate(raw_items)
    )
    return MenuNode(name=name, icon=icon, children=children)


def _require_string(payload: dict, key: str, where: str) -> str:
    if key not in payload:
        raise MenuParseError(f"{where}.{key}: missing")
    value = payload[key]
    if not isinstance(value, str):
        raise MenuParseError(f"{where}.{key}: expected string, got {_type_name(value)}")
    return value


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
