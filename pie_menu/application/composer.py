"""Compose menu descriptions from enumerated desktop content."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from ..domain.menu import MenuNode, item_identifier, sibling_segments
from .ports import ContentSource, MenuEntry

CATEGORY_USER_DIRECTORIES = "user-directories"
CATEGORY_RECENT = "recent"
CATEGORY_FAVORITES = "favorites"
CATEGORY_FREQUENT = "frequent"
CATEGORY_RUNNING = "running"
CATEGORY_APPLICATIONS = "applications"

CATEGORY_HEADINGS: dict[str, tuple[str, str]] = {
    CATEGORY_USER_DIRECTORIES: ("Places", "system-file-manager"),
    CATEGORY_RECENT: ("Recent", "document-open-recent"),
    CATEGORY_FAVORITES: ("Favorites", "emblem-favorite"),
    CATEGORY_FREQUENT: ("Frequently Used", "emblem-default"),
    CATEGORY_RUNNING: ("Running Apps", "preferences-system-windows"),
    CATEGORY_APPLICATIONS: ("Applications", "applications-system"),
}


@dataclass(frozen=True)
class ComposedMenu:
    """A menu tree plus the client-side handles of its leaves."""

    menu: MenuNode
    handles: Mapping[str, Any] = field(default_factory=dict)

    def to_description(self) -> str:
        return json.dumps(_node_to_payload(self.menu), ensure_ascii=False)

    def resolve(self, identifier: str) -> Any:
        """Return the activation handle for a reported item identifier."""
        try:
            return self.handles[identifier]
        except KeyError:
            raise KeyError(f"Unknown menu item: {identifier}") from None


class MenuComposer:
    def __init__(self, source: ContentSource, logger=None) -> None:
        self.source = source
        self.logger = logger

    def compose(
        self,
        categories: Iterable[str],
        *,
        name: str = "Main Menu",
        icon: str = "open-menu",
    ) -> ComposedMenu:
        sections = []
        for category in categories:
            if category not in CATEGORY_HEADINGS:
                raise ValueError(f"Unknown content category: {category}")
            entries = list(self.source.entries(category))
            if not entries:
                if self.logger is not None:
                    self.logger.debug("Skipping empty category %s", category)
                continue
            heading, heading_icon = CATEGORY_HEADINGS[category]
            sections.append(MenuEntry(heading, heading_icon, children=tuple(entries)))
        handles: dict[str, Any] = {}
        return ComposedMenu(
            menu=MenuNode(name=name, icon=icon, children=_entries_to_nodes(sections, (), handles)),
            handles=handles,
        )


def _entries_to_nodes(
    entries: Iterable[MenuEntry], prefix: tuple[str, ...], handles: dict[str, Any]
) -> tuple[MenuNode, ...]:
    entries = list(entries)
    nodes = []
    for segment, entry in zip(sibling_segments([entry.name for entry in entries]), entries):
        path = prefix + (segment,)
        if not entry.children:
            handles[item_identifier(path)] = entry.handle
            nodes.append(MenuNode(name=entry.name, icon=entry.icon))
        else:
            nodes.append(
                MenuNode(
                    name=entry.name,
                    icon=entry.icon,
                    children=_entries_to_nodes(entry.children, path, handles),
                )
            )
    return tuple(nodes)


def _node_to_payload(node: MenuNode) -> dict[str, Any]:
    payload: dict[str, Any] = {"name": node.name, "icon": node.icon}
    if node.children:
        payload["items"] = [_node_to_payload(child) for child in node.children]
    return payload
