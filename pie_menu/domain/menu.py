"""Immutable menu tree and traversal helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from ..constants import ITEM_ESCAPE, ITEM_OCCURRENCE_MARK, ITEM_PATH_SEPARATOR

_RESERVED = (ITEM_ESCAPE, ITEM_PATH_SEPARATOR, ITEM_OCCURRENCE_MARK)


@dataclass(frozen=True)
class MenuNode:
    """One entry of a menu: a leaf action or a submenu.

    Nodes with children are submenus and cannot be activated themselves.
    """

    name: str
    icon: str
    children: tuple["MenuNode", ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_empty(self) -> bool:
        return not self.children

    def count(self) -> int:
        """Return the number of nodes in this tree, including the root."""
        total = 0
        stack = [self]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.children)
        return total

    def child_segments(self) -> list[str]:
        return sibling_segments([child.name for child in self.children])

    def iter_leaves(self) -> Iterator[tuple[str, "MenuNode"]]:
        """Yield (identifier, node) for every activatable leaf in display order."""
        for segment, child in zip(self.child_segments(), self.children):
            yield from _iter_leaves(child, (segment,))

    def find(self, identifier: str) -> "MenuNode | None":
        try:
            steps = split_item_identifier(identifier)
        except ValueError:
            return None
        node: MenuNode = self
        for name, occurrence in steps:
            matches = [child for child in node.children if child.name == name]
            if occurrence > len(matches):
                return None
            node = matches[occurrence - 1]
        return node


def _iter_leaves(node: MenuNode, path: tuple[str, ...]) -> Iterator[tuple[str, MenuNode]]:
    if node.is_leaf:
        yield item_identifier(path), node
        return
    for segment, child in zip(node.child_segments(), node.children):
        yield from _iter_leaves(child, path + (segment,))


def escape_item_name(name: str) -> str:
    for char in _RESERVED:
        name = name.replace(char, ITEM_ESCAPE + char)
    return name


def sibling_segments(names: Sequence[str]) -> list[str]:
    """Return one identifier segment per sibling name.

    Names are escaped so a ``/`` inside a label cannot split the path, and the
    second and later siblings sharing a label get an ``#<n>`` occurrence
    suffix, so every sibling maps to a distinct segment.
    """
    seen: dict[str, int] = {}
    segments = []
    for name in names:
        seen[name] = seen.get(name, 0) + 1
        segment = escape_item_name(name)
        if seen[name] > 1:
            segment += f"{ITEM_OCCURRENCE_MARK}{seen[name]}"
        segments.append(segment)
    return segments


def item_identifier(segments: Sequence[str]) -> str:
    """Join already escaped segments into the identifier reported for a leaf."""
    return ITEM_PATH_SEPARATOR.join(segments)


def split_item_identifier(identifier: str) -> list[tuple[str, int]]:
    """Split an identifier into ``(name, occurrence)`` steps, 1-based.

    Raises ValueError for a dangling escape or a malformed occurrence suffix.
    """
    steps = []
    name: list[str] = []
    occurrence: list[str] | None = None
    chars = iter(identifier)
    for char in chars:
        if char == ITEM_ESCAPE:
            escaped = next(chars, None)
            if escaped is None or occurrence is not None:
                raise ValueError(f"Malformed item identifier: {identifier!r}")
            name.append(escaped)
        elif char == ITEM_PATH_SEPARATOR:
            steps.append(_finish_step("".join(name), occurrence, identifier))
            name, occurrence = [], None
        elif char == ITEM_OCCURRENCE_MARK:
            if occurrence is not None:
                raise ValueError(f"Malformed item identifier: {identifier!r}")
            occurrence = []
        elif occurrence is not None:
            occurrence.append(char)
        else:
            name.append(char)
    steps.append(_finish_step("".join(name), occurrence, identifier))
    return steps


def _finish_step(name: str, occurrence: list[str] | None, identifier: str) -> tuple[str, int]:
    if occurrence is None:
        return name, 1
    digits = "".join(occurrence)
    if not (digits.isascii() and digits.isdigit()) or int(digits) < 2:
        raise ValueError(f"Malformed item identifier: {identifier!r}")
    return name, int(digits)


def format_menu_tree(menu: MenuNode, indent: int = 0) -> str:
    """Render the tree as indented ``name (icon)`` lines for debug logs."""
    lines = []
    stack = [(menu, indent)]
    while stack:
        node, depth = stack.pop()
        name = node.name or "No Name"
        icon = node.icon or "No Icon"
        lines.append(f"{'  ' * depth}{name} ({icon})")
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return "\n".join(lines)
