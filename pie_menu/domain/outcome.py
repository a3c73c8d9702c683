"""Terminal results of a menu session."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class MenuSelected:
    item: str


@dataclass(frozen=True)
class MenuCancelled:
    pass


Outcome = Union[MenuSelected, MenuCancelled]
