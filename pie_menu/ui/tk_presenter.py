"""Tkinter presenter that shows one menu level at a time near the pointer."""
from __future__ import annotations

import asyncio
import tkinter as tk
from tkinter import ttk
from typing import Callable

from ..domain.errors import PresentationError
from ..domain.menu import MenuNode, item_identifier

BACK_LABEL = "← Back"
SUBMENU_MARK = " ▸"
FOCUS_CHECK_DELAY_MS = 60


class TkMenuPresenter:
    """MenuPresenter backed by an undecorated Toplevel.

    Submenu buttons descend into their children and the back entry returns to
    the parent level. Activating a leaf selects it; Escape or moving focus to
    another application cancels. Callbacks are queued with ``after_idle`` so
    they never run inside ``display`` or a Tk event handler.
    """

    def __init__(self, root: tk.Misc, logger, *, title: str = "Pie Menu") -> None:
        self.root = root
        self.logger = logger
        self.title = title
        self.window: tk.Toplevel | None = None
        self._frame: ttk.Frame | None = None
        self._stack: list[MenuNode] = []
        self._path: list[str] = []
        self._on_select: Callable[[str], None] | None = None
        self._on_cancel: Callable[[], None] | None = None
        self._pending: Callable[[], None] | None = None

    @property
    def is_showing(self) -> bool:
        return self.window is not None

    @property
    def current_level(self) -> MenuNode | None:
        return self._stack[-1] if self._stack else None

    def display(
        self,
        menu: MenuNode,
        on_select: Callable[[str], None],
        on_cancel: Callable[[], None],
    ) -> None:
        if self.window is not None:
            raise PresentationError("A menu is already displayed.")
        self._stack = [menu]
        self._path = []
        self._on_select = on_select
        self._on_cancel = on_cancel
        try:
            self._build_window()
            self._render_level()
        except tk.TclError as exc:
            self._teardown()
            self._clear_callbacks()
            raise PresentationError(f"Failed to create menu window: {exc}") from exc

    def dismiss(self) -> None:
        self._teardown()
        self._clear_callbacks()
        self._pending = None

    def activate(self, child: MenuNode, index: int | None = None) -> None:
        """Handle a click on ``child``, the ``index``-th entry of the current level."""
        if not self._stack:
            return
        level = self._stack[-1]
        if index is None:
            index = next((i for i, node in enumerate(level.children) if node is child), None)
            if index is None:
                index = level.children.index(child)
        segment = level.child_segments()[index]
        if child.is_leaf:
            self._finish_select(item_identifier(self._path + [segment]))
            return
        self._stack.append(child)
        self._path.append(segment)
        self._safe_render()

    def go_back(self) -> None:
        if len(self._stack) > 1:
            self._stack.pop()
            self._path.pop()
            self._safe_render()

    def cancel(self) -> None:
        if self._on_cancel is None:
            return
        callback = self._on_cancel
        self._teardown()
        self._clear_callbacks()
        self._schedule(callback)

    def fail(self) -> None:
        """Resolve the shown menu as cancelled after the Tk runtime broke.

        An outcome already queued with ``after_idle`` that Tk never ran is
        delivered here instead.
        """
        pending = self._pending
        callback = self._on_cancel
        self._pending = None
        self._stack = []
        self._path = []
        self.window = None
        self._frame = None
        self._clear_callbacks()
        if pending is not None:
            pending()
        elif callback is not None:
            callback()

    async def run_event_pump(self, interval_ms: int, stop: asyncio.Event) -> None:
        """Drive Tk from the asyncio loop until ``stop`` is set."""
        interval = max(1, int(interval_ms)) / 1000.0
        while not stop.is_set():
            try:
                self.root.update()
            except tk.TclError:
                self.logger.exception("Tk event loop stopped")
                self.fail()
                return
            await asyncio.sleep(interval)

    def _build_window(self) -> None:
        window = tk.Toplevel(self.root)
        self.window = window
        window.title(self.title)
        window.overrideredirect(True)
        window.attributes("-topmost", True)
        pointer_x, pointer_y = self.root.winfo_pointerxy()
        window.geometry(f"+{max(0, pointer_x - 60)}+{max(0, pointer_y - 20)}")
        window.bind("<Escape>", lambda _event: self.cancel())
        window.bind("<FocusOut>", self._on_focus_out)
        self._frame = ttk.Frame(window, padding=6)
        self._frame.pack(fill="both", expand=True)
        window.focus_force()

    def _render_level(self) -> None:
        frame = self._frame
        if frame is None:
            return
        for widget in frame.winfo_children():
            widget.destroy()
        level = self._stack[-1]
        ttk.Label(frame, text=level.name, anchor="center").pack(fill="x", pady=(0, 4))
        if len(self._stack) > 1:
            ttk.Button(frame, text=BACK_LABEL, command=self.go_back).pack(fill="x")
        for index, child in enumerate(level.children):
            label = child.name if child.is_leaf else child.name + SUBMENU_MARK
            ttk.Button(
                frame,
                text=label,
                command=lambda node=child, index=index: self.activate(node, index),
            ).pack(fill="x")

    def _safe_render(self) -> None:
        try:
            self._render_level()
        except tk.TclError:
            self.logger.exception("Failed to render menu level")
            self.cancel()

    def _on_focus_out(self, _event=None) -> None:
        if self.window is not None:
            self.root.after(FOCUS_CHECK_DELAY_MS, self._check_focus)

    def _check_focus(self) -> None:
        window = self.window
        if window is None:
            return
        try:
            focused = window.focus_get()
        except (KeyError, tk.TclError):
            focused = None
        if focused is None:
            self.logger.debug("Menu lost focus; cancelling")
            self.cancel()

    def _finish_select(self, identifier: str) -> None:
        callback = self._on_select
        if callback is None:
            return
        self._teardown()
        self._clear_callbacks()
        self._schedule(lambda: callback(identifier))

    def _schedule(self, callback: Callable[[], None]) -> None:
        # Stays pending until Tk runs it so fail() can still deliver it.
        self._pending = callback

        def run() -> None:
            if self._pending is callback:
                self._pending = None
                callback()

        try:
            self.root.after_idle(run)
        except tk.TclError:
            self.logger.exception("Failed to queue menu outcome")
            self.fail()

    def _teardown(self) -> None:
        window = self.window
        self.window = None
        self._frame = None
        self._stack = []
        self._path = []
        if window is None:
            return
        try:
            window.destroy()
        except tk.TclError:
            self.logger.debug("Menu window was already destroyed")

    def _clear_callbacks(self) -> None:
        self._on_select = None
        self._on_cancel = None


def create_tk_root() -> tk.Tk:
    """Create a hidden Tk root, raising PresentationError without a display."""
    try:
        root = tk.Tk()
    except tk.TclError as exc:
        raise PresentationError(f"Tk is unavailable: {exc}") from exc
    root.withdraw()
    return root
