"""Presentation layer.

``tk_presenter`` needs a Tk-enabled interpreter and is imported on demand.
"""

from .headless import HeadlessMenuPresenter

__all__ = ["HeadlessMenuPresenter"]
