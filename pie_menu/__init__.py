"""Pie menu server: show a menu over D-Bus and report the user's choice."""

__version__ = "0.3.0"
