"""Shared constants for the pie menu server."""

DEFAULT_BUS_NAME = "org.gnome.Pie2"
DEFAULT_OBJECT_PATH = "/org/gnome/shell/extensions/gnomepie2"
DBUS_INTERFACE_NAME = "org.gnome.Shell.Extensions.GnomePie2"

# Returned by ShowMenu for every synchronous failure.
SHOW_MENU_FAILED = -1
# Never a valid session id.
NO_SESSION = 0

ITEM_PATH_SEPARATOR = "/"
ITEM_ESCAPE = "\\"
# Suffix on repeated sibling labels: "Terminal#2".
ITEM_OCCURRENCE_MARK = "#"

DEFAULT_MAX_DEPTH = 16
DEFAULT_MAX_ITEMS = 512
