import json

import pytest

from pie_menu.application.composer import (
    CATEGORY_APPLICATIONS,
    CATEGORY_FAVORITES,
    CATEGORY_RECENT,
    CATEGORY_RUNNING,
    CATEGORY_USER_DIRECTORIES,
    MenuComposer,
)
from pie_menu.application.ports import MenuEntry
from pie_menu.domain.parser import parse_menu_description


class _Source:
    def __init__(self, entries):
        self._entries = entries
        self.requested = []

    def entries(self, category):
        self.requested.append(category)
        return self._entries.get(category, [])


class _Logger:
    def __init__(self):
        self.debugs = []

    def debug(self, message, *args):
        self.debugs.append(message % args if args else message)


def _source():
    return _Source(
        {
            CATEGORY_USER_DIRECTORIES: [
                MenuEntry("Home", "user-home", handle="file:///home/me"),
                MenuEntry("Music", "folder-music", handle="file:///home/me/Music"),
            ],
            CATEGORY_APPLICATIONS: [
                MenuEntry(
                    "Internet",
                    "applications-internet",
                    children=(MenuEntry("Firefox", "firefox", handle="firefox.desktop"),),
                ),
                MenuEntry("Terminal", "utilities-terminal", handle="terminal.desktop"),
            ],
        }
    )


def test_compose_builds_one_submenu_per_non_empty_category():
    logger = _Logger()
    source = _source()

    composed = MenuComposer(source, logger).compose(
        [CATEGORY_USER_DIRECTORIES, CATEGORY_RECENT, CATEGORY_APPLICATIONS]
    )

    assert source.requested == [CATEGORY_USER_DIRECTORIES, CATEGORY_RECENT, CATEGORY_APPLICATIONS]
    assert [child.name for child in composed.menu.children] == ["Places", "Applications"]
    assert composed.menu.children[0].icon == "system-file-manager"
    assert logger.debugs == ["Skipping empty category recent"]


def test_description_round_trips_through_parser_and_resolves_handles():
    composed = MenuComposer(_source()).compose(
        [CATEGORY_USER_DIRECTORIES, CATEGORY_APPLICATIONS],
        name="Start",
        icon="start-here",
    )

    description = composed.to_description()
    parsed = parse_menu_description(description)

    assert parsed == composed.menu
    assert "items" not in json.loads(description)["items"][0]["items"][0]
    identifiers = [identifier for identifier, _node in parsed.iter_leaves()]
    assert identifiers == [
        "Places/Home",
        "Places/Music",
        "Applications/Internet/Firefox",
        "Applications/Terminal",
    ]
    assert composed.resolve("Applications/Internet/Firefox") == "firefox.desktop"
    assert composed.resolve("Places/Home") == "file:///home/me"


def test_resolve_unknown_identifier_raises_key_error():
    composed = MenuComposer(_source()).compose([CATEGORY_USER_DIRECTORIES])

    with pytest.raises(KeyError, match="Unknown menu item"):
        composed.resolve("Places/Nope")


def test_compose_rejects_unknown_category_and_allows_empty_result():
    composer = MenuComposer(_source())

    with pytest.raises(ValueError):
        composer.compose(["bookmarks"])
    assert composer.compose([CATEGORY_FAVORITES]).menu.is_empty is True


def test_entries_sharing_a_label_resolve_to_their_own_handles():
    source = _Source(
        {
            CATEGORY_RUNNING: [
                MenuEntry("Terminal", "utilities-terminal", handle="window-1"),
                MenuEntry("Terminal", "utilities-terminal", handle="window-2"),
            ],
            CATEGORY_RECENT: [
                MenuEntry("a/b", "text-x-generic", handle="file:///tmp/a%2Fb"),
                MenuEntry("a", "folder", children=(MenuEntry("b", "text-x-generic", handle="file:///a/b"),)),
            ],
        }
    )

    composed = MenuComposer(source).compose([CATEGORY_RUNNING, CATEGORY_RECENT])
    parsed = parse_menu_description(composed.to_description())
    identifiers = [identifier for identifier, _node in parsed.iter_leaves()]

    assert identifiers == [
        "Running Apps/Terminal",
        "Running Apps/Terminal#2",
        "Recent/a\\/b",
        "Recent/a/b",
    ]
    assert [composed.resolve(identifier) for identifier in identifiers] == [
        "window-1",
        "window-2",
        "file:///tmp/a%2Fb",
        "file:///a/b",
    ]
