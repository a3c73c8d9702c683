import json

import pytest

from pie_menu.domain.errors import MenuParseError
from pie_menu.domain.menu import MenuNode
from pie_menu.domain.parser import parse_menu_description


def _nested(depth: int) -> dict:
    node = {"name": "leaf", "icon": "x"}
    for level in range(depth):
        node = {"name": f"level{level}", "icon": "d", "items": [node]}
    return node


def test_parse_builds_ordered_immutable_tree():
    menu = parse_menu_description(
        '{"name":"Root","icon":"folder","items":['
        '{"name":"A","icon":"a"},'
        '{"name":"Sub","icon":"s","items":[{"name":"C","icon":"c"}]},'
        '{"name":"B","icon":"b"}]}'
    )

    assert menu == MenuNode(
        "Root",
        "folder",
        (
            MenuNode("A", "a"),
            MenuNode("Sub", "s", (MenuNode("C", "c"),)),
            MenuNode("B", "b"),
        ),
    )
    assert isinstance(menu.children, tuple)
    with pytest.raises(AttributeError):
        menu.name = "changed"


def test_parse_ignores_unknown_keys_and_null_items():
    menu = parse_menu_description(
        json.dumps({"name": "R", "icon": "r", "activate": "x", "items": None})
    )

    assert menu.children == ()
    assert menu.is_leaf is True


def test_parse_accepts_bytes_and_empty_root():
    menu = parse_menu_description(b'{"name":"Empty","icon":"x","items":[]}')

    assert menu.name == "Empty"
    assert menu.is_empty is True


@pytest.mark.parametrize(
    "raw, fragment",
    [
        ('{"name":"Root","icon":"folder","items":[', "invalid JSON"),
        ("", "invalid JSON"),
        ("[]", "expected object, got array"),
        ('{"icon":"x"}', "menu.name: missing"),
        ('{"name":"R"}', "menu.icon: missing"),
        ('{"name":1,"icon":"x"}', "menu.name: expected string, got number"),
        ('{"name":"R","icon":"x","items":{}}', "menu.items: expected array, got object"),
        ('{"name":"R","icon":"x","items":[{"name":"A","icon":null}]}', "menu.items[0].icon"),
        ('{"name":"R","icon":"x","items":["A"]}', "menu.items[0]: expected object, got string"),
    ],
)
def test_parse_rejects_malformed_descriptions(raw, fragment):
    with pytest.raises(MenuParseError) as excinfo:
        parse_menu_description(raw)

    assert fragment in str(excinfo.value)


def test_parse_rejects_invalid_utf8_and_non_strings():
    with pytest.raises(MenuParseError, match="UTF-8"):
        parse_menu_description(b"\xff\xfe{")
    with pytest.raises(MenuParseError, match="must be a string"):
        parse_menu_description(None)


def test_parse_enforces_depth_limit():
    parse_menu_description(json.dumps(_nested(3)), max_depth=3)

    with pytest.raises(MenuParseError, match="nesting exceeds 3 levels"):
        parse_menu_description(json.dumps(_nested(4)), max_depth=3)


def test_parse_enforces_item_budget():
    payload = {
        "name": "R",
        "icon": "r",
        "items": [{"name": str(index), "icon": "i"} for index in range(4)],
    }

    assert parse_menu_description(json.dumps(payload), max_items=5).count() == 5
    with pytest.raises(MenuParseError, match="too many items"):
        parse_menu_description(json.dumps(payload), max_items=4)


def test_parse_turns_pathological_nesting_into_parse_error():
    raw = "[" * 100000 + "]" * 100000

    with pytest.raises(MenuParseError):
        parse_menu_description(raw)
