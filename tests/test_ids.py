import pytest

from kiosk_admin.catalog.ids import normalize_id, sorted_entities
from kiosk_admin.catalog.models import Category, ModifierOption


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Chicken Sub", "chicken_sub"),
        ("  Turkey   Club  ", "turkey_club"),
        ("Size 6\"", "size_6"),
        ("Café-Latte!", "caflatte"),
        ("ALREADY_ok_1", "already_ok_1"),
        ("tab\tand\nnewline", "tab_and_newline"),
        ("!!!", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_id(raw, expected):
    assert normalize_id(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["Chicken Sub", " a  _ b ", "Ünïcödé Näme", "x!y z", "İstanbul Kebab", "__", "12 Inch"],
)
def test_normalize_id_is_idempotent(raw):
    once = normalize_id(raw)
    assert normalize_id(once) == once


def test_sorted_entities_breaks_ties_by_id():
    cats = [
        Category(id="wraps", name="Wraps", sort=1),
        Category(id="drinks", name="Drinks", sort=1),
        Category(id="subs", name="Subs", sort=0),
        Category(id="chips", name="Chips", sort=1),
    ]
    expected = ["subs", "chips", "drinks", "wraps"]
    for _ in range(3):
        assert [c.id for c in sorted_entities(cats)] == expected
    assert [c.id for c in sorted_entities(reversed(cats))] == expected


def test_sorted_entities_options():
    opts = [
        ModifierOption(id="size_12", group_id="g", sort=0),
        ModifierOption(id="size_6", group_id="g", sort=0),
    ]
    assert [o.id for o in sorted_entities(opts)] == ["size_12", "size_6"]
