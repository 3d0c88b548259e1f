"""Tests for menu document models."""

import json

import pytest
from pydantic import ValidationError

from chucks_status.domain.menu import (
    Allergen,
    MenuItem,
    VenueMenu,
    dump_menu_json,
    parse_menu_json,
)

RAW_MENU = {
    "2026-10-19": [
        {
            "venue": "Home Cooking",
            "meal": None,
            "slot": "lunch",
            "items": [
                {
                    "name": "Pad Thai",
                    "allergens": [
                        {"url": "/icons/peanut.png", "alt": "hasPeanut"},
                        {"url": "/icons/soy.png", "alt": "soy"},
                    ],
                }
            ],
        }
    ]
}


def test_parse_menu_json_builds_models() -> None:
    menu = parse_menu_json(json.dumps(RAW_MENU))

    venue = menu["2026-10-19"][0]
    assert venue.venue == "Home Cooking"
    assert venue.meal is None
    assert venue.items[0].allergens[0].alt == "hasPeanut"


def test_parse_menu_json_rejects_wrong_shape() -> None:
    with pytest.raises(ValidationError):
        parse_menu_json(json.dumps({"2026-10-19": {"venue": "Grill"}}))


def test_parse_menu_json_rejects_invalid_json() -> None:
    with pytest.raises(ValidationError):
        parse_menu_json(b"<html>maintenance</html>")


def test_dump_menu_json_keeps_api_shape() -> None:
    menu = parse_menu_json(json.dumps(RAW_MENU))

    assert json.loads(dump_menu_json(menu)) == RAW_MENU


def test_menu_item_id_includes_allergen_codes() -> None:
    plain = MenuItem(name="Chili", allergens=[])
    vegetarian = MenuItem(
        name="Chili", allergens=[Allergen(url="/v.png", alt="vegetarian")]
    )

    assert plain.id == "Chili-"
    assert vegetarian.id == "Chili-vegetarian"
    assert plain.id != vegetarian.id


def test_venue_menu_id() -> None:
    assert VenueMenu(venue="Grill", meal=None, slot="lunch").id == "Grill-lunch-"
    assert (
        VenueMenu(venue="Grill", meal="Lunch", slot="lunch").id == "Grill-lunch-Lunch"
    )


def test_allergen_labels() -> None:
    peanut = Allergen(url="/p.png", alt="hasPeanut")
    gluten_free = Allergen(url="/gf.png", alt="gluten-free")
    unknown = Allergen(url="/x.png", alt="sesame")

    assert peanut.symbol == "P"
    assert peanut.display_name == "peanuts"
    assert not peanut.is_dietary
    assert gluten_free.symbol == "GF"
    assert gluten_free.is_dietary
    assert unknown.symbol == "?"
    assert unknown.display_name == "sesame"
