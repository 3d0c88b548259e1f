"""Pydantic models for the dining menu document."""

from pydantic import BaseModel, TypeAdapter

ANYTIME_SLOT = "anytime"

_ALLERGEN_SYMBOLS = {
    "gluten": "G",
    "dairy": "D",
    "egg": "E",
    "soy": "S",
    "fish": "F",
    "hasPeanut": "P",
    "tree nut": "N",
    "hasShellfish": "SF",
    "vegetarian": "V",
    "gluten-free": "GF",
}

_ALLERGEN_NAMES = {
    "hasPeanut": "peanuts",
    "tree nut": "tree nuts",
    "hasShellfish": "shellfish",
}

_DIETARY_CODES = {"vegetarian", "gluten-free"}


class Allergen(BaseModel):
    """Allergen or dietary marker attached to a menu item."""

    url: str
    alt: str

    @property
    def symbol(self) -> str:
        return _ALLERGEN_SYMBOLS.get(self.alt, "?")

    @property
    def display_name(self) -> str:
        return _ALLERGEN_NAMES.get(self.alt, self.alt)

    @property
    def is_dietary(self) -> bool:
        return self.alt in _DIETARY_CODES


class MenuItem(BaseModel):
    """Single dish served at a venue."""

    name: str
    allergens: list[Allergen] = []

    @property
    def id(self) -> str:
        # Same-named dishes with different allergen sets stay distinct.
        codes = "".join(allergen.alt for allergen in self.allergens)
        return f"{self.name}-{codes}"


class VenueMenu(BaseModel):
    """Items a venue serves during one slot of a day."""

    venue: str
    meal: str | None = None
    slot: str
    items: list[MenuItem] = []

    @property
    def id(self) -> str:
        return f"{self.venue}-{self.slot}-{self.meal or ''}"


MenuResponse = dict[str, list[VenueMenu]]

_MENU_ADAPTER: TypeAdapter[MenuResponse] = TypeAdapter(MenuResponse)


def parse_menu_json(content: bytes | str) -> MenuResponse:
    """Validate a JSON menu document, raising pydantic.ValidationError."""
    return _MENU_ADAPTER.validate_json(content)


def dump_menu_json(menu: MenuResponse) -> bytes:
    """Serialize a menu document back to the API's JSON shape."""
    return _MENU_ADAPTER.dump_json(menu)
