"""
Item definitions - food and weapons.

Items are addressed only by their index in an inventory; nothing keeps an item
identity once it has been removed. The catalogue below holds templates, and
get_item() returns a fresh instance so two rooms never share one object.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Union

__all__ = [
    "Food",
    "Weapon",
    "Item",
    "ALL_ITEMS",
    "get_item",
    "is_food",
    "is_weapon",
]


@dataclass(frozen=True)
class Food:
    """An item that heals when eaten."""
    id: str
    name: str
    description: str
    heals_for: int

    def __post_init__(self):
        if self.heals_for < 0:
            raise ValueError(f"{self.name} cannot heal a negative amount")


@dataclass(frozen=True)
class Weapon:
    """An item that deals a fixed amount of damage when an attack lands."""
    id: str
    name: str
    description: str
    damage: int

    def __post_init__(self):
        if self.damage <= 0:
            raise ValueError(f"{self.name} must deal positive damage")


Item = Union[Food, Weapon]


def is_food(item: Item) -> bool:
    return isinstance(item, Food)


def is_weapon(item: Item) -> bool:
    return isinstance(item, Weapon)


# =============================================================================
# CATALOGUE
# =============================================================================

ALL_ITEMS: Dict[str, Item] = {
    # Weapons
    "BentBar": Weapon(
        id="BentBar",
        name="bent bar",
        description="A bar from your cell door, bent just enough to squeeze past.",
        damage=2,
    ),
    "Wrench": Weapon(
        id="Wrench",
        name="wrench",
        description="A heavy wrench used to service the boiler.",
        damage=4,
    ),
    "Baton": Weapon(
        id="Baton",
        name="stun baton",
        description="A guard's baton. The charge is dead but it is still solid.",
        damage=3,
    ),
    "Cleaver": Weapon(
        id="Cleaver",
        name="cleaver",
        description="An impeccably sharp kitchen cleaver.",
        damage=5,
    ),
    # Food
    "RationBar": Food(
        id="RationBar",
        name="ration bar",
        description="A dense, flavourless block of calories.",
        heals_for=3,
    ),
    "Apple": Food(
        id="Apple",
        name="apple",
        description="Hydroponically grown and slightly waxy.",
        heals_for=2,
    ),
    "MedGel": Food(
        id="MedGel",
        name="med-gel pouch",
        description="A squeezable pouch of field medicine. It tastes terrible.",
        heals_for=5,
    ),
}


def get_item(item_id: str) -> Item:
    """Get a new instance of a catalogue item."""
    if item_id not in ALL_ITEMS:
        raise ValueError(f"Unknown item: {item_id!r}")
    return replace(ALL_ITEMS[item_id])
