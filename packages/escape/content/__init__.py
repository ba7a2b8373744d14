"""
Content module - items, enemies and the ship.

Contains:
- items: Food and Weapon definitions
- enemies: enemy stats and create_enemy()
- enemies_ai: enemy decision policies
- rooms: the room graph

Only items is re-exported here. The other modules build on state.combat,
which itself imports items, so import them by module path.
"""

from .items import Food, Weapon, Item, ALL_ITEMS, get_item, is_food, is_weapon
