"""
Shared pytest fixtures for the Ship Escape test suite.

This module provides reusable fixtures for:
- RNG with known seeds
- Players and enemies in known states
- A scripted menu that replays fixed choices and records every screen
"""

import os
import sys

import pytest

# Ensure project root is in path
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from packages.escape.content.enemies_ai import ScriptedPolicy
from packages.escape.content.items import Food, Weapon, get_item
from packages.escape.menu import Menu
from packages.escape.state.combat import EnemyState, PlayerState
from packages.escape.state.rng import GameRNG, Random, seed_to_long


# =============================================================================
# Scripted Menu
# =============================================================================


class ScriptedMenu(Menu):
    """
    Menu that returns pre-set choices in order and records what it shows.

    Choices are returned as given, without validation, so tests can feed an
    out-of-range index to the engine. Running out of choices fails the test.
    """

    def __init__(self, choices=()):
        self.choices = list(choices)
        self.screens = []
        self.option_lists = []

    def show_screen(self, screen):
        self.screens.append(screen)

    def show_option_list(self, options):
        self.option_lists.append(options)
        if not self.choices:
            raise AssertionError(f"No scripted choice left for: {options.prompt} {options.options}")
        return self.choices.pop(0)

    @property
    def titles(self):
        return [screen.title for screen in self.screens]


# =============================================================================
# RNG Fixtures
# =============================================================================


@pytest.fixture
def rng_seed_42():
    """RNG initialized with seed 42 for deterministic tests."""
    return Random(42)


@pytest.fixture
def game_rng_escape():
    """GameRNG for the default seed."""
    return GameRNG(seed_to_long("ESCAPE"))


# =============================================================================
# Item Fixtures
# =============================================================================


@pytest.fixture
def cleaver():
    """5-damage weapon."""
    return get_item("Cleaver")


@pytest.fixture
def bent_bar():
    """2-damage weapon."""
    return get_item("BentBar")


@pytest.fixture
def four_heal_food():
    """Food healing exactly 4, which no catalogue item does."""
    return Food(id="Soup", name="soup", description="Lukewarm.", heals_for=4)


@pytest.fixture
def sword():
    """5-damage weapon outside the catalogue."""
    return Weapon(id="Sword", name="sword", description="Sharp.", damage=5)


# =============================================================================
# Combatant Fixtures
# =============================================================================


@pytest.fixture
def make_player():
    """Factory for players: make_player(health, max_health, inventory)."""
    def _make(health=10, max_health=10, inventory=None):
        return PlayerState(health=health, max_health=max_health, inventory=list(inventory or []))
    return _make


@pytest.fixture
def make_enemy():
    """Factory for enemies that replay a fixed list of moves."""
    def _make(moves, health=5, max_health=None, attack_damage=2, name="Guard"):
        return EnemyState(
            id=name,
            name=name,
            health=health,
            max_health=health if max_health is None else max_health,
            attack_damage=attack_damage,
            policy=ScriptedPolicy(moves),
        )
    return _make


@pytest.fixture
def scripted_menu():
    """Factory for ScriptedMenu."""
    return ScriptedMenu
