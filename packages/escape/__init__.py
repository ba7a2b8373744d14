"""
Ship Escape Engine

A turn-based text adventure: escape a prison ship, fighting the crew room by
room. Losing a battle sends the player back to the cells to start again.

Core subsystems:
- state: RNG (XorShift128), Health, combat actions and combatants, run state
- content: Items, enemies, enemy AI, the room graph
- calc: Turn resolution (dodge matching, damage, healing)
- handlers: Player action selection and out-of-combat actions
- combat_engine: The battle loop
- game: The time loop around every run

Usage:
    from packages.escape import GameRunner, ConsoleMenu

    runner = GameRunner(ConsoleMenu(), seed="ESCAPE")
    summary = runner.run()

    from packages.escape import battle, create_enemy, get_item
    player = PlayerState(health=10, max_health=10, inventory=[get_item("Wrench")])
    result = battle(player, create_enemy("Guard", Random(1)), turn=0, menu=menu)
"""

__version__ = "0.1.0"

# State (imported first: content and calc depend on it)
from .state.rng import XorShift128, Random, GameRNG, seed_to_long
from .state.health import Health
from .state.combat import (
    INTRINSIC,
    Direction,
    AttackLeft,
    AttackStraight,
    AttackRight,
    EatFood,
    DodgeLeft,
    DodgeRight,
    Nothing,
    Action,
    PlayerState,
    PlayerView,
    EnemyState,
)
from .state.run import RunState, create_run, START_ROOM

# Errors and configuration
from .errors import InvalidAction, InvalidChoiceIndex
from .config import Settings

# Content
from .content.items import Food, Weapon, Item, ALL_ITEMS, get_item
from .content.enemies import EnemyData, ENEMY_DATA, create_enemy
from .content.enemies_ai import EnemyPolicy, WeightedPolicy, ScriptedPolicy
from .content.rooms import (
    Room,
    RoomTransition,
    RoomAction,
    Empty,
    Occupied,
    RoomState,
    RoomStateBuilder,
    RoomGraph,
    build_room_graph,
)

# Turn resolution
from .calc.damage import TurnResult, resolve_turn

# Presentation
from .menu import Screen, OptionList, Menu, ConsoleMenu, RandomMenu

# Battle loop and game loop
from .combat_engine import CombatEngine, CombatResult, CombatPhase, BattleResult, battle
from .game import GameRunner, GameSummary, run_headless

__all__ = [
    # State
    "XorShift128", "Random", "GameRNG", "seed_to_long",
    "Health",
    "INTRINSIC", "Direction",
    "AttackLeft", "AttackStraight", "AttackRight", "EatFood",
    "DodgeLeft", "DodgeRight", "Nothing", "Action",
    "PlayerState", "PlayerView", "EnemyState",
    "RunState", "create_run", "START_ROOM",
    # Errors and configuration
    "InvalidAction", "InvalidChoiceIndex", "Settings",
    # Content
    "Food", "Weapon", "Item", "ALL_ITEMS", "get_item",
    "EnemyData", "ENEMY_DATA", "create_enemy",
    "EnemyPolicy", "WeightedPolicy", "ScriptedPolicy",
    "Room", "RoomTransition", "RoomAction", "Empty", "Occupied",
    "RoomState", "RoomStateBuilder", "RoomGraph", "build_room_graph",
    # Turn resolution
    "TurnResult", "resolve_turn",
    # Presentation
    "Screen", "OptionList", "Menu", "ConsoleMenu", "RandomMenu",
    # Loops
    "CombatEngine", "CombatResult", "CombatPhase", "BattleResult", "battle",
    "GameRunner", "GameSummary", "run_headless",
]
