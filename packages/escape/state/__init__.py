"""
State module - RNG, health and the mutable state of a run.

Contains:
- RNG system (XorShift128, seed management, per-loop streams)
- Health, the clamped hit point quantity
- Combat actions and combatant state
- Run state (player, room graph, turn counter)
"""

# RNG System
from .rng import XorShift128, Random, GameRNG, seed_to_long

# Health
from .health import Health

# Combat State
from .combat import (
    INTRINSIC,
    Direction,
    AttackLeft,
    AttackStraight,
    AttackRight,
    EatFood,
    DodgeLeft,
    DodgeRight,
    Nothing,
    Attack,
    Dodge,
    Action,
    is_attack,
    is_dodge,
    is_low_health,
    attack_in_direction,
    PlayerView,
    PlayerState,
    EnemyState,
)

# Run State
from .run import RunState, create_run, START_ROOM

__all__ = [
    "XorShift128", "Random", "GameRNG", "seed_to_long",
    "Health",
    "INTRINSIC", "Direction",
    "AttackLeft", "AttackStraight", "AttackRight", "EatFood",
    "DodgeLeft", "DodgeRight", "Nothing",
    "Attack", "Dodge", "Action",
    "is_attack", "is_dodge", "is_low_health", "attack_in_direction",
    "PlayerView", "PlayerState", "EnemyState",
    "RunState", "create_run", "START_ROOM",
]
