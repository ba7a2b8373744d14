"""
Calculation utilities for combat.

Contains:
- Turn resolution (dodge matching, healing, damage)
"""

from .damage import (
    TurnResult,
    attack_lands,
    validate_player_action,
    validate_enemy_action,
    resolve_turn,
)
