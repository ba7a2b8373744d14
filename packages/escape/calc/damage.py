"""
Turn Resolver - computes the effects of one combat turn.

Both actions are revealed at once; neither side's move depends on the other's
move from the same turn.

Resolution order:
1. Validate both actions (no state changes if either is invalid)
2. Healing: EatFood heals via heal_to_max, then the food leaves the inventory
3. Attacks: each attack is checked against the defender's action and, if it
   lands, subtracts the attacker's damage via Health.damage

Dodge matching:
- A dodge negates an attack on the same side only
- Straight attacks are never dodged
- A defender doing Nothing or EatFood is undefended
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidAction
from ..state.combat import (
    INTRINSIC,
    Action,
    Direction,
    EatFood,
    EnemyState,
    PlayerState,
    is_attack,
    is_dodge,
)

logger = logging.getLogger(__name__)

__all__ = [
    "TurnResult",
    "attack_lands",
    "validate_player_action",
    "validate_enemy_action",
    "resolve_turn",
]


@dataclass
class TurnResult:
    """Structured effects of one resolved turn."""
    player_action: Action
    enemy_action: Action
    player_damage_taken: int = 0
    enemy_damage_taken: int = 0
    player_healed: int = 0
    food_eaten: Optional[str] = None
    weapon_used: Optional[str] = None
    player_dodged: bool = False
    enemy_dodged: bool = False

    @property
    def player_hit(self) -> bool:
        return self.player_damage_taken > 0

    @property
    def enemy_hit(self) -> bool:
        return self.enemy_damage_taken > 0


def attack_lands(attack_direction: Direction, defender_action: Action) -> bool:
    """True if an attack in attack_direction hits a defender taking defender_action."""
    if attack_direction == Direction.STRAIGHT:
        return True
    if is_dodge(defender_action):
        return defender_action.direction != attack_direction
    return True


# =============================================================================
# VALIDATION
# =============================================================================

def validate_player_action(player: PlayerState, action: Action) -> None:
    """Raise InvalidAction if the action's item slot is missing or the wrong kind."""
    if is_attack(action):
        player.weapon_at(action.item_idx)
    elif isinstance(action, EatFood):
        player.food_at(action.item_idx)


def validate_enemy_action(enemy: EnemyState, action: Action) -> None:
    """Enemies have no inventory: only intrinsic attacks, dodges and waiting."""
    if isinstance(action, EatFood):
        raise InvalidAction(f"{enemy.name} has nothing to eat", action)
    if is_attack(action) and action.item_idx != INTRINSIC:
        raise InvalidAction(f"{enemy.name} has no item {action.item_idx}", action)


# =============================================================================
# RESOLUTION
# =============================================================================

def resolve_turn(
    player_action: Action,
    enemy_action: Action,
    player: PlayerState,
    enemy: EnemyState,
) -> TurnResult:
    """
    Resolve one turn, mutating both combatants.

    Raises:
        InvalidAction: if either action references a missing or wrong-kind
            item. Neither combatant is modified in that case.
    """
    try:
        validate_player_action(player, player_action)
    except InvalidAction as e:
        e.action = player_action
        raise
    validate_enemy_action(enemy, enemy_action)

    result = TurnResult(
        player_action=player_action,
        enemy_action=enemy_action,
        player_dodged=is_dodge(player_action),
        enemy_dodged=is_dodge(enemy_action),
    )

    # Healing before damage
    if isinstance(player_action, EatFood):
        food = player.food_at(player_action.item_idx)
        before = player.health
        player.health = player.health.heal_to_max(food.heals_for, player.max_health)
        result.player_healed = player.health - before
        result.food_eaten = food.name
        del player.inventory[player_action.item_idx]

    # Player attack against the enemy's move
    if is_attack(player_action):
        weapon = player.weapon_at(player_action.item_idx)
        result.weapon_used = weapon.name
        if attack_lands(player_action.direction, enemy_action):
            before = enemy.health
            enemy.health = enemy.health.damage(weapon.damage)
            result.enemy_damage_taken = before - enemy.health

    # Enemy attack against the player's move
    if is_attack(enemy_action):
        if attack_lands(enemy_action.direction, player_action):
            before = player.health
            player.health = player.health.damage(enemy.attack_damage)
            result.player_damage_taken = before - player.health

    logger.debug(
        "Resolved %s vs %s: player -%d +%d, enemy -%d",
        player_action, enemy_action,
        result.player_damage_taken, result.player_healed, result.enemy_damage_taken,
    )
    return result
