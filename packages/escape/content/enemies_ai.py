"""
Enemy AI System - decision policies for enemies.

A policy maps (enemy state, visible player state, turn) to one Action. All
randomness comes from the Random handed to the policy, so a seeded policy
always makes the same choices for the same inputs.

AI Decision Flow:
1. choose_action() is called once per turn, before the turn is resolved
2. The lunge rule is checked first (see below)
3. Otherwise get_move(roll) maps a 0..total-1 roll onto the move weights
4. The battle loop records the resolved move in enemy.move_history

Key patterns:
- Aggression: attack weights grow as the player loses health
- Self-preservation: dodge weights grow as the enemy loses health
- Lunge: after LUNGE_AFTER moves without a straight attack, the enemy always
  attacks straight. Straight attacks cannot be dodged, so every battle
  against a damaging enemy ends in a bounded number of turns.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from ..config import (
    AGGRESSION_WEIGHT,
    BASE_ATTACK_WEIGHT,
    BASE_DODGE_WEIGHT,
    CAUTION_WEIGHT,
    LOW_HEALTH_BONUS,
    LUNGE_AFTER,
)
from ..state.combat import (
    Action,
    AttackLeft,
    AttackRight,
    AttackStraight,
    DodgeLeft,
    DodgeRight,
    EnemyState,
    PlayerView,
)
from ..state.rng import Random

logger = logging.getLogger(__name__)

__all__ = ["EnemyPolicy", "WeightedPolicy", "ScriptedPolicy", "move_weights"]


# ============ BASE POLICY ============

class EnemyPolicy:
    """Base class for enemy decision policies."""

    def choose_action(self, enemy: EnemyState, player: PlayerView, turn: int) -> Action:
        raise NotImplementedError("Subclass must implement choose_action()")


def move_weights(enemy: EnemyState, player: PlayerView) -> List[Tuple[Action, int]]:
    """
    Integer weight of each candidate move.

    Order is fixed (attacks left/straight/right, then dodges left/right) so a
    roll maps onto the same move for the same state.
    """
    attack = BASE_ATTACK_WEIGHT + int(AGGRESSION_WEIGHT * player.missing_fraction)
    if player.is_low_health:
        attack += LOW_HEALTH_BONUS
    dodge = BASE_DODGE_WEIGHT + int(CAUTION_WEIGHT * enemy.missing_fraction)

    return [
        (AttackLeft(), attack),
        (AttackStraight(), attack),
        (AttackRight(), attack),
        (DodgeLeft(), dodge),
        (DodgeRight(), dodge),
    ]


def should_lunge(enemy: EnemyState) -> bool:
    """True once the last LUNGE_AFTER moves contained no straight attack."""
    recent = enemy.move_history[-LUNGE_AFTER:]
    if len(recent) < LUNGE_AFTER:
        return False
    return not any(isinstance(move, AttackStraight) for move in recent)


# ============ WEIGHTED POLICY ============

class WeightedPolicy(EnemyPolicy):
    """Weighted random choice among attacks and dodges."""

    def __init__(self, ai_rng: Random):
        self.ai_rng = ai_rng

    def choose_action(self, enemy: EnemyState, player: PlayerView, turn: int) -> Action:
        if should_lunge(enemy):
            logger.debug("Turn %d: %s lunges", turn, enemy.name)
            return AttackStraight()

        weights = move_weights(enemy, player)
        total = sum(weight for _, weight in weights)
        roll = self.ai_rng.random_int(total - 1)
        return self.get_move(roll, weights)

    @staticmethod
    def get_move(roll: int, weights: Sequence[Tuple[Action, int]]) -> Action:
        """
        Map a roll onto a move.

        Args:
            roll: Value in [0, sum of weights)
            weights: (move, weight) pairs from move_weights()
        """
        for move, weight in weights:
            if roll < weight:
                return move
            roll -= weight
        raise ValueError("Roll exceeds total move weight")


# ============ SCRIPTED POLICY ============

class ScriptedPolicy(EnemyPolicy):
    """Replays a fixed sequence of moves, cycling when it runs out."""

    def __init__(self, actions: Sequence[Action]):
        if not actions:
            raise ValueError("ScriptedPolicy needs at least one action")
        self.actions = list(actions)
        self.calls = 0

    def choose_action(self, enemy: EnemyState, player: PlayerView, turn: int) -> Action:
        action = self.actions[self.calls % len(self.actions)]
        self.calls += 1
        return action
