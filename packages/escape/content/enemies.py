"""
Enemy definitions - stats for every enemy on the ship.

EnemyData is static; create_enemy() builds the mutable EnemyState that sits in
a room until the player walks in.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ..state.combat import EnemyState
from ..state.rng import Random
from .enemies_ai import EnemyPolicy, WeightedPolicy


@dataclass(frozen=True)
class EnemyData:
    """Static data for an enemy type."""
    id: str
    name: str
    description: str
    hp: int
    attack_damage: int


ENEMY_DATA: Dict[str, EnemyData] = {
    "Guard": EnemyData(
        id="Guard",
        name="Guard",
        description="A bored guard on the last hour of a long shift.",
        hp=5,
        attack_damage=2,
    ),
    "Cook": EnemyData(
        id="Cook",
        name="Cook",
        description="The ship's cook, who does not appreciate visitors in the kitchen.",
        hp=6,
        attack_damage=2,
    ),
    "Sergeant": EnemyData(
        id="Sergeant",
        name="Sergeant",
        description="A veteran of the front lines, blocking the way to the lower deck.",
        hp=8,
        attack_damage=3,
    ),
    "Engineer": EnemyData(
        id="Engineer",
        name="Chief Engineer",
        description="She knows every pipe in this room and she is not letting you near the pod.",
        hp=10,
        attack_damage=3,
    ),
}


def create_enemy(
    enemy_id: str,
    ai_rng: Optional[Random] = None,
    policy: Optional[EnemyPolicy] = None,
) -> EnemyState:
    """
    Create an enemy at full health.

    Args:
        enemy_id: Key into ENEMY_DATA
        ai_rng: RNG for a WeightedPolicy (ignored when policy is given)
        policy: Explicit decision policy
    """
    if enemy_id not in ENEMY_DATA:
        raise ValueError(f"Unknown enemy: {enemy_id!r}. Known: {sorted(ENEMY_DATA)}")
    if policy is None:
        if ai_rng is None:
            raise ValueError("create_enemy needs either ai_rng or policy")
        policy = WeightedPolicy(ai_rng)

    data = ENEMY_DATA[enemy_id]
    return EnemyState(
        id=data.id,
        name=data.name,
        description=data.description,
        health=data.hp,
        max_health=data.hp,
        attack_damage=data.attack_damage,
        policy=policy,
    )
