"""
Combat State - actions and combatant state for a battle.

Actions are small frozen dataclasses so they can be compared, logged and
replayed. Item indices address the acting combatant's inventory at the moment
the turn is resolved; enemies have no inventory and use -1 for their
intrinsic attack.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Union

from ..config import LOW_HEALTH_DIVISOR
from ..content.items import Food, Item, Weapon
from ..errors import InvalidAction
from .health import Health, HealthLike

if TYPE_CHECKING:
    from ..content.enemies_ai import EnemyPolicy


# Item index used by enemies, which attack without an inventory
INTRINSIC = -1


# =============================================================================
# Action Types
# =============================================================================


class Direction(Enum):
    """Side an attack is aimed at or a dodge moves towards."""
    LEFT = "left"
    STRAIGHT = "straight"
    RIGHT = "right"


@dataclass(frozen=True)
class AttackLeft:
    """Attack to the left with a weapon."""

    item_idx: int = INTRINSIC

    @property
    def direction(self) -> Direction:
        return Direction.LEFT


@dataclass(frozen=True)
class AttackStraight:
    """Attack straight ahead. Straight attacks cannot be dodged."""

    item_idx: int = INTRINSIC

    @property
    def direction(self) -> Direction:
        return Direction.STRAIGHT


@dataclass(frozen=True)
class AttackRight:
    """Attack to the right with a weapon."""

    item_idx: int = INTRINSIC

    @property
    def direction(self) -> Direction:
        return Direction.RIGHT


@dataclass(frozen=True)
class EatFood:
    """Eat a food item. Grants no defence this turn."""

    item_idx: int


@dataclass(frozen=True)
class DodgeLeft:
    """Dodge to the left."""

    @property
    def direction(self) -> Direction:
        return Direction.LEFT


@dataclass(frozen=True)
class DodgeRight:
    """Dodge to the right."""

    @property
    def direction(self) -> Direction:
        return Direction.RIGHT


@dataclass(frozen=True)
class Nothing:
    """Do nothing."""

    pass


Attack = Union[AttackLeft, AttackStraight, AttackRight]
Dodge = Union[DodgeLeft, DodgeRight]
Action = Union[AttackLeft, AttackStraight, AttackRight, EatFood, DodgeLeft, DodgeRight, Nothing]

ATTACK_TYPES = (AttackLeft, AttackStraight, AttackRight)
DODGE_TYPES = (DodgeLeft, DodgeRight)


def is_attack(action: Action) -> bool:
    return isinstance(action, ATTACK_TYPES)


def is_dodge(action: Action) -> bool:
    return isinstance(action, DODGE_TYPES)


def attack_in_direction(direction: Direction, item_idx: int = INTRINSIC) -> Attack:
    """Build the attack action for a direction."""
    if direction == Direction.LEFT:
        return AttackLeft(item_idx)
    if direction == Direction.RIGHT:
        return AttackRight(item_idx)
    return AttackStraight(item_idx)


# =============================================================================
# Combatant States
# =============================================================================


def is_low_health(health: HealthLike, max_health: HealthLike) -> bool:
    """At or below a third of the maximum (see LOW_HEALTH_DIVISOR)."""
    return int(health) * LOW_HEALTH_DIVISOR <= int(max_health)


def _check_bounds(name: str, health: Health, max_health: Health) -> None:
    if health > max_health:
        raise ValueError(f"{name} health {health} exceeds maximum {max_health}")


@dataclass(frozen=True)
class PlayerView:
    """The parts of the player's state an enemy can see."""

    health: int
    max_health: int
    is_low_health: bool

    @property
    def missing_fraction(self) -> float:
        if self.max_health <= 0:
            return 0.0
        return (self.max_health - self.health) / self.max_health


@dataclass
class PlayerState:
    """The player's health and inventory."""

    health: Health
    max_health: Health
    inventory: List[Item] = field(default_factory=list)

    def __post_init__(self):
        self.health = Health(self.health)
        self.max_health = Health(self.max_health)
        _check_bounds("Player", self.health, self.max_health)

    @property
    def is_dead(self) -> bool:
        return self.health.is_zero

    def view(self) -> PlayerView:
        return PlayerView(
            health=self.health.value,
            max_health=self.max_health.value,
            is_low_health=is_low_health(self.health, self.max_health),
        )

    def weapon_at(self, item_idx: int) -> Weapon:
        """The weapon at item_idx, or InvalidAction if the slot holds none."""
        item = self.item_at(item_idx)
        if not isinstance(item, Weapon):
            raise InvalidAction(f"{item.name} is not a weapon")
        return item

    def food_at(self, item_idx: int) -> Food:
        """The food at item_idx, or InvalidAction if the slot holds none."""
        item = self.item_at(item_idx)
        if not isinstance(item, Food):
            raise InvalidAction(f"{item.name} is not food")
        return item

    def item_at(self, item_idx: int) -> Item:
        if not 0 <= item_idx < len(self.inventory):
            raise InvalidAction(f"No item in inventory slot {item_idx}")
        return self.inventory[item_idx]


@dataclass
class EnemyState:
    """An enemy's combat stats plus the policy that picks its moves."""

    id: str
    name: str
    health: Health
    max_health: Health
    attack_damage: int
    policy: Optional[EnemyPolicy] = None
    description: str = ""
    move_history: List[Action] = field(default_factory=list)

    def __post_init__(self):
        self.health = Health(self.health)
        self.max_health = Health(self.max_health)
        _check_bounds(self.name, self.health, self.max_health)
        if self.attack_damage <= 0:
            raise ValueError(f"{self.name} must deal positive damage")

    @property
    def is_dead(self) -> bool:
        return self.health.is_zero

    @property
    def missing_fraction(self) -> float:
        return (self.max_health - self.health) / int(self.max_health)

    def choose_action(self, player_view: PlayerView, turn: int) -> Action:
        """Ask the policy for this turn's move."""
        if self.policy is None:
            raise ValueError(f"{self.name} has no decision policy")
        return self.policy.choose_action(self, player_view, turn)

    def record_move(self, action: Action) -> None:
        self.move_history.append(action)
