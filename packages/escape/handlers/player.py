"""
Player Handler - everything the player chooses and does.

Combat:
- choose_combat_action: option list for one battle turn, with a second prompt
  for the direction of an attack
- describe_combat_action: narration line for the player's move

Exploration:
- choose_passive_action / take_passive_action: one action between battles
  (check health, move, room actions, pick up items, eat)
- use_item: eat food outside combat. Weapons raise InvalidAction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple, Union

from ..config import MAX_INVENTORY_SIZE
from ..content.items import Food, Weapon
from ..content.rooms import RoomTransition
from ..errors import InvalidAction
from ..menu import Menu, OptionList, Screen, validate_choice
from ..state.combat import (
    Action,
    AttackLeft,
    AttackRight,
    AttackStraight,
    Direction,
    DodgeLeft,
    DodgeRight,
    EatFood,
    EnemyState,
    Nothing,
    PlayerState,
    attack_in_direction,
)
from ..state.run import RunState

logger = logging.getLogger(__name__)


# ============================================================================
# COMBAT ACTIONS
# ============================================================================

ATTACK_DIRECTIONS = ("Attack Left", "Attack Straight", "Attack Right")
DIRECTION_ORDER = (Direction.LEFT, Direction.STRAIGHT, Direction.RIGHT)


def combat_options(player: PlayerState) -> List[Tuple[Action, str]]:
    """Every action the player may take this turn, with its option text."""
    options: List[Tuple[Action, str]] = [
        (Nothing(), "Do nothing"),
        (DodgeLeft(), "Dodge to the left"),
        (DodgeRight(), "Dodge to the right"),
    ]
    for i, item in enumerate(player.inventory):
        if isinstance(item, Food):
            options.append((EatFood(i), f"Eat your {item.name}"))
        elif isinstance(item, Weapon):
            # Direction is asked for separately
            options.append((AttackStraight(i), f"Attack with your {item.name}"))
    return options


def choose_combat_action(player: PlayerState, menu: Menu) -> Action:
    """Ask the player for this turn's action."""
    options = combat_options(player)
    option_list = OptionList([text for _, text in options], "What do you do?")
    action = options[validate_choice(menu.show_option_list(option_list), option_list)][0]

    if isinstance(action, AttackStraight):
        directions = OptionList(ATTACK_DIRECTIONS, "Which way do you attack?")
        direction = validate_choice(menu.show_option_list(directions), directions)
        return attack_in_direction(DIRECTION_ORDER[direction], action.item_idx)

    return action


def describe_combat_action(player: PlayerState, action: Action) -> str:
    """Narrate the player's move. Call before the turn is resolved."""
    if isinstance(action, AttackLeft):
        return f"You attack to the left with your {_item_name(player, action.item_idx)}"
    if isinstance(action, AttackRight):
        return f"You attack to the right with your {_item_name(player, action.item_idx)}"
    if isinstance(action, AttackStraight):
        return f"You attack in front of you with your {_item_name(player, action.item_idx)}"
    if isinstance(action, EatFood):
        return f"You attempt to eat your {_item_name(player, action.item_idx)}"
    if isinstance(action, DodgeLeft):
        return "You dodge to the left"
    if isinstance(action, DodgeRight):
        return "You dodge to the right"
    return "You do nothing"


def describe_enemy_action(enemy: EnemyState, action: Action) -> str:
    """Narrate the enemy's move."""
    if isinstance(action, AttackLeft):
        return f"The {enemy.name} swings at your left"
    if isinstance(action, AttackRight):
        return f"The {enemy.name} swings at your right"
    if isinstance(action, AttackStraight):
        return f"The {enemy.name} lunges straight at you"
    if isinstance(action, DodgeLeft):
        return f"The {enemy.name} dodges to the left"
    if isinstance(action, DodgeRight):
        return f"The {enemy.name} dodges to the right"
    return f"The {enemy.name} waits"


def _item_name(player: PlayerState, item_idx: int) -> str:
    if 0 <= item_idx < len(player.inventory):
        return player.inventory[item_idx].name
    return "missing item"


# ============================================================================
# PASSIVE ACTIONS
# ============================================================================

@dataclass(frozen=True)
class CheckState:
    """Show the player's health."""
    pass


@dataclass(frozen=True)
class GoToRoom:
    """Follow a connection to another room."""
    transition: RoomTransition


@dataclass(frozen=True)
class DoRoomAction:
    """Perform the room action at action_idx."""
    action_idx: int


@dataclass(frozen=True)
class PickUpItem:
    """Take the room item at item_idx."""
    item_idx: int


@dataclass(frozen=True)
class UseItem:
    """Use the inventory item at item_idx."""
    item_idx: int


PassiveAction = Union[CheckState, GoToRoom, DoRoomAction, PickUpItem, UseItem]


def passive_options(run: RunState) -> List[Tuple[PassiveAction, str]]:
    """Every action available outside combat, with its option text."""
    room_state = run.room_state
    options: List[Tuple[PassiveAction, str]] = [(CheckState(), "Check how you're doing")]

    for transition in room_state.connections:
        options.append((GoToRoom(transition), transition.prompt))

    for i, room_action in enumerate(room_state.actions):
        options.append((DoRoomAction(i), room_action.prompt))

    for i, item in enumerate(room_state.items):
        options.append((PickUpItem(i), f"Pick up the {item.name} - {item.description}"))

    for i, item in enumerate(run.player.inventory):
        if isinstance(item, Food):
            options.append((UseItem(i), f"Eat your {item.name}"))

    return options


def choose_passive_action(run: RunState, menu: Menu) -> PassiveAction:
    options = passive_options(run)
    option_list = OptionList([text for _, text in options], "What do you do?")
    return options[validate_choice(menu.show_option_list(option_list), option_list)][0]


def take_passive_action(run: RunState, menu: Menu) -> PassiveAction:
    """Ask for a passive action and carry it out. Returns the action taken."""
    action = choose_passive_action(run, menu)

    if isinstance(action, CheckState):
        print_state(run.player, menu)
    elif isinstance(action, GoToRoom):
        go_to_room(run, action.transition, menu)
    elif isinstance(action, DoRoomAction):
        room_action = run.room_state.actions[action.action_idx]
        menu.show_screen(Screen(room_action.title, room_action.content))
    elif isinstance(action, PickUpItem):
        pick_up_item_from_room(run, action.item_idx, menu)
    elif isinstance(action, UseItem):
        try:
            use_item(run.player, action.item_idx, menu)
        except InvalidAction as e:
            logger.warning("Rejected item use: %s", e)
            menu.show_screen(Screen("You can't do that here", str(e)))

    return action


def print_state(player: PlayerState, menu: Menu) -> None:
    menu.show_screen(Screen(
        "You take a moment to rest and check your body for injuries",
        f"You are at {player.health}/{player.max_health} HP",
    ))


def go_to_room(run: RunState, transition: RoomTransition, menu: Menu) -> None:
    if transition.message:
        menu.show_screen(Screen(transition.message))
    logger.info("Turn %d: %s -> %s", run.turn, run.room.name, transition.to.name)
    run.move_to(transition.to)


def use_item(player: PlayerState, item_idx: int, menu: Menu) -> int:
    """
    Eat the food at item_idx outside combat.

    Returns:
        HP healed

    Raises:
        InvalidAction: if the slot is empty or holds a weapon
    """
    item = player.item_at(item_idx)
    if isinstance(item, Weapon):
        raise InvalidAction(f"Your {item.name} can only be used in combat", UseItem(item_idx))
    food = player.food_at(item_idx)

    before = player.health
    player.health = player.health.heal_to_max(food.heals_for, player.max_health)
    healed = player.health - before
    del player.inventory[item_idx]

    menu.show_screen(Screen(
        f"You ate your {food.name}",
        f"You are healed by {healed} HP.\nYou are now at {player.health}/{player.max_health} HP.",
    ))
    return healed


def pick_up_item_from_room(run: RunState, item_idx: int, menu: Menu) -> bool:
    """Move a room item into the inventory. Returns False if the inventory is full."""
    if len(run.player.inventory) >= MAX_INVENTORY_SIZE:
        menu.show_screen(Screen(
            "Your hands are full",
            f"You can't carry more than {MAX_INVENTORY_SIZE} things.",
        ))
        return False
    item = run.room_state.take_item(item_idx)
    run.player.inventory.append(item)
    menu.show_screen(Screen(f"You picked up the {item.name}"))
    return True
