"""
Handlers for player decisions.

Combat:
- choose_combat_action: ask the player for one battle action

Exploration:
- take_passive_action: one action between battles
- use_item, pick_up_item_from_room, go_to_room
"""

from .player import (
    combat_options,
    choose_combat_action,
    describe_combat_action,
    describe_enemy_action,
    CheckState,
    GoToRoom,
    DoRoomAction,
    PickUpItem,
    UseItem,
    PassiveAction,
    passive_options,
    choose_passive_action,
    take_passive_action,
    print_state,
    go_to_room,
    use_item,
    pick_up_item_from_room,
)
