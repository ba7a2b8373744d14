"""
Run State - one pass of the time loop, from the cells to escape or defeat.

A RunState owns everything that is thrown away when the player loses: the
player's health and inventory, their position, the room graph with its
enemies and items, and the turn counter. The turn counter is shared by
exploration turns and battle turns; a battle receives it by value and hands
the advanced value back in its result.
"""

from dataclasses import dataclass, field
from typing import List

from ..config import PLAYER_START_HEALTH, PLAYER_START_MAX_HEALTH
from ..content.rooms import Room, RoomGraph, RoomState, build_room_graph
from .combat import PlayerState
from .rng import Random


# Where every run begins
START_ROOM = Room.CELLS


@dataclass
class RunState:
    """Complete state of a run in progress."""
    player: PlayerState
    room_graph: RoomGraph
    room: Room = START_ROOM
    turn: int = 0

    # Tracking
    path_history: List[Room] = field(default_factory=list)
    battles_won: int = 0

    @property
    def room_state(self) -> RoomState:
        return self.room_graph.get_state(self.room)

    @property
    def escaped(self) -> bool:
        return self.room == Room.ESCAPE

    def advance_turn(self) -> int:
        self.turn += 1
        return self.turn

    def set_turn(self, turn: int) -> None:
        """Store the counter returned by a battle. It never moves backwards."""
        if turn < self.turn:
            raise ValueError(f"Turn counter cannot decrease ({self.turn} -> {turn})")
        self.turn = turn

    def move_to(self, room: Room) -> None:
        self.path_history.append(self.room)
        self.room = room


def create_run(ai_rng: Random) -> RunState:
    """Start a fresh run: full health, empty pockets, a freshly stocked ship."""
    return RunState(
        player=PlayerState(
            health=PLAYER_START_HEALTH,
            max_health=PLAYER_START_MAX_HEALTH,
        ),
        room_graph=build_room_graph(ai_rng),
    )
