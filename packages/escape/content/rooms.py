"""
Rooms - the fixed graph of locations on the ship.

Room is only an identifier with a name and a description. The mutable
contents of a location (items, occupant, connections, actions) live in
RoomState, and the RoomGraph maps every Room to its RoomState for one run.

Room states are assembled with RoomStateBuilder and finalized once with
build(); RoomState itself is a plain dataclass over fully-formed collections.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from ..state.combat import EnemyState
from ..state.rng import Random
from .enemies import create_enemy
from .items import Item, get_item

logger = logging.getLogger(__name__)


# ============================================================================
# ROOMS
# ============================================================================

class Room(Enum):
    """
    One of the ship's rooms.

    Value is (display name, description). ESCAPE is not a real room; moving
    there ends the game.
    """
    BRIDGE = (
        "Bridge",
        "The control centre of the ship. Through the front window you can see "
        "into the darkness of space.",
    )
    UPPER_CORRIDOR = (
        "Upper Corridor",
        "A corridor connecting the bridge to the rest of the ship.",
    )
    STRATEGY_ROOM = (
        "Strategy Room",
        "Where important tactical decisions are made. Before you arrived, the "
        "most important decision since leaving the front lines had been what "
        "galactic time zone to use.",
    )
    CELLS = (
        "Cells",
        "Where they keep prisoners such as yourself. The ship is on a skeleton "
        "crew on its way to pick up troops and the security isn't up to "
        "scratch, so you managed to force open the door.",
    )
    MESS_HALL = (
        "Mess Hall",
        "Where the crew eat their meals. A holo-screen in the corner is playing "
        "a game of half-G volleyball.",
    )
    KITCHEN = (
        "Kitchen",
        "An immaculately clean kitchen area. All the appliances are electric - "
        "no open flames are allowed on the ship.",
    )
    STAIRWELL = (
        "Stairwell",
        "A stairwell. There's not much to do, but out the window you can see "
        "the ship's engines pushing you forward into your captors' grip.",
    )
    CREW_AREA = (
        "Crew Area",
        "Where the soldiers relax after a long cycle. If there were any, that "
        "is. There's a dart board on the wall, but no darts anywhere.",
    )
    STORE_ROOM = (
        "Store Room",
        "A small room with many shelves containing various things. The light "
        "is broken so you can only make out shapes close to the door.",
    )
    LOWER_CORRIDOR = (
        "Lower Corridor",
        "A corridor connecting the crew area to the engine room.",
    )
    WASH_ROOM = (
        "Wash Room",
        "A spotless wash room containing a few showers and a few toilets. This "
        "is a military vessel, so there's no need for privacy.",
    )
    BUNKS = (
        "Bunks",
        "The soldiers will sleep here when they are on board.",
    )
    ENGINE_ROOM = (
        "Engine Room",
        "Where the ship's internals are serviced from. The actual engines are "
        "at the back of the ship, but this is where the boiler and the "
        "electrical breakers are.",
    )
    ESCAPE_POD = (
        "Escape Pod",
        "A pod big enough for only two people. It has enough fuel to get you "
        "to safety, but only just.",
    )
    ESCAPE = ("", "")

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class RoomTransition:
    """A way from one room to another."""
    to: Room
    message: Optional[str] = None
    prompt_text: Optional[str] = None

    @property
    def prompt(self) -> str:
        """Option text shown to the player."""
        if self.prompt_text:
            return self.prompt_text
        return f"Go to the {self.to.display_name}"


@dataclass(frozen=True)
class RoomAction:
    """Something to look at or do in a room, outside of combat."""
    prompt: str
    title: str
    content: str


# ============================================================================
# OCCUPANT
# ============================================================================

@dataclass(frozen=True)
class Empty:
    """No enemy in the room."""
    pass


@dataclass(frozen=True)
class Occupied:
    """An enemy waiting in the room."""
    enemy: EnemyState


Occupant = Union[Empty, Occupied]

EMPTY = Empty()


# ============================================================================
# ROOM STATE
# ============================================================================

@dataclass
class RoomState:
    """The mutable contents of a room during one run."""
    room: Room
    connections: List[RoomTransition] = field(default_factory=list)
    items: List[Item] = field(default_factory=list)
    actions: List[RoomAction] = field(default_factory=list)
    occupant: Occupant = EMPTY

    @property
    def enemy(self) -> Optional[EnemyState]:
        """The waiting enemy, without removing it."""
        if isinstance(self.occupant, Occupied):
            return self.occupant.enemy
        return None

    def take_enemy(self) -> Optional[EnemyState]:
        """Remove and return the enemy; the room is Empty afterwards."""
        if not isinstance(self.occupant, Occupied):
            return None
        enemy = self.occupant.enemy
        self.occupant = EMPTY
        logger.debug("Took %s out of the %s", enemy.name, self.room.display_name)
        return enemy

    def take_item(self, item_idx: int) -> Item:
        """Remove and return the item at item_idx."""
        if not 0 <= item_idx < len(self.items):
            raise IndexError(f"No item {item_idx} in the {self.room.display_name}")
        return self.items.pop(item_idx)


class RoomStateBuilder:
    """
    Builds a RoomState.

    Usage:
        state = (RoomStateBuilder(Room.KITCHEN, connections)
                 .add_item(get_item("Cleaver"))
                 .add_action(action)
                 .with_enemy(enemy)
                 .build())
    """

    def __init__(self, room: Room, connections: List[RoomTransition]):
        self._room = room
        self._connections = list(connections)
        self._items: List[Item] = []
        self._actions: List[RoomAction] = []
        self._enemy: Optional[EnemyState] = None
        self._built = False

    def add_item(self, item: Item) -> RoomStateBuilder:
        self._check_open()
        self._items.append(item)
        return self

    def add_action(self, action: RoomAction) -> RoomStateBuilder:
        self._check_open()
        self._actions.append(action)
        return self

    def with_enemy(self, enemy: EnemyState) -> RoomStateBuilder:
        """Place an enemy in the room. A room holds at most one."""
        self._check_open()
        if self._enemy is not None:
            raise ValueError(f"The {self._room.display_name} already has an enemy")
        self._enemy = enemy
        return self

    def build(self) -> RoomState:
        """Finalize the room state. The builder cannot be reused."""
        self._check_open()
        self._built = True
        return RoomState(
            room=self._room,
            connections=self._connections,
            items=self._items,
            actions=self._actions,
            occupant=Occupied(self._enemy) if self._enemy is not None else EMPTY,
        )

    def _check_open(self) -> None:
        if self._built:
            raise ValueError("RoomStateBuilder has already been built")


# ============================================================================
# ROOM GRAPH
# ============================================================================

@dataclass
class RoomGraph:
    """The state of every room for one run."""
    rooms: Dict[Room, RoomState]

    def get_state(self, room: Room) -> RoomState:
        try:
            return self.rooms[room]
        except KeyError:
            raise KeyError(f"No state for room {room.name}") from None

    def remaining_enemies(self) -> List[EnemyState]:
        return [state.enemy for state in self.rooms.values() if state.enemy is not None]


def _go(to: Room, message: Optional[str] = None, prompt: Optional[str] = None) -> RoomTransition:
    return RoomTransition(to=to, message=message, prompt_text=prompt)


def build_room_graph(ai_rng: Random) -> RoomGraph:
    """
    Build the ship for a new run.

    Args:
        ai_rng: RNG shared by every enemy's decision policy
    """
    states = [
        # ---------------- Upper floor ----------------
        RoomStateBuilder(Room.CELLS, [
            _go(Room.UPPER_CORRIDOR, "You slip out of the cell block."),
        ])
        .add_item(get_item("BentBar"))
        .build(),

        RoomStateBuilder(Room.UPPER_CORRIDOR, [
            _go(Room.CELLS),
            _go(Room.BRIDGE),
            _go(Room.STRATEGY_ROOM),
            _go(Room.MESS_HALL),
            _go(Room.STAIRWELL),
        ])
        .with_enemy(create_enemy("Guard", ai_rng))
        .build(),

        RoomStateBuilder(Room.BRIDGE, [_go(Room.UPPER_CORRIDOR)])
        .add_item(get_item("RationBar"))
        .add_action(RoomAction(
            prompt="Look out of the front window",
            title="You look out into space",
            content="Stars, and nothing else. Wherever the ship is taking you, it is a long way from home.",
        ))
        .build(),

        RoomStateBuilder(Room.STRATEGY_ROOM, [_go(Room.UPPER_CORRIDOR)])
        .add_item(get_item("Baton"))
        .add_action(RoomAction(
            prompt="Study the tactical display",
            title="You study the tactical display",
            content="The ship's route is marked in red. An escape pod is docked next to the engine room, two floors down.",
        ))
        .build(),

        RoomStateBuilder(Room.MESS_HALL, [
            _go(Room.UPPER_CORRIDOR),
            _go(Room.KITCHEN),
        ])
        .add_item(get_item("Apple"))
        .add_action(RoomAction(
            prompt="Watch the volleyball",
            title="You watch the volleyball for a while",
            content="Neither team seems to understand the rules. Neither do you.",
        ))
        .build(),

        RoomStateBuilder(Room.KITCHEN, [_go(Room.MESS_HALL)])
        .add_item(get_item("Cleaver"))
        .add_item(get_item("RationBar"))
        .with_enemy(create_enemy("Cook", ai_rng))
        .build(),

        RoomStateBuilder(Room.STAIRWELL, [
            _go(Room.UPPER_CORRIDOR),
            _go(Room.CREW_AREA, "You creep down the stairs.", "Go down the stairs to the Crew Area"),
        ])
        .add_action(RoomAction(
            prompt="Look out of the window",
            title="You look out of the window",
            content="The engines glow a steady blue. Every minute takes you further from safety.",
        ))
        .build(),

        # ---------------- Lower floor ----------------
        RoomStateBuilder(Room.CREW_AREA, [
            _go(Room.STAIRWELL, "You climb back up the stairs.", "Go up the stairs to the Stairwell"),
            _go(Room.STORE_ROOM),
            _go(Room.LOWER_CORRIDOR),
        ])
        .with_enemy(create_enemy("Sergeant", ai_rng))
        .add_action(RoomAction(
            prompt="Look for the darts",
            title="You search for the darts",
            content="Under the sofa, behind the board, in the bin. They are nowhere to be found.",
        ))
        .build(),

        RoomStateBuilder(Room.STORE_ROOM, [_go(Room.CREW_AREA)])
        .add_item(get_item("Wrench"))
        .add_item(get_item("MedGel"))
        .build(),

        RoomStateBuilder(Room.LOWER_CORRIDOR, [
            _go(Room.CREW_AREA),
            _go(Room.WASH_ROOM),
            _go(Room.BUNKS),
            _go(Room.ENGINE_ROOM),
        ]).build(),

        RoomStateBuilder(Room.WASH_ROOM, [_go(Room.LOWER_CORRIDOR)])
        .add_action(RoomAction(
            prompt="Splash water on your face",
            title="You splash cold water on your face",
            content="You feel a little more awake. It doesn't help much.",
        ))
        .build(),

        RoomStateBuilder(Room.BUNKS, [_go(Room.LOWER_CORRIDOR)])
        .add_item(get_item("MedGel"))
        .add_item(get_item("Apple"))
        .build(),

        RoomStateBuilder(Room.ENGINE_ROOM, [
            _go(Room.LOWER_CORRIDOR),
            _go(Room.ESCAPE_POD),
        ])
        .with_enemy(create_enemy("Engineer", ai_rng))
        .build(),

        RoomStateBuilder(Room.ESCAPE_POD, [
            _go(Room.ENGINE_ROOM),
            _go(
                Room.ESCAPE,
                "You strap in and slam the launch button. The pod tears away from the ship.",
                "Launch the escape pod",
            ),
        ]).build(),

        RoomStateBuilder(Room.ESCAPE, []).build(),
    ]

    return RoomGraph(rooms={state.room: state for state in states})


def graph_to_string(graph: RoomGraph) -> str:
    """Plain-text listing of every room with its exits, items and enemy."""
    lines = []
    for room, state in graph.rooms.items():
        if room == Room.ESCAPE:
            continue
        lines.append(room.display_name)
        lines.append("  exits:   " + ", ".join(t.to.display_name or "(escape)" for t in state.connections))
        if state.items:
            lines.append("  items:   " + ", ".join(item.name for item in state.items))
        if state.actions:
            lines.append("  actions: " + ", ".join(action.prompt for action in state.actions))
        if state.enemy is not None:
            enemy = state.enemy
            lines.append(f"  enemy:   {enemy.name} ({enemy.health} HP, hits for {enemy.attack_damage})")
    return "\n".join(lines)
