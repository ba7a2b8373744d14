"""
Game Runner - the time loop around every run.

The GameRunner owns the session: the RNG streams, the menu and the current
RunState. Each inner-loop step advances the run's turn counter, shows the
room, fights whatever is waiting there and then takes one passive action.
Losing a battle throws the run away and starts a new loop from the cells;
launching the escape pod ends the game.

Usage:
    runner = GameRunner(ConsoleMenu(), seed="ESCAPE")
    summary = runner.run()
    # OR headless:
    summary = run_headless(seed="ESCAPE", max_turns=500)
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Union

from .combat_engine import CombatEngine, CombatResult
from .config import DEFAULT_SEED
from .handlers.player import take_passive_action
from .menu import Menu, RandomMenu, Screen
from .state.combat import EnemyState
from .state.rng import GameRNG, seed_to_long
from .state.run import RunState, create_run

logger = logging.getLogger(__name__)


INTRO_TITLE = "You wake up on a cold metal floor"
INTRO_TEXT = (
    "You are a prisoner on a military ship, on its way to pick up troops at\n"
    "the front. The crew is a skeleton one and the lock on your cell is\n"
    "loose. Somewhere below decks there is an escape pod.\n"
    "\n"
    "You have the strangest feeling you have done all of this before."
)

LOOP_TITLE = "You wake up on a cold metal floor. Again."
LOOP_TEXT = (
    "Your body is unhurt, your pockets are empty and the ship is exactly as\n"
    "it was. Only your memory of the last attempt remains."
)

VICTORY_TITLE = "You escaped!"
VICTORY_TEXT = "The ship shrinks to a point of light behind you. You are free."


@dataclass
class GameSummary:
    """Outcome of a game session."""
    escaped: bool
    loops: int
    turns: int
    battles_won: int
    battles_lost: int = 0
    seed: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class GameRunner:
    """
    Runs the game from the intro screen to escape.

    Without an explicit menu the runner picks every option at random from the
    session's choice stream, which makes a seed fully reproducible.
    """

    def __init__(self, menu: Optional[Menu] = None, seed: Union[str, int] = DEFAULT_SEED):
        self.seed_string = str(seed)
        self.seed = seed if isinstance(seed, int) else seed_to_long(seed)
        self.rng = GameRNG(self.seed)
        self.menu = menu if menu is not None else RandomMenu(self.rng.choice_rng)

        self.run_state: RunState = create_run(self.rng.ai_rng)
        self.loops = 0
        self.finished_turns = 0
        self.battles_won = 0
        self.battles_lost = 0
        self.intro_shown = False
        self.game_over = False

        logger.info("New game with seed %s (%d)", self.seed_string, self.seed)

    @property
    def turns(self) -> int:
        """Turns played across every loop so far."""
        return self.finished_turns + self.run_state.turn

    # =========================================================================
    # Main Game Loop
    # =========================================================================

    def run(self, max_turns: Optional[int] = None) -> GameSummary:
        """
        Play until the player escapes.

        Args:
            max_turns: Stop after this many turns in total (for headless runs)
        """
        self.show_intro()
        while not self.game_over:
            if max_turns is not None and self.turns >= max_turns:
                logger.info("Stopping after %d turns without escaping", self.turns)
                break
            self.step()
        return self.get_summary()

    def step(self) -> None:
        """One turn of the inner loop."""
        if self.game_over:
            raise ValueError("The game is already over")

        run = self.run_state
        run.advance_turn()
        self.show_room()

        enemy = run.room_state.take_enemy()
        if enemy is not None:
            result = self.fight(enemy)
            if not result.victory:
                self.restart_loop()
                return

        take_passive_action(run, self.menu)

        if run.escaped:
            self.game_over = True
            logger.info(
                "Escaped on turn %d of loop %d (%d turns in total)",
                run.turn, self.loops, self.turns,
            )
            self.menu.show_screen(Screen(VICTORY_TITLE, VICTORY_TEXT))

    def fight(self, enemy: EnemyState) -> CombatResult:
        """Battle the enemy taken from the current room."""
        run = self.run_state
        result = CombatEngine(run.player, enemy, self.menu, turn=run.turn).run()
        run.set_turn(result.turn)
        if result.victory:
            run.battles_won += 1
            self.battles_won += 1
        else:
            self.battles_lost += 1
        return result

    def restart_loop(self) -> None:
        """Throw the run away and wake up in the cells again."""
        self.finished_turns += self.run_state.turn
        self.loops += 1
        self.rng.advance_loop()
        self.run_state = create_run(self.rng.ai_rng)
        logger.info("Loop %d starts after %d turns in total", self.loops, self.finished_turns)
        self.menu.show_screen(Screen(LOOP_TITLE, LOOP_TEXT))

    # =========================================================================
    # Screens
    # =========================================================================

    def show_intro(self) -> None:
        if self.intro_shown:
            return
        self.intro_shown = True
        self.menu.show_screen(Screen(INTRO_TITLE, INTRO_TEXT))

    def show_room(self) -> None:
        room = self.run_state.room
        self.menu.show_screen(Screen(f"You are in the {room.display_name}", room.description))

    def get_summary(self) -> GameSummary:
        return GameSummary(
            escaped=self.game_over,
            loops=self.loops,
            turns=self.turns,
            battles_won=self.battles_won,
            battles_lost=self.battles_lost,
            seed=self.seed_string,
        )


def run_headless(seed: Union[str, int] = DEFAULT_SEED, max_turns: Optional[int] = None) -> GameSummary:
    """Play a whole game with random choices."""
    return GameRunner(seed=seed).run(max_turns=max_turns)
