"""
Combat Engine - the battle loop from encounter to outcome.

Each iteration of the loop:
1. Advances the turn counter
2. Asks the player (through the menu) and the enemy (through its policy)
   for one action each
3. Validates both actions; a rejected action is asked for again without
   advancing the turn counter
4. Resolves the turn with calc.damage.resolve_turn
5. Narrates the outcome on the menu
6. Checks for the end of the battle. The player's death is checked first, so
   a mutual knockout counts as a loss.

The turn counter belongs to the run. The engine receives it by value and the
advanced value is returned in CombatResult.turn.

Usage:
    engine = CombatEngine(player, enemy, menu, turn=run.turn)
    result = engine.run()
    run.set_turn(result.turn)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from .calc.damage import TurnResult, resolve_turn, validate_enemy_action, validate_player_action
from .config import MAX_ACTION_RETRIES
from .errors import InvalidAction
from .handlers.player import choose_combat_action, describe_combat_action, describe_enemy_action
from .menu import Menu, Screen
from .state.combat import Action, EnemyState, Nothing, PlayerState, is_attack

logger = logging.getLogger(__name__)

__all__ = [
    "CombatPhase",
    "BattleResult",
    "CombatResult",
    "CombatLog",
    "CombatLogEntry",
    "CombatEngine",
    "battle",
]


# =============================================================================
# COMBAT PHASE
# =============================================================================

class CombatPhase(Enum):
    """State of the battle loop."""
    ONGOING = "ONGOING"
    PLAYER_WIN = "PLAYER_WIN"
    PLAYER_LOSS = "PLAYER_LOSS"


class BattleResult(Enum):
    """Final outcome of a battle."""
    PLAYER_WIN = "PLAYER_WIN"
    PLAYER_LOSS = "PLAYER_LOSS"


# =============================================================================
# COMBAT LOG
# =============================================================================

@dataclass
class CombatLogEntry:
    """A single combat log entry."""
    turn: int
    event_type: str
    data: Dict[str, Any]


@dataclass
class CombatLog:
    """Combat event log for summaries and replay."""
    entries: List[CombatLogEntry] = field(default_factory=list)

    def log(self, turn: int, event_type: str, **data):
        """Add a log entry."""
        self.entries.append(CombatLogEntry(turn=turn, event_type=event_type, data=data))

    def get_events(self, event_type: str) -> List[CombatLogEntry]:
        """Get all events of a specific type."""
        return [e for e in self.entries if e.event_type == event_type]


# =============================================================================
# COMBAT RESULT
# =============================================================================

@dataclass
class CombatResult:
    """Result of a completed battle."""
    result: BattleResult
    turn: int
    turns_taken: int
    hp_remaining: int
    damage_dealt: int
    damage_taken: int
    healing_done: int
    log: CombatLog = field(default_factory=CombatLog)

    @property
    def victory(self) -> bool:
        return self.result == BattleResult.PLAYER_WIN


# =============================================================================
# COMBAT ENGINE
# =============================================================================

class CombatEngine:
    """
    Runs one battle between the player and a single enemy.

    The engine mutates both combatants. Menu errors (InvalidChoiceIndex) are
    never caught here.
    """

    def __init__(self, player: PlayerState, enemy: EnemyState, menu: Menu, turn: int = 0):
        if turn < 0:
            raise ValueError(f"Turn counter cannot be negative: {turn}")
        self.player = player
        self.enemy = enemy
        self.menu = menu

        self.turn = turn
        self.start_turn = turn
        self.phase = CombatPhase.ONGOING
        self.started = False
        self.log = CombatLog()

        # Tracking
        self.damage_dealt = 0
        self.damage_taken = 0
        self.healing_done = 0

    # =========================================================================
    # State Queries
    # =========================================================================

    @property
    def turns_taken(self) -> int:
        return self.turn - self.start_turn

    def is_combat_over(self) -> bool:
        return self.phase != CombatPhase.ONGOING

    def is_victory(self) -> bool:
        return self.phase == CombatPhase.PLAYER_WIN

    def is_defeat(self) -> bool:
        return self.phase == CombatPhase.PLAYER_LOSS

    # =========================================================================
    # Combat Flow
    # =========================================================================

    def start_combat(self):
        """Announce the enemy. Does nothing if the battle already started."""
        if self.started:
            return
        self.started = True

        logger.info(
            "Turn %d: battle with %s (%s HP) starts, player at %s/%s HP",
            self.turn, self.enemy.name, self.enemy.health,
            self.player.health, self.player.max_health,
        )
        self.log.log(self.turn, "combat_start",
                     enemy=self.enemy.id,
                     player_hp=self.player.health.value,
                     enemy_hp=self.enemy.health.value)

        content = self.enemy.description
        self.menu.show_screen(Screen(f"A {self.enemy.name} blocks your way!", content))

    def run(self) -> CombatResult:
        """Play turns until one side is at zero health."""
        self.start_combat()
        while not self.is_combat_over():
            self.play_turn()
        return self.get_result()

    def play_turn(self) -> TurnResult:
        """Play exactly one turn, advancing the counter by one."""
        if self.is_combat_over():
            raise ValueError("Battle is already over")
        self.start_combat()

        self.turn += 1
        player_action, enemy_action = self._get_valid_actions()

        # Narration refers to items the turn may consume
        player_line = describe_combat_action(self.player, player_action)
        enemy_line = describe_enemy_action(self.enemy, enemy_action)

        result = resolve_turn(player_action, enemy_action, self.player, self.enemy)
        self.enemy.record_move(enemy_action)

        self.damage_dealt += result.enemy_damage_taken
        self.damage_taken += result.player_damage_taken
        self.healing_done += result.player_healed

        self.log.log(self.turn, "turn",
                     player_action=player_action,
                     enemy_action=enemy_action,
                     player_hp=self.player.health.value,
                     enemy_hp=self.enemy.health.value,
                     damage_dealt=result.enemy_damage_taken,
                     damage_taken=result.player_damage_taken,
                     healed=result.player_healed)
        logger.debug(
            "Turn %d: %s vs %s -> player %s/%s, %s %s/%s",
            self.turn, player_action, enemy_action,
            self.player.health, self.player.max_health,
            self.enemy.name, self.enemy.health, self.enemy.max_health,
        )

        self.menu.show_screen(Screen(
            f"Turn {self.turn}",
            "\n".join([player_line, enemy_line] + self._outcome_lines(result)),
        ))

        self.phase = self.check_combat_end()
        if self.is_combat_over():
            self._end_combat()
        return result

    def check_combat_end(self) -> CombatPhase:
        """Loss is checked before win."""
        if self.player.is_dead:
            return CombatPhase.PLAYER_LOSS
        if self.enemy.is_dead:
            return CombatPhase.PLAYER_WIN
        return CombatPhase.ONGOING

    def get_result(self) -> CombatResult:
        if not self.is_combat_over():
            raise ValueError("Battle is still ongoing")
        return CombatResult(
            result=BattleResult.PLAYER_WIN if self.is_victory() else BattleResult.PLAYER_LOSS,
            turn=self.turn,
            turns_taken=self.turns_taken,
            hp_remaining=self.player.health.value,
            damage_dealt=self.damage_dealt,
            damage_taken=self.damage_taken,
            healing_done=self.healing_done,
            log=self.log,
        )

    # =========================================================================
    # Action Selection
    # =========================================================================

    def _get_valid_actions(self) -> Tuple[Action, Action]:
        """
        Ask both sides until each has produced a valid action.

        The player is re-prompted indefinitely, since a human can always pick
        another option. The enemy policy is re-invoked at most
        MAX_ACTION_RETRIES times, after which the enemy waits (Nothing) for
        the turn. No InvalidAction leaves the battle.
        """
        player_action = self._choose_player_action()
        enemy_action = self._choose_enemy_action()
        return player_action, enemy_action

    def _choose_player_action(self) -> Action:
        while True:
            action = choose_combat_action(self.player, self.menu)
            try:
                validate_player_action(self.player, action)
            except InvalidAction as e:
                logger.warning("Turn %d: rejected player action %s: %s", self.turn, action, e)
                self.log.log(self.turn, "rejected_action", side="player", action=action, reason=str(e))
                self.menu.show_screen(Screen("You can't do that", str(e)))
                continue
            return action

    def _choose_enemy_action(self) -> Action:
        view = self.player.view()
        attempts = 0
        while True:
            action = self.enemy.choose_action(view, self.turn)
            try:
                validate_enemy_action(self.enemy, action)
            except InvalidAction as e:
                attempts += 1
                logger.warning(
                    "Turn %d: rejected %s action %s (attempt %d/%d): %s",
                    self.turn, self.enemy.name, action, attempts, MAX_ACTION_RETRIES, e,
                )
                self.log.log(self.turn, "rejected_action", side="enemy", action=action, reason=str(e))
                if attempts >= MAX_ACTION_RETRIES:
                    logger.warning(
                        "Turn %d: %s produced no valid action, waiting instead",
                        self.turn, self.enemy.name,
                    )
                    return Nothing()
                continue
            return action

    # =========================================================================
    # Narration
    # =========================================================================

    def _outcome_lines(self, result: TurnResult) -> List[str]:
        name = self.enemy.name
        lines = []

        if result.food_eaten is not None:
            lines.append(f"You are healed by {result.player_healed} HP.")

        if result.weapon_used is not None:
            if result.enemy_hit:
                lines.append(f"You hit the {name} for {result.enemy_damage_taken} damage.")
            elif result.enemy_dodged:
                lines.append(f"The {name} dodges your attack.")
            else:
                lines.append(f"Your attack doesn't hurt the {name}.")

        if result.player_hit:
            lines.append(f"You are hit for {result.player_damage_taken} damage.")
        elif result.player_dodged and is_attack(result.enemy_action):
            lines.append("You dodge the attack.")

        lines.append("")
        lines.append(
            f"You: {self.player.health}/{self.player.max_health} HP    "
            f"{name}: {self.enemy.health}/{self.enemy.max_health} HP"
        )
        return lines

    def _end_combat(self):
        won = self.is_victory()
        self.log.log(self.turn, "combat_end", victory=won, turns=self.turns_taken)
        logger.info(
            "Turn %d: battle with %s ends in %s after %d turns",
            self.turn, self.enemy.name, "victory" if won else "defeat", self.turns_taken,
        )
        if won:
            self.menu.show_screen(Screen(
                f"You defeated the {self.enemy.name}",
                f"You are at {self.player.health}/{self.player.max_health} HP.",
            ))
        else:
            self.menu.show_screen(Screen(
                f"The {self.enemy.name} defeated you",
                "Everything goes dark.",
            ))


# =============================================================================
# CONVENIENCE
# =============================================================================

def battle(player: PlayerState, enemy: EnemyState, turn: int, menu: Menu) -> CombatResult:
    """Run a battle to completion and return its result."""
    return CombatEngine(player, enemy, menu, turn=turn).run()
