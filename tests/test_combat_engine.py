"""
Combat Engine Tests

Tests the battle loop: how battles end, the turn counter, rejected
actions, menu contract violations and termination against the weighted
enemy AI.
"""

import logging

import pytest

from packages.escape import combat_engine
from packages.escape.combat_engine import (
    BattleResult,
    CombatEngine,
    CombatPhase,
    battle,
)
from packages.escape.config import MAX_ACTION_RETRIES
from packages.escape.content.enemies import create_enemy
from packages.escape.content.enemies_ai import ScriptedPolicy
from packages.escape.errors import InvalidChoiceIndex
from packages.escape.menu import RandomMenu
from packages.escape.state.combat import (
    AttackLeft,
    AttackRight,
    AttackStraight,
    DodgeLeft,
    DodgeRight,
    EatFood,
    Nothing,
)
from packages.escape.state.rng import Random


# Option indices for a player holding one item
NOTHING, DODGE_LEFT, DODGE_RIGHT, FIRST_ITEM = 0, 1, 2, 3
LEFT, STRAIGHT, RIGHT = 0, 1, 2


# =============================================================================
# OUTCOMES
# =============================================================================

class TestOutcomes:
    """Win, ongoing and loss outcomes."""

    def test_straight_attack_kills_dodging_enemy(self, make_player, make_enemy, sword, scripted_menu):
        player = make_player(inventory=[sword])
        enemy = make_enemy([DodgeLeft()], health=5)
        menu = scripted_menu([FIRST_ITEM, STRAIGHT])

        result = CombatEngine(player, enemy, menu, turn=0).run()

        assert result.result == BattleResult.PLAYER_WIN
        assert result.victory
        assert result.turn == 1
        assert result.turns_taken == 1
        assert enemy.health == 0
        assert result.damage_dealt == 5

    def test_healing_resolves_before_damage(self, make_player, make_enemy, four_heal_food, scripted_menu):
        player = make_player(health=3, max_health=10, inventory=[four_heal_food])
        enemy = make_enemy([AttackStraight()], health=5, attack_damage=5)
        engine = CombatEngine(player, enemy, scripted_menu([FIRST_ITEM]))

        turn = engine.play_turn()

        assert player.health == 2
        assert engine.phase == CombatPhase.ONGOING
        assert not engine.is_combat_over()
        assert turn.player_healed == 4
        assert turn.player_damage_taken == 5
        assert engine.healing_done == 4

    def test_mutual_knockout_is_a_loss(self, make_player, make_enemy, cleaver, scripted_menu):
        player = make_player(health=3, inventory=[cleaver])
        enemy = make_enemy([AttackStraight()], health=5, attack_damage=3)
        menu = scripted_menu([FIRST_ITEM, LEFT])

        result = CombatEngine(player, enemy, menu).run()

        assert player.health == 0 and enemy.health == 0
        assert result.result == BattleResult.PLAYER_LOSS
        assert not result.victory
        assert "The Guard defeated you" in menu.titles


# =============================================================================
# TURN COUNTER
# =============================================================================

class TestTurnCounter:
    """The counter rises by exactly one per resolved turn."""

    def test_counter_threaded_through(self, make_player, make_enemy, bent_bar, scripted_menu):
        player = make_player(inventory=[bent_bar])
        enemy = make_enemy([DodgeLeft()], health=6)
        menu = scripted_menu([FIRST_ITEM, RIGHT] * 3)

        result = battle(player, enemy, turn=7, menu=menu)

        assert result.victory
        assert result.turn == 10
        assert result.turns_taken == 3
        assert [e.turn for e in result.log.get_events("turn")] == [8, 9, 10]

    def test_one_increment_per_play_turn(self, make_player, make_enemy, scripted_menu):
        player = make_player()
        enemy = make_enemy([DodgeLeft()])
        engine = CombatEngine(player, enemy, scripted_menu([NOTHING] * 4), turn=2)
        for expected in (3, 4, 5, 6):
            engine.play_turn()
            assert engine.turn == expected

    def test_negative_turn_rejected(self, make_player, make_enemy, scripted_menu):
        with pytest.raises(ValueError):
            CombatEngine(make_player(), make_enemy([Nothing()]), scripted_menu(), turn=-1)

    def test_enemy_sees_turn_counter(self, make_player, make_enemy, scripted_menu):
        seen = []

        class RecordingPolicy(ScriptedPolicy):
            def choose_action(self, enemy, player, turn):
                seen.append(turn)
                return super().choose_action(enemy, player, turn)

        player = make_player()
        enemy = make_enemy([Nothing()])
        enemy.policy = RecordingPolicy([DodgeRight()])
        engine = CombatEngine(player, enemy, scripted_menu([NOTHING, NOTHING]), turn=4)
        engine.play_turn()
        engine.play_turn()
        assert seen == [5, 6]


# =============================================================================
# REJECTED ACTIONS
# =============================================================================

class TestRejectedActions:
    """InvalidAction rejects the turn and asks again."""

    def test_player_reprompted(self, make_player, make_enemy, scripted_menu, monkeypatch):
        actions = [EatFood(5), Nothing()]
        monkeypatch.setattr(combat_engine, "choose_combat_action", lambda player, menu: actions.pop(0))

        player = make_player()
        enemy = make_enemy([DodgeLeft()])
        menu = scripted_menu()
        engine = CombatEngine(player, enemy, menu, turn=0)
        result = engine.play_turn()

        assert result.player_action == Nothing()
        assert engine.turn == 1
        assert "You can't do that" in menu.titles
        assert len(engine.log.get_events("rejected_action")) == 1

    def test_enemy_policy_reinvoked(self, make_player, make_enemy, scripted_menu, caplog):
        player = make_player()
        enemy = make_enemy([EatFood(0), AttackRight(2), AttackLeft()], attack_damage=2)
        engine = CombatEngine(player, enemy, scripted_menu([NOTHING]))

        with caplog.at_level(logging.WARNING):
            result = engine.play_turn()

        assert result.enemy_action == AttackLeft()
        assert player.health == 8
        assert enemy.policy.calls == 3
        assert enemy.move_history == [AttackLeft()]
        assert engine.turn == 1
        assert sum("rejected" in r.message for r in caplog.records) == 2

    def test_enemy_waits_after_retries(self, make_player, make_enemy, scripted_menu, caplog):
        player = make_player()
        enemy = make_enemy([EatFood(0)])
        engine = CombatEngine(player, enemy, scripted_menu([NOTHING]))

        with caplog.at_level(logging.WARNING):
            result = engine.play_turn()

        assert result.enemy_action == Nothing()
        assert enemy.policy.calls == MAX_ACTION_RETRIES
        assert enemy.move_history == [Nothing()]
        assert player.health == 10
        assert engine.turn == 1
        assert len(engine.log.get_events("rejected_action")) == MAX_ACTION_RETRIES
        assert any("no valid action" in r.message for r in caplog.records)

    def test_broken_policy_battle_still_ends(self, make_player, make_enemy, sword, scripted_menu):
        # The player hits straight until the enemy falls
        player = make_player(inventory=[sword])
        enemy = make_enemy([EatFood(0)], health=10)
        menu = scripted_menu([FIRST_ITEM, STRAIGHT] * 2)

        result = battle(player, enemy, turn=0, menu=menu)

        assert result.result == BattleResult.PLAYER_WIN
        assert result.turn == 2
        assert enemy.move_history == [Nothing(), Nothing()]


# =============================================================================
# MENU CONTRACT
# =============================================================================

class TestMenuContract:
    """Out-of-range indices are fatal and never caught."""

    @pytest.mark.parametrize("choice", [99, 3, -1])
    def test_bad_first_choice(self, make_player, make_enemy, scripted_menu, choice):
        engine = CombatEngine(make_player(), make_enemy([DodgeLeft()]), scripted_menu([choice]))
        with pytest.raises(InvalidChoiceIndex):
            engine.run()

    def test_bad_direction_choice(self, make_player, make_enemy, cleaver, scripted_menu):
        menu = scripted_menu([FIRST_ITEM, 3])
        engine = CombatEngine(make_player(inventory=[cleaver]), make_enemy([DodgeLeft()]), menu)
        with pytest.raises(InvalidChoiceIndex):
            engine.run()
        assert engine.turn == 1


# =============================================================================
# TERMINATION AND BOOKKEEPING
# =============================================================================

class TestTermination:
    """Battles against the weighted AI always end."""

    @pytest.mark.parametrize("seed", range(10))
    def test_random_battles_end(self, make_player, cleaver, seed):
        player = make_player(inventory=[cleaver])
        enemy = create_enemy("Sergeant", Random(seed))
        result = battle(player, enemy, turn=0, menu=RandomMenu(Random(seed + 100)))

        assert result.result in (BattleResult.PLAYER_WIN, BattleResult.PLAYER_LOSS)
        assert player.is_dead or enemy.is_dead
        assert len(enemy.move_history) == result.turns_taken

    def test_unarmed_player_loses(self, make_player):
        player = make_player(health=4)
        enemy = create_enemy("Guard", Random(5))
        menu = RandomMenu(Random(6))
        result = battle(player, enemy, turn=0, menu=menu)
        assert result.result == BattleResult.PLAYER_LOSS
        # A landed hit at least every third turn
        assert result.turns_taken <= 3 * 2


class TestBookkeeping:
    """Result fields, log and screens."""

    def test_totals_match_health(self, make_player, make_enemy, bent_bar, scripted_menu):
        player = make_player(health=10, inventory=[bent_bar])
        enemy = make_enemy([AttackLeft(), DodgeRight()], health=4, attack_damage=2)
        menu = scripted_menu([FIRST_ITEM, LEFT, FIRST_ITEM, LEFT])

        result = CombatEngine(player, enemy, menu).run()

        assert result.victory
        assert result.damage_dealt == 4
        assert result.damage_taken == 2
        assert result.hp_remaining == 8
        assert result.log.get_events("combat_start")[0].data["enemy"] == "Guard"
        assert result.log.get_events("combat_end")[0].data["victory"] is True

    def test_screens(self, make_player, make_enemy, sword, scripted_menu):
        menu = scripted_menu([FIRST_ITEM, STRAIGHT])
        CombatEngine(make_player(inventory=[sword]), make_enemy([DodgeLeft()]), menu).run()
        assert menu.titles == ["A Guard blocks your way!", "Turn 1", "You defeated the Guard"]
        narration = menu.screens[1].content
        assert "You attack in front of you with your sword" in narration
        assert "The Guard dodges to the left" in narration
        assert "You hit the Guard for 5 damage." in narration

    def test_play_after_end_rejected(self, make_player, make_enemy, sword, scripted_menu):
        engine = CombatEngine(make_player(inventory=[sword]), make_enemy([DodgeLeft()]),
                              scripted_menu([FIRST_ITEM, STRAIGHT]))
        engine.run()
        with pytest.raises(ValueError):
            engine.play_turn()

    def test_result_before_end_rejected(self, make_player, make_enemy, scripted_menu):
        engine = CombatEngine(make_player(), make_enemy([Nothing()]), scripted_menu())
        with pytest.raises(ValueError):
            engine.get_result()
