"""Tests for the game engine, pot manager and schedulers."""

import logging
import random
import threading

import pytest

from holdem_trainer.agents.decision import Decision
from holdem_trainer.agents.personality import PersonalityType
from holdem_trainer.engine.game import HUMAN_NAME, PokerGame
from holdem_trainer.engine.pot import PotManager
from holdem_trainer.engine.scheduling import ManualScheduler, ThreadingScheduler
from holdem_trainer.errors import HandNotReadyError, HoldemError
from holdem_trainer.models.action import ActionType, Stage
from holdem_trainer.models.card import parse_cards
from holdem_trainer.models.game import GameSettings, ShowCards


def _game(num_players=6, human_seat=0, seed=1, **settings):
    scheduler = ManualScheduler()
    game = PokerGame(
        GameSettings(num_players=num_players, human_seat=human_seat, **settings),
        rng=random.Random(seed),
        scheduler=scheduler,
    )
    return game, scheduler


def _total_chips(state):
    return sum(p.chips for p in state.players) + state.pot


class TestStartHand:
    """Tests for dealing a new hand."""

    def test_initial_deal(self):
        game, _ = _game()
        game.start_new_hand()
        state = game.get_game_state()

        assert state.stage == Stage.PREFLOP
        assert state.hand_number == 1
        assert state.pot == 75
        assert state.min_raise == 50
        assert state.community_cards == []
        assert all(len(p.hole_cards) == 2 for p in state.players)
        dealt = [c for p in state.players for c in p.hole_cards]
        assert len(set(dealt)) == 12
        assert len(game.deck) == 40

    def test_blinds_and_first_actor(self):
        game, _ = _game()
        game.start_new_hand()
        state = game.get_game_state()

        assert state.dealer_index == 1
        assert state.players[2].current_bet == 25
        assert state.players[2].chips == 1475
        assert state.players[3].current_bet == 50
        assert state.players[3].chips == 1450
        # First to act is left of the big blind
        assert state.current_player_index == 4

    def test_current_player_is_a_copy(self):
        game, _ = _game()
        game.start_new_hand()
        current = game.get_current_player()
        assert current.seat == 4
        current.chips = 0
        assert game.get_game_state().players[4].chips == 1500

    def test_button_moves(self):
        game, _ = _game()
        game.start_new_hand()
        game.start_new_hand()
        assert game.get_game_state().dealer_index == 2

    def test_short_blind_goes_all_in(self):
        game, _ = _game()
        game._state.players[2].chips = 15
        game.start_new_hand()
        state = game.get_game_state()

        sb = state.players[2]
        assert sb.current_bet == 15
        assert sb.chips == 0
        assert sb.is_all_in
        assert state.pot == 65

    def test_busted_players_sit_out(self):
        game, _ = _game(num_players=4)
        game._state.players[2].chips = 0
        game.start_new_hand()
        state = game.get_game_state()

        assert not state.players[2].is_active
        assert state.players[2].hole_cards == []
        # Blinds skip the empty seat
        assert state.players[3].current_bet == 25
        assert state.players[0].current_bet == 50

    def test_not_enough_players(self):
        game, _ = _game(num_players=3)
        for seat in (1, 2):
            game._state.players[seat].chips = 0
        assert game.is_game_over()
        with pytest.raises(HandNotReadyError):
            game.start_new_hand()

    def test_seating(self):
        game, _ = _game(num_players=3)
        human = game.get_human_player()
        assert human.name == HUMAN_NAME
        assert human.id == "player_0"
        state = game.get_game_state()
        assert state.players[1].name.startswith("Player 2 (")
        assert set(game.ai_players) == {"player_1", "player_2"}

    def test_fixed_personalities(self):
        game = PokerGame(GameSettings(num_players=3), rng=random.Random(1),
                         scheduler=ManualScheduler(),
                         personality_types={1: PersonalityType.ROCK})
        stats = game.get_ai_player_stats("player_1")
        assert stats["personality_type"] == PersonalityType.ROCK
        assert stats["stats"]["hands_played"] == 0
        assert game.get_ai_player_stats("player_0") is None

    def test_ai_stats_wait_for_table_lock(self):
        game, _ = _game()
        held, release = threading.Event(), threading.Event()
        results = []

        def hold_lock():
            with game._lock:
                held.set()
                release.wait(2)

        holder = threading.Thread(target=hold_lock)
        holder.start()
        assert held.wait(2)
        reader = threading.Thread(
            target=lambda: results.append(game.get_ai_player_stats("player_1")))
        reader.start()
        reader.join(0.1)
        assert results == []

        release.set()
        reader.join(2)
        holder.join(2)
        assert results[0]["stats"]["hands_played"] == 0

    def test_state_is_a_copy(self):
        game, _ = _game()
        game.start_new_hand()
        snapshot = game.get_game_state()
        snapshot.players[0].chips = 0
        snapshot.pot = 0
        state = game.get_game_state()
        assert state.players[0].chips == 1500
        assert state.pot == 75


class TestValidActions:
    """Tests for legal action lists."""

    def test_facing_big_blind(self):
        game, _ = _game()
        game.start_new_hand()
        assert game.get_valid_actions() == [
            ActionType.FOLD, ActionType.CALL, ActionType.RAISE, ActionType.ALL_IN]

    def test_unopened_flop(self):
        game, _ = _game(num_players=3)
        game.start_new_hand()
        for _ in range(3):
            game.player_action(ActionType.CALL if game.get_valid_actions()[1] == ActionType.CALL
                               else ActionType.CHECK)
        assert game.get_game_state().stage == Stage.FLOP
        assert game.get_valid_actions() == [
            ActionType.FOLD, ActionType.CHECK, ActionType.BET, ActionType.ALL_IN]

    def test_short_stack_cannot_raise(self):
        game, _ = _game()
        game._state.players[4].chips = 40
        game.start_new_hand()
        assert game.get_valid_actions() == [ActionType.FOLD, ActionType.CALL, ActionType.ALL_IN]

    def test_none_before_a_hand(self):
        game, _ = _game()
        assert game.get_valid_actions() == []


class TestBetting:
    """Tests for applying actions and closing betting rounds."""

    def test_turn_order_and_big_blind_option(self):
        game, _ = _game()
        game.start_new_hand()

        order = []
        for _ in range(5):
            order.append(game.get_game_state().current_player_index)
            assert game.player_action(ActionType.CALL)
            assert _total_chips(game.get_game_state()) == 9000
        assert order == [4, 5, 0, 1, 2]

        # Big blind still gets to act
        state = game.get_game_state()
        assert state.stage == Stage.PREFLOP
        assert state.current_player_index == 3
        assert ActionType.CHECK in game.get_valid_actions()

        assert game.player_action(ActionType.CHECK)
        state = game.get_game_state()
        assert state.stage == Stage.FLOP
        assert len(state.community_cards) == 3
        assert state.pot == 300
        assert all(p.current_bet == 0 for p in state.players)
        # Postflop action starts left of the button
        assert state.current_player_index == 2

    def test_next_player_skips_folded_and_all_in(self):
        game, _ = _game()
        game.start_new_hand()
        game.player_action(ActionType.FOLD)
        game.player_action(ActionType.ALL_IN)
        assert game.get_game_state().current_player_index == 0
        assert game.get_next_player_index(3) == 0

    def test_raise_amount_is_increment(self):
        game, _ = _game()
        game.start_new_hand()
        assert game.player_action(ActionType.RAISE, 100)
        state = game.get_game_state()
        assert state.players[4].current_bet == 150
        assert state.players[4].chips == 1350
        assert state.max_bet == 150
        assert state.min_raise == 100
        assert state.action_log[-1].amount == 100

    def test_reraise_reopens_action(self):
        game, _ = _game(num_players=3)
        game.start_new_hand()
        # Seat 1 is first to act three-handed
        assert game.player_action(ActionType.CALL)
        assert game.player_action(ActionType.CALL)
        assert game.player_action(ActionType.RAISE, 100)
        state = game.get_game_state()
        assert state.stage == Stage.PREFLOP
        assert state.current_player_index == 1

    def test_invalid_actions_change_nothing(self):
        game, _ = _game()
        game.start_new_hand()
        before = game.get_game_state()

        assert not game.player_action(ActionType.CHECK)
        assert not game.player_action(ActionType.RAISE, 10)
        assert not game.player_action(ActionType.RAISE)
        assert not game.player_action(ActionType.RAISE, 5000)
        assert not game.player_action("dance")
        assert not game.player_action(ActionType.CALL, player_id="player_0")

        after = game.get_game_state()
        assert after.pot == before.pot
        assert after.current_player_index == before.current_player_index
        assert after.action_log == []

    def test_string_actions(self):
        game, _ = _game()
        game.start_new_hand()
        assert game.player_action("call")
        assert game.player_action("all-in")
        assert game.get_game_state().players[5].is_all_in

    def test_fold_out_awards_pot(self):
        game, _ = _game()
        game.start_new_hand()
        for _ in range(5):
            assert game.player_action(ActionType.FOLD)

        assert game.is_hand_complete()
        state = game.get_game_state()
        assert state.community_cards == []
        assert state.pot == 0
        assert state.players[3].chips == 1525
        results = game.get_hand_results()
        assert len(results) == 1
        assert results[0].player_id == "player_3"
        assert results[0].hand_rank == 0
        assert results[0].hand_name == "Winner by default"
        assert results[0].winnings == 75
        assert _total_chips(state) == 9000

    def test_no_actions_after_hand(self):
        game, _ = _game()
        game.start_new_hand()
        for _ in range(5):
            game.player_action(ActionType.FOLD)
        assert game.get_valid_actions() == []
        assert not game.player_action(ActionType.CHECK)

    def test_all_in_runs_out_board(self):
        game, _ = _game(num_players=2, human_seat=None)
        game.start_new_hand()
        assert game.player_action(ActionType.ALL_IN)
        assert game.get_game_state().min_raise == 1450
        assert game.player_action(ActionType.CALL)

        assert game.is_hand_complete()
        state = game.get_game_state()
        assert len(state.community_cards) == 5
        assert _total_chips(state) == 3000
        assert sum(r.winnings for r in game.get_hand_results()) == 3000
        # Nobody can act: the start seat comes back unchanged
        assert game.get_next_player_index(1) == 1

    def test_single_eligible_seat_returns_itself(self):
        game, _ = _game(num_players=2, human_seat=None)
        game.start_new_hand()
        assert game.player_action(ActionType.ALL_IN)
        assert game.get_next_player_index(1) == 1

    def test_reveal_always(self):
        game, _ = _game(num_players=3, show_opponent_cards=ShowCards.ALWAYS)
        game.start_new_hand()
        game.player_action(ActionType.CALL)
        game.player_action(ActionType.CALL)
        game.player_action(ActionType.CHECK)
        state = game.get_game_state()
        assert state.stage == Stage.FLOP
        assert all(p.show_cards for p in state.players if not p.is_human)

    def test_reveal_never(self):
        game, _ = _game(num_players=3, show_opponent_cards=ShowCards.NEVER)
        game.start_new_hand()
        game.player_action(ActionType.CALL)
        game.player_action(ActionType.CALL)
        game.player_action(ActionType.CHECK)
        assert not any(p.show_cards for p in game.get_game_state().players)


class TestShowdown:
    """Tests for showdown evaluation and payouts."""

    def _rig(self, game, hands):
        """Set hole cards and stack the deck for a spade royal flush board."""
        for seat, cards in hands.items():
            game._state.players[seat].hole_cards = parse_cards(cards)
        # Dealt from the end: burn, flop, burn, turn, burn, river
        game.deck.cards = parse_cards("As 4c Ks 3c Qs Js Ts 2c")

    def _check_down(self, game):
        game.player_action(ActionType.CALL)
        while not game.is_hand_complete():
            assert game.player_action(ActionType.CHECK)

    def test_board_plays_splits(self):
        game, _ = _game(num_players=2, human_seat=None)
        game.start_new_hand()
        self._rig(game, {0: "5d 6d", 1: "7h 8h"})
        self._check_down(game)

        state = game.get_game_state()
        assert [c.to_short() for c in state.community_cards] == ["Ts", "Js", "Qs", "Ks", "As"]
        results = game.get_hand_results()
        assert len(results) == 2
        assert all(r.hand_name == "Royal Flush" for r in results)
        assert all(r.winnings == 50 for r in results)
        assert [p.chips for p in state.players] == [1500, 1500]

    def test_best_hand_wins(self):
        game, _ = _game(num_players=3, human_seat=None)
        game.start_new_hand()
        for seat, cards in {0: "5d 6d", 1: "7h 8h", 2: "9c 9d"}.items():
            game._state.players[seat].hole_cards = parse_cards(cards)
        game.deck.cards = parse_cards("Qh 4c Kd 3c 9s Jh 2s 5c")

        game.player_action(ActionType.CALL)
        game.player_action(ActionType.CALL)
        while not game.is_hand_complete():
            assert game.player_action(ActionType.CHECK)

        results = game.get_hand_results()
        assert len(results) == 1
        assert results[0].player_id == "player_2"
        assert results[0].hand_name == "Three of a Kind"
        assert results[0].winnings == 150
        assert game.get_game_state().players[2].chips == 1600


class TestAITurns:
    """Tests for scheduled AI decisions."""

    def test_ai_turn_is_scheduled(self):
        game, scheduler = _game()
        game.start_new_hand()
        assert scheduler.has_pending()
        delay = scheduler.pending[0].delay
        assert 0.5 <= delay <= 3.0

    def test_ai_acts_until_human(self):
        game, scheduler = _game()
        game.start_new_hand()
        scheduler.run_pending()
        state = game.get_game_state()
        if not game.is_hand_complete():
            assert state.current_player.is_human
        assert not scheduler.has_pending()

    def test_stale_timer_is_ignored(self):
        game, scheduler = _game()
        game.start_new_hand()
        stale = scheduler.pending[0]

        assert game.player_action(ActionType.CALL)
        # Simulate a timer that fired just before it was cancelled
        stale.callback()

        state = game.get_game_state()
        assert len(state.action_log) == 1
        assert state.current_player_index == 5

    def test_ai_failure_falls_back(self, monkeypatch, caplog):
        game, scheduler = _game()
        game.start_new_hand()

        def boom(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(game.ai_players["player_4"], "decide", boom)
        with caplog.at_level(logging.ERROR):
            assert scheduler.run_next()

        last = game.get_game_state().action_log[-1]
        assert last.player_id == "player_4"
        assert last.action_type == ActionType.FOLD
        assert "AI decision failed" in caplog.text

    def test_illegal_ai_action_falls_back(self, monkeypatch):
        game, scheduler = _game()
        game.start_new_hand()
        monkeypatch.setattr(game.ai_players["player_4"], "decide",
                            lambda *args: Decision(ActionType.CHECK))
        scheduler.run_next()

        last = game.get_game_state().action_log[-1]
        assert last.action_type == ActionType.FOLD

    def test_stop_and_start(self):
        game, scheduler = _game()
        game.start_new_hand()
        game.stop_ai_actions()
        assert not scheduler.has_pending()
        game.start_ai_actions()
        assert scheduler.has_pending()

    def test_dispose(self):
        game, scheduler = _game()
        game.start_new_hand()
        game.dispose()
        assert not scheduler.has_pending()
        game.start_ai_actions()
        assert not scheduler.has_pending()
        with pytest.raises(HoldemError):
            game.start_new_hand()

    def test_ai_only_hands_conserve_chips(self):
        game, scheduler = _game(num_players=4, human_seat=None, seed=11)
        for _ in range(25):
            if game.is_game_over():
                break
            game.start_new_hand()
            scheduler.run_pending()
            assert game.is_hand_complete()
            state = game.get_game_state()
            assert state.pot == 0
            assert _total_chips(state) == 6000
            assert all(p.chips >= 0 for p in state.players)

    def test_ai_stats_recorded(self):
        game, scheduler = _game(num_players=3, human_seat=None, seed=4)
        game.start_new_hand()
        scheduler.run_pending()
        hands = [game.get_ai_player_stats(pid)["stats"]["hands_played"]
                 for pid in game.ai_players]
        assert hands == [1, 1, 1]


class TestPotManager:
    """Tests for pot accounting and distribution."""

    def test_add(self):
        pot = PotManager()
        pot.add(0, 50)
        pot.add(0, 25)
        pot.add(1, 100)
        assert pot.total == 175
        assert pot.get_total_invested(0) == 75
        assert pot.get_total_invested(5) == 0

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            PotManager().add(0, -1)

    def test_even_split(self):
        pot = PotManager()
        pot.add(0, 100)
        pot.add(1, 100)
        assert pot.distribute([0, 1], 0, 6) == {0: 100, 1: 100}

    def test_odd_chip_goes_left_of_button(self):
        pot = PotManager()
        pot.add(0, 101)
        payouts = pot.distribute([1, 4], dealer_index=3, num_seats=6)
        assert payouts == {1: 50, 4: 51}
        assert sum(payouts.values()) == 101

    def test_odd_chips_in_seat_order(self):
        pot = PotManager()
        pot.add(0, 11)
        payouts = pot.distribute([0, 2, 4], dealer_index=2, num_seats=6)
        # Seat order from the button: 4, 0, 2
        assert payouts == {4: 4, 0: 4, 2: 3}

    def test_reset(self):
        pot = PotManager()
        pot.add(0, 10)
        pot.reset_hand()
        assert pot.total == 0
        assert pot.contributions == {}
        assert pot.distribute([], 0, 6) == {}


class TestSchedulers:
    """Tests for the manual and threading schedulers."""

    def test_manual_runs_in_order(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.schedule(1.0, lambda: calls.append("a"))
        scheduler.schedule(0.1, lambda: calls.append("b"))
        assert scheduler.run_pending() == 2
        assert calls == ["a", "b"]

    def test_manual_skips_cancelled(self):
        scheduler = ManualScheduler()
        calls = []
        task = scheduler.schedule(1.0, lambda: calls.append("a"))
        task.cancel()
        assert not scheduler.has_pending()
        assert not scheduler.run_next()
        assert calls == []

    def test_manual_runs_chained_callbacks(self):
        scheduler = ManualScheduler()
        calls = []

        def chain():
            calls.append(len(calls))
            if len(calls) < 3:
                scheduler.schedule(0, chain)

        scheduler.schedule(0, chain)
        assert scheduler.run_pending() == 3
        assert calls == [0, 1, 2]

    def test_threading_runs(self):
        fired = threading.Event()
        ThreadingScheduler().schedule(0.01, fired.set)
        assert fired.wait(2.0)

    def test_threading_cancel(self):
        fired = threading.Event()
        task = ThreadingScheduler().schedule(0.2, fired.set)
        task.cancel()
        assert not fired.wait(0.4)
