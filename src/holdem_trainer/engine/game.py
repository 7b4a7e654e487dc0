"""Hold'em game engine: the hand state machine and AI turn orchestration."""

import copy
import logging
import random
import threading
from typing import Dict, List, Optional, Union

from holdem_trainer.agents.base import AIPlayer
from holdem_trainer.agents.factory import AgentFactory, ai_display_name
from holdem_trainer.agents.personality import PersonalityType
from holdem_trainer.engine.deck import Deck
from holdem_trainer.engine.evaluator import compare_hands, evaluate_hand, rank_hands
from holdem_trainer.engine.pot import PotManager
from holdem_trainer.engine.scheduling import ScheduledTask, ThreadingScheduler
from holdem_trainer.errors import DeckExhaustedError, HandNotReadyError, HoldemError
from holdem_trainer.models.action import ActionType, PlayerAction, Stage
from holdem_trainer.models.card import Card, format_cards
from holdem_trainer.models.game import (
    GameSettings, GameState, HandResult, PlayerState, ShowCards,
)

logger = logging.getLogger(__name__)

HUMAN_NAME = "You"


class PokerGame:
    """Runs hands of no-limit hold'em for one table.

    The engine owns the authoritative GameState. Callers get deep copies.
    Every read-modify-write of the state happens under one re-entrant lock,
    and AI turns run from a scheduler callback that re-checks the seat and
    a state version before acting, so a stale timer can never act.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
        scheduler=None,
        personality_types: Optional[Dict[int, PersonalityType]] = None,
    ):
        """Initialize the game and seat the players.

        Args:
            settings: Table configuration. Defaults to GameSettings().
            rng: Random source for shuffling, AI personalities, AI choices and
                card reveals.
            scheduler: Object with ``schedule(delay, callback)`` returning a
                cancellable handle. Defaults to a ThreadingScheduler.
            personality_types: Fixed archetypes by seat index; other AI
                seats get a random archetype.
        """
        self.settings = settings or GameSettings()
        self.rng = rng or random.Random()
        self.scheduler = scheduler or ThreadingScheduler()
        self.deck = Deck(self.rng)
        self.pot = PotManager()
        self.ai_players: Dict[str, AIPlayer] = {}

        self._lock = threading.RLock()
        self._version = 0
        self._ai_task: Optional[ScheduledTask] = None
        self._hand_active = False
        self._disposed = False
        self._last_results: List[HandResult] = []

        players = self._create_players(personality_types or {})
        self._state = GameState(
            stage=Stage.PREFLOP,
            pot=0,
            community_cards=[],
            players=players,
            dealer_index=0,
            small_blind=self.settings.small_blind,
            big_blind=self.settings.big_blind,
            current_player_index=0,
            action_log=[],
            min_raise=self.settings.big_blind,
        )

    def _create_players(self, personality_types: Dict[int, PersonalityType]) -> List[PlayerState]:
        factory = AgentFactory(self.rng)
        players = []
        for seat in range(self.settings.num_players):
            player_id = f"player_{seat}"
            if seat == self.settings.human_seat:
                players.append(PlayerState(
                    id=player_id, name=HUMAN_NAME, chips=self.settings.starting_chips,
                    seat=seat, is_human=True,
                ))
                continue

            ai = factory.create_agent(player_id, personality_types.get(seat))
            self.ai_players[player_id] = ai
            players.append(PlayerState(
                id=player_id, name=ai_display_name(seat, ai.personality_type),
                chips=self.settings.starting_chips, seat=seat,
            ))
        return players

    # Public queries

    def get_game_state(self) -> GameState:
        """Return a deep copy of the table state."""
        with self._lock:
            return copy.deepcopy(self._state)

    def get_current_player(self) -> Optional[PlayerState]:
        with self._lock:
            return copy.deepcopy(self._state.current_player)

    def get_human_player(self) -> Optional[PlayerState]:
        with self._lock:
            return copy.deepcopy(self._state.human)

    def is_hand_complete(self) -> bool:
        with self._lock:
            return self._state.stage == Stage.SHOWDOWN

    def is_game_over(self) -> bool:
        """True when fewer than two players have chips left."""
        with self._lock:
            return sum(1 for p in self._state.players if p.chips > 0) < 2

    def get_hand_results(self) -> List[HandResult]:
        """Winners of the last completed hand."""
        with self._lock:
            return list(self._last_results)

    def get_ai_player_stats(self, player_id: str) -> Optional[Dict]:
        with self._lock:
            ai = self.ai_players.get(player_id)
            if ai is None:
                return None
            return {
                "personality_type": ai.personality_type,
                "personality": ai.personality,
                "stats": ai.get_stats(),
            }

    def get_valid_actions(self) -> List[ActionType]:
        """Legal actions for the seat to act, in display order."""
        with self._lock:
            state = self._state
            if not self._hand_active or state.stage == Stage.SHOWDOWN:
                return []
            player = state.current_player
            if player is None or not player.can_act:
                return []

            actions = [ActionType.FOLD]
            if state.amount_to_call(player) == 0:
                actions.append(ActionType.CHECK)
            else:
                actions.append(ActionType.CALL)
            if player.chips >= state.min_raise:
                actions.append(ActionType.BET if state.max_bet == 0 else ActionType.RAISE)
            actions.append(ActionType.ALL_IN)
            return actions

    def get_next_player_index(self, start_index: int) -> int:
        """Next seat after ``start_index`` that can still act, wrapping around.

        Returns ``start_index`` itself when it is the only seat that can act,
        or when no seat can.
        """
        players = self._state.players
        count = len(players)
        for offset in range(1, count + 1):
            index = (start_index + offset) % count
            if players[index].can_act:
                return index
        return start_index

    # Hand lifecycle

    def start_new_hand(self):
        """Shuffle, move the button, post blinds and deal.

        Raises:
            HandNotReadyError: If fewer than two players have chips.
            HoldemError: If the game has been disposed.
        """
        with self._lock:
            if self._disposed:
                raise HoldemError("Cannot start a hand on a disposed game")
            self._cancel_ai_task()

            state = self._state
            if sum(1 for p in state.players if p.chips > 0) < 2:
                raise HandNotReadyError("Need at least two players with chips to deal")

            self._version += 1
            self.deck.reset()
            self.pot.reset_hand()
            state.stage = Stage.PREFLOP
            state.pot = 0
            state.community_cards = []
            state.action_log = []
            state.side_pots = []
            state.min_raise = state.big_blind
            state.hand_number += 1
            self._last_results = []

            for player in state.players:
                player.reset_for_hand()

            state.dealer_index = self._next_seat_with_chips(state.dealer_index)
            sb_index = self._next_seat_with_chips(state.dealer_index)
            bb_index = self._next_seat_with_chips(sb_index)
            self._post_blind(state.players[sb_index], state.small_blind)
            self._post_blind(state.players[bb_index], state.big_blind)

            self._deal_hole_cards()
            for player in state.players:
                if player.is_active and player.id in self.ai_players:
                    self.ai_players[player.id].start_hand()

            self._hand_active = True
            state.current_player_index = self.get_next_player_index(bb_index)
            logger.info("Hand #%d: button seat %d, blinds %d/%d", state.hand_number,
                        state.dealer_index, state.small_blind, state.big_blind)

            if self._is_betting_round_complete():
                self._advance_stage()
            else:
                self._schedule_ai_action()

    def _next_seat_with_chips(self, start_index: int) -> int:
        players = self._state.players
        count = len(players)
        for offset in range(1, count + 1):
            index = (start_index + offset) % count
            if players[index].is_active:
                return index
        return start_index

    def _post_blind(self, player: PlayerState, blind: int):
        """Post a blind, or the whole stack if it is smaller."""
        amount = min(blind, player.chips)
        self._move_chips(player, amount)
        logger.debug("%s posts blind %d", player.name, amount)

    def _deal_card(self) -> Card:
        card = self.deck.deal()
        if card is None:
            raise DeckExhaustedError("Deck ran out of cards mid-hand")
        return card

    def _deal_hole_cards(self):
        """Deal one card at a time to each active player, starting left of the button."""
        state = self._state
        count = len(state.players)
        order = [state.players[(state.dealer_index + offset) % count]
                 for offset in range(1, count + 1)]
        for _ in range(2):
            for player in order:
                if player.is_active:
                    player.hole_cards.append(self._deal_card())

    def _move_chips(self, player: PlayerState, amount: int):
        """Move chips from a player's stack into the pot."""
        player.chips -= amount
        player.current_bet += amount
        self.pot.add(player.seat, amount)
        self._state.pot = self.pot.total
        if player.chips == 0:
            player.is_all_in = True

    # Actions

    def player_action(self, action: Union[ActionType, str], amount: Optional[int] = None,
                      player_id: Optional[str] = None) -> bool:
        """Apply an action for the seat to act.

        Args:
            action: The action to take.
            amount: For bets and raises, the increment over the table's
                current maximum bet. Ignored otherwise.
            player_id: If given, the action is rejected unless this player
                is the one to act.

        Returns:
            True if the action was applied; False if it was rejected, in
            which case nothing changed.
        """
        with self._lock:
            return self._apply_action(action, amount, player_id)

    def _apply_action(self, action: Union[ActionType, str], amount: Optional[int],
                      player_id: Optional[str]) -> bool:
        state = self._state
        try:
            action = ActionType(action)
        except ValueError:
            logger.debug("Rejected unknown action %r", action)
            return False

        if not self._hand_active or state.stage == Stage.SHOWDOWN:
            return False
        player = state.current_player
        if player is None or (player_id is not None and player.id != player_id):
            logger.debug("Rejected %s from %s: not their turn", action.value, player_id)
            return False
        if not player.is_active or player.is_folded or player.is_all_in:
            return False

        logged_amount = self._execute(player, action, amount)
        if logged_amount is None:
            logger.debug("Rejected %s %s from %s", action.value, amount, player.name)
            return False

        state.action_log.append(PlayerAction(
            player_id=player.id, seat=player.seat, action_type=action,
            amount=logged_amount, stage=state.stage,
        ))
        player.has_acted = True
        if player.id in self.ai_players:
            self.ai_players[player.id].record_action(action, state.stage)
        self._version += 1

        if self._is_betting_round_complete():
            self._advance_stage()
        else:
            state.current_player_index = self.get_next_player_index(state.current_player_index)
            self._schedule_ai_action()
        return True

    def _execute(self, player: PlayerState, action: ActionType,
                 amount: Optional[int]) -> Optional[int]:
        """Validate and apply one action. Returns the amount to log, or None if illegal."""
        state = self._state
        owed = state.amount_to_call(player)

        if action == ActionType.FOLD:
            player.is_folded = True
            return 0

        if action == ActionType.CHECK:
            return 0 if owed == 0 else None

        if action == ActionType.CALL:
            if owed <= 0:
                return None
            paid = min(owed, player.chips)
            self._move_chips(player, paid)
            return paid

        if action in (ActionType.BET, ActionType.RAISE):
            if amount is None or amount < state.min_raise:
                return None
            required = state.max_bet + amount - player.current_bet
            if required > player.chips:
                return None
            self._move_chips(player, required)
            state.min_raise = amount
            return amount

        # All-in
        if player.chips <= 0:
            return None
        previous_max = state.max_bet
        shoved = player.chips
        self._move_chips(player, shoved)
        raised_by = player.current_bet - previous_max
        if raised_by >= state.min_raise:
            state.min_raise = raised_by
        return shoved

    def _is_betting_round_complete(self) -> bool:
        """Complete when one player is left, or everyone who can still bet has
        acted and matched the table's maximum bet."""
        state = self._state
        contesting = state.players_in_hand
        if len(contesting) <= 1:
            return True
        max_bet = state.max_bet
        return all(
            p.has_acted and p.current_bet == max_bet
            for p in contesting if not p.is_all_in
        )

    def _advance_stage(self):
        """Close the betting round and deal the next street, or go to showdown.

        When fewer than two players can still bet, the remaining streets are
        dealt without betting.
        """
        state = self._state
        while True:
            for player in state.players:
                player.reset_for_round()
            state.min_raise = state.big_blind

            if len(state.players_in_hand) <= 1 or state.stage == Stage.RIVER:
                state.stage = Stage.SHOWDOWN
                self._finish_hand()
                return

            if state.stage == Stage.PREFLOP:
                self._deal_community(3)
                state.stage = Stage.FLOP
                self._reveal_opponent_cards()
            else:
                self._deal_community(1)
                state.stage = state.stage.next_stage
            logger.info("%s: %s", state.stage.value.title(), format_cards(state.community_cards))

            if sum(1 for p in state.players if p.can_act) >= 2:
                state.current_player_index = self.get_next_player_index(state.dealer_index)
                self._schedule_ai_action()
                return

    def _deal_community(self, count: int):
        self.deck.burn()
        for _ in range(count):
            self._state.community_cards.append(self._deal_card())

    def _reveal_opponent_cards(self):
        """Flag some AI hands as visible to the human once the flop is out."""
        mode = self.settings.show_opponent_cards
        opponents = [p for p in self._state.players if not p.is_human and p.in_hand]
        if mode == ShowCards.NEVER or not opponents:
            return
        if mode == ShowCards.ALWAYS:
            shown = opponents
        else:
            count = min(2, self.rng.randint(1, len(opponents)))
            shown = self.rng.sample(opponents, count)
        for player in shown:
            player.show_cards = True

    def _finish_hand(self):
        """Award the pot and record results."""
        state = self._state
        self._hand_active = False
        self._cancel_ai_task()

        contesting = state.players_in_hand
        if len(contesting) == 1:
            winner = contesting[0]
            winner.chips += self.pot.total
            self._last_results = [HandResult(
                player_id=winner.id, cards=tuple(winner.hole_cards), hand_rank=0,
                hand_name="Winner by default", winnings=self.pot.total,
            )]
        else:
            ranked = rank_hands(
                (p, evaluate_hand(p.hole_cards + state.community_cards)) for p in contesting
            )
            best = ranked[0][1]
            winners = [(p, ev) for p, ev in ranked if compare_hands(ev, best) == 0]
            payouts = self.pot.distribute([p.seat for p, _ in winners],
                                          state.dealer_index, len(state.players))
            self._last_results = []
            for player, evaluation in winners:
                player.chips += payouts[player.seat]
                self._last_results.append(HandResult(
                    player_id=player.id, cards=evaluation.cards, hand_rank=int(evaluation.rank),
                    hand_name=evaluation.name, winnings=payouts[player.seat],
                ))

        for result in self._last_results:
            logger.info("Hand #%d: %s wins %d (%s)", state.hand_number, result.player_id,
                        result.winnings, result.hand_name)
        self.pot.reset_hand()
        state.pot = 0
        self._version += 1

    # AI scheduling

    def start_ai_actions(self):
        """Schedule the current seat's decision if it belongs to an AI."""
        with self._lock:
            self._schedule_ai_action()

    def stop_ai_actions(self):
        """Cancel any pending AI decision."""
        with self._lock:
            self._cancel_ai_task()

    def dispose(self):
        """Stop all AI activity. The game cannot be used for new hands afterwards."""
        with self._lock:
            self._disposed = True
            self._cancel_ai_task()

    def _cancel_ai_task(self):
        if self._ai_task is not None:
            self._ai_task.cancel()
            self._ai_task = None

    def _schedule_ai_action(self):
        self._cancel_ai_task()
        if self._disposed or not self._hand_active:
            return
        state = self._state
        player = state.current_player
        if player is None or player.is_human or not player.can_act:
            return

        low, high = self.settings.ai_delay_range
        delay = self.rng.uniform(low, high)
        seat, version = state.current_player_index, self._version
        self._ai_task = self.scheduler.schedule(delay, lambda: self._run_ai_turn(seat, version))

    def _run_ai_turn(self, seat: int, version: int):
        """Scheduler callback: decide and act for an AI seat if it is still its turn."""
        with self._lock:
            state = self._state
            if (self._disposed or version != self._version or not self._hand_active
                    or state.current_player_index != seat):
                logger.debug("Ignoring stale AI turn for seat %d", seat)
                return
            self._ai_task = None

            player = state.current_player
            ai = self.ai_players.get(player.id)
            legal = self.get_valid_actions()
            if ai is None or not legal:
                return

            decision = None
            try:
                snapshot = copy.deepcopy(state)
                decision = ai.decide(snapshot.players[seat], snapshot, legal)
            except Exception:
                logger.exception("AI decision failed for %s", player.name)

            if decision is not None:
                if decision.action in legal and self._apply_action(
                        decision.action, decision.amount, player.id):
                    logger.debug("%s: %s", player.name, decision.rationale)
                    return
                logger.warning("%s chose illegal action %s %s; falling back",
                               player.name, decision.action, decision.amount)

            for fallback in (ActionType.CHECK, ActionType.FOLD):
                if fallback in legal and self._apply_action(fallback, None, player.id):
                    return
            self._apply_action(legal[0], None, player.id)
