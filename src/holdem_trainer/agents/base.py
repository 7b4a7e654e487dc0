"""AI player: a personality, its decision engine, and lightweight stats."""

import random
from typing import Dict, Optional, Sequence

from holdem_trainer.agents.decision import Decision, DecisionEngine
from holdem_trainer.agents.personality import AIPersonality, PersonalityType
from holdem_trainer.models.action import ActionType, Stage
from holdem_trainer.models.game import GameState, PlayerState


class AIPlayer:
    """An AI-controlled seat."""

    def __init__(
        self,
        player_id: str,
        personality_type: PersonalityType,
        personality: AIPersonality,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the AI player.

        Args:
            player_id: The id of the seat this AI plays.
            personality_type: The archetype the personality was drawn from.
            personality: The (jittered) traits used for decisions.
            rng: Random source for the decision engine.
        """
        self.player_id = player_id
        self.personality_type = personality_type
        self.personality = personality
        self.decision_engine = DecisionEngine(personality, rng)

        # Track statistics
        self.decisions_made = 0
        self.hands_played = 0
        self.vpip_count = 0
        self.pfr_count = 0
        self.aggressive_actions = 0
        self.passive_actions = 0
        self._voluntary_this_hand = False
        self._raised_this_hand = False

    def decide(self, player: PlayerState, state: GameState,
               legal_actions: Sequence[ActionType]) -> Decision:
        self.decisions_made += 1
        return self.decision_engine.decide(player, state, legal_actions)

    def start_hand(self):
        """Called when the seat is dealt into a new hand."""
        self.hands_played += 1
        self._voluntary_this_hand = False
        self._raised_this_hand = False

    def record_action(self, action_type: ActionType, stage: Stage):
        """Record an applied action for statistics.

        Args:
            action_type: The type of action taken.
            stage: The betting round it was taken in.
        """
        if action_type in (ActionType.CALL, ActionType.CHECK):
            self.passive_actions += 1
        elif action_type.is_aggressive:
            self.aggressive_actions += 1

        if stage != Stage.PREFLOP:
            return
        if action_type.is_voluntary and not self._voluntary_this_hand:
            self._voluntary_this_hand = True
            self.vpip_count += 1
        if action_type.is_aggressive and not self._raised_this_hand:
            self._raised_this_hand = True
            self.pfr_count += 1

    @property
    def vpip_pct(self) -> float:
        """Share of hands where chips were put in voluntarily preflop."""
        if self.hands_played == 0:
            return 0.0
        return self.vpip_count / self.hands_played

    @property
    def pfr_pct(self) -> float:
        if self.hands_played == 0:
            return 0.0
        return self.pfr_count / self.hands_played

    @property
    def aggression_factor(self) -> float:
        """Calculate aggression factor (aggressive / passive)."""
        if self.passive_actions == 0:
            return float(self.aggressive_actions) if self.aggressive_actions > 0 else 1.0
        return self.aggressive_actions / self.passive_actions

    def get_stats(self) -> Dict[str, float]:
        return {
            "decisions_made": self.decisions_made,
            "hands_played": self.hands_played,
            "vpip": self.vpip_pct,
            "pfr": self.pfr_pct,
            "aggression_factor": self.aggression_factor,
        }

    def __repr__(self) -> str:
        return f"AIPlayer({self.player_id!r}, {self.personality.name})"
