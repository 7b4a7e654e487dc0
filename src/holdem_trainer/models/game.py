"""Game data models: settings, player state, and table state."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from holdem_trainer import config
from holdem_trainer.errors import ConfigurationError
from holdem_trainer.models.action import PlayerAction, Stage
from holdem_trainer.models.card import Card


class ShowCards(str, Enum):
    """When AI hole cards are revealed to the human after the flop."""
    NEVER = "never"
    SOMETIMES = "sometimes"
    ALWAYS = "always"


class QuizFrequency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def probability(self) -> float:
        """Chance of a quiz after each successful human action."""
        return {"low": 0.10, "medium": 0.25, "high": 0.40}[self.value]


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass
class GameSettings:
    """Table configuration supplied by the UI layer."""
    num_players: int = 6
    starting_chips: int = 1500
    small_blind: int = 25
    big_blind: int = 50
    show_opponent_cards: ShowCards = ShowCards.SOMETIMES
    quiz_frequency: QuizFrequency = QuizFrequency.MEDIUM
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    enable_hints: bool = True
    human_seat: Optional[int] = 0
    ai_delay_range: Tuple[float, float] = (0.5, 3.0)

    def __post_init__(self):
        self.show_opponent_cards = ShowCards(self.show_opponent_cards)
        self.quiz_frequency = QuizFrequency(self.quiz_frequency)
        self.difficulty = Difficulty(self.difficulty)
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError if the settings cannot run a game."""
        if not 2 <= self.num_players <= 10:
            raise ConfigurationError(
                f"num_players must be between 2 and 10, got {self.num_players}")
        if self.starting_chips <= 0:
            raise ConfigurationError("starting_chips must be positive")
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ConfigurationError("blinds must be positive")
        if self.big_blind < self.small_blind:
            raise ConfigurationError("big_blind must be at least small_blind")
        if self.human_seat is not None and not 0 <= self.human_seat < self.num_players:
            raise ConfigurationError(f"human_seat {self.human_seat} is not at the table")
        low, high = self.ai_delay_range
        if low < 0 or high < low:
            raise ConfigurationError(f"invalid ai_delay_range {self.ai_delay_range}")

    @classmethod
    def from_env(cls, **overrides) -> "GameSettings":
        """Build settings from environment defaults, with keyword overrides."""
        values = dict(
            num_players=config.DEFAULT_NUM_PLAYERS,
            starting_chips=config.DEFAULT_STARTING_CHIPS,
            small_blind=config.DEFAULT_SMALL_BLIND,
            big_blind=config.DEFAULT_BIG_BLIND,
            show_opponent_cards=config.SHOW_OPPONENT_CARDS,
            quiz_frequency=config.QUIZ_FREQUENCY,
            difficulty=config.DIFFICULTY,
            enable_hints=config.ENABLE_HINTS,
            ai_delay_range=(config.AI_MIN_DELAY, config.AI_MAX_DELAY),
        )
        values.update(overrides)
        return cls(**values)


@dataclass
class PlayerState:
    """A seated player. Chips persist across hands; the rest resets per hand."""
    id: str
    name: str
    chips: int
    seat: int
    is_human: bool = False
    hole_cards: List[Card] = field(default_factory=list)
    is_active: bool = True
    is_folded: bool = False
    is_all_in: bool = False
    has_acted: bool = False
    current_bet: int = 0
    show_cards: bool = False

    def reset_for_hand(self) -> None:
        self.hole_cards = []
        self.is_folded = False
        self.is_all_in = False
        self.has_acted = False
        self.current_bet = 0
        self.show_cards = False
        self.is_active = self.chips > 0

    def reset_for_round(self) -> None:
        self.has_acted = False
        self.current_bet = 0

    @property
    def can_act(self) -> bool:
        """Still contesting the pot and able to put in more chips."""
        return self.is_active and not self.is_folded and not self.is_all_in

    @property
    def in_hand(self) -> bool:
        return self.is_active and not self.is_folded


@dataclass
class SidePot:
    """Reserved; the simplified model plays every hand for a single pot."""
    amount: int = 0
    eligible_players: List[str] = field(default_factory=list)


@dataclass
class GameState:
    """Complete table state for the current hand."""
    stage: Stage
    pot: int
    community_cards: List[Card]
    players: List[PlayerState]
    dealer_index: int
    small_blind: int
    big_blind: int
    current_player_index: int
    action_log: List[PlayerAction]
    min_raise: int
    side_pots: List[SidePot] = field(default_factory=list)
    hand_number: int = 0

    @property
    def max_bet(self) -> int:
        """The largest bet any player has made this betting round."""
        return max((p.current_bet for p in self.players), default=0)

    @property
    def players_in_hand(self) -> List[PlayerState]:
        """Players who are seated with chips and have not folded."""
        return [p for p in self.players if p.in_hand]

    @property
    def current_player(self) -> Optional[PlayerState]:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    @property
    def human(self) -> Optional[PlayerState]:
        for p in self.players:
            if p.is_human:
                return p
        return None

    def amount_to_call(self, player: PlayerState) -> int:
        return max(0, self.max_bet - player.current_bet)


@dataclass(frozen=True)
class HandResult:
    """One winner's share of a completed hand."""
    player_id: str
    cards: Tuple[Card, ...]
    hand_rank: int
    hand_name: str
    winnings: int
