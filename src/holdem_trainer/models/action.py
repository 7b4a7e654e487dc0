"""Action and Stage models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Stage(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"

    @property
    def order(self) -> int:
        return ["preflop", "flop", "turn", "river", "showdown"].index(self.value)

    @property
    def next_stage(self) -> "Stage":
        stages = list(Stage)
        return stages[min(self.order + 1, len(stages) - 1)]


class ActionType(str, Enum):
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"
    ALL_IN = "all-in"

    @property
    def is_aggressive(self) -> bool:
        return self in (ActionType.BET, ActionType.RAISE, ActionType.ALL_IN)

    @property
    def is_voluntary(self) -> bool:
        return self not in (ActionType.FOLD, ActionType.CHECK)

    @property
    def takes_amount(self) -> bool:
        return self in (ActionType.BET, ActionType.RAISE)


@dataclass(frozen=True)
class PlayerAction:
    """A single successful action in the hand's action log.

    For bets and raises ``amount`` is the raise increment over the table's
    maximum bet; for calls and all-ins it is the chips actually moved.
    """
    player_id: str
    seat: int
    action_type: ActionType
    amount: int = 0
    stage: Stage = Stage.PREFLOP
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        if self.action_type in (ActionType.FOLD, ActionType.CHECK):
            return f"{self.player_id} {self.action_type.value}s"
        if self.action_type == ActionType.ALL_IN:
            return f"{self.player_id} goes all-in for {self.amount}"
        return f"{self.player_id} {self.action_type.value}s {self.amount}"
