"""Data models for the hold'em trainer."""

from holdem_trainer.models.card import Card, Rank, Suit, parse_cards
from holdem_trainer.models.action import ActionType, Stage, PlayerAction
from holdem_trainer.models.position import Position, PositionGroup
from holdem_trainer.models.game import (
    ShowCards, QuizFrequency, Difficulty,
    GameSettings, PlayerState, SidePot, GameState, HandResult
)

__all__ = [
    "Card", "Rank", "Suit", "parse_cards",
    "ActionType", "Stage", "PlayerAction",
    "Position", "PositionGroup",
    "ShowCards", "QuizFrequency", "Difficulty",
    "GameSettings", "PlayerState", "SidePot", "GameState", "HandResult",
]
