"""Poker game engine module.

PokerGame is imported from ``holdem_trainer.engine.game``; it depends on the
agents package, which itself uses the evaluator.
"""

from holdem_trainer.engine.deck import Deck
from holdem_trainer.engine.evaluator import (
    HandEvaluator, HandEvaluation, HandRank, evaluate_hand, compare_hands, rank_hands,
)
from holdem_trainer.engine.pot import PotManager
from holdem_trainer.engine.scheduling import ManualScheduler, ThreadingScheduler, ScheduledTask

__all__ = ["Deck", "HandEvaluator", "HandEvaluation", "HandRank",
           "evaluate_hand", "compare_hands", "rank_hands", "PotManager",
           "ManualScheduler", "ThreadingScheduler", "ScheduledTask"]
