"""Quiz questions drawn from the live table."""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from holdem_trainer.calculators.csi import calculate_csi, hand_notation, should_push
from holdem_trainer.calculators.odds import calculate_pot_odds
from holdem_trainer.models.card import Card, full_deck
from holdem_trainer.models.game import Difficulty, GameState, QuizFrequency
from holdem_trainer.models.position import PositionGroup

Answer = Union[str, int, float, bool]

NUMERIC_TOLERANCE = 0.1
PERCENTAGE_TOLERANCE = 2.0


class QuizType(str, Enum):
    NUMERIC = "numeric"
    PERCENTAGE = "percentage"
    RATIO = "ratio"
    BOOLEAN = "boolean"
    MULTIPLE_CHOICE = "multiple_choice"


@dataclass
class QuizQuestion:
    """A single quiz question.

    For multiple-choice questions ``answer`` is the index into ``options``.
    """
    id: str
    question: str
    type: QuizType
    answer: Answer
    explanation: str
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    category: str = ""
    options: List[str] = field(default_factory=list)


def should_show_quiz(frequency: QuizFrequency, rng: Optional[random.Random] = None) -> bool:
    """Roll for a quiz after a human action."""
    rng = rng or random.Random()
    return rng.random() < QuizFrequency(frequency).probability


def check_answer(question: QuizQuestion, answer: Answer) -> bool:
    """Grade an answer.

    Numeric answers are accepted within 0.1, percentages within 2 points and
    ratios case-insensitively; everything else must match exactly.
    """
    if question.type in (QuizType.NUMERIC, QuizType.PERCENTAGE):
        tolerance = NUMERIC_TOLERANCE if question.type == QuizType.NUMERIC else PERCENTAGE_TOLERANCE
        try:
            value = float(str(answer).strip().rstrip("%"))
        except ValueError:
            return False
        return abs(value - float(question.answer)) < tolerance

    if question.type == QuizType.RATIO:
        return str(answer).strip().lower() == str(question.answer).lower()

    if question.type == QuizType.BOOLEAN and isinstance(answer, str):
        answer = answer.strip().lower() in ("y", "yes", "true", "1")

    if question.type == QuizType.MULTIPLE_CHOICE and isinstance(answer, str):
        try:
            answer = int(answer)
        except ValueError:
            return False

    return answer == question.answer


class QuizGenerator:
    """Builds questions about CSI, pot odds, push/fold and hand rankings."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate(self, state: Optional[GameState] = None,
                 difficulty: Difficulty = Difficulty.INTERMEDIATE) -> QuizQuestion:
        """Pick a question suited to the table and difficulty.

        Without a table (or a human seat) only the hand-ranking question is
        possible.
        """
        human = state.human if state is not None else None
        if human is None:
            return self.hand_ranking_question()

        difficulty = Difficulty(difficulty)
        choices = [self.csi_question]
        owed = state.amount_to_call(human)
        if difficulty != Difficulty.BEGINNER and owed > 0:
            choices.append(self.pot_odds_question)
        if difficulty == Difficulty.ADVANCED:
            choices.append(self.push_fold_question)
        if difficulty == Difficulty.BEGINNER:
            choices.append(lambda _state: self.hand_ranking_question())

        return self.rng.choice(choices)(state)

    def csi_question(self, state: GameState) -> QuizQuestion:
        human = state.human
        csi = calculate_csi(human.chips, state.small_blind, state.big_blind)
        return QuizQuestion(
            id="csi_calc",
            question=(f"You have {human.chips} chips. Blinds are {state.small_blind}/"
                      f"{state.big_blind}. What is your CSI?"),
            type=QuizType.NUMERIC,
            answer=round(csi, 1),
            explanation=(f"CSI = Total Chips / (Small Blind + Big Blind) = {human.chips} / "
                         f"({state.small_blind} + {state.big_blind}) = {csi:.1f}"),
            difficulty=Difficulty.INTERMEDIATE,
            category="csi",
        )

    def pot_odds_question(self, state: GameState) -> QuizQuestion:
        """Required equity to call the bet the human is facing."""
        owed = state.amount_to_call(state.human)
        pot_before = state.pot - owed
        odds = calculate_pot_odds(pot_before, owed)
        return QuizQuestion(
            id="pot_odds",
            question=(f"The pot is {state.pot} and you must call {owed}. What equity (%) "
                      f"do you need to call profitably?"),
            type=QuizType.PERCENTAGE,
            answer=round(odds.required_equity_percent, 1),
            explanation=(f"Required equity = call / (pot + call) = {owed} / "
                         f"({state.pot} + {owed}) = {odds.required_equity_percent:.1f}%"),
            difficulty=Difficulty.INTERMEDIATE,
            category="pot_odds",
        )

    def push_fold_question(self, state: Optional[GameState] = None) -> QuizQuestion:
        """Random hand and short stack: push or fold from the button?"""
        cards: List[Card] = self.rng.sample(full_deck(), 2)
        csi = self.rng.choice([2, 4, 6])
        notation = hand_notation(cards)
        push = should_push(cards, csi, PositionGroup.BUTTON)
        return QuizQuestion(
            id="push_fold",
            question=f"On the button with a CSI of {csi}, should you push {notation}?",
            type=QuizType.BOOLEAN,
            answer=push,
            explanation=(f"{notation} is {'inside' if push else 'outside'} the button "
                         f"pushing range at CSI {csi}."),
            difficulty=Difficulty.ADVANCED,
            category="push_fold",
        )

    @staticmethod
    def hand_ranking_question() -> QuizQuestion:
        return QuizQuestion(
            id="hand_rankings",
            question="What is the strongest possible hand in Texas Hold'em?",
            type=QuizType.MULTIPLE_CHOICE,
            answer=0,
            options=["Royal Flush", "Straight Flush", "Four of a Kind", "Full House"],
            explanation="A Royal Flush (A-K-Q-J-T all same suit) is the strongest possible hand.",
            difficulty=Difficulty.BEGINNER,
            category="hand_rankings",
        )
