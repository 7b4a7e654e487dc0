"""Quiz session with dynamic difficulty adjustment."""

import random
from dataclasses import dataclass
from typing import List, Optional

from holdem_trainer.models.game import Difficulty, GameState
from holdem_trainer.training.quiz import Answer, QuizGenerator, QuizQuestion, check_answer

_LEVELS = [Difficulty.BEGINNER, Difficulty.INTERMEDIATE, Difficulty.ADVANCED]


@dataclass(frozen=True)
class QuizResult:
    question_id: str
    answer: Answer
    correct: bool


class QuizSession:
    """Asks questions, grades answers and adapts difficulty.

    Difficulty moves up a level after more than 80% accuracy and down a
    level under 40%, once at least five questions have been answered at the
    current level.
    """

    def __init__(self, initial_difficulty: Difficulty = Difficulty.BEGINNER,
                 rng: Optional[random.Random] = None):
        self.generator = QuizGenerator(rng)
        self.current_difficulty = Difficulty(initial_difficulty)
        self.correct_count = 0
        self.total_count = 0
        self.history: List[QuizResult] = []

    def next_question(self, state: Optional[GameState] = None) -> QuizQuestion:
        return self.generator.generate(state, self.current_difficulty)

    def answer(self, question: QuizQuestion, answer: Answer) -> bool:
        """Grade an answer, record it and adjust difficulty.

        Returns:
            Whether the answer was correct.
        """
        correct = check_answer(question, answer)
        self.history.append(QuizResult(question.id, answer, correct))
        self.total_count += 1
        if correct:
            self.correct_count += 1
        self._adjust_difficulty()
        return correct

    def _adjust_difficulty(self):
        """Adjust difficulty based on recent performance."""
        if self.total_count < 5:
            return

        level = _LEVELS.index(self.current_difficulty)
        accuracy = self.correct_count / self.total_count

        if accuracy > 0.8 and level < len(_LEVELS) - 1:
            self.current_difficulty = _LEVELS[level + 1]
            self._reset_counters()
        elif accuracy < 0.4 and level > 0:
            self.current_difficulty = _LEVELS[level - 1]
            self._reset_counters()

    def _reset_counters(self):
        """Reset counters after difficulty change."""
        self.correct_count = 0
        self.total_count = 0

    @property
    def current_accuracy(self) -> float:
        """Get current accuracy rate."""
        if self.total_count == 0:
            return 0.0
        return self.correct_count / self.total_count

    @property
    def total_correct(self) -> int:
        return sum(1 for r in self.history if r.correct)
