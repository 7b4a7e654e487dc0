"""Tests for quiz questions, grading and quiz sessions."""

import random

import pytest

from holdem_trainer.engine.game import PokerGame
from holdem_trainer.engine.scheduling import ManualScheduler
from holdem_trainer.models.game import Difficulty, GameSettings, QuizFrequency
from holdem_trainer.training.quiz import (
    QuizGenerator, QuizQuestion, QuizType, check_answer, should_show_quiz,
)
from holdem_trainer.training.session import QuizSession


class FixedRandom:
    """Random source whose random() always returns the same value."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def table_state():
    """Six-handed table, first hand; the human (seat 0) faces the big blind."""
    game = PokerGame(GameSettings(num_players=6), rng=random.Random(3),
                     scheduler=ManualScheduler())
    game.start_new_hand()
    return game.get_game_state()


def _question(qtype, answer):
    return QuizQuestion(id="q", question="?", type=qtype, answer=answer, explanation="")


class TestShouldShowQuiz:
    """Tests for the quiz roll."""

    def test_frequencies(self):
        rng = FixedRandom(0.2)
        assert not should_show_quiz(QuizFrequency.LOW, rng)
        assert should_show_quiz(QuizFrequency.MEDIUM, rng)
        assert should_show_quiz("high", rng)

    def test_probabilities(self):
        assert QuizFrequency.LOW.probability == 0.10
        assert QuizFrequency.MEDIUM.probability == 0.25
        assert QuizFrequency.HIGH.probability == 0.40


class TestCheckAnswer:
    """Tests for answer grading."""

    def test_numeric_tolerance(self):
        question = _question(QuizType.NUMERIC, 20.0)
        assert check_answer(question, 20.05)
        assert check_answer(question, "20")
        assert not check_answer(question, 20.2)
        assert not check_answer(question, "twenty")

    def test_percentage_tolerance(self):
        question = _question(QuizType.PERCENTAGE, 40.0)
        assert check_answer(question, "41.5%")
        assert check_answer(question, 38.5)
        assert not check_answer(question, 43)

    def test_ratio(self):
        question = _question(QuizType.RATIO, "3:1")
        assert check_answer(question, " 3:1 ")
        assert not check_answer(question, "2:1")

    def test_boolean(self):
        question = _question(QuizType.BOOLEAN, True)
        assert check_answer(question, True)
        assert check_answer(question, "yes")
        assert check_answer(question, "Y")
        assert not check_answer(question, "no")

    def test_multiple_choice(self):
        question = QuizGenerator.hand_ranking_question()
        assert check_answer(question, 0)
        assert check_answer(question, "0")
        assert not check_answer(question, "2")
        assert not check_answer(question, "royal")


class TestQuizGenerator:
    """Tests for building questions from the table."""

    def test_no_table_gives_hand_ranking(self):
        question = QuizGenerator(random.Random(1)).generate(None)
        assert question.id == "hand_rankings"
        assert question.options[question.answer] == "Royal Flush"

    def test_csi_question(self, table_state):
        question = QuizGenerator(random.Random(1)).csi_question(table_state)
        assert question.id == "csi_calc"
        assert question.type == QuizType.NUMERIC
        assert question.answer == 20.0
        assert "1500" in question.question

    def test_pot_odds_question(self, table_state):
        question = QuizGenerator(random.Random(1)).pot_odds_question(table_state)
        assert question.type == QuizType.PERCENTAGE
        # Calling 50 into a pot of 75
        assert question.answer == 40.0

    def test_push_fold_question(self):
        question = QuizGenerator(random.Random(2)).push_fold_question()
        assert question.type == QuizType.BOOLEAN
        assert isinstance(question.answer, bool)
        assert question.difficulty == Difficulty.ADVANCED

    def test_beginner_questions(self, table_state):
        generator = QuizGenerator(random.Random(4))
        ids = {generator.generate(table_state, Difficulty.BEGINNER).id for _ in range(30)}
        assert ids <= {"csi_calc", "hand_rankings"}

    def test_advanced_questions(self, table_state):
        generator = QuizGenerator(random.Random(4))
        ids = {generator.generate(table_state, Difficulty.ADVANCED).id for _ in range(50)}
        assert ids == {"csi_calc", "pot_odds", "push_fold"}


class TestQuizSession:
    """Tests for difficulty adjustment."""

    def test_moves_up_after_streak(self):
        session = QuizSession(Difficulty.BEGINNER, rng=random.Random(1))
        question = QuizGenerator.hand_ranking_question()
        for _ in range(5):
            assert session.answer(question, 0)
        assert session.current_difficulty == Difficulty.INTERMEDIATE
        assert session.total_count == 0
        assert session.total_correct == 5

    def test_moves_down_after_misses(self):
        session = QuizSession(Difficulty.INTERMEDIATE, rng=random.Random(1))
        question = QuizGenerator.hand_ranking_question()
        for _ in range(5):
            assert not session.answer(question, 3)
        assert session.current_difficulty == Difficulty.BEGINNER

    def test_stays_at_limits(self):
        session = QuizSession(Difficulty.BEGINNER, rng=random.Random(1))
        question = QuizGenerator.hand_ranking_question()
        for _ in range(5):
            session.answer(question, 3)
        assert session.current_difficulty == Difficulty.BEGINNER

    def test_needs_five_answers(self):
        session = QuizSession(Difficulty.BEGINNER, rng=random.Random(1))
        question = QuizGenerator.hand_ranking_question()
        for _ in range(4):
            session.answer(question, 0)
        assert session.current_difficulty == Difficulty.BEGINNER
        assert session.current_accuracy == 1.0

    def test_accuracy(self):
        session = QuizSession(rng=random.Random(1))
        assert session.current_accuracy == 0.0
        question = QuizGenerator.hand_ranking_question()
        session.answer(question, 0)
        session.answer(question, 1)
        assert session.current_accuracy == 0.5
        assert [r.correct for r in session.history] == [True, False]

    def test_next_question_uses_difficulty(self, table_state):
        session = QuizSession(Difficulty.ADVANCED, rng=random.Random(2))
        question = session.next_question(table_state)
        assert question.id in {"csi_calc", "pot_odds", "push_fold"}
