"""Training module: quizzes and quiz sessions."""

from holdem_trainer.training.quiz import (
    QuizQuestion, QuizType, QuizGenerator, should_show_quiz, check_answer,
)
from holdem_trainer.training.session import QuizSession, QuizResult

__all__ = ["QuizQuestion", "QuizType", "QuizGenerator", "should_show_quiz",
           "check_answer", "QuizSession", "QuizResult"]
