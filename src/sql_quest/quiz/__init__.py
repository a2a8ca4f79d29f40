"""Timed multiple-choice SQL quiz: session state machine and session store."""

from sql_quest.quiz.session import QuizConfig, QuizSession, QuizStatus
from sql_quest.quiz.store import QuizSessionStore

__all__ = [
    "QuizConfig",
    "QuizSession",
    "QuizStatus",
    "QuizSessionStore",
]
