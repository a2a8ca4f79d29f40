"""Quiz session state machine.

A session walks through its questions one at a time::

    ready -> in_progress <-> reviewing -> completed

Answers are picked with ``select_answer`` and locked in with
``submit_answer``; ``advance`` moves on from the review screen. The
countdown is driven externally through ``tick``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from sql_quest.core.exceptions import QuizError
from sql_quest.core.logging import get_logger
from sql_quest.models.catalog import Difficulty, QuizQuestion

if TYPE_CHECKING:
    from sql_quest.core.config import Settings

logger = get_logger(__name__)

DEFAULT_TIME_LIMIT_SECONDS = 300
DEFAULT_QUESTIONS_PER_QUIZ = 10
DEFAULT_PASSING_SCORE = 70
DEFAULT_DIFFICULTY_WEIGHTS: dict[Difficulty, int] = {
    Difficulty.BEGINNER: 1,
    Difficulty.INTERMEDIATE: 2,
    Difficulty.ADVANCED: 3,
    Difficulty.EXPERT: 4,
}


class QuizConfig:
    """Quiz configuration from Settings or defaults."""

    def __init__(self, settings: Settings | None = None) -> None:
        if settings:
            self.time_limit = settings.QUIZ_TIME_LIMIT_SECONDS
            self.questions_per_quiz = settings.QUIZ_QUESTIONS_PER_QUIZ
            self.passing_score = settings.QUIZ_PASSING_SCORE
        else:
            self.time_limit = DEFAULT_TIME_LIMIT_SECONDS
            self.questions_per_quiz = DEFAULT_QUESTIONS_PER_QUIZ
            self.passing_score = DEFAULT_PASSING_SCORE
        self.difficulty_weights = dict(DEFAULT_DIFFICULTY_WEIGHTS)

    def weight_for(self, difficulty: Difficulty) -> int:
        return self.difficulty_weights.get(difficulty, 1)


class QuizStatus(StrEnum):
    """Lifecycle states of a quiz session."""

    READY = "ready"
    IN_PROGRESS = "in_progress"
    REVIEWING = "reviewing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class AnswerRecord:
    """One scored answer."""

    question_id: int
    selected: int
    correct: bool


class QuizSession:
    """A single quiz attempt.

    Attributes:
        session_id: Unique session id.
        questions: Questions in the order they are asked.
        config: Timing and scoring configuration.
        status: Current lifecycle state.
        current_index: Index of the question being asked.
        selected_answer: Option picked for the current question, if any.
        score: Number of correct answers.
        weighted_score: Sum of difficulty weights of correct answers.
        time_left: Seconds remaining on the countdown.
        timed_out: Whether the countdown ended the quiz.
        answers: Scored answers in submission order.
    """

    def __init__(
        self,
        questions: list[QuizQuestion],
        config: QuizConfig | None = None,
        session_id: str | None = None,
    ) -> None:
        if not questions:
            raise QuizError("A quiz needs at least one question")

        self.session_id = session_id or uuid.uuid4().hex
        self.questions = list(questions)
        self.config = config or QuizConfig()
        self.status = QuizStatus.READY
        self.current_index = 0
        self.selected_answer: int | None = None
        self.score = 0
        self.weighted_score = 0
        self.time_left = self.config.time_limit
        self.timed_out = False
        self.answers: list[AnswerRecord] = []

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> QuizQuestion | None:
        """Question currently shown, or None once the quiz is completed."""
        if self.status is QuizStatus.COMPLETED:
            return None
        return self.questions[self.current_index]

    @property
    def percentage(self) -> int:
        """Share of questions answered correctly, rounded to a whole percent."""
        return round(self.score / self.total_questions * 100)

    @property
    def passed(self) -> bool:
        return self.percentage >= self.config.passing_score

    @property
    def max_weighted_score(self) -> int:
        return sum(self.config.weight_for(q.difficulty) for q in self.questions)

    @property
    def progress(self) -> float:
        """Position in the quiz as a percentage of questions reached."""
        return (self.current_index + 1) / self.total_questions * 100

    @property
    def is_active(self) -> bool:
        return self.status in (QuizStatus.IN_PROGRESS, QuizStatus.REVIEWING)

    def _require(self, *statuses: QuizStatus, action: str) -> None:
        if self.status not in statuses:
            raise QuizError(
                f"Cannot {action} while quiz is {self.status.value}",
                status=self.status.value,
            )

    def start(self) -> None:
        """Start the countdown and show the first question."""
        self._require(QuizStatus.READY, action="start")
        self.status = QuizStatus.IN_PROGRESS
        logger.info(
            "quiz_session_started",
            session_id=self.session_id,
            total_questions=self.total_questions,
            time_limit=self.config.time_limit,
        )

    def select_answer(self, answer_index: int) -> None:
        """Pick an option for the current question (may be changed until submitted)."""
        self._require(QuizStatus.IN_PROGRESS, action="select an answer")
        question = self.questions[self.current_index]
        if not 0 <= answer_index < len(question.options):
            raise QuizError(
                f"Answer index {answer_index} out of range for {len(question.options)} options",
                status=self.status.value,
            )
        self.selected_answer = answer_index

    def _score_selection(self) -> bool:
        question = self.questions[self.current_index]
        correct = question.is_correct(self.selected_answer)
        if correct:
            self.score += 1
            self.weighted_score += self.config.weight_for(question.difficulty)
        self.answers.append(
            AnswerRecord(question_id=question.id, selected=self.selected_answer, correct=correct)
        )
        return correct

    def submit_answer(self) -> bool:
        """Lock in the selected answer and show its explanation.

        Returns:
            True if the answer was correct.

        Raises:
            QuizError: If the quiz is not in progress or nothing is selected.
        """
        self._require(QuizStatus.IN_PROGRESS, action="submit an answer")
        if self.selected_answer is None:
            raise QuizError("Select an answer before submitting", status=self.status.value)

        correct = self._score_selection()
        self.status = QuizStatus.REVIEWING
        return correct

    def advance(self) -> None:
        """Move on from the review screen to the next question, or finish."""
        self._require(QuizStatus.REVIEWING, action="advance")
        if self.current_index < self.total_questions - 1:
            self.current_index += 1
            self.selected_answer = None
            self.status = QuizStatus.IN_PROGRESS
        else:
            self._finish()

    def complete(self) -> None:
        """End the quiz early."""
        self._require(QuizStatus.IN_PROGRESS, QuizStatus.REVIEWING, action="complete")
        self._finish()

    def tick(self, seconds: int = 1) -> None:
        """Count the timer down.

        When time runs out the quiz completes; an answer that was selected
        but not yet submitted still counts.

        Raises:
            ValueError: If ``seconds`` is negative.
        """
        if seconds < 0:
            raise ValueError(f"seconds must be non-negative, got {seconds}")
        if not self.is_active or seconds == 0:
            return

        self.time_left = max(0, self.time_left - seconds)
        if self.time_left == 0:
            if self.status is QuizStatus.IN_PROGRESS and self.selected_answer is not None:
                self._score_selection()
            self.timed_out = True
            self._finish()

    def _finish(self) -> None:
        self.status = QuizStatus.COMPLETED
        logger.info(
            "quiz_session_completed",
            session_id=self.session_id,
            score=self.score,
            total_questions=self.total_questions,
            percentage=self.percentage,
            passed=self.passed,
            timed_out=self.timed_out,
        )
