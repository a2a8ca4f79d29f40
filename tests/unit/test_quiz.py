"""Unit tests for the quiz question bank, session state machine and store."""

from random import Random
from unittest.mock import MagicMock

import pytest

from sql_quest.core.exceptions import QuizError, QuizSessionNotFoundError
from sql_quest.data.quiz_questions import (
    QUIZ_QUESTIONS,
    get_questions_by_category,
    get_questions_by_difficulty,
    get_random_questions,
)
from sql_quest.models.catalog import Difficulty, QuizQuestion
from sql_quest.quiz.session import QuizConfig, QuizSession, QuizStatus
from sql_quest.quiz.store import QuizSessionStore


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def questions() -> list[QuizQuestion]:
    """Three questions of rising difficulty; correct answers are 0, 1, 2."""
    return [q for q in QUIZ_QUESTIONS if q.id in (1, 2, 4)]


@pytest.fixture
def session(questions: list[QuizQuestion]) -> QuizSession:
    """A started three-question session."""
    quiz = QuizSession(questions, session_id="test-session")
    quiz.start()
    return quiz


def _answer(quiz: QuizSession, index: int) -> bool:
    quiz.select_answer(index)
    return quiz.submit_answer()


class TestQuestionBank:
    """Tests for the bundled quiz questions."""

    def test_bank_size_and_ids(self) -> None:
        """Test the bank has twelve uniquely numbered questions."""
        assert len(QUIZ_QUESTIONS) == 12
        assert len({q.id for q in QUIZ_QUESTIONS}) == 12

    def test_three_questions_per_difficulty(self) -> None:
        """Test questions are spread evenly over difficulties."""
        for difficulty in Difficulty:
            assert len(get_questions_by_difficulty(difficulty)) == 3

    def test_by_category_case_insensitive(self) -> None:
        """Test category lookup ignores case."""
        assert [q.id for q in get_questions_by_category("joins")] == [4]

    def test_random_questions_distinct(self) -> None:
        """Test random selection never repeats a question."""
        picked = get_random_questions(10, rng=Random(7))
        assert len(picked) == 10
        assert len({q.id for q in picked}) == 10

    def test_random_questions_capped_by_pool(self) -> None:
        """Test asking for more questions than exist."""
        assert len(get_random_questions(50, rng=Random(1))) == 12

    def test_random_questions_reproducible(self) -> None:
        """Test a seeded rng gives the same quiz."""
        first = [q.id for q in get_random_questions(5, rng=Random(42))]
        second = [q.id for q in get_random_questions(5, rng=Random(42))]
        assert first == second

    def test_correct_answer_must_be_an_option(self) -> None:
        """Test the model rejects an out-of-range answer index."""
        with pytest.raises(ValueError):
            QuizQuestion(
                id=99,
                difficulty=Difficulty.BEGINNER,
                category="SELECT",
                question="?",
                options=["a", "b"],
                correct_answer=2,
            )


class TestQuizConfig:
    """Tests for QuizConfig."""

    def test_defaults(self) -> None:
        """Test built-in defaults."""
        config = QuizConfig()
        assert config.time_limit == 300
        assert config.questions_per_quiz == 10
        assert config.passing_score == 70
        assert [config.weight_for(d) for d in Difficulty] == [1, 2, 3, 4]

    def test_from_settings(self) -> None:
        """Test values are read from settings."""
        settings = MagicMock(
            QUIZ_TIME_LIMIT_SECONDS=60,
            QUIZ_QUESTIONS_PER_QUIZ=5,
            QUIZ_PASSING_SCORE=50,
        )
        config = QuizConfig(settings)
        assert (config.time_limit, config.questions_per_quiz, config.passing_score) == (60, 5, 50)


class TestQuizSessionTransitions:
    """Tests for the session state machine."""

    def test_initial_state(self, questions: list[QuizQuestion]) -> None:
        """Test a new session is ready with a full timer."""
        quiz = QuizSession(questions)
        assert quiz.status is QuizStatus.READY
        assert quiz.time_left == 300
        assert quiz.score == 0
        assert quiz.current_question is questions[0]

    def test_needs_questions(self) -> None:
        """Test an empty quiz is rejected."""
        with pytest.raises(QuizError):
            QuizSession([])

    def test_start_only_once(self, session: QuizSession) -> None:
        """Test start from a non-ready state."""
        assert session.status is QuizStatus.IN_PROGRESS
        with pytest.raises(QuizError):
            session.start()

    def test_select_can_change_before_submit(self, session: QuizSession) -> None:
        """Test the selection may change until submitted."""
        session.select_answer(2)
        session.select_answer(0)
        assert session.submit_answer() is True
        assert session.score == 1

    def test_select_out_of_range(self, session: QuizSession) -> None:
        """Test answer indices must point at an option."""
        with pytest.raises(QuizError, match="out of range"):
            session.select_answer(4)

    def test_submit_requires_selection(self, session: QuizSession) -> None:
        """Test submitting with nothing selected."""
        with pytest.raises(QuizError, match="Select an answer"):
            session.submit_answer()

    def test_submit_moves_to_review(self, session: QuizSession) -> None:
        """Test submission shows the review state and locks the answer."""
        assert _answer(session, 3) is False
        assert session.status is QuizStatus.REVIEWING
        assert session.score == 0
        with pytest.raises(QuizError):
            session.select_answer(0)
        with pytest.raises(QuizError):
            session.submit_answer()

    def test_advance_to_next_question(self, session: QuizSession, questions) -> None:
        """Test advancing clears the selection and shows the next question."""
        _answer(session, 0)
        session.advance()
        assert session.status is QuizStatus.IN_PROGRESS
        assert session.current_index == 1
        assert session.selected_answer is None
        assert session.current_question is questions[1]

    def test_advance_requires_review(self, session: QuizSession) -> None:
        """Test advancing before submitting."""
        with pytest.raises(QuizError):
            session.advance()

    def test_full_quiz_scoring(self, session: QuizSession) -> None:
        """Test score, weights and pass mark after the last question."""
        _answer(session, 0)  # beginner, correct
        session.advance()
        _answer(session, 0)  # beginner, wrong
        session.advance()
        _answer(session, 2)  # intermediate, correct
        session.advance()

        assert session.status is QuizStatus.COMPLETED
        assert session.current_question is None
        assert session.score == 2
        assert session.weighted_score == 3
        assert session.max_weighted_score == 4
        assert session.percentage == 67
        assert session.passed is False
        assert [a.correct for a in session.answers] == [True, False, True]

    def test_perfect_score_passes(self, session: QuizSession) -> None:
        """Test passing at 100 percent."""
        for index in (0, 1, 2):
            _answer(session, index)
            session.advance()
        assert session.percentage == 100
        assert session.passed is True

    def test_complete_early(self, session: QuizSession) -> None:
        """Test ending the quiz early keeps the score so far."""
        _answer(session, 0)
        session.complete()
        assert session.status is QuizStatus.COMPLETED
        assert session.score == 1
        with pytest.raises(QuizError):
            session.complete()

    def test_complete_requires_start(self, questions) -> None:
        """Test a ready session cannot be completed."""
        with pytest.raises(QuizError):
            QuizSession(questions).complete()


class TestQuizTimer:
    """Tests for the countdown."""

    def test_tick_counts_down(self, session: QuizSession) -> None:
        """Test ticking reduces remaining time."""
        session.tick()
        session.tick(9)
        assert session.time_left == 290
        assert session.status is QuizStatus.IN_PROGRESS

    def test_tick_ignored_before_start(self, questions) -> None:
        """Test the timer does not run in the ready state."""
        quiz = QuizSession(questions)
        quiz.tick(100)
        assert quiz.time_left == 300

    def test_negative_tick_rejected(self, session: QuizSession) -> None:
        """Test negative ticks are a caller error."""
        with pytest.raises(ValueError):
            session.tick(-1)

    def test_timeout_completes(self, session: QuizSession) -> None:
        """Test reaching zero completes the quiz."""
        session.tick(1000)
        assert session.time_left == 0
        assert session.status is QuizStatus.COMPLETED
        assert session.timed_out is True

    def test_timeout_scores_pending_selection(self, session: QuizSession) -> None:
        """Test a selected but unsubmitted correct answer counts at timeout."""
        session.select_answer(0)
        session.tick(300)
        assert session.score == 1
        assert len(session.answers) == 1

    def test_timeout_in_review_does_not_double_count(self, session: QuizSession) -> None:
        """Test a submitted answer is not scored again at timeout."""
        _answer(session, 0)
        session.tick(300)
        assert session.score == 1
        assert len(session.answers) == 1

    def test_tick_after_completion_is_noop(self, session: QuizSession) -> None:
        """Test ticking a completed quiz changes nothing."""
        session.complete()
        session.tick(10)
        assert session.time_left == 300


class TestQuizSessionStore:
    """Tests for the in-memory session store."""

    def test_create_starts_session(self) -> None:
        """Test created sessions are started and retrievable."""
        store = QuizSessionStore(rng=Random(3))
        quiz = store.create()
        assert quiz.status is QuizStatus.IN_PROGRESS
        assert quiz.total_questions == 10
        assert store.get(quiz.session_id) is quiz
        assert len(store) == 1

    def test_create_with_filters(self) -> None:
        """Test difficulty and category filters."""
        store = QuizSessionStore(rng=Random(3))
        quiz = store.create(difficulty=Difficulty.EXPERT, question_count=2)
        assert quiz.total_questions == 2
        assert all(q.difficulty is Difficulty.EXPERT for q in quiz.questions)
        assert store.create(category="cte").questions[0].id == 9

    def test_create_with_no_matches(self) -> None:
        """Test filters that match nothing."""
        with pytest.raises(QuizError, match="No questions"):
            QuizSessionStore().create(category="NoSuchTopic")

    def test_unknown_session(self) -> None:
        """Test lookups of unknown ids."""
        store = QuizSessionStore()
        with pytest.raises(QuizSessionNotFoundError):
            store.get("missing")
        with pytest.raises(QuizSessionNotFoundError):
            store.delete("missing")

    def test_answer_advance_complete(self) -> None:
        """Test store operations drive the session."""
        store = QuizSessionStore(rng=Random(5))
        quiz = store.create(question_count=2)
        correct = quiz.current_question.correct_answer

        store.answer(quiz.session_id, correct)
        assert quiz.score == 1
        store.advance(quiz.session_id)
        assert quiz.current_index == 1
        store.complete(quiz.session_id)
        assert quiz.status is QuizStatus.COMPLETED

    def test_elapsed_time_advances_timer(self) -> None:
        """Test each access applies the whole seconds elapsed."""
        clock = FakeClock()
        store = QuizSessionStore(clock=clock)
        quiz = store.create()

        clock.advance(10.6)
        store.get(quiz.session_id)
        assert quiz.time_left == 290

        clock.advance(0.5)
        store.get(quiz.session_id)
        assert quiz.time_left == 289

    def test_time_runs_out_between_requests(self) -> None:
        """Test a session idle past its limit comes back completed."""
        clock = FakeClock()
        store = QuizSessionStore(clock=clock)
        quiz = store.create()

        clock.advance(301)
        assert store.get(quiz.session_id).status is QuizStatus.COMPLETED
        with pytest.raises(QuizError):
            store.answer(quiz.session_id, 0)

    def test_least_recently_used_evicted(self) -> None:
        """Test the store is bounded."""
        store = QuizSessionStore(max_sessions=2)
        first = store.create()
        second = store.create()
        store.get(first.session_id)
        store.create()

        assert len(store) == 2
        store.get(first.session_id)
        with pytest.raises(QuizSessionNotFoundError):
            store.get(second.session_id)

    def test_idle_sessions_expire(self) -> None:
        """Test sessions are dropped after the idle timeout."""
        clock = FakeClock()
        store = QuizSessionStore(clock=clock, ttl_seconds=600)
        quiz = store.create()

        clock.advance(601)
        with pytest.raises(QuizSessionNotFoundError):
            store.get(quiz.session_id)

    def test_delete(self) -> None:
        """Test removing a session."""
        store = QuizSessionStore()
        quiz = store.create()
        store.delete(quiz.session_id)
        assert len(store) == 0

    def test_from_settings(self) -> None:
        """Test the store reads its limits from settings."""
        settings = MagicMock(
            QUIZ_TIME_LIMIT_SECONDS=120,
            QUIZ_QUESTIONS_PER_QUIZ=3,
            QUIZ_PASSING_SCORE=60,
            QUIZ_MAX_SESSIONS=5,
            QUIZ_SESSION_TTL_SECONDS=900,
        )
        store = QuizSessionStore.from_settings(settings, rng=Random(0))
        quiz = store.create()
        assert quiz.total_questions == 3
        assert quiz.time_left == 120
