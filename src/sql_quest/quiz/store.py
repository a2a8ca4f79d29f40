"""In-memory quiz session store.

Sessions live in a bounded ``TTLCache``: when full, the least recently used
session is evicted, and idle sessions expire. Every access first advances
the session countdown by the whole seconds elapsed since it was last seen.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from random import Random
from typing import TYPE_CHECKING

from cachetools import TTLCache

from sql_quest.core.exceptions import QuizError, QuizSessionNotFoundError
from sql_quest.core.logging import get_logger
from sql_quest.data.quiz_questions import QUIZ_QUESTIONS, get_random_questions
from sql_quest.quiz.session import QuizConfig, QuizSession

if TYPE_CHECKING:
    from sql_quest.core.config import Settings
    from sql_quest.models.catalog import Difficulty, QuizQuestion

logger = get_logger(__name__)

DEFAULT_MAX_SESSIONS = 1000
DEFAULT_SESSION_TTL_SECONDS = 3600


class _TrackedSession:
    """A session plus the clock reading its countdown was last advanced to."""

    def __init__(self, session: QuizSession, last_tick: float) -> None:
        self.session = session
        self.last_tick = last_tick


class QuizSessionStore:
    """Thread-safe registry of active quiz sessions."""

    def __init__(
        self,
        config: QuizConfig | None = None,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        rng: Random | None = None,
        questions: list[QuizQuestion] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            config: Quiz configuration applied to new sessions.
            max_sessions: Sessions kept before the least recently used is evicted.
            ttl_seconds: Idle time after which a session expires.
            clock: Monotonic clock in seconds (injectable for tests).
            rng: Random source for question selection.
            questions: Question bank (defaults to the bundled one).
        """
        self.config = config or QuizConfig()
        self._clock = clock
        self._rng = rng or Random()
        self._questions = list(QUIZ_QUESTIONS if questions is None else questions)
        self._sessions: TTLCache[str, _TrackedSession] = TTLCache(
            maxsize=max_sessions,
            ttl=ttl_seconds,
            timer=clock,
        )
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> QuizSessionStore:
        return cls(
            config=QuizConfig(settings),
            max_sessions=settings.QUIZ_MAX_SESSIONS,
            ttl_seconds=settings.QUIZ_SESSION_TTL_SECONDS,
            **kwargs,
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _select_questions(
        self,
        difficulty: Difficulty | None,
        category: str | None,
        count: int,
    ) -> list[QuizQuestion]:
        pool = self._questions
        if difficulty is not None:
            pool = [q for q in pool if q.difficulty == difficulty]
        if category is not None:
            pool = [q for q in pool if q.category.upper() == category.upper()]
        if not pool:
            raise QuizError("No questions match the requested difficulty and category")
        return get_random_questions(count, rng=self._rng, questions=pool)

    def create(
        self,
        difficulty: Difficulty | None = None,
        category: str | None = None,
        question_count: int | None = None,
    ) -> QuizSession:
        """Create and start a new session.

        Args:
            difficulty: Only draw questions of this difficulty.
            category: Only draw questions of this category.
            question_count: Questions to ask (defaults to the configured count).

        Returns:
            The started session.

        Raises:
            QuizError: If no question matches the filters.
        """
        count = question_count or self.config.questions_per_quiz

        with self._lock:
            questions = self._select_questions(difficulty, category, count)
            session = QuizSession(questions, config=self.config)
            session.start()
            self._sessions[session.session_id] = _TrackedSession(session, self._clock())

        return session

    def _lookup(self, session_id: str) -> QuizSession:
        # Caller holds the lock
        tracked = self._sessions.get(session_id)
        if tracked is None:
            raise QuizSessionNotFoundError(session_id)

        now = self._clock()
        elapsed = int(now - tracked.last_tick)
        if elapsed > 0:
            tracked.session.tick(elapsed)
            tracked.last_tick += elapsed
        # Re-insert to refresh expiry and recency
        self._sessions[session_id] = tracked
        return tracked.session

    def get(self, session_id: str) -> QuizSession:
        """Get a session with its countdown brought up to date.

        Raises:
            QuizSessionNotFoundError: If the id is unknown or expired.
        """
        with self._lock:
            return self._lookup(session_id)

    def answer(self, session_id: str, answer_index: int) -> QuizSession:
        """Select and submit an answer for the current question."""
        with self._lock:
            session = self._lookup(session_id)
            session.select_answer(answer_index)
            session.submit_answer()
            return session

    def advance(self, session_id: str) -> QuizSession:
        with self._lock:
            session = self._lookup(session_id)
            session.advance()
            return session

    def complete(self, session_id: str) -> QuizSession:
        with self._lock:
            session = self._lookup(session_id)
            session.complete()
            return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise QuizSessionNotFoundError(session_id)
        logger.debug("quiz_session_deleted", session_id=session_id)
