"""FastAPI dependency injection for the database, query runner and quiz store."""

from __future__ import annotations

from contextvars import ContextVar
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from sql_quest.engine.database import Database
from sql_quest.engine.query_runner import QueryRunner
from sql_quest.quiz.store import QuizSessionStore


# Request ID context variable for tracing (lives here to avoid circular imports)
request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


def _from_state(request: Request, attribute: str, label: str):
    if not hasattr(request.app.state, attribute):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{label} not initialized",
        )
    return getattr(request.app.state, attribute)


def get_database(request: Request) -> Database:
    """Retrieve the read-only database from application state.

    The database is loaded once during application startup and shared by
    all requests; it is immutable, so no locking is needed.

    Raises:
        HTTPException: If the database is not initialized.
    """
    return _from_state(request, "database", "Database")


def get_query_runner(request: Request) -> QueryRunner:
    """Retrieve the query runner from application state.

    Raises:
        HTTPException: If the query runner is not initialized.
    """
    return _from_state(request, "query_runner", "Query runner")


def get_quiz_store(request: Request) -> QuizSessionStore:
    """Retrieve the quiz session store from application state.

    Raises:
        HTTPException: If the quiz store is not initialized.
    """
    return _from_state(request, "quiz_store", "Quiz session store")


# Type aliases for dependency injection
DatabaseDep = Annotated[Database, Depends(get_database)]
QueryRunnerDep = Annotated[QueryRunner, Depends(get_query_runner)]
QuizStoreDep = Annotated[QuizSessionStore, Depends(get_quiz_store)]
