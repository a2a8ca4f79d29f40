"""Quiz endpoints.

A session is created and started in one call; the client then answers,
advances and finally completes or deletes it. Every read brings the
countdown up to date first, so a session may come back completed after
its time runs out.
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from sql_quest.api.dependencies import QuizStoreDep
from sql_quest.models.requests import AnswerRequest, QuizStartRequest
from sql_quest.models.responses import ErrorResponse, QuizSessionView

router = APIRouter(prefix="/api/v1/quiz", tags=["quiz"])

_SESSION_ERRORS = {
    404: {"model": ErrorResponse, "description": "Quiz session not found"},
    409: {"model": ErrorResponse, "description": "Invalid quiz transition"},
}


@router.post(
    "/sessions",
    response_model=QuizSessionView,
    status_code=status.HTTP_201_CREATED,
    responses={409: _SESSION_ERRORS[409]},
)
async def start_quiz(
    store: QuizStoreDep,
    body: QuizStartRequest | None = None,
) -> QuizSessionView:
    """Start a new timed quiz with randomly drawn questions."""
    body = body or QuizStartRequest()
    session = store.create(
        difficulty=body.difficulty,
        category=body.category,
        question_count=body.question_count,
    )
    return QuizSessionView.from_session(session)


@router.get("/sessions/{session_id}", response_model=QuizSessionView, responses=_SESSION_ERRORS)
async def get_quiz(session_id: str, store: QuizStoreDep) -> QuizSessionView:
    """Get the current state of a quiz session."""
    return QuizSessionView.from_session(store.get(session_id))


@router.post(
    "/sessions/{session_id}/answer",
    response_model=QuizSessionView,
    responses=_SESSION_ERRORS,
)
async def answer_question(
    session_id: str,
    body: AnswerRequest,
    store: QuizStoreDep,
) -> QuizSessionView:
    """Submit an answer for the current question and reveal the explanation."""
    return QuizSessionView.from_session(store.answer(session_id, body.answer_index))


@router.post(
    "/sessions/{session_id}/next",
    response_model=QuizSessionView,
    responses=_SESSION_ERRORS,
)
async def next_question(session_id: str, store: QuizStoreDep) -> QuizSessionView:
    """Move on to the next question, or finish after the last one."""
    return QuizSessionView.from_session(store.advance(session_id))


@router.post(
    "/sessions/{session_id}/complete",
    response_model=QuizSessionView,
    responses=_SESSION_ERRORS,
)
async def complete_quiz(session_id: str, store: QuizStoreDep) -> QuizSessionView:
    """End the quiz early and return the final score."""
    return QuizSessionView.from_session(store.complete(session_id))


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: _SESSION_ERRORS[404]},
)
async def delete_quiz(session_id: str, store: QuizStoreDep) -> Response:
    """Discard a quiz session."""
    store.delete(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
