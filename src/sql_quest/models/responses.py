"""API response models for SQL Quest.

This module defines Pydantic models for all API responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from sql_quest.models.catalog import Difficulty

if TYPE_CHECKING:
    from sql_quest.quiz.session import QuizSession


def display_value(value: Any) -> str:
    """Render a result value as text for table display.

    ``None`` becomes ``NULL`` and booleans are lower-case, matching SQL
    literal spelling.
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_display_rows(columns: list[str], rows: list[dict[str, Any]]) -> list[list[str]]:
    """Render result rows as text cells in column order."""
    return [[display_value(row[column]) for column in columns] for row in rows]


class QueryResponse(BaseModel):
    """Result of an explorer query.

    Attributes:
        success: Always True; failures use ``ErrorResponse``.
        message: Human-readable summary.
        columns: Ordered column names.
        rows: Result rows; ``None`` values serialize as JSON null.
        row_count: Number of rows returned.
        total_rows: Matching rows before any row cap.
        truncated: Whether a row cap dropped rows.
        display_rows: Rows as text cells for table display.
        execution_time_ms: Execution time in milliseconds.
    """

    success: bool = Field(default=True, description="Whether query executed successfully")
    message: str = Field(..., description="Human-readable summary")
    columns: list[str] = Field(default_factory=list, description="Ordered column names")
    rows: list[dict[str, Any]] = Field(default_factory=list, description="Result rows")
    row_count: int = Field(default=0, description="Number of rows returned")
    total_rows: int = Field(default=0, description="Matching rows before capping")
    truncated: bool = Field(default=False, description="Whether rows were dropped by a cap")
    display_rows: list[list[str]] = Field(
        default_factory=list,
        description="Rows as text cells in column order (NULL, true/false)",
    )
    execution_time_ms: float = Field(..., description="Query execution time in milliseconds")
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp of the response",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": True,
                    "message": "Query executed successfully! Found 2 rows.",
                    "columns": ["first_name", "last_name"],
                    "rows": [
                        {"first_name": "John", "last_name": "Smith"},
                        {"first_name": "Robert", "last_name": "Wilson"},
                    ],
                    "row_count": 2,
                    "total_rows": 2,
                    "truncated": False,
                    "display_rows": [["John", "Smith"], ["Robert", "Wilson"]],
                    "execution_time_ms": 0.42,
                }
            ]
        }
    }


class ErrorResponse(BaseModel):
    """Standard error response for API errors.

    Attributes:
        success: Always False for error responses.
        error: Error kind (engine error kind or exception class name).
        error_code: Machine-readable error code.
        message: Human-readable error message.
        details: Optional additional error details.
        request_id: Request id for correlation with logs.
        timestamp: Timestamp of the error.
    """

    success: bool = Field(default=False, description="Always False for errors")
    error: str = Field(..., description="Error kind")
    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional additional error details",
    )
    request_id: str | None = Field(default=None, description="Request id")
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp of the error",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": False,
                    "error": "UnknownColumnError",
                    "error_code": "UNKNOWN_COLUMN",
                    "message": "Unknown column: 'ghost_column' in table 'customers'",
                    "details": {"column": "ghost_column", "table": "customers"},
                    "request_id": "3f2b9c0e-1d4a-4c7b-9e55-0a6f1e2d3c4b",
                }
            ]
        }
    }


class ColumnInfo(BaseModel):
    name: str
    data_type: str
    description: str | None = None


class TableSummary(BaseModel):
    """One entry of the table list."""

    name: str = Field(..., description="Table name")
    description: str | None = Field(default=None, description="Table description")
    row_count: int = Field(..., description="Number of rows")


class TableListResponse(BaseModel):
    tables: list[TableSummary] = Field(default_factory=list)


class TableDetail(BaseModel):
    """Schema of one table."""

    name: str = Field(..., description="Table name")
    description: str | None = Field(default=None, description="Table description")
    row_count: int = Field(..., description="Number of rows")
    columns: list[ColumnInfo] = Field(default_factory=list, description="Declared columns")


class TableRowsResponse(BaseModel):
    """Rows of one table for the browse view."""

    table: str = Field(..., description="Table name")
    columns: list[str] = Field(default_factory=list)
    rows: list[dict[str, Any]] = Field(default_factory=list)
    row_count: int = Field(default=0, description="Number of rows returned")
    total_rows: int = Field(default=0, description="Rows in the table")
    truncated: bool = Field(default=False)
    display_rows: list[list[str]] = Field(default_factory=list, description="Rows as text cells")


class SchemaContextResponse(BaseModel):
    context: str = Field(..., description="Markdown schema documentation")
    table_count: int = Field(..., description="Number of documented tables")


class SampleQueryInfo(BaseModel):
    title: str
    description: str
    query: str
    difficulty: Difficulty


class SampleQueriesResponse(BaseModel):
    samples: list[SampleQueryInfo] = Field(default_factory=list)


class QuizQuestionView(BaseModel):
    """A question as shown to the player.

    The correct answer and explanation are only included once the answer
    has been submitted.
    """

    id: int
    difficulty: Difficulty
    category: str
    question: str
    options: list[str]
    correct_answer: int | None = None
    explanation: str | None = None
    sql_example: str | None = None


class QuizSessionView(BaseModel):
    """Snapshot of a quiz session.

    Attributes:
        session_id: Session id.
        status: Lifecycle state.
        current_index: Index of the current question.
        total_questions: Number of questions in the quiz.
        current_question: Current question, or None once completed.
        selected_answer: Option picked for the current question.
        last_answer_correct: Result of the submitted answer while reviewing.
        score: Correct answers so far.
        weighted_score: Difficulty-weighted score.
        max_weighted_score: Best possible weighted score.
        percentage: Correct answers as a whole percent.
        passed: Whether the passing score is reached.
        time_left: Seconds left on the countdown.
        timed_out: Whether the countdown ended the quiz.
        progress: Position in the quiz as a percentage.
    """

    session_id: str
    status: str
    current_index: int
    total_questions: int
    current_question: QuizQuestionView | None = None
    selected_answer: int | None = None
    last_answer_correct: bool | None = None
    score: int
    weighted_score: int
    max_weighted_score: int
    percentage: int
    passed: bool
    time_left: int
    timed_out: bool
    progress: float

    @classmethod
    def from_session(cls, session: QuizSession) -> QuizSessionView:
        from sql_quest.quiz.session import QuizStatus

        reviewing = session.status is QuizStatus.REVIEWING
        question_view = None
        question = session.current_question
        if question is not None:
            question_view = QuizQuestionView(
                id=question.id,
                difficulty=question.difficulty,
                category=question.category,
                question=question.question,
                options=question.options,
                correct_answer=question.correct_answer if reviewing else None,
                explanation=question.explanation if reviewing else None,
                sql_example=question.sql_example if reviewing else None,
            )

        return cls(
            session_id=session.session_id,
            status=session.status.value,
            current_index=session.current_index,
            total_questions=session.total_questions,
            current_question=question_view,
            selected_answer=session.selected_answer,
            last_answer_correct=session.answers[-1].correct if reviewing else None,
            score=session.score,
            weighted_score=session.weighted_score,
            max_weighted_score=session.max_weighted_score,
            percentage=session.percentage,
            passed=session.passed,
            time_left=session.time_left,
            timed_out=session.timed_out,
            progress=session.progress,
        )
