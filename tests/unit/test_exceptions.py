"""Unit tests for application exceptions."""

import pytest

from sql_quest.core.exceptions import (
    NotFoundError,
    QueryEngineError,
    QuerySyntaxError,
    QuizError,
    QuizSessionNotFoundError,
    SQLQuestError,
    TableNotFoundError,
    TypeMismatchError,
    UnknownColumnError,
    UnknownTableError,
    UnsupportedStatementError,
)
from sql_quest.models.results import EngineErrorKind


class TestQueryEngineErrors:
    """Tests for engine exceptions and their error values."""

    @pytest.mark.parametrize(
        ("exc", "kind", "error_code"),
        [
            (QuerySyntaxError("Expected FROM", line=1, column=10), EngineErrorKind.SYNTAX_ERROR, "SYNTAX_ERROR"),
            (UnsupportedStatementError("DELETE"), EngineErrorKind.UNSUPPORTED_STATEMENT, "UNSUPPORTED_STATEMENT"),
            (UnknownTableError("ghosts"), EngineErrorKind.UNKNOWN_TABLE, "UNKNOWN_TABLE"),
            (UnknownColumnError("ghost", "customers"), EngineErrorKind.UNKNOWN_COLUMN, "UNKNOWN_COLUMN"),
            (
                TypeMismatchError("bad", column="city", column_kind="string", literal_kind="number", operator="="),
                EngineErrorKind.TYPE_MISMATCH,
                "TYPE_MISMATCH",
            ),
        ],
    )
    def test_to_error(self, exc: QueryEngineError, kind: EngineErrorKind, error_code: str) -> None:
        """Test each exception maps to its error kind."""
        error = exc.to_error()
        assert error.kind is kind
        assert error.message == exc.message
        assert exc.error_code == error_code
        assert isinstance(exc, SQLQuestError)

    def test_syntax_error_position(self) -> None:
        """Test position details are carried over."""
        error = QuerySyntaxError("Unexpected token", line=2, column=5, token="FORM").to_error()
        assert error.detail == {"line": 2, "column": 5, "token": "FORM"}

    def test_syntax_error_without_position(self) -> None:
        """Test an error with no details has no detail mapping."""
        assert QuerySyntaxError("Empty query").to_error().detail is None

    def test_unknown_column_message(self) -> None:
        """Test the message names the column and table."""
        exc = UnknownColumnError("ghost_column", "customers")
        assert "ghost_column" in str(exc)
        assert "customers" in str(exc)


class TestQuizErrors:
    """Tests for quiz exceptions."""

    def test_quiz_error_status(self) -> None:
        """Test the session status is recorded."""
        exc = QuizError("Cannot advance", status="in_progress")
        assert exc.details == {"status": "in_progress"}
        assert exc.error_code == "QUIZ_ERROR"

    def test_session_not_found(self) -> None:
        """Test the missing id is recorded."""
        exc = QuizSessionNotFoundError("abc")
        assert exc.session_id == "abc"
        assert "abc" in exc.message
        assert isinstance(exc, NotFoundError)


class TestNotFoundErrors:
    """Tests for missing-resource exceptions."""

    def test_table_not_found(self) -> None:
        """Test the table name is recorded under its own error code."""
        exc = TableNotFoundError("nonexistent")
        assert exc.error_code == "TABLE_NOT_FOUND"
        assert exc.details == {"table": "nonexistent"}
        assert "nonexistent" in exc.message
        assert isinstance(exc, NotFoundError)
        assert not isinstance(exc, QueryEngineError)
