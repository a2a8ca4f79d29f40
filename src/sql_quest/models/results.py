"""Query engine output models.

A query either yields a ``ResultSet`` or an ``EngineError``; both are
created fresh per call and owned by the caller.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class EngineErrorKind(StrEnum):
    """Discriminator for query-authoring errors."""

    SYNTAX_ERROR = "SyntaxError"
    UNSUPPORTED_STATEMENT = "UnsupportedStatementError"
    UNKNOWN_TABLE = "UnknownTableError"
    UNKNOWN_COLUMN = "UnknownColumnError"
    TYPE_MISMATCH = "TypeMismatchError"


class EngineError(BaseModel):
    """Structured error value returned by ``run_query``.

    Attributes:
        kind: Error category.
        message: Human-readable description for the query author.
        detail: Optional machine-readable context (position, names, kinds).
    """

    kind: EngineErrorKind = Field(..., description="Error category")
    message: str = Field(..., description="Human-readable error message")
    detail: dict[str, Any] | None = Field(default=None, description="Additional error context")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "kind": "UnknownColumnError",
                    "message": "Unknown column: 'ghost_column' in table 'customers'",
                    "detail": {"column": "ghost_column", "table": "customers"},
                }
            ]
        }
    }


class ResultSet(BaseModel):
    """Columns and rows produced by a successful query.

    Attributes:
        columns: Ordered column names (declared spelling).
        rows: Row records restricted to ``columns``, native typed values.
        row_count: Number of rows returned.
        total_rows: Number of matching rows before any row cap.
        truncated: Whether a row cap dropped matching rows.
    """

    columns: list[str] = Field(default_factory=list, description="Ordered column names")
    rows: list[dict[str, Any]] = Field(default_factory=list, description="Result rows")
    row_count: int = Field(default=0, ge=0, description="Number of rows returned")
    total_rows: int = Field(default=0, ge=0, description="Matching rows before capping")
    truncated: bool = Field(default=False, description="Whether rows were dropped by a cap")

    def column_values(self, column: str) -> list[Any]:
        """Get the values of one result column in row order."""
        return [row[column] for row in self.rows]
