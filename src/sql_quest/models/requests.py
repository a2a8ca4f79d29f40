"""API request models for SQL Quest.

This module defines Pydantic models for all incoming API requests.
"""

from pydantic import BaseModel, Field, field_validator

from sql_quest.models.catalog import Difficulty


class QueryRequest(BaseModel):
    """Request to run a query in the database explorer.

    Attributes:
        query: A single SELECT statement.
        max_rows: Optional cap on returned rows (unset = all matching rows).
    """

    query: str = Field(
        ...,
        min_length=1,
        max_length=100000,
        description="A single SELECT statement",
    )
    max_rows: int | None = Field(
        default=None,
        ge=0,
        description="Maximum number of rows to return",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "query": "SELECT first_name, last_name FROM customers WHERE city = 'New York'",
                    "max_rows": 50,
                }
            ]
        }
    }

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Reject blank query text."""
        if not v.strip():
            raise ValueError("query must not be blank")
        return v


class QuizStartRequest(BaseModel):
    """Request to start a quiz session.

    Attributes:
        difficulty: Only ask questions of this difficulty.
        category: Only ask questions of this category (e.g. 'WHERE').
        question_count: Number of questions (defaults to the configured count).
    """

    difficulty: Difficulty | None = Field(default=None, description="Difficulty filter")
    category: str | None = Field(
        default=None,
        max_length=64,
        description="Category filter",
    )
    question_count: int | None = Field(
        default=None,
        ge=1,
        le=100,
        description="Number of questions to ask",
    )


class AnswerRequest(BaseModel):
    """Answer for the current quiz question."""

    answer_index: int = Field(..., ge=0, description="Index of the chosen option")
