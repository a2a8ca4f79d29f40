"""Pydantic models for API requests, responses, schema and engine output."""

from sql_quest.models.catalog import Difficulty, QuizQuestion, SampleQuery
from sql_quest.models.requests import AnswerRequest, QueryRequest, QuizStartRequest
from sql_quest.models.responses import (
    ErrorResponse,
    QueryResponse,
    QuizSessionView,
)
from sql_quest.models.results import EngineError, EngineErrorKind, ResultSet
from sql_quest.models.schema import ColumnSchema, TableSchema, ValueKind

__all__ = [
    # Request/Response models
    "QueryRequest",
    "QuizStartRequest",
    "AnswerRequest",
    "QueryResponse",
    "QuizSessionView",
    "ErrorResponse",
    # Engine output
    "ResultSet",
    "EngineError",
    "EngineErrorKind",
    # Schema models
    "ColumnSchema",
    "TableSchema",
    "ValueKind",
    # Learning content
    "Difficulty",
    "SampleQuery",
    "QuizQuestion",
]
