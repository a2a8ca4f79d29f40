"""Core utilities: configuration, logging, exceptions."""

from sql_quest.core.config import Settings, get_settings
from sql_quest.core.exceptions import (
    NotFoundError,
    QueryEngineError,
    QuerySyntaxError,
    QuizError,
    QuizSessionNotFoundError,
    SchemaError,
    SQLQuestError,
    TableNotFoundError,
    TypeMismatchError,
    UnknownColumnError,
    UnknownTableError,
    UnsupportedStatementError,
)
from sql_quest.core.logging import configure_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "SQLQuestError",
    "QueryEngineError",
    "QuerySyntaxError",
    "UnsupportedStatementError",
    "UnknownTableError",
    "UnknownColumnError",
    "TypeMismatchError",
    "SchemaError",
    "QuizError",
    "NotFoundError",
    "TableNotFoundError",
    "QuizSessionNotFoundError",
]
