"""Custom exceptions for SQL Quest."""

from typing import Any, ClassVar

from sql_quest.models.results import EngineError, EngineErrorKind


class SQLQuestError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class QueryEngineError(SQLQuestError):
    """Base for query-authoring errors reported by the engine.

    Every subclass maps to one ``EngineErrorKind``; ``to_error`` turns the
    exception into the structured value returned by ``run_query``.
    """

    kind: ClassVar[EngineErrorKind]

    def to_error(self) -> EngineError:
        """Convert to the discriminated error structure."""
        return EngineError(
            kind=self.kind,
            message=self.message,
            detail=self.details or None,
        )


class QuerySyntaxError(QueryEngineError):
    """Raised when query text does not match the supported grammar."""

    kind = EngineErrorKind.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        token: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if line is not None:
            details["line"] = line
            details["column"] = column
        if token is not None:
            details["token"] = token
        super().__init__(message=message, error_code="SYNTAX_ERROR", details=details)
        self.line = line
        self.column = column
        self.token = token


class UnsupportedStatementError(QueryEngineError):
    """Raised for statements outside the read-only SELECT subset."""

    kind = EngineErrorKind.UNSUPPORTED_STATEMENT

    def __init__(self, statement: str) -> None:
        super().__init__(
            message=f"Unsupported statement: {statement}. Only SELECT queries can be run",
            error_code="UNSUPPORTED_STATEMENT",
            details={"statement": statement},
        )
        self.statement = statement


class UnknownTableError(QueryEngineError):
    """Raised when a query targets a table missing from the schema."""

    kind = EngineErrorKind.UNKNOWN_TABLE

    def __init__(self, table_name: str, available_tables: list[str] | None = None) -> None:
        super().__init__(
            message=f"Unknown table: '{table_name}'",
            error_code="UNKNOWN_TABLE",
            details={"table": table_name, "available_tables": available_tables or []},
        )
        self.table_name = table_name


class UnknownColumnError(QueryEngineError):
    """Raised when a query references a column the table does not declare."""

    kind = EngineErrorKind.UNKNOWN_COLUMN

    def __init__(self, column_name: str, table_name: str) -> None:
        super().__init__(
            message=f"Unknown column: '{column_name}' in table '{table_name}'",
            error_code="UNKNOWN_COLUMN",
            details={"column": column_name, "table": table_name},
        )
        self.column_name = column_name
        self.table_name = table_name


class TypeMismatchError(QueryEngineError):
    """Raised when a predicate literal cannot be compared with its column."""

    kind = EngineErrorKind.TYPE_MISMATCH

    def __init__(
        self,
        message: str,
        column: str,
        column_kind: str,
        literal_kind: str,
        operator: str,
    ) -> None:
        super().__init__(
            message=message,
            error_code="TYPE_MISMATCH",
            details={
                "column": column,
                "column_kind": column_kind,
                "literal_kind": literal_kind,
                "operator": operator,
            },
        )
        self.column = column
        self.column_kind = column_kind
        self.literal_kind = literal_kind
        self.operator = operator


class SchemaError(SQLQuestError):
    """Raised when fixture data disagrees with its declared schema."""

    def __init__(
        self,
        message: str,
        table_name: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="SCHEMA_ERROR",
            details={"table": table_name},
        )
        self.table_name = table_name


class QuizError(SQLQuestError):
    """Raised for invalid quiz transitions."""

    def __init__(
        self,
        message: str,
        status: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="QUIZ_ERROR",
            details={"status": status},
        )
        self.status = status


class NotFoundError(SQLQuestError):
    """Base for lookups of resources that do not exist (rendered as 404)."""


class TableNotFoundError(NotFoundError):
    """Raised when an explorer endpoint names a table that does not exist."""

    def __init__(self, table_name: str) -> None:
        super().__init__(
            message=f"Table not found: {table_name}",
            error_code="TABLE_NOT_FOUND",
            details={"table": table_name},
        )
        self.table_name = table_name


class QuizSessionNotFoundError(NotFoundError):
    """Raised when a quiz session id is unknown or expired."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            message=f"Quiz session not found: {session_id}",
            error_code="QUIZ_SESSION_NOT_FOUND",
            details={"session_id": session_id},
        )
        self.session_id = session_id
