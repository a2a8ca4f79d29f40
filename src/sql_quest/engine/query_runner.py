"""Query runner: the parse, validate, execute pipeline.

Each stage runs only on the successful output of the previous one, and the
first failure is terminal for that query. Nothing is retained between
calls.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from sql_quest.core.exceptions import QueryEngineError, QuerySyntaxError
from sql_quest.core.logging import get_logger
from sql_quest.engine.database import Database, get_database
from sql_quest.engine.executor import execute
from sql_quest.engine.parser import parse_query
from sql_quest.engine.validator import validate_query
from sql_quest.models.results import EngineError, ResultSet

if TYPE_CHECKING:
    from sql_quest.core.config import Settings
    from sql_quest.engine.query import ParsedQuery

logger = get_logger(__name__)

DEFAULT_MAX_QUERY_LENGTH = 2000


def prepare_query(text: str, database: Database) -> ParsedQuery:
    """Parse and validate query text without executing it.

    Raises:
        QueryEngineError: The first parse or validation failure.
    """
    return validate_query(parse_query(text), database)


def execute_query(
    text: str,
    database: Database,
    max_rows: int | None = None,
) -> ResultSet:
    """Run query text against the database, raising on failure.

    Args:
        text: A single SELECT statement.
        database: Database to query.
        max_rows: Optional explicit row cap.

    Returns:
        ResultSet for the query.

    Raises:
        QueryEngineError: Subclass matching the failure kind.
    """
    return execute(prepare_query(text, database), database, max_rows=max_rows)


def run_query(
    text: str,
    database: Database,
    max_rows: int | None = None,
) -> ResultSet | EngineError:
    """Run query text, returning either a result or an error value.

    Query-authoring mistakes never raise here; they come back as an
    ``EngineError`` with ``kind``, ``message`` and ``detail``.
    """
    try:
        return execute_query(text, database, max_rows=max_rows)
    except QueryEngineError as e:
        return e.to_error()


class QueryRunner:
    """Executes explorer queries against a read-only database.

    Attributes:
        database: Database snapshot the runner reads.
        max_rows: Row cap applied when a call passes none (None = no cap).
        max_query_length: Longest accepted query text.
    """

    def __init__(
        self,
        database: Database | None = None,
        max_rows: int | None = None,
        max_query_length: int = DEFAULT_MAX_QUERY_LENGTH,
    ) -> None:
        """Initialize query runner.

        Args:
            database: Database to query (uses the cached fixture if not provided).
            max_rows: Default row cap.
            max_query_length: Longest accepted query text.
        """
        self.database = database or get_database()
        self.max_rows = max_rows
        self.max_query_length = max_query_length

        logger.info(
            "query_runner_initialized",
            max_rows=max_rows,
            max_query_length=max_query_length,
        )

    def execute(self, text: str, max_rows: int | None = None) -> ResultSet:
        """Execute a query and return its result set.

        Args:
            text: Query text.
            max_rows: Row cap for this call; falls back to the runner default.

        Returns:
            ResultSet with native typed values.

        Raises:
            QueryEngineError: If the query is rejected.
        """
        start_time = time.perf_counter()
        cap = max_rows if max_rows is not None else self.max_rows

        try:
            if len(text) > self.max_query_length:
                raise QuerySyntaxError(
                    f"Query is too long ({len(text)} characters, maximum {self.max_query_length})"
                )
            result = execute_query(text, self.database, max_rows=cap)
        except QueryEngineError as e:
            logger.info(
                "query_rejected",
                kind=e.kind.value,
                error=e.message,
                query_preview=text,
            )
            raise

        execution_time_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "query_executed",
            query_preview=text,
            row_count=result.row_count,
            total_rows=result.total_rows,
            truncated=result.truncated,
            execution_time_ms=round(execution_time_ms, 3),
        )
        return result

    def run(self, text: str, max_rows: int | None = None) -> ResultSet | EngineError:
        """Execute a query, returning an ``EngineError`` instead of raising."""
        try:
            return self.execute(text, max_rows=max_rows)
        except QueryEngineError as e:
            return e.to_error()

    def list_available_tables(self) -> list[str]:
        """List all available tables."""
        return self.database.get_valid_tables()


def get_query_runner(
    settings: Settings | None = None,
    database: Database | None = None,
) -> QueryRunner:
    """Get a QueryRunner configured from settings.

    Args:
        settings: Optional Settings for configuration.
        database: Optional database (defaults to the cached fixture).

    Returns:
        Configured QueryRunner instance.
    """
    if settings is None:
        from sql_quest.core.config import get_settings

        settings = get_settings()

    return QueryRunner(
        database=database,
        max_rows=settings.QUERY_DEFAULT_MAX_ROWS,
        max_query_length=settings.QUERY_MAX_LENGTH,
    )
