"""Database explorer endpoints.

Runs SELECT queries against the bundled sample database and exposes its
schema, rows, and the sample query catalog.
"""

import time

from fastapi import APIRouter, Query, Request, Response

from sql_quest.api.dependencies import DatabaseDep, QueryRunnerDep
from sql_quest.api.rate_limit import limiter, query_rate_limit
from sql_quest.core.exceptions import TableNotFoundError
from sql_quest.data.sample_database import get_sample_queries
from sql_quest.engine.database import Database
from sql_quest.models.catalog import Difficulty
from sql_quest.models.requests import QueryRequest
from sql_quest.models.responses import (
    ColumnInfo,
    ErrorResponse,
    QueryResponse,
    SampleQueriesResponse,
    SampleQueryInfo,
    SchemaContextResponse,
    TableDetail,
    TableListResponse,
    TableRowsResponse,
    TableSummary,
    render_display_rows,
)

router = APIRouter(prefix="/api/v1", tags=["explorer"])

_TABLE_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Table not found"}}


def format_result_message(total_rows: int, row_count: int) -> str:
    """Build the human-readable summary shown above a result table."""
    message = f"Query executed successfully! Found {total_rows} rows."
    if row_count < total_rows:
        message += f" Showing the first {row_count}."
    return message


@router.post(
    "/query",
    response_model=QueryResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Query rejected by the engine"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    },
)
@limiter.limit(query_rate_limit)
async def run_query(
    request: Request,
    response: Response,
    body: QueryRequest,
    runner: QueryRunnerDep,
) -> QueryResponse:
    """Run a SELECT query against the sample database.

    Args:
        request: Incoming request (used for rate limiting).
        response: Outgoing response (receives rate limit headers).
        body: Query text and optional row cap.
        runner: Query runner (injected).

    Returns:
        QueryResponse with columns, rows and counts.

    Raises:
        QueryEngineError: If the query is rejected; rendered as HTTP 400.
    """
    start_time = time.perf_counter()
    result = runner.execute(body.query, max_rows=body.max_rows)
    execution_time_ms = (time.perf_counter() - start_time) * 1000

    return QueryResponse(
        message=format_result_message(result.total_rows, result.row_count),
        columns=result.columns,
        rows=result.rows,
        row_count=result.row_count,
        total_rows=result.total_rows,
        truncated=result.truncated,
        display_rows=render_display_rows(result.columns, result.rows),
        execution_time_ms=round(execution_time_ms, 3),
    )


def _require_table(database: Database, table_name: str) -> str:
    name = database.resolve_table_name(table_name)
    if name is None:
        raise TableNotFoundError(table_name)
    return name


@router.get("/tables", response_model=TableListResponse)
async def list_tables(database: DatabaseDep) -> TableListResponse:
    """List tables with descriptions and row counts."""
    return TableListResponse(
        tables=[
            TableSummary(
                name=name,
                description=schema.description,
                row_count=database.get_row_count(name),
            )
            for name, schema in database.tables.items()
        ]
    )


@router.get("/tables/{table_name}", response_model=TableDetail, responses=_TABLE_NOT_FOUND)
async def get_table(table_name: str, database: DatabaseDep) -> TableDetail:
    """Get the declared schema of one table.

    Raises:
        TableNotFoundError: If the table does not exist; rendered as HTTP 404.
    """
    name = _require_table(database, table_name)
    schema = database.tables[name]
    return TableDetail(
        name=name,
        description=schema.description,
        row_count=database.get_row_count(name),
        columns=[
            ColumnInfo(name=col.name, data_type=col.data_type, description=col.description)
            for col in schema.columns
        ],
    )


@router.get(
    "/tables/{table_name}/rows",
    response_model=TableRowsResponse,
    responses=_TABLE_NOT_FOUND,
)
async def get_table_rows(
    table_name: str,
    database: DatabaseDep,
    max_rows: int | None = Query(default=None, ge=0, description="Maximum rows to return"),
) -> TableRowsResponse:
    """Browse the rows of one table in stored order.

    Raises:
        TableNotFoundError: If the table does not exist; rendered as HTTP 404.
    """
    name = _require_table(database, table_name)
    columns = database.get_valid_columns(name)
    rows = database.get_rows(name)
    shown = [dict(row) for row in (rows if max_rows is None else rows[:max_rows])]
    return TableRowsResponse(
        table=name,
        columns=columns,
        rows=shown,
        row_count=len(shown),
        total_rows=len(rows),
        truncated=len(shown) < len(rows),
        display_rows=render_display_rows(columns, shown),
    )


@router.get("/schema/context", response_model=SchemaContextResponse)
async def get_schema_context(database: DatabaseDep) -> SchemaContextResponse:
    """Get markdown documentation of every table."""
    return SchemaContextResponse(
        context=database.get_schema_context(),
        table_count=len(database.tables),
    )


@router.get("/samples", response_model=SampleQueriesResponse)
async def list_sample_queries(difficulty: Difficulty | None = None) -> SampleQueriesResponse:
    """List the sample query catalog, optionally filtered by difficulty."""
    return SampleQueriesResponse(
        samples=[
            SampleQueryInfo(
                title=sample.title,
                description=sample.description,
                query=sample.query,
                difficulty=sample.difficulty,
            )
            for sample in get_sample_queries(difficulty)
        ]
    )
