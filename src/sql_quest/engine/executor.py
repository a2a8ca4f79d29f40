"""Execution of validated queries against in-memory relations."""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from sql_quest.core.exceptions import TypeMismatchError
from sql_quest.engine.query import ComparisonOp, ParsedQuery, Predicate
from sql_quest.models.results import ResultSet
from sql_quest.models.schema import ValueKind

if TYPE_CHECKING:
    from sql_quest.engine.database import Database, Row

_COMPARATORS: dict[ComparisonOp, Callable[[Any, Any], bool]] = {
    ComparisonOp.EQ: operator.eq,
    ComparisonOp.NE: operator.ne,
    ComparisonOp.GT: operator.gt,
    ComparisonOp.LT: operator.lt,
    ComparisonOp.GE: operator.ge,
    ComparisonOp.LE: operator.le,
}

# Sort rank per kind, so a drifted column never compares str with int
_KIND_RANK = {ValueKind.BOOLEAN: 0, ValueKind.NUMBER: 1, ValueKind.STRING: 2}


def value_kind(value: Any) -> ValueKind:
    """Get the scalar kind of a stored value."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    return ValueKind.STRING


def row_matches(row: Row, predicate: Predicate) -> bool:
    """Evaluate a predicate against one row.

    Comparisons involving ``NULL`` are unknown and exclude the row; only
    ``IS NULL`` / ``IS NOT NULL`` test nullity.

    Raises:
        TypeMismatchError: If the stored value's kind differs from the
            literal's kind.
    """
    value = row[predicate.column]

    if predicate.op is ComparisonOp.IS_NULL:
        return value is None
    if predicate.op is ComparisonOp.IS_NOT_NULL:
        return value is not None

    literal = predicate.literal
    if value is None or literal.kind is ValueKind.NULL:
        return False

    kind = value_kind(value)
    if kind is not literal.kind:
        raise TypeMismatchError(
            f"Value {value!r} in column '{predicate.column}' is a {kind.value}, "
            f"cannot compare with {literal.kind.value} literal {literal.to_sql()}",
            column=predicate.column,
            column_kind=kind.value,
            literal_kind=literal.kind.value,
            operator=predicate.op.value,
        )
    return _COMPARATORS[predicate.op](value, literal.value)


def _sort_key(column: str) -> Callable[[Row], tuple]:
    def key(row: Row) -> tuple:
        value = row[column]
        if value is None:
            return (True, 0, 0)
        return (False, _KIND_RANK[value_kind(value)], value)

    return key


def effective_limit(query_limit: int | None, max_rows: int | None) -> int | None:
    """Combine the query's LIMIT with the caller's row cap (smallest wins)."""
    caps = [cap for cap in (query_limit, max_rows) if cap is not None]
    return min(caps) if caps else None


def execute(
    query: ParsedQuery,
    database: Database,
    max_rows: int | None = None,
) -> ResultSet:
    """Apply a validated query to its relation.

    Filtering keeps relation order; ordering is a stable sort, so tied rows
    keep their original relative order in both directions. ``NULL`` sorts
    after every value ascending.

    Args:
        query: Query returned by the validator.
        database: Database holding the relation.
        max_rows: Optional caller-supplied row cap. There is no implicit cap.

    Returns:
        ResultSet with native typed values.

    Raises:
        ValueError: If ``max_rows`` is negative.
        TypeMismatchError: If a stored value disagrees with the literal kind.
    """
    if max_rows is not None and max_rows < 0:
        raise ValueError(f"max_rows must be non-negative, got {max_rows}")

    schema = database.get_table(query.table)
    columns = list(query.columns) if query.columns is not None else schema.get_column_names()

    rows = database.get_rows(query.table)
    if query.predicate is not None:
        rows = [row for row in rows if row_matches(row, query.predicate)]
    else:
        rows = list(rows)

    if query.order_by is not None:
        rows.sort(key=_sort_key(query.order_by.column), reverse=query.order_by.descending)

    total_rows = len(rows)
    limit = effective_limit(query.limit, max_rows)
    if limit is not None:
        rows = rows[:limit]

    projected = [{column: row[column] for column in columns} for row in rows]

    return ResultSet(
        columns=columns,
        rows=projected,
        row_count=len(projected),
        total_rows=total_rows,
        truncated=len(projected) < total_rows,
    )
