"""Schema validation of parsed queries.

Checks table and column existence and the static compatibility of the
predicate literal with the column's declared type. Names are resolved
case-insensitively and the returned query carries the declared spellings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sql_quest.core.exceptions import TypeMismatchError, UnknownColumnError, UnknownTableError
from sql_quest.engine.query import ParsedQuery, Predicate
from sql_quest.models.schema import ColumnSchema, ValueKind

if TYPE_CHECKING:
    from sql_quest.engine.database import Database


def validate_query(query: ParsedQuery, database: Database) -> ParsedQuery:
    """Validate a parsed query against the database schema.

    Args:
        query: Output of the parser.
        database: Database whose schema the query must match.

    Returns:
        The query with table and column names in their declared spelling.

    Raises:
        UnknownTableError: If the target table is not declared.
        UnknownColumnError: For the first undeclared column, checking the
            select list, then the predicate, then the order column.
        TypeMismatchError: If the predicate literal cannot be compared with
            the column.
    """
    schema = database.get_table(query.table)
    if schema is None:
        raise UnknownTableError(query.table, available_tables=database.get_valid_tables())

    names: dict[str, str] = {}
    for column_name in query.referenced_columns():
        column = schema.get_column(column_name)
        if column is None:
            raise UnknownColumnError(column_name, schema.name)
        names[column_name.lower()] = column.name

    if query.predicate is not None:
        check_predicate_types(query.predicate, schema.get_column(query.predicate.column))

    return query.with_names(schema.name, names)


def check_predicate_types(predicate: Predicate, column: ColumnSchema) -> None:
    """Check a predicate literal against the column's declared kind.

    ``NULL`` is compatible with every column; ordering operators are not
    defined for booleans.

    Raises:
        TypeMismatchError: If the comparison is not well typed.
    """
    if predicate.op.is_null_test or predicate.literal is None:
        return

    literal_kind = predicate.literal.kind
    if literal_kind is ValueKind.NULL:
        return

    column_kind = column.kind
    if literal_kind is not column_kind:
        raise TypeMismatchError(
            f"Cannot compare {column_kind.value} column '{column.name}' "
            f"({column.data_type}) with {literal_kind.value} literal "
            f"{predicate.literal.to_sql()}",
            column=column.name,
            column_kind=column_kind.value,
            literal_kind=literal_kind.value,
            operator=predicate.op.value,
        )

    if column_kind is ValueKind.BOOLEAN and predicate.op.is_ordering:
        raise TypeMismatchError(
            f"Operator '{predicate.op.value}' is not defined for boolean column '{column.name}'",
            column=column.name,
            column_kind=column_kind.value,
            literal_kind=literal_kind.value,
            operator=predicate.op.value,
        )
