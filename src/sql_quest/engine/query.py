"""Parsed query structures passed from parser to validator to executor."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from sql_quest.models.schema import ValueKind


class ComparisonOp(StrEnum):
    """Predicate operators."""

    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"

    @classmethod
    def from_symbol(cls, symbol: str) -> ComparisonOp:
        if symbol == "<>":
            return cls.NE
        return cls(symbol)

    @property
    def is_ordering(self) -> bool:
        return self in (ComparisonOp.GT, ComparisonOp.LT, ComparisonOp.GE, ComparisonOp.LE)

    @property
    def is_null_test(self) -> bool:
        return self in (ComparisonOp.IS_NULL, ComparisonOp.IS_NOT_NULL)


class SortDirection(StrEnum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class LiteralValue:
    """A typed literal from the query text."""

    kind: ValueKind
    value: Any

    def to_sql(self) -> str:
        if self.kind is ValueKind.NULL:
            return "NULL"
        if self.kind is ValueKind.BOOLEAN:
            return "TRUE" if self.value else "FALSE"
        if self.kind is ValueKind.STRING:
            escaped = self.value.replace("'", "''")
            return f"'{escaped}'"
        return repr(self.value)


@dataclass(frozen=True)
class Predicate:
    """Single comparison ``column op literal`` or a nullity test."""

    column: str
    op: ComparisonOp
    literal: LiteralValue | None = None

    def to_sql(self) -> str:
        if self.op.is_null_test:
            return f"{self.column} {self.op.value}"
        return f"{self.column} {self.op.value} {self.literal.to_sql()}"


@dataclass(frozen=True)
class OrderBy:
    column: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


@dataclass(frozen=True)
class ParsedQuery:
    """Structured form of a ``SELECT`` statement.

    Attributes:
        table: Target relation name.
        columns: Requested columns in query order; ``None`` means ``*``.
        predicate: Optional WHERE predicate.
        order_by: Optional ORDER BY clause.
        limit: Optional LIMIT value.
    """

    table: str
    columns: tuple[str, ...] | None = None
    predicate: Predicate | None = None
    order_by: OrderBy | None = None
    limit: int | None = None

    @property
    def select_all(self) -> bool:
        return self.columns is None

    def referenced_columns(self) -> Iterator[str]:
        """Yield every referenced column: select list, predicate, order."""
        if self.columns is not None:
            yield from self.columns
        if self.predicate is not None:
            yield self.predicate.column
        if self.order_by is not None:
            yield self.order_by.column

    def with_names(self, table: str, names: dict[str, str]) -> ParsedQuery:
        """Return a copy with table and column names replaced.

        Args:
            table: New table name.
            names: Mapping of lower-cased column name to replacement.
        """
        columns = None
        if self.columns is not None:
            columns = tuple(names[c.lower()] for c in self.columns)
        predicate = self.predicate
        if predicate is not None:
            predicate = replace(predicate, column=names[predicate.column.lower()])
        order_by = self.order_by
        if order_by is not None:
            order_by = replace(order_by, column=names[order_by.column.lower()])
        return replace(self, table=table, columns=columns, predicate=predicate, order_by=order_by)

    def to_sql(self) -> str:
        """Render back to canonical SQL text."""
        parts = ["SELECT", "*" if self.columns is None else ", ".join(self.columns), "FROM", self.table]
        if self.predicate is not None:
            parts += ["WHERE", self.predicate.to_sql()]
        if self.order_by is not None:
            parts += ["ORDER BY", self.order_by.column, self.order_by.direction.value]
        if self.limit is not None:
            parts += ["LIMIT", str(self.limit)]
        return " ".join(parts)
