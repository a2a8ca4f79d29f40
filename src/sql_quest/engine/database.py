"""Read-only in-memory database handle.

The database maps table names to their rows and declared schema. It is
built once at startup and never mutated, so concurrent queries may share
it without locking.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from sql_quest.core.exceptions import SchemaError
from sql_quest.core.logging import get_logger
from sql_quest.models.schema import TableSchema

logger = get_logger(__name__)

Row = Mapping[str, Any]


class Database:
    """Immutable snapshot of relations plus their schema.

    Attributes:
        tables: Read-only view of table name to ``TableSchema``.
    """

    def __init__(
        self,
        relations: Mapping[str, Sequence[Mapping[str, Any]]],
        schemas: Mapping[str, TableSchema],
    ) -> None:
        """Build the snapshot and check it against the schema.

        Args:
            relations: Table name to ordered row records.
            schemas: Table name to declared schema.

        Raises:
            SchemaError: If a relation lacks a schema (or the reverse), or a
                row's column set differs from the declared columns.
        """
        missing_schema = set(relations) - set(schemas)
        if missing_schema:
            name = sorted(missing_schema)[0]
            raise SchemaError(f"No schema declared for table '{name}'", table_name=name)
        missing_rows = set(schemas) - set(relations)
        if missing_rows:
            name = sorted(missing_rows)[0]
            raise SchemaError(f"No rows supplied for table '{name}'", table_name=name)

        self._relations: dict[str, tuple[Row, ...]] = {}
        self._schemas: dict[str, TableSchema] = {}
        self._lookup: dict[str, str] = {}

        for name, schema in schemas.items():
            if schema.name != name:
                raise SchemaError(
                    f"Schema for '{name}' is named '{schema.name}'",
                    table_name=name,
                )
            if name.lower() in self._lookup:
                raise SchemaError(f"Duplicate table name '{name}'", table_name=name)

            declared = schema.get_column_names()
            declared_set = set(declared)
            if len(declared_set) != len(declared):
                raise SchemaError(f"Duplicate column in schema of '{name}'", table_name=name)

            rows = []
            for index, row in enumerate(relations[name]):
                if set(row) != declared_set:
                    raise SchemaError(
                        f"Row {index} of '{name}' has columns {sorted(row)}, "
                        f"expected {declared}",
                        table_name=name,
                    )
                rows.append(MappingProxyType(dict(row)))

            self._relations[name] = tuple(rows)
            self._schemas[name] = schema
            self._lookup[name.lower()] = name

        self.tables: Mapping[str, TableSchema] = MappingProxyType(self._schemas)

        logger.info(
            "database_loaded",
            tables=len(self._schemas),
            rows=sum(len(rows) for rows in self._relations.values()),
        )

    @classmethod
    def from_fixture(cls) -> Database:
        """Load the bundled sample e-commerce dataset."""
        from sql_quest.data.sample_database import SAMPLE_SCHEMA, SAMPLE_TABLES

        return cls(SAMPLE_TABLES, SAMPLE_SCHEMA)

    def resolve_table_name(self, table_name: str) -> str | None:
        """Get the declared spelling of a table name (case-insensitive)."""
        return self._lookup.get(table_name.lower())

    def get_table(self, table_name: str) -> TableSchema | None:
        """Get schema for a specific table.

        Args:
            table_name: Name of the table (case-insensitive).

        Returns:
            TableSchema if found, None otherwise.
        """
        name = self.resolve_table_name(table_name)
        if name is None:
            return None
        return self._schemas[name]

    def get_rows(self, table_name: str) -> tuple[Row, ...]:
        """Get the read-only rows of a table in relation order.

        Raises:
            KeyError: If the table does not exist.
        """
        name = self.resolve_table_name(table_name)
        if name is None:
            raise KeyError(table_name)
        return self._relations[name]

    def get_row_count(self, table_name: str) -> int:
        return len(self.get_rows(table_name))

    def get_valid_tables(self) -> list[str]:
        """Get list of valid table names."""
        return list(self._schemas)

    def get_valid_columns(self, table_name: str) -> list[str]:
        """Get list of valid column names for a table.

        Args:
            table_name: Name of the table.

        Returns:
            List of column names, empty if table not found.
        """
        table = self.get_table(table_name)
        if table is None:
            return []
        return table.get_column_names()

    def get_schema_context(self, max_tables: int = 20) -> str:
        """Generate markdown documentation of the schema.

        Args:
            max_tables: Maximum number of tables to include.

        Returns:
            Markdown-formatted schema documentation.
        """
        if not self._schemas:
            return "No tables available."

        lines = ["## Available Tables\n"]

        for table_name, schema in list(self._schemas.items())[:max_tables]:
            lines.append(f"### {table_name}")
            if schema.description:
                lines.append(schema.description)
            lines.append(f"Rows: {len(self._relations[table_name])}")
            lines.append("")
            lines.append("| Column | Type | Description |")
            lines.append("|--------|------|-------------|")

            for col in schema.columns:
                lines.append(f"| {col.name} | {col.data_type} | {col.description or '-'} |")

            lines.append("")

        if len(self._schemas) > max_tables:
            lines.append(f"\n... and {len(self._schemas) - max_tables} more tables")

        return "\n".join(lines)


@lru_cache
def get_database() -> Database:
    """Get the cached sample database instance."""
    return Database.from_fixture()
