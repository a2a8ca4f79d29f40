"""Schema models for table and column metadata.

This module defines Pydantic models describing the declared schema of the
in-memory dataset. Declared types are documentation: they drive query
validation, not storage.
"""

import re
from enum import StrEnum

from pydantic import BaseModel, Field

NUMERIC_TYPE_PATTERN = re.compile(
    r"^(INT|INTEGER|BIGINT|SMALLINT|TINYINT|DECIMAL|NUMERIC|REAL|FLOAT|DOUBLE)\b",
    re.IGNORECASE,
)
BOOLEAN_TYPE_PATTERN = re.compile(r"^BOOL(EAN)?\b", re.IGNORECASE)


class ValueKind(StrEnum):
    """Closed set of scalar kinds carried through the engine."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def kind_for_data_type(data_type: str) -> ValueKind:
    """Map a declared SQL type tag to its scalar kind.

    Args:
        data_type: Declared type such as ``INTEGER`` or ``VARCHAR(50)``.

    Returns:
        The value kind the column holds (never ``NULL``).
    """
    tag = data_type.strip()
    if NUMERIC_TYPE_PATTERN.match(tag):
        return ValueKind.NUMBER
    if BOOLEAN_TYPE_PATTERN.match(tag):
        return ValueKind.BOOLEAN
    return ValueKind.STRING


class ColumnSchema(BaseModel):
    """Schema for a single column.

    Attributes:
        name: Column name.
        data_type: Declared SQL type (e.g., INTEGER, VARCHAR(50), DATE).
        description: Human-readable description.
    """

    name: str = Field(..., description="Column name")
    data_type: str = Field(..., description="Declared SQL data type")
    description: str | None = Field(default=None, description="Column description")

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "city",
                "data_type": "VARCHAR(50)",
                "description": "Customer city",
            }
        }
    }

    @property
    def kind(self) -> ValueKind:
        """Scalar kind implied by the declared type."""
        return kind_for_data_type(self.data_type)


class TableSchema(BaseModel):
    """Schema for a single table.

    Attributes:
        name: Table name used in queries.
        description: Human-readable description.
        columns: Ordered column schemas.
    """

    name: str = Field(..., description="Table name")
    description: str | None = Field(default=None, description="Table description")
    columns: list[ColumnSchema] = Field(
        default_factory=list,
        description="Ordered column schemas",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "products",
                "description": "Product catalog with pricing and inventory",
                "columns": [
                    {"name": "id", "data_type": "INTEGER"},
                    {"name": "price", "data_type": "DECIMAL(10,2)"},
                ],
            }
        }
    }

    def get_column_names(self) -> list[str]:
        """Get list of column names."""
        return [col.name for col in self.columns]

    def get_column(self, name: str) -> ColumnSchema | None:
        """Get column by name (case-insensitive)."""
        name_lower = name.lower()
        for col in self.columns:
            if col.name.lower() == name_lower:
                return col
        return None
