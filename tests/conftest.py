"""Pytest fixtures for the test suite."""

import pytest

from sql_quest.core.config import Settings
from sql_quest.engine.database import Database
from sql_quest.models.schema import ColumnSchema, TableSchema


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings for testing."""
    return Settings(
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        RATE_LIMIT_ENABLED=False,
    )


@pytest.fixture
def database() -> Database:
    """The bundled sample e-commerce database."""
    return Database.from_fixture()


@pytest.fixture
def gadgets_database() -> Database:
    """A small database with NULLs, booleans and duplicate sort keys."""
    schema = TableSchema(
        name="gadgets",
        description="Gadget inventory",
        columns=[
            ColumnSchema(name="id", data_type="INTEGER"),
            ColumnSchema(name="Name", data_type="VARCHAR(50)"),
            ColumnSchema(name="price", data_type="DECIMAL(10,2)"),
            ColumnSchema(name="in_stock", data_type="BOOLEAN"),
            ColumnSchema(name="color", data_type="VARCHAR(20)"),
        ],
    )
    rows = [
        {"id": 1, "Name": "Widget", "price": 10, "in_stock": True, "color": "red"},
        {"id": 2, "Name": "Gizmo", "price": 25.5, "in_stock": False, "color": None},
        {"id": 3, "Name": "Doohickey", "price": 10, "in_stock": True, "color": "blue"},
        {"id": 4, "Name": "Thingamajig", "price": None, "in_stock": False, "color": "red"},
        {"id": 5, "Name": "Whatsit", "price": 7.25, "in_stock": True, "color": "green"},
    ]
    return Database({"gadgets": rows}, {"gadgets": schema})


@pytest.fixture
def sample_sql() -> str:
    """Sample SQL query for testing."""
    return "SELECT name, price FROM products WHERE price > 100 ORDER BY price"
