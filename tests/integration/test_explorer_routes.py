"""Integration tests for the database explorer endpoints."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


class TestQueryEndpoint:
    """Tests for POST /api/v1/query."""

    def test_successful_query(self, client: TestClient) -> None:
        """Test a filtered query returns rows and a summary."""
        response = client.post(
            "/api/v1/query",
            json={"query": "SELECT first_name, last_name FROM customers WHERE city = 'New York'"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["columns"] == ["first_name", "last_name"]
        assert data["rows"] == [{"first_name": "John", "last_name": "Smith"}]
        assert data["display_rows"] == [["John", "Smith"]]
        assert data["message"] == "Query executed successfully! Found 1 rows."
        assert data["truncated"] is False
        assert data["execution_time_ms"] >= 0

    def test_row_cap_in_message(self, client: TestClient) -> None:
        """Test truncation is reported."""
        response = client.post("/api/v1/query", json={"query": "SELECT * FROM orders", "max_rows": 3})

        data = response.json()
        assert data["row_count"] == 3
        assert data["total_rows"] == 15
        assert data["truncated"] is True
        assert data["message"] == "Query executed successfully! Found 15 rows. Showing the first 3."

    def test_null_values_serialize_as_null(self, client: TestClient) -> None:
        """Test rows keep native JSON types."""
        response = client.post(
            "/api/v1/query",
            json={"query": "SELECT id, price FROM products WHERE id = 1"},
        )
        row = response.json()["rows"][0]
        assert row["id"] == 1
        assert isinstance(row["price"], float)

    @pytest.mark.parametrize(
        ("query", "error", "error_code"),
        [
            ("SELECT ghost_column FROM customers", "UnknownColumnError", "UNKNOWN_COLUMN"),
            ("SELECT * FROM nonexistent", "UnknownTableError", "UNKNOWN_TABLE"),
            ("DELETE FROM customers", "UnsupportedStatementError", "UNSUPPORTED_STATEMENT"),
            ("SELECT * FORM customers", "SyntaxError", "SYNTAX_ERROR"),
            ("SELECT * FROM products WHERE price = 'cheap'", "TypeMismatchError", "TYPE_MISMATCH"),
        ],
    )
    def test_engine_errors(self, client: TestClient, query: str, error: str, error_code: str) -> None:
        """Test rejected queries come back as 400 with the error kind."""
        response = client.post("/api/v1/query", json={"query": query})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == error
        assert data["error_code"] == error_code
        assert data["message"]
        assert data["request_id"] == response.headers["X-Request-ID"]

    def test_unknown_column_names_column(self, client: TestClient) -> None:
        """Test the error message names the missing column."""
        response = client.post("/api/v1/query", json={"query": "SELECT ghost_column FROM customers"})
        assert "ghost_column" in response.json()["message"]

    def test_blank_query_rejected(self, client: TestClient) -> None:
        """Test request validation rejects blank text."""
        response = client.post("/api/v1/query", json={"query": "   "})
        assert response.status_code == 422

    def test_negative_max_rows_rejected(self, client: TestClient) -> None:
        """Test request validation rejects a negative cap."""
        response = client.post("/api/v1/query", json={"query": "SELECT * FROM orders", "max_rows": -1})
        assert response.status_code == 422


class TestTableEndpoints:
    """Tests for table browsing endpoints."""

    def test_list_tables(self, client: TestClient) -> None:
        """Test every table is listed with its row count."""
        response = client.get("/api/v1/tables")

        assert response.status_code == 200
        tables = {t["name"]: t["row_count"] for t in response.json()["tables"]}
        assert tables == {
            "customers": 10,
            "categories": 6,
            "products": 12,
            "orders": 15,
            "order_items": 27,
        }

    def test_get_table(self, client: TestClient) -> None:
        """Test a table's declared columns."""
        response = client.get("/api/v1/tables/Products")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "products"
        columns = {c["name"]: c["data_type"] for c in data["columns"]}
        assert columns["price"] == "DECIMAL(10,2)"

    def test_get_unknown_table(self, client: TestClient) -> None:
        """Test unknown tables are 404 with the standard error body."""
        response = client.get("/api/v1/tables/nonexistent")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "TableNotFoundError"
        assert data["error_code"] == "TABLE_NOT_FOUND"
        assert "nonexistent" in data["message"]
        assert data["details"] == {"table": "nonexistent"}
        assert data["request_id"] == response.headers["X-Request-ID"]

    def test_rows_of_unknown_table(self, client: TestClient) -> None:
        """Test browsing rows of an unknown table uses the same 404 body."""
        response = client.get("/api/v1/tables/nonexistent/rows")

        assert response.status_code == 404
        assert response.json()["error_code"] == "TABLE_NOT_FOUND"

    def test_table_rows(self, client: TestClient) -> None:
        """Test browsing rows with a cap."""
        response = client.get("/api/v1/tables/categories/rows", params={"max_rows": 2})

        data = response.json()
        assert data["columns"] == ["id", "name", "description"]
        assert [row["id"] for row in data["rows"]] == [1, 2]
        assert [cells[0] for cells in data["display_rows"]] == ["1", "2"]
        assert data["total_rows"] == 6
        assert data["truncated"] is True

    def test_table_rows_uncapped(self, client: TestClient) -> None:
        """Test all rows are returned without a cap."""
        data = client.get("/api/v1/tables/order_items/rows").json()
        assert data["row_count"] == 27
        assert data["truncated"] is False

    def test_schema_context(self, client: TestClient) -> None:
        """Test markdown schema documentation."""
        data = client.get("/api/v1/schema/context").json()
        assert data["table_count"] == 5
        assert "### customers" in data["context"]

    def test_samples(self, client: TestClient) -> None:
        """Test the sample catalog and its difficulty filter."""
        all_samples = client.get("/api/v1/samples").json()["samples"]
        beginner = client.get("/api/v1/samples", params={"difficulty": "beginner"}).json()["samples"]

        assert all_samples
        assert beginner
        assert len(beginner) <= len(all_samples)
        assert all(s["difficulty"] == "beginner" for s in beginner)

    def test_sample_queries_run(self, client: TestClient) -> None:
        """Test every sample query is accepted by the query endpoint."""
        for sample in client.get("/api/v1/samples").json()["samples"]:
            response = client.post("/api/v1/query", json={"query": sample["query"]})
            assert response.status_code == 200, sample["title"]


class TestHealthAndHeaders:
    """Tests for health endpoints and response headers."""

    def test_health(self, client: TestClient) -> None:
        """Test the health endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client: TestClient) -> None:
        """Test readiness after startup."""
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_not_ready_without_startup(self) -> None:
        """Test readiness before the lifespan has run."""
        from sql_quest.api.app import create_app

        response = TestClient(create_app()).get("/ready")
        assert response.status_code == 503
        assert response.json()["database"] is False

    def test_request_id_propagated(self, client: TestClient) -> None:
        """Test an incoming request id is echoed back."""
        response = client.get("/health", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Request-ID"] == "req-42"
        assert response.json()["request_id"] == "req-42"

    def test_security_headers(self, client: TestClient) -> None:
        """Test security headers are present."""
        response = client.get("/api/v1/tables")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestRateLimiting:
    """Tests for query rate limiting."""

    def test_query_rate_limited(self) -> None:
        """Test the query endpoint answers 429 once the limit is used up."""
        from sql_quest.api.app import create_app
        from sql_quest.api.rate_limit import reset_limiter
        from sql_quest.core.config import get_settings

        with patch.dict(os.environ, {"RATE_LIMIT_ENABLED": "true", "RATE_LIMIT_QUERY": "2/minute"}):
            get_settings.cache_clear()
            reset_limiter()
            try:
                with TestClient(create_app()) as client:
                    responses = [
                        client.post("/api/v1/query", json={"query": "SELECT id FROM categories"})
                        for _ in range(4)
                    ]
            finally:
                reset_limiter()
                get_settings.cache_clear()

        assert responses[0].status_code == 200
        limited = [r for r in responses if r.status_code == 429]
        assert limited
        assert limited[0].json()["error_code"] == "RATE_LIMIT_EXCEEDED"
        assert limited[0].headers["Retry-After"] == "60"
