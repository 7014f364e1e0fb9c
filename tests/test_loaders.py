"""Tests for dimension loaders.

Parquet loaders run against a temporary warehouse directory. SQL Server
loaders require a live database with the schema initialized.
Run those with: pytest tests/test_loaders.py --run-db
"""

from datetime import date

import pytest

from sales_etl.loaders import (
    ParquetCustomerLoader,
    ParquetOrderLoader,
    ParquetProductLoader,
    SqlCustomerLoader,
    SqlOrderLoader,
    SqlProductLoader,
)
from sales_etl.models import CustomerRecord, OrderRecord, ProductRecord


# ---------------------------------------------------------------------------
# Parquet loaders
# ---------------------------------------------------------------------------


class TestParquetLoaders:
    """Tests for the Parquet warehouse loaders."""

    def test_load_writes_table(self, tmp_path):
        loader = ParquetCustomerLoader(tmp_path)
        written = loader.load(
            [
                CustomerRecord("C1", "Ana", "ana@example.com", "DO"),
                CustomerRecord("C2", "Luis"),
            ]
        )

        assert written == 2
        assert loader.path == tmp_path / "DimCustomer.parquet"
        df = loader.read()
        assert df.columns == ["customer_id", "name", "email", "country"]
        assert df["customer_id"].to_list() == ["C1", "C2"]

    def test_reload_upserts_by_key(self, tmp_path):
        """Loading a known key replaces the row instead of duplicating it."""
        loader = ParquetProductLoader(tmp_path)
        loader.load([ProductRecord("P1", "Laptop", "Electronics", 999.0)])
        loader.load([ProductRecord("P1", "Laptop Pro", "Electronics", 1299.0), ProductRecord("P2", "Mouse")])

        df = loader.read().sort("product_id")
        assert df.height == 2
        assert df.row(0, named=True)["name"] == "Laptop Pro"
        assert df.row(0, named=True)["price"] == 1299.0

    def test_duplicate_keys_in_batch_last_wins(self, tmp_path):
        loader = ParquetCustomerLoader(tmp_path)
        written = loader.load([CustomerRecord("C1", "Old"), CustomerRecord("C1", "New")])
        assert written == 1
        assert loader.read()["name"].to_list() == ["New"]

    def test_empty_load_creates_empty_table(self, tmp_path):
        loader = ParquetOrderLoader(tmp_path)
        assert loader.load([]) == 0
        assert loader.path.exists()
        assert loader.read().height == 0

    def test_order_dates_preserved(self, tmp_path):
        loader = ParquetOrderLoader(tmp_path)
        loader.load([OrderRecord("O1", "C1", date(2024, 3, 1), "shipped")])
        assert loader.read()["order_date"].to_list() == [date(2024, 3, 1)]

    def test_read_before_load_is_empty(self, tmp_path):
        assert ParquetCustomerLoader(tmp_path).read().height == 0


# ---------------------------------------------------------------------------
# SQL Server loaders
# ---------------------------------------------------------------------------


class TestSqlMergeStatement:
    """Tests for MERGE statement generation (no database needed)."""

    def test_customer_merge(self):
        sql = SqlCustomerLoader("dw").merge_sql()
        assert sql.startswith("MERGE dw.DimCustomer AS t")
        assert "ON t.customer_id = s.customer_id" in sql
        assert sql.count("?") == 4
        assert "t.customer_id = s.customer_id," not in sql

    def test_schema_override(self):
        assert "MERGE staging.DimOrder" in SqlOrderLoader("staging").merge_sql()

    def test_empty_load_skips_database(self):
        """No connection is opened when there is nothing to load."""
        assert SqlProductLoader("dw").load([]) == 0


@pytest.mark.db
class TestSqlLoaders:
    """Tests against a live SQL Server."""

    def test_load_dimensions_in_order(self):
        from sales_etl.db import execute, init_schema

        init_schema()
        assert SqlCustomerLoader().load([CustomerRecord("T-C1", "Test Customer")]) == 1
        assert SqlProductLoader().load([ProductRecord("T-P1", "Test Product", price=1.5)]) == 1
        assert SqlOrderLoader().load([OrderRecord("T-O1", "T-C1", date(2024, 1, 1))]) == 1

        rows = execute("SELECT name FROM dw.DimCustomer WHERE customer_id = ?", ("T-C1",))
        assert rows[0][0] == "Test Customer"


class FakeCursor:
    def __init__(self, log):
        self.log = log

    def execute(self, sql, *params):
        self.log.append(("execute", sql, params))

    def executemany(self, sql, params_list):
        self.log.append(("executemany", sql, list(params_list)))

    def fetchall(self):
        return []


class FakeConnection:
    def __init__(self, log):
        self.log = log

    def cursor(self):
        return FakeCursor(self.log)

    def commit(self):
        self.log.append(("commit",))

    def close(self):
        self.log.append(("close",))


@pytest.fixture
def captured_connections(monkeypatch):
    """Replace the driver's connect() and record connection strings and statements."""
    captured = {"connection_strings": [], "log": []}

    def fake_connect(connection_string):
        captured["connection_strings"].append(connection_string)
        return FakeConnection(captured["log"])

    monkeypatch.setattr("sales_etl.db.connection.mssql_connect", fake_connect)
    return captured


class TestSqlConnectionWiring:
    """Loaders and schema setup connect to the server of the settings they were built with."""

    def test_factory_loaders_use_injected_server(self, captured_connections):
        from sales_etl.config import Settings
        from sales_etl.etl.factory import build_loaders

        config = Settings(
            loader_backend="sqlserver",
            db_server="warehouse-prod",
            db_name="other_dw",
            db_schema="sales",
        )
        customers, _, _ = build_loaders(config)

        assert customers.load([CustomerRecord("C1", "Ana")]) == 1

        [conn_str] = captured_connections["connection_strings"]
        assert "SERVER=warehouse-prod" in conn_str
        assert "DATABASE=other_dw" in conn_str
        kind, sql, params = captured_connections["log"][0]
        assert kind == "executemany"
        assert sql.startswith("MERGE sales.DimCustomer")
        assert params == [("C1", "Ana", None, None)]
        assert ("commit",) in captured_connections["log"]

    def test_init_schema_uses_injected_server(self, captured_connections):
        from sales_etl.config import Settings
        from sales_etl.db import init_schema

        init_schema(Settings(db_server="warehouse-prod", db_schema="sales"))

        assert len(captured_connections["connection_strings"]) == 4
        assert all("SERVER=warehouse-prod" in s for s in captured_connections["connection_strings"])
        statements = [entry[1] for entry in captured_connections["log"] if entry[0] == "execute"]
        assert "sales.DimOrder" in statements[-1]
