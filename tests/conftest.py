"""Shared fixtures for connector tests."""

import pytest

from table_connector.catalog import QualifiedName
from table_connector.connector import ConnectorContext
from table_connector.datasources.duckdb import DuckDBDataSource

from tests.fakes import FakeBackend


@pytest.fixture
def context():
    return ConnectorContext(request_id="test-request", user_name="tester")


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def upper_backend():
    return FakeBackend(upper_case=True)


@pytest.fixture
def sales():
    return QualifiedName.of_database("prod", "sales")


@pytest.fixture
def duckdb_datasource():
    """Create an in-memory DuckDB datasource with a 'sales' database."""
    ds = DuckDBDataSource("test_duck", {"path": ":memory:", "read_only": False})
    ds.connect()

    conn = ds.connection
    conn.execute("CREATE SCHEMA sales")
    conn.execute("""
        CREATE TABLE sales.orders (
            id INTEGER NOT NULL,
            customer_id INTEGER,
            amount DECIMAL(20, 10),
            status VARCHAR DEFAULT 'open'
        )
    """)
    conn.execute("COMMENT ON COLUMN sales.orders.status IS 'order state'")
    conn.execute("CREATE TABLE sales.order_items (order_id INTEGER, sku VARCHAR)")
    conn.execute("CREATE TABLE sales.customers (id INTEGER, name VARCHAR)")
    conn.execute("CREATE VIEW sales.big_orders AS SELECT * FROM sales.orders WHERE amount > 100")
    conn.execute("CREATE TABLE main.unrelated (id INTEGER)")

    yield ds

    ds.disconnect()
