"""Tests for the relational table service against a recording fake backend."""

import pytest

from table_connector.catalog import DataType, QualifiedName
from table_connector.connector import ConnectorError, Pageable, Sort, SortOrder
from table_connector.connector.errors import MetadataFormatError

from tests.fakes import FakeDataSource, FakeDriverError, column, make_service


def _names(results):
    return [name.table_name for name in results]


def test_drop_on_upper_case_backend(context, upper_backend):
    """Schema and table are upper-cased before use."""
    datasource = FakeDataSource(upper_backend)
    service = make_service(datasource)

    service.delete(context, QualifiedName.of_table("prod", "sales", "orders"))

    assert upper_backend.schemas_set == ["SALES"]
    assert upper_backend.statements == ["DROP TABLE ORDERS"]


def test_drop_on_case_preserving_backend(context, backend):
    """Identifiers are used as given."""
    service = make_service(FakeDataSource(backend))

    service.delete(context, QualifiedName.of_table("prod", "sales", "orders"))

    assert backend.schemas_set == ["sales"]
    assert backend.statements == ["DROP TABLE orders"]


def test_rename_on_upper_case_backend(context, upper_backend):
    """Both table names follow the old database's case policy."""
    service = make_service(FakeDataSource(upper_backend))

    service.rename(
        context,
        QualifiedName.of_table("prod", "sales", "orders"),
        QualifiedName.of_table("prod", "sales", "orders_v2"),
    )

    assert upper_backend.schemas_set == ["SALES"]
    assert upper_backend.statements == ["ALTER TABLE ORDERS RENAME TO ORDERS_V2"]


def test_rename_across_databases_fails_before_any_io(context, backend):
    """A cross-database rename is rejected without touching the backend."""
    datasource = FakeDataSource(backend)
    service = make_service(datasource)

    with pytest.raises(ValueError, match="Database names must match"):
        service.rename(
            context,
            QualifiedName.of_table("prod", "sales", "orders"),
            QualifiedName.of_table("prod", "finance", "orders"),
        )

    assert datasource.connections == []
    assert backend.catalog_calls == []
    assert backend.statements == []


def test_statement_failure_is_translated_with_name(context, backend):
    """A failing drop surfaces as a connector error naming the table."""
    backend.fail_on = "execute_update"
    datasource = FakeDataSource(backend)
    service = make_service(datasource)
    name = QualifiedName.of_table("prod", "sales", "orders")

    with pytest.raises(ConnectorError) as excinfo:
        service.delete(context, name)

    assert excinfo.value.name == name
    assert isinstance(excinfo.value.cause, FakeDriverError)
    assert isinstance(excinfo.value.__cause__, FakeDriverError)
    assert datasource.connections[0].closed is True


def test_rename_failure_is_tagged_with_old_name(context, backend):
    """Rename failures name the table being renamed."""
    backend.fail_on = "execute_update"
    service = make_service(FakeDataSource(backend))
    old_name = QualifiedName.of_table("prod", "sales", "orders")

    with pytest.raises(ConnectorError) as excinfo:
        service.rename(context, old_name, QualifiedName.of_table("prod", "sales", "x"))

    assert excinfo.value.name == old_name


def test_connection_acquisition_failure_is_translated(context, backend):
    """Pool exhaustion surfaces as a connector error."""
    service = make_service(FakeDataSource(backend, fail_connect=True))
    name = QualifiedName.of_table("prod", "sales", "orders")

    with pytest.raises(ConnectorError) as excinfo:
        service.get(context, name)

    assert excinfo.value.name == name
    assert isinstance(excinfo.value.cause, ConnectionError)


def test_get_projects_columns_in_catalog_order(context, backend):
    """Each column row becomes one field, in reported order."""
    backend.add_table(
        "sales",
        "orders",
        [
            column("id", "INTEGER", nullable="NO", table="orders"),
            column("amount", "DECIMAL", size="20", digits="10", table="orders"),
            column("status", "VARCHAR", size="16", default="'open'", remarks="state", table="orders"),
        ],
    )
    service = make_service(FakeDataSource(backend))
    name = QualifiedName.of_table("prod", "sales", "orders")

    table = service.get(context, name)

    assert table.name == name
    assert [info.name for info in table.fields] == ["id", "amount", "status"]
    amount = table.fields[1]
    assert amount.source_type == "DECIMAL(20, 10)"
    assert amount.type.base == DataType.DECIMAL
    assert amount.type.parameters == (20, 10)
    assert amount.size == 20
    status = table.fields[2]
    assert status.source_type == "VARCHAR(16)"
    assert status.default_value == "'open'"
    assert status.comment == "state"
    assert table.fields[0].is_nullable is False
    assert table.fields[0].size is None


def test_get_reads_columns_with_normalized_identifiers(context, upper_backend):
    """Catalog reads use the same case policy as statements."""
    upper_backend.add_table("SALES", "ORDERS", [column("ID", table="ORDERS")])
    service = make_service(FakeDataSource(upper_backend))

    table = service.get(context, QualifiedName.of_table("prod", "sales", "orders"))

    assert upper_backend.schemas_set == ["SALES"]
    assert ("get_columns", "SALES", "ORDERS", "%") in upper_backend.catalog_calls
    assert [info.name for info in table.fields] == ["ID"]
    assert table.name.table_name == "orders"


def test_get_with_malformed_size_is_translated(context, backend):
    """Unparseable metadata fails the get as a connector error."""
    backend.add_table("sales", "orders", [column("code", "VARCHAR", size="abc", table="orders")])
    datasource = FakeDataSource(backend)
    service = make_service(datasource)

    with pytest.raises(ConnectorError) as excinfo:
        service.get(context, QualifiedName.of_table("prod", "sales", "orders"))

    assert isinstance(excinfo.value.cause, MetadataFormatError)
    assert datasource.connections[0].closed is True


def test_list_names_projects_raw_table_names(context, upper_backend, sales):
    """Returned names keep the requested catalog/database and the catalog's casing."""
    upper_backend.add_table("SALES", "ORDERS")
    upper_backend.add_table("SALES", "ORDER_ITEMS")
    upper_backend.add_table("SALES", "CUSTOMERS")
    service = make_service(FakeDataSource(upper_backend))

    results = service.list_names(context, sales, QualifiedName.of_table("prod", "sales", "ord"))

    assert ("get_tables", "SALES", "ORD%", ("TABLE", "VIEW")) in upper_backend.catalog_calls
    assert _names(results) == ["ORDERS", "ORDER_ITEMS"]
    for name in results:
        assert name.catalog_name == "prod"
        assert name.database_name == "sales"


def test_list_names_without_prefix_enumerates_everything(context, backend, sales):
    """A missing or empty prefix matches every table."""
    for table in ["b", "a", "c"]:
        backend.add_table("sales", table)
    service = make_service(FakeDataSource(backend))

    assert _names(service.list_names(context, sales)) == ["b", "a", "c"]
    empty_prefix = QualifiedName.of_table("prod", "sales", "")
    assert _names(service.list_names(context, sales, empty_prefix)) == ["b", "a", "c"]
    assert ("get_tables", "sales", None, ("TABLE", "VIEW")) in backend.catalog_calls


def test_list_names_sorts_then_pages(context, backend, sales):
    """Paging applies to the sorted name sequence."""
    for table in ["e", "c", "a", "d", "b"]:
        backend.add_table("sales", table)
    service = make_service(FakeDataSource(backend))

    page = service.list_names(context, sales, None, Sort(), Pageable(limit=2, offset=2))
    beyond = service.list_names(context, sales, None, Sort(), Pageable(limit=2, offset=10))
    descending = service.list_names(context, sales, None, Sort(order=SortOrder.DESC))

    assert _names(page) == ["c", "d"]
    assert beyond == []
    assert _names(descending) == ["e", "d", "c", "b", "a"]


def test_list_names_failure_is_translated_with_database_name(context, backend, sales):
    """Enumeration failures name the database."""
    backend.fail_on = "get_tables"
    service = make_service(FakeDataSource(backend))

    with pytest.raises(ConnectorError) as excinfo:
        service.list_names(context, sales)

    assert excinfo.value.name == sales


def test_list_fetches_each_table_in_order(context, backend, sales):
    """list is list_names followed by one get per name."""
    for table in ["b", "a", "c"]:
        backend.add_table("sales", table, [column("id", table=table)])
    datasource = FakeDataSource(backend)
    service = make_service(datasource)

    tables = service.list(context, sales, sort=Sort())

    assert [table.name.table_name for table in tables] == ["a", "b", "c"]
    # one connection for the names plus one per table
    assert len(datasource.connections) == 4
    assert all(connection.closed for connection in datasource.connections)


def test_list_aborts_when_one_get_fails(context, backend, sales):
    """A failing fetch of the third of five tables returns nothing."""
    for table in ["t1", "t2", "t3", "t4", "t5"]:
        size = "abc" if table == "t3" else "10"
        backend.add_table("sales", table, [column("c", "VARCHAR", size=size, table=table)])
    datasource = FakeDataSource(backend)
    service = make_service(datasource)

    with pytest.raises(ConnectorError) as excinfo:
        service.list(context, sales, sort=Sort())

    assert excinfo.value.name == QualifiedName.of_table("prod", "sales", "t3")
    # names + t1 + t2 + failed t3; t4 and t5 are never fetched
    assert len(datasource.connections) == 4
