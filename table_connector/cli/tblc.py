"""Command line tool over the table service."""

from __future__ import annotations

from typing import List, Optional, Tuple

import click

from ..catalog import QualifiedName, TableInfo
from ..config import Config, DataSourceConfig, load_config
from ..connector import (
    ConnectorContext,
    ConnectorError,
    Pageable,
    RelationalTableService,
    Sort,
    SortOrder,
    create_datasource,
    create_table_service,
)
from ..datasources.base import DataSource
from ..utils.logging import get_request_logger, setup_logging

DEMO_DATASOURCE = "duckdb_mem"


class TablePrinter:
    """Formats table metadata for CLI display."""

    HEADERS = ["column", "source type", "type", "nullable", "default", "comment"]

    def __init__(self, emit):
        self.emit = emit

    def display_table(self, table: TableInfo) -> None:
        self.emit(f"Table: {table.name}")
        rows = self._build_rows(table)
        for line in self._format_table(self.HEADERS, rows):
            self.emit(line)

    def display_names(self, names: List[QualifiedName]) -> None:
        for name in names:
            self.emit(str(name))
        self.emit(f"{len(names)} tables")

    def _build_rows(self, table: TableInfo) -> List[List[str]]:
        rows: List[List[str]] = []
        for info in table.fields:
            rows.append(
                [
                    info.name,
                    info.source_type,
                    str(info.type),
                    "YES" if info.is_nullable else "NO",
                    self._stringify_cell(info.default_value),
                    self._stringify_cell(info.comment),
                ]
            )
        return rows

    def _format_table(self, headers: List[str], rows: List[List[str]]) -> List[str]:
        widths = self._compute_widths(headers, rows)
        border = self._build_border(widths)
        lines: List[str] = [border, self._format_row(headers, widths), border]
        for row in rows:
            lines.append(self._format_row(row, widths))
        lines.append(border)
        return lines

    def _compute_widths(self, headers: List[str], rows: List[List[str]]) -> List[int]:
        widths = [len(header) for header in headers]
        for row in rows:
            for index, text in enumerate(row):
                if len(text) > widths[index]:
                    widths[index] = len(text)
        return widths

    def _build_border(self, widths: List[int]) -> str:
        parts: List[str] = ["+"]
        for width in widths:
            parts.append("-" * (width + 2))
            parts.append("+")
        return "".join(parts)

    def _format_row(self, values: List[str], widths: List[int]) -> str:
        parts: List[str] = ["|"]
        for index, value in enumerate(values):
            parts.append(f" {value.ljust(widths[index])} ")
            parts.append("|")
        return "".join(parts)

    def _stringify_cell(self, value: Optional[str]) -> str:
        if value is None:
            return "NULL"
        return str(value)


class ConnectorRuntime:
    """Holds the data source and table service for one CLI invocation."""

    def __init__(self, config: Config, datasource: DataSource):
        self.config = config
        self.datasource = datasource
        self.service: RelationalTableService = create_table_service(datasource)
        self.context = ConnectorContext(user_name="tblc")
        self.logger = get_request_logger(
            __name__,
            request_id=self.context.request_id,
            user=self.context.user_name,
            datasource=datasource.name,
        )

    def database(self, database: str) -> QualifiedName:
        return QualifiedName.of_database(self.config.catalog, database)

    def table(self, database: str, table: str) -> QualifiedName:
        return QualifiedName.of_table(self.config.catalog, database, table)

    def close(self) -> None:
        self.datasource.disconnect()


def _prepare_runtime(
    config: Config, datasource_name: Optional[str], seed_demo: bool
) -> ConnectorRuntime:
    ds_config = _select_datasource(config, datasource_name)
    datasource = create_datasource(ds_config)
    datasource.connect()
    if seed_demo:
        _seed_demo_data(datasource)
    return ConnectorRuntime(config, datasource)


def _load_config_bundle(config_path: Optional[str]) -> Tuple[Config, Optional[str]]:
    if config_path:
        config = load_config(config_path)
        return config, None
    config = _build_default_config()
    note = "Using in-memory DuckDB data source with demo tables in database 'sales'."
    return config, note


def _build_default_config() -> Config:
    config = Config(catalog="demo")
    ds_config = DataSourceConfig(
        name=DEMO_DATASOURCE,
        type="duckdb",
        config={"path": ":memory:", "read_only": False},
    )
    config.datasources[ds_config.name] = ds_config
    return config


def _select_datasource(config: Config, datasource_name: Optional[str]) -> DataSourceConfig:
    if not config.datasources:
        raise click.UsageError("No data sources configured.")
    if datasource_name is None:
        if len(config.datasources) > 1:
            names = ", ".join(sorted(config.datasources))
            raise click.UsageError(f"Choose a data source with --datasource: {names}")
        return next(iter(config.datasources.values()))
    if datasource_name not in config.datasources:
        raise click.UsageError(f"Unknown data source: {datasource_name}")
    return config.datasources[datasource_name]


def _seed_demo_data(datasource: DataSource) -> None:
    connection = datasource.connection
    if connection is None:
        return
    connection.execute("CREATE SCHEMA IF NOT EXISTS sales")
    connection.execute(
        """
        CREATE TABLE IF NOT EXISTS sales.customers (
            id INTEGER NOT NULL,
            name VARCHAR NOT NULL,
            region VARCHAR
        )
        """
    )
    connection.execute(
        """
        CREATE TABLE IF NOT EXISTS sales.orders (
            id INTEGER NOT NULL,
            customer_id INTEGER NOT NULL,
            amount DECIMAL(20, 10),
            status VARCHAR DEFAULT 'open',
            placed_at TIMESTAMP
        )
        """
    )
    connection.execute(
        """
        CREATE TABLE IF NOT EXISTS sales.order_items (
            order_id INTEGER NOT NULL,
            sku VARCHAR NOT NULL,
            quantity SMALLINT
        )
        """
    )
    connection.execute(
        """
        CREATE OR REPLACE VIEW sales.open_orders AS
        SELECT * FROM sales.orders WHERE status = 'open'
        """
    )


def _build_sort(order: Optional[str]) -> Optional[Sort]:
    if order is None:
        return None
    return Sort(sort_by="name", order=SortOrder(order))


def _build_pageable(limit: Optional[int], offset: int) -> Optional[Pageable]:
    if limit is None:
        return None
    return Pageable(limit=limit, offset=offset)


def _build_prefix(runtime: ConnectorRuntime, database: str, prefix: Optional[str]):
    if not prefix:
        return None
    return runtime.table(database, prefix)


def _fail(exc: Exception) -> None:
    click.echo(f"error: {exc}", err=True)
    raise SystemExit(1)


listing_options = [
    click.option("--prefix", help="Only tables whose name starts with this prefix."),
    click.option("--sort", "order", type=click.Choice(["asc", "desc"]), help="Sort by table name."),
    click.option("--limit", type=click.IntRange(min=0), help="Maximum number of tables."),
    click.option("--offset", type=click.IntRange(min=0), default=0, show_default=True),
]


def _with_listing_options(command):
    for option in reversed(listing_options):
        command = option(command)
    return command


@click.group()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="Path to YAML config file. Defaults to an in-memory DuckDB demo.",
)
@click.option("-d", "--datasource", "datasource_name", help="Configured data source to use.")
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    datasource_name: Optional[str],
    log_level: Optional[str],
) -> None:
    """Describe, list, rename and drop tables of a relational database."""
    try:
        config, note = _load_config_bundle(config_path)
    except (FileNotFoundError, ValueError) as exc:
        _fail(exc)
    setup_logging(
        level=log_level or config.logging.level,
        structured=config.logging.structured,
        log_file=config.logging.log_file,
    )
    if note:
        click.echo(note, err=True)
    try:
        runtime = _prepare_runtime(config, datasource_name, seed_demo=note is not None)
    except (ConnectionError, ValueError) as exc:
        _fail(exc)
    ctx.obj = runtime
    ctx.call_on_close(runtime.close)


@cli.command()
@click.argument("database")
@_with_listing_options
@click.pass_obj
def names(runtime: ConnectorRuntime, database, prefix, order, limit, offset) -> None:
    """List table names of DATABASE."""
    runtime.logger.info(f"Listing table names of {database}")
    try:
        results = runtime.service.list_names(
            runtime.context,
            runtime.database(database),
            _build_prefix(runtime, database, prefix),
            _build_sort(order),
            _build_pageable(limit, offset),
        )
    except ConnectorError as exc:
        _fail(exc)
    TablePrinter(click.echo).display_names(results)


@cli.command(name="list")
@click.argument("database")
@_with_listing_options
@click.pass_obj
def list_tables(runtime: ConnectorRuntime, database, prefix, order, limit, offset) -> None:
    """Describe every table of DATABASE."""
    runtime.logger.info(f"Listing tables of {database}")
    try:
        tables = runtime.service.list(
            runtime.context,
            runtime.database(database),
            _build_prefix(runtime, database, prefix),
            _build_sort(order),
            _build_pageable(limit, offset),
        )
    except ConnectorError as exc:
        _fail(exc)
    printer = TablePrinter(click.echo)
    for table in tables:
        printer.display_table(table)


@cli.command()
@click.argument("database")
@click.argument("table")
@click.pass_obj
def describe(runtime: ConnectorRuntime, database: str, table: str) -> None:
    """Describe TABLE of DATABASE."""
    runtime.logger.info(f"Describing {database}.{table}")
    try:
        info = runtime.service.get(runtime.context, runtime.table(database, table))
    except ConnectorError as exc:
        _fail(exc)
    TablePrinter(click.echo).display_table(info)


@cli.command()
@click.argument("database")
@click.argument("old")
@click.argument("new")
@click.pass_obj
def rename(runtime: ConnectorRuntime, database: str, old: str, new: str) -> None:
    """Rename table OLD of DATABASE to NEW."""
    runtime.logger.info(f"Renaming {database}.{old} to {new}")
    try:
        runtime.service.rename(
            runtime.context, runtime.table(database, old), runtime.table(database, new)
        )
    except (ConnectorError, ValueError) as exc:
        _fail(exc)
    click.echo(f"Renamed {database}.{old} to {database}.{new}")


@cli.command()
@click.argument("database")
@click.argument("table")
@click.pass_obj
def drop(runtime: ConnectorRuntime, database: str, table: str) -> None:
    """Drop TABLE of DATABASE."""
    runtime.logger.info(f"Dropping {database}.{table}")
    try:
        runtime.service.delete(runtime.context, runtime.table(database, table))
    except ConnectorError as exc:
        _fail(exc)
    click.echo(f"Dropped {database}.{table}")
