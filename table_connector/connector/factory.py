"""Construction of data sources and table services from configuration."""

from ..catalog.types import TypeConverter
from ..config import DataSourceConfig
from ..datasources.base import DataSource
from ..datasources.duckdb import DuckDBDataSource
from ..datasources.postgresql import PostgreSQLDataSource
from .exception_mapper import mapper_for_dialect
from .table_service import RelationalTableService


def create_datasource(ds_config: DataSourceConfig) -> DataSource:
    """Create an unconnected data source for a configuration entry."""
    if ds_config.type == "duckdb":
        return DuckDBDataSource(ds_config.name, ds_config.config)
    if ds_config.type == "postgresql":
        return PostgreSQLDataSource(ds_config.name, ds_config.config)
    raise ValueError(f"Unsupported data source type: {ds_config.type}")


def create_table_service(datasource: DataSource) -> RelationalTableService:
    """Create a table service using the data source's dialect."""
    return RelationalTableService(
        datasource,
        TypeConverter(dialect=datasource.dialect),
        mapper_for_dialect(datasource.dialect),
    )
