"""Tests for configuration loading."""

import pytest
import tempfile
from pathlib import Path

from table_connector.config import load_config, LoggingConfig
from table_connector.connector import create_datasource
from table_connector.datasources import DuckDBDataSource, PostgreSQLDataSource


def _write_config(text: str) -> str:
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write(text)
        return f.name


def test_load_full_config():
    """All sections are parsed."""
    config_path = _write_config(
        """
catalog: prodcatalog
datasources:
  warehouse:
    type: postgresql
    host: localhost
    port: 5432
    database: analytics
    user: app
    password: secret
    max_connections: 8
  local:
    type: duckdb
    path: /tmp/local.duckdb
    read_only: false
logging:
  level: DEBUG
  structured: true
"""
    )
    try:
        config = load_config(config_path)

        assert config.catalog == "prodcatalog"
        assert config.datasources["warehouse"].type == "postgresql"
        assert config.datasources["warehouse"].config["max_connections"] == 8
        assert "type" not in config.datasources["warehouse"].config
        assert config.datasources["local"].type == "duckdb"
        assert config.datasources["local"].config["read_only"] is False
        assert config.logging.level == "DEBUG"
        assert config.logging.structured is True
        assert config.logging.log_file is None
    finally:
        Path(config_path).unlink()


def test_load_minimal_config():
    """Missing sections fall back to defaults."""
    config_path = _write_config(
        """
datasources:
  local:
    type: duckdb
    path: ":memory:"
"""
    )
    try:
        config = load_config(config_path)

        assert config.catalog == "default"
        assert config.logging == LoggingConfig()
        assert list(config.datasources) == ["local"]
    finally:
        Path(config_path).unlink()


def test_empty_config_file():
    """An empty file yields the default configuration."""
    config_path = _write_config("")
    try:
        config = load_config(config_path)

        assert config.datasources == {}
    finally:
        Path(config_path).unlink()


def test_missing_config_file():
    """Test error handling for missing config file."""
    with pytest.raises(FileNotFoundError):
        load_config("nonexistent_config.yaml")


def test_create_datasource_by_type():
    """Data sources are built from their configured type."""
    config_path = _write_config(
        """
datasources:
  pg:
    type: postgresql
    host: localhost
    database: db
    user: u
    password: p
  duck:
    type: duckdb
  other:
    type: oracle
"""
    )
    try:
        config = load_config(config_path)

        assert isinstance(create_datasource(config.datasources["pg"]), PostgreSQLDataSource)
        assert isinstance(create_datasource(config.datasources["duck"]), DuckDBDataSource)
        with pytest.raises(ValueError, match="Unsupported data source type"):
            create_datasource(config.datasources["other"])
    finally:
        Path(config_path).unlink()
