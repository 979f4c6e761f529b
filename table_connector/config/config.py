"""Configuration management for the table connector."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import yaml
from pathlib import Path


@dataclass
class DataSourceConfig:
    """Configuration for a single data source."""

    name: str
    type: str  # "postgresql", "duckdb"
    config: Dict[str, Any]


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    structured: bool = False
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""

    catalog: str = "default"
    datasources: Dict[str, DataSourceConfig] = field(default_factory=dict)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: str) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Parsed configuration

    Example YAML format:
        catalog: prodcatalog

        datasources:
          warehouse:
            type: postgresql
            host: localhost
            port: 5432
            database: analytics
            user: user
            password: pass
            max_connections: 5

          local:
            type: duckdb
            path: /data/local.duckdb
            read_only: false

        logging:
          level: DEBUG
          structured: true
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    # Parse data sources
    datasources = {}
    for name, ds_config in data.get("datasources", {}).items():
        ds_type = ds_config.pop("type")
        datasources[name] = DataSourceConfig(name=name, type=ds_type, config=ds_config)

    # Parse logging config
    logging_data = data.get("logging", {})
    logging_config = LoggingConfig(**logging_data)

    return Config(
        catalog=data.get("catalog", "default"),
        datasources=datasources,
        logging=logging_config,
    )
