"""Configuration management."""

from .config import (
    Config,
    DataSourceConfig,
    LoggingConfig,
    load_config,
)

__all__ = [
    "Config",
    "DataSourceConfig",
    "LoggingConfig",
    "load_config",
]
