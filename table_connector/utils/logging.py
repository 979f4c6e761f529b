"""Logging setup for the connector and its command line tool."""

import logging
import sys
import json
from typing import Any, Dict, MutableMapping, Optional, Tuple
from datetime import datetime, timezone

# Drivers that log chatter below WARNING
_QUIET_LOGGERS = ("psycopg2", "duckdb", "sqlglot")


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, including request fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        request = getattr(record, "request", None)
        if request:
            log_data.update(request)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class StandardFormatter(logging.Formatter):
    """Human-readable formatter."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(
    level: str = "INFO",
    structured: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Configure root logging.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        structured: Emit JSON records instead of plain text
        log_file: Optional file receiving the same records as stderr
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = StructuredFormatter() if structured else StandardFormatter()

    # stdout carries command output
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Attaches request fields to every record as ``record.request``."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> Tuple[str, MutableMapping[str, Any]]:
        extra = kwargs.setdefault("extra", {})
        extra["request"] = self.extra
        return msg, kwargs


def get_request_logger(name: str, **fields: Any) -> RequestLoggerAdapter:
    """Get a logger whose records carry the given request fields.

    Example:
        >>> logger = get_request_logger(__name__, request_id="123")
        >>> logger.info("Table dropped")  # JSON output includes request_id
    """
    request: Dict[str, Any] = dict(fields)
    return RequestLoggerAdapter(logging.getLogger(name), request)
