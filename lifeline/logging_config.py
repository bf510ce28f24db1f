"""
Centralized logging configuration for LifeLine.

Every Python entry point (API server, housekeeping scripts) logs in one format:
Format: 2026-10-18T09:15:02Z [source] LEVEL message

Environment Variables:
    LOG_LEVEL: "TRACE", "DEBUG" or "INFO" (default)
               - INFO: Normal operation logs
               - DEBUG: Chat turns, PocketBase filters, timer scheduling
               - TRACE: Raw donor/camp records as returned by PocketBase

Usage:
    from lifeline.logging_config import configure_logging, get_logger

    configure_logging(source="api")
    logger = get_logger(__name__)
    logger.info("Application started")
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime

# Custom TRACE level for very verbose diagnostics
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def _trace(self: logging.Logger, message: object, *args: object, **kw: object) -> None:
    """Log a message at TRACE level (5)."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kw)  # type: ignore[arg-type]


logging.Logger.trace = _trace  # type: ignore[attr-defined]


class ISO8601Formatter(logging.Formatter):
    """Formatter producing ISO8601 UTC timestamps.

    Output format: 2026-10-18T09:15:02Z [source] LEVEL message
    """

    def __init__(self, source: str = "lifeline"):
        """Initialize formatter with a source identifier.

        Args:
            source: Identifier shown in brackets (e.g., "api", "housekeeping")
        """
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()

        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        return f"{timestamp} [{self.source}] {record.levelname} {message}"


class HealthCheckFilter(logging.Filter):
    """Suppress access logs for the health endpoint unless DEBUG is on.

    Load balancers poll /health every few seconds.
    """

    HEALTH_PATHS = {"/health", "/api/health"}

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno == logging.DEBUG:
            return True

        message = record.getMessage()
        return all(not (path in message and ("GET" in message or "200" in message)) for path in self.HEALTH_PATHS)


def _level_from_env(debug: bool | None) -> int:
    log_level_env = os.getenv("LOG_LEVEL", "").upper()
    if log_level_env == "TRACE":
        return TRACE
    if log_level_env == "DEBUG" or debug:
        return logging.DEBUG
    return logging.INFO


def configure_logging(
    source: str = "lifeline",
    level: int | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Configure root logging for a service component.

    Args:
        source: Source identifier for log messages (e.g., "api", "housekeeping")
        level: Logging level (defaults to INFO, or DEBUG/TRACE from LOG_LEVEL)
        debug: Force DEBUG level

    Returns:
        Configured root logger
    """
    if level is None:
        level = _level_from_env(debug)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter(source=source))
    handler.addFilter(HealthCheckFilter())
    root_logger.addHandler(handler)

    # Uvicorn installs its own handlers, which would bypass HealthCheckFilter
    for uvicorn_logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(uvicorn_logger_name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.addHandler(handler)
        uvicorn_logger.setLevel(level)
        uvicorn_logger.propagate = False

    # PocketBase SDK and token validation both log every request through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(name)
