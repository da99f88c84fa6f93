"""
Structured Logging Utility.

This module provides structured JSON logging for the wizard backend. All logs
are formatted as JSON with consistent fields so that local output and
CloudWatch Logs Insights can both be filtered by session or request.

Features:
- JSON format, one object per line
- Correlation IDs (request_id, session_id) for request tracing
- Structured context through extra={"extra_fields": {...}}
- Performance metrics (duration_ms) via log_performance()
- Log level from the LOG_LEVEL environment variable

Usage:
    from skillpath.utils.logger import get_logger, log_performance

    logger = get_logger(__name__)
    logger.info("Message", extra={"extra_fields": {"session_id": "abc"}})

    with log_performance("skill_analysis", session_id="abc"):
        ...
"""

import json
import logging
import os
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Optional

# Determine log level from environment
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL, logging.INFO)

# Correlation IDs for the current request (copied into worker threads by FastAPI)
_log_context: ContextVar[Dict[str, Any]] = ContextVar("skillpath_log_context", default={})

# LogRecord attributes that are not custom fields
_RESERVED_ATTRS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "taskName",
    "exc_info",
    "exc_text",
    "stack_info",
    "extra_fields",
}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logs.

    Formats log records as JSON with the correlation IDs of the current
    request and any custom fields passed through `extra`.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Correlation IDs
        log_data.update(_log_context.get())

        # Custom fields from extra={"extra_fields": {...}}
        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            log_data.update(extra_fields)

        # Custom attributes passed directly through extra={...}
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
            log_data["exception_type"] = (
                record.exc_info[0].__name__ if record.exc_info[0] else None
            )

        return json.dumps(log_data, default=str)


def configure_logging(level: Optional[int] = None) -> None:
    """Install the JSON formatter on the root logger.

    Args:
        level: Log level override. Defaults to LOG_LEVEL from the environment.
    """
    level = level if level is not None else LOG_LEVEL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicate logs
    root_logger.handlers = []

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())

    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with structured logging support.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def set_correlation_id(
    request_id: Optional[str] = None, session_id: Optional[str] = None
) -> None:
    """Set correlation IDs for all subsequent log records of this request.

    Args:
        request_id: Request ID (from the X-Request-ID header).
        session_id: Wizard session ID.
    """
    context = dict(_log_context.get())
    if request_id:
        context["request_id"] = request_id
    if session_id:
        context["session_id"] = session_id
    _log_context.set(context)


def clear_correlation_ids() -> None:
    """Clear correlation IDs from log context."""
    _log_context.set({})


@contextmanager
def log_performance(operation: str, **extra_fields):
    """Context manager for logging operation performance.

    Logs start, completion, and duration of an operation. Exceptions are
    logged and re-raised.

    Args:
        operation: Operation name (e.g., "question_generation", "llm_call").
        **extra_fields: Additional fields to include in log records.

    Example:
        with log_performance("llm_call", model="gpt-4o-mini"):
            result = call_llm(...)
    """
    start_time = time.time()
    logger = get_logger(__name__)

    logger.info(
        f"Starting {operation}",
        extra={"extra_fields": {"operation": operation, **extra_fields}},
    )

    try:
        yield
    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        logger.error(
            f"Failed {operation}",
            extra={
                "extra_fields": {
                    "operation": operation,
                    "duration_ms": round(duration_ms, 2),
                    "status": "error",
                    "error": str(e),
                    **extra_fields,
                }
            },
            exc_info=True,
        )
        raise

    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        f"Completed {operation}",
        extra={
            "extra_fields": {
                "operation": operation,
                "duration_ms": round(duration_ms, 2),
                "status": "success",
                **extra_fields,
            }
        },
    )
