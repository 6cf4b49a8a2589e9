"""
Logging utilities for the OCI Pricing MCP Server.

Provides structured logging with JSON formatting. Handlers write to stderr
because stdout carries the MCP stdio transport.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger.json import JsonFormatter


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp"""

    def add_fields(self, log_record, record, message_dict):
        super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name


def setup_logger(
    name: str,
    level: str = "INFO",
    json_format: bool = True
) -> logging.Logger:
    """
    Set up a logger with appropriate formatting.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON formatting if True

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    logger.handlers = []
    logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(getattr(logging, level.upper()))

    if json_format:
        formatter = CustomJsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s'
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


# Create default logger
logger = setup_logger("oci_pricing_mcp")


def log_tool_call(
    tool_name: str,
    status: str,
    duration_ms: Optional[float] = None,
    logger_instance: Optional[logging.Logger] = None
):
    """Log tool call event"""
    log = logger_instance or logger
    extra = {
        "tool_name": tool_name,
        "status": status,
        "event_type": "tool_call"
    }
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 1)

    log.info(f"[TOOL:{tool_name}] {status}", extra=extra)


def log_cache_event(
    event: str,
    key: str,
    logger_instance: Optional[logging.Logger] = None
):
    """Log cache hit/miss/expiry. Emitted at DEBUG to keep stdio logs quiet."""
    log = logger_instance or logger
    log.debug(
        f"Cache {event}: {key}",
        extra={
            "cache_event": event,
            "cache_key": key,
            "event_type": "cache"
        }
    )


def log_fetch(
    url: str,
    currency: str,
    status: str,
    duration_ms: Optional[float] = None,
    item_count: Optional[int] = None,
    logger_instance: Optional[logging.Logger] = None,
) -> None:
    """Log a real-time pricing feed request."""
    _log = logger_instance or logger
    dur = f" [{duration_ms:.0f}ms]" if duration_ms is not None else ""
    _log.info(
        f"[FETCH:{currency}] {status}{dur}",
        extra={
            "event_type": "realtime_fetch",
            "url": url,
            "currency": currency,
            "status": status,
            "item_count": item_count,
            "duration_ms": round(duration_ms, 1) if duration_ms is not None else None,
        },
    )


def log_error(
    error_type: str,
    error_message: str,
    tool_name: Optional[str] = None,
    logger_instance: Optional[logging.Logger] = None
):
    """Log error event"""
    log = logger_instance or logger
    extra = {
        "error_type": error_type,
        "error_message": error_message,
        "event_type": "error"
    }
    if tool_name:
        extra["tool_name"] = tool_name

    log.error("Error occurred", extra=extra)
