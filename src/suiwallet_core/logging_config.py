"""Structured logging configuration with correlation IDs for transfer tracing.

This module provides structured JSON logging with:
- Correlation IDs for tracing one submission across collaborators
- Contextual fields (sender address, transaction digest)
- Masking of sensitive extra fields
"""
from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional

from .constants import LoggingConfig

# Context variables for correlation tracking
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
address_var: ContextVar[Optional[str]] = ContextVar("address", default=None)
digest_var: ContextVar[Optional[str]] = ContextVar("digest", default=None)

_RESERVED_ATTRS = frozenset({
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
    "correlation_id",
    "address",
    "digest",
})


class CorrelationIDFilter(logging.Filter):
    """Logging filter that adds correlation ID and transfer context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get()
        record.address = address_var.get()
        record.digest = digest_var.get()
        return True


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key in ("correlation_id", "address", "digest"):
            value = getattr(record, key, None)
            if value:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Extra fields passed via logger.info(..., extra={...})
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            if key.lower() in LoggingConfig.SENSITIVE_FIELDS:
                value = LoggingConfig.MASK_PATTERN
            log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON structured logging (True) or simple format (False)
        log_file: Optional file path for logging output
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if json_format:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - "
            "[%(correlation_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(CorrelationIDFilter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(CorrelationIDFilter())
        root_logger.addHandler(file_handler)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from context."""
    return correlation_id_var.get()


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return f"cor_{uuid.uuid4().hex[:16]}"


def set_digest_context(digest: str) -> None:
    """Set transaction digest in logging context."""
    digest_var.set(digest)


class LogContext:
    """Context manager for temporary logging context."""

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        address: Optional[str] = None,
        digest: Optional[str] = None,
    ):
        self.correlation_id = correlation_id
        self.address = address
        self.digest = digest
        self.previous_context: dict[str, Optional[str]] = {}

    def __enter__(self) -> "LogContext":
        self.previous_context = {
            "correlation_id": correlation_id_var.get(),
            "address": address_var.get(),
            "digest": digest_var.get(),
        }

        if self.correlation_id:
            correlation_id_var.set(self.correlation_id)
        if self.address:
            address_var.set(self.address)
        if self.digest:
            digest_var.set(self.digest)

        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        correlation_id_var.set(self.previous_context["correlation_id"])
        address_var.set(self.previous_context["address"])
        digest_var.set(self.previous_context["digest"])
