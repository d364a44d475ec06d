"""Core logging setup and configuration.

This module wires structured JSON logging with context propagation and
OpenTelemetry correlation while keeping configuration declarative via
``logging.config.dictConfig``.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from opentelemetry import trace

from queryflow.logging.filters import set_logging_context
from queryflow.settings import get_settings


_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _build_reserved_keys() -> Set[str]:
    """Collect standard ``LogRecord`` attributes to avoid duplicating them."""
    probe = logging.LogRecord(
        name="queryflow.probe",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    reserved = set(probe.__dict__.keys())
    reserved.update({"asctime", "message"})
    return reserved


_RESERVED_LOG_RECORD_KEYS = _build_reserved_keys()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class CustomJsonFormatter(logging.Formatter):
    """JSON formatter that enriches log entries with context and trace data."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {}

        for key, value in record.__dict__.items():
            if key not in _RESERVED_LOG_RECORD_KEYS and key not in log_record:
                log_record[key] = value

        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = record.getMessage()

        # Attributes injected by the OpenTelemetry logging instrumentation win
        if hasattr(record, "otelTraceID"):
            log_record["trace_id"] = record.otelTraceID
        if hasattr(record, "otelSpanID"):
            log_record["span_id"] = record.otelSpanID

        if "trace_id" not in log_record:
            span_context = trace.get_current_span().get_span_context()
            if span_context.is_valid:
                log_record["trace_id"] = format(span_context.trace_id, "032x")
                log_record["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure structured logging backed by ``logging.config.dictConfig``.

    The configured ``app_env`` is stamped on every record as ``environment``.

    Args:
        level: Base log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to the ``log_level`` setting.

    Raises:
        QueryFlowError: If ``level`` is not a standard level name.
    """
    settings = get_settings()
    set_logging_context(environment=settings.app_env)

    level = (level or settings.log_level).upper()
    if level not in _VALID_LEVELS:
        from queryflow.common.exceptions import configuration_error
        raise configuration_error(
            f"Unknown log level '{level}'. Expected one of: {', '.join(_VALID_LEVELS)}",
            config_key="log_level",
        )

    config_dict: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "queryflow_json": {
                "()": "queryflow.logging.logger.CustomJsonFormatter",
            }
        },
        "filters": {
            "queryflow_context": {
                "()": "queryflow.logging.filters.ContextFilter",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "queryflow_json",
                "filters": ["queryflow_context"],
                "stream": "ext://sys.stdout",
            }
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }

    logging.config.dictConfig(config_dict)
