# src/forecast_guidance/infrastructure/logging/logger.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""JSON-lines logging for the service.

Every record becomes one JSON object with ``ts``, ``level``, ``logger`` and
``message``, plus ``trace_id`` when one is known and ``exc_type`` /
``exc_message`` for exceptions. Structured fields travel as
``extra={"extra": {...}}`` and are merged into the object, so pipeline code
only needs the standard library::

    logger = logging.getLogger(__name__)
    logger.info("rollup_completed", extra={"extra": {"variants": 3}})
"""

from __future__ import annotations

import json
import logging
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

__all__ = [
    "JsonLineFormatter",
    "configure_root_logging",
    "get_json_logger",
    "get_trace_id",
    "set_request_context",
]

_trace_id_var: ContextVar[str | None] = ContextVar("forecast_guidance_trace_id", default=None)


def set_request_context(*, trace_id: str | None = None) -> None:
    if trace_id is not None:
        _trace_id_var.set(trace_id)


def get_trace_id() -> str | None:
    return _trace_id_var.get()


class JsonLineFormatter(logging.Formatter):
    """Render a record as a compact JSON line.

    A ``trace_id`` attribute on the record wins over the request context.
    """

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        trace_id = getattr(record, "trace_id", None) or get_trace_id()
        if trace_id:
            line["trace_id"] = trace_id
        line.update(_exception_fields(record))

        fields = getattr(record, "extra", None)
        if isinstance(fields, dict):
            line.update(fields)
        return json.dumps(line, separators=(",", ":"), ensure_ascii=False, default=str)


def _exception_fields(record: logging.LogRecord) -> dict[str, str]:
    if not record.exc_info:
        return {}
    exc_type, exc_value, _ = record.exc_info
    fields: dict[str, str] = {}
    if exc_type is not None:
        fields["exc_type"] = exc_type.__name__
    if exc_value is not None:
        fields["exc_message"] = str(exc_value)
    return fields


def configure_root_logging(level: str | int = "INFO") -> None:
    """Set the root level and install the JSON handler once.

    Calling it again only adjusts the level.
    """
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(JsonLineFormatter())
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Module logger for adapters and infrastructure; output goes via the root handler."""
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
