# src/forecast_guidance/infrastructure/http/middleware/trace.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Per-request correlation id.

A caller-supplied ``x-trace-id`` is reused when it is non-blank and at most
128 characters; otherwise a fresh UUID4 is issued. The id lands on
``request.state.trace_id`` (read by routers, presenters and error handlers),
in the logging context variable, and on the response header.
"""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from forecast_guidance.infrastructure.logging.logger import set_request_context

TRACE_HEADER = "x-trace-id"
MAX_TRACE_ID_LENGTH = 128


def resolve_trace_id(inbound: str | None) -> str:
    """Return ``inbound`` stripped if usable, else a new UUID4 string."""
    candidate = (inbound or "").strip()
    if candidate and len(candidate) <= MAX_TRACE_ID_LENGTH:
        return candidate
    return str(uuid.uuid4())


class TraceIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        trace_id = resolve_trace_id(request.headers.get(TRACE_HEADER))
        request.state.trace_id = trace_id
        set_request_context(trace_id=trace_id)

        response = await call_next(request)
        response.headers.setdefault(TRACE_HEADER, trace_id)
        return response


__all__ = ["MAX_TRACE_ID_LENGTH", "TRACE_HEADER", "TraceIdMiddleware", "resolve_trace_id"]
