# src/forecast_guidance/infrastructure/http/errors.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Exception handlers for the HTTP surface.

Domain errors keep their own code and status. Request validation failures
become ``VALIDATION_ERROR``/422, Starlette HTTP errors ``HTTP_ERROR`` and
anything unexpected ``INTERNAL_ERROR``/500. All of them are rendered through
:class:`ErrorEnvelope` with the request's trace id attached.
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from forecast_guidance.adapters.schemas.http.envelopes import ErrorEnvelope, ErrorObject
from forecast_guidance.domain.exceptions.base import DomainError
from forecast_guidance.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


def error_response(
    request: Request,
    *,
    code: str,
    status_code: int,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Render one error as a JSON response; absent optional fields are omitted."""
    envelope = ErrorEnvelope(
        error=ErrorObject(
            code=code,
            http_status=status_code,
            message=message,
            details=details,
            trace_id=getattr(request.state, "trace_id", None),
        )
    )
    content = envelope.model_dump_http()
    content["error"] = {key: value for key, value in content["error"].items() if value is not None}
    return JSONResponse(status_code=status_code, content=content)


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    logger.info(
        "http.domain_error",
        extra={
            "extra": {
                "code": exc.code,
                "http_status": exc.http_status,
                "path": request.url.path,
            }
        },
    )
    return error_response(
        request,
        code=exc.code,
        status_code=exc.http_status,
        message=exc.message or exc.code,
        details=exc.details or None,
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        request,
        code="VALIDATION_ERROR",
        status_code=422,
        message="Request validation failed",
        details={"errors": jsonable_encoder(exc.errors())},
    )


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    plain = isinstance(exc.detail, str)
    return error_response(
        request,
        code="HTTP_ERROR",
        status_code=exc.status_code,
        message=exc.detail if plain else "HTTP error",
        details=None if plain else {"detail": jsonable_encoder(exc.detail)},
    )


async def handle_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("http.unhandled_exception", exc_info=exc)
    return error_response(
        request, code="INTERNAL_ERROR", status_code=500, message="Internal server error"
    )


__all__ = [
    "error_response",
    "handle_domain_error",
    "handle_http_exception",
    "handle_unhandled_exception",
    "handle_validation_error",
]
