# src/forecast_guidance/main.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Application factory.

Run with ``uvicorn forecast_guidance.main:create_app --factory``. The factory
configures JSON logging, installs the trace-id middleware and the error
handlers, and mounts the routers. It contains no forecasting logic.
"""

from __future__ import annotations

import os
from collections.abc import Awaitable, Callable
from typing import TypeVar

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette.requests import Request
from starlette.responses import Response

from forecast_guidance.adapters.routers.api_router import router as api_router
from forecast_guidance.config.settings import Settings, get_settings
from forecast_guidance.domain.exceptions.base import DomainError
from forecast_guidance.infrastructure.http.errors import (
    handle_domain_error,
    handle_http_exception,
    handle_unhandled_exception,
    handle_validation_error,
)
from forecast_guidance.infrastructure.http.middleware.trace import TraceIdMiddleware
from forecast_guidance.infrastructure.logging.logger import (
    configure_root_logging,
    get_json_logger,
)

SERVICE_NAME = "forecast-guidance"
SERVICE_VERSION = "0.1.0"

logger = get_json_logger(__name__)

Handler = Callable[[Request, Exception], Awaitable[Response]]

E = TypeVar("E", bound=Exception)


def _operation_id(route: APIRoute) -> str:
    """``post__v1_forecast_items`` style ids, stable across releases."""
    methods = ",".join(sorted(route.methods or ())).lower()
    path = route.path_format.lower().replace("/", "_").replace("{", "").replace("}", "")
    return f"{methods}_{path}"


def _only(
    kind: type[E], handler: Callable[[Request, E], Awaitable[Response]]
) -> Handler:
    async def _handle(request: Request, exc: Exception) -> Response:
        if not isinstance(exc, kind):
            raise exc
        return await handler(request, exc)

    return _handle


def _install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, _only(DomainError, handle_domain_error))
    app.add_exception_handler(HTTPException, _only(HTTPException, handle_http_exception))
    app.add_exception_handler(
        RequestValidationError, _only(RequestValidationError, handle_validation_error)
    )
    app.add_exception_handler(Exception, handle_unhandled_exception)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use; the cached process settings when omitted.
    """
    settings = settings or get_settings()
    configure_root_logging(settings.log_level)

    app = FastAPI(
        title="Forecast Guidance API",
        version=SERVICE_VERSION,
        description="Aggregation, roll-up and guidance evaluation for sales forecasts.",
        generate_unique_id_function=_operation_id,
    )
    app.state.settings = settings
    app.add_middleware(TraceIdMiddleware)
    _install_error_handlers(app)
    app.include_router(api_router)

    logger.info(
        "service_startup",
        extra={
            "extra": {
                "service": SERVICE_NAME,
                "version": SERVICE_VERSION,
                "env": settings.environment.value,
            }
        },
    )
    return app


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(
        "forecast_guidance.main:create_app",
        factory=True,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8080")),
    )
