# src/forecast_guidance/adapters/routers/base_router.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Versioned router base for the forecast and guidance endpoints.

Routes mount under ``/<version>/<resource>`` and declare the shared error
responses (404 unknown definition, 409 protected trends guidance, 422
invalid input or selection, 500) so the OpenAPI document shows the error
envelope for each.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from fastapi import APIRouter, Request, Response

from forecast_guidance.adapters.presenters.base_presenter import BasePresenter, PresentResult
from forecast_guidance.adapters.schemas.http.envelopes import ErrorEnvelope
from forecast_guidance.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

_ERROR_DESCRIPTIONS: dict[int, str] = {
    404: "Guidance definition not found.",
    409: "Guidance definition is protected.",
    422: "Invalid request or guidance selection.",
    500: "Internal server error.",
}


def request_trace_id(request: Request) -> str | None:
    return getattr(request.state, "trace_id", None)


class BaseRouter(APIRouter):
    """APIRouter with a ``/<version>/<resource>`` prefix.

    Args:
        version: Version segment, e.g. ``"v1"``.
        resource: Resource segment, e.g. ``"forecast"``.
        tags: OpenAPI tags for every route on this router.
        **kwargs: Passed through to :class:`APIRouter`.
    """

    def __init__(
        self,
        *,
        version: str,
        resource: str,
        tags: Sequence[str] = (),
        **kwargs: Any,
    ) -> None:
        prefix = f"/{version}/{resource}"
        super().__init__(prefix=prefix, tags=list(tags), **kwargs)
        logger.debug("router_initialized", extra={"extra": {"prefix": prefix}})

    @staticmethod
    def send_success(response: Response, result: PresentResult[Any]) -> Any:
        """Copy presenter headers onto ``response`` and return the envelope."""
        BasePresenter.apply_headers(result, response)
        return result.body

    @staticmethod
    def std_error_responses() -> dict[int | str, dict[str, Any]]:
        return {
            status: {"model": ErrorEnvelope, "description": description}
            for status, description in _ERROR_DESCRIPTIONS.items()
        }
