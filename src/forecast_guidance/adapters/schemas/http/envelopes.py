# src/forecast_guidance/adapters/schemas/http/envelopes.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Response envelopes shared by every endpoint.

Successful calls answer ``{"data": ...}``; failures answer
``{"error": {...}}`` with a stable upper-snake-case code such as
``GUIDANCE_DEFINITION_NOT_FOUND`` or ``VALIDATION_ERROR``.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import ConfigDict, Field

from forecast_guidance.adapters.schemas.http.base import BaseHTTPSchema

__all__ = ["ErrorEnvelope", "ErrorObject", "SuccessEnvelope"]

T = TypeVar("T")

_DELETE_TRENDS_EXAMPLE = {
    "code": "GUIDANCE_DEFINITION_NOT_DELETABLE",
    "http_status": 409,
    "message": "The trends guidance cannot be deleted.",
    "details": {"context": "depletion", "id": 1},
    "trace_id": "3f0c7e1a-5d0b-4c55-9a3e-2b8f7c1d9e40",
}


class ErrorObject(BaseHTTPSchema):
    """Body of a failed call; ``details`` and ``trace_id`` are optional."""

    model_config = ConfigDict(
        title="ErrorObject", json_schema_extra={"examples": [_DELETE_TRENDS_EXAMPLE]}
    )

    code: str = Field(..., description="Stable machine-readable error code.")
    http_status: int
    message: str
    details: dict[str, Any] | None = None
    trace_id: str | None = Field(default=None, description="Echo of the x-trace-id header.")


class ErrorEnvelope(BaseHTTPSchema):
    model_config = ConfigDict(title="ErrorEnvelope")

    error: ErrorObject


class SuccessEnvelope(BaseHTTPSchema, Generic[T]):
    """``{"data": T}`` wrapper for forecast views and guidance contexts."""

    model_config = ConfigDict(title="SuccessEnvelope")

    data: T
