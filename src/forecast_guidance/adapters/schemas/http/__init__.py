# src/forecast_guidance/adapters/schemas/http/__init__.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""HTTP Schemas package (Adapters Layer).

Purpose:
    Public, adapter-facing HTTP schema surface. Re-exports the canonical
    envelopes and resource schemas used by routers and presenters. It does
    NOT expose BaseHTTPSchema, which stays internal to this package.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from forecast_guidance.adapters.schemas.http.envelopes import (
    ErrorEnvelope,
    ErrorObject,
    SuccessEnvelope,
)
from forecast_guidance.adapters.schemas.http.forecast import (
    ForecastItemsHTTP,
    ForecastItemsRequest,
    ForecastSummaryHTTP,
    ForecastSummaryRequest,
)
from forecast_guidance.adapters.schemas.http.guidance import (
    GuidanceContextHTTP,
    GuidanceDefinitionHTTP,
    GuidanceDefinitionsLoadRequest,
    GuidanceSelectionRequest,
)

__all__ = [
    # Envelopes
    "ErrorObject",
    "ErrorEnvelope",
    "SuccessEnvelope",
    # Forecast
    "ForecastItemsRequest",
    "ForecastItemsHTTP",
    "ForecastSummaryRequest",
    "ForecastSummaryHTTP",
    # Guidance
    "GuidanceContextHTTP",
    "GuidanceDefinitionHTTP",
    "GuidanceDefinitionsLoadRequest",
    "GuidanceSelectionRequest",
]
