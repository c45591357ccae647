# src/forecast_guidance/adapters/presenters/guidance_presenter.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Guidance context HTTP presenter."""

from __future__ import annotations

from typing import Any

from forecast_guidance.adapters.mappers.guidance_mapper import (
    to_http_context,
    to_http_definition,
)
from forecast_guidance.adapters.presenters.base_presenter import BasePresenter, PresentResult
from forecast_guidance.adapters.schemas.http.envelopes import SuccessEnvelope
from forecast_guidance.domain.entities.guidance_context import GuidanceContext
from forecast_guidance.domain.entities.guidance_definition import GuidanceDefinition


class GuidancePresenter(BasePresenter):
    """Shape guidance contexts and definitions into success envelopes."""

    def present_context(
        self, context: GuidanceContext, *, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[Any]]:
        return self.present_success(data=to_http_context(context), trace_id=trace_id)

    def present_definition(
        self, definition: GuidanceDefinition, *, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[Any]]:
        return self.present_success(data=to_http_definition(definition), trace_id=trace_id)
