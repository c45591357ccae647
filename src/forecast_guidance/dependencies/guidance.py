# src/forecast_guidance/dependencies/guidance.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Dependency wiring for the guidance engine and its use cases.

Purpose:
    Provide FastAPI dependency hooks for the forecast and guidance-context
    routers. The engine and the context store are process-wide singletons;
    tests override the hooks through ``app.dependency_overrides``.

Layer:
    dependencies
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from forecast_guidance.application.services.guidance_engine import GuidanceEngine
from forecast_guidance.application.use_cases.forecast.get_forecast_items import (
    GetForecastItemsUseCase,
)
from forecast_guidance.application.use_cases.forecast.get_forecast_summary import (
    GetForecastSummaryUseCase,
)
from forecast_guidance.application.use_cases.guidance.manage_guidance_context import (
    ManageGuidanceContextUseCase,
)
from forecast_guidance.config.settings import get_settings
from forecast_guidance.infrastructure.guidance.in_memory_context_repository import (
    InMemoryGuidanceContextRepository,
)


@lru_cache(maxsize=1)
def get_guidance_engine() -> GuidanceEngine:
    """Return the engine configured from application settings."""
    return GuidanceEngine(get_settings().engine_options())


@lru_cache(maxsize=1)
def get_context_repository() -> InMemoryGuidanceContextRepository:
    """Return the process-wide guidance context store."""
    return InMemoryGuidanceContextRepository()


def get_forecast_items_use_case(
    engine: Annotated[GuidanceEngine, Depends(get_guidance_engine)],
    contexts: Annotated[InMemoryGuidanceContextRepository, Depends(get_context_repository)],
) -> GetForecastItemsUseCase:
    return GetForecastItemsUseCase(engine, contexts)


def get_forecast_summary_use_case(
    engine: Annotated[GuidanceEngine, Depends(get_guidance_engine)],
    contexts: Annotated[InMemoryGuidanceContextRepository, Depends(get_context_repository)],
) -> GetForecastSummaryUseCase:
    return GetForecastSummaryUseCase(engine, contexts)


def get_manage_guidance_use_case(
    contexts: Annotated[InMemoryGuidanceContextRepository, Depends(get_context_repository)],
) -> ManageGuidanceContextUseCase:
    return ManageGuidanceContextUseCase(contexts)


__all__ = [
    "get_context_repository",
    "get_forecast_items_use_case",
    "get_forecast_summary_use_case",
    "get_guidance_engine",
    "get_manage_guidance_use_case",
]
