# src/forecast_guidance/adapters/routers/api_router.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Top-level router: ``/healthz``, ``/v1/forecast`` and ``/v1/guidance-contexts``."""

from __future__ import annotations

from fastapi import APIRouter

from forecast_guidance.adapters.routers.forecast_router import router as forecast_router
from forecast_guidance.adapters.routers.guidance_context_router import (
    router as guidance_context_router,
)
from forecast_guidance.adapters.routers.health_router import router as health_router

router = APIRouter()
router.include_router(health_router, tags=["Health"])
router.include_router(forecast_router)
router.include_router(guidance_context_router)
