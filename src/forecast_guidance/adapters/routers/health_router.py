# src/forecast_guidance/adapters/routers/health_router.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Liveness probe. The engine holds no external connections to check."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter

from forecast_guidance.adapters.schemas.http.base import BaseHTTPSchema

router = APIRouter()


class HealthStatus(BaseHTTPSchema):
    status: Literal["ok"] = "ok"


@router.get("/healthz", response_model=HealthStatus, summary="Liveness probe")
async def healthz() -> HealthStatus:
    return HealthStatus()
