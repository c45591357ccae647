# src/forecast_guidance/config/settings.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Service settings read from the environment.

Only the HTTP surface reads the process environment; the engine receives an
immutable :class:`EngineOptions` built by :meth:`Settings.engine_options`.

Engine tunables use a ``GUIDANCE_`` prefix, e.g. ``GUIDANCE_VOLUME_PRECISION=2``.
Unknown keys are rejected.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from forecast_guidance.domain.services.options import EngineOptions

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Typed configuration for the forecast guidance service."""

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
        validation_alias="ENVIRONMENT",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level name.",
        validation_alias="LOG_LEVEL",
    )

    # Engine numerics
    volume_precision: int = Field(
        default=1,
        ge=0,
        le=6,
        description="Decimal places for rolled-up volume figures.",
        validation_alias="GUIDANCE_VOLUME_PRECISION",
    )
    monetary_precision: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Decimal places for rolled-up monetary figures.",
        validation_alias="GUIDANCE_MONETARY_PRECISION",
    )
    guidance_precision: int = Field(
        default=3,
        ge=0,
        le=9,
        description="Decimal places applied to evaluated guidance values.",
        validation_alias="GUIDANCE_RESULT_PRECISION",
    )
    zero_total_threshold: float = Field(
        default=0.001,
        ge=0.0,
        description="Variant rows whose rounded total volume is <= this are hidden.",
        validation_alias="GUIDANCE_ZERO_TOTAL_THRESHOLD",
    )
    control_market_area_name: str = Field(
        default="Control",
        min_length=1,
        description="Market area exempt from current-month projection substitution.",
        validation_alias="GUIDANCE_CONTROL_MARKET_AREA",
    )
    max_abs_measure: float = Field(
        default=1e12,
        gt=0.0,
        description="Raw measures with a larger magnitude are sanitized to zero.",
        validation_alias="GUIDANCE_MAX_ABS_MEASURE",
    )

    model_config = SettingsConfigDict(
        extra="forbid",
        case_sensitive=False,
        populate_by_name=True,
    )

    def engine_options(self) -> EngineOptions:
        """Return the immutable engine options derived from these settings."""
        return EngineOptions(
            volume_precision=self.volume_precision,
            monetary_precision=self.monetary_precision,
            guidance_precision=self.guidance_precision,
            zero_total_threshold=self.zero_total_threshold,
            control_market_area_name=self.control_market_area_name,
            max_abs_measure=self.max_abs_measure,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings singleton.

    Returns:
        Settings: Validated application settings.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
        logger.info(
            "Settings initialized",
            extra={
                "extra": {
                    "environment": settings.environment.value,
                    "volume_precision": settings.volume_precision,
                    "monetary_precision": settings.monetary_precision,
                    "guidance_precision": settings.guidance_precision,
                    "zero_total_threshold": settings.zero_total_threshold,
                    "control_market_area_name": settings.control_market_area_name,
                }
            },
        )
        return settings
    except ValidationError as exc:
        logger.exception("Invalid application configuration")
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
