# src/forecast_guidance/domain/services/options.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Engine options (domain layer).

Purpose:
    Immutable numeric policy shared by the aggregation, roll-up and guidance
    services. Built from application settings at the edge so that domain
    services never read configuration themselves.

Layer:
    domain/services
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_VOLUME_PRECISION = 1
DEFAULT_MONETARY_PRECISION = 2
DEFAULT_GUIDANCE_PRECISION = 3
DEFAULT_ZERO_TOTAL_THRESHOLD = 0.001
DEFAULT_CONTROL_MARKET_AREA = "Control"
DEFAULT_MAX_ABS_MEASURE = 1e12


@dataclass(frozen=True, slots=True)
class EngineOptions:
    """Numeric policy for one engine run.

    Attributes:
        volume_precision:
            Decimal places applied to rolled-up volume months and totals.
        monetary_precision:
            Decimal places applied to rolled-up monetary totals and series.
        guidance_precision:
            Decimal places applied to evaluated guidance values.
        zero_total_threshold:
            Variant rows whose rounded total volume has an absolute value at
            or below this threshold are hidden from the report.
        control_market_area_name:
            Market area for which the current-month projection is never
            substituted for the raw volume.
        max_abs_measure:
            Raw measures whose magnitude exceeds this bound are treated as
            corrupt and sanitized to zero.
    """

    volume_precision: int = DEFAULT_VOLUME_PRECISION
    monetary_precision: int = DEFAULT_MONETARY_PRECISION
    guidance_precision: int = DEFAULT_GUIDANCE_PRECISION
    zero_total_threshold: float = DEFAULT_ZERO_TOTAL_THRESHOLD
    control_market_area_name: str = DEFAULT_CONTROL_MARKET_AREA
    max_abs_measure: float = DEFAULT_MAX_ABS_MEASURE

    def __post_init__(self) -> None:
        """Reject negative precisions and thresholds."""
        for name in ("volume_precision", "monetary_precision", "guidance_precision"):
            if getattr(self, name) < 0:
                raise ValueError(f"EngineOptions.{name} must be >= 0.")
        if self.zero_total_threshold < 0:
            raise ValueError("EngineOptions.zero_total_threshold must be >= 0.")
        if self.max_abs_measure <= 0:
            raise ValueError("EngineOptions.max_abs_measure must be > 0.")


__all__ = ["EngineOptions"]
