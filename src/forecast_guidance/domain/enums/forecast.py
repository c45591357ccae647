# src/forecast_guidance/domain/enums/forecast.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Forecast scope enumerations."""

from __future__ import annotations

from enum import Enum


class ForecastScope(str, Enum):
    """Entity level that line items are keyed by."""

    MARKET = "market"
    CUSTOMER = "customer"


class ManagedBy(str, Enum):
    """Level at which a market maintains its forecast."""

    MARKET = "Market"
    CUSTOMER = "Customer"

    @property
    def scope(self) -> ForecastScope:
        """Return the aggregation scope used for markets managed this way."""
        return ForecastScope.CUSTOMER if self is ManagedBy.CUSTOMER else ForecastScope.MARKET


__all__ = ["ForecastScope", "ManagedBy"]
