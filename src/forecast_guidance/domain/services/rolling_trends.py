# src/forecast_guidance/domain/services/rolling_trends.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Trailing rolling-window sums ending at the actual cutoff."""

from __future__ import annotations

import math
from collections.abc import Sequence

from forecast_guidance.domain.entities.aggregates import ForecastAggregate, TrendMeasures
from forecast_guidance.domain.services.time_axis import MONTHS_PER_YEAR

TREND_WINDOWS: tuple[int, ...] = (3, 6, 12)


def sum_rolling(series: Sequence[float], n: int, end_idx: int) -> float:
    """Return ``sum(series[max(0, end_idx - n + 1) .. end_idx])``.

    An ``end_idx`` below zero (no actuals) or a non-positive window sums to
    ``0.0``; an ``end_idx`` past the series is clamped to its last month.
    """
    if n <= 0 or end_idx < 0 or not series:
        return 0.0
    end = min(end_idx, len(series) - 1, MONTHS_PER_YEAR - 1)
    start = max(0, end - n + 1)
    return math.fsum(series[start : end + 1])


def compute_trends(
    ty_series: Sequence[float], py_series: Sequence[float], end_idx: int
) -> TrendMeasures:
    """Compute the 3/6/12-month TY and PY sums for one cutoff."""
    cy_3m, cy_6m, cy_12m = (sum_rolling(ty_series, n, end_idx) for n in TREND_WINDOWS)
    py_3m, py_6m, py_12m = (sum_rolling(py_series, n, end_idx) for n in TREND_WINDOWS)
    return TrendMeasures(
        cy_3m=cy_3m,
        cy_6m=cy_6m,
        cy_12m=cy_12m,
        py_3m=py_3m,
        py_6m=py_6m,
        py_12m=py_12m,
    )


def apply_trends(aggregate: ForecastAggregate) -> None:
    """Populate ``aggregate.trends`` from its own series and cutoff."""
    aggregate.trends = compute_trends(
        aggregate.ty_series, aggregate.py_months, aggregate.last_actual_month_index
    )


__all__ = ["TREND_WINDOWS", "sum_rolling", "compute_trends", "apply_trends"]
