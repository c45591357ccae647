# src/forecast_guidance/domain/services/cutoff_resolver.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Actual/forecast cutoff resolution.

Purpose:
    Infer the last month carrying actual data from heterogeneous raw facts,
    and apply that cutoff as a contiguous prefix of actual months.

Layer:
    domain/services

Notes:
    - The cutoff is a prefix boundary, not a per-month lookup: every month up
      to the cutoff is actual even if no fact flagged that month.
    - Facts with a month outside 1..12 never move the cutoff.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from forecast_guidance.domain.entities.aggregates import MonthlyValue
from forecast_guidance.domain.entities.raw_fact import RawFact
from forecast_guidance.domain.services.time_axis import NO_ACTUALS_INDEX, month_index


def resolve_last_actual_month_index(facts: Iterable[RawFact]) -> int:
    """Return the highest 0-based month index flagged actual, or -1."""
    last = NO_ACTUALS_INDEX
    for fact in facts:
        if not fact.is_actual:
            continue
        idx = month_index(fact.month)
        if idx is not None and idx > last:
            last = idx
    return last


def max_cutoff(indexes: Iterable[int]) -> int:
    """Return the latest cutoff among children (-1 when there are none)."""
    return max(indexes, default=NO_ACTUALS_INDEX)


def apply_actual_prefix(
    months: Sequence[MonthlyValue], last_actual_month_index: int
) -> list[MonthlyValue]:
    """Return ``months`` with ``is_actual`` set exactly on ``0..cutoff``."""
    return [
        MonthlyValue(
            value=month.value,
            is_actual=idx <= last_actual_month_index,
            is_manually_modified=month.is_manually_modified,
        )
        for idx, month in enumerate(months)
    ]


def is_actual_prefix(months: Sequence[MonthlyValue]) -> bool:
    """Whether the actual flags form a contiguous prefix."""
    seen_forecast = False
    for month in months:
        if month.is_actual and seen_forecast:
            return False
        if not month.is_actual:
            seen_forecast = True
    return True


__all__ = [
    "resolve_last_actual_month_index",
    "max_cutoff",
    "apply_actual_prefix",
    "is_actual_prefix",
]
