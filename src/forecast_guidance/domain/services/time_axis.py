# src/forecast_guidance/domain/services/time_axis.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Twelve-month time axis.

The axis is fixed: index ``0`` is January and index ``11`` is December.
Raw facts carry 1-based month numbers; everything inside the engine works on
0-based month indexes.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

MONTHS_PER_YEAR = 12
NO_ACTUALS_INDEX = -1

MONTH_NAMES: tuple[str, ...] = (
    "JAN",
    "FEB",
    "MAR",
    "APR",
    "MAY",
    "JUN",
    "JUL",
    "AUG",
    "SEP",
    "OCT",
    "NOV",
    "DEC",
)

MONTH_INDEXES: range = range(MONTHS_PER_YEAR)


def month_index(month: object) -> int | None:
    """Return the 0-based index for a 1-based month number, or None if invalid."""
    if isinstance(month, bool):
        return None
    try:
        number = int(month)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None
    if 1 <= number <= MONTHS_PER_YEAR:
        return number - 1
    return None


def zero_series() -> list[float]:
    """Return a fresh 12-element series of zeros."""
    return [0.0] * MONTHS_PER_YEAR


def coerce_series(values: Iterable[float] | None) -> list[float]:
    """Return exactly 12 values, padding with zeros or truncating."""
    series = list(values or ())[:MONTHS_PER_YEAR]
    series.extend([0.0] * (MONTHS_PER_YEAR - len(series)))
    return series


def add_series(target: list[float], source: Sequence[float]) -> None:
    """Add ``source`` into ``target`` month by month (in place)."""
    for idx in MONTH_INDEXES:
        target[idx] += source[idx]


__all__ = [
    "MONTHS_PER_YEAR",
    "NO_ACTUALS_INDEX",
    "MONTH_NAMES",
    "MONTH_INDEXES",
    "month_index",
    "zero_series",
    "coerce_series",
    "add_series",
]
