# src/forecast_guidance/domain/services/measure_lookup.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Measure lookup tables.

Purpose:
    Resolve measure names against one aggregate through an explicit table
    of totals and monthly series, instead of dynamic attribute access.

Layer:
    domain/services

Notes:
    - Unknown measure names resolve to ``0.0``.
    - Monthly series exist for volume, monetary and rate measures. Monetary
      months without explicit data are derived as volume times rate; rates
      are constant across months. Trend measures have no monthly series.
    - Period views (YTD / TG) restrict monthly series to the period and
      recompute totals from them; rates are re-derived from period sums.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from forecast_guidance.domain.entities.aggregates import ForecastAggregate
from forecast_guidance.domain.enums.guidance import GuidancePeriod
from forecast_guidance.domain.enums.measure_field import TREND_FIELDS, MeasureField
from forecast_guidance.domain.services.rate_deriver import monetary_rate
from forecast_guidance.domain.services.time_axis import (
    MONTHS_PER_YEAR,
    NO_ACTUALS_INDEX,
    coerce_series,
)

_F = MeasureField

# Rate measure -> (monetary measure, volume measure) it is derived from.
_RATE_SOURCES: dict[MeasureField, tuple[MeasureField, MeasureField]] = {
    _F.GSV_RATE: (_F.GROSS_SALES_VALUE, _F.CASE_EQUIVALENT_VOLUME),
    _F.PY_GSV_RATE: (_F.PY_GROSS_SALES_VALUE, _F.PY_CASE_EQUIVALENT_VOLUME),
}


def period_month_indexes(period: GuidancePeriod, last_actual_month_index: int) -> range:
    """Return the month indexes covered by ``period``.

    ``YTD`` covers the actual months plus the current month, ``TG`` the
    months after the current month.
    """
    if period is GuidancePeriod.FY:
        return range(MONTHS_PER_YEAR)
    boundary = min(max(last_actual_month_index, NO_ACTUALS_INDEX) + 2, MONTHS_PER_YEAR)
    if period is GuidancePeriod.YTD:
        return range(0, boundary)
    return range(boundary, MONTHS_PER_YEAR)


@dataclass(frozen=True, slots=True)
class MeasureTable:
    """Totals and monthly series for the closed measure vocabulary.

    Attributes:
        totals: Total value per measure.
        monthly: Twelve-month series per measure, where one exists.
        last_actual_month_index: Cutoff used to resolve YTD / TG periods.
    """

    totals: Mapping[MeasureField, float] = field(default_factory=dict)
    monthly: Mapping[MeasureField, tuple[float, ...]] = field(default_factory=dict)
    last_actual_month_index: int = NO_ACTUALS_INDEX

    @classmethod
    def from_aggregate(cls, aggregate: ForecastAggregate) -> MeasureTable:
        """Build the lookup table for one aggregate at any level."""
        ty = tuple(aggregate.ty_series)
        py = tuple(aggregate.py_months)
        lc = tuple(aggregate.lc_months)
        rate_for_lc = aggregate.rate_for_lc
        if aggregate.lc_gsv_months is not None:
            lc_gsv = tuple(coerce_series(aggregate.lc_gsv_months))
        else:
            lc_gsv = tuple(value * rate_for_lc for value in lc)
        trends = aggregate.trends

        totals: dict[MeasureField, float] = {
            _F.CASE_EQUIVALENT_VOLUME: aggregate.case_equivalent_volume,
            _F.PY_CASE_EQUIVALENT_VOLUME: aggregate.py_case_equivalent_volume,
            _F.PREV_PUBLISHED_CASE_EQUIVALENT_VOLUME: (
                aggregate.prev_published_case_equivalent_volume
            ),
            _F.GROSS_SALES_VALUE: aggregate.gross_sales_value,
            _F.PY_GROSS_SALES_VALUE: aggregate.py_gross_sales_value,
            _F.LC_GROSS_SALES_VALUE: aggregate.lc_gross_sales_value,
            _F.GSV_RATE: aggregate.gsv_rate,
            _F.PY_GSV_RATE: aggregate.py_gsv_rate,
        }
        totals.update({measure: trends.value(measure) for measure in TREND_FIELDS})

        monthly: dict[MeasureField, tuple[float, ...]] = {
            _F.CASE_EQUIVALENT_VOLUME: ty,
            _F.PY_CASE_EQUIVALENT_VOLUME: py,
            _F.PREV_PUBLISHED_CASE_EQUIVALENT_VOLUME: lc,
            _F.GROSS_SALES_VALUE: tuple(value * aggregate.gsv_rate for value in ty),
            _F.PY_GROSS_SALES_VALUE: tuple(value * aggregate.py_gsv_rate for value in py),
            _F.LC_GROSS_SALES_VALUE: lc_gsv,
            _F.GSV_RATE: (aggregate.gsv_rate,) * MONTHS_PER_YEAR,
            _F.PY_GSV_RATE: (aggregate.py_gsv_rate,) * MONTHS_PER_YEAR,
        }
        return cls(
            totals=totals,
            monthly=monthly,
            last_actual_month_index=aggregate.last_actual_month_index,
        )

    def total(self, name: object) -> float:
        """Return the total for a measure name, ``0.0`` when unknown."""
        measure = MeasureField.parse(name)
        if measure is None:
            return 0.0
        return self.totals.get(measure, 0.0)

    def series(self, name: object) -> tuple[float, ...] | None:
        """Return the monthly series for a measure name, if one exists."""
        measure = MeasureField.parse(name)
        if measure is None:
            return None
        values = self.monthly.get(measure)
        return tuple(coerce_series(values)) if values is not None else None

    def monthly_or_even(self, name: object) -> tuple[float, ...]:
        """Return the monthly series, or the total spread evenly over 12 months."""
        values = self.series(name)
        if values is not None:
            return values
        return (self.total(name) / MONTHS_PER_YEAR,) * MONTHS_PER_YEAR

    def for_period(self, period: GuidancePeriod) -> MeasureTable:
        """Return a view restricted to ``period`` (identity for FY)."""
        if period is GuidancePeriod.FY:
            return self
        covered = set(period_month_indexes(period, self.last_actual_month_index))

        monthly: dict[MeasureField, tuple[float, ...]] = {}
        totals: dict[MeasureField, float] = dict(self.totals)
        for measure, values in self.monthly.items():
            series = coerce_series(values)
            monthly[measure] = tuple(
                value if idx in covered else 0.0 for idx, value in enumerate(series)
            )
            if measure not in _RATE_SOURCES:
                totals[measure] = math.fsum(monthly[measure])

        for rate, (monetary, volume) in _RATE_SOURCES.items():
            if rate in monthly:
                totals[rate] = monetary_rate(totals.get(monetary, 0.0), totals.get(volume, 0.0))

        return MeasureTable(
            totals=totals,
            monthly=monthly,
            last_actual_month_index=self.last_actual_month_index,
        )


__all__ = ["MeasureTable", "period_month_indexes"]
