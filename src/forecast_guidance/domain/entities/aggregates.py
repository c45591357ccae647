# src/forecast_guidance/domain/entities/aggregates.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Aggregate entities for the guidance engine.

Purpose:
    Per-item, per-variant, per-brand and portfolio aggregates sharing one
    measure set: TY/PY/LC monthly volume, TY/PY monetary totals, LC monetary
    total and monthly series, GSV rates and rolling trend sums.

Layer:
    domain/entities

Notes:
    - Volume totals are properties over the monthly series and are never
      stored, so a mutated month is always reflected in its total.
    - Aggregates are rebuilt from raw facts on every request; they are
      mutable only while a single pipeline pass assembles them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from forecast_guidance.domain.entities.raw_fact import Tag
from forecast_guidance.domain.enums.forecast import ForecastScope
from forecast_guidance.domain.enums.measure_field import MeasureField
from forecast_guidance.domain.services.time_axis import (
    MONTHS_PER_YEAR,
    NO_ACTUALS_INDEX,
    zero_series,
)

PORTFOLIO_KEY = "total"


@dataclass(frozen=True, slots=True)
class MonthlyValue:
    """One month of TY volume.

    Attributes:
        value: Volume for the month.
        is_actual: Whether the month lies inside the actuals prefix.
        is_manually_modified: Whether the value was entered or overridden by hand.
    """

    value: float = 0.0
    is_actual: bool = False
    is_manually_modified: bool = False


def empty_months(last_actual_month_index: int = NO_ACTUALS_INDEX) -> list[MonthlyValue]:
    """Return 12 zero months whose actual flags follow the cutoff prefix."""
    return [
        MonthlyValue(value=0.0, is_actual=idx <= last_actual_month_index)
        for idx in range(MONTHS_PER_YEAR)
    ]


@dataclass(frozen=True, slots=True)
class TrendMeasures:
    """Trailing 3/6/12-month volume sums for TY and PY."""

    cy_3m: float = 0.0
    cy_6m: float = 0.0
    cy_12m: float = 0.0
    py_3m: float = 0.0
    py_6m: float = 0.0
    py_12m: float = 0.0

    def value(self, measure: MeasureField) -> float:
        """Return the trend sum for a trend measure (0.0 for anything else)."""
        return {
            MeasureField.CY_3M_CASE_EQUIVALENT_VOLUME: self.cy_3m,
            MeasureField.CY_6M_CASE_EQUIVALENT_VOLUME: self.cy_6m,
            MeasureField.CY_12M_CASE_EQUIVALENT_VOLUME: self.cy_12m,
            MeasureField.PY_3M_CASE_EQUIVALENT_VOLUME: self.py_3m,
            MeasureField.PY_6M_CASE_EQUIVALENT_VOLUME: self.py_6m,
            MeasureField.PY_12M_CASE_EQUIVALENT_VOLUME: self.py_12m,
        }.get(measure, 0.0)


@dataclass(slots=True, kw_only=True)
class ForecastAggregate:
    """Measure set shared by every aggregation level.

    Attributes:
        months: TY volume per month with actual/manual flags.
        py_months: PY volume per month.
        lc_months: LC (last consensus) volume per month.
        gross_sales_value: TY monetary total summed from raw facts.
        py_gross_sales_value: PY monetary total summed from raw facts.
        lc_gross_sales_value: LC monetary total (rate-derived or summed).
        lc_gsv_months: LC monetary per month; None until derived.
        historical_gsv_rate: Rate carried by the source feed for valuing LC.
        gsv_rate: TY monetary per unit volume.
        py_gsv_rate: PY monetary per unit volume.
        trends: Rolling-window sums ending at the actual cutoff.
        last_actual_month_index: Cutoff for this aggregate's scope, -1 if none.
    """

    months: list[MonthlyValue] = field(default_factory=empty_months)
    py_months: list[float] = field(default_factory=zero_series)
    lc_months: list[float] = field(default_factory=zero_series)
    gross_sales_value: float = 0.0
    py_gross_sales_value: float = 0.0
    lc_gross_sales_value: float = 0.0
    lc_gsv_months: list[float] | None = None
    historical_gsv_rate: float = 0.0
    gsv_rate: float = 0.0
    py_gsv_rate: float = 0.0
    trends: TrendMeasures = field(default_factory=TrendMeasures)
    last_actual_month_index: int = NO_ACTUALS_INDEX

    @property
    def ty_series(self) -> list[float]:
        """TY volume per month as plain numbers."""
        return [month.value for month in self.months]

    @property
    def case_equivalent_volume(self) -> float:
        """TY volume total."""
        return math.fsum(month.value for month in self.months)

    @property
    def py_case_equivalent_volume(self) -> float:
        """PY volume total."""
        return math.fsum(self.py_months)

    @property
    def prev_published_case_equivalent_volume(self) -> float:
        """LC volume total."""
        return math.fsum(self.lc_months)

    @property
    def rate_for_lc(self) -> float:
        """Rate used to value LC volume: historical when positive, else TY."""
        if self.historical_gsv_rate > 0:
            return self.historical_gsv_rate
        return self.gsv_rate


@dataclass(slots=True, kw_only=True)
class ItemAggregate(ForecastAggregate):
    """Aggregated line item: one market or customer and one product."""

    key: str
    scope: ForecastScope
    market_id: str
    market_name: str | None = None
    market_area_name: str | None = None
    customer_id: str | None = None
    customer_name: str | None = None
    brand: str | None = None
    variant: str | None = None
    variant_id: str | None = None
    variant_size_pack_id: str | None = None
    variant_size_pack_desc: str | None = None
    forecast_logic: str = "flat"
    forecast_status: str = "draft"
    forecast_generation_month_date: str | None = None
    commentary: str | None = None
    tags: tuple[Tag, ...] = ()

    @property
    def variant_key(self) -> str | None:
        """Roll-up key ``<brand>_<variant id or name>``, None when unknown."""
        if not self.brand or not self.variant:
            return None
        return f"{self.brand}_{self.variant_id or self.variant}"


@dataclass(slots=True, kw_only=True)
class VariantAggregate(ForecastAggregate):
    """All line items of one brand variant."""

    key: str
    brand: str
    variant: str
    variant_id: str | None = None


@dataclass(slots=True, kw_only=True)
class BrandAggregate(ForecastAggregate):
    """All variants of one brand."""

    key: str
    brand: str


@dataclass(slots=True, kw_only=True)
class PortfolioAggregate(ForecastAggregate):
    """All brands."""

    key: str = PORTFOLIO_KEY


__all__ = [
    "PORTFOLIO_KEY",
    "MonthlyValue",
    "TrendMeasures",
    "ForecastAggregate",
    "ItemAggregate",
    "VariantAggregate",
    "BrandAggregate",
    "PortfolioAggregate",
    "empty_months",
]
