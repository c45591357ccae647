# tests/unit/domain/services/test_measure_lookup.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Measure table lookups and period views."""

from __future__ import annotations

import pytest

from forecast_guidance.domain.entities.aggregates import (
    ForecastAggregate,
    MonthlyValue,
    TrendMeasures,
)
from forecast_guidance.domain.enums.guidance import GuidancePeriod
from forecast_guidance.domain.enums.measure_field import MeasureField
from forecast_guidance.domain.services.measure_lookup import MeasureTable, period_month_indexes
from forecast_guidance.domain.services.rate_deriver import derive_rates


def _aggregate() -> ForecastAggregate:
    aggregate = ForecastAggregate(
        months=[MonthlyValue(value=10.0, is_actual=idx <= 2) for idx in range(12)],
        py_months=[5.0] * 12,
        lc_months=[8.0] * 12,
        gross_sales_value=240.0,
        py_gross_sales_value=120.0,
        trends=TrendMeasures(cy_3m=30.0, py_3m=15.0),
        last_actual_month_index=2,
    )
    derive_rates(aggregate)
    return aggregate


def test_totals_for_known_fields() -> None:
    table = MeasureTable.from_aggregate(_aggregate())

    assert table.total("case_equivalent_volume") == 120.0
    assert table.total(MeasureField.PY_CASE_EQUIVALENT_VOLUME) == 60.0
    assert table.total("gsv_rate") == pytest.approx(2.0)
    assert table.total("cy_3m_case_equivalent_volume") == 30.0
    assert table.total(" py_3m_case_equivalent_volume ") == 15.0


@pytest.mark.parametrize("name", ["unknown_field", "", None, 42, "__class__"])
def test_unknown_fields_resolve_to_zero(name: object) -> None:
    table = MeasureTable.from_aggregate(_aggregate())

    assert table.total(name) == 0.0
    assert table.series(name) is None


def test_monetary_months_are_volume_times_rate() -> None:
    table = MeasureTable.from_aggregate(_aggregate())

    series = table.series("gross_sales_value")

    assert series is not None
    assert series[0] == pytest.approx(20.0)
    assert table.series("gsv_rate") == (2.0,) * 12


def test_lc_monetary_months_use_lc_rate() -> None:
    table = MeasureTable.from_aggregate(_aggregate())

    series = table.series("lc_gross_sales_value")

    assert series is not None
    assert series[0] == pytest.approx(16.0)


def test_trend_measures_have_no_monthly_series() -> None:
    table = MeasureTable.from_aggregate(_aggregate())

    assert table.series("cy_3m_case_equivalent_volume") is None
    assert table.monthly_or_even("cy_3m_case_equivalent_volume") == (2.5,) * 12


def test_even_spread_without_monthly_source() -> None:
    table = MeasureTable(totals={MeasureField.PY_CASE_EQUIVALENT_VOLUME: 500.0})

    months = table.monthly_or_even("py_case_equivalent_volume")

    assert len(months) == 12
    assert months[0] == pytest.approx(41.6667, abs=1e-4)


@pytest.mark.parametrize(
    ("period", "cutoff", "expected"),
    [
        (GuidancePeriod.FY, 2, range(12)),
        (GuidancePeriod.YTD, 2, range(0, 4)),
        (GuidancePeriod.TG, 2, range(4, 12)),
        (GuidancePeriod.YTD, -1, range(0, 1)),
        (GuidancePeriod.TG, -1, range(1, 12)),
        (GuidancePeriod.YTD, 11, range(0, 12)),
        (GuidancePeriod.TG, 11, range(12, 12)),
    ],
)
def test_period_month_indexes(period: GuidancePeriod, cutoff: int, expected: range) -> None:
    assert period_month_indexes(period, cutoff) == expected


def test_ytd_view_restricts_series_and_totals() -> None:
    table = MeasureTable.from_aggregate(_aggregate()).for_period(GuidancePeriod.YTD)

    assert table.total("case_equivalent_volume") == 40.0
    assert table.total("gross_sales_value") == pytest.approx(80.0)
    assert table.total("gsv_rate") == pytest.approx(2.0)
    series = table.series("case_equivalent_volume")
    assert series is not None
    assert series[3] == 10.0
    assert series[4] == 0.0


def test_tg_view_keeps_trend_totals() -> None:
    table = MeasureTable.from_aggregate(_aggregate()).for_period(GuidancePeriod.TG)

    assert table.total("py_case_equivalent_volume") == 40.0
    assert table.total("cy_3m_case_equivalent_volume") == 30.0


def test_fy_view_is_identity() -> None:
    table = MeasureTable.from_aggregate(_aggregate())

    assert table.for_period(GuidancePeriod.FY) is table
