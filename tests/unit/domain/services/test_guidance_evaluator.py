# tests/unit/domain/services/test_guidance_evaluator.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Guidance evaluation over the closed calculation algebra."""

from __future__ import annotations

import pytest

from forecast_guidance.domain.entities.aggregates import (
    ForecastAggregate,
    MonthlyValue,
    TrendMeasures,
)
from forecast_guidance.domain.entities.guidance_definition import (
    Calculation,
    DifferenceCalculation,
    DirectCalculation,
    GuidanceDefinition,
    MultiCalculation,
    PercentageCalculation,
    SubCalculation,
    UnsupportedCalculation,
    build_trends_definition,
)
from forecast_guidance.domain.enums.guidance import GuidancePeriod, SubCalculationType
from forecast_guidance.domain.enums.measure_field import MeasureField
from forecast_guidance.domain.services.guidance_evaluator import (
    EMPTY_RESULT,
    GuidanceEvaluator,
    evaluate_sub_calculation,
)
from forecast_guidance.domain.services.measure_lookup import MeasureTable
from forecast_guidance.domain.services.rate_deriver import derive_rates


def _definition(
    calculation: Calculation,
    *,
    period: GuidancePeriod = GuidancePeriod.FY,
    definition_id: int = 7,
) -> GuidanceDefinition:
    return GuidanceDefinition(
        id=definition_id, label="Metric", calculation=calculation, period=period
    )


def _aggregate(ty: float = 10.0, py: float = 100.0 / 12) -> ForecastAggregate:
    aggregate = ForecastAggregate(
        months=[MonthlyValue(value=ty, is_actual=idx <= 2) for idx in range(12)],
        py_months=[py] * 12,
        gross_sales_value=360.0,
        trends=TrendMeasures(cy_3m=30.0, py_3m=24.0, cy_6m=60.0, py_6m=0.0),
        last_actual_month_index=2,
    )
    derive_rates(aggregate)
    return aggregate


@pytest.fixture
def evaluator() -> GuidanceEvaluator:
    return GuidanceEvaluator()


def test_direct_without_monthly_source_spreads_evenly(evaluator: GuidanceEvaluator) -> None:
    table = MeasureTable(totals={MeasureField.PY_CASE_EQUIVALENT_VOLUME: 500.0})

    result = evaluator.evaluate(
        table, _definition(DirectCalculation("py_case_equivalent_volume")), monthly=True
    )

    assert result.total == 500.0
    assert result.monthly == (41.667,) * 12


def test_percentage_growth(evaluator: GuidanceEvaluator) -> None:
    calc = PercentageCalculation(
        minuend="case_equivalent_volume",
        subtrahend="py_case_equivalent_volume",
        denominator="py_case_equivalent_volume",
    )

    result = evaluator.evaluate(_aggregate(), _definition(calc))

    assert result.total == pytest.approx(0.2)
    assert result.monthly is None


def test_percentage_monthly_breakdown(evaluator: GuidanceEvaluator) -> None:
    calc = PercentageCalculation(
        "case_equivalent_volume", "py_case_equivalent_volume", "py_case_equivalent_volume"
    )

    result = evaluator.evaluate(_aggregate(ty=12.0, py=10.0), _definition(calc), monthly=True)

    assert result.monthly == (0.2,) * 12


def test_zero_denominator_yields_zero(evaluator: GuidanceEvaluator) -> None:
    calc = PercentageCalculation(
        "case_equivalent_volume", "py_case_equivalent_volume", "lc_gross_sales_value"
    )

    result = evaluator.evaluate(_aggregate(), _definition(calc), monthly=True)

    assert result.total == 0.0
    assert result.monthly == (0.0,) * 12


def test_difference(evaluator: GuidanceEvaluator) -> None:
    calc = DifferenceCalculation("case_equivalent_volume", "py_case_equivalent_volume")

    result = evaluator.evaluate(_aggregate(ty=12.0, py=10.0), _definition(calc), monthly=True)

    assert result.total == 24.0
    assert result.monthly == (2.0,) * 12


def test_unknown_field_evaluates_to_zero(evaluator: GuidanceEvaluator) -> None:
    result = evaluator.evaluate(
        _aggregate(), _definition(DirectCalculation("not_a_measure")), monthly=True
    )

    assert result.total == 0.0
    assert result.monthly == (0.0,) * 12


def test_unsupported_shape_yields_empty_result(evaluator: GuidanceEvaluator) -> None:
    result = evaluator.evaluate(
        _aggregate(), _definition(UnsupportedCalculation("ratio")), monthly=True
    )

    assert result is EMPTY_RESULT
    assert result.total is None
    assert result.is_empty


def test_multi_calc_returns_sub_results_only(evaluator: GuidanceEvaluator) -> None:
    definition = build_trends_definition(1)

    result = evaluator.evaluate(_aggregate(), definition, monthly=True)

    assert result.total is None
    assert result.monthly is None
    assert result.sub_results == {"3M": 0.25, "6M": 0.0, "12M": 0.0}


def test_sub_calculation_kinds() -> None:
    table = MeasureTable.from_aggregate(_aggregate())

    def sub(kind: SubCalculationType) -> SubCalculation:
        return SubCalculation(
            id="x",
            cy_field="cy_3m_case_equivalent_volume",
            py_field="py_3m_case_equivalent_volume",
            calculation_type=kind,
        )

    assert evaluate_sub_calculation(table, sub(SubCalculationType.DIRECT)) == 30.0
    assert evaluate_sub_calculation(table, sub(SubCalculationType.DIFFERENCE)) == 6.0
    assert evaluate_sub_calculation(table, sub(SubCalculationType.PERCENTAGE)) == 0.25


def test_results_are_rounded_to_guidance_precision() -> None:
    calc = PercentageCalculation("gsv_rate", "", "case_equivalent_volume")

    result = GuidanceEvaluator(precision=2).evaluate(_aggregate(), _definition(calc))

    # 3.0 / 120
    assert result.total == 0.03


def test_ytd_and_tg_periods(evaluator: GuidanceEvaluator) -> None:
    direct = DirectCalculation("case_equivalent_volume")

    ytd = evaluator.evaluate(
        _aggregate(), _definition(direct, period=GuidancePeriod.YTD), monthly=True
    )
    tg = evaluator.evaluate(_aggregate(), _definition(direct, period=GuidancePeriod.TG))

    assert ytd.total == 40.0
    assert ytd.monthly is not None
    assert ytd.monthly[:5] == (10.0, 10.0, 10.0, 10.0, 0.0)
    assert tg.total == 80.0


def test_evaluate_many_with_per_id_monthly_flags(evaluator: GuidanceEvaluator) -> None:
    definitions = [
        _definition(DirectCalculation("case_equivalent_volume"), definition_id=1),
        _definition(DirectCalculation("py_case_equivalent_volume"), definition_id=2),
    ]

    results = evaluator.evaluate_many(_aggregate(), definitions, monthly={2: True})

    assert results[1].monthly is None
    assert results[2].monthly is not None
    assert results[1].total == 120.0


def test_evaluate_many_with_single_flag(evaluator: GuidanceEvaluator) -> None:
    definitions = [
        _definition(DirectCalculation("case_equivalent_volume"), definition_id=1),
        _definition(MultiCalculation(sub_calculations=()), definition_id=2),
    ]

    results = evaluator.evaluate_many(_aggregate(), definitions, monthly=True)

    assert results[1].monthly == (10.0,) * 12
    assert results[2].sub_results == {}
