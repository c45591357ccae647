# src/forecast_guidance/domain/services/guidance_evaluator.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Guidance evaluation engine.

Purpose:
    Evaluate guidance definitions against one aggregate (item, variant,
    brand or portfolio total), producing a total and, when requested, a
    12-month breakdown.

Layer:
    domain

Notes:
    - This module is pure domain logic:
        * No logging.
        * No HTTP concerns.
        * Never raises on unknown measures or calculation shapes.
    - Unknown measures evaluate to ``0``; a zero denominator yields ``0``; a
      calculation outside the closed algebra yields an empty result.
    - ``direct`` monthly breakdowns fall back to ``total / 12`` for measures
      without a monthly series. The fallback is approximate on purpose.
    - ``multi_calc`` is total-only and ignores the monthly flag.
    - Every emitted value is rounded to the guidance precision.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from forecast_guidance.domain.entities.aggregates import ForecastAggregate
from forecast_guidance.domain.entities.guidance_definition import (
    DifferenceCalculation,
    DirectCalculation,
    GuidanceDefinition,
    GuidanceResult,
    MultiCalculation,
    PercentageCalculation,
    SubCalculation,
)
from forecast_guidance.domain.enums.guidance import SubCalculationType
from forecast_guidance.domain.services.measure_lookup import MeasureTable
from forecast_guidance.domain.services.numeric import round_to, safe_divide
from forecast_guidance.domain.services.options import DEFAULT_GUIDANCE_PRECISION
from forecast_guidance.domain.services.time_axis import MONTH_INDEXES

EMPTY_RESULT = GuidanceResult()


def _table(source: ForecastAggregate | MeasureTable) -> MeasureTable:
    if isinstance(source, MeasureTable):
        return source
    return MeasureTable.from_aggregate(source)


def evaluate_sub_calculation(table: MeasureTable, sub: SubCalculation) -> float:
    """Evaluate one (CY, PY) sub-calculation on totals."""
    cy = table.total(sub.cy_field)
    py = table.total(sub.py_field)
    if sub.calculation_type is SubCalculationType.PERCENTAGE:
        return safe_divide(cy - py, py)
    if sub.calculation_type is SubCalculationType.DIFFERENCE:
        return cy - py
    return cy


class GuidanceEvaluator:
    """Evaluate guidance definitions with a fixed output precision.

    Args:
        precision: Decimal places applied to totals, months and sub-results.
    """

    def __init__(self, precision: int = DEFAULT_GUIDANCE_PRECISION) -> None:
        self._precision = precision

    def _round(self, value: float) -> float:
        return round_to(value, self._precision)

    def _months(self, values: Sequence[float]) -> tuple[float, ...]:
        return tuple(self._round(value) for value in values)

    def evaluate(
        self,
        source: ForecastAggregate | MeasureTable,
        definition: GuidanceDefinition,
        *,
        monthly: bool = False,
    ) -> GuidanceResult:
        """Evaluate one definition.

        Args:
            source: Aggregate (or a prebuilt measure table) to evaluate on.
            definition: Guidance definition.
            monthly: Whether to include a 12-month breakdown.

        Returns:
            GuidanceResult; empty for unsupported calculation shapes.
        """
        table = _table(source)
        calc = definition.calculation

        if isinstance(calc, MultiCalculation):
            return GuidanceResult(
                sub_results={
                    sub.id: self._round(evaluate_sub_calculation(table, sub))
                    for sub in calc.sub_calculations
                }
            )

        period_table = table.for_period(definition.period)

        if isinstance(calc, DirectCalculation):
            total = period_table.total(calc.field)
            months = period_table.monthly_or_even(calc.field) if monthly else None
        elif isinstance(calc, DifferenceCalculation):
            total = period_table.total(calc.minuend) - period_table.total(calc.subtrahend)
            months = None
            if monthly:
                a = period_table.monthly_or_even(calc.minuend)
                b = period_table.monthly_or_even(calc.subtrahend)
                months = tuple(a[idx] - b[idx] for idx in MONTH_INDEXES)
        elif isinstance(calc, PercentageCalculation):
            numerator = period_table.total(calc.minuend) - period_table.total(calc.subtrahend)
            total = safe_divide(numerator, period_table.total(calc.denominator))
            months = None
            if monthly:
                a = period_table.monthly_or_even(calc.minuend)
                b = period_table.monthly_or_even(calc.subtrahend)
                d = period_table.monthly_or_even(calc.denominator)
                months = tuple(safe_divide(a[idx] - b[idx], d[idx]) for idx in MONTH_INDEXES)
        else:
            return EMPTY_RESULT

        return GuidanceResult(
            total=self._round(total),
            monthly=self._months(months) if months is not None else None,
        )

    def evaluate_many(
        self,
        source: ForecastAggregate | MeasureTable,
        definitions: Iterable[GuidanceDefinition],
        *,
        monthly: bool | Mapping[int, bool] = False,
    ) -> dict[int, GuidanceResult]:
        """Evaluate several definitions against one aggregate.

        ``monthly`` is either one flag for all definitions or a per-id map.
        """
        table = _table(source)
        results: dict[int, GuidanceResult] = {}
        for definition in definitions:
            if isinstance(monthly, Mapping):
                want_monthly = bool(monthly.get(definition.id, False))
            else:
                want_monthly = monthly
            results[definition.id] = self.evaluate(
                table, definition, monthly=want_monthly
            )
        return results


__all__ = ["EMPTY_RESULT", "GuidanceEvaluator", "evaluate_sub_calculation"]
