# src/forecast_guidance/domain/entities/guidance_definition.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Guidance definition entities.

Purpose:
    A small closed algebra describing how one named metric is derived from
    the base measures of an aggregate:

        * DirectCalculation      read one measure
        * DifferenceCalculation  measure A minus measure B
        * PercentageCalculation  (A - B) / C, zero when C is zero
        * MultiCalculation       ordered bundle of (CY field, PY field) subs

    Anything else is represented as :class:`UnsupportedCalculation` and
    evaluates to an empty result.

Layer:
    domain/entities

Notes:
    - Field names are kept exactly as authored; they are resolved against
      the closed measure vocabulary at evaluation time.
    - Definitions are user-authored at runtime and never executed as code.
"""

from __future__ import annotations

from dataclasses import dataclass

from forecast_guidance.domain.enums.guidance import (
    Availability,
    CalculationType,
    DisplayType,
    GuidanceContextId,
    GuidanceFormat,
    GuidancePeriod,
    SubCalculationType,
)
from forecast_guidance.domain.enums.measure_field import MeasureField

TRENDS_LABEL = "TRENDS"
TRENDS_SUBLABEL = "3M / 6M / 12M"
TRENDS_WINDOWS: tuple[str, ...] = ("3M", "6M", "12M")


@dataclass(frozen=True, slots=True)
class DirectCalculation:
    """Read a single measure."""

    field: str

    @property
    def type(self) -> CalculationType:
        return CalculationType.DIRECT


@dataclass(frozen=True, slots=True)
class DifferenceCalculation:
    """``value(minuend) - value(subtrahend)``."""

    minuend: str
    subtrahend: str

    @property
    def type(self) -> CalculationType:
        return CalculationType.DIFFERENCE


@dataclass(frozen=True, slots=True)
class PercentageCalculation:
    """``(value(minuend) - value(subtrahend)) / value(denominator)``."""

    minuend: str
    subtrahend: str
    denominator: str

    @property
    def type(self) -> CalculationType:
        return CalculationType.PERCENTAGE


@dataclass(frozen=True, slots=True)
class SubCalculation:
    """One named entry of a multi-calc bundle."""

    id: str
    cy_field: str
    py_field: str
    calculation_type: SubCalculationType


@dataclass(frozen=True, slots=True)
class MultiCalculation:
    """Fixed-order list of sub-calculations, evaluated on totals only."""

    sub_calculations: tuple[SubCalculation, ...]

    @property
    def type(self) -> CalculationType:
        return CalculationType.MULTI_CALC


@dataclass(frozen=True, slots=True)
class UnsupportedCalculation:
    """Calculation shape outside the known variants."""

    type_name: str


Calculation = (
    DirectCalculation
    | DifferenceCalculation
    | PercentageCalculation
    | MultiCalculation
    | UnsupportedCalculation
)


@dataclass(frozen=True, slots=True)
class GuidanceDefinition:
    """User-authored derived metric.

    Attributes:
        id: Identifier unique within its guidance context.
        label: Column/row header.
        calculation: How the value is derived.
        sublabel: Secondary header text.
        period: Month window (FY, YTD or TG).
        display_type: Row, column or both.
        availability: Views the definition is offered in.
        format: Numeric presentation hint.
        metric: Optional metric tag (e.g. ``vol_9l``, ``gsv``).
        dimension: Optional dimension tag (TY / LY / LC).
    """

    id: int
    label: str
    calculation: Calculation
    sublabel: str | None = None
    period: GuidancePeriod = GuidancePeriod.FY
    display_type: DisplayType = DisplayType.COLUMN
    availability: Availability = Availability.BOTH
    format: GuidanceFormat = GuidanceFormat.NUMBER
    metric: str | None = None
    dimension: str | None = None

    @property
    def is_trends(self) -> bool:
        """Whether this is the built-in 3M/6M/12M trends bundle."""
        calc = self.calculation
        return (
            isinstance(calc, MultiCalculation)
            and self.label == TRENDS_LABEL
            and any(sub.id in TRENDS_WINDOWS for sub in calc.sub_calculations)
        )

    @property
    def is_deletable(self) -> bool:
        return not self.is_trends

    @property
    def can_be_row(self) -> bool:
        """Only full-year, non-trend definitions carry a monthly breakdown."""
        return self.period is GuidancePeriod.FY and not self.is_trends

    @property
    def can_be_column(self) -> bool:
        return self.display_type in (DisplayType.COLUMN, DisplayType.BOTH)

    def available_in(self, context: GuidanceContextId) -> bool:
        """Whether the definition is offered in the given context."""
        if self.availability is Availability.BOTH:
            return True
        if context is GuidanceContextId.DEPLETION:
            return self.availability is Availability.DEPLETIONS
        if context is GuidanceContextId.SUMMARY:
            return self.availability is Availability.SUMMARY
        return True


@dataclass(frozen=True, slots=True)
class GuidanceResult:
    """Evaluated guidance value.

    Attributes:
        total: Total value; None is the undefined sentinel.
        monthly: Twelve monthly values when a breakdown was requested.
        sub_results: Multi-calc values keyed by sub-calculation id.
    """

    total: float | None = None
    monthly: tuple[float, ...] | None = None
    sub_results: dict[str, float] | None = None

    @property
    def is_empty(self) -> bool:
        return self.total is None and self.sub_results is None


def build_trends_definition(definition_id: int) -> GuidanceDefinition:
    """Return the built-in TRENDS definition with the given id."""
    pairs = (
        (
            "3M",
            MeasureField.CY_3M_CASE_EQUIVALENT_VOLUME,
            MeasureField.PY_3M_CASE_EQUIVALENT_VOLUME,
        ),
        (
            "6M",
            MeasureField.CY_6M_CASE_EQUIVALENT_VOLUME,
            MeasureField.PY_6M_CASE_EQUIVALENT_VOLUME,
        ),
        (
            "12M",
            MeasureField.CY_12M_CASE_EQUIVALENT_VOLUME,
            MeasureField.PY_12M_CASE_EQUIVALENT_VOLUME,
        ),
    )
    return GuidanceDefinition(
        id=definition_id,
        label=TRENDS_LABEL,
        sublabel=TRENDS_SUBLABEL,
        calculation=MultiCalculation(
            sub_calculations=tuple(
                SubCalculation(
                    id=sub_id,
                    cy_field=cy.value,
                    py_field=py.value,
                    calculation_type=SubCalculationType.PERCENTAGE,
                )
                for sub_id, cy, py in pairs
            )
        ),
        period=GuidancePeriod.FY,
        display_type=DisplayType.COLUMN,
        availability=Availability.BOTH,
        format=GuidanceFormat.PERCENT,
    )


__all__ = [
    "TRENDS_LABEL",
    "Calculation",
    "DirectCalculation",
    "DifferenceCalculation",
    "PercentageCalculation",
    "SubCalculation",
    "MultiCalculation",
    "UnsupportedCalculation",
    "GuidanceDefinition",
    "GuidanceResult",
    "build_trends_definition",
]
