# src/forecast_guidance/adapters/schemas/http/guidance.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""HTTP Schemas: Guidance definitions and contexts.

Synopsis:
    Wire contracts for user-authored guidance definitions, in the shape the
    dashboard stores them:

        * ``value`` is a measure name (direct), ``{"expression": "a - b"}``
          (difference) or ``{"numerator": "a - b", "denominator": "c"}``
          (percentage).
        * ``calculation`` is ``{type, format?, subCalculations?}``.

    Definitions keep their camelCase keys on the wire; every field also
    accepts its snake_case name.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from pydantic import Field

from forecast_guidance.adapters.schemas.http.base import BaseHTTPSchema
from forecast_guidance.domain.enums.guidance import (
    Availability,
    DisplayType,
    GuidanceContextId,
    GuidanceFormat,
    GuidancePeriod,
)


class SubCalculationHTTP(BaseHTTPSchema):
    """One entry of a ``multi_calc`` bundle."""

    id: str = Field(..., examples=["3M"])
    cy_field: str = Field(..., alias="cyField", examples=["cy_3m_case_equivalent_volume"])
    py_field: str = Field(..., alias="pyField", examples=["py_3m_case_equivalent_volume"])
    calculation_type: str = Field(..., alias="calculationType", examples=["percentage"])


class CalculationHTTP(BaseHTTPSchema):
    """Calculation kind plus optional presentation format and sub-calculations."""

    type: str = Field(..., description="direct | difference | percentage | multi_calc")
    format: GuidanceFormat | None = None
    sub_calculations: list[SubCalculationHTTP] | None = Field(
        default=None, alias="subCalculations"
    )


class ExpressionValueHTTP(BaseHTTPSchema):
    """Difference operand pair written as ``"a - b"``."""

    expression: str = Field(..., examples=["case_equivalent_volume - py_case_equivalent_volume"])


class FractionValueHTTP(BaseHTTPSchema):
    """Percentage operands: ``"a - b"`` over a denominator measure."""

    numerator: str = Field(..., examples=["case_equivalent_volume - py_case_equivalent_volume"])
    denominator: str = Field(..., examples=["py_case_equivalent_volume"])


class GuidanceDefinitionHTTP(BaseHTTPSchema):
    """User-authored guidance definition."""

    id: int | None = Field(default=None, description="Assigned by the context on add.")
    label: str = Field(..., min_length=1, examples=["VOL 9L"])
    sublabel: str | None = Field(default=None, examples=["TY vs LY"])
    value: str | ExpressionValueHTTP | FractionValueHTTP | None = None
    calculation: CalculationHTTP
    period: GuidancePeriod = GuidancePeriod.FY
    metric: str | None = None
    dimension: str | None = None
    calc_type: str | None = Field(default=None, alias="calcType")
    display_type: DisplayType = Field(default=DisplayType.COLUMN, alias="displayType")
    availability: Availability = Availability.BOTH


class GuidanceResultHTTP(BaseHTTPSchema):
    """Evaluated guidance value; ``total`` is null for unsupported calculations."""

    total: float | None = None
    monthly: list[float] | None = None
    sub_results: dict[str, float] | None = None


class GuidanceContextHTTP(BaseHTTPSchema):
    """Full state of one guidance context."""

    context: GuidanceContextId
    definitions: list[GuidanceDefinitionHTTP]
    columns: list[int] = Field(default_factory=list)
    rows: list[int] = Field(default_factory=list)
    next_id: int


class GuidanceDefinitionsLoadRequest(BaseHTTPSchema):
    """Replace every definition of a context."""

    definitions: list[GuidanceDefinitionHTTP]


class GuidanceSelectionRequest(BaseHTTPSchema):
    """Column and row selection of a context, by definition id."""

    columns: list[int] = Field(default_factory=list)
    rows: list[int] = Field(default_factory=list)


__all__ = [
    "CalculationHTTP",
    "ExpressionValueHTTP",
    "FractionValueHTTP",
    "GuidanceContextHTTP",
    "GuidanceDefinitionHTTP",
    "GuidanceDefinitionsLoadRequest",
    "GuidanceResultHTTP",
    "GuidanceSelectionRequest",
    "SubCalculationHTTP",
]
