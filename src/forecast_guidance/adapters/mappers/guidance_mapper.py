# src/forecast_guidance/adapters/mappers/guidance_mapper.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Guidance definition mapper (wire <-> domain).

Purpose:
    Parse the dashboard's guidance wire shape into the closed calculation
    algebra and render domain definitions back into that shape.

Layer:
    adapters/mappers

Notes:
    - Operand strings are only split on ``" - "`` and trimmed; names are
      resolved against the measure vocabulary at evaluation time. Nothing is
      ever executed.
    - A missing second operand stays empty and evaluates to zero.
    - A calculation whose type and value do not fit together maps to
      :class:`UnsupportedCalculation` instead of failing the request.
"""

from __future__ import annotations

from collections.abc import Iterable

from forecast_guidance.adapters.schemas.http.guidance import (
    CalculationHTTP,
    ExpressionValueHTTP,
    FractionValueHTTP,
    GuidanceContextHTTP,
    GuidanceDefinitionHTTP,
    GuidanceResultHTTP,
    SubCalculationHTTP,
)
from forecast_guidance.domain.entities.guidance_context import GuidanceContext
from forecast_guidance.domain.entities.guidance_definition import (
    Calculation,
    DifferenceCalculation,
    DirectCalculation,
    GuidanceDefinition,
    GuidanceResult,
    MultiCalculation,
    PercentageCalculation,
    SubCalculation,
    UnsupportedCalculation,
)
from forecast_guidance.domain.enums.guidance import (
    Availability,
    CalculationType,
    DisplayType,
    GuidanceFormat,
    GuidancePeriod,
    SubCalculationType,
)

EXPRESSION_SEPARATOR = " - "


def split_operands(expression: str) -> tuple[str, str]:
    """Split ``"a - b"`` into ``("a", "b")``; a missing operand is ``""``."""
    parts = expression.split(EXPRESSION_SEPARATOR)
    first = parts[0].strip()
    second = parts[1].strip() if len(parts) > 1 else ""
    return first, second


def _parse_sub_calculations(
    subs: Iterable[SubCalculationHTTP],
) -> tuple[SubCalculation, ...] | None:
    parsed: list[SubCalculation] = []
    for sub in subs:
        try:
            calc_type = SubCalculationType(sub.calculation_type.strip().lower())
        except ValueError:
            return None
        parsed.append(
            SubCalculation(
                id=sub.id,
                cy_field=sub.cy_field.strip(),
                py_field=sub.py_field.strip(),
                calculation_type=calc_type,
            )
        )
    return tuple(parsed)


def parse_calculation(
    calculation: CalculationHTTP,
    value: str | ExpressionValueHTTP | FractionValueHTTP | None,
) -> Calculation:
    """Map a wire ``(calculation, value)`` pair onto the calculation algebra."""
    type_name = calculation.type.strip().lower()

    if type_name == CalculationType.DIRECT.value and isinstance(value, str) and value.strip():
        return DirectCalculation(field=value.strip())

    if (
        type_name == CalculationType.DIFFERENCE.value
        and isinstance(value, ExpressionValueHTTP)
        and value.expression
    ):
        minuend, subtrahend = split_operands(value.expression)
        return DifferenceCalculation(minuend=minuend, subtrahend=subtrahend)

    if (
        type_name == CalculationType.PERCENTAGE.value
        and isinstance(value, FractionValueHTTP)
        and value.numerator
        and value.denominator
    ):
        minuend, subtrahend = split_operands(value.numerator)
        return PercentageCalculation(
            minuend=minuend,
            subtrahend=subtrahend,
            denominator=value.denominator.strip(),
        )

    if type_name == CalculationType.MULTI_CALC.value:
        subs = _parse_sub_calculations(calculation.sub_calculations or [])
        if subs is not None:
            return MultiCalculation(sub_calculations=subs)

    return UnsupportedCalculation(type_name=calculation.type)


def to_domain_definition(
    payload: GuidanceDefinitionHTTP, *, definition_id: int | None = None
) -> GuidanceDefinition:
    """Build a domain definition; ``definition_id`` wins over ``payload.id``."""
    resolved_id = definition_id if definition_id is not None else payload.id
    return GuidanceDefinition(
        id=resolved_id if resolved_id is not None else 0,
        label=payload.label,
        sublabel=payload.sublabel,
        calculation=parse_calculation(payload.calculation, payload.value),
        period=GuidancePeriod(payload.period),
        display_type=DisplayType(payload.display_type),
        availability=Availability(payload.availability),
        format=GuidanceFormat(payload.calculation.format or GuidanceFormat.NUMBER),
        metric=payload.metric,
        dimension=payload.dimension,
    )


def to_domain_definitions(payloads: Iterable[GuidanceDefinitionHTTP]) -> list[GuidanceDefinition]:
    """Map a definition list, numbering definitions without an id by position."""
    return [
        to_domain_definition(payload, definition_id=payload.id if payload.id is not None else idx)
        for idx, payload in enumerate(payloads)
    ]


def _render_calculation(
    definition: GuidanceDefinition,
) -> tuple[CalculationHTTP, str | ExpressionValueHTTP | FractionValueHTTP | None]:
    calc = definition.calculation
    fmt = definition.format
    if isinstance(calc, DirectCalculation):
        return CalculationHTTP(type=calc.type.value, format=fmt), calc.field
    if isinstance(calc, DifferenceCalculation):
        expression = f"{calc.minuend}{EXPRESSION_SEPARATOR}{calc.subtrahend}"
        return (
            CalculationHTTP(type=calc.type.value, format=fmt),
            ExpressionValueHTTP(expression=expression),
        )
    if isinstance(calc, PercentageCalculation):
        numerator = f"{calc.minuend}{EXPRESSION_SEPARATOR}{calc.subtrahend}"
        return (
            CalculationHTTP(type=calc.type.value, format=fmt),
            FractionValueHTTP(numerator=numerator, denominator=calc.denominator),
        )
    if isinstance(calc, MultiCalculation):
        subs = [
            SubCalculationHTTP(
                id=sub.id,
                cy_field=sub.cy_field,
                py_field=sub.py_field,
                calculation_type=sub.calculation_type.value,
            )
            for sub in calc.sub_calculations
        ]
        return CalculationHTTP(type=calc.type.value, format=fmt, sub_calculations=subs), None
    return CalculationHTTP(type=calc.type_name, format=fmt), None


def to_http_definition(definition: GuidanceDefinition) -> GuidanceDefinitionHTTP:
    calculation, value = _render_calculation(definition)
    return GuidanceDefinitionHTTP(
        id=definition.id,
        label=definition.label,
        sublabel=definition.sublabel,
        value=value,
        calculation=calculation,
        period=definition.period,
        metric=definition.metric,
        dimension=definition.dimension,
        display_type=definition.display_type,
        availability=definition.availability,
    )


def to_http_result(result: GuidanceResult) -> GuidanceResultHTTP:
    return GuidanceResultHTTP(
        total=result.total,
        monthly=list(result.monthly) if result.monthly is not None else None,
        sub_results=dict(result.sub_results) if result.sub_results is not None else None,
    )


def to_http_context(context: GuidanceContext) -> GuidanceContextHTTP:
    return GuidanceContextHTTP(
        context=context.context_id,
        definitions=[to_http_definition(d) for d in context.definitions],
        columns=list(context.columns),
        rows=list(context.rows),
        next_id=context.next_id,
    )


__all__ = [
    "EXPRESSION_SEPARATOR",
    "parse_calculation",
    "split_operands",
    "to_domain_definition",
    "to_domain_definitions",
    "to_http_context",
    "to_http_definition",
    "to_http_result",
]
