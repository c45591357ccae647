# tests/unit/adapters/mappers/test_guidance_mapper.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Wire guidance definitions <-> calculation algebra."""

from __future__ import annotations

from typing import Any

import pytest

from forecast_guidance.adapters.mappers.guidance_mapper import (
    split_operands,
    to_domain_definition,
    to_domain_definitions,
    to_http_definition,
    to_http_result,
)
from forecast_guidance.adapters.schemas.http.guidance import GuidanceDefinitionHTTP
from forecast_guidance.domain.entities.guidance_definition import (
    DifferenceCalculation,
    DirectCalculation,
    GuidanceResult,
    MultiCalculation,
    PercentageCalculation,
    UnsupportedCalculation,
    build_trends_definition,
)
from forecast_guidance.domain.enums.guidance import (
    DisplayType,
    GuidanceFormat,
    GuidancePeriod,
    SubCalculationType,
)


def _payload(**fields: Any) -> GuidanceDefinitionHTTP:
    data: dict[str, Any] = {"label": "Metric", "calculation": {"type": "direct"}}
    data.update(fields)
    return GuidanceDefinitionHTTP.model_validate(data)


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("a - b", ("a", "b")),
        ("  a   -  b ", ("a", "b")),
        ("a", ("a", "")),
        ("a-b", ("a-b", "")),
    ],
)
def test_split_operands(expression: str, expected: tuple[str, str]) -> None:
    assert split_operands(expression) == expected


def test_direct() -> None:
    definition = to_domain_definition(_payload(id=4, value="case_equivalent_volume"))

    assert definition.id == 4
    assert definition.calculation == DirectCalculation("case_equivalent_volume")
    assert definition.format is GuidanceFormat.NUMBER


def test_difference() -> None:
    payload = _payload(
        value={"expression": "case_equivalent_volume - py_case_equivalent_volume"},
        calculation={"type": "difference"},
    )

    assert to_domain_definition(payload).calculation == DifferenceCalculation(
        "case_equivalent_volume", "py_case_equivalent_volume"
    )


def test_percentage_with_camel_case_keys() -> None:
    payload = _payload(
        value={
            "numerator": "case_equivalent_volume - py_case_equivalent_volume",
            "denominator": "py_case_equivalent_volume",
        },
        calculation={"type": "percentage", "format": "percent"},
        displayType="row",
        calcType="growth",
        period="YTD",
    )

    definition = to_domain_definition(payload)

    assert definition.calculation == PercentageCalculation(
        "case_equivalent_volume", "py_case_equivalent_volume", "py_case_equivalent_volume"
    )
    assert definition.format is GuidanceFormat.PERCENT
    assert definition.display_type is DisplayType.ROW
    assert definition.period is GuidancePeriod.YTD


def test_multi_calc() -> None:
    payload = _payload(
        calculation={
            "type": "multi_calc",
            "subCalculations": [
                {
                    "id": "3M",
                    "cyField": "cy_3m_case_equivalent_volume",
                    "pyField": "py_3m_case_equivalent_volume",
                    "calculationType": "percentage",
                }
            ],
        }
    )

    calc = to_domain_definition(payload).calculation

    assert isinstance(calc, MultiCalculation)
    assert calc.sub_calculations[0].calculation_type is SubCalculationType.PERCENTAGE


@pytest.mark.parametrize(
    "fields",
    [
        {"calculation": {"type": "ratio"}, "value": "case_equivalent_volume"},
        {"calculation": {"type": "direct"}},
        {"calculation": {"type": "difference"}, "value": "case_equivalent_volume"},
        {"calculation": {"type": "percentage"}, "value": {"expression": "a - b"}},
        {
            "calculation": {
                "type": "multi_calc",
                "subCalculations": [
                    {"id": "x", "cyField": "a", "pyField": "b", "calculationType": "ratio"}
                ],
            }
        },
    ],
)
def test_mismatched_shapes_become_unsupported(fields: dict[str, Any]) -> None:
    calc = to_domain_definition(_payload(**fields)).calculation

    assert isinstance(calc, UnsupportedCalculation)


def test_definition_id_argument_wins() -> None:
    assert to_domain_definition(_payload(id=3, value="x"), definition_id=9).id == 9
    assert to_domain_definition(_payload(value="x")).id == 0


def test_definitions_without_id_are_numbered_by_position() -> None:
    payloads = [_payload(value="x"), _payload(id=50, value="x"), _payload(value="x")]

    assert [d.id for d in to_domain_definitions(payloads)] == [0, 50, 2]


def test_trends_round_trip_keeps_shape() -> None:
    trends = build_trends_definition(1)

    rendered = to_http_definition(trends).model_dump(mode="json", by_alias=True)
    parsed = to_domain_definition(GuidanceDefinitionHTTP.model_validate(rendered))

    assert rendered["calculation"]["subCalculations"][0]["cyField"] == (
        "cy_3m_case_equivalent_volume"
    )
    assert parsed.is_trends
    assert parsed.calculation == trends.calculation


def test_to_http_result() -> None:
    rendered = to_http_result(GuidanceResult(total=1.5, monthly=(0.125,) * 12))

    assert rendered.total == 1.5
    assert rendered.monthly == [0.125] * 12
    assert rendered.sub_results is None
