# tests/unit/domain/entities/test_guidance_definition.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Guidance definition predicates."""

from __future__ import annotations

import pytest

from forecast_guidance.domain.entities.guidance_definition import (
    TRENDS_LABEL,
    DirectCalculation,
    GuidanceDefinition,
    GuidanceResult,
    MultiCalculation,
    build_trends_definition,
)
from forecast_guidance.domain.enums.guidance import (
    Availability,
    CalculationType,
    DisplayType,
    GuidanceContextId,
    GuidancePeriod,
)


def _direct(**overrides: object) -> GuidanceDefinition:
    fields: dict[str, object] = {
        "id": 5,
        "label": "Volume",
        "calculation": DirectCalculation("case_equivalent_volume"),
    }
    fields.update(overrides)
    return GuidanceDefinition(**fields)  # type: ignore[arg-type]


def test_trends_definition_shape() -> None:
    trends = build_trends_definition(1)

    assert trends.label == TRENDS_LABEL
    assert trends.is_trends
    assert not trends.is_deletable
    assert not trends.can_be_row
    assert isinstance(trends.calculation, MultiCalculation)
    assert [s.id for s in trends.calculation.sub_calculations] == ["3M", "6M", "12M"]
    assert trends.calculation.type is CalculationType.MULTI_CALC


def test_multi_calc_with_other_label_is_not_trends() -> None:
    trends = build_trends_definition(1)
    renamed = GuidanceDefinition(id=9, label="Windows", calculation=trends.calculation)

    assert not renamed.is_trends
    assert renamed.is_deletable


@pytest.mark.parametrize(
    ("period", "can_be_row"),
    [(GuidancePeriod.FY, True), (GuidancePeriod.YTD, False), (GuidancePeriod.TG, False)],
)
def test_only_full_year_definitions_can_be_rows(period: GuidancePeriod, can_be_row: bool) -> None:
    assert _direct(period=period).can_be_row is can_be_row


def test_can_be_column_follows_display_type() -> None:
    assert _direct(display_type=DisplayType.BOTH).can_be_column
    assert not _direct(display_type=DisplayType.ROW).can_be_column


@pytest.mark.parametrize(
    ("availability", "context", "expected"),
    [
        (Availability.BOTH, GuidanceContextId.DEPLETION, True),
        (Availability.DEPLETIONS, GuidanceContextId.DEPLETION, True),
        (Availability.DEPLETIONS, GuidanceContextId.SUMMARY, False),
        (Availability.SUMMARY, GuidanceContextId.DEPLETION, False),
        (Availability.SUMMARY, GuidanceContextId.SHIPMENT, True),
    ],
)
def test_availability(
    availability: Availability, context: GuidanceContextId, expected: bool
) -> None:
    assert _direct(availability=availability).available_in(context) is expected


def test_empty_result() -> None:
    assert GuidanceResult().is_empty
    assert not GuidanceResult(total=0.0).is_empty
    assert not GuidanceResult(sub_results={}).is_empty
