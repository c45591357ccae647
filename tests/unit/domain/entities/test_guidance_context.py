# tests/unit/domain/entities/test_guidance_context.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Guidance context state transitions."""

from __future__ import annotations

import pytest

from forecast_guidance.domain.entities.guidance_context import GuidanceContext
from forecast_guidance.domain.entities.guidance_definition import (
    DirectCalculation,
    GuidanceDefinition,
    build_trends_definition,
)
from forecast_guidance.domain.enums.guidance import (
    Availability,
    GuidanceContextId,
    GuidancePeriod,
)
from forecast_guidance.domain.exceptions.guidance import (
    GuidanceDefinitionNotDeletable,
    GuidanceDefinitionNotFound,
    InvalidGuidanceSelection,
)


def _definition(definition_id: int = 0, **overrides: object) -> GuidanceDefinition:
    fields: dict[str, object] = {
        "id": definition_id,
        "label": f"Metric {definition_id}",
        "calculation": DirectCalculation("case_equivalent_volume"),
    }
    fields.update(overrides)
    return GuidanceDefinition(**fields)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("context_id", "trends_id", "next_id"),
    [
        (GuidanceContextId.DEPLETION, 1, 2),
        (GuidanceContextId.SUMMARY, 1001, 1002),
        (GuidanceContextId.SHIPMENT, None, 2000),
    ],
)
def test_initial_state(
    context_id: GuidanceContextId, trends_id: int | None, next_id: int
) -> None:
    context = GuidanceContext.initial(context_id)

    assert context.next_id == next_id
    assert [d.id for d in context.definitions if d.is_trends] == (
        [trends_id] if trends_id is not None else []
    )


def test_add_assigns_increasing_ids() -> None:
    context = GuidanceContext.initial(GuidanceContextId.DEPLETION)

    context = context.add(_definition()).add(_definition())

    assert [d.id for d in context.definitions] == [1, 2, 3]
    assert context.next_id == 4


def test_contexts_are_independent() -> None:
    depletion = GuidanceContext.initial(GuidanceContextId.DEPLETION).add(_definition())
    summary = GuidanceContext.initial(GuidanceContextId.SUMMARY)

    assert len(depletion.definitions) == 2
    assert len(summary.definitions) == 1
    assert summary.add(_definition()).definitions[-1].id == 1002


def test_get_unknown_raises() -> None:
    context = GuidanceContext.initial(GuidanceContextId.SHIPMENT)

    with pytest.raises(GuidanceDefinitionNotFound) as exc:
        context.get(42)

    assert exc.value.http_status == 404
    assert exc.value.details == {"context": "shipment", "id": 42}


def test_trends_cannot_be_removed() -> None:
    context = GuidanceContext.initial(GuidanceContextId.DEPLETION)

    with pytest.raises(GuidanceDefinitionNotDeletable):
        context.remove(1)


def test_remove_prunes_selection() -> None:
    context = GuidanceContext.initial(GuidanceContextId.DEPLETION).add(_definition())
    context = context.select(columns=[1, 2], rows=[2])

    context = context.remove(2)

    assert context.columns == (1,)
    assert context.rows == ()
    assert context.find(2) is None


def test_trends_cannot_be_replaced_by_another_kind() -> None:
    context = GuidanceContext.initial(GuidanceContextId.DEPLETION)

    with pytest.raises(GuidanceDefinitionNotDeletable):
        context.upsert(_definition(1))


def test_upsert_replaces_in_place_and_bumps_counter() -> None:
    context = GuidanceContext.initial(GuidanceContextId.SHIPMENT).add(_definition())

    context = context.upsert(_definition(2000, label="Renamed"))
    context = context.upsert(_definition(2500))

    assert [d.label for d in context.definitions] == ["Renamed", "Metric 2500"]
    assert context.next_id == 2501


def test_upsert_drops_row_that_no_longer_qualifies() -> None:
    context = GuidanceContext.initial(GuidanceContextId.SHIPMENT).add(_definition())
    context = context.select(columns=[2000], rows=[2000])

    context = context.upsert(_definition(2000, period=GuidancePeriod.YTD))

    assert context.rows == ()
    assert context.columns == (2000,)


def test_load_restores_trends_and_prunes_selection() -> None:
    context = GuidanceContext.initial(GuidanceContextId.SUMMARY)
    context = context.add(_definition()).select(columns=[1001, 1002], rows=[1002])

    context = context.load([_definition(1500)])

    assert context.definitions[0].is_trends
    assert context.definitions[0].id == 1001
    assert context.columns == (1001,)
    assert context.rows == ()
    assert context.next_id == 1501


def test_load_keeps_provided_trends() -> None:
    context = GuidanceContext.initial(GuidanceContextId.DEPLETION)

    context = context.load([build_trends_definition(7), _definition(8)])

    assert [d.id for d in context.definitions] == [7, 8]


def test_load_never_drops_below_floor() -> None:
    context = GuidanceContext.initial(GuidanceContextId.SHIPMENT).load([])

    assert context.definitions == ()
    assert context.next_id == 2000


def test_select_rejects_unknown_ids() -> None:
    context = GuidanceContext.initial(GuidanceContextId.DEPLETION)

    with pytest.raises(InvalidGuidanceSelection) as exc:
        context.select(columns=[99], rows=[])

    assert exc.value.details["unknown_ids"] == [99]


@pytest.mark.parametrize("period", [GuidancePeriod.YTD, GuidancePeriod.TG])
def test_select_rejects_non_full_year_rows(period: GuidancePeriod) -> None:
    context = GuidanceContext.initial(GuidanceContextId.DEPLETION).add(
        _definition(period=period)
    )

    with pytest.raises(InvalidGuidanceSelection):
        context.select(columns=[2], rows=[2])


def test_select_rejects_trends_row() -> None:
    context = GuidanceContext.initial(GuidanceContextId.DEPLETION)

    with pytest.raises(InvalidGuidanceSelection):
        context.select(columns=[], rows=[1])


def test_select_dedupes_ids() -> None:
    context = GuidanceContext.initial(GuidanceContextId.DEPLETION).add(_definition())

    context = context.select(columns=[1, 2, 1], rows=[2, 2])

    assert context.columns == (1, 2)
    assert context.rows == (2,)


def test_evaluation_plan_merges_columns_and_rows() -> None:
    context = GuidanceContext.initial(GuidanceContextId.DEPLETION)
    context = context.add(_definition(label="Vol")).add(_definition(label="PY"))
    context = context.select(columns=[1, 2], rows=[2, 3])

    plan = context.evaluation_plan()

    assert [d.id for d in plan.definitions] == [1, 2, 3]
    assert plan.monthly == {1: False, 2: True, 3: True}


def test_functionally_identical_columns_are_hidden() -> None:
    context = GuidanceContext.initial(GuidanceContextId.DEPLETION)
    context = context.add(_definition(label="Vol")).add(_definition(label="Vol"))
    context = context.select(columns=[2, 3], rows=[])

    assert [d.id for d in context.column_definitions()] == [2]


def test_evaluation_plan_skips_unavailable_definitions() -> None:
    context = GuidanceContext.initial(GuidanceContextId.SUMMARY).add(
        _definition(availability=Availability.DEPLETIONS)
    )
    context = context.select(columns=[1001, 1002], rows=[])

    plan = context.evaluation_plan()

    assert [d.id for d in plan.definitions] == [1001]
