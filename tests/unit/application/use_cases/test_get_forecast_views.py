# tests/unit/application/use_cases/test_get_forecast_views.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Items and summary use cases resolve guidance from a context or the request."""

from __future__ import annotations

from collections.abc import Callable

from forecast_guidance.application.services.guidance_engine import GuidanceEngine
from forecast_guidance.application.use_cases.forecast.get_forecast_items import (
    GetForecastItemsRequest,
    GetForecastItemsUseCase,
)
from forecast_guidance.application.use_cases.forecast.get_forecast_summary import (
    GetForecastSummaryRequest,
    GetForecastSummaryUseCase,
)
from forecast_guidance.domain.entities.aggregates import PORTFOLIO_KEY
from forecast_guidance.domain.entities.guidance_definition import (
    DirectCalculation,
    GuidanceDefinition,
)
from forecast_guidance.domain.entities.raw_fact import MarketProfile, RawFact
from forecast_guidance.domain.enums.guidance import GuidanceContextId
from forecast_guidance.infrastructure.guidance.in_memory_context_repository import (
    InMemoryGuidanceContextRepository,
)

FactBuilder = Callable[..., RawFact]

PY_VOLUME = GuidanceDefinition(
    id=0, label="PY", calculation=DirectCalculation("py_case_equivalent_volume")
)


def test_items_use_context_selection(
    make_fact: FactBuilder, context_repository: InMemoryGuidanceContextRepository
) -> None:
    context_repository.update(
        GuidanceContextId.DEPLETION,
        lambda ctx: ctx.add(PY_VOLUME).select(columns=[1, 2], rows=[2]),
    )
    use_case = GetForecastItemsUseCase(GuidanceEngine(), context_repository)

    result = use_case.execute(
        GetForecastItemsRequest(facts=[make_fact(1, py_case_equivalent_volume=12.0)])
    )

    assert [d.id for d in result.definitions] == [1, 2]
    guidance = result.guidance["forecast:M1:P1 750ml"]
    assert guidance[2].total == 12.0
    assert guidance[2].monthly is not None
    assert guidance[1].monthly is None


def test_items_with_explicit_definitions(
    make_fact: FactBuilder, context_repository: InMemoryGuidanceContextRepository
) -> None:
    use_case = GetForecastItemsUseCase(GuidanceEngine(), context_repository)

    result = use_case.execute(
        GetForecastItemsRequest(
            facts=[make_fact(1, py_case_equivalent_volume=12.0)],
            definitions=[PY_VOLUME],
        )
    )

    assert result.guidance["forecast:M1:P1 750ml"][0].monthly is None


def test_summary_evaluates_every_level(
    make_fact: FactBuilder, context_repository: InMemoryGuidanceContextRepository
) -> None:
    use_case = GetForecastSummaryUseCase(GuidanceEngine(), context_repository)

    result = use_case.execute(
        GetForecastSummaryRequest(
            markets=[MarketProfile(market_id="M1", managed_by="Market")],
            market_facts=[make_fact(1, py_case_equivalent_volume=12.0)],
            definitions=[PY_VOLUME],
            monthly_ids=frozenset({0}),
        )
    )

    total = result.report.guidance[PORTFOLIO_KEY][0]
    assert total.total == 12.0
    assert total.monthly is not None
    assert total.monthly[0] == 12.0
