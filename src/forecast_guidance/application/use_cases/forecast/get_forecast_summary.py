# src/forecast_guidance/application/use_cases/forecast/get_forecast_summary.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Use case: summary report (variants, brands, total) with guidance.

Purpose:
    Choose market or customer facts per market, aggregate, apply overrides,
    roll up and evaluate the summary context's guidance at every level.

Layer:
    application/use_cases
"""

from __future__ import annotations

from dataclasses import dataclass, field

from forecast_guidance.application.interfaces.guidance_context_repository import (
    GuidanceContextRepository,
)
from forecast_guidance.application.services.guidance_engine import (
    GuidanceEngine,
    SummaryReport,
)
from forecast_guidance.domain.entities.guidance_definition import GuidanceDefinition
from forecast_guidance.domain.entities.pending_override import PendingOverride
from forecast_guidance.domain.entities.raw_fact import MarketProfile, RawFact
from forecast_guidance.domain.enums.guidance import GuidanceContextId


@dataclass(slots=True)
class GetForecastSummaryRequest:
    """Parameter object for the summary view.

    Attributes:
        markets: Market profiles declaring market or customer management.
        market_facts: Market-level raw facts.
        customer_facts: Customer-level raw facts.
        overrides: Pending manual overrides.
        context: Guidance context whose selection is evaluated.
        definitions: Explicit definitions; overrides the context selection.
        monthly_ids: Definitions to break down by month when ``definitions``
            is given.
    """

    markets: list[MarketProfile]
    market_facts: list[RawFact] = field(default_factory=list)
    customer_facts: list[RawFact] = field(default_factory=list)
    overrides: list[PendingOverride] = field(default_factory=list)
    context: GuidanceContextId = GuidanceContextId.SUMMARY
    definitions: list[GuidanceDefinition] | None = None
    monthly_ids: frozenset[int] = frozenset()


@dataclass(frozen=True, slots=True)
class ForecastSummaryResult:
    """Summary report plus the definitions that were evaluated."""

    report: SummaryReport
    definitions: tuple[GuidanceDefinition, ...]


class GetForecastSummaryUseCase:
    """Build the summary view.

    Args:
        engine: Guidance engine facade.
        contexts: Guidance context repository.
    """

    def __init__(self, engine: GuidanceEngine, contexts: GuidanceContextRepository) -> None:
        self._engine = engine
        self._contexts = contexts

    def execute(self, req: GetForecastSummaryRequest) -> ForecastSummaryResult:
        if req.definitions is not None:
            definitions = tuple(req.definitions)
            monthly = {d.id: d.id in req.monthly_ids for d in definitions}
        else:
            plan = self._contexts.get(req.context).evaluation_plan()
            definitions = plan.definitions
            monthly = plan.monthly

        report = self._engine.summarize(
            req.market_facts,
            req.customer_facts,
            req.markets,
            req.overrides,
            definitions,
            monthly=monthly,
        )
        return ForecastSummaryResult(report=report, definitions=definitions)
