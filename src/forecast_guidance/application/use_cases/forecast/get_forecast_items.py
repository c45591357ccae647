# src/forecast_guidance/application/use_cases/forecast/get_forecast_items.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Use case: aggregated forecast line items with guidance.

Purpose:
    Aggregate raw facts for one scope (market view or customer view), apply
    pending overrides and evaluate the guidance selected in a context for
    every resulting item.

Layer:
    application/use_cases
"""

from __future__ import annotations

from dataclasses import dataclass, field

from forecast_guidance.application.interfaces.guidance_context_repository import (
    GuidanceContextRepository,
)
from forecast_guidance.application.services.guidance_engine import GuidanceEngine
from forecast_guidance.domain.entities.aggregates import ItemAggregate
from forecast_guidance.domain.entities.guidance_definition import (
    GuidanceDefinition,
    GuidanceResult,
)
from forecast_guidance.domain.entities.pending_override import PendingOverride
from forecast_guidance.domain.entities.raw_fact import RawFact
from forecast_guidance.domain.enums.forecast import ForecastScope
from forecast_guidance.domain.enums.guidance import GuidanceContextId
from forecast_guidance.domain.services.override_layer import OverrideOutcome


@dataclass(slots=True)
class GetForecastItemsRequest:
    """Parameter object for the items view.

    Attributes:
        facts: Raw facts of the selected scope.
        scope: Market view or customer view.
        overrides: Pending manual overrides.
        context: Guidance context whose selection is evaluated.
        definitions: Explicit definitions; overrides the context selection.
        monthly_ids: Definitions to break down by month when ``definitions``
            is given.
    """

    facts: list[RawFact]
    scope: ForecastScope = ForecastScope.MARKET
    overrides: list[PendingOverride] = field(default_factory=list)
    context: GuidanceContextId = GuidanceContextId.DEPLETION
    definitions: list[GuidanceDefinition] | None = None
    monthly_ids: frozenset[int] = frozenset()


@dataclass(frozen=True, slots=True)
class ForecastItemsResult:
    """Items with per-item guidance results keyed by definition id."""

    items: tuple[ItemAggregate, ...]
    guidance: dict[str, dict[int, GuidanceResult]]
    definitions: tuple[GuidanceDefinition, ...]
    overrides: OverrideOutcome


class GetForecastItemsUseCase:
    """Build the items view.

    Args:
        engine: Guidance engine facade.
        contexts: Guidance context repository.
    """

    def __init__(self, engine: GuidanceEngine, contexts: GuidanceContextRepository) -> None:
        self._engine = engine
        self._contexts = contexts

    def execute(self, req: GetForecastItemsRequest) -> ForecastItemsResult:
        """Aggregate, override and evaluate.

        Args:
            req: Items view request.

        Returns:
            ForecastItemsResult with one guidance map per item key.
        """
        if req.definitions is not None:
            definitions = tuple(req.definitions)
            monthly = {d.id: d.id in req.monthly_ids for d in definitions}
        else:
            plan = self._contexts.get(req.context).evaluation_plan()
            definitions = plan.definitions
            monthly = plan.monthly

        outcome = self._engine.aggregate_items(req.facts, req.overrides, req.scope)
        guidance = {
            item.key: self._engine.evaluate_guidance(item, definitions, monthly=monthly)
            for item in outcome.items
        }
        return ForecastItemsResult(
            items=outcome.items,
            guidance=guidance,
            definitions=definitions,
            overrides=outcome.overrides,
        )
