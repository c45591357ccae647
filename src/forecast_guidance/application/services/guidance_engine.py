# src/forecast_guidance/application/services/guidance_engine.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Guidance engine facade.

Purpose:
    Orchestrate the pure domain services into the pipeline
    raw facts -> cutoff -> item aggregation -> overrides -> roll-up ->
    rates -> guidance evaluation, and log one structured event per stage.

Layer:
    application/services

Notes:
    - Every call recomputes from its inputs; the engine keeps no state
      between calls beyond its immutable options.
    - Domain services never log; this facade does.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from forecast_guidance.domain.entities.aggregates import (
    PORTFOLIO_KEY,
    BrandAggregate,
    ForecastAggregate,
    ItemAggregate,
)
from forecast_guidance.domain.entities.guidance_definition import (
    GuidanceDefinition,
    GuidanceResult,
)
from forecast_guidance.domain.entities.pending_override import PendingOverride
from forecast_guidance.domain.entities.raw_fact import MarketProfile, RawFact
from forecast_guidance.domain.enums.forecast import ForecastScope
from forecast_guidance.domain.services.fact_aggregator import FactAggregator
from forecast_guidance.domain.services.guidance_evaluator import GuidanceEvaluator
from forecast_guidance.domain.services.hierarchical_rollup import (
    RollUpResult,
    build_total,
    roll_up,
)
from forecast_guidance.domain.services.options import EngineOptions
from forecast_guidance.domain.services.override_layer import OverrideOutcome, apply_overrides
from forecast_guidance.domain.services.rate_deriver import derive_rates
from forecast_guidance.domain.services.rolling_trends import apply_trends
from forecast_guidance.domain.services.scope_selection import select_scoped_facts

logger = logging.getLogger(__name__)

MonthlyFlags = bool | Mapping[int, bool]


@dataclass(frozen=True, slots=True)
class AggregationOutcome:
    """Item aggregates for one scope plus override bookkeeping."""

    items: tuple[ItemAggregate, ...]
    overrides: OverrideOutcome = field(default_factory=OverrideOutcome)


@dataclass(frozen=True, slots=True)
class SummaryReport:
    """Rolled-up hierarchy with guidance per variant, brand and total.

    ``guidance`` is keyed ``variant:<variant key>``, ``brand:<brand>`` and
    ``total``.
    """

    rollup: RollUpResult
    guidance: dict[str, dict[int, GuidanceResult]]
    overrides: OverrideOutcome
    ignored_facts: int = 0


def variant_report_key(variant_key: str) -> str:
    return f"variant:{variant_key}"


def brand_report_key(brand: str) -> str:
    return f"brand:{brand}"


class GuidanceEngine:
    """Facade over the aggregation, roll-up and guidance services.

    Args:
        options: Numeric policy shared by every stage.
    """

    def __init__(self, options: EngineOptions | None = None) -> None:
        self._options = options or EngineOptions()
        self._aggregator = FactAggregator(self._options)
        self._evaluator = GuidanceEvaluator(self._options.guidance_precision)

    @property
    def options(self) -> EngineOptions:
        return self._options

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------
    def aggregate_items(
        self,
        facts: Iterable[RawFact],
        overrides: Iterable[PendingOverride],
        scope: ForecastScope,
    ) -> AggregationOutcome:
        """Aggregate facts for ``scope``, apply overrides, derive trends and rates."""
        items = self._aggregator.aggregate(facts, scope)
        logger.info(
            "forecast_aggregated",
            extra={"extra": {"scope": scope.value, "items": len(items)}},
        )

        outcome = apply_overrides(
            items, overrides, scope, max_abs=self._options.max_abs_measure
        )
        logger.info(
            "overrides_applied",
            extra={
                "extra": {
                    "scope": scope.value,
                    "matched": outcome.matched,
                    "dropped": outcome.dropped,
                }
            },
        )

        for item in items.values():
            apply_trends(item)
            derive_rates(item)
        return AggregationOutcome(items=tuple(items.values()), overrides=outcome)

    def aggregate(
        self,
        facts: Iterable[RawFact],
        overrides: Iterable[PendingOverride],
        scope: ForecastScope,
    ) -> list[ItemAggregate]:
        """Return item aggregates for one scope (market view or customer view)."""
        return list(self.aggregate_items(facts, overrides, scope).items)

    # ------------------------------------------------------------------
    # Roll-up
    # ------------------------------------------------------------------
    def roll_up(self, items: Iterable[ItemAggregate]) -> RollUpResult:
        """Roll items up into variants, brands and the portfolio total."""
        result = roll_up(items, self._options)
        logger.info(
            "rollup_completed",
            extra={
                "extra": {
                    "variants": len(result.variants),
                    "hidden_variants": len(result.hidden_variant_keys),
                    "skipped_items": len(result.skipped_item_keys),
                    "brands": len(result.brands),
                    "last_actual_month_index": result.last_actual_month_index,
                }
            },
        )
        return result

    # ------------------------------------------------------------------
    # Guidance
    # ------------------------------------------------------------------
    def evaluate_guidance(
        self,
        aggregate: ForecastAggregate,
        definitions: Iterable[GuidanceDefinition],
        *,
        monthly: MonthlyFlags = False,
    ) -> dict[int, GuidanceResult]:
        """Evaluate definitions against one aggregate at any level."""
        return self._evaluator.evaluate_many(aggregate, definitions, monthly=monthly)

    def evaluate_total_guidance(
        self,
        brands: Iterable[BrandAggregate] | Mapping[str, BrandAggregate],
        definitions: Iterable[GuidanceDefinition],
        *,
        monthly: MonthlyFlags = False,
    ) -> dict[int, GuidanceResult]:
        """Evaluate definitions against the portfolio total of ``brands``."""
        values = brands.values() if isinstance(brands, Mapping) else brands
        total = build_total(values, self._options)
        return self.evaluate_guidance(total, definitions, monthly=monthly)

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------
    def summarize(
        self,
        market_facts: Iterable[RawFact],
        customer_facts: Iterable[RawFact],
        markets: Sequence[MarketProfile],
        overrides: Iterable[PendingOverride],
        definitions: Sequence[GuidanceDefinition],
        *,
        monthly: MonthlyFlags = False,
    ) -> SummaryReport:
        """Run the whole pipeline for the summary view.

        Each market contributes either its market-level or its customer-level
        facts, as declared by its profile. Overrides carrying a customer id
        target customer-scope items, all others market-scope items.
        """
        scoped = select_scoped_facts(market_facts, customer_facts, markets)
        pending = list(overrides)
        market_overrides = [o for o in pending if o.customer_id is None]
        customer_overrides = [o for o in pending if o.customer_id is not None]

        market_outcome = self.aggregate_items(
            scoped.market, market_overrides, ForecastScope.MARKET
        )
        customer_outcome = self.aggregate_items(
            scoped.customer, customer_overrides, ForecastScope.CUSTOMER
        )
        rollup = self.roll_up((*market_outcome.items, *customer_outcome.items))

        guidance: dict[str, dict[int, GuidanceResult]] = {}
        for variant in rollup.variants:
            guidance[variant_report_key(variant.key)] = self.evaluate_guidance(
                variant, definitions, monthly=monthly
            )
        for brand in rollup.brands.values():
            guidance[brand_report_key(brand.brand)] = self.evaluate_guidance(
                brand, definitions, monthly=monthly
            )
        guidance[PORTFOLIO_KEY] = self.evaluate_guidance(
            rollup.total, definitions, monthly=monthly
        )
        logger.info(
            "guidance_evaluated",
            extra={"extra": {"definitions": len(definitions), "aggregates": len(guidance)}},
        )

        m, c = market_outcome.overrides, customer_outcome.overrides
        return SummaryReport(
            rollup=rollup,
            guidance=guidance,
            overrides=OverrideOutcome(
                matched=m.matched + c.matched,
                dropped=m.dropped + c.dropped,
                dropped_keys=m.dropped_keys + c.dropped_keys,
            ),
            ignored_facts=scoped.ignored,
        )


__all__ = [
    "AggregationOutcome",
    "GuidanceEngine",
    "SummaryReport",
    "brand_report_key",
    "variant_report_key",
]
