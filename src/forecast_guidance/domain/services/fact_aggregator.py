# src/forecast_guidance/domain/services/fact_aggregator.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Raw fact aggregation.

Purpose:
    Group raw facts by line-item key and sum them into one
    :class:`ItemAggregate` per key, with 12-month TY/PY/LC volume series and
    TY/PY monetary totals.

Layer:
    domain/services

Notes:
    - Pure: no logging, no I/O, never raises on malformed measures.
    - Within one item and month only the facts carrying the highest
      ``current_version`` contribute volume, so a saved version is never
      counted together with its draft. TY/PY monetary totals sum every fact
      with a valid month regardless of version.
    - The current-month projection replaces the raw TY volume for the month
      right after the cutoff when the fact carries a projection and was not
      entered by hand. Control-area markets are exempt. Monetary values are
      never projection-substituted.
    - No rounding happens here; sums stay at full precision.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from forecast_guidance.domain.entities.aggregates import ItemAggregate, MonthlyValue
from forecast_guidance.domain.entities.raw_fact import RawFact, Tag
from forecast_guidance.domain.enums.forecast import ForecastScope
from forecast_guidance.domain.services.cutoff_resolver import resolve_last_actual_month_index
from forecast_guidance.domain.services.numeric import sanitize
from forecast_guidance.domain.services.options import EngineOptions
from forecast_guidance.domain.services.time_axis import MONTH_INDEXES, month_index, zero_series

DEFAULT_FORECAST_LOGIC = "flat"
DEFAULT_FORECAST_STATUS = "draft"


@dataclass(frozen=True, slots=True)
class _RetainedFact:
    """A fact that survived version precedence for its month."""

    month_idx: int
    fact: RawFact


def group_facts_by_key(
    facts: Iterable[RawFact], scope: ForecastScope
) -> dict[str, list[RawFact]]:
    """Partition facts by item key, preserving first-seen key order."""
    groups: dict[str, list[RawFact]] = {}
    for fact in facts:
        groups.setdefault(fact.item_key(scope), []).append(fact)
    return groups


def select_latest_versions(facts: Sequence[RawFact]) -> list[_RetainedFact]:
    """Keep, per month, only the facts sharing that month's highest version.

    Facts whose month lies outside 1..12 are discarded.
    """
    by_month: dict[int, list[RawFact]] = {}
    for fact in facts:
        idx = month_index(fact.month)
        if idx is None:
            continue
        by_month.setdefault(idx, []).append(fact)

    retained: list[_RetainedFact] = []
    for idx in sorted(by_month):
        month_facts = by_month[idx]
        top = max(fact.current_version for fact in month_facts)
        retained.extend(
            _RetainedFact(month_idx=idx, fact=fact)
            for fact in month_facts
            if fact.current_version == top
        )
    return retained


class FactAggregator:
    """Build item aggregates from raw facts for one scope.

    Args:
        options: Numeric policy (sanitization bound and control market area).
    """

    def __init__(self, options: EngineOptions | None = None) -> None:
        self._options = options or EngineOptions()

    def aggregate(
        self, facts: Iterable[RawFact], scope: ForecastScope
    ) -> dict[str, ItemAggregate]:
        """Return item aggregates keyed by item key, in first-seen order."""
        return {
            key: self._aggregate_item(key, group, scope)
            for key, group in group_facts_by_key(facts, scope).items()
        }

    def _measure(self, value: object) -> float:
        return sanitize(value, max_abs=self._options.max_abs_measure)

    def _aggregate_item(
        self, key: str, facts: Sequence[RawFact], scope: ForecastScope
    ) -> ItemAggregate:
        cutoff = resolve_last_actual_month_index(facts)
        # max() keeps the first fact among equal versions.
        primary = max(facts, key=lambda fact: fact.current_version)
        projection_allowed = primary.market_area_name != self._options.control_market_area_name

        ty = zero_series()
        py = zero_series()
        lc = zero_series()
        manual = [False] * len(ty)
        gross_sales_value = 0.0
        py_gross_sales_value = 0.0

        retained = select_latest_versions(facts)
        for entry in retained:
            idx, fact = entry.month_idx, entry.fact
            volume = fact.case_equivalent_volume
            if (
                idx == cutoff + 1
                and projection_allowed
                and fact.projected_case_equivalent_volume is not None
                and not fact.is_manual_input
            ):
                volume = fact.projected_case_equivalent_volume
            ty[idx] += self._measure(volume)
            py[idx] += self._measure(fact.py_case_equivalent_volume)
            lc[idx] += self._measure(fact.prev_published_case_equivalent_volume)
            manual[idx] = manual[idx] or fact.is_manual_input

        for fact in facts:
            if month_index(fact.month) is None:
                continue
            gross_sales_value += self._measure(fact.gross_sales_value)
            py_gross_sales_value += self._measure(fact.py_gross_sales_value)

        return ItemAggregate(
            key=key,
            scope=scope,
            market_id=primary.market_id,
            market_name=primary.market_name,
            market_area_name=primary.market_area_name,
            customer_id=primary.customer_id,
            customer_name=primary.customer_name,
            brand=primary.brand,
            variant=primary.variant,
            variant_id=primary.variant_id,
            variant_size_pack_id=primary.variant_size_pack_id,
            variant_size_pack_desc=primary.variant_size_pack_desc,
            forecast_logic=primary.forecast_method or DEFAULT_FORECAST_LOGIC,
            forecast_status=primary.forecast_status or DEFAULT_FORECAST_STATUS,
            forecast_generation_month_date=primary.forecast_generation_month_date,
            commentary=_latest_comment(retained) or primary.comment or None,
            tags=_merge_tags(facts),
            months=[
                MonthlyValue(
                    value=ty[idx],
                    is_actual=idx <= cutoff,
                    is_manually_modified=manual[idx],
                )
                for idx in MONTH_INDEXES
            ],
            py_months=py,
            lc_months=lc,
            gross_sales_value=gross_sales_value,
            py_gross_sales_value=py_gross_sales_value,
            historical_gsv_rate=self._measure(primary.gsv_rate),
            last_actual_month_index=cutoff,
        )


def _latest_comment(retained: Sequence[_RetainedFact]) -> str | None:
    """Comment of the highest-version, latest-month commented fact."""
    commented = [entry for entry in retained if entry.fact.comment]
    if not commented:
        return None
    latest = max(commented, key=lambda entry: (entry.fact.current_version, entry.month_idx))
    return latest.fact.comment


def _merge_tags(facts: Iterable[RawFact]) -> tuple[Tag, ...]:
    """Union of all tags, de-duplicated by tag id."""
    merged: dict[int, Tag] = {}
    for fact in facts:
        for tag in fact.tags:
            merged[tag.tag_id] = tag
    return tuple(merged.values())


__all__ = ["FactAggregator", "group_facts_by_key", "select_latest_versions"]
