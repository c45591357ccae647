# src/forecast_guidance/domain/services/hierarchical_rollup.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Hierarchical roll-up: item -> variant -> brand -> portfolio total.

Purpose:
    Re-aggregate post-override item aggregates into variant, brand and
    portfolio aggregates sharing the same measure set, then derive trends,
    rates and LC monetary figures at every level.

Layer:
    domain/services

Notes:
    - Summation is done at full precision at every level. Rounding runs once,
      after the whole tree is summed, and never between levels.
    - Brands sum every variant, including variants later hidden by the zero
      filter, so noise rows never suppress a parent's contribution.
    - A variant whose rounded total volume is within the zero threshold is
      hidden from the variant list. Brands and the total are never filtered.
    - The LC monetary series of a parent is the sum of its children's series
      and therefore counts as explicit data for the rate deriver.
    - The cutoff of a parent is the latest cutoff among its children.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from forecast_guidance.domain.entities.aggregates import (
    BrandAggregate,
    ForecastAggregate,
    ItemAggregate,
    MonthlyValue,
    PortfolioAggregate,
    TrendMeasures,
    VariantAggregate,
)
from forecast_guidance.domain.services.cutoff_resolver import apply_actual_prefix
from forecast_guidance.domain.services.numeric import round_to
from forecast_guidance.domain.services.options import EngineOptions
from forecast_guidance.domain.services.rate_deriver import derive_rates
from forecast_guidance.domain.services.rolling_trends import apply_trends
from forecast_guidance.domain.services.time_axis import MONTH_INDEXES, zero_series


@dataclass(frozen=True, slots=True)
class RollUpResult:
    """Output of one roll-up pass.

    Attributes:
        variants: Visible variant aggregates, in first-seen order.
        brands: Brand aggregates keyed by brand name.
        total: Portfolio total over all brands.
        last_actual_month_index: Latest cutoff over all contributing items.
        hidden_variant_keys: Variants dropped by the zero-total filter.
        skipped_item_keys: Items without brand or variant, not rolled up.
    """

    variants: tuple[VariantAggregate, ...]
    brands: dict[str, BrandAggregate]
    total: PortfolioAggregate
    last_actual_month_index: int
    hidden_variant_keys: tuple[str, ...] = ()
    skipped_item_keys: tuple[str, ...] = ()


def accumulate(parent: ForecastAggregate, child: ForecastAggregate) -> None:
    """Add ``child``'s monthly and total measures into ``parent`` in place."""
    if child.lc_gsv_months is None:
        derive_rates(child)
    child_lc_gsv = child.lc_gsv_months or zero_series()
    if parent.lc_gsv_months is None:
        parent.lc_gsv_months = zero_series()

    parent.months = [
        MonthlyValue(
            value=parent.months[idx].value + child.months[idx].value,
            is_manually_modified=(
                parent.months[idx].is_manually_modified
                or child.months[idx].is_manually_modified
            ),
        )
        for idx in MONTH_INDEXES
    ]
    for idx in MONTH_INDEXES:
        parent.py_months[idx] += child.py_months[idx]
        parent.lc_months[idx] += child.lc_months[idx]
        parent.lc_gsv_months[idx] += child_lc_gsv[idx]
    parent.gross_sales_value += child.gross_sales_value
    parent.py_gross_sales_value += child.py_gross_sales_value
    parent.last_actual_month_index = max(
        parent.last_actual_month_index, child.last_actual_month_index
    )


def round_aggregate(aggregate: ForecastAggregate, options: EngineOptions) -> None:
    """Round every stored measure of ``aggregate`` to the configured precision."""
    volume = options.volume_precision
    monetary = options.monetary_precision

    aggregate.months = [
        MonthlyValue(
            value=round_to(month.value, volume),
            is_actual=month.is_actual,
            is_manually_modified=month.is_manually_modified,
        )
        for month in aggregate.months
    ]
    aggregate.py_months = [round_to(value, volume) for value in aggregate.py_months]
    aggregate.lc_months = [round_to(value, volume) for value in aggregate.lc_months]
    aggregate.gross_sales_value = round_to(aggregate.gross_sales_value, monetary)
    aggregate.py_gross_sales_value = round_to(aggregate.py_gross_sales_value, monetary)
    if aggregate.lc_gsv_months is not None:
        aggregate.lc_gsv_months = [round_to(v, monetary) for v in aggregate.lc_gsv_months]
    trends = aggregate.trends
    aggregate.trends = TrendMeasures(
        cy_3m=round_to(trends.cy_3m, volume),
        cy_6m=round_to(trends.cy_6m, volume),
        cy_12m=round_to(trends.cy_12m, volume),
        py_3m=round_to(trends.py_3m, volume),
        py_6m=round_to(trends.py_6m, volume),
        py_12m=round_to(trends.py_12m, volume),
    )


def _finalize(
    aggregate: ForecastAggregate, options: EngineOptions, *, apply_rounding: bool
) -> None:
    aggregate.months = apply_actual_prefix(aggregate.months, aggregate.last_actual_month_index)
    apply_trends(aggregate)
    if apply_rounding:
        round_aggregate(aggregate, options)
    derive_rates(aggregate)
    if apply_rounding:
        aggregate.lc_gross_sales_value = round_to(
            aggregate.lc_gross_sales_value, options.monetary_precision
        )


def is_zero_total(aggregate: ForecastAggregate, options: EngineOptions) -> bool:
    """Whether the rounded TY volume total is within the zero threshold."""
    rounded = round_to(aggregate.case_equivalent_volume, options.volume_precision)
    return abs(rounded) <= options.zero_total_threshold


def _sum_brands(brands: Iterable[BrandAggregate]) -> PortfolioAggregate:
    total = PortfolioAggregate()
    for brand in brands:
        accumulate(total, brand)
    return total


def build_total(
    brands: Iterable[BrandAggregate],
    options: EngineOptions | None = None,
    *,
    apply_rounding: bool = True,
) -> PortfolioAggregate:
    """Sum brand aggregates into a finalized portfolio total.

    The brands themselves are not modified.
    """
    total = _sum_brands(brands)
    _finalize(total, options or EngineOptions(), apply_rounding=apply_rounding)
    return total


def roll_up(
    items: Iterable[ItemAggregate],
    options: EngineOptions | None = None,
    *,
    apply_rounding: bool = True,
) -> RollUpResult:
    """Roll item aggregates up into variants, brands and a portfolio total.

    Args:
        items: Post-override item aggregates.
        options: Numeric policy; defaults to :class:`EngineOptions`.
        apply_rounding: When False, every level keeps full precision.

    Returns:
        RollUpResult with visible variants, all brands and the total.
    """
    opts = options or EngineOptions()

    variants: dict[str, VariantAggregate] = {}
    skipped: list[str] = []
    for item in items:
        variant_key = item.variant_key
        if variant_key is None or item.brand is None or item.variant is None:
            skipped.append(item.key)
            continue
        variant = variants.get(variant_key)
        if variant is None:
            variant = VariantAggregate(
                key=variant_key,
                brand=item.brand,
                variant=item.variant,
                variant_id=item.variant_id,
            )
            variants[variant_key] = variant
        accumulate(variant, item)

    brands: dict[str, BrandAggregate] = {}
    for variant in variants.values():
        brand = brands.get(variant.brand)
        if brand is None:
            brand = BrandAggregate(key=variant.brand, brand=variant.brand)
            brands[variant.brand] = brand
        accumulate(brand, variant)

    total = _sum_brands(brands.values())

    # Parents are summed before any level is rounded.
    for aggregate in (*variants.values(), *brands.values(), total):
        _finalize(aggregate, opts, apply_rounding=apply_rounding)

    visible: list[VariantAggregate] = []
    hidden: list[str] = []
    for variant in variants.values():
        if is_zero_total(variant, opts):
            hidden.append(variant.key)
        else:
            visible.append(variant)

    return RollUpResult(
        variants=tuple(visible),
        brands=brands,
        total=total,
        last_actual_month_index=total.last_actual_month_index,
        hidden_variant_keys=tuple(hidden),
        skipped_item_keys=tuple(skipped),
    )


__all__ = [
    "RollUpResult",
    "accumulate",
    "round_aggregate",
    "is_zero_total",
    "build_total",
    "roll_up",
]
