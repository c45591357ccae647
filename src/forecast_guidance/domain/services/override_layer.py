# src/forecast_guidance/domain/services/override_layer.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Manual override application.

Purpose:
    Replace the TY and LC monthly volume of already-aggregated line items
    with user-submitted series, matched by exact item key.

Layer:
    domain/services

Notes:
    - Replacement, never addition. Monetary totals are left untouched; they
      are re-valued through the GSV rate downstream.
    - An override without a matching item is dropped. Overrides never
      synthesize new items.
    - ``is_actual`` keeps following the item's cutoff prefix.
"""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping
from dataclasses import dataclass

from forecast_guidance.domain.entities.aggregates import ItemAggregate, MonthlyValue
from forecast_guidance.domain.entities.pending_override import OverrideMonth, PendingOverride
from forecast_guidance.domain.enums.forecast import ForecastScope
from forecast_guidance.domain.services.numeric import sanitize
from forecast_guidance.domain.services.options import DEFAULT_MAX_ABS_MEASURE
from forecast_guidance.domain.services.time_axis import MONTH_INDEXES


@dataclass(frozen=True, slots=True)
class OverrideOutcome:
    """Counts of applied and dropped overrides."""

    matched: int = 0
    dropped: int = 0
    dropped_keys: tuple[str, ...] = ()


def apply_overrides(
    items: MutableMapping[str, ItemAggregate],
    overrides: Iterable[PendingOverride],
    scope: ForecastScope,
    *,
    max_abs: float = DEFAULT_MAX_ABS_MEASURE,
) -> OverrideOutcome:
    """Apply ``overrides`` to ``items`` in place.

    Later overrides for the same key win.
    """
    matched = 0
    dropped: list[str] = []
    for override in overrides:
        key = override.item_key(scope)
        item = items.get(key)
        if item is None:
            dropped.append(key)
            continue
        _apply(item, override, max_abs=max_abs)
        matched += 1
    return OverrideOutcome(matched=matched, dropped=len(dropped), dropped_keys=tuple(dropped))


def _override_month(override: PendingOverride, idx: int) -> OverrideMonth:
    if idx < len(override.months):
        return override.months[idx]
    return OverrideMonth(value=0.0)


def _apply(item: ItemAggregate, override: PendingOverride, *, max_abs: float) -> None:
    months: list[MonthlyValue] = []
    lc_months: list[float] = []
    for idx in MONTH_INDEXES:
        entry = _override_month(override, idx)
        value = sanitize(entry.value, max_abs=max_abs)
        flag = entry.is_manually_modified
        months.append(
            MonthlyValue(
                value=value,
                is_actual=idx <= item.last_actual_month_index,
                is_manually_modified=override.is_manual_edit if flag is None else flag,
            )
        )
        lc_months.append(value)

    item.months = months
    item.lc_months = lc_months
    if override.forecast_type:
        item.forecast_logic = override.forecast_type
    if override.comment:
        item.commentary = override.comment


__all__ = ["OverrideOutcome", "apply_overrides"]
