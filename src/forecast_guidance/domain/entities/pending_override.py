# src/forecast_guidance/domain/entities/pending_override.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Pending manual override entity.

A pending override carries a full 12-month replacement series for one line
item, keyed exactly like the item, plus the planner's comment and optionally
the forecast method the series was produced with.
"""

from __future__ import annotations

from dataclasses import dataclass

from forecast_guidance.domain.entities.raw_fact import build_item_key
from forecast_guidance.domain.enums.forecast import ForecastScope


@dataclass(frozen=True, slots=True)
class OverrideMonth:
    """Replacement value for one month.

    ``is_manually_modified`` of ``None`` defers to the override-level flag.
    """

    value: float
    is_manually_modified: bool | None = None


@dataclass(frozen=True, slots=True)
class PendingOverride:
    """User-submitted replacement for an item's TY/LC monthly volume.

    Attributes:
        market_id: Market identifier (market view key).
        customer_id: Customer identifier (customer view key).
        variant_size_pack_desc: Product description, part of the key.
        months: Replacement months in calendar order; missing months are zero.
        comment: Free-text planner comment.
        forecast_type: Forecast method that produced the series.
        is_manual_edit: Default manual flag for months without their own flag.
    """

    variant_size_pack_desc: str
    months: tuple[OverrideMonth, ...]
    market_id: str | None = None
    customer_id: str | None = None
    comment: str | None = None
    forecast_type: str | None = None
    is_manual_edit: bool = True

    def item_key(self, scope: ForecastScope) -> str:
        """Return the key of the line item this override retargets."""
        return build_item_key(
            scope,
            market_id=self.market_id,
            customer_id=self.customer_id,
            product=self.variant_size_pack_desc,
        )


__all__ = ["OverrideMonth", "PendingOverride"]
