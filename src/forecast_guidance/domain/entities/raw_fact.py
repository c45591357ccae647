# src/forecast_guidance/domain/entities/raw_fact.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Raw forecast fact entities.

Purpose:
    Immutable line-item observations produced by the upstream feed: one
    (market or customer, product variant, month) record carrying TY, PY and
    LC volume plus TY/PY gross sales value.

Layer:
    domain/entities

Notes:
    - Construction never validates or raises. Malformed measures are
      sanitized by the aggregator, invalid months are skipped there.
    - Item keys are shared with pending overrides so that an override
      retargets exactly one aggregated line item.
"""

from __future__ import annotations

from dataclasses import dataclass

from forecast_guidance.domain.enums.forecast import ForecastScope

ACTUAL_MARKER = "actual"


def build_item_key(
    scope: ForecastScope,
    *,
    market_id: str | None,
    customer_id: str | None,
    product: str | None,
) -> str:
    """Return the line-item key for a market or customer scoped record.

    Market view:   ``forecast:<market_id>:<product>``
    Customer view: ``forecast:<customer_id>:<product>:<customer_id>``
    """
    if scope is ForecastScope.CUSTOMER:
        return f"forecast:{customer_id}:{product}:{customer_id}"
    return f"forecast:{market_id}:{product}"


@dataclass(frozen=True, slots=True)
class Tag:
    """Free-form label attached to a line item."""

    tag_id: int
    tag_name: str


@dataclass(frozen=True, slots=True)
class RawFact:
    """One monthly observation for a market/customer and product variant.

    Attributes:
        market_id: Market identifier.
        month: 1-based calendar month (values outside 1..12 are ignored).
        data_type: Source tag; any value containing ``"actual"`` marks an actual.
        customer_id: Customer identifier for customer-managed markets.
        brand: Brand name (roll-up parent of the variant).
        variant: Variant name.
        variant_id: Variant identifier, preferred over the name for roll-up keys.
        variant_size_pack_id: Product identifier.
        variant_size_pack_desc: Product description, part of the item key.
        case_equivalent_volume: TY volume.
        py_case_equivalent_volume: PY volume.
        prev_published_case_equivalent_volume: LC (last consensus) volume.
        gross_sales_value: TY monetary value.
        py_gross_sales_value: PY monetary value.
        projected_case_equivalent_volume: Projection for the current month.
        is_manual_input: Whether the TY volume was entered by hand.
        current_version: Saved versions (1) take precedence over drafts (0).
        gsv_rate: Historical GSV rate used to value LC volume.
    """

    market_id: str
    month: int
    data_type: str = ""
    customer_id: str | None = None
    market_name: str | None = None
    market_area_name: str | None = None
    customer_name: str | None = None
    brand: str | None = None
    variant: str | None = None
    variant_id: str | None = None
    variant_size_pack_id: str | None = None
    variant_size_pack_desc: str | None = None
    case_equivalent_volume: float | None = 0.0
    py_case_equivalent_volume: float | None = 0.0
    prev_published_case_equivalent_volume: float | None = 0.0
    gross_sales_value: float | None = 0.0
    py_gross_sales_value: float | None = 0.0
    projected_case_equivalent_volume: float | None = None
    is_manual_input: bool = False
    current_version: int = 0
    gsv_rate: float | None = None
    forecast_method: str | None = None
    forecast_status: str | None = None
    forecast_generation_month_date: str | None = None
    comment: str | None = None
    tags: tuple[Tag, ...] = ()

    @property
    def is_actual(self) -> bool:
        """Whether the source flagged this observation as actual data."""
        return ACTUAL_MARKER in (self.data_type or "").lower()

    def item_key(self, scope: ForecastScope) -> str:
        """Return the key of the line item this fact belongs to."""
        return build_item_key(
            scope,
            market_id=self.market_id,
            customer_id=self.customer_id,
            product=self.variant_size_pack_desc,
        )


@dataclass(frozen=True, slots=True)
class MarketProfile:
    """Market metadata used to choose between market and customer facts.

    Attributes:
        market_id: Market identifier.
        managed_by: ``"Market"`` or ``"Customer"``.
        customer_ids: Customers belonging to this market.
        market_name: Display name.
    """

    market_id: str
    managed_by: str
    customer_ids: tuple[str, ...] = ()
    market_name: str | None = None


__all__ = ["ACTUAL_MARKER", "Tag", "RawFact", "MarketProfile", "build_item_key"]
