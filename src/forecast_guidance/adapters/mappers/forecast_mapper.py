# src/forecast_guidance/adapters/mappers/forecast_mapper.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Forecast input mapper (wire -> domain).

Maps request payloads onto immutable domain entities. No numeric cleaning
happens here; the aggregator sanitizes measures.
"""

from __future__ import annotations

from collections.abc import Iterable

from forecast_guidance.adapters.schemas.http.forecast import (
    MarketProfileHTTP,
    PendingOverrideHTTP,
    RawFactHTTP,
)
from forecast_guidance.domain.entities.pending_override import OverrideMonth, PendingOverride
from forecast_guidance.domain.entities.raw_fact import MarketProfile, RawFact, Tag


def to_raw_fact(payload: RawFactHTTP) -> RawFact:
    return RawFact(
        market_id=payload.market_id,
        month=payload.month,
        data_type=payload.data_type,
        customer_id=payload.customer_id,
        market_name=payload.market_name,
        market_area_name=payload.market_area_name,
        customer_name=payload.customer_name,
        brand=payload.brand,
        variant=payload.variant,
        variant_id=payload.variant_id,
        variant_size_pack_id=payload.variant_size_pack_id,
        variant_size_pack_desc=payload.variant_size_pack_desc,
        case_equivalent_volume=payload.case_equivalent_volume,
        py_case_equivalent_volume=payload.py_case_equivalent_volume,
        prev_published_case_equivalent_volume=payload.prev_published_case_equivalent_volume,
        gross_sales_value=payload.gross_sales_value,
        py_gross_sales_value=payload.py_gross_sales_value,
        projected_case_equivalent_volume=payload.projected_case_equivalent_volume,
        is_manual_input=payload.is_manual_input,
        current_version=payload.current_version,
        gsv_rate=payload.gsv_rate,
        forecast_method=payload.forecast_method,
        forecast_status=payload.forecast_status,
        forecast_generation_month_date=payload.forecast_generation_month_date,
        comment=payload.comment,
        tags=tuple(Tag(tag_id=t.tag_id, tag_name=t.tag_name) for t in payload.tags),
    )


def to_raw_facts(payloads: Iterable[RawFactHTTP]) -> list[RawFact]:
    return [to_raw_fact(p) for p in payloads]


def to_pending_override(payload: PendingOverrideHTTP) -> PendingOverride:
    return PendingOverride(
        variant_size_pack_desc=payload.variant_size_pack_desc,
        months=tuple(
            OverrideMonth(value=m.value, is_manually_modified=m.is_manually_modified)
            for m in payload.months
        ),
        market_id=payload.market_id,
        customer_id=payload.customer_id,
        comment=payload.comment,
        forecast_type=payload.forecast_type,
        is_manual_edit=payload.is_manual_edit,
    )


def to_pending_overrides(payloads: Iterable[PendingOverrideHTTP]) -> list[PendingOverride]:
    return [to_pending_override(p) for p in payloads]


def to_market_profile(payload: MarketProfileHTTP) -> MarketProfile:
    return MarketProfile(
        market_id=payload.market_id,
        managed_by=payload.managed_by,
        customer_ids=tuple(payload.customer_ids),
        market_name=payload.market_name,
    )


__all__ = [
    "to_market_profile",
    "to_pending_override",
    "to_pending_overrides",
    "to_raw_fact",
    "to_raw_facts",
]
