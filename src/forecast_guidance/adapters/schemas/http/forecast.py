# src/forecast_guidance/adapters/schemas/http/forecast.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""HTTP Schemas: Forecast items and summary.

Synopsis:
    Request contracts carrying raw facts, pending overrides and market
    profiles, and response contracts for aggregated items and the rolled-up
    summary. Months are 1-based on the wire.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from pydantic import Field

from forecast_guidance.adapters.schemas.http.base import BaseHTTPSchema
from forecast_guidance.adapters.schemas.http.guidance import (
    GuidanceDefinitionHTTP,
    GuidanceResultHTTP,
)
from forecast_guidance.domain.enums.forecast import ForecastScope
from forecast_guidance.domain.enums.guidance import GuidanceContextId

# --------------------------------------------------------------------------- #
# Requests                                                                    #
# --------------------------------------------------------------------------- #


class TagHTTP(BaseHTTPSchema):
    tag_id: int
    tag_name: str


class RawFactHTTP(BaseHTTPSchema):
    """One monthly observation as delivered by the upstream feed.

    Measures may be null; malformed values are sanitized to zero by the
    engine rather than rejected here.
    """

    market_id: str = Field(..., examples=["USANY1"])
    month: int = Field(..., description="1-based month; others are ignored.", examples=[3])
    data_type: str = Field(default="", examples=["actual_complete", "forecast"])
    customer_id: str | None = None
    market_name: str | None = None
    market_area_name: str | None = None
    customer_name: str | None = None
    brand: str | None = Field(default=None, examples=["Balvenie"])
    variant: str | None = Field(default=None, examples=["12YO DoubleWood"])
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
    tags: list[TagHTTP] = Field(default_factory=list)


class OverrideMonthHTTP(BaseHTTPSchema):
    value: float = 0.0
    is_manually_modified: bool | None = None


class PendingOverrideHTTP(BaseHTTPSchema):
    """Pending replacement of one item's TY/LC monthly volume."""

    variant_size_pack_desc: str
    months: list[OverrideMonthHTTP] = Field(..., max_length=12)
    market_id: str | None = None
    customer_id: str | None = None
    comment: str | None = None
    forecast_type: str | None = None
    is_manual_edit: bool = True


class MarketProfileHTTP(BaseHTTPSchema):
    market_id: str
    managed_by: str = Field(..., examples=["Market", "Customer"])
    customer_ids: list[str] = Field(default_factory=list)
    market_name: str | None = None


class ForecastItemsRequest(BaseHTTPSchema):
    """Items view request.

    When ``guidance`` is given it replaces the context selection, and
    ``monthly_guidance_ids`` lists the definitions broken down by month.
    """

    facts: list[RawFactHTTP] = Field(default_factory=list)
    scope: ForecastScope = ForecastScope.MARKET
    overrides: list[PendingOverrideHTTP] = Field(default_factory=list)
    context: GuidanceContextId = GuidanceContextId.DEPLETION
    guidance: list[GuidanceDefinitionHTTP] | None = None
    monthly_guidance_ids: list[int] = Field(default_factory=list)


class ForecastSummaryRequest(BaseHTTPSchema):
    """Summary view request."""

    markets: list[MarketProfileHTTP] = Field(default_factory=list)
    market_facts: list[RawFactHTTP] = Field(default_factory=list)
    customer_facts: list[RawFactHTTP] = Field(default_factory=list)
    overrides: list[PendingOverrideHTTP] = Field(default_factory=list)
    context: GuidanceContextId = GuidanceContextId.SUMMARY
    guidance: list[GuidanceDefinitionHTTP] | None = None
    monthly_guidance_ids: list[int] = Field(default_factory=list)


# --------------------------------------------------------------------------- #
# Responses                                                                   #
# --------------------------------------------------------------------------- #


class MonthlyValueHTTP(BaseHTTPSchema):
    month: int
    value: float
    is_actual: bool
    is_manually_modified: bool


class AggregateMeasuresHTTP(BaseHTTPSchema):
    """Measure set shared by items, variants, brands and the total."""

    key: str
    months: list[MonthlyValueHTTP]
    py_months: list[float]
    lc_months: list[float]
    lc_gsv_months: list[float]
    case_equivalent_volume: float
    py_case_equivalent_volume: float
    prev_published_case_equivalent_volume: float
    gross_sales_value: float
    py_gross_sales_value: float
    lc_gross_sales_value: float
    gsv_rate: float
    py_gsv_rate: float
    cy_3m_case_equivalent_volume: float
    cy_6m_case_equivalent_volume: float
    cy_12m_case_equivalent_volume: float
    py_3m_case_equivalent_volume: float
    py_6m_case_equivalent_volume: float
    py_12m_case_equivalent_volume: float
    last_actual_month_index: int
    guidance: dict[int, GuidanceResultHTTP] = Field(default_factory=dict)


class ForecastItemHTTP(AggregateMeasuresHTTP):
    scope: ForecastScope
    market_id: str
    market_name: str | None = None
    market_area_name: str | None = None
    customer_id: str | None = None
    customer_name: str | None = None
    brand: str | None = None
    variant: str | None = None
    variant_id: str | None = None
    variant_size_pack_id: str | None = None
    variant_size_pack_desc: str | None = None
    forecast_logic: str
    forecast_status: str
    forecast_generation_month_date: str | None = None
    commentary: str | None = None
    tags: list[TagHTTP] = Field(default_factory=list)


class VariantHTTP(AggregateMeasuresHTTP):
    brand: str
    variant: str
    variant_id: str | None = None


class BrandHTTP(AggregateMeasuresHTTP):
    brand: str


class OverrideStatsHTTP(BaseHTTPSchema):
    """Override bookkeeping: applied and dropped (unmatched) counts."""

    matched: int
    dropped: int
    dropped_keys: list[str] = Field(default_factory=list)


class ForecastItemsHTTP(BaseHTTPSchema):
    items: list[ForecastItemHTTP]
    definitions: list[GuidanceDefinitionHTTP]
    overrides: OverrideStatsHTTP


class ForecastSummaryHTTP(BaseHTTPSchema):
    """Rolled-up summary: visible variants, every brand and the total."""

    variants: list[VariantHTTP]
    brands: list[BrandHTTP]
    total: AggregateMeasuresHTTP
    definitions: list[GuidanceDefinitionHTTP]
    overrides: OverrideStatsHTTP
    last_actual_month_index: int
    hidden_variant_keys: list[str] = Field(default_factory=list)
    skipped_item_keys: list[str] = Field(default_factory=list)
    ignored_facts: int = 0


__all__ = [
    "AggregateMeasuresHTTP",
    "BrandHTTP",
    "ForecastItemHTTP",
    "ForecastItemsHTTP",
    "ForecastItemsRequest",
    "ForecastSummaryHTTP",
    "ForecastSummaryRequest",
    "MarketProfileHTTP",
    "MonthlyValueHTTP",
    "OverrideMonthHTTP",
    "OverrideStatsHTTP",
    "PendingOverrideHTTP",
    "RawFactHTTP",
    "TagHTTP",
    "VariantHTTP",
]
