# src/forecast_guidance/adapters/presenters/forecast_presenter.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Forecast HTTP presenter.

Purpose:
    Convert item, variant, brand and portfolio aggregates plus their guidance
    results into HTTP schemas wrapped in the canonical success envelope.

Layer:
    adapters/presenters

Notes:
    - Months are rendered 1-based.
    - Aggregates without a derived LC monetary series render zeros.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from forecast_guidance.adapters.mappers.guidance_mapper import (
    to_http_definition,
    to_http_result,
)
from forecast_guidance.adapters.presenters.base_presenter import BasePresenter, PresentResult
from forecast_guidance.adapters.schemas.http.envelopes import SuccessEnvelope
from forecast_guidance.adapters.schemas.http.forecast import (
    AggregateMeasuresHTTP,
    BrandHTTP,
    ForecastItemHTTP,
    ForecastItemsHTTP,
    ForecastSummaryHTTP,
    MonthlyValueHTTP,
    OverrideStatsHTTP,
    TagHTTP,
    VariantHTTP,
)
from forecast_guidance.application.services.guidance_engine import (
    brand_report_key,
    variant_report_key,
)
from forecast_guidance.application.use_cases.forecast.get_forecast_items import (
    ForecastItemsResult,
)
from forecast_guidance.application.use_cases.forecast.get_forecast_summary import (
    ForecastSummaryResult,
)
from forecast_guidance.domain.entities.aggregates import PORTFOLIO_KEY, ForecastAggregate
from forecast_guidance.domain.entities.guidance_definition import GuidanceResult
from forecast_guidance.domain.services.override_layer import OverrideOutcome
from forecast_guidance.domain.services.time_axis import zero_series


def _measures(
    aggregate: ForecastAggregate, guidance: Mapping[int, GuidanceResult] | None
) -> dict[str, Any]:
    """Return the shared measure fields of an aggregate as schema kwargs."""
    trends = aggregate.trends
    return {
        "months": [
            MonthlyValueHTTP(
                month=idx + 1,
                value=month.value,
                is_actual=month.is_actual,
                is_manually_modified=month.is_manually_modified,
            )
            for idx, month in enumerate(aggregate.months)
        ],
        "py_months": list(aggregate.py_months),
        "lc_months": list(aggregate.lc_months),
        "lc_gsv_months": list(aggregate.lc_gsv_months or zero_series()),
        "case_equivalent_volume": aggregate.case_equivalent_volume,
        "py_case_equivalent_volume": aggregate.py_case_equivalent_volume,
        "prev_published_case_equivalent_volume": (
            aggregate.prev_published_case_equivalent_volume
        ),
        "gross_sales_value": aggregate.gross_sales_value,
        "py_gross_sales_value": aggregate.py_gross_sales_value,
        "lc_gross_sales_value": aggregate.lc_gross_sales_value,
        "gsv_rate": aggregate.gsv_rate,
        "py_gsv_rate": aggregate.py_gsv_rate,
        "cy_3m_case_equivalent_volume": trends.cy_3m,
        "cy_6m_case_equivalent_volume": trends.cy_6m,
        "cy_12m_case_equivalent_volume": trends.cy_12m,
        "py_3m_case_equivalent_volume": trends.py_3m,
        "py_6m_case_equivalent_volume": trends.py_6m,
        "py_12m_case_equivalent_volume": trends.py_12m,
        "last_actual_month_index": aggregate.last_actual_month_index,
        "guidance": {
            definition_id: to_http_result(result)
            for definition_id, result in (guidance or {}).items()
        },
    }


def _override_stats(outcome: OverrideOutcome) -> OverrideStatsHTTP:
    return OverrideStatsHTTP(
        matched=outcome.matched,
        dropped=outcome.dropped,
        dropped_keys=list(outcome.dropped_keys),
    )


class ForecastPresenter(BasePresenter):
    """Shape the items and summary views into success envelopes."""

    def present_items(
        self, result: ForecastItemsResult, *, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[Any]]:
        items = [
            ForecastItemHTTP(
                key=item.key,
                scope=item.scope,
                market_id=item.market_id,
                market_name=item.market_name,
                market_area_name=item.market_area_name,
                customer_id=item.customer_id,
                customer_name=item.customer_name,
                brand=item.brand,
                variant=item.variant,
                variant_id=item.variant_id,
                variant_size_pack_id=item.variant_size_pack_id,
                variant_size_pack_desc=item.variant_size_pack_desc,
                forecast_logic=item.forecast_logic,
                forecast_status=item.forecast_status,
                forecast_generation_month_date=item.forecast_generation_month_date,
                commentary=item.commentary,
                tags=[TagHTTP(tag_id=t.tag_id, tag_name=t.tag_name) for t in item.tags],
                **_measures(item, result.guidance.get(item.key)),
            )
            for item in result.items
        ]
        data = ForecastItemsHTTP(
            items=items,
            definitions=[to_http_definition(d) for d in result.definitions],
            overrides=_override_stats(result.overrides),
        )
        return self.present_success(data=data, trace_id=trace_id)

    def present_summary(
        self, result: ForecastSummaryResult, *, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[Any]]:
        report = result.report
        rollup = report.rollup
        variants = [
            VariantHTTP(
                key=variant.key,
                brand=variant.brand,
                variant=variant.variant,
                variant_id=variant.variant_id,
                **_measures(variant, report.guidance.get(variant_report_key(variant.key))),
            )
            for variant in rollup.variants
        ]
        brands = [
            BrandHTTP(
                key=brand.key,
                brand=brand.brand,
                **_measures(brand, report.guidance.get(brand_report_key(brand.brand))),
            )
            for brand in rollup.brands.values()
        ]
        total = AggregateMeasuresHTTP(
            key=rollup.total.key,
            **_measures(rollup.total, report.guidance.get(PORTFOLIO_KEY)),
        )
        data = ForecastSummaryHTTP(
            variants=variants,
            brands=brands,
            total=total,
            definitions=[to_http_definition(d) for d in result.definitions],
            overrides=_override_stats(report.overrides),
            last_actual_month_index=rollup.last_actual_month_index,
            hidden_variant_keys=list(rollup.hidden_variant_keys),
            skipped_item_keys=list(rollup.skipped_item_keys),
            ignored_facts=report.ignored_facts,
        )
        return self.present_success(data=data, trace_id=trace_id)
