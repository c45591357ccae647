# src/forecast_guidance/adapters/routers/forecast_router.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Forecast Router (v1).

Synopsis:
    HTTP surface for the aggregation and guidance pipeline. Every call
    recomputes from the posted facts; nothing is persisted.

Endpoints (all under /v1/forecast):
    - POST /v1/forecast/items
        -> SuccessEnvelope with aggregated line items and per-item guidance.
    - POST /v1/forecast/summary
        -> SuccessEnvelope with variants, brands, total and their guidance.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request, Response, status

from forecast_guidance.adapters.mappers.forecast_mapper import (
    to_market_profile,
    to_pending_overrides,
    to_raw_facts,
)
from forecast_guidance.adapters.mappers.guidance_mapper import to_domain_definitions
from forecast_guidance.adapters.presenters.forecast_presenter import ForecastPresenter
from forecast_guidance.adapters.routers.base_router import BaseRouter, request_trace_id
from forecast_guidance.adapters.schemas.http.envelopes import SuccessEnvelope
from forecast_guidance.adapters.schemas.http.forecast import (
    ForecastItemsHTTP,
    ForecastItemsRequest,
    ForecastSummaryHTTP,
    ForecastSummaryRequest,
)
from forecast_guidance.application.use_cases.forecast.get_forecast_items import (
    GetForecastItemsRequest,
    GetForecastItemsUseCase,
)
from forecast_guidance.application.use_cases.forecast.get_forecast_summary import (
    GetForecastSummaryRequest,
    GetForecastSummaryUseCase,
)
from forecast_guidance.dependencies.guidance import (
    get_forecast_items_use_case,
    get_forecast_summary_use_case,
)
from forecast_guidance.domain.enums.forecast import ForecastScope
from forecast_guidance.domain.enums.guidance import GuidanceContextId
from forecast_guidance.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

router = BaseRouter(version="v1", resource="forecast", tags=["Forecast"])
presenter = ForecastPresenter()


@router.post(
    "/items",
    response_model=SuccessEnvelope[ForecastItemsHTTP],
    status_code=status.HTTP_200_OK,
    responses=BaseRouter.std_error_responses(),
    summary="Aggregate forecast line items",
    description=(
        "Aggregate raw facts into line items for the market or customer view, "
        "apply pending overrides and evaluate guidance for every item. When "
        "`guidance` is omitted the selection of `context` is evaluated."
    ),
)
def post_forecast_items(
    request: Request,
    response: Response,
    body: ForecastItemsRequest,
    use_case: Annotated[GetForecastItemsUseCase, Depends(get_forecast_items_use_case)],
) -> Any:
    trace_id = request_trace_id(request)
    logger.info(
        "forecast.api.items.start",
        extra={
            "extra": {
                "trace_id": trace_id,
                "facts": len(body.facts),
                "overrides": len(body.overrides),
                "scope": body.scope,
            }
        },
    )

    result = use_case.execute(
        GetForecastItemsRequest(
            facts=to_raw_facts(body.facts),
            scope=ForecastScope(body.scope),
            overrides=to_pending_overrides(body.overrides),
            context=GuidanceContextId(body.context),
            definitions=(
                to_domain_definitions(body.guidance) if body.guidance is not None else None
            ),
            monthly_ids=frozenset(body.monthly_guidance_ids),
        )
    )

    logger.info(
        "forecast.api.items.success",
        extra={
            "extra": {
                "trace_id": trace_id,
                "items": len(result.items),
                "definitions": len(result.definitions),
            }
        },
    )
    return BaseRouter.send_success(response, presenter.present_items(result, trace_id=trace_id))


@router.post(
    "/summary",
    response_model=SuccessEnvelope[ForecastSummaryHTTP],
    status_code=status.HTTP_200_OK,
    responses=BaseRouter.std_error_responses(),
    summary="Roll up the forecast summary",
    description=(
        "Choose market or customer facts per market, aggregate, apply "
        "overrides, roll up into variants, brands and a portfolio total and "
        "evaluate guidance at every level."
    ),
)
def post_forecast_summary(
    request: Request,
    response: Response,
    body: ForecastSummaryRequest,
    use_case: Annotated[GetForecastSummaryUseCase, Depends(get_forecast_summary_use_case)],
) -> Any:
    trace_id = request_trace_id(request)
    logger.info(
        "forecast.api.summary.start",
        extra={
            "extra": {
                "trace_id": trace_id,
                "markets": len(body.markets),
                "market_facts": len(body.market_facts),
                "customer_facts": len(body.customer_facts),
            }
        },
    )

    result = use_case.execute(
        GetForecastSummaryRequest(
            markets=[to_market_profile(m) for m in body.markets],
            market_facts=to_raw_facts(body.market_facts),
            customer_facts=to_raw_facts(body.customer_facts),
            overrides=to_pending_overrides(body.overrides),
            context=GuidanceContextId(body.context),
            definitions=(
                to_domain_definitions(body.guidance) if body.guidance is not None else None
            ),
            monthly_ids=frozenset(body.monthly_guidance_ids),
        )
    )

    logger.info(
        "forecast.api.summary.success",
        extra={
            "extra": {
                "trace_id": trace_id,
                "variants": len(result.report.rollup.variants),
                "brands": len(result.report.rollup.brands),
            }
        },
    )
    return BaseRouter.send_success(response, presenter.present_summary(result, trace_id=trace_id))
