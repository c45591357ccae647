# src/forecast_guidance/adapters/routers/guidance_context_router.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Guidance Context Router (v1).

Synopsis:
    HTTP surface for the in-memory guidance context store. Each of the
    ``depletion``, ``summary`` and ``shipment`` contexts owns its own
    definitions, selection and id counter.

Endpoints (all under /v1/guidance-contexts/{context}):
    - GET    /definitions                  -> full context state.
    - GET    /definitions/{definition_id}  -> one definition.
    - POST   /definitions                  -> add under the next free id.
    - PUT    /definitions                  -> replace all definitions.
    - PUT    /definitions/{definition_id}  -> insert or replace one definition.
    - DELETE /definitions/{definition_id}  -> remove (never the trends bundle).
    - PUT    /selection                    -> replace column and row selection.

Design:
    * Domain errors propagate to the shared DomainError handler, which renders
      the canonical error envelope with the error's status code.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Path, Request, Response, status

from forecast_guidance.adapters.mappers.guidance_mapper import (
    to_domain_definition,
    to_domain_definitions,
)
from forecast_guidance.adapters.presenters.guidance_presenter import GuidancePresenter
from forecast_guidance.adapters.routers.base_router import BaseRouter, request_trace_id
from forecast_guidance.adapters.schemas.http.envelopes import SuccessEnvelope
from forecast_guidance.adapters.schemas.http.guidance import (
    GuidanceContextHTTP,
    GuidanceDefinitionHTTP,
    GuidanceDefinitionsLoadRequest,
    GuidanceSelectionRequest,
)
from forecast_guidance.application.use_cases.guidance.manage_guidance_context import (
    ManageGuidanceContextUseCase,
)
from forecast_guidance.dependencies.guidance import get_manage_guidance_use_case
from forecast_guidance.domain.enums.guidance import GuidanceContextId

router = BaseRouter(version="v1", resource="guidance-contexts", tags=["Guidance"])
presenter = GuidancePresenter()

ContextParam = Annotated[
    GuidanceContextId,
    Path(description="Guidance context.", examples=["depletion"]),
]
DefinitionIdParam = Annotated[int, Path(description="Definition id within the context.")]
UseCase = Annotated[ManageGuidanceContextUseCase, Depends(get_manage_guidance_use_case)]


@router.get(
    "/{context}/definitions",
    response_model=SuccessEnvelope[GuidanceContextHTTP],
    responses=BaseRouter.std_error_responses(),
    summary="Get a guidance context",
)
async def get_context(
    request: Request, response: Response, context: ContextParam, use_case: UseCase
) -> Any:
    result = presenter.present_context(use_case.get(context), trace_id=request_trace_id(request))
    return BaseRouter.send_success(response, result)


@router.get(
    "/{context}/definitions/{definition_id}",
    response_model=SuccessEnvelope[GuidanceDefinitionHTTP],
    responses=BaseRouter.std_error_responses(),
    summary="Get one guidance definition",
)
async def get_definition(
    request: Request,
    response: Response,
    context: ContextParam,
    definition_id: DefinitionIdParam,
    use_case: UseCase,
) -> Any:
    definition = use_case.get_definition(context, definition_id)
    result = presenter.present_definition(definition, trace_id=request_trace_id(request))
    return BaseRouter.send_success(response, result)


@router.post(
    "/{context}/definitions",
    response_model=SuccessEnvelope[GuidanceContextHTTP],
    status_code=status.HTTP_201_CREATED,
    responses=BaseRouter.std_error_responses(),
    summary="Add a guidance definition",
    description="The context assigns the id; any id in the payload is ignored.",
)
async def add_definition(
    request: Request,
    response: Response,
    context: ContextParam,
    body: GuidanceDefinitionHTTP,
    use_case: UseCase,
) -> Any:
    updated = use_case.add(context, to_domain_definition(body))
    result = presenter.present_context(updated, trace_id=request_trace_id(request))
    return BaseRouter.send_success(response, result)


@router.put(
    "/{context}/definitions",
    response_model=SuccessEnvelope[GuidanceContextHTTP],
    responses=BaseRouter.std_error_responses(),
    summary="Replace all guidance definitions",
    description="The trends definition is restored when the new set lacks it.",
)
async def load_definitions(
    request: Request,
    response: Response,
    context: ContextParam,
    body: GuidanceDefinitionsLoadRequest,
    use_case: UseCase,
) -> Any:
    updated = use_case.load(context, to_domain_definitions(body.definitions))
    result = presenter.present_context(updated, trace_id=request_trace_id(request))
    return BaseRouter.send_success(response, result)


@router.put(
    "/{context}/definitions/{definition_id}",
    response_model=SuccessEnvelope[GuidanceContextHTTP],
    responses=BaseRouter.std_error_responses(),
    summary="Insert or replace a guidance definition",
)
async def upsert_definition(
    request: Request,
    response: Response,
    context: ContextParam,
    definition_id: DefinitionIdParam,
    body: GuidanceDefinitionHTTP,
    use_case: UseCase,
) -> Any:
    updated = use_case.upsert(context, to_domain_definition(body, definition_id=definition_id))
    result = presenter.present_context(updated, trace_id=request_trace_id(request))
    return BaseRouter.send_success(response, result)


@router.delete(
    "/{context}/definitions/{definition_id}",
    response_model=SuccessEnvelope[GuidanceContextHTTP],
    responses=BaseRouter.std_error_responses(),
    summary="Remove a guidance definition",
)
async def remove_definition(
    request: Request,
    response: Response,
    context: ContextParam,
    definition_id: DefinitionIdParam,
    use_case: UseCase,
) -> Any:
    updated = use_case.remove(context, definition_id)
    result = presenter.present_context(updated, trace_id=request_trace_id(request))
    return BaseRouter.send_success(response, result)


@router.put(
    "/{context}/selection",
    response_model=SuccessEnvelope[GuidanceContextHTTP],
    responses=BaseRouter.std_error_responses(),
    summary="Select column and row guidance",
    description="Rows must be full-year, non-trend definitions.",
)
async def select_guidance(
    request: Request,
    response: Response,
    context: ContextParam,
    body: GuidanceSelectionRequest,
    use_case: UseCase,
) -> Any:
    updated = use_case.select(context, body.columns, body.rows)
    result = presenter.present_context(updated, trace_id=request_trace_id(request))
    return BaseRouter.send_success(response, result)
