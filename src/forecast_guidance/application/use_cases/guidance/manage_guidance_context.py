# src/forecast_guidance/application/use_cases/guidance/manage_guidance_context.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Use case: read and mutate guidance contexts.

Purpose:
    Thin application wrapper around :class:`GuidanceContext` transitions,
    applied atomically through the context repository and logged.

Layer:
    application/use_cases
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from forecast_guidance.application.interfaces.guidance_context_repository import (
    GuidanceContextRepository,
)
from forecast_guidance.domain.entities.guidance_context import GuidanceContext
from forecast_guidance.domain.entities.guidance_definition import GuidanceDefinition
from forecast_guidance.domain.enums.guidance import GuidanceContextId

logger = logging.getLogger(__name__)


class ManageGuidanceContextUseCase:
    """Read, add, replace, remove and select guidance definitions.

    Args:
        contexts: Guidance context repository.
    """

    def __init__(self, contexts: GuidanceContextRepository) -> None:
        self._contexts = contexts

    def get(self, context_id: GuidanceContextId) -> GuidanceContext:
        return self._contexts.get(context_id)

    def get_definition(
        self, context_id: GuidanceContextId, definition_id: int
    ) -> GuidanceDefinition:
        return self._contexts.get(context_id).get(definition_id)

    def add(
        self, context_id: GuidanceContextId, definition: GuidanceDefinition
    ) -> GuidanceContext:
        """Add a definition under the context's next id."""
        context = self._contexts.update(context_id, lambda ctx: ctx.add(definition))
        logger.info(
            "guidance_definition_added",
            extra={"extra": {"context": context_id.value, "id": context.definitions[-1].id}},
        )
        return context

    def upsert(
        self, context_id: GuidanceContextId, definition: GuidanceDefinition
    ) -> GuidanceContext:
        context = self._contexts.update(context_id, lambda ctx: ctx.upsert(definition))
        logger.info(
            "guidance_definition_saved",
            extra={"extra": {"context": context_id.value, "id": definition.id}},
        )
        return context

    def remove(self, context_id: GuidanceContextId, definition_id: int) -> GuidanceContext:
        context = self._contexts.update(context_id, lambda ctx: ctx.remove(definition_id))
        logger.info(
            "guidance_definition_removed",
            extra={"extra": {"context": context_id.value, "id": definition_id}},
        )
        return context

    def load(
        self, context_id: GuidanceContextId, definitions: Sequence[GuidanceDefinition]
    ) -> GuidanceContext:
        """Replace the context's definitions wholesale."""
        context = self._contexts.update(context_id, lambda ctx: ctx.load(definitions))
        logger.info(
            "guidance_definitions_loaded",
            extra={"extra": {"context": context_id.value, "count": len(context.definitions)}},
        )
        return context

    def select(
        self, context_id: GuidanceContextId, columns: Sequence[int], rows: Sequence[int]
    ) -> GuidanceContext:
        context = self._contexts.update(context_id, lambda ctx: ctx.select(columns, rows))
        logger.info(
            "guidance_selection_saved",
            extra={
                "extra": {
                    "context": context_id.value,
                    "columns": list(context.columns),
                    "rows": list(context.rows),
                }
            },
        )
        return context
