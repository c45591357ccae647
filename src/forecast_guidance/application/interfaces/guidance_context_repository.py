# src/forecast_guidance/application/interfaces/guidance_context_repository.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Application Interface: Guidance Context Repository.

Synopsis:
    Storage for the three independent guidance contexts. Implementations
    must apply each update atomically per context and must never let one
    context's update touch another.

Layer:
    application/interfaces
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from forecast_guidance.domain.entities.guidance_context import GuidanceContext
from forecast_guidance.domain.enums.guidance import GuidanceContextId


class GuidanceContextRepository(Protocol):
    """Keyed storage of immutable guidance contexts."""

    def get(self, context_id: GuidanceContextId) -> GuidanceContext:
        """Return the current state of a context.

        Args:
            context_id: Context to read.

        Returns:
            The context; a freshly initialized one if it was never written.
        """

    def update(
        self,
        context_id: GuidanceContextId,
        transition: Callable[[GuidanceContext], GuidanceContext],
    ) -> GuidanceContext:
        """Apply ``transition`` to a context and store the result.

        Exceptions raised by ``transition`` propagate and leave the stored
        context unchanged.

        Returns:
            The stored new context.
        """
