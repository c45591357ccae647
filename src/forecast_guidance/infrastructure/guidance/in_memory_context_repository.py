# src/forecast_guidance/infrastructure/guidance/in_memory_context_repository.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""In-process guidance context store.

Contexts are immutable values; the store only swaps references under a lock,
so readers always see a complete context.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from forecast_guidance.domain.entities.guidance_context import GuidanceContext
from forecast_guidance.domain.enums.guidance import GuidanceContextId


class InMemoryGuidanceContextRepository:
    """Thread-safe in-memory implementation of the context repository."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._contexts: dict[GuidanceContextId, GuidanceContext] = {
            context_id: GuidanceContext.initial(context_id) for context_id in GuidanceContextId
        }

    def get(self, context_id: GuidanceContextId) -> GuidanceContext:
        with self._lock:
            return self._contexts[context_id]

    def update(
        self,
        context_id: GuidanceContextId,
        transition: Callable[[GuidanceContext], GuidanceContext],
    ) -> GuidanceContext:
        with self._lock:
            updated = transition(self._contexts[context_id])
            self._contexts[context_id] = updated
            return updated

    def reset(self) -> None:
        """Restore every context to its initial state."""
        with self._lock:
            self._contexts = {
                context_id: GuidanceContext.initial(context_id)
                for context_id in GuidanceContextId
            }


__all__ = ["InMemoryGuidanceContextRepository"]
