# src/forecast_guidance/domain/exceptions/guidance.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Guidance context exceptions.

Purpose:
    Errors raised when a guidance context refuses a request, such as an
    unknown definition id or an attempt to delete the built-in trends
    definition.

Layer:
    domain

Notes:
    - The aggregation and evaluation engine never raises these. They are
      raised only by guidance context state transitions.
"""

from __future__ import annotations

from forecast_guidance.domain.exceptions.base import DomainError


class GuidanceContextError(DomainError):
    """Base class for guidance context errors."""

    code = "GUIDANCE_CONTEXT_ERROR"


class GuidanceDefinitionNotFound(GuidanceContextError):
    """Raised when a definition id is unknown within its context."""

    code = "GUIDANCE_DEFINITION_NOT_FOUND"
    http_status = 404


class GuidanceDefinitionNotDeletable(GuidanceContextError):
    """Raised when deleting the built-in trends definition."""

    code = "GUIDANCE_DEFINITION_NOT_DELETABLE"
    http_status = 409


class InvalidGuidanceSelection(GuidanceContextError):
    """Raised when a selection references a definition it may not contain."""

    code = "INVALID_GUIDANCE_SELECTION"
    http_status = 422


__all__ = [
    "GuidanceContextError",
    "GuidanceDefinitionNotFound",
    "GuidanceDefinitionNotDeletable",
    "InvalidGuidanceSelection",
]
