# src/forecast_guidance/domain/exceptions/base.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Root of the service's exception hierarchy."""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Error with a stable ``code`` and a client-safe ``message``.

    ``http_status`` is only read by the HTTP error handlers; ``details`` is a
    JSON-safe payload echoed in the error envelope.
    """

    code: str = "DOMAIN_ERROR"
    http_status: int = 400

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        return self.message or self.code
