# src/forecast_guidance/adapters/schemas/http/base.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Pydantic base model for request and response bodies."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class BaseHTTPSchema(BaseModel):
    """Strict wire model.

    Unknown keys are rejected, fields accept either their snake_case name or
    their camelCase alias, and non-finite floats are written as ``null``.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        ser_json_inf_nan="null",
    )

    def model_dump_http(self, **kwargs: Any) -> dict[str, Any]:
        """JSON-mode dump using aliases, as sent on the wire."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)
