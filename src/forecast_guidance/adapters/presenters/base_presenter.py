# src/forecast_guidance/adapters/presenters/base_presenter.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Shared presenter plumbing.

Presenters wrap view data in :class:`SuccessEnvelope` and compute the
response headers routers copy onto the outgoing response:

* ``ETag``: quoted SHA-256 of the envelope's canonical JSON, so identical
  forecast views always carry the same tag.
* ``X-Request-ID``: the trace id, when the request has one.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from fastapi import Response

from forecast_guidance.adapters.schemas.http.envelopes import SuccessEnvelope

REQUEST_ID_HEADER = "X-Request-ID"

T = TypeVar("T")


def strong_etag(body: Mapping[str, Any]) -> str:
    canonical = json.dumps(body, sort_keys=True, separators=(",", ":"))
    return '"' + hashlib.sha256(canonical.encode("utf-8")).hexdigest() + '"'


@dataclass(slots=True)
class PresentResult(Generic[T]):
    """Envelope plus the headers (and optional status) to send with it."""

    body: T
    headers: Mapping[str, str] = field(default_factory=dict)
    status_code: int | None = None


class BasePresenter:
    def present_success(
        self, *, data: Any, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[Any]]:
        envelope = SuccessEnvelope[Any](data=data)
        headers = {"ETag": strong_etag(envelope.model_dump_http())}
        if trace_id:
            headers[REQUEST_ID_HEADER] = trace_id
        return PresentResult(body=envelope, headers=headers)

    @staticmethod
    def apply_headers(result: PresentResult[Any], response: Response) -> None:
        for name, value in result.headers.items():
            response.headers[name] = value
        if result.status_code is not None:
            response.status_code = result.status_code
