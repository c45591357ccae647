# src/forecast_guidance/domain/services/numeric.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Numeric helpers for the guidance engine.

Purpose:
    Sanitization, zero-safe division and deterministic rounding shared by
    every aggregation level. None of these helpers raise: corrupt input
    degrades to ``0.0`` and a zero denominator yields ``0.0``.

Layer:
    domain/services
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from forecast_guidance.domain.services.options import DEFAULT_MAX_ABS_MEASURE


def sanitize(value: Any, *, max_abs: float = DEFAULT_MAX_ABS_MEASURE) -> float:
    """Coerce a raw measure into a finite float.

    ``None``, booleans, unparsable strings, ``NaN``, ``±inf`` and magnitudes
    above ``max_abs`` all resolve to ``0.0``.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or abs(number) > max_abs:
        return 0.0
    return number


def safe_divide(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator`` or ``0.0`` for a zero denominator."""
    if denominator == 0:
        return 0.0
    result = numerator / denominator
    return result if math.isfinite(result) else 0.0


def round_to(value: float, places: int) -> float:
    """Round half away from zero to ``places`` decimals.

    Rounding goes through the shortest decimal representation of ``value`` so
    that ``round_to(round_to(x, p), p) == round_to(x, p)`` holds exactly.
    """
    if not math.isfinite(value):
        return 0.0
    quantum = Decimal(1).scaleb(-places)
    try:
        rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return value
    result = float(rounded)
    # Collapse -0.0 so that serialized output stays stable.
    return result + 0.0


__all__ = ["sanitize", "safe_divide", "round_to"]
