# src/forecast_guidance/domain/enums/guidance.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Guidance enumerations.

Purpose:
    Stable identifiers for guidance calculation kinds, periods, display
    placement, availability and the independent guidance contexts.

Layer:
    domain
"""

from __future__ import annotations

from enum import Enum


class CalculationType(str, Enum):
    """Top-level calculation kinds understood by the evaluator."""

    DIRECT = "direct"
    DIFFERENCE = "difference"
    PERCENTAGE = "percentage"
    MULTI_CALC = "multi_calc"


class SubCalculationType(str, Enum):
    """Kinds allowed inside a multi-calc bundle."""

    DIRECT = "direct"
    DIFFERENCE = "difference"
    PERCENTAGE = "percentage"


class GuidancePeriod(str, Enum):
    """Month window a guidance value is computed over."""

    FY = "FY"
    YTD = "YTD"
    TG = "TG"


class GuidanceFormat(str, Enum):
    """Numeric presentation hint carried with a calculation."""

    NUMBER = "number"
    PERCENT = "percent"


class DisplayType(str, Enum):
    """Where a guidance definition may be displayed."""

    ROW = "row"
    COLUMN = "column"
    BOTH = "both"


class Availability(str, Enum):
    """Views a guidance definition is offered in."""

    DEPLETIONS = "depletions"
    SUMMARY = "summary"
    BOTH = "both"


class GuidanceContextId(str, Enum):
    """Independent guidance definition contexts."""

    DEPLETION = "depletion"
    SUMMARY = "summary"
    SHIPMENT = "shipment"


__all__ = [
    "CalculationType",
    "SubCalculationType",
    "GuidancePeriod",
    "GuidanceFormat",
    "DisplayType",
    "Availability",
    "GuidanceContextId",
]
