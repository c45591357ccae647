# src/forecast_guidance/domain/enums/measure_field.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Measure vocabulary enumeration.

Purpose:
    Closed set of base measures that guidance definitions may reference by
    name. Field names coming from user-authored definitions are resolved
    through :meth:`MeasureField.parse`; anything outside the vocabulary maps
    to ``None`` and evaluates to zero.

Layer:
    domain

Notes:
    - Values are the wire names used by the dashboard and stored guidance
      definitions, so they must stay stable.
"""

from __future__ import annotations

from enum import Enum


class MeasureField(str, Enum):
    """Base measures available on every aggregate."""

    CASE_EQUIVALENT_VOLUME = "case_equivalent_volume"
    PY_CASE_EQUIVALENT_VOLUME = "py_case_equivalent_volume"
    PREV_PUBLISHED_CASE_EQUIVALENT_VOLUME = "prev_published_case_equivalent_volume"
    GROSS_SALES_VALUE = "gross_sales_value"
    PY_GROSS_SALES_VALUE = "py_gross_sales_value"
    LC_GROSS_SALES_VALUE = "lc_gross_sales_value"
    GSV_RATE = "gsv_rate"
    PY_GSV_RATE = "py_gsv_rate"
    CY_3M_CASE_EQUIVALENT_VOLUME = "cy_3m_case_equivalent_volume"
    CY_6M_CASE_EQUIVALENT_VOLUME = "cy_6m_case_equivalent_volume"
    CY_12M_CASE_EQUIVALENT_VOLUME = "cy_12m_case_equivalent_volume"
    PY_3M_CASE_EQUIVALENT_VOLUME = "py_3m_case_equivalent_volume"
    PY_6M_CASE_EQUIVALENT_VOLUME = "py_6m_case_equivalent_volume"
    PY_12M_CASE_EQUIVALENT_VOLUME = "py_12m_case_equivalent_volume"

    @classmethod
    def parse(cls, name: object) -> MeasureField | None:
        """Resolve a field name to a measure, or None when unknown."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            return None
        try:
            return cls(name.strip())
        except ValueError:
            return None

    @property
    def is_trend(self) -> bool:
        """Whether this measure is one of the rolling-window trend sums."""
        return self in TREND_FIELDS


TREND_FIELDS: frozenset[MeasureField] = frozenset(
    {
        MeasureField.CY_3M_CASE_EQUIVALENT_VOLUME,
        MeasureField.CY_6M_CASE_EQUIVALENT_VOLUME,
        MeasureField.CY_12M_CASE_EQUIVALENT_VOLUME,
        MeasureField.PY_3M_CASE_EQUIVALENT_VOLUME,
        MeasureField.PY_6M_CASE_EQUIVALENT_VOLUME,
        MeasureField.PY_12M_CASE_EQUIVALENT_VOLUME,
    }
)


__all__ = ["MeasureField", "TREND_FIELDS"]
