# src/forecast_guidance/domain/services/rate_deriver.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""GSV rate derivation.

Purpose:
    Compute monetary-per-unit rates on an aggregate and use them to value
    LC volume, which carries no monetary data of its own.

Layer:
    domain/services

Notes:
    - ``gsv_rate = gross_sales_value / case_equivalent_volume`` when the
      monetary total is positive, else ``0``; ``py_gsv_rate`` likewise.
    - LC is valued at the historical rate when positive, else at the TY rate.
    - An explicit monthly LC monetary series (e.g. summed from children) is
      kept as-is and also defines the LC monetary total.
"""

from __future__ import annotations

import math

from forecast_guidance.domain.entities.aggregates import ForecastAggregate
from forecast_guidance.domain.services.numeric import safe_divide


def monetary_rate(monetary: float, volume: float) -> float:
    """Return ``monetary / volume`` for positive monetary totals, else ``0.0``."""
    if monetary <= 0:
        return 0.0
    return safe_divide(monetary, volume)


def derive_rates(aggregate: ForecastAggregate) -> None:
    """Set rates and the LC monetary figures on ``aggregate`` in place."""
    aggregate.gsv_rate = monetary_rate(
        aggregate.gross_sales_value, aggregate.case_equivalent_volume
    )
    aggregate.py_gsv_rate = monetary_rate(
        aggregate.py_gross_sales_value, aggregate.py_case_equivalent_volume
    )

    rate_for_lc = aggregate.rate_for_lc
    if aggregate.lc_gsv_months is None:
        aggregate.lc_gsv_months = [volume * rate_for_lc for volume in aggregate.lc_months]
        aggregate.lc_gross_sales_value = (
            aggregate.prev_published_case_equivalent_volume * rate_for_lc
        )
    else:
        aggregate.lc_gross_sales_value = math.fsum(aggregate.lc_gsv_months)


__all__ = ["monetary_rate", "derive_rates"]
