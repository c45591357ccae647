# tests/unit/domain/services/test_rolling_trends.py
# Copyright (c)
# SPDX-License-Identifier: MIT

from __future__ import annotations

import pytest

from forecast_guidance.domain.entities.aggregates import ForecastAggregate, MonthlyValue
from forecast_guidance.domain.services.rolling_trends import (
    apply_trends,
    compute_trends,
    sum_rolling,
)

SERIES = [float(v) for v in range(1, 13)]


def test_three_month_window_ending_at_june() -> None:
    # Apr..Jun are indexes 3..5
    assert sum_rolling([10.0] * 12, 3, 5) == 30.0
    assert sum_rolling(SERIES, 3, 5) == 15.0


@pytest.mark.parametrize(
    ("n", "end_idx", "expected"),
    [
        (3, -1, 0.0),
        (0, 5, 0.0),
        (6, 1, 3.0),
        (12, 11, 78.0),
        (3, 40, 33.0),
    ],
)
def test_window_edges(n: int, end_idx: int, expected: float) -> None:
    assert sum_rolling(SERIES, n, end_idx) == expected


def test_compute_trends_uses_both_series() -> None:
    trends = compute_trends(SERIES, [1.0] * 12, 5)

    assert (trends.cy_3m, trends.cy_6m, trends.cy_12m) == (15.0, 21.0, 21.0)
    assert (trends.py_3m, trends.py_6m, trends.py_12m) == (3.0, 6.0, 6.0)


def test_apply_trends_uses_aggregate_cutoff() -> None:
    aggregate = ForecastAggregate(
        months=[MonthlyValue(value=v) for v in SERIES],
        py_months=[2.0] * 12,
        last_actual_month_index=2,
    )

    apply_trends(aggregate)

    assert aggregate.trends.cy_3m == 6.0
    assert aggregate.trends.py_12m == 6.0


def test_no_actuals_means_zero_trends() -> None:
    aggregate = ForecastAggregate(months=[MonthlyValue(value=v) for v in SERIES])

    apply_trends(aggregate)

    assert aggregate.trends.cy_12m == 0.0
    assert aggregate.trends.py_3m == 0.0
