# tests/unit/domain/services/test_override_layer.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Manual overrides replace item series by exact key."""

from __future__ import annotations

import math
from collections.abc import Callable

from forecast_guidance.domain.entities.aggregates import ItemAggregate
from forecast_guidance.domain.entities.pending_override import OverrideMonth, PendingOverride
from forecast_guidance.domain.entities.raw_fact import RawFact
from forecast_guidance.domain.enums.forecast import ForecastScope
from forecast_guidance.domain.services.fact_aggregator import FactAggregator
from forecast_guidance.domain.services.override_layer import apply_overrides

FactBuilder = Callable[..., RawFact]
OverrideBuilder = Callable[..., PendingOverride]


def _items(make_fact: FactBuilder) -> dict[str, ItemAggregate]:
    facts = [
        make_fact(1, data_type="actual", case_equivalent_volume=10.0, gross_sales_value=100.0),
        make_fact(2, case_equivalent_volume=20.0, forecast_method="flat"),
    ]
    return FactAggregator().aggregate(facts, ForecastScope.MARKET)


def test_override_replaces_ty_and_lc_series(
    make_fact: FactBuilder, make_override: OverrideBuilder
) -> None:
    items = _items(make_fact)
    values = [float(v) for v in range(1, 13)]

    outcome = apply_overrides(items, [make_override(values)], ForecastScope.MARKET)

    item = items["forecast:M1:P1 750ml"]
    assert outcome.matched == 1
    assert outcome.dropped == 0
    assert item.ty_series == values
    assert item.lc_months == values
    assert item.case_equivalent_volume == 78.0
    # Monetary totals are untouched.
    assert item.gross_sales_value == 100.0


def test_override_keeps_actual_prefix(
    make_fact: FactBuilder, make_override: OverrideBuilder
) -> None:
    items = _items(make_fact)

    apply_overrides(items, [make_override([5.0] * 12)], ForecastScope.MARKET)

    flags = [month.is_actual for month in items["forecast:M1:P1 750ml"].months]
    assert flags == [True] + [False] * 11


def test_unmatched_override_is_dropped(
    make_fact: FactBuilder, make_override: OverrideBuilder
) -> None:
    items = _items(make_fact)
    before = items["forecast:M1:P1 750ml"].ty_series

    outcome = apply_overrides(
        items,
        [make_override([1.0] * 12, variant_size_pack_desc="Unknown")],
        ForecastScope.MARKET,
    )

    assert outcome.matched == 0
    assert outcome.dropped == 1
    assert outcome.dropped_keys == ("forecast:M1:Unknown",)
    assert list(items) == ["forecast:M1:P1 750ml"]
    assert items["forecast:M1:P1 750ml"].ty_series == before


def test_later_override_wins(make_fact: FactBuilder, make_override: OverrideBuilder) -> None:
    items = _items(make_fact)

    apply_overrides(
        items,
        [make_override([1.0] * 12), make_override([2.0] * 12)],
        ForecastScope.MARKET,
    )

    assert items["forecast:M1:P1 750ml"].ty_series == [2.0] * 12


def test_short_series_is_padded_and_corrupt_values_zeroed(
    make_fact: FactBuilder, make_override: OverrideBuilder
) -> None:
    items = _items(make_fact)

    apply_overrides(items, [make_override([4.0, math.nan, 6.0])], ForecastScope.MARKET)

    assert items["forecast:M1:P1 750ml"].ty_series == [4.0, 0.0, 6.0] + [0.0] * 9


def test_month_flag_takes_precedence_over_override_flag(
    make_fact: FactBuilder, make_override: OverrideBuilder
) -> None:
    items = _items(make_fact)
    months = (
        OverrideMonth(value=1.0, is_manually_modified=False),
        OverrideMonth(value=2.0),
    )

    apply_overrides(
        items, [make_override([], months=months, is_manual_edit=True)], ForecastScope.MARKET
    )

    flags = [month.is_manually_modified for month in items["forecast:M1:P1 750ml"].months]
    assert flags[:3] == [False, True, True]


def test_forecast_type_and_comment_update_metadata(
    make_fact: FactBuilder, make_override: OverrideBuilder
) -> None:
    items = _items(make_fact)

    apply_overrides(
        items,
        [make_override([1.0] * 12, forecast_type="run_rate", comment="promo uplift")],
        ForecastScope.MARKET,
    )

    item = items["forecast:M1:P1 750ml"]
    assert item.forecast_logic == "run_rate"
    assert item.commentary == "promo uplift"


def test_customer_scope_override_matches_customer_item(
    make_fact: FactBuilder, make_override: OverrideBuilder
) -> None:
    items = FactAggregator().aggregate(
        [make_fact(1, customer_id="C1", case_equivalent_volume=3.0)], ForecastScope.CUSTOMER
    )

    outcome = apply_overrides(
        items,
        [make_override([9.0] * 12, market_id=None, customer_id="C1")],
        ForecastScope.CUSTOMER,
    )

    assert outcome.matched == 1
    assert items["forecast:C1:P1 750ml:C1"].case_equivalent_volume == 108.0
