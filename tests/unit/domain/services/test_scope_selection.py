# tests/unit/domain/services/test_scope_selection.py
# Copyright (c)
# SPDX-License-Identifier: MIT

from __future__ import annotations

from collections.abc import Callable

import pytest

from forecast_guidance.domain.entities.raw_fact import MarketProfile, RawFact
from forecast_guidance.domain.enums.forecast import ForecastScope, ManagedBy
from forecast_guidance.domain.services.scope_selection import (
    parse_managed_by,
    select_scoped_facts,
)

FactBuilder = Callable[..., RawFact]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Market", ManagedBy.MARKET),
        (" customer ", ManagedBy.CUSTOMER),
        ("CUSTOMER", ManagedBy.CUSTOMER),
        ("region", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_managed_by(raw: str | None, expected: ManagedBy | None) -> None:
    assert parse_managed_by(raw) is expected


def test_managed_by_maps_to_scope() -> None:
    assert ManagedBy.MARKET.scope is ForecastScope.MARKET
    assert ManagedBy.CUSTOMER.scope is ForecastScope.CUSTOMER


def test_each_market_contributes_at_one_level(make_fact: FactBuilder) -> None:
    markets = [
        MarketProfile(market_id="M1", managed_by="Market"),
        MarketProfile(market_id="M2", managed_by="Customer", customer_ids=("C1",)),
    ]
    market_facts = [make_fact(1, market_id="M1"), make_fact(1, market_id="M2")]
    customer_facts = [
        make_fact(1, market_id="M1", customer_id="C9"),
        make_fact(1, market_id="M2", customer_id="C1"),
    ]

    scoped = select_scoped_facts(market_facts, customer_facts, markets)

    assert [f.market_id for f in scoped.market] == ["M1"]
    assert [f.customer_id for f in scoped.customer] == ["C1"]
    assert scoped.ignored == 2


def test_markets_without_profile_are_ignored(make_fact: FactBuilder) -> None:
    scoped = select_scoped_facts([make_fact(1, market_id="M7")], [], [])

    assert scoped.market == ()
    assert scoped.ignored == 1


def test_customer_facts_without_customer_id_are_ignored(make_fact: FactBuilder) -> None:
    markets = [MarketProfile(market_id="M2", managed_by="Customer", customer_ids=("C1",))]

    scoped = select_scoped_facts([], [make_fact(1, market_id="M2")], markets)

    assert scoped.customer == ()
    assert scoped.ignored == 1
