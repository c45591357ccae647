# src/forecast_guidance/domain/services/scope_selection.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Per-market choice between market-level and customer-level facts.

A market managed by ``Market`` contributes its market-level facts; a market
managed by ``Customer`` contributes the facts of its customers. A market is
never counted at both levels, and facts of markets without a profile are
ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from forecast_guidance.domain.entities.raw_fact import MarketProfile, RawFact
from forecast_guidance.domain.enums.forecast import ManagedBy


@dataclass(frozen=True, slots=True)
class ScopedFacts:
    """Facts to aggregate at market scope and at customer scope."""

    market: tuple[RawFact, ...] = ()
    customer: tuple[RawFact, ...] = ()
    ignored: int = 0


def parse_managed_by(value: str | None) -> ManagedBy | None:
    """Resolve a ``managed_by`` setting, case-insensitively."""
    if not value:
        return None
    normalized = value.strip().lower()
    for option in ManagedBy:
        if option.value.lower() == normalized:
            return option
    return None


def select_scoped_facts(
    market_facts: Iterable[RawFact],
    customer_facts: Iterable[RawFact],
    markets: Sequence[MarketProfile],
) -> ScopedFacts:
    """Split facts into market and customer scope according to ``markets``."""
    market_managed: set[str] = set()
    customer_to_market: dict[str, str] = {}
    for profile in markets:
        managed_by = parse_managed_by(profile.managed_by)
        if managed_by is ManagedBy.MARKET:
            market_managed.add(profile.market_id)
        elif managed_by is ManagedBy.CUSTOMER:
            for customer_id in profile.customer_ids:
                customer_to_market[customer_id] = profile.market_id

    ignored = 0
    selected_market: list[RawFact] = []
    for fact in market_facts:
        if fact.market_id in market_managed:
            selected_market.append(fact)
        else:
            ignored += 1

    selected_customer: list[RawFact] = []
    for fact in customer_facts:
        if fact.customer_id is not None and fact.customer_id in customer_to_market:
            selected_customer.append(fact)
        else:
            ignored += 1

    return ScopedFacts(
        market=tuple(selected_market),
        customer=tuple(selected_customer),
        ignored=ignored,
    )


__all__ = ["ScopedFacts", "parse_managed_by", "select_scoped_facts"]
