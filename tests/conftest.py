# tests/conftest.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Shared fixtures: raw-fact builders and an isolated HTTP client."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from forecast_guidance.application.services.guidance_engine import GuidanceEngine
from forecast_guidance.config.settings import Environment, Settings
from forecast_guidance.dependencies.guidance import (
    get_context_repository,
    get_guidance_engine,
)
from forecast_guidance.domain.entities.pending_override import OverrideMonth, PendingOverride
from forecast_guidance.domain.entities.raw_fact import RawFact
from forecast_guidance.infrastructure.guidance.in_memory_context_repository import (
    InMemoryGuidanceContextRepository,
)
from forecast_guidance.main import create_app

FactBuilder = Callable[..., RawFact]
OverrideBuilder = Callable[..., PendingOverride]


def build_fact(month: int, **overrides: Any) -> RawFact:
    """Return a forecast fact for market M1, product ``P1 750ml`` of Brand/V1."""
    fields: dict[str, Any] = {
        "market_id": "M1",
        "month": month,
        "data_type": "forecast",
        "market_name": "Market One",
        "market_area_name": "North",
        "brand": "Brand",
        "variant": "V1",
        "variant_id": "v1",
        "variant_size_pack_id": "P1",
        "variant_size_pack_desc": "P1 750ml",
        "case_equivalent_volume": 0.0,
        "py_case_equivalent_volume": 0.0,
        "prev_published_case_equivalent_volume": 0.0,
        "gross_sales_value": 0.0,
        "py_gross_sales_value": 0.0,
    }
    fields.update(overrides)
    return RawFact(**fields)


def build_override(values: list[float], **overrides: Any) -> PendingOverride:
    """Return a market-view override for product ``P1 750ml`` in market M1."""
    fields: dict[str, Any] = {
        "variant_size_pack_desc": "P1 750ml",
        "market_id": "M1",
        "months": tuple(OverrideMonth(value=v) for v in values),
    }
    fields.update(overrides)
    return PendingOverride(**fields)


@pytest.fixture
def make_fact() -> FactBuilder:
    return build_fact


@pytest.fixture
def make_override() -> OverrideBuilder:
    return build_override


@pytest.fixture
def test_settings() -> Settings:
    return Settings(environment=Environment.TEST, log_level="WARNING")


@pytest.fixture
def context_repository() -> InMemoryGuidanceContextRepository:
    return InMemoryGuidanceContextRepository()


@pytest.fixture
def client(
    test_settings: Settings, context_repository: InMemoryGuidanceContextRepository
) -> Generator[TestClient, None, None]:
    """HTTP client over a fresh app with its own context store."""
    app = create_app(test_settings)
    app.dependency_overrides[get_context_repository] = lambda: context_repository
    app.dependency_overrides[get_guidance_engine] = lambda: GuidanceEngine(
        test_settings.engine_options()
    )
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()
