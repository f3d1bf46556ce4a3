"""Shared pytest fixtures for stock_ui tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from stock_ui.data import DEMO_USER_EMAIL
from stock_ui.lib.caches import DiskCache
from stock_ui.services.stock_service_demo import DemoDataset, DemoStockService


@pytest.fixture
def dataset() -> DemoDataset:
    """Freshly seeded demo data, isolated per test."""
    return DemoDataset.seeded()


@pytest.fixture
def service(dataset: DemoDataset) -> DemoStockService:
    """Demo service without a credential."""
    return DemoStockService(dataset)


@pytest.fixture
def demo_token(dataset: DemoDataset) -> str:
    """A token the demo back end accepts for the demo user."""
    return dataset.issue_token(DEMO_USER_EMAIL)


@pytest.fixture
def logged_in(service: DemoStockService, demo_token: str) -> DemoStockService:
    """Demo service with a valid credential installed."""
    service.set_credential(demo_token)
    return service


@pytest.fixture
def disk_cache(tmp_path: Path) -> DiskCache:
    cache = DiskCache(tmp_path / "cache")
    try:
        yield cache
    finally:
        cache.close()
