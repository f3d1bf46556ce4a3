"""
Service factory for the Stock UI.

This module provides the create_stock_service() factory that returns the
StockService implementation selected by configuration.

Available Implementations:
- http: REST client for the stock back end
- demo: In-memory service with static fixtures (no back end required)

Each browser tab gets its own service instance because the service holds
that tab's request credential. Demo services share one dataset so every
tab sees the same data. Configure via the STOCK_UI_SERVICE environment
variable.
"""

from typing import Callable, Dict

from stock_ui import config
from stock_ui.lib import logs
from stock_ui.services.stock_service import StockService
from stock_ui.services.stock_service_demo import DemoDataset, DemoStockService
from stock_ui.services.stock_service_http import HttpStockService

LOG = logs.logger(__file__)

_DEMO_DATASET = DemoDataset.seeded()

_SERVICE_REGISTRY: Dict[str, Callable[[], StockService]] = {
    "demo": lambda: DemoStockService(_DEMO_DATASET),
    "http": lambda: HttpStockService(),
}


def create_stock_service(kind: str | None = None) -> StockService:
    """Return a new instance of the configured stock service implementation."""
    resolved_kind = (kind or config.SERVICE_KIND).lower()
    LOG.debug("create_stock_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown stock service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


__all__ = [
    "DemoDataset",
    "DemoStockService",
    "HttpStockService",
    "StockService",
    "create_stock_service",
]
