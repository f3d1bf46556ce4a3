"""
Data models and serialization helpers for the Stock UI.

This package provides:
- Stock domain models (Product, Client, ClientStockLine, User)
- List state models (ListQuery, ListResult, ListMetadata, Notice)
- Reflex view models for rendering (see reflex_models)

All core models are frozen dataclasses so snapshots can be shared safely.
"""

from stock_ui.models.common import ListMetadata, ListQuery, ListResult, Notice
from stock_ui.models.stock import (
    Client,
    ClientStockLine,
    Product,
    User,
    client_payload,
    parse_client,
    parse_product,
    parse_stock_line,
    parse_user,
    product_payload,
)

__all__ = [
    "Client",
    "ClientStockLine",
    "ListMetadata",
    "ListQuery",
    "ListResult",
    "Notice",
    "Product",
    "User",
    "client_payload",
    "parse_client",
    "parse_product",
    "parse_stock_line",
    "parse_user",
    "product_payload",
]
