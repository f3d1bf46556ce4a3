"""
Adapters that let one ListController drive different entity collections.

A ListSource exposes the four operations a list view needs (page fetch,
create, update, delete) plus how to read an item's identity. The product
and client sources map them onto the StockService.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from stock_ui.models.common import ListResult
from stock_ui.models.stock import Client, Product
from stock_ui.services.stock_service import StockService

T = TypeVar("T")


class ListSource(ABC, Generic[T]):
    """
    Remote collection of T.

    Attributes:
        noun: Singular, human readable entity name used in notices.
    """

    noun: str = "item"

    @abstractmethod
    async def fetch(self, page: int, page_size: int, search: str) -> ListResult[T]:
        """Return one page of items matching ``search``."""

    @abstractmethod
    async def create(self, payload: dict) -> T:
        """Create an item and return it as confirmed by the server."""

    @abstractmethod
    async def update(self, item_id: str, payload: dict) -> T:
        """Update an item and return it as confirmed by the server."""

    @abstractmethod
    async def delete(self, item_id: str) -> None:
        """Delete an item."""

    def identity(self, item: T) -> str:
        """Return the identity used to match items during reconciliation."""
        return item.id


class ProductSource(ListSource[Product]):
    noun = "product"

    def __init__(self, service: StockService) -> None:
        self.service = service

    async def fetch(self, page: int, page_size: int, search: str) -> ListResult[Product]:
        return await self.service.list_products(page=page, limit=page_size, search=search)

    async def create(self, payload: dict) -> Product:
        return await self.service.create_product(payload)

    async def update(self, item_id: str, payload: dict) -> Product:
        return await self.service.update_product(item_id, payload)

    async def delete(self, item_id: str) -> None:
        await self.service.delete_product(item_id)


class ClientSource(ListSource[Client]):
    noun = "client"

    def __init__(self, service: StockService) -> None:
        self.service = service

    async def fetch(self, page: int, page_size: int, search: str) -> ListResult[Client]:
        return await self.service.list_clients(page=page, limit=page_size, search=search)

    async def create(self, payload: dict) -> Client:
        return await self.service.create_client(payload)

    async def update(self, item_id: str, payload: dict) -> Client:
        return await self.service.update_client(item_id, payload)

    async def delete(self, item_id: str) -> None:
        await self.service.delete_client(item_id)
