"""
Abstract base class defining the stock back end contract.

Every call the UI makes goes through a StockService instance. The service
also owns the default request credential: once ``set_credential`` has been
called, every later request carries the bearer token until
``clear_credential`` removes it. Only the session store calls those two.

Implementations:
- HttpStockService: talks to the real back end over HTTP
- DemoStockService: in-memory data for development and tests
"""

from abc import ABC, abstractmethod
from typing import Sequence

from stock_ui.models.common import ListResult
from stock_ui.models.stock import Client, ClientStockLine, Product, User


class StockService(ABC):
    """
    Abstract base class for stock back end access.

    All data methods are coroutines. They raise subclasses of
    ``stock_ui.errors.StockUIError`` on failure and never return partial
    results.
    """

    # Credential

    @property
    @abstractmethod
    def credential(self) -> str | None:
        """The bearer token sent with every request, if any."""

    @abstractmethod
    def set_credential(self, token: str) -> None:
        """Install the bearer token for all subsequent requests."""

    @abstractmethod
    def clear_credential(self) -> None:
        """Remove the bearer token. Safe to call when none is installed."""

    # Users

    @abstractmethod
    async def login(self, email: str, password: str) -> str:
        """
        Exchange credentials for a token.

        Raises:
            AuthError: If the back end rejects the credentials.
        """

    @abstractmethod
    async def register(self, email: str, password: str, password_confirm: str) -> None:
        """Create a new user account."""

    @abstractmethod
    async def me(self) -> User:
        """Return the user owning the installed credential."""

    # Products

    @abstractmethod
    async def list_products(
        self, page: int = 1, limit: int = 10, search: str = ""
    ) -> ListResult[Product]:
        """
        Return a page of products whose name matches ``search``.

        Args:
            page: Page number (1-indexed).
            limit: Number of items per page.
            search: Case-insensitive name filter; empty matches all.
        """

    @abstractmethod
    async def create_product(self, payload: dict) -> Product:
        """Create a product and return it as stored by the server."""

    @abstractmethod
    async def update_product(self, product_id: str, payload: dict) -> Product:
        """Update a product and return it as stored by the server."""

    @abstractmethod
    async def delete_product(self, product_id: str) -> None:
        """Delete a product."""

    @abstractmethod
    async def transfer_stock(self, product_id: str, client_id: str, quantity: int) -> None:
        """Move ``quantity`` units of a product from global stock to a client."""

    # Clients

    @abstractmethod
    async def list_clients(
        self, page: int = 1, limit: int = 10, search: str = ""
    ) -> ListResult[Client]:
        """Return a page of clients whose name matches ``search``."""

    @abstractmethod
    async def get_client(self, client_id: str) -> Client:
        """Return one client."""

    @abstractmethod
    async def create_client(self, payload: dict) -> Client:
        """Create a client and return it as stored by the server."""

    @abstractmethod
    async def update_client(self, client_id: str, payload: dict) -> Client:
        """Update a client and return it as stored by the server."""

    @abstractmethod
    async def delete_client(self, client_id: str) -> None:
        """Delete a client."""

    @abstractmethod
    async def list_client_stock(self, client_id: str) -> Sequence[ClientStockLine]:
        """Return the stock lines allocated to a client, ordered by product name."""

    def close(self) -> None:
        """Release any resources held by the service."""
        pass
