"""
Demo implementation of StockService using in-memory data.

This service is useful for:
- Local development without the back end running
- Testing controllers against realistic behaviour
- Demonstrating the application without any infrastructure

It reproduces the back end's observable rules: credentialed endpoints,
products ordered newest first, clients and stock lines ordered by name,
name search, pagination metadata and stock transfer bookkeeping.
"""

import asyncio
import secrets
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Sequence

from stock_ui.data import DEMO_CLIENTS, DEMO_PRODUCTS, DEMO_USER_EMAIL, DEMO_USER_PASSWORD
from stock_ui.errors import AuthError, NotFoundError, RemoteError
from stock_ui.models.common import ListMetadata, ListResult
from stock_ui.models.stock import Client, ClientStockLine, Product, User
from stock_ui.services.stock_service import StockService
from stock_ui.utils import matches_query, page_slice


@dataclass
class DemoDataset:
    """
    Mutable store shared by every DemoStockService bound to it.

    Attributes:
        products: Products, newest first.
        clients: Clients keyed by id.
        stock: Allocated quantity keyed by (client_id, product_id).
        users: Registered users keyed by email, with their passwords.
        tokens: Issued tokens mapped to user emails.
    """

    products: list[Product] = field(default_factory=list)
    clients: dict[str, Client] = field(default_factory=dict)
    stock: dict[tuple[str, str], int] = field(default_factory=dict)
    users: dict[str, tuple[User, str]] = field(default_factory=dict)
    tokens: dict[str, str] = field(default_factory=dict)

    @classmethod
    def seeded(cls) -> "DemoDataset":
        """Return a dataset populated with the demo fixtures."""
        dataset = cls(
            products=list(DEMO_PRODUCTS),
            clients={client.id: client for client in DEMO_CLIENTS},
        )
        dataset.add_user(DEMO_USER_EMAIL, DEMO_USER_PASSWORD)
        return dataset

    def add_user(self, email: str, password: str) -> User:
        user = User(id=str(uuid.uuid4()), email=email)
        self.users[email] = (user, password)
        return user

    def issue_token(self, email: str) -> str:
        token = secrets.token_hex(16)
        self.tokens[token] = email
        return token


def _paginate(items: Sequence, page: int, limit: int) -> ListResult:
    page = max(page, 1)
    return ListResult.of(
        page_slice(items, page, limit), ListMetadata.for_slice(len(items), page, limit)
    )


class DemoStockService(StockService):
    """
    In-memory stock service.

    Attributes:
        dataset: The store this service reads and writes.
        latency: Seconds to sleep before answering each call.
    """

    def __init__(self, dataset: DemoDataset | None = None, latency: float = 0.0) -> None:
        self.dataset = dataset or DemoDataset.seeded()
        self.latency = latency
        self._credential: str | None = None

    @property
    def credential(self) -> str | None:
        return self._credential

    def set_credential(self, token: str) -> None:
        self._credential = token

    def clear_credential(self) -> None:
        self._credential = None

    async def _authorized(self) -> User:
        """Simulate latency and the back end's auth middleware."""
        if self.latency:
            await asyncio.sleep(self.latency)
        email = self.dataset.tokens.get(self._credential or "")
        if email is None or email not in self.dataset.users:
            raise AuthError("Token inválido ou ausente")
        return self.dataset.users[email][0]

    def _product(self, product_id: str) -> Product:
        for product in self.dataset.products:
            if product.id == product_id:
                return product
        raise NotFoundError("produto não encontrado", 404)

    def _client(self, client_id: str) -> Client:
        try:
            return self.dataset.clients[client_id]
        except KeyError as exc:
            raise NotFoundError("cliente não encontrado", 404) from exc

    async def login(self, email: str, password: str) -> str:
        if self.latency:
            await asyncio.sleep(self.latency)
        stored = self.dataset.users.get(email)
        if stored is None or stored[1] != password:
            raise AuthError("Credenciais inválidas")
        return self.dataset.issue_token(email)

    async def register(self, email: str, password: str, password_confirm: str) -> None:
        if self.latency:
            await asyncio.sleep(self.latency)
        if password != password_confirm:
            raise RemoteError("As senhas não coincidem", 400, "passwords_dont_match")
        if email in self.dataset.users:
            raise RemoteError("Email já está em uso", 409, "email_in_use")
        self.dataset.add_user(email, password)

    async def me(self) -> User:
        return await self._authorized()

    async def list_products(
        self, page: int = 1, limit: int = 10, search: str = ""
    ) -> ListResult[Product]:
        await self._authorized()
        matching = [p for p in self.dataset.products if matches_query(p.name, search)]
        return _paginate(matching, page, limit)

    async def create_product(self, payload: dict) -> Product:
        await self._authorized()
        now = datetime.now(timezone.utc)
        product = Product(
            id=str(uuid.uuid4()),
            name=payload["name"],
            description=payload.get("description", ""),
            price_in_cents=int(payload.get("price_in_cents", 0)),
            quantity=int(payload.get("quantity", 0)),
            created_at=now,
            updated_at=now,
        )
        self.dataset.products.insert(0, product)
        return product

    async def update_product(self, product_id: str, payload: dict) -> Product:
        await self._authorized()
        current = self._product(product_id)
        updated = replace(
            current,
            name=payload.get("name", current.name),
            description=payload.get("description", current.description),
            price_in_cents=int(payload.get("price_in_cents", current.price_in_cents)),
            quantity=int(payload.get("quantity", current.quantity)),
            updated_at=datetime.now(timezone.utc),
        )
        index = self.dataset.products.index(current)
        self.dataset.products[index] = updated
        return updated

    async def delete_product(self, product_id: str) -> None:
        await self._authorized()
        self.dataset.products.remove(self._product(product_id))
        for key in [k for k in self.dataset.stock if k[1] == product_id]:
            del self.dataset.stock[key]

    async def transfer_stock(self, product_id: str, client_id: str, quantity: int) -> None:
        await self._authorized()
        product = self._product(product_id)
        self._client(client_id)
        if quantity <= 0:
            raise RemoteError("A quantidade deve ser positiva", 400, "invalid_quantity")
        if quantity > product.quantity:
            raise RemoteError("Estoque insuficiente", 409, "insufficient_stock")
        index = self.dataset.products.index(product)
        self.dataset.products[index] = replace(product, quantity=product.quantity - quantity)
        key = (client_id, product_id)
        self.dataset.stock[key] = self.dataset.stock.get(key, 0) + quantity

    async def list_clients(
        self, page: int = 1, limit: int = 10, search: str = ""
    ) -> ListResult[Client]:
        await self._authorized()
        ordered = sorted(self.dataset.clients.values(), key=lambda c: c.name.lower())
        matching = [c for c in ordered if matches_query(c.name, search)]
        return _paginate(matching, page, limit)

    async def get_client(self, client_id: str) -> Client:
        await self._authorized()
        return self._client(client_id)

    async def create_client(self, payload: dict) -> Client:
        await self._authorized()
        client = Client(
            id=str(uuid.uuid4()),
            name=payload["name"],
            email=payload.get("email") or None,
            phone=payload.get("phone") or None,
        )
        self.dataset.clients[client.id] = client
        return client

    async def update_client(self, client_id: str, payload: dict) -> Client:
        await self._authorized()
        current = self._client(client_id)
        updated = replace(
            current,
            name=payload.get("name", current.name),
            email=payload.get("email") or None,
            phone=payload.get("phone") or None,
        )
        self.dataset.clients[client_id] = updated
        return updated

    async def delete_client(self, client_id: str) -> None:
        await self._authorized()
        self._client(client_id)
        del self.dataset.clients[client_id]
        for key in [k for k in self.dataset.stock if k[0] == client_id]:
            del self.dataset.stock[key]

    async def list_client_stock(self, client_id: str) -> Sequence[ClientStockLine]:
        await self._authorized()
        self._client(client_id)
        names = {p.id: p.name for p in self.dataset.products}
        lines = [
            ClientStockLine(product_id=pid, product_name=names.get(pid, ""), quantity=qty)
            for (cid, pid), qty in self.dataset.stock.items()
            if cid == client_id
        ]
        return sorted(lines, key=lambda line: line.product_name.lower())
