"""
Stock domain models and serialization helpers.

These dataclasses mirror the JSON documents exchanged with the stock back
end. The hierarchy is flat:

    User             (id, email)
    Product          (name, description, price in cents, global quantity)
    Client           (name and optional contact details)
    ClientStockLine  (product allocated to a client, read-only)

Identities are the server generated UUID strings. Prices are kept in
integer cents and only turned into a decimal string for display.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from stock_ui.utils import format_cents, parse_timestamp


@dataclass(frozen=True, slots=True)
class User:
    """The authenticated user as returned by ``GET /me``."""

    id: str
    email: str


@dataclass(frozen=True, slots=True)
class Product:
    """A catalogue product with its global stock quantity."""

    id: str
    name: str
    description: str = ""
    price_in_cents: int = 0
    quantity: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def formatted_price(self) -> str:
        """Return the price formatted for display."""
        return format_cents(self.price_in_cents)


@dataclass(frozen=True, slots=True)
class Client:
    """A client that stock can be transferred to."""

    id: str
    name: str
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True, slots=True)
class ClientStockLine:
    """Quantity of one product allocated to a client."""

    product_id: str
    product_name: str
    quantity: int = 0


def parse_user(payload: Mapping[str, Any]) -> User:
    """Convert a ``/me`` response body into a User."""
    return User(id=str(payload["id"]), email=payload.get("email", ""))


def parse_product(payload: Mapping[str, Any]) -> Product:
    """Convert a product document into a Product dataclass."""
    return Product(
        id=str(payload["id"]),
        name=payload.get("name", ""),
        description=payload.get("description") or "",
        price_in_cents=int(payload.get("price_in_cents") or 0),
        quantity=int(payload.get("quantity") or 0),
        created_at=parse_timestamp(payload.get("created_at")),
        updated_at=parse_timestamp(payload.get("updated_at")),
    )


def parse_client(payload: Mapping[str, Any]) -> Client:
    """Convert a client document into a Client dataclass."""
    return Client(
        id=str(payload["id"]),
        name=payload.get("name", ""),
        email=payload.get("email") or None,
        phone=payload.get("phone") or None,
    )


def parse_stock_line(payload: Mapping[str, Any]) -> ClientStockLine:
    """
    Convert a client stock document into a ClientStockLine.

    Both camelCase and snake_case keys are accepted.
    """
    product_id = payload.get("productId", payload.get("product_id"))
    product_name = payload.get("productName", payload.get("product_name", ""))
    return ClientStockLine(
        product_id=str(product_id),
        product_name=product_name or "",
        quantity=int(payload.get("quantity") or 0),
    )


def product_payload(
    name: str, description: str, price_in_cents: int, quantity: int
) -> dict:
    """Build the request body for creating or updating a product."""
    return {
        "name": name,
        "description": description,
        "price_in_cents": price_in_cents,
        "quantity": quantity,
    }


def client_payload(name: str, email: str | None, phone: str | None) -> dict:
    """Build the request body for creating or updating a client."""
    return {"name": name, "email": email or "", "phone": phone or ""}

