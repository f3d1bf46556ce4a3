"""
Reflex-compatible view models for the Stock UI.

These models extend rx.Base so they can be used with rx.foreach and
other Reflex reactive components. They carry display ready strings next
to the raw values the edit forms need.
"""

import reflex as rx

from stock_ui.models.stock import Client, ClientStockLine, Product


class ProductModel(rx.Base):
    """Product row."""

    id: str = ""
    name: str = ""
    description: str = ""
    price_in_cents: int = 0
    price: str = ""
    quantity: int = 0


class ClientModel(rx.Base):
    """Client row."""

    id: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""


class StockLineModel(rx.Base):
    """Stock allocated to a client."""

    product_id: str = ""
    product_name: str = ""
    quantity: int = 0


class ProductOptionModel(rx.Base):
    """Entry of the transfer product picker."""

    id: str = ""
    label: str = ""


def product_to_model(product: Product) -> ProductModel:
    return ProductModel(
        id=product.id,
        name=product.name,
        description=product.description,
        price_in_cents=product.price_in_cents,
        price=product.formatted_price,
        quantity=product.quantity,
    )


def client_to_model(client: Client) -> ClientModel:
    return ClientModel(
        id=client.id,
        name=client.name,
        email=client.email or "",
        phone=client.phone or "",
    )


def stock_line_to_model(line: ClientStockLine) -> StockLineModel:
    return StockLineModel(
        product_id=line.product_id,
        product_name=line.product_name,
        quantity=line.quantity,
    )


def product_to_option(product: Product) -> ProductOptionModel:
    return ProductOptionModel(
        id=product.id,
        label=f"{product.name} (global stock: {product.quantity})",
    )
