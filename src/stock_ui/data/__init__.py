"""
Static demo fixtures for the Stock UI.

Seed data for DemoStockService so the application can run without the
back end.
"""

from stock_ui.models.stock import Client, Product

DEMO_USER_EMAIL = "demo@example.com"
DEMO_USER_PASSWORD = "Demo1234"

DEMO_PRODUCTS: tuple[Product, ...] = (
    Product(
        id="7f6c1e7a-0c1f-4b1e-9d0e-000000000001",
        name="Parafuso sextavado 8mm",
        description="Caixa com 100 unidades",
        price_in_cents=2490,
        quantity=120,
    ),
    Product(
        id="7f6c1e7a-0c1f-4b1e-9d0e-000000000002",
        name="Porca 8mm",
        description="Caixa com 100 unidades",
        price_in_cents=1290,
        quantity=200,
    ),
    Product(
        id="7f6c1e7a-0c1f-4b1e-9d0e-000000000003",
        name="Arruela lisa",
        description="Pacote com 50 unidades",
        price_in_cents=590,
        quantity=75,
    ),
    Product(
        id="7f6c1e7a-0c1f-4b1e-9d0e-000000000004",
        name="Furadeira de impacto",
        description="750W, 220V",
        price_in_cents=32990,
        quantity=8,
    ),
    Product(
        id="7f6c1e7a-0c1f-4b1e-9d0e-000000000005",
        name="Broca para concreto 6mm",
        description="",
        price_in_cents=1890,
        quantity=40,
    ),
    Product(
        id="7f6c1e7a-0c1f-4b1e-9d0e-000000000006",
        name="Fita isolante",
        description="Rolo de 20m",
        price_in_cents=790,
        quantity=0,
    ),
)

DEMO_CLIENTS: tuple[Client, ...] = (
    Client(
        id="2b9d5c44-6a0e-4f7b-8c11-000000000001",
        name="Construtora Horizonte",
        email="compras@horizonte.example",
        phone="(11) 4002-8922",
    ),
    Client(
        id="2b9d5c44-6a0e-4f7b-8c11-000000000002",
        name="Oficina do Zé",
        phone="(21) 3333-1000",
    ),
    Client(
        id="2b9d5c44-6a0e-4f7b-8c11-000000000003",
        name="Marcenaria Bom Corte",
        email="contato@bomcorte.example",
    ),
)
