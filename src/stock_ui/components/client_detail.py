"""
Client detail page: contact data, allocated stock and the transfer modal.
"""

import reflex as rx

from stock_ui.components.layout import loading_placeholder
from stock_ui.models.reflex_models import ProductOptionModel, StockLineModel
from stock_ui.state import ClientDetailState


def _stock_row(line: StockLineModel) -> rx.Component:
    return rx.table.row(
        rx.table.cell(line.product_name),
        rx.table.cell(line.quantity),
    )


def _option(option: ProductOptionModel) -> rx.Component:
    return rx.select.item(option.label, value=option.id)


def transfer_dialog() -> rx.Component:
    """Modal that moves global stock to this client."""
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title("Transfer stock"),
            rx.vstack(
                rx.text("Product"),
                rx.select.root(
                    rx.select.trigger(placeholder="Select..."),
                    rx.select.content(rx.foreach(ClientDetailState.options, _option)),
                    value=ClientDetailState.selected_product_id,
                    on_change=ClientDetailState.set_selected_product_id,
                ),
                rx.text("Quantity to transfer"),
                rx.input(
                    type="number",
                    min=1,
                    value=ClientDetailState.transfer_quantity,
                    on_change=ClientDetailState.set_transfer_quantity,
                ),
                rx.hstack(
                    rx.dialog.close(
                        rx.button("Cancel", variant="soft", color_scheme="gray")
                    ),
                    rx.button(
                        rx.cond(
                            ClientDetailState.is_transferring,
                            "Transferring...",
                            "Confirm transfer",
                        ),
                        on_click=ClientDetailState.submit_transfer,
                        disabled=ClientDetailState.is_transferring,
                    ),
                    justify="end",
                    width="100%",
                ),
                spacing="3",
            ),
        ),
        open=ClientDetailState.transfer_open,
        on_open_change=ClientDetailState.set_transfer_open,
    )


def _details() -> rx.Component:
    return rx.box(
        rx.hstack(
            rx.link("← Clients", href="/clients"),
            rx.heading(ClientDetailState.client_name, size="6", as_="h1"),
            class_name="page-header",
            spacing="4",
        ),
        rx.box(
            rx.text(
                rx.text.strong("Email: "),
                rx.cond(ClientDetailState.client_email != "", ClientDetailState.client_email, "-"),
            ),
            rx.text(
                rx.text.strong("Phone: "),
                rx.cond(ClientDetailState.client_phone != "", ClientDetailState.client_phone, "-"),
            ),
            class_name="card",
        ),
        rx.box(
            rx.hstack(
                rx.heading("Client stock", size="4", as_="h2"),
                rx.spacer(),
                rx.button("Transfer product", on_click=ClientDetailState.open_transfer),
                width="100%",
            ),
            rx.cond(
                ClientDetailState.stock.length() > 0,
                rx.table.root(
                    rx.table.header(
                        rx.table.row(
                            rx.table.column_header_cell("Product"),
                            rx.table.column_header_cell("Quantity in stock"),
                        )
                    ),
                    rx.table.body(rx.foreach(ClientDetailState.stock, _stock_row)),
                    width="100%",
                ),
                rx.text("No products allocated to this client.", class_name="muted"),
            ),
            class_name="card",
        ),
        transfer_dialog(),
    )


def client_detail_page() -> rx.Component:
    """Body of the client detail page; all or nothing on load errors."""
    return rx.box(
        rx.cond(
            ClientDetailState.error != "",
            rx.box(
                rx.icon("triangle-alert", class_name="empty-icon", size=48),
                rx.text(ClientDetailState.error, class_name="muted"),
                class_name="card empty-state",
            ),
            rx.cond(
                ClientDetailState.client_name == "",
                loading_placeholder(),
                _details(),
            ),
        ),
        on_mount=ClientDetailState.load,
    )
