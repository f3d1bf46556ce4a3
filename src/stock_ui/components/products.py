"""
Product list page components: table, create/edit dialogs, delete dialog.
"""

import reflex as rx

from stock_ui.components.dialogs import confirm_delete_dialog, form_dialog
from stock_ui.components.results import list_results
from stock_ui.components.search_panel import search_panel
from stock_ui.models.reflex_models import ProductModel
from stock_ui.state import ProductListState


def _row(product: ProductModel) -> rx.Component:
    return rx.table.row(
        rx.table.cell(product.name),
        rx.table.cell(rx.cond(product.description != "", product.description, "-")),
        rx.table.cell(product.price),
        rx.table.cell(product.quantity),
        rx.table.cell(
            rx.hstack(
                rx.icon_button(
                    rx.icon("pencil", size=16),
                    variant="ghost",
                    title="Edit",
                    on_click=ProductListState.open_edit(product),
                ),
                rx.icon_button(
                    rx.icon("trash-2", size=16),
                    variant="ghost",
                    color_scheme="red",
                    title="Delete",
                    on_click=ProductListState.open_delete(product.id, product.name),
                ),
            ),
            class_name="actions-cell",
        ),
    )


def product_table() -> rx.Component:
    return rx.table.root(
        rx.table.header(
            rx.table.row(
                rx.table.column_header_cell("Name"),
                rx.table.column_header_cell("Description"),
                rx.table.column_header_cell("Price"),
                rx.table.column_header_cell("Quantity"),
                rx.table.column_header_cell(""),
            )
        ),
        rx.table.body(rx.foreach(ProductListState.items, _row)),
        width="100%",
    )


def product_fields(product: ProductModel | None = None) -> list[rx.Component]:
    """Inputs of the product form, prefilled when editing."""
    editing = product is not None
    return [
        rx.input(
            name="name",
            placeholder="Name",
            default_value=product.name if editing else "",
        ),
        rx.text_area(
            name="description",
            placeholder="Description",
            default_value=product.description if editing else "",
        ),
        rx.input(
            name="price",
            placeholder="Price (e.g. 12.50)",
            default_value=(product.price_in_cents / 100).to_string() if editing else "",
        ),
        rx.input(
            name="quantity",
            placeholder="Quantity",
            type="number",
            min=0,
            default_value=product.quantity.to_string() if editing else "",
        ),
    ]


def products_page() -> rx.Component:
    """Body of the product list page."""
    return rx.box(
        rx.hstack(
            rx.heading("Products", size="6", as_="h1"),
            rx.spacer(),
            rx.button("New product", on_click=ProductListState.open_create),
            class_name="page-header",
            width="100%",
        ),
        search_panel(ProductListState, "Search by name..."),
        list_results(ProductListState, product_table, "No products found"),
        form_dialog(
            "New product",
            product_fields(),
            open=ProductListState.create_open,
            on_open_change=ProductListState.set_create_open,
            on_submit=ProductListState.submit_create,
        ),
        form_dialog(
            f"Edit {ProductListState.target_name}",
            product_fields(ProductListState.editing),
            open=ProductListState.edit_open,
            on_open_change=ProductListState.set_edit_open,
            on_submit=ProductListState.submit_edit,
            key=ProductListState.target_id,
        ),
        confirm_delete_dialog(ProductListState, "product"),
        on_mount=ProductListState.mount,
    )
