"""
Client list page components.
"""

import reflex as rx

from stock_ui.components.dialogs import confirm_delete_dialog, form_dialog
from stock_ui.components.results import list_results
from stock_ui.components.search_panel import search_panel
from stock_ui.models.reflex_models import ClientModel
from stock_ui.state import ClientListState


def _row(client: ClientModel) -> rx.Component:
    return rx.table.row(
        rx.table.cell(rx.link(client.name, href=f"/clients/{client.id}")),
        rx.table.cell(rx.cond(client.email != "", client.email, "-")),
        rx.table.cell(rx.cond(client.phone != "", client.phone, "-")),
        rx.table.cell(
            rx.hstack(
                rx.icon_button(
                    rx.icon("pencil", size=16),
                    variant="ghost",
                    title="Edit",
                    on_click=ClientListState.open_edit(client),
                ),
                rx.icon_button(
                    rx.icon("trash-2", size=16),
                    variant="ghost",
                    color_scheme="red",
                    title="Delete",
                    on_click=ClientListState.open_delete(client.id, client.name),
                ),
            ),
            class_name="actions-cell",
        ),
    )


def client_table() -> rx.Component:
    return rx.table.root(
        rx.table.header(
            rx.table.row(
                rx.table.column_header_cell("Name"),
                rx.table.column_header_cell("Email"),
                rx.table.column_header_cell("Phone"),
                rx.table.column_header_cell(""),
            )
        ),
        rx.table.body(rx.foreach(ClientListState.items, _row)),
        width="100%",
    )


def client_fields(client: ClientModel | None = None) -> list[rx.Component]:
    editing = client is not None
    return [
        rx.input(name="name", placeholder="Name", default_value=client.name if editing else ""),
        rx.input(
            name="email",
            placeholder="Email",
            type="email",
            default_value=client.email if editing else "",
        ),
        rx.input(name="phone", placeholder="Phone", default_value=client.phone if editing else ""),
    ]


def clients_page() -> rx.Component:
    """Body of the client list page."""
    return rx.box(
        rx.hstack(
            rx.heading("Clients", size="6", as_="h1"),
            rx.spacer(),
            rx.button("New client", on_click=ClientListState.open_create),
            class_name="page-header",
            width="100%",
        ),
        search_panel(ClientListState, "Search by name..."),
        list_results(ClientListState, client_table, "No clients found"),
        form_dialog(
            "New client",
            client_fields(),
            open=ClientListState.create_open,
            on_open_change=ClientListState.set_create_open,
            on_submit=ClientListState.submit_create,
        ),
        form_dialog(
            f"Edit {ClientListState.target_name}",
            client_fields(ClientListState.editing),
            open=ClientListState.edit_open,
            on_open_change=ClientListState.set_edit_open,
            on_submit=ClientListState.submit_edit,
            key=ClientListState.target_id,
        ),
        confirm_delete_dialog(ClientListState, "client"),
        on_mount=ClientListState.mount,
    )
