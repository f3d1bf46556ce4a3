"""
Reflex UI components for the Stock UI application.

This package provides the page bodies and the pieces they share:
- layout: navbar, page shell and the route-protecting wrapper
- auth: login and registration pages
- products / clients: paginated list pages with create, edit and delete
- client_detail: client data, allocated stock and the transfer modal
- search_panel, results, dialogs: building blocks of the list pages

Components are plain functions returning Reflex components; all state
lives in stock_ui.state.
"""

from stock_ui.components.auth import login_page, register_page
from stock_ui.components.client_detail import client_detail_page
from stock_ui.components.clients import clients_page
from stock_ui.components.layout import protected
from stock_ui.components.products import products_page

__all__ = [
    "client_detail_page",
    "clients_page",
    "login_page",
    "products_page",
    "protected",
    "register_page",
]
