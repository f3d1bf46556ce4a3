"""
Reflex application entry point for the Stock UI.

This module initializes the Reflex app and registers its routes. Every
page resolves the session on load; protected pages render their body
only once the route guard admits them.
"""

import reflex as rx

from stock_ui import config
from stock_ui.components import (
    client_detail_page,
    clients_page,
    login_page,
    products_page,
    protected,
    register_page,
)
from stock_ui.lib import logs
from stock_ui.state import AuthState

LOG = logs.logger(__file__)

LOG.info("STOCK_UI_SERVICE: %s", config.SERVICE_KIND)
LOG.info("STOCK_UI_API_URL: %s", config.API_URL)

# Font URLs for theming
_FONT_URL_GENERIC = "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap"
_FONT_URL_BRANDED = "https://fonts.googleapis.com/css2?family=Source+Sans+3:wght@300;400;500;600;700&display=swap"
_FONT_URL = _FONT_URL_GENERIC if config.USE_GENERIC_BRANDING else _FONT_URL_BRANDED


# Create the Reflex app
app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
    stylesheets=[
        _FONT_URL,
        "/styles.css",
    ],
)

app.add_page(
    protected(products_page),
    route="/",
    title=f"Products | {config.APP_TITLE}",
    on_load=AuthState.check_session,
)
app.add_page(
    protected(clients_page),
    route="/clients",
    title=f"Clients | {config.APP_TITLE}",
    on_load=AuthState.check_session,
)
app.add_page(
    protected(client_detail_page),
    route="/clients/[client_id]",
    title=f"Client | {config.APP_TITLE}",
    on_load=AuthState.check_session,
)
app.add_page(
    login_page,
    route="/login",
    title=f"Sign in | {config.APP_TITLE}",
    on_load=AuthState.check_session,
)
app.add_page(
    register_page,
    route="/register",
    title=f"Register | {config.APP_TITLE}",
    on_load=AuthState.check_session,
)


def main() -> None:
    """Entrypoint used via `stock-ui` once the package is installed."""
    # In production, use `reflex run` from the project root instead
    import subprocess
    import sys

    subprocess.run([sys.executable, "-m", "reflex", "run", "--port", str(config.APP_PORT)])


if __name__ == "__main__":
    main()
