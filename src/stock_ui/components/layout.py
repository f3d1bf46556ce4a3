"""
Page chrome and route protection for the Stock UI.

``protected`` renders a page body only once the route guard admits it.
Until the session is resolved the user sees a loading placeholder, and
an unauthenticated visitor sees nothing while the redirect happens.
"""

from typing import Callable

import reflex as rx

from stock_ui import config
from stock_ui.guard import GuardOutcome
from stock_ui.state import AuthState


def navbar() -> rx.Component:
    """Top navigation with the logged in user and logout button."""
    return rx.hstack(
        rx.link(rx.heading(config.APP_TITLE, size="5"), href="/"),
        rx.hstack(
            rx.link("Products", href="/"),
            rx.link("Clients", href="/clients"),
            spacing="4",
        ),
        rx.spacer(),
        rx.text(AuthState.user_email, class_name="muted"),
        rx.button(
            rx.icon("log-out", size=16),
            "Logout",
            variant="soft",
            on_click=AuthState.logout,
        ),
        class_name="navbar",
        align="center",
        spacing="5",
        width="100%",
    )


def loading_placeholder(message: str = "Loading...") -> rx.Component:
    return rx.box(
        rx.box(class_name="spinner"),
        rx.text(message, class_name="muted"),
        class_name="card loading-state",
    )


def page_shell(*children: rx.Component) -> rx.Component:
    """Wrap page content with the navbar and footer."""
    return rx.box(
        navbar(),
        rx.box(*children, class_name="app-container"),
        rx.text(config.APP_SUBTITLE, class_name="footer muted"),
        class_name="app-shell",
    )


def protected(body: Callable[[], rx.Component]) -> Callable[[], rx.Component]:
    """
    Build a page function whose body is only rendered when admitted.

    Args:
        body: Function building the protected page content.
    """

    def page() -> rx.Component:
        return rx.match(
            AuthState.guard_outcome,
            (GuardOutcome.ADMIT.value, page_shell(body())),
            (GuardOutcome.REDIRECT.value, rx.fragment()),
            loading_placeholder("Checking your session..."),
        )

    page.__name__ = body.__name__
    return page
