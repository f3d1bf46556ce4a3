"""
Login and registration pages.
"""

import reflex as rx

from stock_ui import config
from stock_ui.state import AuthState


def _auth_card(title: str, form: rx.Component, footer: rx.Component) -> rx.Component:
    return rx.center(
        rx.box(
            rx.heading(config.APP_TITLE, size="6", as_="h1"),
            rx.text(title, class_name="muted"),
            form,
            footer,
            class_name="card auth-card",
        ),
        class_name="app-shell",
        min_height="100vh",
    )


def login_page() -> rx.Component:
    """Email and password form; a valid login lands on the product list."""
    form = rx.form(
        rx.vstack(
            rx.input(name="email", placeholder="Email", type="email", width="100%"),
            rx.input(name="password", placeholder="Password", type="password", width="100%"),
            rx.button(
                rx.cond(AuthState.is_submitting, "Signing in...", "Sign in"),
                type="submit",
                disabled=AuthState.is_submitting,
                width="100%",
            ),
            spacing="3",
        ),
        on_submit=AuthState.login,
        reset_on_submit=False,
    )
    footer = rx.text(
        "No account yet? ",
        rx.link("Create one", href="/register"),
        class_name="muted",
    )
    return _auth_card("Sign in to manage your stock", form, footer)


def register_page() -> rx.Component:
    form = rx.form(
        rx.vstack(
            rx.input(name="email", placeholder="Email", type="email", width="100%"),
            rx.input(name="password", placeholder="Password", type="password", width="100%"),
            rx.input(
                name="password_confirm",
                placeholder="Confirm password",
                type="password",
                width="100%",
            ),
            rx.text(
                "At least 8 characters, with upper and lower case letters and a digit.",
                class_name="muted",
                size="1",
            ),
            rx.button(
                rx.cond(AuthState.is_submitting, "Creating account...", "Create account"),
                type="submit",
                disabled=AuthState.is_submitting,
                width="100%",
            ),
            spacing="3",
        ),
        on_submit=AuthState.register,
        reset_on_submit=False,
    )
    footer = rx.text(
        "Already registered? ",
        rx.link("Sign in", href="/login"),
        class_name="muted",
    )
    return _auth_card("Create your account", form, footer)
