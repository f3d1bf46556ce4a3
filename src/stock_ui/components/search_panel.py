"""
Search panel component for list pages.

The input is uncontrolled: every keystroke goes straight to the page
state, and the list controller decides when the term is committed.
"""

import reflex as rx


def search_panel(state: type[rx.State], placeholder: str) -> rx.Component:
    """
    Build the search box for a list page.

    Args:
        state: List page state exposing ``search_term`` and ``set_search``.
        placeholder: Hint shown in the empty input.
    """
    return rx.box(
        rx.box(
            rx.icon("search", class_name="input-icon"),
            rx.input(
                placeholder=placeholder,
                default_value=state.search_term,
                on_change=state.set_search,
                class_name="search-input",
            ),
            class_name="input-with-icon",
        ),
        class_name="card search-card",
    )
