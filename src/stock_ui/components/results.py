"""
Result area shared by the list pages.

Handles loading, error, empty and populated states plus pagination.
"""

from typing import Callable

import reflex as rx


def pagination(state: type[rx.State]) -> rx.Component:
    """Previous/next controls, hidden when there is a single page."""
    return rx.cond(
        state.total_pages > 1,
        rx.hstack(
            rx.button(
                "Previous",
                on_click=state.go_to_page(state.page - 1),
                disabled=state.page <= 1,
                variant="soft",
            ),
            rx.text(f"Page {state.page} of {state.total_pages}", class_name="muted"),
            rx.button(
                "Next",
                on_click=state.go_to_page(state.page + 1),
                disabled=state.page >= state.total_pages,
                variant="soft",
            ),
            class_name="pagination",
            align="center",
            justify="center",
            spacing="3",
        ),
    )


def list_results(
    state: type[rx.State],
    table: Callable[[], rx.Component],
    empty_message: str,
) -> rx.Component:
    """
    Build the result container of a list page.

    A failed first load shows a full error card; a failed later load
    keeps the previous rows on screen (the error arrives as a toast).
    """
    return rx.box(
        rx.cond(
            ~state.has_result,
            rx.cond(
                state.error != "",
                rx.box(
                    rx.icon("triangle-alert", class_name="empty-icon", size=48),
                    rx.text(state.error, class_name="muted"),
                    class_name="card empty-state",
                ),
                _loader(),
            ),
            rx.box(
                rx.cond(
                    state.is_empty,
                    _empty(state, empty_message),
                    table(),
                ),
                pagination(state),
                class_name="results",
            ),
        ),
        id="results-container",
    )


def _empty(state: type[rx.State], message: str) -> rx.Component:
    return rx.box(
        rx.icon("package-x", class_name="empty-icon", size=60),
        rx.heading(message, size="3", as_="h3"),
        rx.cond(
            state.search_term != "",
            rx.text(
                rx.text.span('No results match "'),
                rx.text.span(state.search_term),
                rx.text.span('". Try a different search term.'),
                class_name="muted",
            ),
        ),
        class_name="card empty-state",
    )


def _loader() -> rx.Component:
    return rx.box(
        rx.box(class_name="spinner"),
        rx.text("Loading...", class_name="muted"),
        class_name="card loading-state",
    )
