"""
Modal dialogs shared by the list and detail pages.
"""

import reflex as rx


def form_dialog(
    title,
    fields: list[rx.Component],
    open,
    on_open_change,
    on_submit,
    key=None,
    submit_label: str = "Save",
) -> rx.Component:
    """
    Dialog wrapping a form whose values are submitted as a dict.

    Args:
        title: Dialog title (string or Var).
        fields: Named inputs of the form.
        open: Var controlling visibility.
        on_open_change: Event receiving the new visibility.
        on_submit: Event receiving the form data.
        key: Optional Var that remounts the form when it changes, so
            default values are refreshed for each edited item.
        submit_label: Text of the submit button.
    """
    form = rx.form(
        rx.vstack(
            *fields,
            rx.hstack(
                rx.dialog.close(rx.button("Cancel", variant="soft", color_scheme="gray")),
                rx.button(submit_label, type="submit"),
                justify="end",
                width="100%",
            ),
            spacing="3",
        ),
        on_submit=on_submit,
        reset_on_submit=False,
    )
    if key is not None:
        form = rx.box(form, key=key)
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title(title),
            form,
        ),
        open=open,
        on_open_change=on_open_change,
    )


def confirm_delete_dialog(state: type[rx.State], noun: str) -> rx.Component:
    """Confirmation before deleting ``state.target_name``."""
    return rx.alert_dialog.root(
        rx.alert_dialog.content(
            rx.alert_dialog.title("Confirm deletion"),
            rx.alert_dialog.description(
                rx.text.span(f"Are you sure you want to delete the {noun} "),
                rx.text.strong(f'"{state.target_name}"'),
                rx.text.span("?"),
            ),
            rx.hstack(
                rx.alert_dialog.cancel(
                    rx.button("Cancel", variant="soft", color_scheme="gray")
                ),
                rx.button(
                    "Yes, delete",
                    color_scheme="red",
                    on_click=state.confirm_delete,
                ),
                justify="end",
                spacing="3",
                margin_top="1.5rem",
            ),
        ),
        open=state.delete_open,
        on_open_change=state.set_delete_open,
    )
