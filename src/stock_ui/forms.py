"""
Local form checks run before any request is sent.

Each function either returns the cleaned request payload or raises
ValidationError naming the offending field. No network call is made
when a check fails.
"""

import re

from stock_ui.errors import ValidationError
from stock_ui.models.stock import client_payload, product_payload
from stock_ui.utils import parse_price

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 8


def _required(value: str | None, field: str, label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{label} is required.", field)
    return cleaned


def _non_negative_int(value: str | int | None, field: str, label: str) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{label} must be a whole number.", field) from e
    if number < 0:
        raise ValidationError(f"{label} cannot be negative.", field)
    return number


def validate_credentials(email: str, password: str) -> tuple[str, str]:
    """Check the login form."""
    email = _required(email, "email", "Email")
    if not password:
        raise ValidationError("Password is required.", "password")
    return email, password


def validate_registration(email: str, password: str, password_confirm: str) -> tuple[str, str, str]:
    """
    Check the registration form.

    Mirrors the back end's password policy: at least eight characters
    with upper case, lower case and a digit.
    """
    email = _required(email, "email", "Email")
    if not _EMAIL_RE.match(email):
        raise ValidationError("Enter a valid email address.", "email")
    if (
        len(password) < MIN_PASSWORD_LENGTH
        or not any(c.isupper() for c in password)
        or not any(c.islower() for c in password)
        or not any(c.isdigit() for c in password)
    ):
        raise ValidationError(
            "Password needs 8+ characters with upper case, lower case and a digit.",
            "password",
        )
    if password != password_confirm:
        raise ValidationError("Passwords do not match.", "password_confirm")
    return email, password, password_confirm


def validate_product(
    name: str, description: str, price: str | int, quantity: str | int
) -> dict:
    """
    Check the product form and build its payload.

    ``price`` is either a decimal string typed by the user (``"12,50"``)
    or an integer amount of cents.
    """
    name = _required(name, "name", "Name")
    if isinstance(price, int):
        cents = price
    else:
        try:
            cents = parse_price(_required(price, "price", "Price"))
        except ValueError as e:
            raise ValidationError("Price must be a number.", "price") from e
    if cents < 0:
        raise ValidationError("Price cannot be negative.", "price")
    qty = _non_negative_int(quantity, "quantity", "Quantity")
    return product_payload(name, (description or "").strip(), cents, qty)


def validate_client(name: str, email: str | None, phone: str | None) -> dict:
    """Check the client form and build its payload."""
    name = _required(name, "name", "Name")
    email = (email or "").strip()
    if email and not _EMAIL_RE.match(email):
        raise ValidationError("Enter a valid email address.", "email")
    return client_payload(name, email, (phone or "").strip())


def validate_transfer(
    product_id: str | None, quantity: str | int | None, available: int | None = None
) -> tuple[str, int]:
    """
    Check the stock transfer form.

    Args:
        product_id: Selected product.
        quantity: Units to transfer.
        available: Global stock of the selected product, when known.
    """
    product_id = _required(product_id, "product_id", "Product")
    qty = _non_negative_int(quantity, "quantity", "Quantity")
    if qty == 0:
        raise ValidationError("Quantity must be greater than zero.", "quantity")
    if available is not None and qty > available:
        raise ValidationError(
            f"Only {available} units are available.", "quantity"
        )
    return product_id, qty
