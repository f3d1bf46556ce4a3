"""Tests for the local form checks."""

from __future__ import annotations

import pytest

from stock_ui.errors import ValidationError
from stock_ui.forms import (
    validate_client,
    validate_credentials,
    validate_product,
    validate_registration,
    validate_transfer,
)


class TestCredentials:
    def test_email_is_trimmed(self) -> None:
        assert validate_credentials("  a@b.com ", "pw") == ("a@b.com", "pw")

    def test_missing_password(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            validate_credentials("a@b.com", "")
        assert excinfo.value.field == "password"


class TestRegistration:
    def test_valid_registration(self) -> None:
        assert validate_registration("a@b.com", "Secret123", "Secret123")[0] == "a@b.com"

    @pytest.mark.parametrize(
        ("email", "password", "confirm", "field"),
        [
            ("not-an-email", "Secret123", "Secret123", "email"),
            ("a@b.com", "Sec1", "Sec1", "password"),
            ("a@b.com", "secret123", "secret123", "password"),
            ("a@b.com", "SECRET123", "SECRET123", "password"),
            ("a@b.com", "SecretXYZ", "SecretXYZ", "password"),
            ("a@b.com", "Secret123", "Secret124", "password_confirm"),
        ],
    )
    def test_rejections(self, email: str, password: str, confirm: str, field: str) -> None:
        with pytest.raises(ValidationError) as excinfo:
            validate_registration(email, password, confirm)
        assert excinfo.value.field == field


class TestProduct:
    def test_decimal_comma_price(self) -> None:
        assert validate_product(" Porca ", " caixa ", "12,50", "3") == {
            "name": "Porca",
            "description": "caixa",
            "price_in_cents": 1250,
            "quantity": 3,
        }

    def test_integer_cents_are_taken_as_is(self) -> None:
        assert validate_product("Porca", "", 990, 0)["price_in_cents"] == 990

    @pytest.mark.parametrize(
        ("name", "price", "quantity", "field"),
        [
            ("", "1", "1", "name"),
            ("Porca", "", "1", "price"),
            ("Porca", "abc", "1", "price"),
            ("Porca", "-1", "1", "price"),
            ("Porca", "1", "-2", "quantity"),
            ("Porca", "1", "1.5", "quantity"),
        ],
    )
    def test_rejections(self, name: str, price: str, quantity: str, field: str) -> None:
        with pytest.raises(ValidationError) as excinfo:
            validate_product(name, "", price, quantity)
        assert excinfo.value.field == field


class TestClient:
    def test_optional_contact(self) -> None:
        assert validate_client("Loja", None, " 123 ") == {
            "name": "Loja",
            "email": "",
            "phone": "123",
        }

    def test_invalid_email(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            validate_client("Loja", "loja@", "")
        assert excinfo.value.field == "email"


class TestTransfer:
    def test_within_available_stock(self) -> None:
        assert validate_transfer("p1", "5", available=5) == ("p1", 5)

    def test_unknown_availability_is_not_checked(self) -> None:
        assert validate_transfer("p1", 500) == ("p1", 500)

    @pytest.mark.parametrize(
        ("product_id", "quantity", "available", "field"),
        [
            (None, 1, None, "product_id"),
            ("p1", 0, None, "quantity"),
            ("p1", None, None, "quantity"),
            ("p1", 6, 5, "quantity"),
        ],
    )
    def test_rejections(self, product_id, quantity, available, field: str) -> None:
        with pytest.raises(ValidationError) as excinfo:
            validate_transfer(product_id, quantity, available)
        assert excinfo.value.field == field
