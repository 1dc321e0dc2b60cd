"""
Tests for the payment form schemas.
"""

import pytest

from checkout.errors import PaymentValidationError
from payment.models import PaymentMethod
from payment.schemas import (
    CardFields,
    ensure_valid,
    field_names,
    validate_field,
    validate_fields,
)
from tests.helpers import VALID_CARD_FIELDS, VALID_WALLET_FIELDS


def card(**overrides):
    return {**VALID_CARD_FIELDS, **overrides}


def wallet(**overrides):
    return {**VALID_WALLET_FIELDS, **overrides}


class TestCardSchema:
    """Card payment fields."""

    def test_valid_card(self):
        assert validate_fields(PaymentMethod.CARD, card()) == {}

    def test_card_number_length(self):
        errors = validate_fields(PaymentMethod.CARD, card(card_number="424242424242424"))
        assert errors == {"card_number": "Card number must be 16 digits"}

        assert validate_fields(PaymentMethod.CARD, card(card_number="4242424242424242")) == {}

    @pytest.mark.parametrize("number", ["4242 4242 4242 4242", "42424242424242424", "42424242424242a2", ""])
    def test_card_number_rejected(self, number):
        assert "card_number" in validate_fields(PaymentMethod.CARD, card(card_number=number))

    @pytest.mark.parametrize("cvc,valid", [
        ("12", False),
        ("123", True),
        ("1234", True),
        ("12345", False),
        ("12a", False),
    ])
    def test_cvc(self, cvc, valid):
        errors = validate_fields(PaymentMethod.CARD, card(cvc=cvc))
        if valid:
            assert errors == {}
        else:
            assert errors == {"cvc": "CVC must be 3-4 digits"}

    @pytest.mark.parametrize("expiry,valid", [
        ("12/29", True),
        ("01/30", True),
        ("1/29", False),
        ("12-29", False),
        ("12/2029", False),
        ("", False),
    ])
    def test_expiry(self, expiry, valid):
        errors = validate_fields(PaymentMethod.CARD, card(expiry=expiry))
        assert ("expiry" not in errors) is valid
        if not valid:
            assert errors["expiry"] == "Format: MM/YY"

    def test_cardholder_name_required(self):
        errors = validate_fields(PaymentMethod.CARD, card(cardholder_name=""))
        assert errors == {"cardholder_name": "Cardholder name is required"}

    def test_all_errors_reported_together(self):
        errors = validate_fields(PaymentMethod.CARD, {})

        assert errors == {
            "email": "Invalid email address",
            "cardholder_name": "Cardholder name is required",
            "card_number": "Card number must be 16 digits",
            "expiry": "Format: MM/YY",
            "cvc": "CVC must be 3-4 digits",
        }

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError, match="confirm_email"):
            validate_fields(PaymentMethod.CARD, card(confirm_email="jane.doe@acme.com"))

    def test_field_order(self):
        assert field_names(PaymentMethod.CARD) == (
            "email", "cardholder_name", "card_number", "expiry", "cvc",
        )


class TestRedirectWalletSchema:
    """Redirect-wallet payment fields."""

    def test_valid_wallet(self):
        assert validate_fields(PaymentMethod.REDIRECT_WALLET, wallet()) == {}

    def test_malformed_primary_email(self):
        errors = validate_fields(PaymentMethod.REDIRECT_WALLET, wallet(email="not-an-email"))
        assert errors == {"email": "Invalid email address"}

    def test_malformed_confirm_email(self):
        errors = validate_fields(PaymentMethod.REDIRECT_WALLET, wallet(confirm_email="not-an-email"))
        assert errors == {"confirm_email": "Invalid email address"}

    def test_both_malformed(self):
        errors = validate_fields(
            PaymentMethod.REDIRECT_WALLET,
            wallet(email="not-an-email", confirm_email="not-an-email"),
        )
        assert set(errors) == {"email", "confirm_email"}

    def test_confirm_email_not_compared(self):
        values = wallet(confirm_email="someone.else@acme.com")
        assert validate_fields(PaymentMethod.REDIRECT_WALLET, values) == {}

    def test_card_fields_rejected(self):
        with pytest.raises(ValueError):
            validate_fields(PaymentMethod.REDIRECT_WALLET, wallet(cvc="123"))


class TestHelpers:

    def test_validate_single_field(self):
        values = card(cvc="1")
        assert validate_field(PaymentMethod.CARD, "cvc", values) == "CVC must be 3-4 digits"
        assert validate_field(PaymentMethod.CARD, "email", values) == ""

    def test_ensure_valid_returns_model(self):
        fields = ensure_valid(PaymentMethod.CARD, card())
        assert isinstance(fields, CardFields)
        assert fields.card_number == "4242424242424242"

    def test_ensure_valid_raises_with_error_map(self):
        with pytest.raises(PaymentValidationError) as exc_info:
            ensure_valid(PaymentMethod.REDIRECT_WALLET, wallet(email="nope"))
        assert exc_info.value.errors == {"email": "Invalid email address"}


class TestEmailSyntax:
    """Email fields accept any well-formed address."""

    @pytest.mark.parametrize("address", ["jane@shop.test", "jane@mail.local", "a@b.co"])
    def test_special_use_domains_accepted(self, address):
        errors = validate_fields(PaymentMethod.REDIRECT_WALLET, wallet(email=address))
        assert errors == {}

    @pytest.mark.parametrize("address", ["not-an-email", "user@localhost", "jane@", "@shop.test"])
    def test_malformed_addresses_rejected(self, address):
        errors = validate_fields(PaymentMethod.REDIRECT_WALLET, wallet(email=address))
        assert errors == {"email": "Invalid email address"}
