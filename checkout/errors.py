"""
Checkout error types.

Validation problems on individual fields are reported as data (an error
map keyed by field name); the exceptions below cover the cases that must
interrupt the caller.
"""
from typing import Dict, Optional


class CheckoutError(Exception):
    """Base exception for the checkout engine."""
    pass


class ConfigurationError(CheckoutError):
    """Raised when the catalog or settings are inconsistent, e.g. an unknown plan id."""
    pass


class SubmissionError(CheckoutError):
    """Raised by a payment collaborator when a charge could not be completed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PaymentValidationError(CheckoutError):
    """Raised when payment fields fail their schema and the caller asked for a hard failure."""

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(message or f"Invalid payment fields: {fields}")
