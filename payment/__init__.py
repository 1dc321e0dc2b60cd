"""
Payment forms, validation schemas and the submission state machine.
"""
from payment.controller import PaymentSubmissionController
from payment.models import (
    Confirmation,
    PaymentFormState,
    PaymentMethod,
    SubmissionState,
    SubmissionStatus,
)
from payment.processor import PaymentProcessor, SimulatedPaymentProcessor
from payment.schemas import CardFields, RedirectWalletFields, ensure_valid, validate_fields

__all__ = [
    "CardFields",
    "Confirmation",
    "PaymentFormState",
    "PaymentMethod",
    "PaymentProcessor",
    "PaymentSubmissionController",
    "RedirectWalletFields",
    "SimulatedPaymentProcessor",
    "SubmissionState",
    "SubmissionStatus",
    "ensure_valid",
    "validate_fields",
]
