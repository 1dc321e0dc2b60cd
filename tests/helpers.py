"""
Shared test data and doubles.
"""

import asyncio
from typing import Dict

from payment.controller import PaymentSubmissionController
from payment.models import Confirmation, PaymentMethod
from payment.processor import PaymentProcessor

VALID_CARD_FIELDS: Dict[str, str] = {
    "email": "jane.doe@acme.com",
    "cardholder_name": "Jane Doe",
    "card_number": "4242424242424242",
    "expiry": "12/29",
    "cvc": "123",
}

VALID_WALLET_FIELDS: Dict[str, str] = {
    "email": "jane.doe@acme.com",
    "confirm_email": "jane.doe@acme.com",
}


class GatedProcessor(PaymentProcessor):
    """Processor that blocks until the test releases it."""

    def __init__(self):
        self.release = asyncio.Event()
        self.calls = []

    async def submit_payment(self, method, amount, fields):
        self.calls.append((method, amount, dict(fields)))
        await self.release.wait()
        return Confirmation(
            confirmation_id=f"pay_test_{len(self.calls)}",
            provider=PaymentMethod(method).provider,
            amount=amount,
        )


def fill(controller: PaymentSubmissionController, values: Dict[str, str]) -> None:
    for name, value in values.items():
        controller.set_field(name, value)
