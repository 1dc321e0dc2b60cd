"""
Payment processors called by the submission controller.

Real gateway integration lives outside this package. ``SimulatedPaymentProcessor``
reproduces the checkout page's behaviour: wait a fixed delay, then succeed.
"""
import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from checkout.config import get_settings
from checkout.errors import SubmissionError
from payment.models import Confirmation, PaymentMethod


class PaymentProcessor(ABC):
    """
    Contract for charging a validated payment form.

    ``submit_payment`` resolves exactly once per call, returning a
    Confirmation or raising SubmissionError with a message fit for the user.
    """

    @abstractmethod
    async def submit_payment(
        self,
        method: PaymentMethod,
        amount: Decimal,
        fields: Dict[str, str]
    ) -> Confirmation:
        raise NotImplementedError


class SimulatedPaymentProcessor(PaymentProcessor):
    """Stand-in processor with a fixed network delay and a configurable outcome."""

    def __init__(self, delay: Optional[float] = None, failure_message: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        self.delay = get_settings().SIMULATED_DELAY_SECONDS if delay is None else delay
        self.failure_message = failure_message
        self.calls: List[Tuple[PaymentMethod, Decimal, Dict[str, str]]] = []

    async def submit_payment(
        self,
        method: PaymentMethod,
        amount: Decimal,
        fields: Dict[str, str]
    ) -> Confirmation:
        """Simulate a charge through the method's provider."""
        method = PaymentMethod(method)
        self.calls.append((method, amount, dict(fields)))
        await asyncio.sleep(self.delay)

        if self.failure_message is not None:
            self.logger.warning(f"Simulated {method.provider} payment failed: {self.failure_message}")
            raise SubmissionError(self.failure_message)

        confirmation = Confirmation(
            confirmation_id=f"pay_{uuid.uuid4().hex[:16]}",
            provider=method.provider,
            amount=amount,
        )
        self.logger.info(
            f"Payment submitted via {method.provider}: {confirmation.confirmation_id} for {amount}"
        )
        return confirmation
