"""
Checkout session.

One session per customer checkout. It holds the purchase mode, the chosen
plan and the payment form, and keeps the amount shown on the form in step
with the pricing engine.
"""
import logging
from decimal import Decimal
from typing import Optional, Union

from checkout.catalog import DEFAULT_CATALOG, Catalog, PlanId
from checkout.errors import CheckoutError
from checkout.logging import log_action
from payment.controller import PaymentSubmissionController
from payment.models import PaymentMethod, SubmissionStatus
from payment.processor import PaymentProcessor, SimulatedPaymentProcessor
from pricing.engine import PricingEngine
from pricing.models import OneTime, OrderTotals, PricingResult, PurchaseMode, Subscription
from pricing.summary import OrderSummary, build_summary

logger = logging.getLogger(__name__)


class CheckoutSession:
    """Purchase-mode selection, order summary and payment form for one customer."""

    def __init__(
        self,
        catalog: Catalog = DEFAULT_CATALOG,
        processor: Optional[PaymentProcessor] = None,
        method: PaymentMethod = PaymentMethod.CARD,
        tax_rate: Optional[Union[Decimal, float, str]] = None,
        success_reset_seconds: Optional[float] = None,
        submit_timeout_seconds: Optional[float] = None,
    ):
        self.catalog = catalog
        self.pricing = PricingEngine(catalog, tax_rate)
        self.mode: PurchaseMode = OneTime()
        self.payment = PaymentSubmissionController(
            method,
            processor or SimulatedPaymentProcessor(),
            success_reset_seconds=success_reset_seconds,
            submit_timeout_seconds=submit_timeout_seconds,
        )
        self._refresh_amount()

    @property
    def selected_plan(self) -> Optional[PlanId]:
        if self.mode.is_subscription:
            return self.mode.plan_id
        return None

    @property
    def totals(self) -> PricingResult:
        return self.pricing.compute_totals(self.mode)

    @property
    def summary(self) -> OrderSummary:
        return build_summary(self.totals)

    @property
    def amount_due(self) -> Optional[Decimal]:
        result = self.totals
        return result.total if isinstance(result, OrderTotals) else None

    @property
    def status(self) -> SubmissionStatus:
        return self.payment.status

    def choose_one_time(self) -> None:
        """Switch to a single charge; any selected plan is dropped."""
        self.mode = OneTime()
        self._refresh_amount()

    def choose_subscription(self) -> None:
        """Switch to subscription mode with no plan chosen yet."""
        self.mode = Subscription()
        self._refresh_amount()

    def select_plan(self, plan_id: Union[PlanId, str]) -> None:
        if not isinstance(self.mode, Subscription):
            raise CheckoutError("Switch to subscription mode before selecting a plan")
        plan = self.catalog.get_plan(plan_id)
        self.mode = Subscription(plan.id)
        self._refresh_amount()

    def select_payment_method(self, method: PaymentMethod) -> None:
        self.payment.switch_method(method)

    def set_field(self, name: str, value: str) -> None:
        self.payment.set_field(name, value)

    async def submit(self) -> SubmissionStatus:
        return await self.payment.submit()

    def dismiss_success(self) -> None:
        self.payment.dismiss_success()

    def dismiss_error(self) -> None:
        self.payment.dismiss_error()

    def close(self) -> None:
        self.payment.close()

    def _refresh_amount(self) -> None:
        amount = self.amount_due
        self.payment.set_amount(amount)
        log_action(
            "checkout.mode_changed",
            f"Purchase mode is now {self.mode!r}",
            level="debug",
            amount=None if amount is None else str(amount),
        )
