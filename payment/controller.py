"""
Payment submission controller.

Owns one payment form for one payment method: field values, per-field
errors and the submission status. Submission runs

    IDLE -> VALIDATING -> SUBMITTING -> SUCCEEDED | FAILED

A failed validation goes back to IDLE with the error map filled in. A
success clears the form and schedules a timed return to IDLE; any explicit
action before the timer fires cancels it.
"""
import asyncio
import logging
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from checkout.config import get_settings
from checkout.errors import CheckoutError, SubmissionError
from checkout.logging import log_action
from payment.models import (
    Confirmation,
    PaymentFormState,
    PaymentMethod,
    SubmissionState,
    SubmissionStatus,
)
from payment.processor import PaymentProcessor
from payment.schemas import check_field_names, field_names, validate_field, validate_fields
from pricing.summary import format_money

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Payment failed. Please try again."
TIMEOUT_MESSAGE = "timeout"
CANCELLED_MESSAGE = "Payment was cancelled"
PROCESSING_LABEL = "Processing..."

Listener = Callable[[PaymentFormState], None]


class PaymentSubmissionController:
    """
    State machine for submitting one payment form.

    Attributes:
        method: Active payment method; selects the field schema
        processor: Collaborator that performs the charge
        amount: Amount to charge, or None while the order total is pending
        success_reset_seconds: Delay before SUCCEEDED reverts to IDLE
        submit_timeout_seconds: Optional bound on a processor call
        last_confirmation: Confirmation from the most recent successful charge
    """

    def __init__(
        self,
        method: PaymentMethod,
        processor: PaymentProcessor,
        amount: Optional[Decimal] = None,
        success_reset_seconds: Optional[float] = None,
        submit_timeout_seconds: Optional[float] = None,
    ):
        settings = get_settings()
        self.method = PaymentMethod(method)
        self.processor = processor
        self.amount: Optional[Decimal] = None
        self.success_reset_seconds = (
            settings.SUCCESS_RESET_SECONDS if success_reset_seconds is None else success_reset_seconds
        )
        self.submit_timeout_seconds = (
            settings.SUBMIT_TIMEOUT_SECONDS if submit_timeout_seconds is None else submit_timeout_seconds
        )
        self.last_confirmation: Optional[Confirmation] = None

        self._form = PaymentFormState()
        self._submit_attempted = False
        self._reset_task: Optional[asyncio.Task] = None
        self._listeners: List[Listener] = []

        self.set_amount(amount)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def status(self) -> SubmissionStatus:
        return self._form.status

    @property
    def values(self) -> Dict[str, str]:
        return dict(self._form.values)

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._form.errors)

    @property
    def form_state(self) -> PaymentFormState:
        return self._form.snapshot()

    @property
    def can_submit(self) -> bool:
        return self.amount is not None and not self.status.is_busy

    @property
    def reset_pending(self) -> bool:
        return self._reset_task is not None and not self._reset_task.done()

    @property
    def submit_label(self) -> str:
        if self.status.is_busy:
            return PROCESSING_LABEL
        if self.amount is None:
            return f"Pay with {self.method.label}"
        return f"Pay {format_money(self.amount)} with {self.method.label}"

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback receiving a form snapshot on every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # User intents
    # ------------------------------------------------------------------

    def set_amount(self, amount: Optional[Decimal]) -> None:
        """Update the amount echoed from the pricing engine."""
        if amount is not None:
            if not isinstance(amount, Decimal):
                amount = Decimal(str(amount))
            if amount < 0:
                raise ValueError(f"Amount must be non-negative, got {amount}")
        self.amount = amount

    def set_field(self, name: str, value: str) -> None:
        """
        Store an entered value.

        Edits are buffered while a submission is in flight. After the first
        submit attempt, an edit re-validates that field.
        """
        check_field_names(self.method, [name])
        self._form.values[name] = value

        if self._submit_attempted and not self.status.is_busy:
            error = validate_field(self.method, name, self._form.values)
            if error:
                self._form.errors[name] = error
            else:
                self._form.errors.pop(name, None)
        self._notify()

    def switch_method(self, method: PaymentMethod) -> None:
        """Change payment method, discarding the previous method's values and errors."""
        method = PaymentMethod(method)
        if self.status.is_busy:
            raise CheckoutError("Cannot switch payment method while a payment is being submitted")
        if method == self.method:
            return

        self._cancel_reset()
        previous = self.method
        self.method = method
        self._submit_attempted = False
        self._form.values = {}
        self._form.errors = {}
        log_action(
            "payment.method_switched",
            f"Payment method changed from {previous.value} to {method.value}",
            method=method.value,
        )
        if self.status.state in (SubmissionState.SUCCEEDED, SubmissionState.FAILED):
            self._transition(SubmissionStatus.idle())
        else:
            self._notify()

    async def submit(self) -> SubmissionStatus:
        """
        Validate the form and, if valid, charge it through the processor.

        Ignored while a submission is already validating or in flight, and
        while the amount is still pending.

        Returns:
            The status after this call
        """
        if self.status.is_busy:
            logger.warning(f"Ignoring submit for {self.method.value}: {self.status.state.value} in progress")
            return self.status
        if self.amount is None:
            logger.warning(f"Ignoring submit for {self.method.value}: no amount to charge yet")
            return self.status

        self._cancel_reset()
        self._submit_attempted = True
        self._transition(SubmissionStatus.validating())

        errors = validate_fields(self.method, self._form.values)
        if errors:
            self._form.errors = errors
            log_action(
                "payment.validation_failed",
                f"{len(errors)} invalid field(s)",
                level="warning",
                method=self.method.value,
                fields=sorted(errors),
            )
            self._transition(SubmissionStatus.idle())
            return self.status

        self._form.errors = {}
        method = self.method
        amount = self.amount
        fields = {name: self._form.values.get(name, "") for name in field_names(method)}
        self._transition(SubmissionStatus.submitting())

        try:
            call = self.processor.submit_payment(method, amount, fields)
            if self.submit_timeout_seconds is not None:
                confirmation = await asyncio.wait_for(call, self.submit_timeout_seconds)
            else:
                confirmation = await call
        except SubmissionError as e:
            self._fail(e.message)
        except asyncio.TimeoutError:
            self._fail(TIMEOUT_MESSAGE)
        except asyncio.CancelledError:
            self._fail(CANCELLED_MESSAGE)
            raise
        except Exception as e:
            logger.exception(f"Unexpected error from {method.provider} processor: {e}")
            self._fail(GENERIC_FAILURE_MESSAGE)
        else:
            self._succeed(confirmation)

        return self.status

    def dismiss_success(self) -> None:
        """Leave the success screen immediately ("Make Another Payment")."""
        if self.status.state != SubmissionState.SUCCEEDED:
            return
        self._cancel_reset()
        self._transition(SubmissionStatus.idle())

    def dismiss_error(self) -> None:
        """Close the failure banner; entered values are kept."""
        if self.status.state != SubmissionState.FAILED:
            return
        self._transition(SubmissionStatus.idle())

    def close(self) -> None:
        """Cancel any pending timer. Call when the form goes away."""
        self._cancel_reset()
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _succeed(self, confirmation: Confirmation) -> None:
        self.last_confirmation = confirmation
        self._form.values = {}
        self._form.errors = {}
        self._submit_attempted = False
        log_action(
            "payment.succeeded",
            f"Payment confirmed: {confirmation.confirmation_id}",
            method=self.method.value,
            provider=confirmation.provider,
            amount=str(confirmation.amount),
        )
        self._transition(SubmissionStatus.succeeded())
        self._schedule_reset()

    def _fail(self, message: str) -> None:
        log_action(
            "payment.failed",
            message,
            level="error",
            method=self.method.value,
        )
        self._transition(SubmissionStatus.failed(message))

    def _transition(self, status: SubmissionStatus) -> None:
        previous = self._form.status
        self._form.status = status
        logger.debug(f"{self.method.value} form: {previous.state.value} -> {status.state.value}")
        self._notify()

    def _notify(self) -> None:
        snapshot = self._form.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.exception(f"Form listener failed: {e}")

    def _schedule_reset(self) -> None:
        self._cancel_reset()
        loop = asyncio.get_running_loop()
        self._reset_task = loop.create_task(self._revert_after_delay(self.success_reset_seconds))

    def _cancel_reset(self) -> None:
        if self._reset_task is not None and not self._reset_task.done():
            self._reset_task.cancel()
        self._reset_task = None

    async def _revert_after_delay(self, delay: float) -> None:
        await asyncio.sleep(delay)
        if self.status.state == SubmissionState.SUCCEEDED:
            self._reset_task = None
            self._transition(SubmissionStatus.idle())
