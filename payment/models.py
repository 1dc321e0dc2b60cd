from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class PaymentMethod(str, Enum):
    CARD = 'card'
    REDIRECT_WALLET = 'redirect_wallet'

    @property
    def provider(self) -> str:
        """Provider tag sent to the payment collaborator."""
        return PROVIDER_TAGS[self]

    @property
    def label(self) -> str:
        return METHOD_LABELS[self]


PROVIDER_TAGS = {
    PaymentMethod.CARD: 'stripe',
    PaymentMethod.REDIRECT_WALLET: 'paypal',
}

METHOD_LABELS = {
    PaymentMethod.CARD: 'Card',
    PaymentMethod.REDIRECT_WALLET: 'PayPal',
}


class SubmissionState(str, Enum):
    IDLE = 'idle'
    VALIDATING = 'validating'
    SUBMITTING = 'submitting'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


@dataclass(frozen=True)
class SubmissionStatus:
    state: SubmissionState = SubmissionState.IDLE
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "SubmissionStatus":
        return cls(SubmissionState.IDLE)

    @classmethod
    def validating(cls) -> "SubmissionStatus":
        return cls(SubmissionState.VALIDATING)

    @classmethod
    def submitting(cls) -> "SubmissionStatus":
        return cls(SubmissionState.SUBMITTING)

    @classmethod
    def succeeded(cls) -> "SubmissionStatus":
        return cls(SubmissionState.SUCCEEDED)

    @classmethod
    def failed(cls, message: str) -> "SubmissionStatus":
        return cls(SubmissionState.FAILED, message)

    @property
    def is_busy(self) -> bool:
        return self.state in (SubmissionState.VALIDATING, SubmissionState.SUBMITTING)


@dataclass
class PaymentFormState:
    values: Dict[str, str] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    status: SubmissionStatus = field(default_factory=SubmissionStatus.idle)

    def snapshot(self) -> "PaymentFormState":
        return PaymentFormState(
            values=dict(self.values),
            errors=dict(self.errors),
            status=self.status,
        )


class Confirmation(BaseModel):
    model_config = ConfigDict(frozen=True)

    confirmation_id: str
    provider: str
    amount: Decimal = Field(ge=0)
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
