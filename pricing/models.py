"""
Purchase modes and pricing results.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple, Union

from checkout.catalog import LineItem, PlanId

PER_MONTH = "per month"
CHOOSE_PLAN_PROMPT = "Choose a plan to see your total"


@dataclass(frozen=True)
class OneTime:
    """A single charge for the fixed one-time line items."""

    @property
    def is_subscription(self) -> bool:
        return False


@dataclass(frozen=True)
class Subscription:
    """A recurring monthly charge. ``plan_id`` stays ``None`` until the customer picks a plan."""

    plan_id: Optional[PlanId] = None

    @property
    def is_subscription(self) -> bool:
        return True

    @property
    def is_pending(self) -> bool:
        return self.plan_id is None


PurchaseMode = Union[OneTime, Subscription]


@dataclass(frozen=True)
class Pending:
    """Totals cannot be computed yet because no plan has been chosen."""

    prompt: str = CHOOSE_PLAN_PROMPT


PENDING = Pending()


@dataclass(frozen=True)
class OrderTotals:
    items: Tuple[LineItem, ...]
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal
    frequency: Optional[str] = None

    @property
    def is_recurring(self) -> bool:
        return self.frequency is not None


PricingResult = Union[OrderTotals, Pending]
