"""
Pricing engine for the checkout page.

Totals are derived from the active purchase mode and the shared catalog.
Tax is rounded to cents on its own, then the subtotal+tax sum is rounded
again; both roundings are half-up.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

from checkout.catalog import Catalog, LineItem
from checkout.config import get_settings
from checkout.errors import ConfigurationError
from pricing.models import (
    PENDING,
    PER_MONTH,
    OneTime,
    OrderTotals,
    PricingResult,
    PurchaseMode,
    Subscription,
)

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    """Round to the currency's minor unit, half-up."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_tax_rate(rate: Union[Decimal, float, str]) -> Decimal:
    """Normalize a configured tax rate, rejecting values outside [0, 1]."""
    value = rate if isinstance(rate, Decimal) else Decimal(str(rate))
    if not value.is_finite() or value < 0 or value > 1:
        raise ConfigurationError(f"Tax rate must be between 0 and 1, got {rate!r}")
    return value


def _totals(items: Iterable[LineItem], tax_rate: Decimal, frequency: Optional[str]) -> OrderTotals:
    items = tuple(items)
    subtotal = Decimal("0")
    for item in items:
        subtotal += item.price
    tax = round_money(subtotal * tax_rate)
    total = round_money(subtotal + tax)
    return OrderTotals(
        items=items,
        subtotal=subtotal,
        tax=tax,
        total=total,
        tax_rate=tax_rate,
        frequency=frequency,
    )


def compute_totals(
    mode: PurchaseMode,
    catalog: Catalog,
    tax_rate: Union[Decimal, float, str, None] = None,
) -> PricingResult:
    """
    Compute order totals for a purchase mode.

    Args:
        mode: ``OneTime()`` or ``Subscription(plan_id)``
        catalog: Shared catalog holding plans and one-time items
        tax_rate: Overrides the configured ``TAX_RATE``

    Returns:
        OrderTotals, or ``PENDING`` when a subscription has no plan yet

    Raises:
        ConfigurationError: If the plan id is not in the catalog
    """
    rate = to_tax_rate(get_settings().TAX_RATE if tax_rate is None else tax_rate)

    if isinstance(mode, Subscription):
        if mode.is_pending:
            return PENDING
        plan = catalog.get_plan(mode.plan_id)
        return _totals(
            [LineItem(name=plan.name, price=plan.price)],
            rate,
            PER_MONTH,
        )

    if isinstance(mode, OneTime):
        return _totals(catalog.one_time_items, rate, None)

    raise TypeError(f"Unsupported purchase mode: {mode!r}")


class PricingEngine:
    """Binds the shared catalog and tax rate so callers only pass the purchase mode."""

    def __init__(self, catalog: Catalog, tax_rate: Union[Decimal, float, str, None] = None):
        self.catalog = catalog
        self.tax_rate = to_tax_rate(get_settings().TAX_RATE if tax_rate is None else tax_rate)

    def compute_totals(self, mode: PurchaseMode) -> PricingResult:
        result = compute_totals(mode, self.catalog, self.tax_rate)
        logger.debug(f"Computed totals for {mode!r}: {result!r}")
        return result

    def amount_due(self, mode: PurchaseMode) -> Optional[Decimal]:
        """Total to charge, or None while the mode is pending."""
        result = self.compute_totals(mode)
        if isinstance(result, OrderTotals):
            return result.total
        return None
