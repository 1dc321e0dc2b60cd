"""
Order summary projection.

Turns pricing results into the rows the checkout page renders. Nothing here
feeds back into the pricing engine.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Tuple

from checkout.config import get_settings
from pricing.models import OrderTotals, Pending, PricingResult

MONTHLY_SCHEDULE = "Monthly on the 1st"
ONE_TIME_SCHEDULE = "One-time charge"
AUTO_RENEWAL_NOTE = "Yes, cancel anytime"
REFUND_POLICY = "30-day money-back guarantee"

FREQUENCY_SUFFIXES = {
    "per month": "/month",
}


@dataclass(frozen=True)
class SummaryRow:
    label: str
    value: str


@dataclass(frozen=True)
class OrderSummary:
    items: Tuple[SummaryRow, ...] = ()
    totals: Tuple[SummaryRow, ...] = ()
    notes: Tuple[SummaryRow, ...] = ()
    prompt: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.prompt is not None

    @property
    def rows(self) -> Tuple[SummaryRow, ...]:
        """Itemization followed by the Subtotal, Tax and Total rows."""
        return self.items + self.totals


def format_money(amount: Decimal, symbol: Optional[str] = None) -> str:
    """Format an amount as ``$1,234.56``."""
    if symbol is None:
        symbol = get_settings().CURRENCY_SYMBOL
    return f"{symbol}{amount:,.2f}"


def tax_label(rate: Decimal) -> str:
    percent = (rate * 100).normalize()
    return f"Tax ({percent:f}%)"


def build_summary(result: PricingResult, symbol: Optional[str] = None) -> OrderSummary:
    """Project a pricing result into summary rows."""
    if isinstance(result, Pending):
        return OrderSummary(
            notes=(SummaryRow("Payment Schedule", MONTHLY_SCHEDULE),
                   SummaryRow("Auto-renewal", AUTO_RENEWAL_NOTE),
                   SummaryRow("Refund Policy", REFUND_POLICY)),
            prompt=result.prompt,
        )

    if not isinstance(result, OrderTotals):
        raise TypeError(f"Cannot summarize {result!r}")

    items: List[SummaryRow] = [
        SummaryRow(item.name, format_money(item.price, symbol)) for item in result.items
    ]
    items.append(SummaryRow(tax_label(result.tax_rate), format_money(result.tax, symbol)))

    suffix = FREQUENCY_SUFFIXES.get(result.frequency, "") if result.frequency else ""
    totals = (
        SummaryRow("Subtotal", format_money(result.subtotal, symbol)),
        SummaryRow("Tax", format_money(result.tax, symbol)),
        SummaryRow("Total", format_money(result.total, symbol) + suffix),
    )

    notes = [SummaryRow("Payment Schedule", MONTHLY_SCHEDULE if result.is_recurring else ONE_TIME_SCHEDULE)]
    if result.is_recurring:
        notes.append(SummaryRow("Auto-renewal", AUTO_RENEWAL_NOTE))
    notes.append(SummaryRow("Refund Policy", REFUND_POLICY))

    return OrderSummary(items=tuple(items), totals=totals, notes=tuple(notes))
