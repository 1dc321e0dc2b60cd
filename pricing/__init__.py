from pricing.engine import PricingEngine, compute_totals, round_money
from pricing.models import (
    PENDING,
    OneTime,
    OrderTotals,
    Pending,
    PurchaseMode,
    Subscription,
)
from pricing.summary import OrderSummary, SummaryRow, build_summary, format_money

__all__ = [
    "PENDING",
    "OneTime",
    "OrderSummary",
    "OrderTotals",
    "Pending",
    "PricingEngine",
    "PurchaseMode",
    "Subscription",
    "SummaryRow",
    "build_summary",
    "compute_totals",
    "format_money",
    "round_money",
]
