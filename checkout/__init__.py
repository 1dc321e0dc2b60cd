"""
Checkout engine core: catalog, configuration, errors and logging.

Pricing lives in ``pricing``, payment forms in ``payment``; a
``checkout.session.CheckoutSession`` ties them together.
"""
from checkout.catalog import DEFAULT_CATALOG, Catalog, LineItem, Plan, PlanId
from checkout.config import Settings, get_settings
from checkout.errors import (
    CheckoutError,
    ConfigurationError,
    PaymentValidationError,
    SubmissionError,
)

__all__ = [
    "DEFAULT_CATALOG",
    "Catalog",
    "CheckoutError",
    "ConfigurationError",
    "LineItem",
    "PaymentValidationError",
    "Plan",
    "PlanId",
    "Settings",
    "SubmissionError",
    "get_settings",
]
