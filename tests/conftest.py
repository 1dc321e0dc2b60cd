"""
Pytest fixtures for the checkout engine tests.
"""

from decimal import Decimal

import pytest

from checkout.catalog import Catalog, DEFAULT_CATALOG
from checkout.config import get_settings
from checkout.logging import configure_logging
from payment.controller import PaymentSubmissionController
from payment.models import PaymentMethod
from payment.processor import SimulatedPaymentProcessor
from tests.helpers import GatedProcessor

configure_logging("DEBUG")


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached process-wide; reset around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def catalog() -> Catalog:
    return DEFAULT_CATALOG


@pytest.fixture
def instant_processor() -> SimulatedPaymentProcessor:
    return SimulatedPaymentProcessor(delay=0)


@pytest.fixture
def failing_processor() -> SimulatedPaymentProcessor:
    return SimulatedPaymentProcessor(delay=0, failure_message="Card declined")


@pytest.fixture
def gated_processor() -> GatedProcessor:
    return GatedProcessor()


@pytest.fixture
def card_controller(instant_processor):
    controller = PaymentSubmissionController(
        PaymentMethod.CARD,
        instant_processor,
        amount=Decimal("57.74"),
        success_reset_seconds=0.05,
    )
    yield controller
    controller.close()
