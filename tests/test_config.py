"""
Tests for settings and logging helpers.
"""

import logging

import pytest
from pydantic import ValidationError

from checkout.config import Settings, get_settings
from checkout.logging import log_action


def test_defaults(monkeypatch):
    for key in ("TAX_RATE", "SUCCESS_RESET_SECONDS", "SUBMIT_TIMEOUT_SECONDS"):
        monkeypatch.delenv(f"CHECKOUT_{key}", raising=False)

    settings = get_settings()

    assert settings.TAX_RATE == pytest.approx(0.10)
    assert settings.SIMULATED_DELAY_SECONDS == pytest.approx(1.5)
    assert settings.SUCCESS_RESET_SECONDS == pytest.approx(5.0)
    assert settings.SUBMIT_TIMEOUT_SECONDS is None


def test_env_override(monkeypatch):
    monkeypatch.setenv("CHECKOUT_SUBMIT_TIMEOUT_SECONDS", "30")

    assert get_settings().SUBMIT_TIMEOUT_SECONDS == pytest.approx(30.0)


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_tax_rate_bounds(monkeypatch):
    monkeypatch.setenv("CHECKOUT_TAX_RATE", "2")

    with pytest.raises(ValidationError):
        Settings()


def test_log_action_levels(caplog):
    with caplog.at_level(logging.DEBUG, logger="checkout.logging"):
        log_action("payment.failed", "Card declined", level="error", method="card")
        log_action("payment.succeeded", "ok")

    assert caplog.records[0].levelno == logging.ERROR
    assert "Card declined" in caplog.records[0].getMessage()
    assert "'method': 'card'" in caplog.records[0].getMessage()
    assert caplog.records[1].levelno == logging.INFO
