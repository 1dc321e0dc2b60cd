import logging
import sys
from typing import Any, Optional

from checkout.config import get_settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the checkout engine."""
    logging.basicConfig(
        level=(level or get_settings().LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def log_action(
    action_type: str,
    message: str,
    level: str = "info",
    **kwargs: Any
) -> None:
    """
    Standardized action logging.

    Records a dict with ``action`` (e.g. ``payment.succeeded``,
    ``payment.failed``, ``payment.validation_failed``,
    ``payment.method_switched``, ``checkout.mode_changed``), ``message`` and
    any extra keyword fields such as ``method``, ``provider`` or ``amount``.
    """
    log_data = {
        "action": action_type,
        "message": message,
        **kwargs
    }

    if level == "error":
        logger.error(log_data)
    elif level == "warning":
        logger.warning(log_data)
    elif level == "debug":
        logger.debug(log_data)
    else:
        logger.info(log_data)
