"""
Product catalog for the checkout page.

The catalog is built once at startup and shared by reference between the
pricing engine and the order summary. Every model here is frozen.
"""
import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from checkout.errors import ConfigurationError

logger = logging.getLogger(__name__)


class PlanId(str, Enum):
    STARTER = "starter"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class Plan(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: PlanId
    name: str = Field(min_length=1)
    description: str = ""
    price: Decimal = Field(ge=0, decimal_places=2)


class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0, decimal_places=2)


class Catalog(BaseModel):
    """Plans offered for subscription plus the fixed one-time purchase items."""

    model_config = ConfigDict(frozen=True)

    plans: Tuple[Plan, ...]
    one_time_items: Tuple[LineItem, ...]

    @field_validator('plans')
    @classmethod
    def validate_unique_plans(cls, v):
        seen = set()
        for plan in v:
            if plan.id in seen:
                raise ValueError(f"Duplicate plan id: {plan.id.value}")
            seen.add(plan.id)
        return v

    @field_validator('one_time_items')
    @classmethod
    def validate_one_time_items(cls, v):
        if not v:
            raise ValueError("One-time purchase needs at least one line item")
        return v

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Catalog":
        """Build a catalog from plain configuration data."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid catalog configuration: {e}")
            raise ConfigurationError(f"Invalid catalog configuration: {e}") from e

    def get_plan(self, plan_id: Union[PlanId, str]) -> Plan:
        """Look up a plan by id. Unknown ids are a configuration error, never a default."""
        for plan in self.plans:
            if plan.id == plan_id:
                return plan
        raise ConfigurationError(f"Unknown plan id: {plan_id!r}")

    def has_plan(self, plan_id: Union[PlanId, str]) -> bool:
        return any(plan.id == plan_id for plan in self.plans)

    @property
    def plan_ids(self) -> Tuple[PlanId, ...]:
        return tuple(plan.id for plan in self.plans)


DEFAULT_CATALOG_DATA: Dict[str, Any] = {
    "plans": [
        {"id": "starter", "name": "Starter Plan", "description": "For individuals", "price": "9.99"},
        {"id": "pro", "name": "Professional Plan", "description": "For teams", "price": "29.99"},
        {"id": "enterprise", "name": "Enterprise Plan", "description": "For enterprises", "price": "99.99"},
    ],
    "one_time_items": [
        {"name": "Premium Product", "price": "49.99"},
        {"name": "Setup Fee", "price": "0"},
        {"name": "Processing Fee", "price": "2.50"},
    ],
}

DEFAULT_CATALOG = Catalog.from_dict(DEFAULT_CATALOG_DATA)
