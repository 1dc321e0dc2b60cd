"""
Payment form schemas.

One pydantic model per payment method. Every field is checked on every
run so the form can show all problems at once.
"""
import re
from typing import Dict, Mapping, Type

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from checkout.errors import PaymentValidationError
from payment.models import PaymentMethod

CARD_NUMBER_RE = re.compile(r'[0-9]{16}')
EXPIRY_RE = re.compile(r'[0-9]{2}/[0-9]{2}')
CVC_RE = re.compile(r'[0-9]{3,4}')

INVALID_EMAIL = 'Invalid email address'


def _check_email(value: str) -> str:
    # Syntax only: special-use domains pass, but the domain needs a dot.
    try:
        result = validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        raise PydanticCustomError('invalid_email', INVALID_EMAIL)
    if '.' not in result.ascii_domain.strip('.'):
        raise PydanticCustomError('invalid_email', INVALID_EMAIL)
    return value


def _check_pattern(pattern: re.Pattern, value: str, error_type: str, message: str) -> str:
    if not pattern.fullmatch(value):
        raise PydanticCustomError(error_type, message)
    return value


class PaymentFields(BaseModel):
    model_config = ConfigDict(validate_default=True, frozen=True)


class CardFields(PaymentFields):
    email: str = ''
    cardholder_name: str = ''
    card_number: str = ''
    expiry: str = ''
    cvc: str = ''

    @field_validator('email')
    @classmethod
    def validate_email_address(cls, v):
        return _check_email(v)

    @field_validator('cardholder_name')
    @classmethod
    def validate_cardholder_name(cls, v):
        if not v:
            raise PydanticCustomError('required', 'Cardholder name is required')
        return v

    @field_validator('card_number')
    @classmethod
    def validate_card_number(cls, v):
        return _check_pattern(CARD_NUMBER_RE, v, 'card_number', 'Card number must be 16 digits')

    @field_validator('expiry')
    @classmethod
    def validate_expiry(cls, v):
        return _check_pattern(EXPIRY_RE, v, 'expiry', 'Format: MM/YY')

    @field_validator('cvc')
    @classmethod
    def validate_cvc(cls, v):
        return _check_pattern(CVC_RE, v, 'cvc', 'CVC must be 3-4 digits')


class RedirectWalletFields(PaymentFields):
    # confirm_email is only checked for shape, not compared with email.
    email: str = ''
    confirm_email: str = ''

    @field_validator('email', 'confirm_email')
    @classmethod
    def validate_email_address(cls, v):
        return _check_email(v)


SCHEMAS: Dict[PaymentMethod, Type[PaymentFields]] = {
    PaymentMethod.CARD: CardFields,
    PaymentMethod.REDIRECT_WALLET: RedirectWalletFields,
}


def schema_for(method: PaymentMethod) -> Type[PaymentFields]:
    return SCHEMAS[PaymentMethod(method)]


def field_names(method: PaymentMethod) -> tuple:
    """Field names for a payment method, in form order."""
    return tuple(schema_for(method).model_fields)


def check_field_names(method: PaymentMethod, names) -> None:
    unknown = sorted(set(names) - set(field_names(method)))
    if unknown:
        raise ValueError(f"Unknown field(s) for {PaymentMethod(method).value}: {', '.join(unknown)}")


def validate_fields(method: PaymentMethod, values: Mapping[str, str]) -> Dict[str, str]:
    """
    Validate form values against the schema for ``method``.

    Args:
        method: Active payment method
        values: Field name to entered value; missing fields count as empty

    Returns:
        Field name to error message; empty when every field is valid

    Raises:
        ValueError: If ``values`` names a field the method does not have
    """
    check_field_names(method, values)
    try:
        schema_for(method).model_validate(dict(values))
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for error in e.errors():
            name = str(error['loc'][0]) if error['loc'] else '__all__'
            errors.setdefault(name, error['msg'])
        return errors
    return {}


def validate_field(method: PaymentMethod, name: str, values: Mapping[str, str]) -> str:
    """Error message for a single field, or an empty string when it is valid."""
    check_field_names(method, [name])
    return validate_fields(method, values).get(name, '')


def ensure_valid(method: PaymentMethod, values: Mapping[str, str]) -> PaymentFields:
    """Return the parsed fields or raise PaymentValidationError with the error map."""
    errors = validate_fields(method, values)
    if errors:
        raise PaymentValidationError(errors)
    return schema_for(method).model_validate(dict(values))
