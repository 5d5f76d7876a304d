"""
Input validation for transfer requests.

Usage:
    from suiwallet_core.validators import validate_sui_address, validate_gas_budget

    recipient = validate_sui_address(recipient, field_name="recipient")
"""
from __future__ import annotations

import re
from typing import Any, Optional, Pattern

from .constants import AddressFormat
from .exceptions import InvalidRequestError

# 0x followed by 1-64 hex chars; short forms like 0x2 are zero-padded
SUI_ADDRESS_PATTERN: Pattern[str] = re.compile(r"^0x[a-fA-F0-9]{1,64}$")

# address::module::Name with optional generic arguments
COIN_TYPE_PATTERN: Pattern[str] = re.compile(
    r"^0x[a-fA-F0-9]{1,64}::[A-Za-z_][A-Za-z0-9_]*::[A-Za-z_][A-Za-z0-9_]*(<.+>)?$"
)


def normalize_sui_address(address: str) -> str:
    """Lower-case and zero-pad an address to its 32-byte form."""
    body = address[len(AddressFormat.PREFIX):].lower()
    return AddressFormat.PREFIX + body.rjust(AddressFormat.HEX_LENGTH, "0")


def validate_sui_address(value: Any, field_name: str = "address") -> str:
    """Validate a Sui address.

    The address is returned as given; use normalize_sui_address to compare.

    Args:
        value: The address to validate
        field_name: Name of the field for error messages

    Returns:
        The validated address

    Raises:
        InvalidRequestError: If the address is malformed
    """
    if not isinstance(value, str) or not value:
        raise InvalidRequestError(f"{field_name} is required", field=field_name)

    if not SUI_ADDRESS_PATTERN.match(value):
        raise InvalidRequestError(
            f"{field_name} is not a valid Sui address: {value!r}",
            field=field_name,
        )
    return value


def validate_integer(
    value: Any,
    field_name: str = "value",
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Validate an integer value without coercion.

    Raises:
        InvalidRequestError: If validation fails
    """
    if value is None:
        raise InvalidRequestError(f"{field_name} is required", field=field_name)

    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRequestError(f"{field_name} must be an integer", field=field_name)

    if min_value is not None and value < min_value:
        raise InvalidRequestError(
            f"{field_name} must be at least {min_value}",
            field=field_name,
        )

    if max_value is not None and value > max_value:
        raise InvalidRequestError(
            f"{field_name} must be at most {max_value}",
            field=field_name,
        )

    return value


def validate_amount(value: Any, field_name: str = "amount") -> int:
    """Validate a transfer amount (unsigned integer, base units)."""
    return validate_integer(value, field_name=field_name, min_value=0)


def validate_gas_budget(
    value: Any,
    field_name: str = "gas_budget",
    max_budget: Optional[int] = None,
) -> int:
    """Validate a gas budget (strictly positive)."""
    return validate_integer(value, field_name=field_name, min_value=1, max_value=max_budget)


def validate_coin_type(value: Any, field_name: str = "coin_type") -> str:
    """Validate a Move coin type tag such as ``0x2::sui::SUI``."""
    if not isinstance(value, str) or not COIN_TYPE_PATTERN.match(value):
        raise InvalidRequestError(
            f"{field_name} is not a valid coin type: {value!r}",
            field=field_name,
        )
    return value
