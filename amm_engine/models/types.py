"""Shared type definitions: addresses and uint256 amounts.

Pydantic annotated types are used by the HTTP models; the plain helper
functions are used by the engine to validate arguments at its boundary.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from amm_engine.constants import UINT256_MAX, ZERO_ADDRESS
from amm_engine.errors import InvalidAddress, InvalidAmount


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 cannot be a boolean")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return str(int_value)


# Ethereum-style address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an address to lowercase with a 0x prefix.

    Args:
        address: An address (with or without 0x prefix)
        validate: If True, raises InvalidAddress for malformed addresses.

    Returns:
        Lowercase address with 0x prefix
    """
    if not isinstance(address, str):
        raise InvalidAddress(repr(address))

    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise InvalidAddress(address)

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a 0x-prefixed 20-byte hex address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def require_amount(name: str, value: int) -> int:
    """Check that an engine argument is an int in the uint256 range.

    Raises:
        InvalidAmount: If value is not an int, is negative or overflows uint256
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidAmount(f"{name} must be an int, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise InvalidAmount(f"{name} out of uint256 range: {value}")
    return value


def require_account(name: str, address: str) -> str:
    """Normalize an account address, rejecting malformed and zero addresses.

    Raises:
        InvalidAddress: If address is malformed or the zero address
    """
    account = normalize_address(address, validate=True)
    if account == ZERO_ADDRESS:
        raise InvalidAddress(f"{name} cannot be the zero address")
    return account
