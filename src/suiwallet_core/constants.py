"""
Centralized constants for the wallet transfer core.

Usage:
    from suiwallet_core.constants import SUI_TYPE_ARG, GasLimits, LoggingConfig

All values are organized into logical namespaces using classes.
"""
from __future__ import annotations

from typing import Final

# Coin type of the native gas asset. Spend-all is only defined for this type.
SUI_TYPE_ARG: Final[str] = "0x2::sui::SUI"

# Move struct wrapping fungible balances, e.g. 0x2::coin::Coin<0x2::sui::SUI>
COIN_STRUCT_PREFIX: Final[str] = "0x2::coin::Coin<"


# =============================================================================
# Address Constants
# =============================================================================

class AddressFormat:
    """Sui address format."""

    PREFIX: Final[str] = "0x"
    HEX_LENGTH: Final[int] = 64


# =============================================================================
# Gas Constants
# =============================================================================

class GasLimits:
    """Gas budget bounds (in MIST)."""

    DEFAULT_BUDGET: Final[int] = 10_000
    MAX_BUDGET: Final[int] = 50_000_000_000


# =============================================================================
# Logging Configuration
# =============================================================================

class LoggingConfig:
    """Logging configuration constants."""

    MASK_PATTERN: Final[str] = "***MASKED***"

    SENSITIVE_FIELDS: Final[frozenset[str]] = frozenset({
        "signature",
        "private_key",
        "mnemonic",
        "secret",
        "api_key",
        "tx_bytes",
    })
