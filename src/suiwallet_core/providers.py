"""In-memory identity and coin snapshot providers (dev/CLI/tests)."""
from __future__ import annotations

from typing import Iterable, Optional

from .coins import CoinObject, filter_by_type
from .validators import validate_sui_address


class StaticIdentityProvider:
    """Holds the currently selected account address."""

    def __init__(self, address: Optional[str] = None) -> None:
        self._address = validate_sui_address(address) if address else None

    def get_active_identity(self) -> Optional[str]:
        return self._address

    def set_active_identity(self, address: Optional[str]) -> None:
        self._address = validate_sui_address(address) if address else None


class InMemoryCoinSnapshot:
    """Read-only view of owned coins, superseded wholesale on each resync."""

    def __init__(self, coins: Iterable[CoinObject] = ()) -> None:
        self._coins: tuple[CoinObject, ...] = tuple(coins)
        self.version = 0

    def replace(self, coins: Iterable[CoinObject]) -> None:
        self._coins = tuple(coins)
        self.version += 1

    def get_owned_coins(self, coin_type: Optional[str] = None) -> list[CoinObject]:
        if coin_type is None:
            return list(self._coins)
        return filter_by_type(self._coins, coin_type)
