"""Owned coin object primitives."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .constants import COIN_STRUCT_PREFIX


@dataclass(slots=True, frozen=True)
class CoinObject:
    """Snapshot of an owned coin object as last observed on chain.

    Superseded, never mutated, when the sync collaborator refreshes.
    """

    object_id: str
    coin_type: str
    balance: int

    def __post_init__(self) -> None:
        if self.balance < 0:
            raise ValueError(f"coin {self.object_id} has negative balance")


def coin_type_from_struct(struct_type: str) -> Optional[str]:
    """Extract ``T`` from ``0x2::coin::Coin<T>``; None for non-coin objects."""
    if not struct_type.startswith(COIN_STRUCT_PREFIX) or not struct_type.endswith(">"):
        return None
    return struct_type[len(COIN_STRUCT_PREFIX):-1]


def coin_from_object(obj: dict[str, Any]) -> Optional[CoinObject]:
    """Build a CoinObject from a Sui object JSON, or None if it is not a coin.

    Accepts both the flattened shape ``{"objectId", "type", "balance"}`` and the
    Move object shape ``{"type", "fields": {"id": {"id"}, "balance"}}``.
    """
    coin_type = coin_type_from_struct(obj.get("type", ""))
    if coin_type is None:
        return None

    fields = obj.get("fields") or {}
    object_id = obj.get("objectId") or (fields.get("id") or {}).get("id")
    balance = obj.get("balance", fields.get("balance"))
    if object_id is None or balance is None:
        return None
    return CoinObject(object_id=object_id, coin_type=coin_type, balance=int(balance))


def coins_from_objects(objects: Iterable[dict[str, Any]]) -> list[CoinObject]:
    """Parse every coin in a list of owned objects, skipping non-coin objects."""
    coins = []
    for obj in objects:
        coin = coin_from_object(obj)
        if coin is not None:
            coins.append(coin)
    return coins


def filter_by_type(coins: Iterable[CoinObject], coin_type: str) -> list[CoinObject]:
    return [coin for coin in coins if coin.coin_type == coin_type]
