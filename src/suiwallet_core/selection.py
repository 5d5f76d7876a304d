"""Coin selection: decide between spend-all and spend-exact for a transfer.

The plan is a tagged union so a spend-all plan can never carry an amount:

    plan = select_coins(coins, SUI_TYPE_ARG, 40, spend_all=False)
    if isinstance(plan, PayAllPlan):
        ...

Final coin aggregation happens in the remote executor; this module only
gathers the eligible candidate set.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from .coins import CoinObject, filter_by_type
from .constants import SUI_TYPE_ARG
from .exceptions import InsufficientCandidatesError, InvalidRequestError
from .validators import validate_amount, validate_coin_type


@dataclass(slots=True, frozen=True)
class PayAllPlan:
    """Spend every coin of the native type; the executor nets out gas."""

    coin_ids: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class PayExactPlan:
    """Send exactly ``amount`` of ``coin_type`` funded from the candidate coins."""

    coin_ids: tuple[str, ...]
    coin_type: str
    amount: int


SelectionPlan = Union[PayAllPlan, PayExactPlan]


def select_coins(
    coins: Sequence[CoinObject],
    coin_type: str,
    amount: int,
    spend_all: bool,
    *,
    native_coin_type: str = SUI_TYPE_ARG,
) -> SelectionPlan:
    """Pick a construction strategy from the owned coin snapshot.

    Args:
        coins: Owned coin objects (any type)
        coin_type: Coin type being transferred
        amount: Amount in base units; validated but ignored for spend-all
        spend_all: Transfer the whole balance of the native coin
        native_coin_type: Coin type that also pays for gas

    Raises:
        InvalidRequestError: malformed coin type or amount, or spend-all on a
            non-native coin type
        InsufficientCandidatesError: no coins of ``coin_type`` and ``amount > 0``
    """
    coin_type = validate_coin_type(coin_type)
    amount = validate_amount(amount)
    if spend_all and coin_type != native_coin_type:
        raise InvalidRequestError(
            f"Spend-all is only supported for {native_coin_type}, got {coin_type}",
            field="coin_type",
        )

    candidates = filter_by_type(coins, coin_type)
    coin_ids = tuple(coin.object_id for coin in candidates)

    if not coin_ids and (spend_all or amount > 0):
        raise InsufficientCandidatesError(
            f"No owned coins of type {coin_type}",
            coin_type=coin_type,
            requested=None if spend_all else amount,
        )

    if spend_all:
        return PayAllPlan(coin_ids=coin_ids)
    return PayExactPlan(coin_ids=coin_ids, coin_type=coin_type, amount=amount)
