"""Transaction payload construction from a selection plan."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional, Union

from .selection import PayAllPlan, PayExactPlan, SelectionPlan
from .validators import validate_gas_budget, validate_sui_address


@dataclass(slots=True, frozen=True)
class PayAllTransaction:
    input_coins: tuple[str, ...]
    recipient: str
    gas_budget: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["input_coins"] = list(self.input_coins)
        return data


@dataclass(slots=True, frozen=True)
class PayExactTransaction:
    input_coins: tuple[str, ...]
    coin_type: str
    amount: int
    recipient: str
    gas_budget: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["input_coins"] = list(self.input_coins)
        return data


TransactionPayload = Union[PayAllTransaction, PayExactTransaction]


def build_transaction(
    plan: SelectionPlan,
    recipient: str,
    gas_budget: int,
    *,
    max_gas_budget: Optional[int] = None,
) -> TransactionPayload:
    """Build the payload handed to the remote signer.

    Raises:
        InvalidRequestError: gas budget not positive (or above ``max_gas_budget``),
            or recipient is not a valid address
    """
    gas_budget = validate_gas_budget(gas_budget, max_budget=max_gas_budget)
    recipient = validate_sui_address(recipient, field_name="recipient")

    if isinstance(plan, PayAllPlan):
        return PayAllTransaction(
            input_coins=plan.coin_ids,
            recipient=recipient,
            gas_budget=gas_budget,
        )
    if isinstance(plan, PayExactPlan):
        return PayExactTransaction(
            input_coins=plan.coin_ids,
            coin_type=plan.coin_type,
            amount=plan.amount,
            recipient=recipient,
            gas_budget=gas_budget,
        )
    raise TypeError(f"Unknown selection plan: {type(plan).__name__}")
