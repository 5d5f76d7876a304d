"""Tests for transaction payload building."""
from __future__ import annotations

import dataclasses

import pytest

from suiwallet_core import (
    SUI_TYPE_ARG,
    InvalidRequestError,
    PayAllPlan,
    PayAllTransaction,
    PayExactPlan,
    PayExactTransaction,
    build_transaction,
)


def test_pay_all_payload():
    payload = build_transaction(PayAllPlan(coin_ids=("c1",)), "0xB2", 10)

    assert payload == PayAllTransaction(input_coins=("c1",), recipient="0xB2", gas_budget=10)
    assert payload.to_dict() == {"input_coins": ["c1"], "recipient": "0xB2", "gas_budget": 10}


def test_pay_exact_payload():
    plan = PayExactPlan(coin_ids=("c1",), coin_type=SUI_TYPE_ARG, amount=40)

    payload = build_transaction(plan, "0xB2", 10)

    assert payload == PayExactTransaction(
        input_coins=("c1",),
        coin_type=SUI_TYPE_ARG,
        amount=40,
        recipient="0xB2",
        gas_budget=10,
    )
    assert payload.to_dict()["amount"] == 40


@pytest.mark.parametrize(
    "plan",
    [
        PayAllPlan(coin_ids=("c1",)),
        PayExactPlan(coin_ids=("c1",), coin_type=SUI_TYPE_ARG, amount=40),
    ],
)
@pytest.mark.parametrize("gas_budget", [0, -5])
def test_non_positive_gas_budget_is_rejected(plan, gas_budget):
    with pytest.raises(InvalidRequestError) as exc_info:
        build_transaction(plan, "0xB2", gas_budget)

    assert exc_info.value.details["field"] == "gas_budget"


def test_gas_budget_above_maximum():
    with pytest.raises(InvalidRequestError):
        build_transaction(PayAllPlan(coin_ids=("c1",)), "0xB2", 101, max_gas_budget=100)


@pytest.mark.parametrize("recipient", ["", "B2", "0x", "0xZZ", "0x" + "a" * 65, None, 42])
def test_malformed_recipient_is_rejected(recipient):
    with pytest.raises(InvalidRequestError) as exc_info:
        build_transaction(PayAllPlan(coin_ids=("c1",)), recipient, 10)

    assert exc_info.value.details["field"] == "recipient"


def test_full_length_recipient():
    recipient = "0x" + "ab" * 32

    payload = build_transaction(PayAllPlan(coin_ids=("c1",)), recipient, 10)

    assert payload.recipient == recipient


def test_payload_is_immutable():
    payload = build_transaction(PayAllPlan(coin_ids=("c1",)), "0xB2", 10)

    with pytest.raises(dataclasses.FrozenInstanceError):
        payload.gas_budget = 20


def test_deterministic():
    plan = PayExactPlan(coin_ids=("c1", "c2"), coin_type=SUI_TYPE_ARG, amount=3)

    assert build_transaction(plan, "0xB2", 10) == build_transaction(plan, "0xB2", 10)


def test_unknown_plan_type():
    with pytest.raises(TypeError):
        build_transaction(object(), "0xB2", 10)
