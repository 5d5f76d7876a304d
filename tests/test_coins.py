"""Tests for coin parsing, validators and in-memory providers."""
from __future__ import annotations

import pytest

from suiwallet_core import SUI_TYPE_ARG, CoinObject, InMemoryCoinSnapshot, StaticIdentityProvider
from suiwallet_core.coins import coin_type_from_struct, coins_from_objects
from suiwallet_core.exceptions import InvalidRequestError
from suiwallet_core.validators import (
    normalize_sui_address,
    validate_coin_type,
    validate_sui_address,
)


class TestCoinParsing:
    def test_coin_type_from_struct(self):
        assert coin_type_from_struct("0x2::coin::Coin<0x2::sui::SUI>") == SUI_TYPE_ARG
        assert coin_type_from_struct("0x2::devnet_nft::DevNetNFT") is None

    def test_coins_from_objects(self):
        objects = [
            {"objectId": "c1", "type": "0x2::coin::Coin<0x2::sui::SUI>", "balance": "100"},
            {"type": "0x2::coin::Coin<0xa::usdc::USDC>", "fields": {"id": {"id": "u1"}, "balance": 7}},
            {"objectId": "n1", "type": "0x2::devnet_nft::DevNetNFT"},
        ]

        coins = coins_from_objects(objects)

        assert coins == [
            CoinObject("c1", SUI_TYPE_ARG, 100),
            CoinObject("u1", "0xa::usdc::USDC", 7),
        ]

    def test_negative_balance_rejected(self):
        with pytest.raises(ValueError):
            CoinObject("c1", SUI_TYPE_ARG, -1)


class TestValidators:
    def test_normalize_short_address(self):
        assert normalize_sui_address("0xB2") == "0x" + "0" * 62 + "b2"

    def test_validate_keeps_address_as_given(self):
        assert validate_sui_address("0xB2") == "0xB2"

    @pytest.mark.parametrize("coin_type", [SUI_TYPE_ARG, "0xabc::lp::LP<0x2::sui::SUI, 0xabc::x::X>"])
    def test_valid_coin_types(self, coin_type):
        assert validate_coin_type(coin_type) == coin_type

    @pytest.mark.parametrize("coin_type", ["SUI", "0x2::sui", "", None])
    def test_invalid_coin_types(self, coin_type):
        with pytest.raises(InvalidRequestError):
            validate_coin_type(coin_type)


class TestProviders:
    def test_identity_provider(self):
        provider = StaticIdentityProvider()
        assert provider.get_active_identity() is None

        provider.set_active_identity("0xA1")
        assert provider.get_active_identity() == "0xA1"

        provider.set_active_identity(None)
        assert provider.get_active_identity() is None

    def test_identity_provider_rejects_bad_address(self):
        with pytest.raises(InvalidRequestError):
            StaticIdentityProvider("not-an-address")

    def test_snapshot_filters_and_supersedes(self):
        snapshot = InMemoryCoinSnapshot([
            CoinObject("c1", SUI_TYPE_ARG, 100),
            CoinObject("u1", "0xa::usdc::USDC", 7),
        ])

        assert [c.object_id for c in snapshot.get_owned_coins(SUI_TYPE_ARG)] == ["c1"]
        assert len(snapshot.get_owned_coins()) == 2

        snapshot.replace([CoinObject("c9", SUI_TYPE_ARG, 1)])

        assert snapshot.version == 1
        assert [c.object_id for c in snapshot.get_owned_coins()] == ["c9"]
