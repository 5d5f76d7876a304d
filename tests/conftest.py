"""
Pytest configuration for suiwallet-core tests.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Add package source to path
package_src = Path(__file__).parent.parent / "src"
for path in (package_src, Path(__file__).parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Set test environment
os.environ.setdefault("SUIWALLET_ENVIRONMENT", "dev")
os.environ.setdefault("SUIWALLET_SIGNER_MODE", "simulated")

from transfer_helpers import RecordingResync  # noqa: E402
from suiwallet_core import (  # noqa: E402
    SUI_TYPE_ARG,
    CoinObject,
    EventBus,
    InMemoryCoinSnapshot,
    ReconciliationTrigger,
    ResultStore,
    SimulatedSigner,
    StaticIdentityProvider,
    TransferService,
    WalletSettings,
)


@pytest.fixture(scope="session")
def anyio_backend():
    """Use asyncio for async tests."""
    return "asyncio"


@pytest.fixture
def sender_address():
    return "0xA1"


@pytest.fixture
def recipient_address():
    return "0xB2"


@pytest.fixture
def sample_coins():
    return [CoinObject(object_id="c1", coin_type=SUI_TYPE_ARG, balance=100)]


@pytest.fixture
def settings():
    return WalletSettings(_env_file=None, signer_mode="simulated")


@pytest.fixture
def resync():
    return RecordingResync()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def store():
    return ResultStore()


@pytest.fixture
def signers():
    """Signers created by the service, keyed by address."""
    return {}


@pytest.fixture
def make_service(sender_address, sample_coins, settings, bus, store, resync, signers):
    """Factory for a TransferService wired to in-memory collaborators."""

    def _make(
        *,
        identity=sender_address,
        coins=None,
        signer_factory=None,
        resync_port=resync,
    ):
        def default_factory(address):
            signers[address] = SimulatedSigner(address)
            return signers[address]

        return TransferService(
            identity=StaticIdentityProvider(identity),
            coins=InMemoryCoinSnapshot(sample_coins if coins is None else coins),
            signer_factory=signer_factory or default_factory,
            settings=settings,
            result_store=store,
            bus=bus,
            reconciliation=ReconciliationTrigger(bus, resync_port),
        )

    return _make
