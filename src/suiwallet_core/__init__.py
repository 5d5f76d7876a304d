"""Coin transfer construction, submission and result tracking for the Sui wallet."""

from .builder import PayAllTransaction, PayExactTransaction, TransactionPayload, build_transaction
from .coins import CoinObject, coins_from_objects
from .config import WalletSettings, load_settings
from .constants import SUI_TYPE_ARG
from .event_bus import EventBus, EventType, WalletEvent
from .exceptions import (
    InsufficientCandidatesError,
    InvalidRequestError,
    NoActiveIdentityError,
    SignerRPCError,
    SubmissionFailedError,
    WalletConfigurationError,
    WalletException,
)
from .providers import InMemoryCoinSnapshot, StaticIdentityProvider
from .reconciliation import ReconciliationTrigger
from .results import ResultStore, TransactionResult, get_transaction_digest
from .selection import PayAllPlan, PayExactPlan, SelectionPlan, select_coins
from .signer import RemoteSigner, SimulatedSigner, TransactionSignerPort, create_signer
from .transfers import TransferRequest, TransferService

__all__ = [
    "SUI_TYPE_ARG",
    "CoinObject",
    "coins_from_objects",
    "WalletSettings",
    "load_settings",
    "PayAllPlan",
    "PayExactPlan",
    "SelectionPlan",
    "select_coins",
    "PayAllTransaction",
    "PayExactTransaction",
    "TransactionPayload",
    "build_transaction",
    "TransactionResult",
    "ResultStore",
    "get_transaction_digest",
    "EventBus",
    "EventType",
    "WalletEvent",
    "ReconciliationTrigger",
    "StaticIdentityProvider",
    "InMemoryCoinSnapshot",
    "TransactionSignerPort",
    "SimulatedSigner",
    "RemoteSigner",
    "create_signer",
    "TransferRequest",
    "TransferService",
    "WalletException",
    "NoActiveIdentityError",
    "InvalidRequestError",
    "InsufficientCandidatesError",
    "SubmissionFailedError",
    "SignerRPCError",
    "WalletConfigurationError",
]
