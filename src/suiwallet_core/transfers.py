"""Transfer orchestration tying coin selection, payload building, signing and result tracking."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

from .builder import PayAllTransaction, TransactionPayload, build_transaction
from .coins import CoinObject
from .config import WalletSettings
from .event_bus import EventBus, EventType
from .exceptions import NoActiveIdentityError, submission_failed_from
from .logging_config import LogContext, generate_correlation_id, set_digest_context
from .reconciliation import ReconciliationTrigger
from .results import ResultStore, TransactionResult
from .selection import select_coins
from .signer import TransactionSignerPort
from .validators import normalize_sui_address

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TransferRequest:
    """A caller-supplied transfer; validated by selection and building."""

    coin_type: str
    recipient: str
    amount: int = 0
    gas_budget: Optional[int] = None
    spend_all: bool = False


class IdentityProvider(Protocol):
    def get_active_identity(self) -> Optional[str]: ...


class CoinSnapshotProvider(Protocol):
    def get_owned_coins(self, coin_type: Optional[str] = None) -> Sequence[CoinObject]: ...


SignerFactory = Callable[[str], TransactionSignerPort]


class TransferService:
    """Builds and submits coin transfers for the active account.

    Concurrent submissions are not serialized against each other; two
    overlapping transfers over the same coins race at the signer.
    """

    def __init__(
        self,
        *,
        identity: IdentityProvider,
        coins: CoinSnapshotProvider,
        signer_factory: SignerFactory,
        settings: Optional[WalletSettings] = None,
        result_store: Optional[ResultStore] = None,
        bus: Optional[EventBus] = None,
        reconciliation: Optional[ReconciliationTrigger] = None,
    ) -> None:
        self._identity = identity
        self._coins = coins
        self._signer_factory = signer_factory
        self._settings = settings or WalletSettings()
        self._results = result_store if result_store is not None else ResultStore()
        self._bus = bus or EventBus()
        self._reconciliation = reconciliation or ReconciliationTrigger(self._bus)
        self._signers: dict[str, TransactionSignerPort] = {}

    @property
    def results(self) -> ResultStore:
        return self._results

    def _get_signer(self, address: str) -> TransactionSignerPort:
        if address not in self._signers:
            self._signers[address] = self._signer_factory(address)
        return self._signers[address]

    async def submit_transfer(self, request: TransferRequest) -> TransactionResult:
        """Select coins, build the payload, submit it once and record the outcome.

        Raises:
            NoActiveIdentityError: no account selected (checked before any I/O)
            InvalidRequestError: malformed request
            InsufficientCandidatesError: no coins of the requested type
            SubmissionFailedError: the signer/executor failed; not retried here
        """
        address = self._identity.get_active_identity()
        if not address:
            raise NoActiveIdentityError()

        with LogContext(correlation_id=generate_correlation_id(), address=address):
            payload = self._prepare(request, address)

            signer = self._get_signer(address)
            try:
                result = await self._dispatch(signer, payload)
            except Exception as e:
                error = submission_failed_from(e)
                logger.warning(
                    f"Transfer submission failed: {e}",
                    extra={"reason": error.details.get("reason")},
                )
                await self._bus.emit(
                    EventType.TRANSFER_FAILED,
                    data={"sender": address, "error": error.to_dict()},
                )
                raise error from e

            set_digest_context(result.digest)
            self._results.upsert(result)
            logger.info(
                f"Transfer {result.digest} executed with status {result.status}",
                extra={"gas_used": result.gas_used},
            )

            await self._bus.emit(
                EventType.TRANSFER_SUBMITTED,
                data={"sender": address, "digest": result.digest, "status": result.status},
            )
            try:
                await self._reconciliation.notify_transfer_completed(result.digest)
            except Exception:
                logger.exception("Failed to signal object resync")

        return result

    def _prepare(self, request: TransferRequest, address: str) -> TransactionPayload:
        gas_budget = request.gas_budget
        if gas_budget is None:
            gas_budget = self._settings.default_gas_budget

        coins = self._coins.get_owned_coins(request.coin_type)
        plan = select_coins(
            coins,
            request.coin_type,
            request.amount,
            request.spend_all,
            native_coin_type=self._settings.native_coin_type,
        )
        payload = build_transaction(
            plan,
            request.recipient,
            gas_budget,
            max_gas_budget=self._settings.max_gas_budget,
        )

        if normalize_sui_address(payload.recipient) == normalize_sui_address(address):
            logger.warning("Recipient is the sending account")
        logger.info(
            f"Submitting {type(payload).__name__} of {request.coin_type}",
            extra={"input_coins": len(payload.input_coins), "gas_budget": gas_budget},
        )
        return payload

    async def _dispatch(
        self,
        signer: TransactionSignerPort,
        payload: TransactionPayload,
    ) -> TransactionResult:
        if isinstance(payload, PayAllTransaction):
            return await signer.pay_all(
                input_coins=list(payload.input_coins),
                recipient=payload.recipient,
                gas_budget=payload.gas_budget,
            )
        return await signer.pay_exact(
            input_coins=list(payload.input_coins),
            coin_type=payload.coin_type,
            amount=payload.amount,
            recipient=payload.recipient,
            gas_budget=payload.gas_budget,
        )

    def get_transaction_result(self, digest: str) -> Optional[TransactionResult]:
        return self._results.get_by_digest(digest)

    def list_transaction_results(self) -> list[TransactionResult]:
        return self._results.get_all()

    async def close(self) -> None:
        for signer in self._signers.values():
            await signer.close()
        self._signers.clear()
