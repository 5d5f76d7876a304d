"""Remote signer/executor ports and implementations.

The wallet never signs locally: a signer is bound to one sender address and
both signs and executes the payload it is handed.
"""
from __future__ import annotations

import hashlib
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

import base58
import httpx

from .builder import PayAllTransaction, PayExactTransaction
from .config import WalletSettings
from .exceptions import SignerRPCError, WalletConfigurationError
from .results import TransactionResult

logger = logging.getLogger(__name__)


class TransactionSignerPort(ABC):
    """Abstract interface for signing and executing transfer payloads."""

    @abstractmethod
    async def pay_all(
        self,
        *,
        input_coins: Sequence[str],
        recipient: str,
        gas_budget: int,
    ) -> TransactionResult:
        """Transfer every input coin of the native type, net of gas."""

    @abstractmethod
    async def pay_exact(
        self,
        *,
        input_coins: Sequence[str],
        coin_type: str,
        amount: int,
        recipient: str,
        gas_budget: int,
    ) -> TransactionResult:
        """Transfer exactly ``amount`` of ``coin_type`` funded from ``input_coins``."""

    async def close(self) -> None:
        return None


class SimulatedSigner(TransactionSignerPort):
    """Simulated signer for development and tests.

    Digests are derived from the sender, the payload and a per-signer
    sequence number, so they are deterministic for a given history.
    """

    def __init__(self, address: str, gas_used: int = 1_000):
        self._address = address
        self._gas_used = gas_used
        self._sequence = 0
        self.executed: List[dict[str, Any]] = []

    def _execute(self, kind: str, payload: dict[str, Any]) -> TransactionResult:
        self._sequence += 1
        material = json.dumps(
            {"sender": self._address, "kind": kind, "seq": self._sequence, **payload},
            sort_keys=True,
        ).encode()
        digest = base58.b58encode(hashlib.sha256(material).digest()).decode()
        self.executed.append({"kind": kind, "digest": digest, **payload})
        logger.info(f"[SIMULATED] {kind} {digest} -> {payload['recipient']}")
        return TransactionResult.from_response({
            "digest": digest,
            "effects": {
                "status": {"status": "success"},
                "gasUsed": {
                    "computationCost": self._gas_used,
                    "storageCost": 0,
                    "storageRebate": 0,
                },
            },
        })

    async def pay_all(self, *, input_coins, recipient, gas_budget) -> TransactionResult:
        return self._execute("pay_all", PayAllTransaction(
            input_coins=tuple(input_coins),
            recipient=recipient,
            gas_budget=gas_budget,
        ).to_dict())

    async def pay_exact(
        self, *, input_coins, coin_type, amount, recipient, gas_budget
    ) -> TransactionResult:
        return self._execute("pay_exact", PayExactTransaction(
            input_coins=tuple(input_coins),
            coin_type=coin_type,
            amount=amount,
            recipient=recipient,
            gas_budget=gas_budget,
        ).to_dict())


class RemoteSigner(TransactionSignerPort):
    """JSON-RPC client for a remote signing/executing service.

    The service exposes the Sui pay methods with the execute request type as
    a trailing argument and answers with the execute response.
    """

    def __init__(
        self,
        signer_url: str,
        address: str,
        *,
        request_type: str = "WaitForLocalExecution",
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._signer_url = signer_url
        self._address = address
        self._request_type = request_type
        self._timeout = timeout
        self._http_client = http_client
        self._request_id = 0

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def _call(self, method: str, params: List[Any]) -> Any:
        """Make a JSON-RPC call; transport errors propagate as httpx errors."""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }

        client = self._get_client()
        response = await client.post(self._signer_url, json=payload)
        response.raise_for_status()
        body = response.json()

        if body.get("error"):
            error = body["error"]
            raise SignerRPCError(
                f"RPC error: {error.get('message', error)}",
                method=method,
                code=error.get("code"),
                details={"data": error.get("data")} if error.get("data") else None,
            )
        return body.get("result")

    def _to_result(self, method: str, result: Any) -> TransactionResult:
        if not isinstance(result, dict):
            raise SignerRPCError(f"Unexpected result type {type(result).__name__}", method=method)
        try:
            return TransactionResult.from_response(result)
        except KeyError as e:
            raise SignerRPCError(str(e), method=method) from e

    async def pay_all(self, *, input_coins, recipient, gas_budget) -> TransactionResult:
        method = "sui_payAllSui"
        result = await self._call(
            method,
            [self._address, list(input_coins), recipient, gas_budget, self._request_type],
        )
        return self._to_result(method, result)

    async def pay_exact(
        self, *, input_coins, coin_type, amount, recipient, gas_budget
    ) -> TransactionResult:
        method = "sui_pay"
        # amounts travel as strings to keep u64 precision in JSON
        result = await self._call(
            method,
            [
                self._address,
                list(input_coins),
                [recipient],
                [str(amount)],
                None,
                gas_budget,
                self._request_type,
            ],
        )
        return self._to_result(method, result)

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None


def create_signer(settings: WalletSettings, address: str) -> TransactionSignerPort:
    """Create the signer configured by ``settings.signer_mode`` for ``address``."""
    if settings.signer_mode == "simulated":
        return SimulatedSigner(address)
    if settings.signer_mode == "remote":
        return RemoteSigner(
            settings.signer_url,
            address,
            request_type=settings.request_type,
            timeout=settings.signer_timeout_seconds,
        )
    raise WalletConfigurationError(f"Unknown signer mode: {settings.signer_mode}")
