"""Submitted transaction results and the in-memory result store."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)


def _find_effects(response: dict[str, Any]) -> dict[str, Any]:
    if "EffectsCert" in response:
        response = response["EffectsCert"]
    effects = response.get("effects") or {}
    # EffectsCert nests the effects under effects.effects
    if "effects" in effects and isinstance(effects["effects"], dict):
        effects = effects["effects"]
    return effects


def get_transaction_digest(response: dict[str, Any]) -> str:
    """Extract the transaction digest from an execute response.

    Supports the shapes returned by the various execute request types:
    ``{"digest"}``, ``{"certificate": {"transactionDigest"}}``,
    ``{"EffectsCert": {"certificate": {"transactionDigest"}}}`` and
    ``{"effects": {"transactionDigest"}}``.

    Raises:
        KeyError: If no digest is present
    """
    if response.get("digest"):
        return response["digest"]
    for container in (response, response.get("EffectsCert") or {}):
        certificate = container.get("certificate") or {}
        if certificate.get("transactionDigest"):
            return certificate["transactionDigest"]
    effects = _find_effects(response)
    if effects.get("transactionDigest"):
        return effects["transactionDigest"]
    raise KeyError("transaction digest not found in execute response")


@dataclass(slots=True)
class TransactionResult:
    """Execution outcome of a submitted transfer, keyed by its digest."""

    digest: str
    status: str = "success"
    gas_used: Optional[int] = None
    error: Optional[str] = None
    response: dict[str, Any] = field(default_factory=dict)
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def succeeded(self) -> bool:
        return self.status == "success"

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "TransactionResult":
        effects = _find_effects(response)
        status_info = effects.get("status") or {}
        gas = effects.get("gasUsed") or {}
        gas_used = None
        if gas:
            gas_used = (
                int(gas.get("computationCost", 0))
                + int(gas.get("storageCost", 0))
                - int(gas.get("storageRebate", 0))
            )
        return cls(
            digest=get_transaction_digest(response),
            status=status_info.get("status", "success"),
            gas_used=gas_used,
            error=status_info.get("error"),
            response=response,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "digest": self.digest,
            "status": self.status,
            "gas_used": self.gas_used,
            "error": self.error,
            "received_at": self.received_at.isoformat(),
        }


class ResultStore:
    """Session-scoped cache of transactions submitted by this client.

    Entries are keyed by digest and never evicted. Writes are single-key
    assignments, so readers see either the old or the new entry.
    """

    def __init__(self) -> None:
        self._results: dict[str, TransactionResult] = {}

    def upsert(self, result: TransactionResult) -> None:
        if result.digest in self._results:
            logger.debug(f"Replacing stored result for {result.digest}")
        self._results[result.digest] = result

    def get_by_digest(self, digest: str) -> Optional[TransactionResult]:
        return self._results.get(digest)

    def get_all(self) -> list[TransactionResult]:
        return list(self._results.values())

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, digest: object) -> bool:
        return digest in self._results
