"""Exception hierarchy for the wallet transfer core.

All transfer errors inherit from WalletException, enabling:
- Consistent error handling in UI/CLI action dispatchers
- Structured error responses with error codes
- Mapping of raw signer/executor errors to a stable reason

Usage:
    from suiwallet_core.exceptions import (
        WalletException,
        InvalidRequestError,
        SubmissionFailedError,
    )

    try:
        result = await service.submit_transfer(request)
    except SubmissionFailedError as e:
        if e.retryable:
            ...

All exceptions have:
- error_code: Machine-readable error code (e.g., "INVALID_REQUEST")
- message: Human-readable error message
- details: Optional additional context dictionary
- retryable: Whether resubmitting the same request could succeed
- to_dict(): Convert to response format
"""
from __future__ import annotations

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class WalletException(Exception):
    """Base exception for all wallet transfer errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Optional additional context
    """

    error_code: str = "WALLET_ERROR"
    retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response format."""
        result = {
            "error": self.error_code,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Precondition & Input Errors
# =============================================================================

class NoActiveIdentityError(WalletException):
    """No active account is selected in the wallet."""

    error_code = "NO_ACTIVE_IDENTITY"

    def __init__(
        self,
        message: str = "Active address is not defined",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)


class InvalidRequestError(WalletException):
    """Malformed amount, gas budget or recipient, or spend-all on a non-native coin."""

    error_code = "INVALID_REQUEST"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details=details)


class InsufficientCandidatesError(WalletException):
    """No owned coin of the requested type is available to fund the transfer."""

    error_code = "INSUFFICIENT_CANDIDATES"

    def __init__(
        self,
        message: str,
        coin_type: Optional[str] = None,
        requested: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if coin_type:
            details["coin_type"] = coin_type
        if requested is not None:
            details["requested"] = str(requested)
        super().__init__(message, details=details)


# =============================================================================
# Submission Errors
# =============================================================================

class SubmissionFailedError(WalletException):
    """The remote signer/executor rejected or failed to execute the transaction.

    The original error is kept on ``cause`` and chained as ``__cause__``.
    Resubmitting is left to the caller.
    """

    error_code = "SUBMISSION_FAILED"
    retryable = True

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        reason: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if cause is not None:
            details["original_error"] = str(cause)
        if reason:
            details["reason"] = reason
        super().__init__(message, details=details)
        self.cause = cause


class SignerRPCError(WalletException):
    """JSON-RPC call to the remote signer service failed."""

    error_code = "SIGNER_RPC_ERROR"
    retryable = True

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if method:
            details["method"] = method
        if code is not None:
            details["code"] = code
        super().__init__(message, details=details)


class WalletConfigurationError(WalletException):
    """Service configuration error."""

    error_code = "CONFIGURATION_ERROR"


# =============================================================================
# Error Mapping Utilities
# =============================================================================

# Executor error fragments and the reason reported on SubmissionFailedError
EXECUTOR_ERROR_PATTERNS: dict[str, str] = {
    "insufficient gas": "insufficient_gas",
    "gas budget": "insufficient_gas",
    "insufficient coin balance": "insufficient_balance",
    "insufficient balance": "insufficient_balance",
    "object version": "stale_object",
    "not available for consumption": "stale_object",
    "objectnotfound": "stale_object",
    "deleted": "stale_object",
    "equivocat": "object_locked",
    "locked": "object_locked",
    "timeout": "timeout",
    "timed out": "timeout",
    "connection refused": "unavailable",
    "connecterror": "unavailable",
}


def classify_executor_error(error: BaseException) -> Optional[str]:
    """Map a raw signer/executor error to a stable reason string.

    Returns:
        Reason such as ``"stale_object"``, or None when nothing matches
    """
    error_str = f"{type(error).__name__}: {error}".lower()
    for pattern, reason in EXECUTOR_ERROR_PATTERNS.items():
        if pattern in error_str:
            return reason
    return None


def submission_failed_from(error: BaseException) -> SubmissionFailedError:
    """Wrap a signer/executor error as SubmissionFailedError.

    Example:
        try:
            result = await signer.pay_all(...)
        except Exception as e:
            raise submission_failed_from(e) from e
    """
    if isinstance(error, SubmissionFailedError):
        return error
    reason = classify_executor_error(error)
    message = f"Transaction submission failed: {error}"
    return SubmissionFailedError(message, cause=error, reason=reason)

