"""
Error taxonomy for the CoralSwap SDK.

Every failure raised by the SDK is a CoralSwapError tagged with an ErrorKind.
Callers branch on ``err.kind`` (or the string ``err.code``) rather than on
exception subclasses, and find structured context in ``err.details``.

map_error() translates raw transport/contract failures into the same
taxonomy so that provider implementations can surface them uniformly.
"""

import logging
import re
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Machine-readable error categories."""

    VALIDATION = "VALIDATION_ERROR"
    INSUFFICIENT_LIQUIDITY = "INSUFFICIENT_LIQUIDITY"
    PAIR_NOT_FOUND = "PAIR_NOT_FOUND"
    OVERFLOW = "ARITHMETIC_OVERFLOW"
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    # Transport-side kinds, produced by map_error() and providers
    NETWORK = "NETWORK_ERROR"
    RPC = "RPC_ERROR"
    SLIPPAGE = "SLIPPAGE_EXCEEDED"
    DEADLINE = "DEADLINE_EXCEEDED"
    CIRCUIT_BREAKER = "CIRCUIT_BREAKER"
    FLASH_LOAN = "FLASH_LOAN_ERROR"
    UNKNOWN = "UNKNOWN_ERROR"


class CoralSwapError(Exception):
    """
    Single exception type for the SDK, parameterized by an ErrorKind.

    Attributes:
        kind: Error category
        details: Structured context (amounts are stringified)
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}

    @property
    def code(self) -> str:
        return self.kind.value

    def __repr__(self) -> str:
        return f"CoralSwapError(kind={self.kind.name}, message={self.message!r})"

    # Constructors, one per trigger family

    @classmethod
    def validation(cls, message: str, **details: Any) -> "CoralSwapError":
        return cls(ErrorKind.VALIDATION, message, details)

    @classmethod
    def insufficient_liquidity(
        cls, pool_id: str = "unknown", **details: Any
    ) -> "CoralSwapError":
        return cls(
            ErrorKind.INSUFFICIENT_LIQUIDITY,
            f"Insufficient liquidity for pool {pool_id}",
            {"pool_id": pool_id, **details},
        )

    @classmethod
    def pair_not_found(cls, token_a: str, token_b: str) -> "CoralSwapError":
        return cls(
            ErrorKind.PAIR_NOT_FOUND,
            f"Pair not found for tokens {token_a} / {token_b}",
            {"token_a": token_a, "token_b": token_b},
        )

    @classmethod
    def flash_loan_locked(cls, pool_id: str) -> "CoralSwapError":
        return cls(
            ErrorKind.FLASH_LOAN,
            "Flash loans are currently disabled for this pair",
            {"pool_id": pool_id},
        )

    @classmethod
    def overflow(cls, message: str = "Multiplication overflow", **details: Any) -> "CoralSwapError":
        return cls(ErrorKind.OVERFLOW, message, details)

    @classmethod
    def division_by_zero(cls, message: str = "Division by zero", **details: Any) -> "CoralSwapError":
        return cls(ErrorKind.DIVISION_BY_ZERO, message, details)


# Contract error codes: pair contract 100-113, router 300-306
_CONTRACT_ERRORS: Dict[int, tuple] = {
    100: (ErrorKind.VALIDATION, "Invalid token pair"),
    101: (ErrorKind.INSUFFICIENT_LIQUIDITY, "Insufficient liquidity"),
    102: (ErrorKind.SLIPPAGE, "Slippage tolerance exceeded"),
    103: (ErrorKind.DEADLINE, "Transaction deadline exceeded"),
    104: (ErrorKind.VALIDATION, "Invalid amount"),
    105: (ErrorKind.VALIDATION, "Insufficient input amount"),
    106: (ErrorKind.FLASH_LOAN, "Reentrancy detected"),
    107: (ErrorKind.FLASH_LOAN, "Flash loan callback failed"),
    108: (ErrorKind.FLASH_LOAN, "Flash loan repayment insufficient"),
    109: (ErrorKind.CIRCUIT_BREAKER, "Pool is paused"),
    110: (ErrorKind.VALIDATION, "Unauthorized operation"),
    111: (ErrorKind.VALIDATION, "Invalid recipient"),
    112: (ErrorKind.OVERFLOW, "Arithmetic overflow"),
    113: (ErrorKind.VALIDATION, "K invariant violated"),
    300: (ErrorKind.PAIR_NOT_FOUND, "Pair not found"),
    301: (ErrorKind.VALIDATION, "Invalid swap path"),
    302: (ErrorKind.SLIPPAGE, "Slippage tolerance exceeded"),
    303: (ErrorKind.DEADLINE, "Transaction deadline exceeded"),
    304: (ErrorKind.INSUFFICIENT_LIQUIDITY, "Insufficient liquidity"),
    305: (ErrorKind.VALIDATION, "Excessive input amount"),
    306: (ErrorKind.VALIDATION, "Invalid token"),
}

_CONTRACT_ERROR_RE = re.compile(r"Error\(Contract,\s*#?(\d+)\)", re.IGNORECASE)
_POOL_ADDRESS_RE = re.compile(r"\b(0x[0-9a-fA-F]{40}|[CG][A-Z0-9]{55})\b")

# Ordered: first matching keyword group wins
_MESSAGE_PATTERNS = [
    (ErrorKind.DEADLINE, ["deadline", "expired"]),
    (ErrorKind.SLIPPAGE, ["slippage", "insufficient_output"]),
    (ErrorKind.INSUFFICIENT_LIQUIDITY, ["liquidity"]),
    (ErrorKind.CIRCUIT_BREAKER, ["circuit", "paused"]),
    (ErrorKind.NETWORK, ["econnreset", "etimedout", "enotfound", "enetunreach",
                         "connection", "timed out", "timeout"]),
    (ErrorKind.RPC, ["rate limit", "too many requests", "429", "rpc"]),
    (ErrorKind.FLASH_LOAN, ["flash loan", "flash_loan", "reentrancy", "callback"]),
    (ErrorKind.PAIR_NOT_FOUND, ["pair not found", "no pair", "pair_not_found"]),
    (ErrorKind.VALIDATION, ["invalid", "validation", "required", "must be"]),
]


def _extract_pool_id(error: BaseException, message: str) -> str:
    details = getattr(error, "details", None)
    if isinstance(details, dict):
        for key in ("pool_id", "pair_address", "pair"):
            if details.get(key):
                return str(details[key])
    match = _POOL_ADDRESS_RE.search(message)
    return match.group(1) if match else "unknown"


def map_error(error: BaseException) -> CoralSwapError:
    """
    Map a raw exception to a CoralSwapError.

    Contract error codes (``Error(Contract, #NNN)``) are matched first, then
    keyword patterns in the message. Unrecognised errors map to UNKNOWN and
    keep the original exception in ``details["original_error"]``.

    Args:
        error: Exception raised by a transport or contract call

    Returns:
        Tagged CoralSwapError (the same object if already tagged)
    """
    if isinstance(error, CoralSwapError):
        return error

    message = str(error)
    normalized = message.lower()

    match = _CONTRACT_ERROR_RE.search(message)
    if match:
        code = int(match.group(1))
        if code in _CONTRACT_ERRORS:
            kind, text = _CONTRACT_ERRORS[code]
            details = {"contract_error_code": code}
            if kind is ErrorKind.INSUFFICIENT_LIQUIDITY or kind is ErrorKind.CIRCUIT_BREAKER:
                details["pool_id"] = _extract_pool_id(error, message)
            return CoralSwapError(kind, text, details)
        logger.debug(f"Unmapped contract error code {code}")

    for kind, keywords in _MESSAGE_PATTERNS:
        if any(keyword in normalized for keyword in keywords):
            details: Dict[str, Any] = {}
            if kind is ErrorKind.INSUFFICIENT_LIQUIDITY or kind is ErrorKind.CIRCUIT_BREAKER:
                details["pool_id"] = _extract_pool_id(error, message)
            return CoralSwapError(kind, message, details)

    return CoralSwapError(ErrorKind.UNKNOWN, message, {"original_error": error})


__all__ = ["ErrorKind", "CoralSwapError", "map_error"]
