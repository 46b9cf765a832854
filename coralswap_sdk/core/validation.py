"""
Input validation guards shared by the core and the quoting modules.

Each guard raises a VALIDATION CoralSwapError with a descriptive message so
bad parameters are rejected before any provider call is made.
"""

from typing import Sequence

from .constants import BPS_DENOMINATOR, MAX_SLIPPAGE_BPS
from .errors import CoralSwapError
from .types import same_token


def validate_positive_amount(amount: int, name: str) -> None:
    """Require an int amount strictly greater than zero."""
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise CoralSwapError.validation(
            f"{name} must be an integer, got {type(amount).__name__}", **{name: repr(amount)}
        )
    if amount <= 0:
        raise CoralSwapError.validation(
            f"{name} must be greater than 0, got {amount}", **{name: str(amount)}
        )


def validate_non_negative_amount(amount: int, name: str) -> None:
    """Require an int amount greater than or equal to zero."""
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise CoralSwapError.validation(
            f"{name} must be an integer, got {type(amount).__name__}", **{name: repr(amount)}
        )
    if amount < 0:
        raise CoralSwapError.validation(
            f"{name} must be non-negative, got {amount}", **{name: str(amount)}
        )


def validate_slippage(slippage_bps: int) -> None:
    """Require slippage tolerance within [0, MAX_SLIPPAGE_BPS]."""
    if (
        not isinstance(slippage_bps, int)
        or isinstance(slippage_bps, bool)
        or not 0 <= slippage_bps <= MAX_SLIPPAGE_BPS
    ):
        raise CoralSwapError.validation(
            f"Slippage must be between 0 and {MAX_SLIPPAGE_BPS} bps, got {slippage_bps}",
            slippage_bps=slippage_bps,
        )


def validate_fee_bps(fee_bps: int) -> None:
    """Require a fee rate within [0, BPS_DENOMINATOR)."""
    if (
        not isinstance(fee_bps, int)
        or isinstance(fee_bps, bool)
        or not 0 <= fee_bps < BPS_DENOMINATOR
    ):
        raise CoralSwapError.validation(
            f"Fee must be between 0 and {BPS_DENOMINATOR - 1} bps, got {fee_bps}",
            fee_bps=fee_bps,
        )


def validate_token(token: str, name: str) -> None:
    """Require a non-empty token identifier."""
    if not isinstance(token, str) or not token.strip():
        raise CoralSwapError.validation(f"{name} must not be empty")


def validate_distinct_tokens(token_in: str, token_out: str) -> None:
    if same_token(token_in, token_out):
        raise CoralSwapError.validation(
            "token_in and token_out must be different",
            token_in=token_in,
            token_out=token_out,
        )


def validate_path(path: Sequence[str], min_length: int = 2) -> None:
    """
    Require a routing path of at least min_length tokens with no self-hops.

    Args:
        path: Ordered token identifiers
        min_length: Minimum number of tokens
    """
    if len(path) < min_length:
        raise CoralSwapError.validation(
            f"Swap path must contain at least {min_length} tokens", path=list(path)
        )
    for index, token in enumerate(path):
        validate_token(token, f"path[{index}]")
    for token_in, token_out in zip(path, path[1:]):
        if same_token(token_in, token_out):
            raise CoralSwapError.validation(
                f"Swap path contains a hop from {token_in} to itself", path=list(path)
            )


__all__ = [
    "validate_positive_amount",
    "validate_non_negative_amount",
    "validate_slippage",
    "validate_fee_bps",
    "validate_token",
    "validate_distinct_tokens",
    "validate_path",
]
