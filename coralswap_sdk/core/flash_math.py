"""
Flash loan fee math.

A flash loan charges max(amount * flash_fee_bps / 10000, flash_fee_floor)
on top of the principal, repaid within the same transaction.
"""

from .amounts import apply_bps
from .constants import BPS_DENOMINATOR, FLASH_RESERVE_MARGIN_BPS
from .errors import CoralSwapError


def flash_loan_fee(amount: int, fee_bps: int, fee_floor: int = 0) -> int:
    """
    Fee owed for borrowing amount.

    Args:
        amount: Principal borrowed
        fee_bps: Flash fee rate in basis points
        fee_floor: Minimum fee regardless of amount

    Returns:
        The bps fee (floored) or fee_floor, whichever is larger
    """
    if not 0 <= fee_bps <= BPS_DENOMINATOR:
        raise CoralSwapError.validation(
            f"Flash fee must be between 0 and {BPS_DENOMINATOR} bps, got {fee_bps}",
            fee_bps=fee_bps,
        )
    return max(apply_bps(amount, fee_bps), fee_floor)


def flash_loan_repayment(amount: int, fee_bps: int, fee_floor: int = 0) -> int:
    """Principal plus fee."""
    return amount + flash_loan_fee(amount, fee_bps, fee_floor)


def max_borrowable(reserve: int) -> int:
    """Reserve minus the safety margin kept back from flash borrowing."""
    if reserve <= 0:
        return 0
    return reserve - apply_bps(reserve, FLASH_RESERVE_MARGIN_BPS)


__all__ = ["flash_loan_fee", "flash_loan_repayment", "max_borrowable"]
