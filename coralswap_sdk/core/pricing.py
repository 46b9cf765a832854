"""
Constant-product pricing with a per-pool dynamic fee.

Implements the swap formulas of the pair contract without external
dependencies. All inputs and outputs are ints; divisions floor.

Key formulas (fee_factor = 10000 - fee_bps):
- amount_out = amount_in * fee_factor * reserve_out
               / (reserve_in * 10000 + amount_in * fee_factor)
- amount_in  = reserve_in * amount_out * 10000
               / ((reserve_out - amount_out) * fee_factor) + 1
- price impact compares the output against the ideal (zero-impact) output
  amount_in * reserve_out / reserve_in
"""

from fractions import Fraction
from typing import Iterable

from .amounts import apply_bps
from .constants import BPS_DENOMINATOR
from .errors import CoralSwapError
from .validation import validate_fee_bps


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int,
) -> int:
    """
    Output amount for an exact-in swap.

    Args:
        amount_in: Input amount (> 0)
        reserve_in: Pool reserve of the input token
        reserve_out: Pool reserve of the output token
        fee_bps: Pool fee in basis points

    Returns:
        Output amount, floored

    Raises:
        CoralSwapError: VALIDATION for a non-positive input or a fee outside
            [0, 10000], INSUFFICIENT_LIQUIDITY for a non-positive reserve
    """
    if amount_in <= 0:
        raise CoralSwapError.validation(
            "Insufficient input amount", amount_in=str(amount_in)
        )
    if reserve_in <= 0 or reserve_out <= 0:
        raise CoralSwapError.insufficient_liquidity(
            reserve_in=str(reserve_in), reserve_out=str(reserve_out)
        )
    if not 0 <= fee_bps <= BPS_DENOMINATOR:
        raise CoralSwapError.validation(
            f"Fee must be between 0 and {BPS_DENOMINATOR} bps, got {fee_bps}",
            fee_bps=fee_bps,
        )

    fee_factor = BPS_DENOMINATOR - fee_bps
    amount_in_with_fee = amount_in * fee_factor
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * BPS_DENOMINATOR + amount_in_with_fee
    return numerator // denominator


def get_amount_in(
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int,
) -> int:
    """
    Input amount required for an exact-out swap.

    The trailing +1 compensates for floor truncation so that re-simulating
    get_amount_out() with the result never yields less than amount_out.

    Raises:
        CoralSwapError: VALIDATION for a non-positive output,
            INSUFFICIENT_LIQUIDITY for a non-positive reserve or an output
            at or above reserve_out
    """
    if amount_out <= 0:
        raise CoralSwapError.validation(
            "Insufficient output amount", amount_out=str(amount_out)
        )
    if reserve_in <= 0 or reserve_out <= 0:
        raise CoralSwapError.insufficient_liquidity(
            reserve_in=str(reserve_in), reserve_out=str(reserve_out)
        )
    if amount_out >= reserve_out:
        raise CoralSwapError.insufficient_liquidity(
            reason="Output amount exceeds available reserves",
            amount_out=str(amount_out),
            reserve_out=str(reserve_out),
        )
    validate_fee_bps(fee_bps)

    fee_factor = BPS_DENOMINATOR - fee_bps
    numerator = reserve_in * amount_out * BPS_DENOMINATOR
    denominator = (reserve_out - amount_out) * fee_factor
    return numerator // denominator + 1


def fee_amount(amount_in: int, fee_bps: int) -> int:
    """Fee charged on amount_in, in input-token units."""
    return apply_bps(amount_in, fee_bps)


def price_impact_bps(
    amount_in: int,
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
) -> int:
    """
    Price impact of a trade in basis points.

    Returns 10000 (fully adverse) when a reserve is zero or the ideal output
    rounds down to zero.
    """
    if reserve_in == 0 or reserve_out == 0:
        return BPS_DENOMINATOR
    ideal_out = (amount_in * reserve_out) // reserve_in
    if ideal_out == 0:
        return BPS_DENOMINATOR
    return ((ideal_out - amount_out) * BPS_DENOMINATOR) // ideal_out


def compound_price_impact(impacts_bps: Iterable[int]) -> int:
    """
    Combine sequential per-hop impacts multiplicatively.

    total = 1 - prod(1 - impact_i / 10000), in bps rounded to nearest
    (halves away from zero). Computed exactly with Fraction.
    """
    remaining = Fraction(1)
    for bps in impacts_bps:
        remaining *= 1 - Fraction(bps, BPS_DENOMINATOR)
    total = (1 - remaining) * BPS_DENOMINATOR
    # Round half away from zero
    whole, rest = divmod(abs(total.numerator), total.denominator)
    if 2 * rest >= total.denominator:
        whole += 1
    return whole if total >= 0 else -whole


def constant_product_holds(
    amount_in: int,
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
) -> bool:
    """Whether reserves after the swap keep k = reserve_in * reserve_out from decreasing."""
    return (reserve_in + amount_in) * (reserve_out - amount_out) >= reserve_in * reserve_out


__all__ = [
    "get_amount_out",
    "get_amount_in",
    "fee_amount",
    "price_impact_bps",
    "compound_price_impact",
    "constant_product_holds",
]
