"""
Liquidity math: integer square root, LP share minting and burning, price ratios.

Mirrors the pair contract's mint/burn arithmetic:
- first deposit mints sqrt(amount_a * amount_b) - MIN_LIQUIDITY
- later deposits mint amount_a * total_supply / reserve_a
- burning returns reserve * liquidity / total_supply of each token
"""

from fractions import Fraction

from .constants import MIN_LIQUIDITY, PRICE_SCALE
from .errors import CoralSwapError


def isqrt(value: int) -> int:
    """
    Floor of the square root via Babylonian iteration.

    Raises:
        CoralSwapError: VALIDATION for negative input
    """
    if value < 0:
        raise CoralSwapError.validation(
            "Square root of negative number", value=str(value)
        )
    if value == 0:
        return 0
    x = value
    y = (x + 1) // 2
    while y < x:
        x = y
        y = (x + value // x) // 2
    return x


def first_deposit_lp(amount_a: int, amount_b: int) -> int:
    """LP shares minted by the bootstrap deposit (after the permanent burn)."""
    return isqrt(amount_a * amount_b) - MIN_LIQUIDITY


def proportional_lp(amount_a: int, reserve_a: int, total_supply: int) -> int:
    """LP shares minted for amount_a against an existing supply."""
    if reserve_a <= 0:
        raise CoralSwapError.insufficient_liquidity(reserve_a=str(reserve_a))
    return (amount_a * total_supply) // reserve_a


def quote_amount_b(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Token B amount matching amount_a at the current reserve ratio."""
    if reserve_a <= 0:
        raise CoralSwapError.insufficient_liquidity(reserve_a=str(reserve_a))
    return (amount_a * reserve_b) // reserve_a


def pool_share(minted: int, total_supply: int) -> Fraction:
    """Share of the pool held after minting into total_supply."""
    denominator = total_supply + minted
    if denominator <= 0:
        return Fraction(0)
    return Fraction(minted, denominator)


def price_ratio(numerator_reserve: int, denominator_reserve: int) -> int:
    """numerator / denominator scaled by PRICE_SCALE; 0 if the denominator is 0."""
    if denominator_reserve <= 0:
        return 0
    return (numerator_reserve * PRICE_SCALE) // denominator_reserve


def burn_amounts(liquidity: int, reserve0: int, reserve1: int, total_supply: int):
    """
    Underlying token amounts returned for burning liquidity shares.

    Returns:
        (amount0, amount1)

    Raises:
        CoralSwapError: INSUFFICIENT_LIQUIDITY when the supply is zero or
            liquidity exceeds it
    """
    if total_supply <= 0 or liquidity > total_supply:
        raise CoralSwapError.insufficient_liquidity(
            liquidity=str(liquidity), total_supply=str(total_supply)
        )
    return (reserve0 * liquidity) // total_supply, (reserve1 * liquidity) // total_supply


__all__ = [
    "isqrt",
    "first_deposit_lp",
    "proportional_lp",
    "quote_amount_b",
    "pool_share",
    "price_ratio",
    "burn_amounts",
]
