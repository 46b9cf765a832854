"""
Fixed-point amount codec.

Converts between human-readable decimal strings and scaled integers, and
provides basis-point and overflow-checked arithmetic helpers.

- Amounts are ints scaled by 10^decimals; floats never enter the pricing path.
- parse_amount() truncates excess fractional digits; format_amount() truncates
  for display. Neither rounds.
- safe_mul()/safe_div() carry the contracts a fixed-width (i128) port needs.
"""

import re
from typing import Optional

from .constants import BPS_DENOMINATOR, DEFAULT_DECIMALS, DEFAULT_DISPLAY_DECIMALS
from .errors import CoralSwapError

_NUMERIC_RE = re.compile(r"^[0-9]+(\.[0-9]+)?$")


def _validate_decimals(decimals: int, name: str = "decimals") -> None:
    if not isinstance(decimals, int) or isinstance(decimals, bool) or decimals < 0:
        raise CoralSwapError.validation(
            f"Invalid {name}: must be a non-negative integer", **{name: repr(decimals)}
        )


def parse_amount(value: str, decimals: int = DEFAULT_DECIMALS) -> int:
    """
    Parse a decimal string into a fixed-point integer.

    Args:
        value: Decimal string, e.g. "1.5", "-100.123", "+7"
        decimals: Token decimals (non-negative int)

    Returns:
        value * 10^decimals, fractional excess truncated

    Raises:
        CoralSwapError: VALIDATION on malformed input or invalid decimals
    """
    _validate_decimals(decimals)
    if not isinstance(value, str):
        raise CoralSwapError.validation(
            f"Amount must be a string, got {type(value).__name__}"
        )

    trimmed = value.strip()
    if not trimmed:
        raise CoralSwapError.validation("Amount is required")

    sign = 1
    numeric = trimmed
    if trimmed[0] in "+-":
        sign = -1 if trimmed[0] == "-" else 1
        numeric = trimmed[1:]

    if not _NUMERIC_RE.match(numeric):
        raise CoralSwapError.validation("Invalid amount format", amount=value)

    whole, _, frac = numeric.partition(".")
    frac = frac[:decimals].ljust(decimals, "0")
    return sign * int(whole + frac)


# Alias kept for callers thinking in on-chain terms
to_fixed = parse_amount


def from_fixed(amount: int, decimals: int = DEFAULT_DECIMALS) -> str:
    """
    Render a fixed-point integer at full precision.

    from_fixed(15000000, 7) == "1.5000000"; from_fixed(-5, 3) == "-0.005"
    """
    _validate_decimals(decimals)
    negative = amount < 0
    digits = str(-amount if negative else amount)
    if decimals == 0:
        result = digits
    else:
        digits = digits.rjust(decimals + 1, "0")
        result = f"{digits[:-decimals]}.{digits[-decimals:]}"
    return f"-{result}" if negative else result


def format_amount(
    amount: int,
    decimals: int = DEFAULT_DECIMALS,
    display_decimals: int = DEFAULT_DISPLAY_DECIMALS,
) -> str:
    """
    Format a fixed-point integer for display, truncating (never rounding).

    Args:
        amount: Scaled integer amount
        decimals: Token decimals
        display_decimals: Fractional digits to keep

    Returns:
        Display string, e.g. format_amount(15123456, 7) == "1.5123"
    """
    _validate_decimals(display_decimals, "display_decimals")
    whole, _, frac = from_fixed(amount, decimals).partition(".")
    frac = frac[:display_decimals]
    # Negative dust truncates to zero, which has no sign
    if whole.startswith("-") and not (whole[1:] + frac).strip("0"):
        whole = whole[1:]
    if not frac:
        return whole
    return f"{whole}.{frac}"


def to_bps(numerator: int, denominator: int) -> int:
    """Ratio in basis points, floored. Returns 0 for a zero denominator."""
    if denominator == 0:
        return 0
    return (numerator * BPS_DENOMINATOR) // denominator


def apply_bps(amount: int, bps: int) -> int:
    """Floored amount * bps / 10000."""
    return (amount * bps) // BPS_DENOMINATOR


def slippage_tolerance(amount: int, slippage_bps: int, is_input: bool) -> int:
    """
    Slippage-adjusted bound.

    For inputs the maximum willing to pay (amount raised), for outputs the
    minimum willing to receive (amount lowered).
    """
    if not 0 <= slippage_bps <= BPS_DENOMINATOR:
        raise CoralSwapError.validation(
            "Slippage bps must be between 0 and 10000", slippage_bps=slippage_bps
        )
    multiplier = BPS_DENOMINATOR + slippage_bps if is_input else BPS_DENOMINATOR - slippage_bps
    return (amount * multiplier) // BPS_DENOMINATOR


def percent_diff(a: int, b: int) -> float:
    """Percentage change of a relative to b (diagnostics only, 2 decimals)."""
    if b == 0:
        return 0.0
    return safe_div((a - b) * BPS_DENOMINATOR, b) / 100


def safe_mul(a: int, b: int, bits: Optional[int] = None) -> int:
    """
    Multiply with overflow detection.

    The quotient check catches wraparound on fixed-width backends; with
    ``bits`` set the product must also fit a signed integer of that width.

    Raises:
        CoralSwapError: OVERFLOW
    """
    result = a * b
    if a != 0 and safe_div(result, a) != b:
        raise CoralSwapError.overflow(a=str(a), b=str(b))
    if bits is not None:
        bound = 1 << (bits - 1)
        if not -bound <= result < bound:
            raise CoralSwapError.overflow(
                f"Multiplication overflow: product exceeds i{bits}", a=str(a), b=str(b)
            )
    return result


def safe_div(a: int, b: int) -> int:
    """
    Integer division truncating toward zero.

    Matches fixed-width integer division semantics; for non-negative operands
    this is floor division.

    Raises:
        CoralSwapError: DIVISION_BY_ZERO
    """
    if b == 0:
        raise CoralSwapError.division_by_zero(a=str(a))
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


__all__ = [
    "parse_amount",
    "to_fixed",
    "from_fixed",
    "format_amount",
    "to_bps",
    "apply_bps",
    "slippage_tolerance",
    "percent_diff",
    "safe_mul",
    "safe_div",
]
