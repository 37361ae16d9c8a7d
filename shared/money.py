"""
Money Helpers

Fixed-point arithmetic for prices. Every amount is a Decimal; floats coming
from DataFrames are converted through their shortest repr so 0.1 becomes
Decimal("0.1") and not its binary expansion.

All engine arithmetic runs inside MONEY_CONTEXT, so a caller changing the
global decimal context cannot change a price.
"""

import math
from decimal import Decimal, Context, ROUND_HALF_UP, localcontext

from .errors import ValidationError


# =============================================================================
# CONSTANTS
# =============================================================================

CENTS = Decimal("0.01")
ZERO = Decimal("0")

# ROUND_HALF_UP in the decimal module rounds half away from zero
MONEY_CONTEXT = Context(prec=28, rounding=ROUND_HALF_UP)


# =============================================================================
# HELPERS
# =============================================================================

def to_decimal(value: float | int | Decimal | None, field: str = "value") -> Decimal:
    """
    Convert a numeric input to Decimal.

    Args:
        value: int, float or Decimal. None is treated as zero.
        field: Field name used in the error message

    Returns:
        Decimal representation of value

    Raises:
        ValidationError: If value is NaN, infinite or not numeric
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be numeric, got bool")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValidationError(f"{field} must be finite, got {value}")
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError(f"{field} must be finite, got {value}")
        return Decimal(repr(value))
    raise ValidationError(f"{field} must be numeric, got {type(value).__name__}")


def round2(value: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    with localcontext(MONEY_CONTEXT):
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


__all__ = [
    "CENTS",
    "ZERO",
    "MONEY_CONTEXT",
    "to_decimal",
    "round2",
]
