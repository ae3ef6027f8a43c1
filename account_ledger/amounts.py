"""
Amount Handling Module

Converts caller-supplied amounts to Decimal and formats them for display.
NEVER uses float for balance arithmetic; floats are converted through str.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Union

# High precision for balance arithmetic; rounding happens only for display
getcontext().prec = 28

AmountLike = Union[Decimal, int, float, str]

ZERO = Decimal('0')


def to_decimal(value: AmountLike) -> Decimal:
    """
    Convert an amount to Decimal

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Decimal value (floats go through their shortest repr, so 0.1 -> 0.1)

    Raises:
        TypeError: If value is not a supported numeric type
        ValueError: If a string cannot be parsed or the value is not finite
    """
    if isinstance(value, bool):
        raise TypeError("Amount cannot be a boolean")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Cannot convert '{value}' to Decimal")
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return result


def quantize_amount(value: Decimal, precision: int = 2) -> Decimal:
    """Round to a fixed number of decimal places (half up)"""
    return value.quantize(Decimal('0.1') ** precision, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal, precision: int = 2) -> str:
    """Format for display, e.g. Decimal('1000') -> '1000.00'"""
    return f"{quantize_amount(value, precision):.{precision}f}"
