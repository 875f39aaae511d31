"""
Monetary Amount Module

Coerces inputs to Decimal and formats balances for display.
NEVER uses float arithmetic for monetary values: floats are converted
through their string representation first.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Union

from .errors import InvalidArgument

# High precision for financial calculations
getcontext().prec = 28

ZERO = Decimal('0')

AmountLike = Union[Decimal, int, float, str]


def to_amount(value: AmountLike, field_name: str = "amount") -> Decimal:
    """
    Convert a value to a finite Decimal
    
    Args:
        value: Amount as Decimal, int, float or numeric string
        field_name: Name used in the error message
        
    Returns:
        Decimal representation of the value
        
    Raises:
        InvalidArgument: If the value is not numeric, is NaN or is infinite
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"{field_name} must be a number, got bool")
    
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidArgument(f"{field_name} must be a number, got {value!r}") from None
    else:
        raise InvalidArgument(f"{field_name} must be a number, got {type(value).__name__}")
    
    if not amount.is_finite():
        raise InvalidArgument(f"Invalid {field_name}: {value!r} is not finite")
    
    return amount


def to_positive_amount(value: AmountLike, message: str = "Amount must be > 0") -> Decimal:
    """Convert a value to a Decimal that is strictly greater than zero"""
    amount = to_amount(value)
    if amount <= ZERO:
        raise InvalidArgument(message)
    return amount


def quantize(amount: Decimal, precision: int = 2) -> Decimal:
    """Round an amount to the given number of decimal places"""
    return amount.quantize(Decimal('0.1') ** precision, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, symbol: str = "$", precision: int = 2) -> str:
    """Format for display, e.g. ``$1300.00`` or ``$-135.00``"""
    return f"{symbol}{quantize(amount, precision):.{precision}f}"
