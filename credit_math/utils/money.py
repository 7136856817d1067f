"""Decimal helpers shared by the amortization engine and the ledger"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Union

from credit_math.domain.exceptions import InvalidAmountError

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
ONE = Decimal("1")

# Fractional digits of every rounded money result
MONEY_PLACES = 2


def to_decimal(value: Number) -> Decimal:
    """
    Coerce a number to Decimal.

    Floats go through str() so that 0.07 becomes Decimal("0.07") rather than
    its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidAmountError(f"Not a number: {value!r}")
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidAmountError(f"Not a number: {value!r}") from e


def round_bank(value: Decimal, places: int = MONEY_PLACES) -> Decimal:
    """Round half to even at `places` fractional digits"""
    return value.quantize(ONE.scaleb(-places), rounding=ROUND_HALF_EVEN)
