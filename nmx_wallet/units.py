"""Conversion between display amounts and integer base units."""
from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from typing import Union

from .errors import InvalidAmountError

Amount = Union[str, int, float, Decimal]

DEFAULT_DECIMAL_PLACES = 6

# enough significant digits for any uint256 base-unit amount
_PRECISION = 80


def _to_decimal(amount: Amount) -> Decimal:
    """Parse a caller-supplied amount into a finite, non-negative Decimal."""
    if isinstance(amount, bool):
        raise InvalidAmountError(amount, "booleans are not amounts")
    if isinstance(amount, float):
        # str() gives the shortest repr, so 1.1 stays 1.1 instead of 1.1000000000000000888
        amount = str(amount)
    if isinstance(amount, str):
        amount = amount.strip()
        if not amount:
            raise InvalidAmountError(amount, "empty")
    if not isinstance(amount, (str, int, Decimal)):
        raise InvalidAmountError(amount, "unsupported type")

    try:
        value = Decimal(amount)
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(amount, "not a number") from None

    if not value.is_finite():
        raise InvalidAmountError(amount, "not finite")
    if value < 0:
        raise InvalidAmountError(amount, "negative")
    return value


def to_base_units(amount: Amount, decimal_places: int = DEFAULT_DECIMAL_PLACES) -> str:
    """Convert a display amount to an integer base-unit string.

    Fractional digits beyond ``decimal_places`` are truncated.

    Examples:
        to_base_units(1.5) → "1500000"
        to_base_units("0.0000019") → "1"
    """
    value = _to_decimal(amount)
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        try:
            scaled = value.scaleb(decimal_places).quantize(Decimal(1), rounding=ROUND_DOWN)
        except InvalidOperation:
            raise InvalidAmountError(amount, "too large") from None
    return str(int(scaled))


def from_base_units(amount: Amount, decimal_places: int = DEFAULT_DECIMAL_PLACES) -> str:
    """Convert an integer base-unit amount to a display string.

    Examples:
        from_base_units("1500000") → "1.5"
        from_base_units("0") → "0"
    """
    value = _to_decimal(amount)
    if value != value.to_integral_value():
        raise InvalidAmountError(amount, "base units must be an integer")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        display = value.scaleb(-decimal_places)
    if display.adjusted() >= _PRECISION:
        raise InvalidAmountError(amount, "too large")
    # "f" avoids exponent notation for tiny or large values
    text = format(display, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
