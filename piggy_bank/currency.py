"""
Amount Handling Module

Decimal coercion, parsing and two-decimal formatting for piggy bank amounts.
NEVER uses float for monetary values.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext, localcontext
from typing import Optional
import re

from .config import get_config

# Set global decimal context for financial precision
getcontext().prec = 28

TWO_PLACES = Decimal('0.01')
DEFAULT_SYMBOL = "R$"

NUMBER_TEXT = re.compile(r'[+-]?[\d.,]+')
THOUSANDS_ONLY = re.compile(r'[+-]?[1-9]\d{0,2}(\.\d{3})+|[+-]?[1-9]\d{0,2}(,\d{3})+')


def to_decimal(value) -> Decimal:
    """
    Coerce a numeric value to Decimal without going through binary floating point

    Args:
        value: Decimal, int, numeric string or float

    Returns:
        Decimal value

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert {value!r} to Decimal")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            # float goes through str() so its binary expansion never leaks in
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Cannot convert {value!r} to Decimal") from None
    else:
        raise ValueError(f"Cannot convert {type(value).__name__} to Decimal")

    if not result.is_finite():
        raise ValueError(f"Amount must be a finite number, got {value!r}")

    return result


def decimal_from_string(value: str, symbol: Optional[str] = None) -> Decimal:
    """
    Safely convert user text to Decimal

    Only the currency symbol and whitespace are ignored; any other character
    that is not a digit, sign or separator makes the text unparsable.

    Separator rule:
        - With both "." and ",", the last one is the decimal separator and
          the other groups thousands: "R$ 1.234,56" and "1,234.56" are 1234.56.
        - With one kind only, a number written in groups of three after a
          non-zero leading group is grouped thousands: "1.234", "1,234" and
          "1.000.000" are integers.
        - Otherwise a single separator is the decimal one: "10.50", "10,5",
          "0.001".

    Args:
        value: String representation of number
        symbol: Currency symbol to ignore (configured symbol if None)

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    if symbol is None:
        symbol = get_config().currency_symbol

    clean_value = value.replace(symbol, '') if symbol else value
    clean_value = re.sub(r'\s+', '', clean_value)

    if not NUMBER_TEXT.fullmatch(clean_value):
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    if ',' in clean_value and '.' in clean_value:
        decimal_sep = ',' if clean_value.rfind(',') > clean_value.rfind('.') else '.'
        group_sep = '.' if decimal_sep == ',' else ','
        integer, _, fraction = clean_value.rpartition(decimal_sep)
        if not _grouped_integer(group_sep).fullmatch(integer):
            raise ValueError(f"Cannot convert '{value}' to Decimal")
        clean_value = f"{integer.replace(group_sep, '')}.{fraction}"
    elif ',' in clean_value or '.' in clean_value:
        sep = ',' if ',' in clean_value else '.'
        if THOUSANDS_ONLY.fullmatch(clean_value):
            clean_value = clean_value.replace(sep, '')
        elif clean_value.count(sep) == 1:
            clean_value = clean_value.replace(sep, '.')
        else:
            raise ValueError(f"Cannot convert '{value}' to Decimal")

    try:
        return to_decimal(clean_value)
    except ValueError:
        raise ValueError(f"Cannot convert '{value}' to Decimal") from None


def _grouped_integer(group_sep: str):
    sep = re.escape(group_sep)
    return re.compile(rf'[+-]?(\d+|\d{{1,3}}({sep}\d{{3}})+)')


def quantize_amount(value: Decimal) -> Decimal:
    """Round to two decimal places"""
    with localcontext() as ctx:
        # Wide enough for every integer digit plus the two decimals
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal, symbol: str = DEFAULT_SYMBOL) -> str:
    """Format for display, e.g. "R$ 10.00" """
    return f"{symbol} {quantize_amount(value):.2f}"
