#!/usr/bin/env python3
"""
Amount Parsing and Formatting Utilities

All amounts are handled as ``Decimal`` so that balances are exact sums.

Key Principles:
- Never use floating-point arithmetic for amounts
- Parsing is explicit about decimal and thousands separators; the process
  locale is never consulted
- Output amounts always carry exactly two fractional digits
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

TWO_PLACES = Decimal("0.01")

# Characters banks use as thousands separators besides the configured one
_SPACE_SEPARATORS = (" ", "\u00a0", "\u202f")


def parse_amount(text: str, decimal_separator: str = ".", thousands_separator: str | None = ",") -> Decimal:
    """
    Parse a localized amount string into a Decimal.

    Args:
        text: Amount text such as "-1,234.56", "-929,00" or "+15.00"
        decimal_separator: Character separating the fractional part
        thousands_separator: Grouping character to drop (None to keep none)

    Returns:
        Parsed Decimal amount

    Raises:
        ValueError: If the text is empty or not a number

    Examples:
        parse_amount("-29.90") -> Decimal("-29.90")
        parse_amount("1 234,50", decimal_separator=",", thousands_separator=" ") -> Decimal("1234.50")
    """
    clean = text.strip()
    for space in _SPACE_SEPARATORS:
        clean = clean.replace(space, "")
    if thousands_separator:
        clean = clean.replace(thousands_separator, "")
    if decimal_separator != ".":
        clean = clean.replace(decimal_separator, ".")

    if not clean:
        raise ValueError(f"Empty amount: {text!r}")

    try:
        amount = Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {text!r}") from e

    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {text!r}")
    return amount


def format_amount(amount: Decimal) -> str:
    """
    Format an amount with exactly two fractional digits.

    Midpoints round away from zero.

    Example:
        format_amount(Decimal("-100.5")) -> "-100.50"
    """
    return str(amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def sum_amounts(amounts: list[Decimal]) -> Decimal:
    """Exact decimal sum (an empty list sums to zero)."""
    return sum(amounts, Decimal("0"))
