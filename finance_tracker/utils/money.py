"""
Money Utilities

Currency formatting for display and parsing of free-form amount input.

DESIGN DECISION: Every displayed amount is rounded with ROUND_HALF_UP
(halves away from zero) to exactly two fraction digits. The same rule is
used by every formatting helper in this module so two screens never
disagree by a cent.

DESIGN DECISION: Locale and currency are explicit arguments. Nothing here
reads settings or UI state; callers at the edge pass the user's choices in.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


SUPPORTED_CURRENCIES = ("BRL", "USD", "EUR", "GBP", "JPY", "CNY", "AUD", "CAD")
DEFAULT_CURRENCY = "BRL"
DEFAULT_LOCALE = "pt-BR"

MONEY_ROUNDING = ROUND_HALF_UP
CENT = Decimal("0.01")
ZERO = Decimal("0")

# Separator between symbol and number where the locale uses one
NBSP = "\u00a0"

# locale -> (group separator, decimal separator, space after symbol)
_LOCALE_FORMATS = {
    "pt-BR": (".", ",", True),
    "en-US": (",", ".", False),
}

_CURRENCY_SYMBOLS = {
    "pt-BR": {
        "BRL": "R$", "USD": "US$", "EUR": "€", "GBP": "£",
        "JPY": "JP¥", "CNY": "CN¥", "AUD": "AU$", "CAD": "CA$",
    },
    "en-US": {
        "BRL": "R$", "USD": "$", "EUR": "€", "GBP": "£",
        "JPY": "¥", "CNY": "CN¥", "AUD": "A$", "CAD": "CA$",
    },
}

_NON_DIGITS = re.compile(r"\D")


class ParsedAmount(BaseModel):
    """Result of parsing user-typed amount text."""
    model_config = ConfigDict(frozen=True)

    value: Decimal
    display: str


def to_decimal(value: Any) -> Decimal:
    """
    Convert a number-like value to Decimal.

    Floats go through str() so 0.1 stays 0.1. None, unparseable text,
    NaN and infinities become zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not result.is_finite():
        return ZERO
    return result


def _quantize(value: Decimal, quantum: Decimal) -> Decimal:
    # Precision grows with the operand so very large amounts never overflow it
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - quantum.adjusted() + 2)
        return value.quantize(quantum, rounding=MONEY_ROUNDING)


def round_money(amount: Any) -> Decimal:
    """Round to cents using the display rounding rule."""
    return _quantize(to_decimal(amount), CENT)


def resolve_currency(currency_code: Optional[str]) -> str:
    """Return the code if supported, otherwise the default currency."""
    code = (currency_code or "").strip().upper()
    return code if code in SUPPORTED_CURRENCIES else DEFAULT_CURRENCY


def _locale_format(locale: str) -> tuple[str, str, bool]:
    return _LOCALE_FORMATS.get(locale, _LOCALE_FORMATS[DEFAULT_LOCALE])


def _group_digits(digits: str, separator: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return separator.join(groups)


def format_number(amount: Any, locale: str = DEFAULT_LOCALE) -> str:
    """
    Format an amount with grouping and two fraction digits, no symbol.

    The sign is dropped; callers that need it prepend it themselves.
    """
    group_sep, decimal_sep, _ = _locale_format(locale)
    rounded = round_money(amount).copy_abs()
    integer_part, _, fraction = f"{rounded:f}".partition(".")
    return f"{_group_digits(integer_part, group_sep)}{decimal_sep}{fraction or '00'}"


def format_currency(
    amount: Any,
    currency_code: Optional[str] = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """
    Render an amount as a currency string.

    Unsupported currency codes fall back to BRL. Unknown locales fall back
    to pt-BR.

    Examples:
        format_currency(Decimal("1234.565"))          -> "R$ 1.234,57"
        format_currency(-5, "USD", locale="en-US")    -> "-$5.00"
    """
    currency = resolve_currency(currency_code)
    if locale not in _LOCALE_FORMATS:
        locale = DEFAULT_LOCALE
    _, _, spaced = _locale_format(locale)
    symbol = _CURRENCY_SYMBOLS[locale][currency]

    rounded = round_money(amount)
    sign = "-" if rounded < 0 else ""
    separator = NBSP if spaced else ""
    return f"{sign}{symbol}{separator}{format_number(rounded, locale)}"


def format_percentage(value: Any, decimals: int = 1, signed: bool = False) -> str:
    """Format a percentage value (already multiplied by 100)."""
    quantum = Decimal(1).scaleb(-decimals) if decimals > 0 else Decimal(1)
    rounded = _quantize(to_decimal(value), quantum)
    if rounded == 0:
        rounded = rounded.copy_abs()
    sign = "+" if signed and rounded >= 0 else ""
    return f"{sign}{rounded:f}%"


def parse_currency_input(raw_text: Optional[str], locale: str = DEFAULT_LOCALE) -> ParsedAmount:
    """
    Parse free-form amount text typed into a money field.

    Every character that is not a digit is dropped and the remaining digits
    are read as cents: the rightmost two digits are the fraction. This keeps
    progressive typing stable, since each keystroke only shifts digits left:

        "1"      -> 0.01   "0,01"
        "12"     -> 0.12   "0,12"
        "12,5"   -> 1.25   "1,25"
        "R$ 1.234,56" -> 1234.56 "1.234,56"

    Text with no digits parses to zero with an empty display so the field
    can be cleared.
    """
    digits = _NON_DIGITS.sub("", raw_text or "")
    if not digits:
        return ParsedAmount(value=ZERO.quantize(CENT), display="")

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(digits))
        value = Decimal(digits).scaleb(-2)
    return ParsedAmount(value=value, display=format_number(value, locale))
