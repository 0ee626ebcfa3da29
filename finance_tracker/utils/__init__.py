"""Money and calendar utilities."""

from finance_tracker.utils.money import (
    DEFAULT_CURRENCY,
    DEFAULT_LOCALE,
    MONEY_ROUNDING,
    SUPPORTED_CURRENCIES,
    ParsedAmount,
    format_currency,
    format_number,
    format_percentage,
    parse_currency_input,
    resolve_currency,
    round_money,
    to_decimal,
)
from finance_tracker.utils.periods import (
    days_elapsed,
    days_in_month,
    last_n_months,
    month_bounds,
    month_of,
    month_range,
    month_ref,
    shift_month,
    year_range,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "DEFAULT_LOCALE",
    "MONEY_ROUNDING",
    "SUPPORTED_CURRENCIES",
    "ParsedAmount",
    "format_currency",
    "format_number",
    "format_percentage",
    "parse_currency_input",
    "resolve_currency",
    "round_money",
    "to_decimal",
    "days_elapsed",
    "days_in_month",
    "last_n_months",
    "month_bounds",
    "month_of",
    "month_range",
    "month_ref",
    "shift_month",
    "year_range",
]
