"""
Rate and Period Normalization

Both simulators step month by month, so user input is normalized to an
effective monthly rate and a month count first.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from finance_tracker.utils.money import to_decimal


ONE = Decimal("1")
HUNDRED = Decimal("100")
TWELFTH = ONE / Decimal("12")


class RateUnit(str, Enum):
    """Basis the user entered the interest rate in."""
    ANNUAL = "annual"
    MONTHLY = "monthly"


class PeriodUnit(str, Enum):
    """Unit the user entered the period in."""
    YEARS = "years"
    MONTHS = "months"


def effective_monthly_rate(rate: Any, unit: RateUnit) -> Optional[Decimal]:
    """
    Convert a percentage rate to an effective monthly rate (as a fraction).

    Annual rates use compound equivalence, (1 + annual)^(1/12) - 1, not
    annual / 12. Returns None for rates at or below -100%, which have no
    monthly equivalent.
    """
    rate = to_decimal(rate)
    if rate <= -HUNDRED:
        return None
    if unit == RateUnit.ANNUAL:
        return (ONE + rate / HUNDRED) ** TWELFTH - ONE
    return rate / HUNDRED


def period_in_months(period: Any, unit: PeriodUnit) -> int:
    """Month count for a period; fractional results are truncated."""
    period = to_decimal(period)
    if unit == PeriodUnit.YEARS:
        period *= 12
    return int(period)
