"""
Loan Amortization

Fixed monthly payment from the annuity formula:

    payment = P * r * (1 + r)^n / ((1 + r)^n - 1)

Each scheduled month splits that payment into interest on the open
balance and the principal it repays.
"""

from decimal import Decimal
from typing import Any

from finance_tracker.models.results import LoanResult, LoanScheduleRow
from finance_tracker.simulation.rates import (
    ONE,
    PeriodUnit,
    RateUnit,
    effective_monthly_rate,
    period_in_months,
)
from finance_tracker.utils.money import to_decimal


INVALID_LOAN = LoanResult(is_valid=False)


def amortize_loan(
    principal: Any,
    rate: Any,
    period: Any,
    *,
    rate_unit: RateUnit = RateUnit.ANNUAL,
    period_unit: PeriodUnit = PeriodUnit.YEARS,
) -> LoanResult:
    """
    Solve the fixed payment of a loan and build its schedule.

    A non-positive principal, rate or period gives an invalid, zeroed
    result. Callers must check `is_valid` before showing figures. A rate
    too small to move the growth factor is repaid in equal principal parts.
    """
    amount = to_decimal(principal)
    rate = to_decimal(rate)
    months = period_in_months(period, period_unit)

    if amount <= 0 or rate <= 0 or months <= 0:
        return INVALID_LOAN

    monthly_rate = effective_monthly_rate(rate, rate_unit)
    growth = (ONE + monthly_rate) ** months
    if growth == ONE:
        # Rate too small to register at working precision: interest-free limit
        payment = amount / months
    else:
        payment = amount * monthly_rate * growth / (growth - ONE)

    balance = amount
    schedule = []
    for month in range(1, months + 1):
        interest = balance * monthly_rate
        principal_paid = payment - interest
        balance -= principal_paid
        schedule.append(LoanScheduleRow(
            month=month,
            payment=payment,
            interest=interest,
            principal=principal_paid,
            remaining_balance=balance,
        ))

    total_payment = payment * months
    return LoanResult(
        is_valid=True,
        monthly_rate=monthly_rate,
        months=months,
        monthly_payment=payment,
        total_payment=total_payment,
        total_interest=total_payment - amount,
        schedule=tuple(schedule),
    )
