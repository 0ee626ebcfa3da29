"""
Investment Growth Simulation

Month-by-month growth of an initial amount plus a fixed monthly
contribution:

    balance = (balance + contribution) * (1 + monthly_rate)

CRITICAL: The contribution is added BEFORE interest accrues each month.
The trace and the final value come from the same loop, so the table a
user sees always adds up to the headline figure. This is intentionally
not the closed-form annuity formula.
"""

from decimal import Decimal
from typing import Any

from finance_tracker.models.results import InvestmentResult, InvestmentTraceRow
from finance_tracker.simulation.rates import (
    ONE,
    PeriodUnit,
    RateUnit,
    effective_monthly_rate,
    period_in_months,
)
from finance_tracker.utils.money import to_decimal


ZERO = Decimal("0")

INVALID_INVESTMENT = InvestmentResult(is_valid=False)


def simulate_investment(
    initial_amount: Any,
    monthly_contribution: Any,
    rate: Any,
    period: Any,
    *,
    rate_unit: RateUnit = RateUnit.ANNUAL,
    period_unit: PeriodUnit = PeriodUnit.YEARS,
) -> InvestmentResult:
    """
    Simulate investment growth.

    Args:
        initial_amount: Starting balance (>= 0)
        monthly_contribution: Added at the start of every month (>= 0)
        rate: Interest rate as a percentage (12 means 12%)
        period: Length of the simulation in `period_unit`
        rate_unit: Whether `rate` is annual or monthly
        period_unit: Whether `period` is in years or months

    Returns:
        InvestmentResult with a per-month trace. Negative amounts, a
        non-positive period or a rate at or below -100% give an invalid,
        zeroed result.
    """
    initial = to_decimal(initial_amount)
    contribution = to_decimal(monthly_contribution)
    monthly_rate = effective_monthly_rate(rate, rate_unit)
    months = period_in_months(period, period_unit)

    if initial < 0 or contribution < 0 or months <= 0 or monthly_rate is None:
        return INVALID_INVESTMENT

    growth = ONE + monthly_rate
    balance = initial
    cumulative_interest = ZERO
    trace = []

    for month in range(1, months + 1):
        base = balance + contribution
        interest = base * monthly_rate
        balance = base * growth
        cumulative_interest += interest
        trace.append(InvestmentTraceRow(
            month=month,
            interest_this_month=interest,
            cumulative_invested=initial + contribution * month,
            cumulative_interest=cumulative_interest,
            total_balance=balance,
        ))

    total_invested = initial + contribution * months
    return InvestmentResult(
        is_valid=True,
        monthly_rate=monthly_rate,
        months=months,
        future_value=balance,
        total_invested=total_invested,
        interest_earned=balance - total_invested,
        trace=tuple(trace),
    )


def investment_trace(
    initial_amount: Any,
    monthly_contribution: Any,
    rate: Any,
    period: Any,
    *,
    rate_unit: RateUnit = RateUnit.ANNUAL,
    period_unit: PeriodUnit = PeriodUnit.YEARS,
) -> list[InvestmentTraceRow]:
    """Per-month rows of an investment simulation, for tables and charts."""
    result = simulate_investment(
        initial_amount,
        monthly_contribution,
        rate,
        period,
        rate_unit=rate_unit,
        period_unit=period_unit,
    )
    return list(result.trace)
