"""Compound growth simulation package."""

from finance_tracker.simulation.investment import investment_trace, simulate_investment
from finance_tracker.simulation.loan import amortize_loan
from finance_tracker.simulation.rates import (
    PeriodUnit,
    RateUnit,
    effective_monthly_rate,
    period_in_months,
)

__all__ = [
    "PeriodUnit",
    "RateUnit",
    "amortize_loan",
    "effective_monthly_rate",
    "investment_trace",
    "period_in_months",
    "simulate_investment",
]
