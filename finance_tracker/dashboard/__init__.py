"""Dashboard metrics package."""

from finance_tracker.dashboard.metrics import (
    average_daily_expense,
    build_dashboard,
    transactions_in_month,
)

__all__ = ["average_daily_expense", "build_dashboard", "transactions_in_month"]
