"""Aggregation engine package."""

from finance_tracker.aggregation.engine import (
    UNCATEGORIZED,
    active_running_balance,
    balance_by_account_type,
    balance_trend,
    category_breakdown,
    credit_summary,
    filter_transactions,
    group_by_account,
    group_by_category,
    monthly_totals,
    percentage_of_total,
    period_over_period_change,
    recent_transactions,
    report_totals,
    running_balance,
    savings_rate,
    sort_groups,
    sum_by_type,
    top_transactions,
)

__all__ = [
    "UNCATEGORIZED",
    "active_running_balance",
    "balance_by_account_type",
    "balance_trend",
    "category_breakdown",
    "credit_summary",
    "filter_transactions",
    "group_by_account",
    "group_by_category",
    "monthly_totals",
    "percentage_of_total",
    "period_over_period_change",
    "recent_transactions",
    "report_totals",
    "running_balance",
    "savings_rate",
    "sort_groups",
    "sum_by_type",
    "top_transactions",
]
