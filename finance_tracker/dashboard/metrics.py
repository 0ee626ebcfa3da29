"""
Derived Dashboard Metrics

Orchestration only: every figure here comes from the aggregation, budget
and goal helpers. If a number needs a new rule, the rule belongs in one of
those modules, not here.
"""

from datetime import date
from decimal import Decimal
from typing import Sequence

from finance_tracker.aggregation import (
    active_running_balance,
    balance_trend,
    category_breakdown,
    credit_summary,
    monthly_totals,
    period_over_period_change,
    recent_transactions,
    running_balance,
    savings_rate,
    top_transactions,
)
from finance_tracker.budgets import active_goals, budgets_progress
from finance_tracker.models.records import RecordSnapshot, Transaction, TransactionType
from finance_tracker.models.results import DashboardSummary, MonthRef
from finance_tracker.utils.periods import (
    days_elapsed,
    last_n_months,
    month_bounds,
    month_of,
    shift_month,
)


ZERO = Decimal("0")


def transactions_in_month(
    transactions: Sequence[Transaction],
    month: MonthRef,
) -> list[Transaction]:
    window = month_bounds(month)
    return [t for t in transactions if window.contains(t.date)]


def average_daily_expense(total_expense: Decimal, month: MonthRef, today: date) -> Decimal:
    """Month's expense spread over the days elapsed so far (whole month if past)."""
    days = days_elapsed(month, today)
    return total_expense / days if days > 0 else ZERO


def build_dashboard(
    snapshot: RecordSnapshot,
    today: date,
    top_n: int = 5,
    recent_n: int = 5,
    trend_months: int = 6,
) -> DashboardSummary:
    """
    Compose the dashboard summary for the month containing `today`.

    Args:
        snapshot: The user's scoped records
        today: Reference date; decides the current and previous month
        top_n: How many largest incomes/expenses to list
        recent_n: How many recent transactions to list
        trend_months: Length of the monthly and balance trend series
    """
    current = month_of(today)
    previous = shift_month(current, -1)

    this_month = transactions_in_month(snapshot.transactions, current)
    current_totals, previous_totals = monthly_totals(
        snapshot.transactions, [current, previous]
    )
    trend = last_n_months(trend_months, today)

    top_expenses = top_transactions(this_month, TransactionType.EXPENSE, top_n)
    top_incomes = top_transactions(this_month, TransactionType.INCOME, top_n)

    return DashboardSummary(
        reference_date=today,
        current_month=current,
        previous_month=previous,
        total_balance=active_running_balance(snapshot.accounts),
        all_accounts_balance=running_balance(snapshot.accounts),
        credit=credit_summary(snapshot.accounts),
        monthly_income=current_totals.income,
        monthly_expense=current_totals.expense,
        previous_income=previous_totals.income,
        previous_expense=previous_totals.expense,
        income_change=period_over_period_change(
            current_totals.income, previous_totals.income
        ),
        expense_change=period_over_period_change(
            current_totals.expense, previous_totals.expense
        ),
        savings_rate=savings_rate(current_totals.income, current_totals.expense),
        expense_by_category=tuple(category_breakdown(
            this_month, snapshot.categories, TransactionType.EXPENSE
        )),
        income_by_category=tuple(category_breakdown(
            this_month, snapshot.categories, TransactionType.INCOME
        )),
        top_expenses=tuple(top_expenses),
        top_incomes=tuple(top_incomes),
        recent_transactions=tuple(recent_transactions(this_month, recent_n)),
        monthly_trend=tuple(monthly_totals(snapshot.transactions, trend)),
        balance_trend=tuple(balance_trend(snapshot.transactions, trend)),
        transaction_count=len(this_month),
        biggest_expense=top_expenses[0].amount if top_expenses else ZERO,
        biggest_income=top_incomes[0].amount if top_incomes else ZERO,
        average_daily_expense=average_daily_expense(
            current_totals.expense, current, today
        ),
        active_accounts=sum(1 for a in snapshot.accounts if a.is_active),
        active_goals=len(active_goals(snapshot.goals)),
        budget_progress=budgets_progress(
            snapshot.budgets, snapshot.transactions, today
        ),
    )
