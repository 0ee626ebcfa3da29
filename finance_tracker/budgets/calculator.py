"""
Budget Progress Calculator

A budget is a perpetual recurring ceiling: there is no start date on the
budget itself. Its window is the month (or year) containing the
evaluation date, which the caller passes in.

CRITICAL: `percentage` is clamped to 100. It is the progress signal shown
on budget cards. The clamp stays local to budgets; the true ratio is kept
in `raw_percentage` for anything that needs to show overspend.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from finance_tracker.models.records import (
    Budget,
    BudgetPeriod,
    Transaction,
    TransactionType,
)
from finance_tracker.models.results import BudgetProgress, DateRange
from finance_tracker.utils.periods import month_of, month_bounds, year_range


ZERO = Decimal("0")
HUNDRED = Decimal("100")


def budget_window(period: BudgetPeriod, today: date) -> DateRange:
    """Current month or current year, anchored to `today`."""
    if period == BudgetPeriod.YEARLY:
        return year_range(today.year)
    return month_bounds(month_of(today))


def budget_transactions(
    budget: Budget,
    transactions: Iterable[Transaction],
    window: DateRange,
) -> list[Transaction]:
    """Expenses inside the window that fall under the budget's category."""
    matched = []
    for t in transactions:
        if t.type != TransactionType.EXPENSE:
            continue
        if not window.contains(t.date):
            continue
        if t.category_id != budget.category_id:
            continue
        if budget.subcategory_id and t.subcategory_id != budget.subcategory_id:
            continue
        matched.append(t)
    return matched


def budget_progress(
    budget: Budget,
    transactions: Iterable[Transaction],
    today: date,
) -> BudgetProgress:
    """
    Spent, remaining and percentage for one budget.

    - remaining never goes below zero
    - percentage is 0 for a zero budget and never exceeds 100
    """
    window = budget_window(budget.period, today)
    spent = sum((t.amount for t in budget_transactions(budget, transactions, window)), ZERO)

    remaining = max(ZERO, budget.amount - spent)
    raw = spent / budget.amount * HUNDRED if budget.amount > 0 else ZERO

    return BudgetProgress(
        budget_id=budget.id,
        window=window,
        spent=spent,
        remaining=remaining,
        percentage=min(raw, HUNDRED),
        raw_percentage=raw,
    )


def budgets_progress(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    today: date,
) -> dict[str, BudgetProgress]:
    """Progress for every budget, keyed by budget id."""
    transactions = list(transactions)
    return {b.id: budget_progress(b, transactions, today) for b in budgets}


def total_budgeted(
    budgets: Iterable[Budget],
    period: Optional[BudgetPeriod] = BudgetPeriod.MONTHLY,
) -> Decimal:
    """Sum of budget amounts for one period (all periods when None)."""
    return sum(
        (b.amount for b in budgets if period is None or b.period == period),
        ZERO,
    )
