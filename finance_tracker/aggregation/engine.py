"""
Aggregation Engine

DESIGN DECISION: Aggregation is DETERMINISTIC and PURE.
Every function takes already-scoped record lists (and, where a window is
involved, an explicit month sequence) and returns plain result models.
Nothing here reads the clock, touches storage or logs.

GUARANTEES:
- Empty input gives empty or zeroed output, never an exception
- Percentages of a zero total are 0, never NaN or Infinity
- Ties in any ranking keep the input order
- Transactions whose category is missing are grouped as "uncategorized"
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from finance_tracker.models.records import (
    Account,
    AccountType,
    Category,
    Transaction,
    TransactionType,
)
from finance_tracker.models.results import (
    AccountGroup,
    AccountTypeBalance,
    BalancePoint,
    CategoryGroup,
    CategoryShare,
    ChangeKind,
    CreditSummary,
    MonthlyTotals,
    MonthRef,
    PeriodChange,
    ReportTotals,
    TransactionFilter,
)
from finance_tracker.utils.money import to_decimal
from finance_tracker.utils.periods import month_bounds


# Category ids are never empty, so this key cannot collide with a real one
UNCATEGORIZED = ""

ZERO = Decimal("0")
HUNDRED = Decimal("100")


# =============================================================================
# TOTALS
# =============================================================================

def sum_by_type(
    transactions: Iterable[Transaction],
    type: TransactionType,
) -> Decimal:
    """Total amount of transactions of one type."""
    return sum((t.amount for t in transactions if t.type == type), ZERO)


def percentage_of_total(group_total, grand_total) -> Decimal:
    """Share of a group in a total, as a percentage. Zero total gives 0."""
    grand = to_decimal(grand_total)
    if grand == 0:
        return ZERO
    return to_decimal(group_total) / grand * HUNDRED


def savings_rate(income, expenses) -> Decimal:
    """Fraction of income not spent, as a percentage. No income gives 0."""
    income = to_decimal(income)
    if income <= 0:
        return ZERO
    return (income - to_decimal(expenses)) / income * HUNDRED


def period_over_period_change(current, previous) -> PeriodChange:
    """
    Compare a value with the same value one period earlier.

    - previous == 0 and current > 0  -> NEW (there is no ratio to report)
    - previous == 0 otherwise        -> ZERO (0%)
    - otherwise                      -> PERCENT, signed
    """
    current = to_decimal(current)
    previous = to_decimal(previous)
    if previous == 0:
        if current > 0:
            return PeriodChange(kind=ChangeKind.NEW)
        return PeriodChange(kind=ChangeKind.ZERO)
    return PeriodChange(
        kind=ChangeKind.PERCENT,
        percentage=(current - previous) / previous * HUNDRED,
    )


# =============================================================================
# GROUPING
# =============================================================================

def group_by_category(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    type: Optional[TransactionType] = None,
) -> dict[str, CategoryGroup]:
    """
    Total and count per category.

    Only categories with at least one matching transaction appear. Keys are
    in order of first appearance in `transactions`. Transactions with no
    category, or whose category is not in `categories`, are grouped under
    UNCATEGORIZED with `category=None`.
    """
    lookup = {c.id: c for c in categories}
    totals: dict[str, Decimal] = {}
    counts: dict[str, int] = {}

    for t in transactions:
        if type is not None and t.type != type:
            continue
        key = t.category_id if t.category_id in lookup else UNCATEGORIZED
        if key not in totals:
            totals[key] = ZERO
            counts[key] = 0
        totals[key] += t.amount
        counts[key] += 1

    return {
        key: CategoryGroup(
            category_id=key,
            category=lookup.get(key),
            total=total,
            count=counts[key],
        )
        for key, total in totals.items()
    }


def sort_groups(groups: dict[str, CategoryGroup]) -> list[CategoryGroup]:
    """Groups by total, largest first; equal totals keep their order."""
    return sorted(groups.values(), key=lambda g: g.total, reverse=True)


def category_breakdown(
    transactions: Sequence[Transaction],
    categories: Iterable[Category],
    type: TransactionType,
) -> list[CategoryShare]:
    """
    Category groups of one type, largest first, with their share of the
    type's total.
    """
    grand_total = sum_by_type(transactions, type)
    groups = sort_groups(group_by_category(transactions, categories, type))
    return [
        CategoryShare(group=g, percentage=percentage_of_total(g.total, grand_total))
        for g in groups
    ]


def group_by_account(
    transactions: Iterable[Transaction],
    accounts: Iterable[Account],
) -> dict[str, AccountGroup]:
    """Income, expense and count per account id, in order of first appearance."""
    names = {a.id: a.name for a in accounts}
    income: dict[str, Decimal] = {}
    expense: dict[str, Decimal] = {}
    counts: dict[str, int] = {}

    for t in transactions:
        key = t.account_id
        if key not in counts:
            income[key] = ZERO
            expense[key] = ZERO
            counts[key] = 0
        if t.is_income:
            income[key] += t.amount
        else:
            expense[key] += t.amount
        counts[key] += 1

    return {
        key: AccountGroup(
            account_id=key,
            account_name=names.get(key),
            income=income[key],
            expense=expense[key],
            count=count,
        )
        for key, count in counts.items()
    }


# =============================================================================
# TIME SERIES
# =============================================================================

def monthly_totals(
    transactions: Sequence[Transaction],
    months: Iterable[MonthRef],
) -> list[MonthlyTotals]:
    """Income and expense per month, in the order the months are given."""
    results = []
    for month in months:
        window = month_bounds(month)
        in_month = [t for t in transactions if window.contains(t.date)]
        results.append(MonthlyTotals(
            month=month,
            income=sum_by_type(in_month, TransactionType.INCOME),
            expense=sum_by_type(in_month, TransactionType.EXPENSE),
        ))
    return results


def balance_trend(
    transactions: Sequence[Transaction],
    months: Iterable[MonthRef],
) -> list[BalancePoint]:
    """
    Cumulative income minus expense through the last day of each month.

    Every transaction up to the month end counts, including those before
    the first month of the sequence.
    """
    points = []
    for month in months:
        month_end = month_bounds(month).end
        upto = [t for t in transactions if t.date <= month_end]
        balance = (
            sum_by_type(upto, TransactionType.INCOME)
            - sum_by_type(upto, TransactionType.EXPENSE)
        )
        points.append(BalancePoint(month=month, balance=balance))
    return points


# =============================================================================
# ACCOUNTS
# =============================================================================

def running_balance(accounts: Iterable[Account]) -> Decimal:
    """Sum of balances over every non-credit account, active or not."""
    return sum((a.balance for a in accounts if not a.is_credit), ZERO)


def active_running_balance(accounts: Iterable[Account]) -> Decimal:
    """Sum of balances over active non-credit accounts."""
    return sum(
        (a.balance for a in accounts if not a.is_credit and a.is_active),
        ZERO,
    )


def credit_summary(accounts: Iterable[Account]) -> CreditSummary:
    """Balance and limit over active credit accounts, with utilization %."""
    cards = [a for a in accounts if a.is_credit and a.is_active]
    used = sum((a.balance for a in cards), ZERO)
    limit = sum((a.credit_limit or ZERO for a in cards), ZERO)
    return CreditSummary(
        used=used,
        limit=limit,
        utilization=percentage_of_total(used, limit),
    )


def balance_by_account_type(accounts: Iterable[Account]) -> list[AccountTypeBalance]:
    """Summed balance per account type, in AccountType declaration order."""
    balances: dict[AccountType, Decimal] = {}
    counts: dict[AccountType, int] = {}
    for account in accounts:
        if account.type not in balances:
            balances[account.type] = ZERO
            counts[account.type] = 0
        balances[account.type] += account.balance
        counts[account.type] += 1
    return [
        AccountTypeBalance(type=t, balance=balances[t], count=counts[t])
        for t in AccountType
        if t in balances
    ]


# =============================================================================
# REPORTS & RANKINGS
# =============================================================================

def filter_transactions(
    transactions: Iterable[Transaction],
    filters: TransactionFilter,
) -> list[Transaction]:
    """Transactions matching every set filter field, in input order."""
    results = []
    for t in transactions:
        if filters.date_from and t.date < filters.date_from:
            continue
        if filters.date_to and t.date > filters.date_to:
            continue
        if filters.type and t.type != filters.type:
            continue
        if filters.category_id and t.category_id != filters.category_id:
            continue
        if filters.account_id and t.account_id != filters.account_id:
            continue
        results.append(t)
    return results


def report_totals(transactions: Sequence[Transaction]) -> ReportTotals:
    """Income, expense, savings rate and count for a set of transactions."""
    income = sum_by_type(transactions, TransactionType.INCOME)
    expense = sum_by_type(transactions, TransactionType.EXPENSE)
    return ReportTotals(
        income=income,
        expense=expense,
        savings_rate=savings_rate(income, expense),
        count=len(transactions),
    )


def top_transactions(
    transactions: Iterable[Transaction],
    type: TransactionType,
    n: int,
) -> list[Transaction]:
    """The `n` largest transactions of a type; equal amounts keep input order."""
    if n <= 0:
        return []
    of_type = [t for t in transactions if t.type == type]
    return sorted(of_type, key=lambda t: t.amount, reverse=True)[:n]


def recent_transactions(transactions: Iterable[Transaction], n: int) -> list[Transaction]:
    """The `n` most recent transactions; same-day ones keep input order."""
    if n <= 0:
        return []
    return sorted(transactions, key=lambda t: t.date, reverse=True)[:n]
