"""
Result Models for Finance Tracker

Everything the core hands to a presentation layer: aggregation rows,
budget and goal progress, simulation results and the dashboard summary.

DESIGN DECISION: Results are plain frozen models with Decimal fields.
They render directly into charts and tables and serialize cleanly with
model_dump(mode="json").
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.models.records import (
    AccountType,
    Category,
    Transaction,
    TransactionType,
)


_RESULT_CONFIG = ConfigDict(frozen=True)

ZERO = Decimal("0")


# =============================================================================
# CALENDAR
# =============================================================================

class DateRange(BaseModel):
    """Inclusive date range used by every period filter."""
    model_config = _RESULT_CONFIG

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


class MonthRef(BaseModel):
    """
    One calendar month.

    `month_index` is 0-based (January = 0) to match the month arithmetic
    used by the range helpers.
    """
    model_config = _RESULT_CONFIG

    year: int
    month_index: int = Field(..., ge=0, le=11)

    @property
    def month(self) -> int:
        """1-based month number."""
        return self.month_index + 1

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


# =============================================================================
# AGGREGATION
# =============================================================================

class CategoryGroup(BaseModel):
    """
    Total and count of transactions sharing a category.

    `category` is None for the uncategorized group (no category id,
    or an id missing from the category list).
    """
    model_config = _RESULT_CONFIG

    category_id: str
    category: Optional[Category] = None
    total: Decimal = ZERO
    count: int = 0

    @property
    def name(self) -> str:
        return self.category.name if self.category else "Uncategorized"


class CategoryShare(BaseModel):
    """A category group with its share of the grand total."""
    model_config = _RESULT_CONFIG

    group: CategoryGroup
    percentage: Decimal


class AccountGroup(BaseModel):
    """Transaction totals for one account."""
    model_config = _RESULT_CONFIG

    account_id: str
    account_name: Optional[str] = None
    income: Decimal = ZERO
    expense: Decimal = ZERO
    count: int = 0

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


class MonthlyTotals(BaseModel):
    """Income and expense summed over one calendar month."""
    model_config = _RESULT_CONFIG

    month: MonthRef
    income: Decimal = ZERO
    expense: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


class BalancePoint(BaseModel):
    """Cumulative income minus expense through the end of a month."""
    model_config = _RESULT_CONFIG

    month: MonthRef
    balance: Decimal


class ChangeKind(str, Enum):
    """
    Outcome of a period-over-period comparison.

    CRITICAL: NEW is not a percentage. A previous value of zero has no
    meaningful ratio, so it must never be collapsed into one.
    """
    NEW = "new"
    ZERO = "zero"
    PERCENT = "percent"


class PeriodChange(BaseModel):
    """Tagged period-over-period change."""
    model_config = _RESULT_CONFIG

    kind: ChangeKind
    percentage: Decimal = ZERO

    @property
    def label(self) -> str:
        """Short display label: 'New', '0%' or a signed percentage."""
        if self.kind == ChangeKind.NEW:
            return "New"
        if self.kind == ChangeKind.ZERO:
            return "0%"
        value = self.percentage.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        if value == 0:
            value = abs(value)
        sign = "+" if value >= 0 else ""
        return f"{sign}{value:f}%"


class CreditSummary(BaseModel):
    """Usage of active credit accounts against their limits."""
    model_config = _RESULT_CONFIG

    used: Decimal = ZERO
    limit: Decimal = ZERO
    utilization: Decimal = ZERO


class AccountTypeBalance(BaseModel):
    """Summed balance of all accounts of one type."""
    model_config = _RESULT_CONFIG

    type: AccountType
    balance: Decimal
    count: int


class ReportTotals(BaseModel):
    """Headline figures for a filtered set of transactions."""
    model_config = _RESULT_CONFIG

    income: Decimal = ZERO
    expense: Decimal = ZERO
    savings_rate: Decimal = ZERO
    count: int = 0

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense


class TransactionFilter(BaseModel):
    """Filters accepted by report queries. Unset fields match everything."""
    model_config = _RESULT_CONFIG

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    type: Optional[TransactionType] = None
    category_id: Optional[str] = None
    account_id: Optional[str] = None


# =============================================================================
# BUDGETS & GOALS
# =============================================================================

class BudgetProgress(BaseModel):
    """
    Spending against a budget in its active window.

    `percentage` is clamped to 100 and is the canonical progress signal.
    `raw_percentage` keeps the true ratio for callers that show overspend.
    """
    model_config = _RESULT_CONFIG

    budget_id: str
    window: DateRange
    spent: Decimal = ZERO
    remaining: Decimal = ZERO
    percentage: Decimal = ZERO
    raw_percentage: Decimal = ZERO

    @property
    def is_over_budget(self) -> bool:
        return self.raw_percentage > 100


class GoalProgress(BaseModel):
    """Progress of a savings goal."""
    model_config = _RESULT_CONFIG

    goal_id: str
    percentage: Decimal = ZERO
    remaining: Decimal = ZERO
    days_remaining: Optional[int] = None
    is_completed: bool = False


class GoalsSummary(BaseModel):
    """Totals across all goals."""
    model_config = _RESULT_CONFIG

    total_target: Decimal = ZERO
    total_current: Decimal = ZERO
    percentage: Decimal = ZERO
    active_count: int = 0
    completed_count: int = 0


# =============================================================================
# SIMULATION
# =============================================================================

class InvestmentTraceRow(BaseModel):
    """One month of an investment simulation."""
    model_config = _RESULT_CONFIG

    month: int
    interest_this_month: Decimal
    cumulative_invested: Decimal
    cumulative_interest: Decimal
    total_balance: Decimal


class InvestmentResult(BaseModel):
    """
    Outcome of an investment growth simulation.

    When `is_valid` is False every figure is zero and the trace is empty.
    """
    model_config = _RESULT_CONFIG

    is_valid: bool
    monthly_rate: Decimal = ZERO
    months: int = 0
    future_value: Decimal = ZERO
    total_invested: Decimal = ZERO
    interest_earned: Decimal = ZERO
    trace: tuple[InvestmentTraceRow, ...] = ()


class LoanScheduleRow(BaseModel):
    """One month of a loan amortization schedule."""
    model_config = _RESULT_CONFIG

    month: int
    payment: Decimal
    interest: Decimal
    principal: Decimal
    remaining_balance: Decimal


class LoanResult(BaseModel):
    """
    Outcome of a loan amortization.

    When `is_valid` is False every figure is zero and the schedule is empty.
    """
    model_config = _RESULT_CONFIG

    is_valid: bool
    monthly_rate: Decimal = ZERO
    months: int = 0
    monthly_payment: Decimal = ZERO
    total_payment: Decimal = ZERO
    total_interest: Decimal = ZERO
    schedule: tuple[LoanScheduleRow, ...] = ()


# =============================================================================
# DASHBOARD
# =============================================================================

class DashboardSummary(BaseModel):
    """
    Read-only summary consumed by the dashboard page.

    Built entirely from the aggregation, budget and goal helpers.
    """
    model_config = _RESULT_CONFIG

    reference_date: date
    current_month: MonthRef
    previous_month: MonthRef

    # Balances
    total_balance: Decimal = Field(
        default=ZERO,
        description="Active non-credit accounts"
    )
    all_accounts_balance: Decimal = Field(
        default=ZERO,
        description="All non-credit accounts, active or not"
    )
    credit: CreditSummary = Field(default_factory=CreditSummary)

    # This month vs last month
    monthly_income: Decimal = ZERO
    monthly_expense: Decimal = ZERO
    previous_income: Decimal = ZERO
    previous_expense: Decimal = ZERO
    income_change: PeriodChange
    expense_change: PeriodChange
    savings_rate: Decimal = ZERO

    # Breakdowns
    expense_by_category: tuple[CategoryShare, ...] = ()
    income_by_category: tuple[CategoryShare, ...] = ()
    top_expenses: tuple[Transaction, ...] = ()
    top_incomes: tuple[Transaction, ...] = ()
    recent_transactions: tuple[Transaction, ...] = ()
    monthly_trend: tuple[MonthlyTotals, ...] = ()
    balance_trend: tuple[BalancePoint, ...] = ()

    # Quick stats
    transaction_count: int = 0
    biggest_expense: Decimal = ZERO
    biggest_income: Decimal = ZERO
    average_daily_expense: Decimal = ZERO
    active_accounts: int = 0
    active_goals: int = 0

    budget_progress: dict[str, BudgetProgress] = Field(default_factory=dict)
