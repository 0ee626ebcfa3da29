"""Tests for the composed dashboard summary."""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.dashboard import (
    average_daily_expense,
    build_dashboard,
    transactions_in_month,
)
from finance_tracker.models import (
    Account,
    AccountType,
    Budget,
    Category,
    ChangeKind,
    Goal,
    MonthRef,
    RecordSnapshot,
    Transaction,
    TransactionType,
)


INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE
TODAY = date(2024, 3, 10)


def tx(tx_id, amount, type_, day, category_id=None):
    return Transaction(
        id=tx_id,
        account_id="bank",
        category_id=category_id,
        type=type_,
        amount=Decimal(amount),
        date=day,
    )


def make_snapshot():
    return RecordSnapshot(
        transactions=(
            tx("feb-salary", "4000", INCOME, date(2024, 2, 1), "salary"),
            tx("feb-rent", "1500", EXPENSE, date(2024, 2, 3), "rent"),
            tx("mar-salary", "5000", INCOME, date(2024, 3, 1), "salary"),
            tx("mar-rent", "1500", EXPENSE, date(2024, 3, 2), "rent"),
            tx("mar-food", "300", EXPENSE, date(2024, 3, 8), "food"),
            tx("mar-misc", "200", EXPENSE, date(2024, 3, 9)),
        ),
        accounts=(
            Account(id="bank", name="Bank", type=AccountType.BANK, balance=Decimal("3000")),
            Account(id="old", name="Old", type=AccountType.CASH, balance=Decimal("100"),
                    is_active=False),
            Account(id="card", name="Card", type=AccountType.CREDIT, balance=Decimal("500"),
                    credit_limit=Decimal("1000")),
        ),
        categories=(
            Category(id="salary", name="Salary", type=INCOME),
            Category(id="rent", name="Rent", type=EXPENSE),
            Category(id="food", name="Food", type=EXPENSE),
        ),
        budgets=(Budget(id="b-food", category_id="food", amount=Decimal("200")),),
        goals=(
            Goal(id="g1", name="Trip", target_amount=Decimal("1000"), current_amount=Decimal("10")),
            Goal(id="g2", name="Done", target_amount=Decimal("10"), current_amount=Decimal("10")),
        ),
    )


class TestDashboardHelpers:
    """Tests for the small helpers the dashboard is built from."""

    def test_transactions_in_month(self):
        month = MonthRef(year=2024, month_index=1)
        in_month = transactions_in_month(make_snapshot().transactions, month)
        assert [t.id for t in in_month] == ["feb-salary", "feb-rent"]

    def test_average_daily_expense_current_month(self):
        month = MonthRef(year=2024, month_index=2)
        assert average_daily_expense(Decimal("2000"), month, TODAY) == Decimal("200")

    def test_average_daily_expense_past_month(self):
        month = MonthRef(year=2024, month_index=1)
        assert average_daily_expense(Decimal("290"), month, TODAY) == Decimal("10")


class TestBuildDashboard:
    """Tests for build_dashboard."""

    def test_headline_figures(self):
        summary = build_dashboard(make_snapshot(), TODAY)
        assert summary.current_month == MonthRef(year=2024, month_index=2)
        assert summary.previous_month == MonthRef(year=2024, month_index=1)
        assert summary.monthly_income == Decimal("5000")
        assert summary.monthly_expense == Decimal("2000")
        assert summary.previous_income == Decimal("4000")
        assert summary.previous_expense == Decimal("1500")
        assert summary.savings_rate == Decimal("60")
        assert summary.transaction_count == 4

    def test_changes(self):
        summary = build_dashboard(make_snapshot(), TODAY)
        assert summary.income_change.label == "+25.0%"
        assert summary.expense_change.kind == ChangeKind.PERCENT
        assert summary.expense_change.label == "+33.3%"

    def test_new_change_when_previous_month_empty(self):
        snapshot = RecordSnapshot(
            transactions=(tx("1", "150", INCOME, date(2024, 3, 1)),),
        )
        summary = build_dashboard(snapshot, TODAY)
        assert summary.income_change.kind == ChangeKind.NEW
        assert summary.expense_change.kind == ChangeKind.ZERO

    def test_balances(self):
        summary = build_dashboard(make_snapshot(), TODAY)
        assert summary.total_balance == Decimal("3000")
        assert summary.all_accounts_balance == Decimal("3100")
        assert summary.credit.used == Decimal("500")
        assert summary.credit.utilization == Decimal("50")
        assert summary.active_accounts == 2

    def test_breakdowns(self):
        summary = build_dashboard(make_snapshot(), TODAY)
        names = [share.group.name for share in summary.expense_by_category]
        assert names == ["Rent", "Food", "Uncategorized"]
        assert summary.expense_by_category[0].percentage == Decimal("75")
        assert [t.id for t in summary.top_expenses] == ["mar-rent", "mar-food", "mar-misc"]
        assert summary.biggest_expense == Decimal("1500")
        assert summary.biggest_income == Decimal("5000")
        assert summary.recent_transactions[0].id == "mar-misc"

    def test_average_daily_expense(self):
        summary = build_dashboard(make_snapshot(), TODAY)
        assert summary.average_daily_expense == Decimal("200")

    def test_trends(self):
        summary = build_dashboard(make_snapshot(), TODAY, trend_months=3)
        assert [m.month.label for m in summary.monthly_trend] == ["2024-01", "2024-02", "2024-03"]
        assert [p.balance for p in summary.balance_trend] == [
            Decimal("0"), Decimal("2500"), Decimal("5500"),
        ]

    def test_list_sizes(self):
        summary = build_dashboard(make_snapshot(), TODAY, top_n=1, recent_n=2)
        assert len(summary.top_expenses) == 1
        assert len(summary.recent_transactions) == 2

    def test_budgets_and_goals(self):
        summary = build_dashboard(make_snapshot(), TODAY)
        progress = summary.budget_progress["b-food"]
        assert progress.spent == Decimal("300")
        assert progress.percentage == Decimal("100")
        assert summary.active_goals == 1

    def test_same_inputs_same_summary(self):
        assert build_dashboard(make_snapshot(), TODAY) == build_dashboard(make_snapshot(), TODAY)

    def test_empty_snapshot(self):
        summary = build_dashboard(RecordSnapshot(), TODAY)
        assert summary.monthly_income == Decimal("0")
        assert summary.savings_rate == Decimal("0")
        assert summary.biggest_expense == Decimal("0")
        assert summary.expense_by_category == ()
        assert summary.budget_progress == {}
        assert len(summary.monthly_trend) == 6


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
