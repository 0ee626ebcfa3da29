"""Tests for budget and goal progress."""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.budgets import (
    active_goals,
    budget_progress,
    budget_transactions,
    budget_window,
    budgets_progress,
    goal_progress,
    goals_summary,
    total_budgeted,
)
from finance_tracker.models import (
    Budget,
    BudgetPeriod,
    Goal,
    Transaction,
    TransactionType,
)


TODAY = date(2024, 3, 20)


def expense(tx_id, amount, day=date(2024, 3, 10), category_id="food", subcategory_id=None,
            type_=TransactionType.EXPENSE):
    return Transaction(
        id=tx_id,
        account_id="a1",
        category_id=category_id,
        subcategory_id=subcategory_id,
        type=type_,
        amount=Decimal(amount),
        date=day,
    )


class TestBudgetWindow:
    """Tests for budget_window."""

    def test_monthly_window(self):
        window = budget_window(BudgetPeriod.MONTHLY, TODAY)
        assert window.start == date(2024, 3, 1)
        assert window.end == date(2024, 3, 31)

    def test_yearly_window(self):
        window = budget_window(BudgetPeriod.YEARLY, TODAY)
        assert window.start == date(2024, 1, 1)
        assert window.end == date(2024, 12, 31)


class TestBudgetProgress:
    """Tests for budget_progress."""

    def test_overspent_budget_is_clamped(self):
        """500 budget with 620 spent this month."""
        budget = Budget(id="b1", category_id="food", amount=Decimal("500"))
        transactions = [expense("1", "400"), expense("2", "220")]
        progress = budget_progress(budget, transactions, TODAY)
        assert progress.spent == Decimal("620")
        assert progress.remaining == Decimal("0")
        assert progress.percentage == Decimal("100")
        assert progress.raw_percentage == Decimal("124")
        assert progress.is_over_budget

    def test_no_transactions(self):
        budget = Budget(id="b1", category_id="food", amount=Decimal("500"))
        progress = budget_progress(budget, [], TODAY)
        assert progress.spent == Decimal("0")
        assert progress.remaining == Decimal("500")
        assert progress.percentage == Decimal("0")

    def test_partial_spend(self):
        budget = Budget(id="b1", category_id="food", amount=Decimal("500"))
        progress = budget_progress(budget, [expense("1", "125")], TODAY)
        assert progress.remaining == Decimal("375")
        assert progress.percentage == Decimal("25")
        assert not progress.is_over_budget

    def test_zero_budget_and_no_spend(self):
        budget = Budget(id="b1", category_id="food", amount=Decimal("0"))
        progress = budget_progress(budget, [], TODAY)
        assert progress.spent == Decimal("0")
        assert progress.remaining == Decimal("0")
        assert progress.percentage == Decimal("0")

    def test_zero_budget_with_spend_is_not_division_error(self):
        budget = Budget(id="b1", category_id="food", amount=Decimal("0"))
        progress = budget_progress(budget, [expense("1", "10")], TODAY)
        assert progress.percentage == Decimal("0")
        assert progress.spent == Decimal("10")

    def test_only_window_category_and_expenses_count(self):
        budget = Budget(id="b1", category_id="food", amount=Decimal("500"))
        transactions = [
            expense("in", "100"),
            expense("last-month", "100", day=date(2024, 2, 29)),
            expense("other-category", "100", category_id="rent"),
            expense("income", "100", type_=TransactionType.INCOME),
            expense("next-month", "100", day=date(2024, 4, 1)),
        ]
        window = budget_window(budget.period, TODAY)
        assert [t.id for t in budget_transactions(budget, transactions, window)] == ["in"]
        assert budget_progress(budget, transactions, TODAY).spent == Decimal("100")

    def test_subcategory_budget(self):
        budget = Budget(id="b1", category_id="food", subcategory_id="groceries", amount=Decimal("200"))
        transactions = [
            expense("1", "50", subcategory_id="groceries"),
            expense("2", "70", subcategory_id="restaurants"),
            expense("3", "30"),
        ]
        assert budget_progress(budget, transactions, TODAY).spent == Decimal("50")

    def test_yearly_budget_counts_whole_year(self):
        budget = Budget(id="b1", category_id="food", amount=Decimal("1000"), period=BudgetPeriod.YEARLY)
        transactions = [expense("1", "100", day=date(2024, 1, 2)), expense("2", "100")]
        assert budget_progress(budget, transactions, TODAY).spent == Decimal("200")

    def test_budgets_progress_keyed_by_id(self):
        budgets = [
            Budget(id="b1", category_id="food", amount=Decimal("100")),
            Budget(id="b2", category_id="rent", amount=Decimal("100")),
        ]
        progress = budgets_progress(budgets, iter([expense("1", "50")]), TODAY)
        assert list(progress) == ["b1", "b2"]
        assert progress["b1"].spent == Decimal("50")
        assert progress["b2"].spent == Decimal("0")

    def test_total_budgeted(self):
        budgets = [
            Budget(id="b1", category_id="food", amount=Decimal("100")),
            Budget(id="b2", category_id="rent", amount=Decimal("900"), period=BudgetPeriod.YEARLY),
        ]
        assert total_budgeted(budgets) == Decimal("100")
        assert total_budgeted(budgets, BudgetPeriod.YEARLY) == Decimal("900")
        assert total_budgeted(budgets, None) == Decimal("1000")


class TestGoals:
    """Tests for goal progress and summary."""

    def test_goal_progress(self):
        goal = Goal(id="g1", name="Trip", target_amount=Decimal("1000"),
                    current_amount=Decimal("250"), deadline=date(2024, 3, 30))
        progress = goal_progress(goal, TODAY)
        assert progress.percentage == Decimal("25")
        assert progress.remaining == Decimal("750")
        assert progress.days_remaining == 10
        assert not progress.is_completed

    def test_overdue_goal_has_negative_days(self):
        goal = Goal(id="g1", name="Trip", target_amount=Decimal("1000"), deadline=date(2024, 3, 15))
        assert goal_progress(goal, TODAY).days_remaining == -5

    def test_exceeded_goal_is_clamped(self):
        goal = Goal(id="g1", name="Trip", target_amount=Decimal("100"), current_amount=Decimal("150"))
        progress = goal_progress(goal, TODAY)
        assert progress.percentage == Decimal("100")
        assert progress.remaining == Decimal("0")
        assert progress.days_remaining is None
        assert progress.is_completed

    def test_zero_target(self):
        goal = Goal(id="g1", name="Nothing", target_amount=Decimal("0"))
        assert goal_progress(goal, TODAY).percentage == Decimal("0")

    def test_goals_summary(self):
        goals = [
            Goal(id="g1", name="A", target_amount=Decimal("1000"), current_amount=Decimal("500")),
            Goal(id="g2", name="B", target_amount=Decimal("1000"), current_amount=Decimal("1000")),
        ]
        summary = goals_summary(goals)
        assert summary.total_target == Decimal("2000")
        assert summary.percentage == Decimal("75")
        assert summary.active_count == 1
        assert summary.completed_count == 1
        assert [g.id for g in active_goals(goals)] == ["g1"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
