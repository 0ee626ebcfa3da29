"""Budget and goal progress package."""

from finance_tracker.budgets.calculator import (
    budget_progress,
    budget_transactions,
    budget_window,
    budgets_progress,
    total_budgeted,
)
from finance_tracker.budgets.goals import active_goals, goal_progress, goals_summary

__all__ = [
    "active_goals",
    "budget_progress",
    "budget_transactions",
    "budget_window",
    "budgets_progress",
    "goal_progress",
    "goals_summary",
    "total_budgeted",
]
