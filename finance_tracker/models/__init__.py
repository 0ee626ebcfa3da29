"""
Data Models Package

Pydantic models for the records the core consumes, the results it
produces, validation issues and the audit trail.
"""

from finance_tracker.models.records import (
    Account,
    AccountType,
    Budget,
    BudgetPeriod,
    Category,
    Goal,
    Record,
    RecordKind,
    RecordSnapshot,
    RecurringFrequency,
    Subcategory,
    Transaction,
    TransactionType,
    record_kind,
)
from finance_tracker.models.results import (
    AccountGroup,
    AccountTypeBalance,
    BalancePoint,
    BudgetProgress,
    CategoryGroup,
    CategoryShare,
    ChangeKind,
    CreditSummary,
    DashboardSummary,
    DateRange,
    GoalProgress,
    GoalsSummary,
    InvestmentResult,
    InvestmentTraceRow,
    LoanResult,
    LoanScheduleRow,
    MonthlyTotals,
    MonthRef,
    PeriodChange,
    ReportTotals,
    TransactionFilter,
)
from finance_tracker.models.issues import ValidationIssue, ValidationResult
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from finance_tracker.models.defaults import default_categories

__all__ = [
    # Records
    "Account",
    "AccountType",
    "Budget",
    "BudgetPeriod",
    "Category",
    "Goal",
    "Record",
    "RecordKind",
    "RecordSnapshot",
    "RecurringFrequency",
    "Subcategory",
    "Transaction",
    "TransactionType",
    "record_kind",
    "default_categories",
    # Results
    "AccountGroup",
    "AccountTypeBalance",
    "BalancePoint",
    "BudgetProgress",
    "CategoryGroup",
    "CategoryShare",
    "ChangeKind",
    "CreditSummary",
    "DashboardSummary",
    "DateRange",
    "GoalProgress",
    "GoalsSummary",
    "InvestmentResult",
    "InvestmentTraceRow",
    "LoanResult",
    "LoanScheduleRow",
    "MonthlyTotals",
    "MonthRef",
    "PeriodChange",
    "ReportTotals",
    "TransactionFilter",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
