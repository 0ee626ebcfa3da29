"""
Main Orchestrator for Finance Tracker

This module ties together all the components and defines the
end-to-end flows for:
1. Record edits (data → validate → store → audit)
2. Views (store → snapshot → pure core → audit)
3. Calculators (inputs → simulation → audit)

DESIGN DECISION: The orchestrator enforces the boundaries:
- No record reaches the store without passing validation
- The pure core never reads the clock; this layer supplies `today`
- Every step is audited

This is the "glue" between the record store and the calculations.
"""

from datetime import date
from typing import Any, Optional, Union
from uuid import UUID

import structlog

from finance_tracker.aggregation import report_totals
from finance_tracker.audit import AuditLogger, configure_logging, create_correlation_id
from finance_tracker.budgets import budgets_progress, goal_progress, goals_summary
from finance_tracker.config import get_settings
from finance_tracker.dashboard import build_dashboard
from finance_tracker.models.issues import ValidationResult
from finance_tracker.models.records import Record, RecordKind
from finance_tracker.models.results import (
    BudgetProgress,
    DashboardSummary,
    GoalProgress,
    GoalsSummary,
    InvestmentResult,
    LoanResult,
    ReportTotals,
    TransactionFilter,
)
from finance_tracker.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    InMemoryRecordStore,
    RecordStoreInterface,
)
from finance_tracker.simulation import (
    PeriodUnit,
    RateUnit,
    amortize_loan,
    simulate_investment,
)
from finance_tracker.validation import RecordValidator


logger = structlog.get_logger(__name__)


class RecordRejectedError(Exception):
    """A record failed validation and was not stored."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(
            issue.message for issue in result.issues if issue.severity == "error"
        )
        super().__init__(
            f"{result.record_kind} {result.record_id or '<new>'} rejected: {messages}"
        )


class RecordFlow:
    """
    Orchestrates record edits.

    Flow:
    1. Validate → Two-stage validation against the current records
    2. Reject → Errors stop the flow (warnings do not)
    3. Store → Add, replace or delete
    4. Audit → One event per change
    """

    def __init__(
        self,
        store: RecordStoreInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger

    async def validate(
        self,
        data: Union[Record, dict],
        kind: Optional[RecordKind] = None,
    ) -> ValidationResult:
        """Validate a record against the store's current contents."""
        validator = RecordValidator(await self._store.snapshot())
        return validator.validate(data, kind)

    async def _accept(
        self,
        data: Union[Record, dict],
        kind: Optional[RecordKind],
        correlation_id: UUID,
    ) -> tuple[Record, ValidationResult]:
        result = await self.validate(data, kind)

        if not result.is_valid:
            if self._audit_logger:
                await self._audit_logger.log_record_rejected(
                    kind=result.record_kind,
                    record_id=result.record_id or "",
                    issues=[issue.model_dump() for issue in result.issues],
                    correlation_id=correlation_id,
                )
            raise RecordRejectedError(result)

        return result.record, result

    async def add(
        self,
        data: Union[Record, dict],
        kind: Optional[RecordKind] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Record, ValidationResult]:
        """
        Validate and store a new record.

        Returns:
            (stored_record, validation_result). Warnings in the result
            are for display; they did not block the save.

        Raises:
            RecordRejectedError: If validation found errors
            DuplicateError: If the id is already taken
        """
        correlation_id = correlation_id or create_correlation_id()
        record, result = await self._accept(data, kind, correlation_id)

        stored = await self._store.add_record(record)

        if self._audit_logger:
            await self._audit_logger.log_record_created(
                kind=result.record_kind,
                record_id=stored.id,
                correlation_id=correlation_id,
            )

        return stored, result

    async def update(
        self,
        data: Union[Record, dict],
        kind: Optional[RecordKind] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Record, ValidationResult]:
        """
        Validate and replace an existing record.

        Raises:
            RecordRejectedError: If validation found errors
            NotFoundError: If there is no record with that id
        """
        correlation_id = correlation_id or create_correlation_id()
        record, result = await self._accept(data, kind, correlation_id)

        previous = await self._store.get_record(RecordKind(result.record_kind), record.id)
        stored = await self._store.update_record(record)

        changed_fields = []
        if previous is not None:
            before = previous.model_dump()
            after = stored.model_dump()
            changed_fields = [name for name in after if after[name] != before.get(name)]

        if self._audit_logger:
            await self._audit_logger.log_record_updated(
                kind=result.record_kind,
                record_id=stored.id,
                changed_fields=changed_fields,
                correlation_id=correlation_id,
            )

        return stored, result

    async def delete(
        self,
        kind: RecordKind,
        record_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Delete a record.

        Raises:
            NotFoundError: If there is no record with that id
        """
        correlation_id = correlation_id or create_correlation_id()
        deleted = await self._store.delete_record(kind, record_id)

        if self._audit_logger:
            await self._audit_logger.log_record_deleted(
                kind=kind.value,
                record_id=record_id,
                correlation_id=correlation_id,
            )

        return deleted


class DashboardFlow:
    """
    Orchestrates the computed views.

    Reads one snapshot from the store, hands it to the pure core with an
    explicit reference date, and audits what was computed.
    """

    def __init__(
        self,
        store: RecordStoreInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger
        self._settings = get_settings().app

    async def dashboard(
        self,
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> DashboardSummary:
        """Dashboard for the month containing `today` (the current date by default)."""
        today = today or date.today()
        correlation_id = correlation_id or create_correlation_id()

        snapshot = await self._store.snapshot()
        summary = build_dashboard(
            snapshot,
            today,
            top_n=self._settings.top_transactions_count,
            recent_n=self._settings.recent_transactions_count,
            trend_months=self._settings.trend_months,
        )

        if self._audit_logger:
            await self._audit_logger.log_dashboard_computed(
                reference_date=today.isoformat(),
                transaction_count=summary.transaction_count,
                correlation_id=correlation_id,
            )

        return summary

    async def budget_status(
        self,
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> dict[str, BudgetProgress]:
        """Progress of every budget, keyed by budget id."""
        today = today or date.today()
        correlation_id = correlation_id or create_correlation_id()

        snapshot = await self._store.snapshot()
        progress = budgets_progress(snapshot.budgets, snapshot.transactions, today)

        if self._audit_logger:
            await self._audit_logger.log_budget_status_computed(
                reference_date=today.isoformat(),
                budget_count=len(progress),
                over_budget=[
                    budget_id for budget_id, item in progress.items()
                    if item.is_over_budget
                ],
                correlation_id=correlation_id,
            )

        return progress

    async def goals(
        self,
        today: Optional[date] = None,
    ) -> tuple[list[GoalProgress], GoalsSummary]:
        """Per-goal progress and the totals across all goals."""
        today = today or date.today()
        goals = await self._store.list_records(RecordKind.GOAL)
        return [goal_progress(goal, today) for goal in goals], goals_summary(goals)

    async def report(
        self,
        filters: Optional[TransactionFilter] = None,
    ) -> tuple[list, ReportTotals]:
        """Filtered transactions and their totals."""
        transactions = await self._store.list_transactions(filters)
        return transactions, report_totals(transactions)


class CalculatorFlow:
    """Runs the financial calculators and audits each run."""

    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit_logger = audit_logger

    async def investment(
        self,
        initial_amount: Any,
        monthly_contribution: Any,
        rate: Any,
        period: Any,
        rate_unit: RateUnit = RateUnit.ANNUAL,
        period_unit: PeriodUnit = PeriodUnit.YEARS,
        correlation_id: Optional[UUID] = None,
    ) -> InvestmentResult:
        result = simulate_investment(
            initial_amount,
            monthly_contribution,
            rate,
            period,
            rate_unit=rate_unit,
            period_unit=period_unit,
        )

        if self._audit_logger:
            await self._audit_logger.log_simulation_run(
                simulation="investment",
                is_valid=result.is_valid,
                parameters={
                    "initial_amount": str(initial_amount),
                    "monthly_contribution": str(monthly_contribution),
                    "rate": str(rate),
                    "rate_unit": rate_unit.value,
                    "period": str(period),
                    "period_unit": period_unit.value,
                },
                correlation_id=correlation_id,
            )

        return result

    async def loan(
        self,
        principal: Any,
        rate: Any,
        period: Any,
        rate_unit: RateUnit = RateUnit.ANNUAL,
        period_unit: PeriodUnit = PeriodUnit.YEARS,
        correlation_id: Optional[UUID] = None,
    ) -> LoanResult:
        result = amortize_loan(
            principal,
            rate,
            period,
            rate_unit=rate_unit,
            period_unit=period_unit,
        )

        if self._audit_logger:
            await self._audit_logger.log_simulation_run(
                simulation="loan",
                is_valid=result.is_valid,
                parameters={
                    "principal": str(principal),
                    "rate": str(rate),
                    "rate_unit": rate_unit.value,
                    "period": str(period),
                    "period_unit": period_unit.value,
                },
                correlation_id=correlation_id,
            )

        return result


def create_app_components(
    store: Optional[RecordStoreInterface] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
) -> tuple[RecordFlow, DashboardFlow, CalculatorFlow]:
    """
    Factory function to create all application components.

    Args:
        store: Record store to use. Defaults to an empty in-memory store.
        audit_storage: Where audit events are persisted. Defaults to an
                       in-memory audit log.

    Returns:
        (record_flow, dashboard_flow, calculator_flow)
    """
    settings = get_settings().app
    configure_logging(settings.log_level)

    store = store or InMemoryRecordStore()
    audit_logger = AuditLogger(audit_storage or InMemoryAuditStorage())

    logger.info(
        "app_components_created",
        environment=settings.app_environment,
        store=type(store).__name__,
    )

    return (
        RecordFlow(store, audit_logger),
        DashboardFlow(store, audit_logger),
        CalculatorFlow(audit_logger),
    )
