"""
Tests for Finance Tracker models

Test strategy:
1. Unit tests for individual components (models, calculations, validators)
2. Integration tests for flows against the in-memory stores
3. No clock reads in tests (every reference date is passed in)
"""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from finance_tracker.models import (
    Account,
    AccountType,
    Budget,
    Category,
    ChangeKind,
    Goal,
    MonthRef,
    PeriodChange,
    RecordKind,
    RecordSnapshot,
    Subcategory,
    Transaction,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    default_categories,
    record_kind,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestRecordModels:
    """Tests for the record models."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        tx = Transaction(
            id="t1",
            account_id="a1",
            category_id="5",
            type=TransactionType.EXPENSE,
            amount=Decimal("42.50"),
            description="  Groceries  ",
            date=date(2024, 3, 15),
        )
        assert tx.amount == Decimal("42.50")
        assert tx.description == "Groceries"
        assert tx.is_expense
        assert not tx.is_income

    def test_transaction_date_field_parses_iso_text(self):
        """The `date` field keeps its name and parses raw form values."""
        tx = Transaction.model_validate({
            "id": "t1",
            "account_id": "a1",
            "type": "income",
            "amount": "10",
            "date": "2024-03-15",
        })
        assert tx.date == date(2024, 3, 15)
        assert "date" in Transaction.model_fields

    def test_transaction_rejects_negative_amount(self):
        """Amounts are magnitudes; the type carries the sign."""
        with pytest.raises(ValidationError):
            Transaction(
                id="t1",
                account_id="a1",
                type=TransactionType.EXPENSE,
                amount=Decimal("-1"),
                date=date(2024, 3, 15),
            )

    def test_transaction_subcategory_requires_category(self):
        with pytest.raises(ValidationError, match="Subcategory requires a category"):
            Transaction(
                id="t1",
                account_id="a1",
                subcategory_id="501",
                type=TransactionType.EXPENSE,
                amount=Decimal("10"),
                date=date(2024, 3, 15),
            )

    def test_transaction_frequency_requires_recurring(self):
        with pytest.raises(ValidationError, match="Recurring frequency"):
            Transaction(
                id="t1",
                account_id="a1",
                type=TransactionType.EXPENSE,
                amount=Decimal("10"),
                date=date(2024, 3, 15),
                recurring_frequency="monthly",
            )

    def test_transaction_is_immutable(self):
        """Edits produce a new instance."""
        tx = Transaction(
            id="t1",
            account_id="a1",
            type=TransactionType.INCOME,
            amount=Decimal("10"),
            date=date(2024, 3, 15),
        )
        with pytest.raises(ValidationError):
            tx.amount = Decimal("20")
        edited = tx.model_copy(update={"amount": Decimal("20")})
        assert edited.amount == Decimal("20")
        assert tx.amount == Decimal("10")

    def test_account_currency_is_uppercased(self):
        account = Account(id="a1", name="Bank", type=AccountType.BANK, currency="usd")
        assert account.currency == "USD"
        assert not account.is_credit

    def test_account_rejects_invalid_due_date(self):
        with pytest.raises(ValidationError):
            Account(id="c1", name="Card", type=AccountType.CREDIT, due_date=32)

    def test_category_subcategory_lookup(self):
        category = Category(
            id="5",
            name="Food",
            type=TransactionType.EXPENSE,
            subcategories=(Subcategory(id="501", name="Groceries", category_id="5"),),
        )
        assert category.subcategory("501").name == "Groceries"
        assert category.subcategory("999") is None

    def test_category_rejects_foreign_subcategory(self):
        with pytest.raises(ValidationError):
            Category(
                id="5",
                name="Food",
                type=TransactionType.EXPENSE,
                subcategories=(Subcategory(id="401", name="Rent", category_id="4"),),
            )

    def test_goal_completion(self):
        assert Goal(id="g1", name="Trip", target_amount=100, current_amount=100).is_completed
        assert not Goal(id="g2", name="Car", target_amount=100, current_amount=99).is_completed

    def test_record_kind(self):
        budget = Budget(id="b1", category_id="5", amount=Decimal("500"))
        assert record_kind(budget) == RecordKind.BUDGET
        with pytest.raises(TypeError):
            record_kind("not a record")

    def test_empty_snapshot(self):
        snapshot = RecordSnapshot()
        assert snapshot.transactions == ()
        assert snapshot.goals == ()


class TestDefaultCategories:
    """Tests for the seeded category tree."""

    def test_default_category_types(self):
        categories = default_categories()
        income = [c.name for c in categories if c.type == TransactionType.INCOME]
        assert income == ["Salary", "Investments", "Other Income"]
        assert len(categories) == 9

    def test_subcategory_ids_follow_parent(self):
        housing = next(c for c in default_categories() if c.name == "Housing")
        assert housing.subcategories[0].id == "401"
        assert all(s.category_id == housing.id for s in housing.subcategories)


class TestResultModels:
    """Tests for the computed result models."""

    def test_month_ref_label(self):
        month = MonthRef(year=2024, month_index=0)
        assert month.month == 1
        assert month.label == "2024-01"

    def test_period_change_labels(self):
        assert PeriodChange(kind=ChangeKind.NEW).label == "New"
        assert PeriodChange(kind=ChangeKind.ZERO).label == "0%"
        assert PeriodChange(kind=ChangeKind.PERCENT, percentage=Decimal("12.25")).label == "+12.3%"
        assert PeriodChange(kind=ChangeKind.PERCENT, percentage=Decimal("-50")).label == "-50.0%"

    def test_period_change_small_negative_is_not_signed_zero(self):
        change = PeriodChange(kind=ChangeKind.PERCENT, percentage=Decimal("-0.01"))
        assert change.label == "+0.0%"


class TestAuditModels:
    """Tests for audit event models."""

    def test_audit_event_creation(self):
        """Test basic AuditEvent creation."""
        event = AuditEvent(
            event_type=AuditEventType.RECORD_CREATED,
            entity_type="transaction",
            entity_id="t1",
            description="Transaction created",
        )
        assert event.event_id is not None
        assert event.timestamp is not None
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_row(self):
        """Test conversion to a flat storage row."""
        event = AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description="Test error",
            error_message="Something went wrong",
            details={"amount": Decimal("1.50")},
        )
        row = event.to_row()
        assert len(row) == 11
        assert row[2] == "system_error"
        assert row[3] == "error"
        assert '"1.50"' in row[8]

    def test_builder_record_created(self):
        event = AuditEventBuilder.record_created("transaction", "t1")
        assert event.event_type == AuditEventType.RECORD_CREATED
        assert event.entity_id == "t1"
        assert event.is_user_action

    def test_builder_record_rejected(self):
        event = AuditEventBuilder.record_rejected(
            "transaction", "t1", [{"field": "amount"}]
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.details["issues"] == [{"field": "amount"}]

    def test_builder_simulation_invalid_is_warning(self):
        event = AuditEventBuilder.simulation_run("loan", False, {"rate": "0"})
        assert event.severity == AuditSeverity.WARNING
        assert event.details["simulation"] == "loan"


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_valid_result(self):
        result = ValidationResult(
            record_kind="transaction",
            record_id="t1",
            schema_valid=True,
            semantic_valid=True,
        )
        assert result.is_valid
        assert not result.has_errors
        assert result.error_count == 0

    def test_result_with_errors(self):
        result = ValidationResult(
            record_kind="transaction",
            schema_valid=False,
            semantic_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="Amount must be positive",
                    severity="error",
                ),
                ValidationIssue(
                    field="category_id",
                    issue_type="missing_reference",
                    message="Unknown category",
                    severity="warning",
                ),
            ],
        )
        assert not result.is_valid
        assert result.has_errors
        assert result.error_count == 1
        assert len(result.warnings) == 1

    def test_issue_severity_is_restricted(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
