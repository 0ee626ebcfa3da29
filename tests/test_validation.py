"""Tests for the two-stage record validator."""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.models import (
    Account,
    AccountType,
    Budget,
    Goal,
    RecordKind,
    RecordSnapshot,
    Transaction,
    TransactionType,
    default_categories,
)
from finance_tracker.validation import RecordValidator


SNAPSHOT = RecordSnapshot(
    accounts=(Account(id="bank", name="Bank", type=AccountType.BANK),),
    categories=tuple(default_categories()),
)


def transaction_data(**overrides):
    data = {
        "id": "t1",
        "account_id": "bank",
        "category_id": "5",
        "subcategory_id": "501",
        "type": "expense",
        "amount": "45.90",
        "date": "2024-03-10",
    }
    data.update(overrides)
    return data


def issue_types(result):
    return {(issue.field, issue.issue_type) for issue in result.issues}


class TestSchemaValidation:
    """Stage 1: parsing raw data."""

    def test_valid_raw_transaction(self):
        result = RecordValidator(SNAPSHOT).validate(transaction_data(), RecordKind.TRANSACTION)
        assert result.is_valid
        assert result.issues == []
        assert isinstance(result.record, Transaction)
        assert result.record.amount == Decimal("45.90")
        assert result.record.date == date(2024, 3, 10)

    def test_schema_errors_skip_semantic_stage(self):
        result = RecordValidator(SNAPSHOT).validate(
            transaction_data(amount="-5", account_id="nowhere"), RecordKind.TRANSACTION
        )
        assert not result.schema_valid
        assert not result.semantic_valid
        assert result.record is None
        assert result.record_id == "t1"
        assert all(issue.severity == "error" for issue in result.issues)
        assert any(issue.field == "amount" for issue in result.issues)

    def test_cross_field_rule_is_a_schema_error(self):
        result = RecordValidator(SNAPSHOT).validate(
            transaction_data(category_id=None), RecordKind.TRANSACTION
        )
        assert not result.schema_valid
        assert "Subcategory requires a category" in result.issues[0].message

    def test_raw_data_needs_kind(self):
        with pytest.raises(ValueError):
            RecordValidator(SNAPSHOT).validate(transaction_data())


class TestSemanticValidation:
    """Stage 2: references and suspicious values."""

    def test_zero_amount_is_error(self):
        result = RecordValidator(SNAPSHOT).validate(
            transaction_data(amount="0"), RecordKind.TRANSACTION
        )
        assert result.schema_valid
        assert not result.semantic_valid
        assert ("amount", "invalid_value") in issue_types(result)

    def test_unknown_references_are_warnings(self):
        result = RecordValidator(SNAPSHOT).validate(
            transaction_data(account_id="gone", category_id="404", subcategory_id=None),
            RecordKind.TRANSACTION,
        )
        assert result.is_valid
        assert issue_types(result) == {
            ("account_id", "missing_reference"),
            ("category_id", "missing_reference"),
        }

    def test_subcategory_of_another_category(self):
        result = RecordValidator(SNAPSHOT).validate(
            transaction_data(subcategory_id="401"), RecordKind.TRANSACTION
        )
        assert ("subcategory_id", "missing_reference") in issue_types(result)

    def test_type_mismatch_with_category(self):
        result = RecordValidator(SNAPSHOT).validate(
            transaction_data(type="income", subcategory_id=None), RecordKind.TRANSACTION
        )
        assert result.is_valid
        assert ("category_id", "type_mismatch") in issue_types(result)

    def test_no_snapshot_skips_reference_checks(self):
        result = RecordValidator().validate(
            transaction_data(account_id="anything"), RecordKind.TRANSACTION
        )
        assert result.is_valid
        assert result.issues == []

    def test_credit_account_without_limit(self):
        account = Account(id="card", name="Card", type=AccountType.CREDIT)
        result = RecordValidator(SNAPSHOT).validate(account)
        assert result.record_kind == "account"
        assert result.is_valid
        assert [w.field for w in result.warnings] == ["credit_limit"]

    def test_budget_checks(self):
        budget = Budget(id="b1", category_id="1", subcategory_id="999", amount=Decimal("0"))
        result = RecordValidator(SNAPSHOT).validate(budget)
        assert issue_types(result) == {
            ("amount", "suspicious_value"),
            ("category_id", "type_mismatch"),
            ("subcategory_id", "missing_reference"),
        }

    def test_budget_with_missing_category(self):
        budget = Budget(id="b1", category_id="nope", amount=Decimal("100"))
        result = RecordValidator(SNAPSHOT).validate(budget)
        assert issue_types(result) == {("category_id", "missing_reference")}

    def test_goal_above_target_is_info(self):
        goal = Goal(id="g1", name="Trip", target_amount=100, current_amount=150)
        result = RecordValidator(SNAPSHOT).validate(goal)
        assert result.is_valid
        assert result.issues[0].severity == "info"
        assert result.warnings == []


class TestUserFriendlySummary:
    """Tests for the message shown next to the entry form."""

    def test_clean_result(self):
        validator = RecordValidator(SNAPSHOT)
        result = validator.validate(transaction_data(), RecordKind.TRANSACTION)
        assert validator.get_user_friendly_summary(result) == "✅ All checks passed!"

    def test_errors_and_fixes_are_listed(self):
        validator = RecordValidator(SNAPSHOT)
        result = validator.validate(transaction_data(amount="0"), RecordKind.TRANSACTION)
        summary = validator.get_user_friendly_summary(result)
        assert "can't be saved" in summary
        assert "greater than zero" in summary


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
