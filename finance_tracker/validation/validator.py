"""
Two-Stage Record Validation

DESIGN DECISION: Records entering the store are validated in two stages:

STAGE 1 - SCHEMA VALIDATION:
- Type checking and required field presence
- Ranges (non-negative amounts, day-of-month 1..31)
- Cross-field rules a record can check on its own
- Raw form data is parsed into the immutable record model here

STAGE 2 - SEMANTIC VALIDATION:
- References to other records (account, category, subcategory)
- Polarity mismatches between a transaction and its category
- Values that are legal but almost certainly a mistake

Stage 2 only runs when stage 1 passes.

IMPORTANT: Validation NEVER silently fixes issues. A dangling reference is
a warning, not a rewrite; the aggregation layer already groups unknown
categories under "uncategorized".
"""

from decimal import Decimal
from typing import Optional, Union

import structlog
from pydantic import ValidationError

from finance_tracker.models.issues import ValidationIssue, ValidationResult
from finance_tracker.models.records import (
    RECORD_TYPES,
    Account,
    Budget,
    Category,
    Goal,
    Record,
    RecordKind,
    RecordSnapshot,
    Transaction,
    TransactionType,
    record_kind,
)


logger = structlog.get_logger(__name__)


class RecordValidator:
    """
    Validates records against their schema and against the user's other records.

    Stage 1: Schema validation (needs nothing but the data)
    Stage 2: Semantic validation (needs the snapshot for reference checks)
    """

    def __init__(self, snapshot: Optional[RecordSnapshot] = None):
        """
        Initialize validator.

        Args:
            snapshot: The user's current records. Without one, reference
                      checks are skipped.
        """
        self._snapshot = snapshot or RecordSnapshot()
        self._has_references = snapshot is not None

    # =========================================================================
    # STAGE 1
    # =========================================================================

    def _validate_schema(
        self,
        kind: RecordKind,
        data: Union[Record, dict],
    ) -> tuple[Optional[Record], list[ValidationIssue]]:
        """
        Stage 1: Parse raw data into a record.

        Returns: (record_or_None, list_of_issues)
        """
        if not isinstance(data, dict):
            return data, []

        try:
            return RECORD_TYPES[kind].model_validate(data), []
        except ValidationError as e:
            issues = []
            for error in e.errors():
                location = ".".join(str(part) for part in error["loc"]) or "record"
                issues.append(ValidationIssue(
                    field=location,
                    issue_type=error["type"],
                    message=error["msg"],
                    severity="error",
                    suggested_fix="Please correct this field",
                ))
            return None, issues

    # =========================================================================
    # STAGE 2
    # =========================================================================

    def _category(self, category_id: Optional[str]) -> Optional[Category]:
        for category in self._snapshot.categories:
            if category.id == category_id:
                return category
        return None

    def _check_transaction(self, transaction: Transaction) -> list[ValidationIssue]:
        issues = []

        if transaction.amount == Decimal("0"):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Transaction amount must be greater than zero",
                severity="error",
                suggested_fix="Enter the amount of the transaction",
            ))

        if not self._has_references:
            return issues

        if transaction.account_id not in {a.id for a in self._snapshot.accounts}:
            issues.append(ValidationIssue(
                field="account_id",
                issue_type="missing_reference",
                message=f"Account {transaction.account_id} does not exist",
                severity="warning",
                suggested_fix="Pick one of your accounts",
            ))

        if transaction.category_id is None:
            return issues

        category = self._category(transaction.category_id)
        if category is None:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="missing_reference",
                message=(
                    f"Category {transaction.category_id} does not exist; "
                    "the transaction will show as uncategorized"
                ),
                severity="warning",
                suggested_fix="Pick one of your categories",
            ))
            return issues

        if category.type != transaction.type:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="type_mismatch",
                message=(
                    f"Category {category.name} is for {category.type.value}, "
                    f"but the transaction is {transaction.type.value}"
                ),
                severity="warning",
                suggested_fix="Pick a category of the same type",
            ))

        if transaction.subcategory_id and category.subcategory(transaction.subcategory_id) is None:
            issues.append(ValidationIssue(
                field="subcategory_id",
                issue_type="missing_reference",
                message=(
                    f"Subcategory {transaction.subcategory_id} is not part of "
                    f"{category.name}"
                ),
                severity="warning",
                suggested_fix="Pick a subcategory of the selected category",
            ))

        return issues

    def _check_account(self, account: Account) -> list[ValidationIssue]:
        issues = []
        if account.is_credit and account.credit_limit is None:
            issues.append(ValidationIssue(
                field="credit_limit",
                issue_type="missing_value",
                message="Credit account has no credit limit",
                severity="warning",
                suggested_fix="Enter the card limit so utilization can be shown",
            ))
        if not account.is_credit and account.credit_limit is not None:
            issues.append(ValidationIssue(
                field="credit_limit",
                issue_type="ignored_value",
                message="Credit limit is only used for credit accounts",
                severity="info",
            ))
        return issues

    def _check_budget(self, budget: Budget) -> list[ValidationIssue]:
        issues = []

        if budget.amount == Decimal("0"):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message="Budget amount is zero; progress will always show 0%",
                severity="warning",
                suggested_fix="Enter the spending ceiling for this category",
            ))

        if not self._has_references:
            return issues

        category = self._category(budget.category_id)
        if category is None:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="missing_reference",
                message=f"Category {budget.category_id} does not exist",
                severity="warning",
                suggested_fix="Pick one of your expense categories",
            ))
            return issues

        if category.type != TransactionType.EXPENSE:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="type_mismatch",
                message=f"Category {category.name} is an income category",
                severity="warning",
                suggested_fix="Budgets track expenses; pick an expense category",
            ))

        if budget.subcategory_id and category.subcategory(budget.subcategory_id) is None:
            issues.append(ValidationIssue(
                field="subcategory_id",
                issue_type="missing_reference",
                message=f"Subcategory {budget.subcategory_id} is not part of {category.name}",
                severity="warning",
                suggested_fix="Pick a subcategory of the selected category",
            ))

        return issues

    def _check_goal(self, goal: Goal) -> list[ValidationIssue]:
        if goal.current_amount > goal.target_amount:
            return [ValidationIssue(
                field="current_amount",
                issue_type="goal_exceeded",
                message="Current amount is above the target; the goal is complete",
                severity="info",
            )]
        return []

    def _validate_semantic(self, record: Record) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Returns: (is_valid, list_of_issues)
        """
        if isinstance(record, Transaction):
            issues = self._check_transaction(record)
        elif isinstance(record, Account):
            issues = self._check_account(record)
        elif isinstance(record, Budget):
            issues = self._check_budget(record)
        elif isinstance(record, Goal):
            issues = self._check_goal(record)
        else:
            issues = []

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def validate(
        self,
        data: Union[Record, dict],
        kind: Optional[RecordKind] = None,
    ) -> ValidationResult:
        """
        Run full two-stage validation pipeline.

        Args:
            data: A record instance, or raw field values to parse
            kind: Which record type raw data describes (inferred for instances)

        Returns:
            ValidationResult with all issues found; `record` holds the parsed
            record when stage 1 passed
        """
        if kind is None:
            if isinstance(data, dict):
                raise ValueError("kind is required when validating raw data")
            kind = record_kind(data)

        record, all_issues = self._validate_schema(kind, data)
        schema_valid = record is not None

        semantic_valid = False
        if schema_valid:
            semantic_valid, semantic_issues = self._validate_semantic(record)
            all_issues.extend(semantic_issues)

        record_id = record.id if record is not None else (
            data.get("id") if isinstance(data, dict) else None
        )

        result = ValidationResult(
            record_kind=kind.value,
            record_id=str(record_id) if record_id is not None else None,
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            issues=all_issues,
            record=record,
        )

        logger.debug(
            "record_validated",
            kind=kind.value,
            record_id=result.record_id,
            is_valid=result.is_valid,
            issue_count=len(all_issues),
        )
        return result

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Generate a user-friendly summary of validation results.

        This is what the app shows next to the entry form.
        """
        if result.is_valid and not result.warnings:
            return "✅ All checks passed!"

        lines = []

        errors = [issue for issue in result.issues if issue.severity == "error"]
        if errors:
            lines.append("❌ This record can't be saved yet:")
            for issue in errors:
                lines.append(f"   • {issue.message}")
                if issue.suggested_fix:
                    lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning.message}")

        return "\n".join(lines)
