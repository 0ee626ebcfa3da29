"""
Audit Models for Finance Tracker

Every change to the user's records and every computed view handed to the
presentation layer is logged as an audit event. This provides:
1. Traceability of record edits
2. Debugging information when a figure looks wrong
3. The ability to reconstruct what the user was shown

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Record store
    RECORD_CREATED = "record_created"
    RECORD_UPDATED = "record_updated"
    RECORD_DELETED = "record_deleted"
    RECORD_REJECTED = "record_rejected"

    # Computed views
    DASHBOARD_COMPUTED = "dashboard_computed"
    BUDGET_STATUS_COMPUTED = "budget_status_computed"
    SIMULATION_RUN = "simulation_run"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    `entity_id` is the record id as stored (record ids are opaque strings).
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Record kind or computed view (e.g., 'transaction', 'dashboard')"
    )
    entity_id: Optional[str] = None

    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate events from one user action"
    )

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_row(self) -> list[str]:
        """
        Flatten to a row for tabular audit storage.

        Columns: [event_id, timestamp, event_type, severity, entity_type,
        entity_id, correlation_id, description, details_json, error_message,
        is_user_action]
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            self.entity_type or "",
            self.entity_id or "",
            str(self.correlation_id) if self.correlation_id else "",
            self.description,
            json.dumps(self.details, default=str) if self.details else "",
            self.error_message or "",
            str(self.is_user_action),
        ]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_created("transaction", tx.id, correlation_id)
    """

    @staticmethod
    def record_created(
        kind: str,
        record_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_CREATED,
            entity_type=kind,
            entity_id=record_id,
            correlation_id=correlation_id,
            description=f"{kind.capitalize()} created",
            is_user_action=True,
        )

    @staticmethod
    def record_updated(
        kind: str,
        record_id: str,
        changed_fields: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_UPDATED,
            entity_type=kind,
            entity_id=record_id,
            correlation_id=correlation_id,
            description=f"{kind.capitalize()} updated",
            details={"changed_fields": changed_fields},
            is_user_action=True,
        )

    @staticmethod
    def record_deleted(
        kind: str,
        record_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_DELETED,
            entity_type=kind,
            entity_id=record_id,
            correlation_id=correlation_id,
            description=f"{kind.capitalize()} deleted",
            is_user_action=True,
        )

    @staticmethod
    def record_rejected(
        kind: str,
        record_id: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type=kind,
            entity_id=record_id,
            correlation_id=correlation_id,
            description=f"{kind.capitalize()} rejected with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def dashboard_computed(
        reference_date: str,
        transaction_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DASHBOARD_COMPUTED,
            severity=AuditSeverity.DEBUG,
            entity_type="dashboard",
            correlation_id=correlation_id,
            description=f"Dashboard computed for {reference_date}",
            details={
                "reference_date": reference_date,
                "transaction_count": transaction_count,
            },
        )

    @staticmethod
    def budget_status_computed(
        reference_date: str,
        budget_count: int,
        over_budget: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_STATUS_COMPUTED,
            severity=AuditSeverity.DEBUG,
            entity_type="budget",
            correlation_id=correlation_id,
            description=f"Budget status computed for {budget_count} budgets",
            details={
                "reference_date": reference_date,
                "over_budget": over_budget,
            },
        )

    @staticmethod
    def simulation_run(
        simulation: str,
        is_valid: bool,
        parameters: dict,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SIMULATION_RUN,
            severity=AuditSeverity.DEBUG if is_valid else AuditSeverity.WARNING,
            entity_type="simulation",
            correlation_id=correlation_id,
            description=f"{simulation.capitalize()} simulation run"
            + ("" if is_valid else " with invalid inputs"),
            details={"simulation": simulation, "is_valid": is_valid, **parameters},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
