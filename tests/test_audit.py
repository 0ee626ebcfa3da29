"""Tests for the audit logger."""

import asyncio
import pytest

from finance_tracker.audit import AuditLogger, create_correlation_id
from finance_tracker.models.audit import AuditEvent, AuditEventType, AuditSeverity
from finance_tracker.services.storage import InMemoryAuditStorage, StorageError


class FailingAuditStorage(InMemoryAuditStorage):
    """Audit storage whose writes always fail."""

    async def append_event(self, event: AuditEvent) -> bool:
        raise StorageError("audit store unavailable")


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_local_only_logging_succeeds(self):
        logger = AuditLogger()
        event = AuditEvent(
            event_type=AuditEventType.RECORD_CREATED,
            description="Transaction created",
        )
        assert asyncio.run(logger.log(event)) is True

    def test_events_are_persisted(self):
        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)
        correlation_id = create_correlation_id()
        asyncio.run(logger.log_record_created("goal", "g1", correlation_id))
        asyncio.run(logger.log_record_deleted("goal", "g1", correlation_id))

        events = asyncio.run(storage.get_events_by_correlation_id(correlation_id))
        assert [e.event_type for e in events] == [
            AuditEventType.RECORD_CREATED,
            AuditEventType.RECORD_DELETED,
        ]

    def test_storage_failure_does_not_raise(self):
        logger = AuditLogger(FailingAuditStorage())
        event = AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description="Boom",
        )
        assert asyncio.run(logger.log(event)) is False

    def test_log_error(self):
        storage = InMemoryAuditStorage()
        asyncio.run(AuditLogger(storage).log_error("ValueError", "bad input", {"field": "rate"}))
        event = asyncio.run(storage.get_recent_events())[0]
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "bad input"
        assert event.details == {"field": "rate"}

    def test_correlation_ids_are_unique(self):
        assert create_correlation_id() != create_correlation_id()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
