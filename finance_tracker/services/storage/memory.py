"""
In-Memory Storage

Dictionary-backed implementations of the storage interfaces. Used by the
tests and by the demo app; data lives only as long as the process.
"""

from typing import Optional
from uuid import UUID

import structlog

from finance_tracker.aggregation import filter_transactions
from finance_tracker.models.audit import AuditEvent
from finance_tracker.models.records import (
    Record,
    RecordKind,
    Transaction,
    record_kind,
)
from finance_tracker.models.results import TransactionFilter
from finance_tracker.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    RecordStoreInterface,
)


class InMemoryRecordStore(RecordStoreInterface):
    """
    Record store holding one user's records in memory.

    Records are immutable, so the store hands out the stored instances
    directly; an update replaces the instance.
    """

    def __init__(self, records: Optional[list[Record]] = None):
        self._records: dict[RecordKind, dict[str, Record]] = {
            kind: {} for kind in RecordKind
        }
        self._logger = structlog.get_logger(__name__)
        for record in records or []:
            self._records[record_kind(record)][record.id] = record

    async def list_records(self, kind: RecordKind) -> list[Record]:
        return list(self._records[kind].values())

    async def get_record(self, kind: RecordKind, record_id: str) -> Optional[Record]:
        return self._records[kind].get(record_id)

    async def add_record(self, record: Record) -> Record:
        kind = record_kind(record)
        if record.id in self._records[kind]:
            raise DuplicateError(f"{kind.value} {record.id} already exists")
        self._records[kind][record.id] = record
        self._logger.debug("record_added", kind=kind.value, record_id=record.id)
        return record

    async def update_record(self, record: Record) -> Record:
        kind = record_kind(record)
        if record.id not in self._records[kind]:
            raise NotFoundError(f"{kind.value} {record.id} not found")
        self._records[kind][record.id] = record
        self._logger.debug("record_updated", kind=kind.value, record_id=record.id)
        return record

    async def delete_record(self, kind: RecordKind, record_id: str) -> bool:
        if record_id not in self._records[kind]:
            raise NotFoundError(f"{kind.value} {record_id} not found")
        del self._records[kind][record_id]
        self._logger.debug("record_deleted", kind=kind.value, record_id=record_id)
        return True

    async def list_transactions(
        self,
        filters: Optional[TransactionFilter] = None,
    ) -> list[Transaction]:
        transactions = await self.list_records(RecordKind.TRANSACTION)
        if filters is None:
            return transactions
        return filter_transactions(transactions, filters)


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only audit event list."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
