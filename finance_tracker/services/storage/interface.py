"""
Abstract Storage Interface

DESIGN DECISION: The core never talks to a database. It consumes scoped
record lists, and this interface is the contract a record store must meet
to supply them. This allows us to:
1. Back the app with a remote datastore, a local file or memory
2. Use in-memory storage for testing
3. Keep every calculation free of I/O

Methods are async because stores are the only place the app waits on I/O.
Every list a store returns is already scoped to one user.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from finance_tracker.models.audit import AuditEvent
from finance_tracker.models.records import (
    Record,
    RecordKind,
    RecordSnapshot,
    Transaction,
)
from finance_tracker.models.results import TransactionFilter


class RecordStoreInterface(ABC):
    """
    Abstract interface for the user's record store.

    Any storage implementation (remote datastore, SQLite, memory)
    must implement these methods.
    """

    @abstractmethod
    async def list_records(self, kind: RecordKind) -> list[Record]:
        """
        All records of one kind, in insertion order.

        Args:
            kind: Which collection to read
        """
        pass

    @abstractmethod
    async def get_record(self, kind: RecordKind, record_id: str) -> Optional[Record]:
        """
        Retrieve a record by id.

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def add_record(self, record: Record) -> Record:
        """
        Store a new record.

        Raises:
            DuplicateError: If a record of the same kind and id exists
        """
        pass

    @abstractmethod
    async def update_record(self, record: Record) -> Record:
        """
        Replace an existing record with a new version.

        Raises:
            NotFoundError: If the record doesn't exist
        """
        pass

    @abstractmethod
    async def delete_record(self, kind: RecordKind, record_id: str) -> bool:
        """
        Delete a record by id.

        Raises:
            NotFoundError: If the record doesn't exist
        """
        pass

    @abstractmethod
    async def list_transactions(
        self,
        filters: Optional[TransactionFilter] = None,
    ) -> list[Transaction]:
        """
        Transactions matching the filters (all when None).

        Args:
            filters: Date range, type, category and account filters
        """
        pass

    async def snapshot(self) -> RecordSnapshot:
        """Every record the core needs, in one immutable bundle."""
        return RecordSnapshot(
            transactions=tuple(await self.list_records(RecordKind.TRANSACTION)),
            accounts=tuple(await self.list_records(RecordKind.ACCOUNT)),
            categories=tuple(await self.list_records(RecordKind.CATEGORY)),
            budgets=tuple(await self.list_records(RecordKind.BUDGET)),
            goals=tuple(await self.list_records(RecordKind.GOAL)),
        )


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """All events of one user action, in chronological order."""
        pass

    @abstractmethod
    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """All events for one record, in chronological order."""
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """The most recent audit events, newest first."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
