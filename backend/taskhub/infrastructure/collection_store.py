"""Collection Store — in-memory, identifier-addressed collections of users and tasks.

Invariants:
    - Identifiers are assigned by the store, starting at 1, in creation order
    - created_at is set once on create and carried over on every update
    - update replaces the record wholesale: fields missing from the payload reset to zero values
    - Every operation holds the collection's lock for the full check-and-access
    - ResourceNotFoundError is the only error a collection raises

Design Decisions:
    - KeyedCollection (default): counter + dict, identifiers survive deletes and are never
      reused (ADR: identity decoupled from storage position)
    - PositionalCollection: identifier == 1-based list position, delete compacts the list.
      Records after a deleted one become reachable one id lower while their stored id
      stays stale. Selected with id_strategy=positional
    - threading.Lock over asyncio.Lock: operations never await, and the store is also
      usable from sync threadpool routes and tests
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Generic, TypeVar

from pydantic import BaseModel

from taskhub.core.domain_types import IdStrategy, RecordId
from taskhub.core.errors import ResourceNotFoundError
from taskhub.schemas.base import StoredRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=StoredRecord)
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _LockedCollection(Generic[RecordT]):
    """Shared record construction and locking for both storage disciplines."""

    def __init__(
        self,
        record_type: type[RecordT],
        resource_type: str,
        clock: Clock = _utcnow,
    ):
        self.record_type = record_type
        self.resource_type = resource_type
        self._clock = clock
        self._lock = threading.Lock()

    def _build(
        self,
        payload: BaseModel,
        record_id: int,
        created_at: datetime,
        updated_at: datetime,
    ) -> RecordT:
        return self.record_type(
            **payload.model_dump(),
            id=record_id,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _not_found(self, record_id: object) -> ResourceNotFoundError:
        return ResourceNotFoundError(self.resource_type, record_id)


class KeyedCollection(_LockedCollection[RecordT]):
    """Counter-assigned identifiers mapped to records; deletes leave other ids intact."""

    def __init__(
        self,
        record_type: type[RecordT],
        resource_type: str,
        clock: Clock = _utcnow,
    ):
        super().__init__(record_type, resource_type, clock)
        self._records: dict[int, RecordT] = {}
        self._next_id = 1

    def create(self, payload: BaseModel) -> RecordT:
        with self._lock:
            now = self._clock()
            record = self._build(payload, self._next_id, now, now)
            self._records[record.id] = record
            self._next_id += 1
        logger.info(
            f"{self.resource_type} {record.id} created",
            extra={"record_id": record.id},
        )
        return record

    def list(self) -> list[RecordT]:
        with self._lock:
            return list(self._records.values())

    def get(self, record_id: RecordId) -> RecordT:
        with self._lock:
            record = self._records.get(record_id)
            if record is None:
                raise self._not_found(record_id)
            return record

    def update(self, record_id: RecordId, payload: BaseModel) -> RecordT:
        with self._lock:
            original = self._records.get(record_id)
            if original is None:
                raise self._not_found(record_id)
            record = self._build(
                payload, record_id, original.created_at, self._clock(),
            )
            self._records[record_id] = record
        logger.info(
            f"{self.resource_type} {record_id} updated",
            extra={"record_id": record_id},
        )
        return record

    def delete(self, record_id: RecordId) -> None:
        with self._lock:
            if self._records.pop(record_id, None) is None:
                raise self._not_found(record_id)
        logger.info(
            f"{self.resource_type} {record_id} deleted",
            extra={"record_id": record_id},
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class PositionalCollection(_LockedCollection[RecordT]):
    """Identifier == 1-based position in an ordered list; delete shifts later records down."""

    def __init__(
        self,
        record_type: type[RecordT],
        resource_type: str,
        clock: Clock = _utcnow,
    ):
        super().__init__(record_type, resource_type, clock)
        self._records: list[RecordT] = []

    def _check(self, record_id: int) -> int:
        """Return the list index for record_id. Caller must hold the lock."""
        if record_id < 1 or record_id > len(self._records):
            raise self._not_found(record_id)
        return record_id - 1

    def create(self, payload: BaseModel) -> RecordT:
        with self._lock:
            now = self._clock()
            record = self._build(payload, len(self._records) + 1, now, now)
            self._records.append(record)
        logger.info(
            f"{self.resource_type} {record.id} created",
            extra={"record_id": record.id},
        )
        return record

    def list(self) -> list[RecordT]:
        with self._lock:
            return list(self._records)

    def get(self, record_id: RecordId) -> RecordT:
        with self._lock:
            return self._records[self._check(record_id)]

    def update(self, record_id: RecordId, payload: BaseModel) -> RecordT:
        with self._lock:
            index = self._check(record_id)
            record = self._build(
                payload, record_id,
                self._records[index].created_at, self._clock(),
            )
            self._records[index] = record
        logger.info(
            f"{self.resource_type} {record_id} updated",
            extra={"record_id": record_id},
        )
        return record

    def delete(self, record_id: RecordId) -> None:
        with self._lock:
            del self._records[self._check(record_id)]
        # Later records are now addressed one id lower.
        logger.info(
            f"{self.resource_type} {record_id} deleted (collection re-indexed)",
            extra={"record_id": record_id},
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def build_collection(
    strategy: IdStrategy,
    record_type: type[RecordT],
    resource_type: str,
    clock: Clock = _utcnow,
) -> KeyedCollection[RecordT] | PositionalCollection[RecordT]:
    """Construct the collection for the configured identifier strategy."""
    if strategy == IdStrategy.POSITIONAL:
        return PositionalCollection(record_type, resource_type, clock)
    return KeyedCollection(record_type, resource_type, clock)
