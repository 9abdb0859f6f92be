"""Record Base — fields every stored record carries, assigned by the collection store.

Invariants:
    - id, created_at, updated_at are never taken from a client payload
    - created_at never changes after the record is first stored
"""

from datetime import datetime

from pydantic import BaseModel


class StoredRecord(BaseModel):
    """Base class for records owned by a collection."""
    id: int
    created_at: datetime
    updated_at: datetime
