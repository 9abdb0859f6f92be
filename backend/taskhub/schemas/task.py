"""Task Schemas — payload and stored record for the tasks collection.

Invariants:
    - TaskPayload fields default to their zero value: update is a full replace
    - user_id is a non-negative reference to a user; existence is never checked
    - status is free-form text
"""

from pydantic import BaseModel, Field

from taskhub.schemas.base import StoredRecord


class TaskPayload(BaseModel):
    """Client-supplied task fields (create and update)."""
    user_id: int = Field(0, ge=0)
    title: str = ""
    description: str = ""
    status: str = ""


class Task(StoredRecord):
    """Task as held by the collection store and returned to clients."""
    user_id: int = 0
    title: str = ""
    description: str = ""
    status: str = ""
