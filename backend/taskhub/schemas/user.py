"""User Schemas — payload, stored record and public response for the users collection.

Invariants:
    - UserPayload fields default to their zero value: update is a full replace
    - User.password is excluded from every serialization
    - UserResponse has no password field at all (public shape)

Design Decisions:
    - Separate response model over relying on exclude alone: OpenAPI schema
      never advertises the password either
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from taskhub.schemas.base import StoredRecord


class UserPayload(BaseModel):
    """Client-supplied user fields (create and update)."""
    name: str = ""
    email: str = ""
    password: str = ""


class User(StoredRecord):
    """User as held by the collection store."""
    name: str = ""
    email: str = ""
    password: str = Field("", exclude=True, repr=False)


class UserResponse(BaseModel):
    """User as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
