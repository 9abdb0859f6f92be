"""Boundary Protocols — contracts between the HTTP shell and its collaborators.

Invariants:
    - Handlers depend on Collection and TokenValidator, never on concrete classes
    - Implementations are provided per app instance via dependency injection
    - Collection methods raise ResourceNotFoundError and nothing else

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Collection is sync: in-memory operations do no IO and hold a lock briefly
    - TokenValidator is async: real implementations may call out over the network
"""

from typing import Protocol, TypeVar

from pydantic import BaseModel

from taskhub.core.domain_types import RecordId

RecordT = TypeVar("RecordT")


class Collection(Protocol[RecordT]):
    """Contract for an identifier-addressed collection of one record type."""
    resource_type: str

    def create(self, payload: BaseModel) -> RecordT: ...
    def list(self) -> list[RecordT]: ...
    def get(self, record_id: RecordId) -> RecordT: ...
    def update(self, record_id: RecordId, payload: BaseModel) -> RecordT: ...
    def delete(self, record_id: RecordId) -> None: ...
    def __len__(self) -> int: ...


class TokenValidator(Protocol):
    """Contract for the external authority that verifies bearer credentials.

    resolve() returns a ResolvedIdentity or raises TokenValidationError.
    """
    async def resolve(self, token: str): ...
    async def aclose(self) -> None: ...
