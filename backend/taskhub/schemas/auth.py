"""Auth Schemas — the identity a token validator resolves a credential into."""

from typing import Any

from pydantic import BaseModel, Field


class ResolvedIdentity(BaseModel):
    """Verified caller identity, attached to request.state.user_info."""
    subject: str
    name: str | None = None
    email: str | None = None
    claims: dict[str, Any] = Field(default_factory=dict)
