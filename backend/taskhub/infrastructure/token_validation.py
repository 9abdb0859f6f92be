"""Token Validation — external authorities that resolve bearer credentials into identities.

Invariants:
    - resolve() returns a ResolvedIdentity or raises TokenValidationError, nothing else
    - A resolved identity always has a non-empty subject
    - Validators never log the raw token

Design Decisions:
    - JWTTokenValidator (python-jose): offline signature + expiry verification, no network hop
    - UserInfoTokenValidator (httpx): delegates to an OAuth2 userinfo endpoint when tokens
      are opaque to this service
    - Both async behind one Protocol: the access gate awaits resolve() without knowing which
"""

import logging
from typing import Any

import httpx
from jose import JWTError, jwt

from taskhub.config import Settings
from taskhub.core.domain_types import AuthBackend
from taskhub.core.errors import TokenValidationError
from taskhub.schemas.auth import ResolvedIdentity

logger = logging.getLogger(__name__)


def _identity_from_claims(claims: dict[str, Any]) -> ResolvedIdentity:
    subject = claims.get("sub")
    if subject is None or str(subject) == "":
        raise TokenValidationError("token has no subject")
    return ResolvedIdentity(
        subject=str(subject),
        name=claims.get("name"),
        email=claims.get("email"),
        claims=claims,
    )


class JWTTokenValidator:
    """Verify signed JWTs locally."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        audience: str | None = None,
        issuer: str | None = None,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._audience = audience
        self._issuer = issuer

    async def resolve(self, token: str) -> ResolvedIdentity:
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
            )
        except JWTError as e:
            raise TokenValidationError(str(e)) from e
        return _identity_from_claims(claims)

    async def aclose(self) -> None:
        return None


class UserInfoTokenValidator:
    """Resolve opaque tokens through an OAuth2/OIDC userinfo endpoint."""

    def __init__(
        self,
        userinfo_url: str,
        timeout_seconds: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._userinfo_url = userinfo_url
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def resolve(self, token: str) -> ResolvedIdentity:
        try:
            response = await self._client.get(
                self._userinfo_url,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Userinfo request failed: {e}")
            raise TokenValidationError("identity provider unreachable") from e

        if response.status_code != 200:
            raise TokenValidationError(
                f"token rejected by identity provider ({response.status_code})",
            )
        try:
            claims = response.json()
        except ValueError as e:
            raise TokenValidationError("identity provider returned invalid JSON") from e
        if not isinstance(claims, dict):
            raise TokenValidationError("identity provider returned invalid claims")
        return _identity_from_claims(claims)

    async def aclose(self) -> None:
        await self._client.aclose()


def build_token_validator(
    settings: Settings,
) -> JWTTokenValidator | UserInfoTokenValidator:
    """Construct the validator selected by settings.auth_backend."""
    if settings.auth_backend == AuthBackend.USERINFO:
        if not settings.userinfo_url:
            raise ValueError("userinfo_url is required when auth_backend=userinfo")
        return UserInfoTokenValidator(
            settings.userinfo_url, settings.userinfo_timeout_seconds,
        )
    return JWTTokenValidator(
        settings.jwt_secret_key,
        settings.jwt_algorithm,
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
    )
