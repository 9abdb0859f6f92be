"""Route Dependencies — collection injection, body decoding and the access gate.

Invariants:
    - Collections come from request.app.state, never from module globals
    - require_identity either sets request.state.user_info or raises UnauthorizedError;
      the route handler never runs for an unauthenticated request
    - A missing credential never reaches the token validator
    - Bodies are decoded by read_payload inside the handler, after the gate and the
      id lookup: 401 beats 400 on /tasks, and 404 beats 400 on PUT

Design Decisions:
    - Access gate as a router-level dependency over ASGI middleware: it runs before the
      handler, and handlers take no pydantic body parameter, so nothing is decoded first
    - HTTPBearer(auto_error=False): we raise our own UnauthorizedError to keep one error shape
"""

import logging
from typing import TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ValidationError

from taskhub.core.domain_types import RecordId, parse_record_id
from taskhub.core.errors import (
    BadRequestError, ResourceNotFoundError, TokenValidationError, UnauthorizedError,
)
from taskhub.core.repository_protocols import Collection, TokenValidator
from taskhub.schemas.auth import ResolvedIdentity
from taskhub.schemas.task import Task
from taskhub.schemas.user import User

logger = logging.getLogger(__name__)

USER_INFO_KEY = "user_info"

PayloadT = TypeVar("PayloadT", bound=BaseModel)

bearer_scheme = HTTPBearer(auto_error=False)


def get_user_collection(request: Request) -> Collection[User]:
    return request.app.state.users


def get_task_collection(request: Request) -> Collection[Task]:
    return request.app.state.tasks


def get_token_validator(request: Request) -> TokenValidator:
    return request.app.state.token_validator


def resolve_record_id(raw_id: str, collection: Collection) -> RecordId:
    """Parse a path id, raising the collection's not-found error on garbage."""
    record_id = parse_record_id(raw_id)
    if record_id is None:
        raise ResourceNotFoundError(collection.resource_type, raw_id)
    return record_id


async def read_payload(request: Request, payload_type: type[PayloadT]) -> PayloadT:
    """Decode the JSON request body into payload_type or raise BadRequestError.

    Unparseable JSON, a non-object body and wrong field types all end up here,
    reported against "body" like FastAPI's own body validation.
    """
    try:
        return payload_type.model_validate_json(await request.body())
    except ValidationError as e:
        raise BadRequestError.from_decoder_errors(e.errors(), loc_prefix=("body",))


async def require_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    validator: TokenValidator = Depends(get_token_validator),
) -> ResolvedIdentity:
    """Access gate: resolve the bearer token or reject the request with 401."""
    if credentials is None or not credentials.credentials:
        logger.warning(
            "Rejected request without token",
            extra={"path": request.url.path},
        )
        raise UnauthorizedError("Missing token")

    try:
        identity = await validator.resolve(credentials.credentials)
    except TokenValidationError as e:
        logger.warning(
            f"Rejected token: {e}",
            extra={"path": request.url.path},
        )
        raise UnauthorizedError(str(e))

    setattr(request.state, USER_INFO_KEY, identity)
    return identity


def current_identity(request: Request) -> ResolvedIdentity:
    """Identity attached by require_identity. Only valid on gated routers."""
    return getattr(request.state, USER_INFO_KEY)
