"""User Routes — public CRUD over the users collection.

Invariants:
    - No credential required (only /tasks is gated)
    - Responses use UserResponse: the password never leaves the server
    - PUT resolves the id before decoding the body: an unknown id is 404 whatever the body
    - A body that fails to decode (400) never mutates the store
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from taskhub.api.dependencies import get_user_collection, read_payload, resolve_record_id
from taskhub.core.repository_protocols import Collection
from taskhub.schemas.user import User, UserPayload, UserResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])

_USER_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": UserPayload.model_json_schema()}},
    },
}


@router.post(
    "/", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED, openapi_extra=_USER_BODY,
)
@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED, include_in_schema=False,
)
async def create_user(
    request: Request, users: Collection[User] = Depends(get_user_collection),
):
    return users.create(await read_payload(request, UserPayload))


@router.get("/", response_model=list[UserResponse])
@router.get("", response_model=list[UserResponse], include_in_schema=False)
async def list_users(users: Collection[User] = Depends(get_user_collection)):
    return users.list()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str, users: Collection[User] = Depends(get_user_collection),
):
    return users.get(resolve_record_id(user_id, users))


@router.put("/{user_id}", response_model=UserResponse, openapi_extra=_USER_BODY)
async def update_user(
    user_id: str,
    request: Request,
    users: Collection[User] = Depends(get_user_collection),
):
    """Full replace: fields omitted from the body are reset, not kept."""
    record_id = resolve_record_id(user_id, users)
    users.get(record_id)
    return users.update(record_id, await read_payload(request, UserPayload))


@router.delete("/{user_id}")
async def delete_user(
    user_id: str, users: Collection[User] = Depends(get_user_collection),
):
    users.delete(resolve_record_id(user_id, users))
    return {"message": "User deleted"}
