"""Task Routes — token-gated CRUD over the tasks collection.

Invariants:
    - Every route sits behind require_identity (router-level dependency)
    - A request rejected by the gate never reaches the collection, nor has its body read
    - PUT resolves the id before decoding the body: an unknown id is 404 whatever the body
    - user_id is stored as given; no check that the user exists
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from taskhub.api.dependencies import (
    current_identity, get_task_collection, read_payload, require_identity,
    resolve_record_id,
)
from taskhub.core.repository_protocols import Collection
from taskhub.schemas.task import Task, TaskPayload

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    dependencies=[Depends(require_identity)],
)

_TASK_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": TaskPayload.model_json_schema()}},
    },
}


@router.post(
    "", response_model=Task,
    status_code=status.HTTP_201_CREATED, openapi_extra=_TASK_BODY,
)
@router.post(
    "/", response_model=Task,
    status_code=status.HTTP_201_CREATED, include_in_schema=False,
)
async def create_task(
    request: Request, tasks: Collection[Task] = Depends(get_task_collection),
):
    task = tasks.create(await read_payload(request, TaskPayload))
    subject = current_identity(request).subject
    logger.info(
        f"Task {task.id} created by {subject}",
        extra={"record_id": task.id, "subject": subject},
    )
    return task


@router.get("", response_model=list[Task])
@router.get("/", response_model=list[Task], include_in_schema=False)
async def list_tasks(tasks: Collection[Task] = Depends(get_task_collection)):
    return tasks.list()


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: str, tasks: Collection[Task] = Depends(get_task_collection),
):
    return tasks.get(resolve_record_id(task_id, tasks))


@router.put("/{task_id}", response_model=Task, openapi_extra=_TASK_BODY)
async def update_task(
    task_id: str,
    request: Request,
    tasks: Collection[Task] = Depends(get_task_collection),
):
    """Full replace: fields omitted from the body are reset, not kept."""
    record_id = resolve_record_id(task_id, tasks)
    tasks.get(record_id)
    return tasks.update(record_id, await read_payload(request, TaskPayload))


@router.delete("/{task_id}")
async def delete_task(
    task_id: str, tasks: Collection[Task] = Depends(get_task_collection),
):
    tasks.delete(resolve_record_id(task_id, tasks))
    return {"message": "Task deleted"}
