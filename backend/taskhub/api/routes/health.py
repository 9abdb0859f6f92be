"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /health/ always returns 200 if the process is up
    - Reports collection sizes; never record contents
"""

import logging

from fastapi import APIRouter, Request, status

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "taskhub-api",
        "id_strategy": request.app.state.settings.id_strategy.value,
        "collections": {
            "users": len(request.app.state.users),
            "tasks": len(request.app.state.tasks),
        },
    }
