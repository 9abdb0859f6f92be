"""Error Handlers — FastAPI-side validation and unexpected failures.

Tests:
    - Parameters FastAPI validates itself still come back as 400 VALIDATION_ERROR
    - An unhandled exception is a 500 envelope naming the route, not the exception
"""

import logging

from fastapi import APIRouter
from httpx import ASGITransport, AsyncClient


async def test_fastapi_validation_uses_bad_request_envelope(app, client):
    router = APIRouter()

    @router.get("/paged")
    async def paged(limit: int):
        return {"limit": limit}

    app.include_router(router)

    res = await client.get("/paged", params={"limit": "many"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "query.limit"
    assert error["message"].startswith("query.limit: ")


async def test_unhandled_exception_is_500_without_internals(app, caplog):
    router = APIRouter()

    @router.get("/explode")
    async def explode():
        raise RuntimeError("secret connection string")

    app.include_router(router)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        with caplog.at_level(logging.ERROR, logger="taskhub.api.error_handlers"):
            res = await c.get("/explode")

    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["category"] == "internal"
    assert error["message"] == "GET /explode could not be completed"
    assert "secret" not in res.text
    assert any("RuntimeError" in r.getMessage() for r in caplog.records)
