import json
from http import HTTPStatus

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from video_api.api.http_utils import error_body, install_error_handlers
from video_api.core.config import settings
from video_api.core.errors import Forbidden, NotFound, ServiceError


def _app() -> FastAPI:
    app = FastAPI()
    install_error_handlers(app)

    class Body(BaseModel):
        count: int

    @app.get("/forbidden")
    async def forbidden():
        raise Forbidden("nope")

    @app.get("/missing")
    async def missing():
        raise NotFound("Video not found")

    @app.get("/upstream")
    async def upstream():
        raise ServiceError("provider down", status=HTTPStatus.BAD_GATEWAY)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("mongo_rating_put_error: timeout")

    @app.post("/body")
    async def body(data: Body):
        return {"count": data.count}

    return app


async def _get(method, path, **kwargs):
    async with AsyncClient(transport=ASGITransport(app=_app()),
                           base_url="http://test") as ac:
        return await ac.request(method, path, **kwargs)


def test_error_body_shape():
    resp = error_body("x", HTTPStatus.NOT_FOUND)
    assert resp.status_code == 404
    assert json.loads(resp.body) == {"error": "x"}


async def test_service_errors_map_to_their_status():
    r = await _get("GET", "/forbidden")
    assert r.status_code == 403
    assert r.json() == {"error": "nope"}

    r = await _get("GET", "/missing")
    assert r.status_code == 404
    assert r.json() == {"error": "Video not found"}

    r = await _get("GET", "/upstream")
    assert r.status_code == 502


async def test_unknown_route_uses_error_envelope():
    r = await _get("GET", "/nowhere")
    assert r.status_code == 404
    assert set(r.json()) == {"error"}


async def test_validation_error_is_400_with_message():
    r = await _get("POST", "/body", json={"count": "many"})
    assert r.status_code == 400
    assert r.json()["error"].startswith("count:")


async def test_runtime_error_is_500_without_detail(monkeypatch):
    monkeypatch.setattr(settings, "debug", False)
    r = await _get("GET", "/boom")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}


async def test_runtime_error_detail_in_debug(monkeypatch):
    monkeypatch.setattr(settings, "debug", True)
    r = await _get("GET", "/boom")
    assert r.status_code == 500
    assert r.json()["detail"] == "mongo_rating_put_error: timeout"
