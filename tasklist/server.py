"""
Task Server: HTTP/JSON Interface to the Task Store
===================================================
FastAPI application exposing CRUD over the ``/task/`` resource.

Launch:
    python -m tasklist.cli serve            # Via CLI
    python -m tasklist.cli serve --addr :9000

Endpoints:
    GET    /task/                → {"tasks": [...]}   (?filter=...&sortBy=...)
    GET    /task/{id}            → task JSON
    POST   /task/                ← {"title": "..."}   (any suffix is ignored)
    PUT    /task/{id}            ← full task JSON, "id" must match the path
    DELETE /task/{id}
    any other method             → 400 "<METHOD> not implemented"

Error bodies are plain text, "<status-code> <message>".
"""

from __future__ import annotations

import logging
import os
import re
from typing import Optional, Type, TypeVar

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasklist import policy
from tasklist.config import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, ServerConfig
from tasklist.errors import (
    INTERNAL_ERROR_MESSAGE, RequestError, bad_request, not_found,
)
from tasklist.guard import GuardedStore
from tasklist.models import Task
from tasklist.store import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)

TASK_PATH = "/task/"

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# IDs are 64-bit signed integers on the wire.
MIN_ID = -(1 << 63)
MAX_ID = (1 << 63) - 1

M = TypeVar("M", bound=BaseModel)


# ─────────────────────────────────────────────────────────────
#  Request Models
# ─────────────────────────────────────────────────────────────

class CreateRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    title: str = ""


class TaskPayload(BaseModel):
    """Full task body for PUT. Unknown keys are ignored."""

    model_config = ConfigDict(strict=True)

    id: int
    title: str
    done: bool = False
    date: int = 0
    priority: int = 0

    def to_task(self) -> Task:
        return Task(**self.model_dump())


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

async def _raw_body(request: Request) -> bytes:
    """Read the body up front so the route itself can stay synchronous."""
    return await request.body()


def _decode(model: Type[M], body: bytes) -> M:
    """Validate a JSON body, turning any failure into a 400."""
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(part) for part in first.get("loc", ()))
        raise bad_request(f"{loc}: {first['msg']}" if loc else first["msg"])


def parse_id(raw: str) -> int:
    """Parse the trailing path segment as a base-10 task ID."""
    if not _ID_PATTERN.fullmatch(raw):
        raise bad_request(f"invalid task id: {raw!r}")
    value = int(raw)
    if not MIN_ID <= value <= MAX_ID:
        raise bad_request(f"task id out of range: {raw!r}")
    return value


def _error_response(err: RequestError, headers: Optional[dict] = None) -> PlainTextResponse:
    return PlainTextResponse(str(err), status_code=err.code, headers=headers)


# ─────────────────────────────────────────────────────────────
#  App Factory
# ─────────────────────────────────────────────────────────────

def create_app(store: Optional[GuardedStore] = None,
               config: Optional[ServerConfig] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        store: Guarded store to serve. A fresh, empty one if None.
        config: Server settings (CORS, static dir). Defaults if None.

    Returns:
        Configured FastAPI application.
    """
    config = config or ServerConfig()
    tasks = store if store is not None else GuardedStore()

    app = FastAPI(title="Task List", version="0.1.0")

    _register_error_handlers(app)
    _register_routes(app, tasks)

    if config.cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=CORS_ALLOW_METHODS,
            allow_headers=CORS_ALLOW_HEADERS,
        )

    # Mounted last so the /task/ routes take precedence over "/".
    if config.web_dir and os.path.isdir(config.web_dir):
        app.mount("/", StaticFiles(directory=config.web_dir, html=True), name="web")

    return app


def _register_error_handlers(app: FastAPI) -> None:
    """Map failures onto plain-text "<code> <message>" responses."""

    @app.exception_handler(RequestError)
    async def request_error(request: Request, exc: RequestError):
        return _error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return _error_response(bad_request(f"{request.method} not implemented"))
        return _error_response(RequestError(exc.status_code, str(exc.detail)), exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return _error_response(bad_request("malformed request"))

    @app.middleware("http")
    async def internal_errors(request: Request, call_next):
        # Anything that isn't a RequestError is a bug: log it, leak nothing.
        try:
            return await call_next(request)
        except Exception:
            logger.exception("%s %s failed", request.method, request.url.path)
            return _error_response(RequestError(500, INTERNAL_ERROR_MESSAGE))


# ─────────────────────────────────────────────────────────────
#  Routes (/task/)
# ─────────────────────────────────────────────────────────────

def _register_routes(app: FastAPI, tasks: GuardedStore) -> None:
    """Register the task resource routes.

    Routes are plain ``def`` functions: FastAPI runs them in its worker
    thread pool, and the store guard arbitrates between them.
    """

    @app.get(TASK_PATH)
    def read_all(
        filter_name: Optional[str] = Query(None, alias="filter"),
        sort_by: Optional[str] = Query(None, alias="sortBy"),
    ):
        """List every task, optionally filtered and sorted."""
        with tasks.read() as store:
            listed = policy.apply(store.all(), filter_name, sort_by)
            return JSONResponse({"tasks": [t.to_dict() for t in listed]})

    @app.api_route(TASK_PATH, methods=["PUT", "DELETE"])
    def collection_noop():
        """PUT/DELETE without an ID address nothing; accepted as a no-op."""
        return Response(status_code=200)

    # ":path" hands the whole suffix to parse_id, so "/task/1/2" is a 400.
    # Registered after the collection routes, which also match an empty suffix.
    @app.get(TASK_PATH + "{task_id:path}")
    def read(task_id: str):
        """Return a single task."""
        tid = parse_id(task_id)
        with tasks.read() as store:
            task, ok = store.find(tid)
            if not ok:
                raise not_found(f"task id: {tid} doesn't exist")
            return JSONResponse(task.to_dict())

    @app.post(TASK_PATH + "{suffix:path}")
    def create(body: bytes = Depends(_raw_body)):
        """Create a task from {"title": ...}. Any suffix after /task/ is ignored."""
        req = _decode(CreateRequest, body)
        try:
            task = tasks.create(req.title)
        except InvalidArgumentError as e:
            raise bad_request(str(e))
        logger.debug("created task %d", task.id)
        return Response(status_code=200)

    @app.put(TASK_PATH + "{task_id:path}")
    def update(task_id: str, body: bytes = Depends(_raw_body)):
        """Replace a task. The body's "id" must equal the path ID."""
        tid = parse_id(task_id)
        payload = _decode(TaskPayload, body)
        if payload.id != tid:
            raise bad_request("inconsistent task IDs")
        if not payload.title:
            raise bad_request("empty title")

        # Existence check and replacement under one write hold.
        with tasks.write() as store:
            _, ok = store.find(tid)
            if not ok:
                raise not_found(f"task id: {tid} doesn't exist")
            store.update(payload.to_task())
        logger.debug("updated task %d", tid)
        return Response(status_code=200)

    @app.delete(TASK_PATH + "{task_id:path}")
    def delete(task_id: str):
        """Delete a task. Its ID is never reused."""
        tid = parse_id(task_id)
        try:
            tasks.delete(tid)
        except NotFoundError as e:
            raise not_found(str(e))
        logger.debug("deleted task %d", tid)
        return Response(status_code=200)


# ─────────────────────────────────────────────────────────────
#  Startup
# ─────────────────────────────────────────────────────────────

def run_server(config: Optional[ServerConfig] = None):
    """Launch the task server with uvicorn."""
    import uvicorn

    config = config or ServerConfig.from_env()
    app = create_app(config=config)

    logger.info("listening on http://%s", config.addr)
    # log_config=None leaves logging to setup_logging().
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    run_server()
