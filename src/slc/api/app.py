# SPDX-License-Identifier: MIT
"""
HTTP API for the self-learning classifier.

Two modes, chosen when the app is built:
- memory: one MemoryService shared by every request
- per-user: each request gets a UserService for the caller's id, backed by
  the configured StateStore
"""
from __future__ import annotations

import logging
import secrets
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from slc import __version__
from slc.config.loader import get_default_config
from slc.core.exceptions import StoreError, ValidationError
from slc.core.models import FeedbackVariant
from slc.state import ClassifierService, KeyedLock, MemoryService, UserService
from slc.store.base import StateStore

from .schemas import (
    ClassifyRequest,
    ClassifyResponse,
    FeedbackRequest,
    InitRequest,
    MovePropertyRequest,
    OkResponse,
    PropertyRequest,
    RenameClassRequest,
    RenamePropertyRequest,
    SnapshotResponse,
)

APP_NAME = "slc-api"
API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


def new_user_id() -> str:
    return secrets.token_hex(16)


def resolve_user_id(request: Request, response: Response, identity: Dict[str, str]) -> str:
    """Caller id from the identity header, then the cookie, else a new cookie."""
    uid = request.headers.get(identity["header"])
    if uid:
        return uid
    uid = request.cookies.get(identity["cookie"])
    if uid:
        return uid

    uid = new_user_id()
    response.set_cookie(
        key=identity["cookie"],
        value=uid,
        path="/",
        httponly=True,
        samesite="lax",
    )
    return uid


def get_service(request: Request, response: Response) -> ClassifierService:
    state = request.app.state
    if state.service is not None:
        return state.service
    uid = resolve_user_id(request, response, state.config["identity"])
    return UserService(state.store, uid, state.locks)


def _store_name(store: Optional[StateStore]) -> str:
    if store is None:
        return "memory"
    return getattr(store, "name", type(store).__name__)


def _build_store(config: Dict[str, Any]) -> StateStore:
    from slc.store.postgres import PostgresStore

    store_cfg = config["store"]
    store = PostgresStore.from_dsn(
        store_cfg["dsn"],
        min_size=store_cfg["min_size"],
        max_size=store_cfg["max_size"],
        connect_timeout=store_cfg["connect_timeout"],
    )
    store.ensure_schema()
    return store


def create_app(
    config: Optional[Dict[str, Any]] = None,
    store: Optional[StateStore] = None,
    service: Optional[MemoryService] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Validated configuration, defaults to the built-in one
        store: StateStore for per-user mode; overrides ``store.backend``
        service: Shared in-memory service; only used in memory mode

    Returns:
        Configured FastAPI app
    """
    config = config or get_default_config()

    if store is None and config["store"]["backend"] == "postgres":
        store = _build_store(config)
    if store is None:
        service = service or MemoryService()
    else:
        service = None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        close = getattr(app.state.store, "close", None)
        if callable(close):
            close()

    app = FastAPI(title=APP_NAME, version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.store = store
    app.state.service = service
    app.state.locks = KeyedLock()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config["cors"]["allow_origins"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", config["identity"]["header"]],
    )

    _register_error_handlers(app)
    _register_routes(app)
    logger.info("classifier API ready (mode=%s)", _store_name(store))
    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": f"bad json: {exc.errors()}"})

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError):
        return JSONResponse(status_code=503, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception):
        logger.exception("unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"error": "internal server error"})


def _register_routes(app: FastAPI) -> None:
    @app.get("/status", response_class=PlainTextResponse)
    def status():
        return "ok"

    @app.get("/health")
    def health(request: Request):
        store = request.app.state.store
        if store is None:
            return {"ok": True, "service": APP_NAME, "store": "memory"}
        ping = getattr(store, "ping", None)
        db_ok = ping() if callable(ping) else True
        return {"ok": True, "service": APP_NAME, "store": _store_name(store), "db": db_ok}

    @app.post(f"{API_PREFIX}/init", response_model=OkResponse)
    def init(req: InitRequest, svc: ClassifierService = Depends(get_service)):
        class1, class2 = req.class1.to_class(), req.class2.to_class()
        if not class1.name or not class2.name:
            raise ValidationError("class names are required", field="name")
        svc.init(class1, class2)
        return OkResponse()

    @app.post(f"{API_PREFIX}/classify", response_model=ClassifyResponse)
    def classify(req: ClassifyRequest, svc: ClassifierService = Depends(get_service)):
        return svc.classify(req.properties).to_dict()

    @app.post(f"{API_PREFIX}/feedback", response_model=OkResponse)
    def feedback(req: FeedbackRequest, svc: ClassifierService = Depends(get_service)):
        variant = FeedbackVariant.parse(req.variant)
        svc.feedback(variant, req.properties)
        return OkResponse()

    @app.get(f"{API_PREFIX}/state", response_model=SnapshotResponse)
    def state(svc: ClassifierService = Depends(get_service)):
        return svc.snapshot().to_dict()

    @app.post(f"{API_PREFIX}/reset", response_model=OkResponse)
    def reset(svc: ClassifierService = Depends(get_service)):
        svc.reset()
        return OkResponse()

    @app.post(f"{API_PREFIX}/prop/add", response_model=OkResponse)
    def add_property(req: PropertyRequest, svc: ClassifierService = Depends(get_service)):
        svc.add_property(req.area, req.property)
        return OkResponse()

    @app.post(f"{API_PREFIX}/prop/remove", response_model=OkResponse)
    def remove_property(req: PropertyRequest, svc: ClassifierService = Depends(get_service)):
        svc.remove_property(req.area, req.property)
        return OkResponse()

    @app.post(f"{API_PREFIX}/prop/move", response_model=OkResponse)
    def move_property(req: MovePropertyRequest, svc: ClassifierService = Depends(get_service)):
        svc.move_property(req.source, req.target, req.property)
        return OkResponse()

    @app.post(f"{API_PREFIX}/prop/rename", response_model=OkResponse)
    def rename_property(
        req: RenamePropertyRequest, svc: ClassifierService = Depends(get_service)
    ):
        svc.rename_property(req.area, req.old, req.new)
        return OkResponse()

    @app.post(f"{API_PREFIX}/classes/rename", response_model=OkResponse)
    def rename_class(req: RenameClassRequest, svc: ClassifierService = Depends(get_service)):
        svc.rename_class(req.slot, req.name)
        return OkResponse()
