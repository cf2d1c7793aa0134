from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import constants_from_env, save_db_path_from_env
from errors import CONFLICT_CODES, NOT_FOUND_CODES, CareerError, SaveCorruptedError
from saves.registry import SaveRegistry
from saves.repo import SqliteSaveStore
from app.api.router import api_router

logger = logging.getLogger(__name__)

ADMIN_TOKEN_ENV_VAR = "STRIKE_FORCE_ADMIN_TOKEN"


def status_for(exc: CareerError) -> int:
    if isinstance(exc, SaveCorruptedError):
        return 500
    if exc.code in CONFLICT_CODES:
        return 409
    if exc.code in NOT_FOUND_CODES:
        return 404
    return 400


def create_app(registry: Optional[SaveRegistry] = None) -> FastAPI:
    """Build the HTTP app.

    Without ``registry`` one is created at startup from the environment:
    a SQLite save store at ``STRIKE_FORCE_SAVE_DB`` and constant overrides
    from ``STRIKE_FORCE_CONSTANTS``.
    """
    app = FastAPI(title="Strike Force career server")
    app.state.registry = registry

    @app.on_event("startup")
    def _startup_init_registry() -> None:
        if app.state.registry is not None:
            return
        db_path = save_db_path_from_env()
        constants = constants_from_env()
        app.state.registry = SaveRegistry(SqliteSaveStore(db_path), constants)
        logger.info("save store ready at %s", db_path)

    @app.exception_handler(CareerError)
    async def _career_error_handler(request: Request, exc: CareerError) -> JSONResponse:
        status = status_for(exc)
        if status >= 500:
            logger.error("%s %s failed: %s %s", request.method, request.url.path, exc.code, exc.details)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.code)
        return JSONResponse(status_code=status, content=exc.to_payload())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _auth_guard_middleware(request: Request, call_next):
        """Optional auth guard.

        If STRIKE_FORCE_ADMIN_TOKEN is configured, require it on state-changing API calls.
        """
        required_token = (os.environ.get(ADMIN_TOKEN_ENV_VAR) or "").strip()
        if not required_token:
            return await call_next(request)

        path = request.url.path or ""
        method = (request.method or "GET").upper()
        if method != "POST" or not path.startswith("/api/"):
            return await call_next(request)

        provided = (request.headers.get("X-Admin-Token") or "").strip()
        if provided != required_token:
            return JSONResponse(status_code=401, content={"detail": "Unauthorized: invalid X-Admin-Token"})

        return await call_next(request)

    app.include_router(api_router)
    return app


app = create_app()
