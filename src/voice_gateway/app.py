from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from voice_gateway.api.deps import get_issuance_config
from voice_gateway.api.middleware.request_context import RequestContextMiddleware
from voice_gateway.api.v1.routers import auth, connection, health, room_metadata
from voice_gateway.api.v1.schemas.common import ErrorResponse
from voice_gateway.application.exceptions import AppError
from voice_gateway.config import settings
from voice_gateway.infrastructure.db.session import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    get_issuance_config()
    yield
    await engine.dispose()
    logger.info("Database connection pool closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Voice Gateway",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(connection.router)
    app.include_router(room_metadata.router)

    return app


def _error(status_code: int, kind: str, detail: object) -> JSONResponse:
    body = ErrorResponse(error=kind, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(_req: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.kind, exc.detail)
        return _error(exc.status_code, exc.kind, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(_req: Request, exc: RequestValidationError) -> JSONResponse:
        fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
        return _error(422, "ValidationError", {"fields": fields})

    @app.exception_handler(Exception)
    async def _unhandled(_req: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", exc_info=exc)
        return _error(500, "InternalError", "internal error")
