#!/usr/bin/env python3

"""
Main application entry point for the postboard API.

Architecture: FastAPI application over a single async SQLAlchemy engine.
Key Features: Lifecycle management, database health checks, error mapping, CORS configuration.
"""

import sys
import time
from contextlib import asynccontextmanager
from datetime import timedelta

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from postboard.api.auth import router as auth_router
from postboard.api.health import router as health_router
from postboard.api.posts import router as posts_router
from postboard.api.users import router as users_router
from postboard.config import Settings, settings
from postboard.db import (
    check_db_connection,
    close_db,
    create_app_engine,
    create_session_factory,
    init_db,
)
from postboard.db_handlers import UserDBHandler
from postboard.exceptions import PostboardError
from postboard.services.auth_service import AuthService
from postboard.utils.logger import setup_logger

logger = setup_logger("main", settings.log_level)

SERVER_ERROR_MESSAGE = "Server Error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store once for the process lifetime and close it on shutdown."""
    logger.info("Application startup...")
    app_settings: Settings = app.state.settings
    try:
        engine = create_app_engine(app_settings)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)

        logger.info("Initializing database...")
        await init_db(engine)
        logger.info("Database initialization complete.")

        logger.info("Checking database connectivity...")
        await check_db_connection(engine)
        logger.info("Database connectivity confirmed.")
    except Exception as e:
        logger.critical(f"Startup error: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    logger.info("postboard API startup successful.")
    yield

    logger.info("postboard API shutdown...")
    await close_db(app.state.engine)
    logger.info("Shutdown complete.")


def _server_error() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"msg": SERVER_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PostboardError)
    async def postboard_error_handler(request: Request, exc: PostboardError):
        if exc.status_code >= 500:
            logger.error(
                f"{request.method} {request.url.path} failed: {exc!r}",
                exc_info=exc,
            )
            return _server_error()
        return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "msg": f"{field}: {message}" if field else message,
                "errors": [
                    {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
                    for err in errors
                ],
            },
        )

    @app.exception_handler(OSError)
    async def oserror_exception_handler(request: Request, exc: OSError):
        logger.error(f"OSError caught: {exc}, errno: {exc.errno}", exc_info=exc)
        return _server_error()

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return _server_error()


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings

    app = FastAPI(title="postboard API", version="0.1.0", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.auth_service = AuthService(
        UserDBHandler(),
        secret_key=app_settings.jwt_secret,
        algorithm=app_settings.jwt_algorithm,
        token_ttl=timedelta(minutes=app_settings.access_token_expire_minutes),
        bcrypt_rounds=app_settings.bcrypt_rounds,
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(posts_router)
    app.include_router(users_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_allow_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=app_settings.cors_allow_methods,
        allow_headers=app_settings.cors_allow_headers,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.1f} ms)"
        )
        return response

    return app


app = create_app()


def main():
    """
    Start the FastAPI application with uvicorn.
    """
    port = int(settings.server_port)
    host = settings.server_host

    logger.info(f"Starting postboard API server on {host}:{port}")

    try:
        uvicorn.run(
            "main:app" if settings.server_workers > 1 else app,
            host=host,
            port=port,
            workers=settings.server_workers,
        )
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
