#!/usr/bin/env python3

"""
Main application entry point for the Sales Activity Reports service.

Architecture: FastAPI application with database, role-based report access and LLM summaries.
Key Features: Lifecycle management, database health checks, error handling, CORS configuration.
"""

import asyncio
import sys

# Add this block to switch asyncio event loop policy on Windows
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

import errno
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.auth import router as auth_router
from app.api.http import router as http_router
from app.api.permissions import router as permissions_router
from app.api.reports import router as reports_router
from app.api.users import router as users_router
from app.config import settings
from app.db import check_db_connection, close_db, init_db
from app.exceptions import ReportingError
from app.services.authenticator import ensure_initial_admin
from app.services.llm_service import close_all_llm_clients, initialize_all_llm_clients
from app.services.user_service import reconcile_orphans
from app.utils.logger import setup_logger

logger = setup_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Prepare providers and the database before serving, release them on shutdown.
    """
    logger.info("Application startup...")
    try:
        initialize_all_llm_clients()

        logger.info("Initializing database...")
        await init_db()
        logger.info("Database initialization complete.")

        logger.info("Checking database connectivity...")
        await check_db_connection()

        await ensure_initial_admin()
        await reconcile_orphans()

    except Exception as e:
        logger.critical(f"Startup error: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    logger.info("Sales Activity Reports API startup successful.")

    yield

    logger.info("Sales Activity Reports API shutdown...")
    await close_all_llm_clients()
    await close_db()
    logger.info("Shutdown complete.")


def create_app():
    app = FastAPI(title="Sales Activity Reports API", lifespan=lifespan)

    @app.exception_handler(ReportingError)
    async def reporting_error_handler(request: Request, exc: ReportingError):
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
            headers=exc.headers,
        )

    @app.exception_handler(OSError)
    async def oserror_exception_handler(request: Request, exc: OSError):
        logger.error(
            f"OSError caught: {exc}, errno: {exc.errno}, winerror: {getattr(exc, 'winerror', None)}"
        )
        is_timeout_or_refused = False
        if hasattr(exc, "winerror") and exc.winerror == 121:
            is_timeout_or_refused = True
        elif exc.errno in [errno.ETIMEDOUT, errno.ECONNREFUSED]:
            is_timeout_or_refused = True

        if is_timeout_or_refused:
            logger.error(
                f"Returning 503 due to DB connection issue: {settings.db_unavailable_hint}"
            )
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"detail": settings.db_unavailable_hint},
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": f"An unexpected OS error occurred: {exc}"},
        )

    app.include_router(http_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(permissions_router)
    app.include_router(reports_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    return app


app = create_app()


def main():
    """
    Start the FastAPI application with uvicorn.
    """
    port = int(settings.server_port)
    host = settings.server_host

    logger.info(f"Starting Sales Activity Reports API server on {host}:{port}")

    try:
        if settings.server_workers > 1:
            # Multiple workers need an import string instead of an app instance.
            uvicorn.run("main:app", host=host, port=port, workers=settings.server_workers)
        else:
            uvicorn.run(app, host=host, port=port)
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
