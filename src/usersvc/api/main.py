"""
User API Server - FastAPI application.

Design Pattern:
1. create_app() builds one PostgresService (pool) per application
2. Lifespan opens the pool and bootstraps the users table, or exits
3. Add middleware (logging, CORS) in specific order
4. Register exception handlers that render {"error": "<message>"}
5. Register the users router

Middleware Order (runs in reverse):
1. CORS headers (runs first - adds headers to all responses)
2. Request logging

Startup is fatal (process exits) when DATABASE_URL is blank, the database
is unreachable, or the users table cannot be created.

Running:
    # Development (auto-reload)
    usersvc serve --reload

    # Directly with uvicorn
    uvicorn usersvc.api.main:app --host 0.0.0.0 --port 8000
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from .routers import users_router
from ..errors import UserServiceError
from ..services.postgres import PostgresService, get_postgres_service
from ..services.repositories import UserRepository
from ..settings import settings


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log all incoming HTTP requests and responses.

    Logs request method, path and client, then response status and duration.
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        client_host = request.client.host if request.client else "unknown"
        logger.info(f"→ REQUEST: {request.method} {request.url.path} | Client: {client_host}")

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"← RESPONSE: {request.method} {request.url.path} | "
            f"Status: {response.status_code} | "
            f"Duration: {duration_ms:.2f}ms"
        )

        return response


def cors_headers() -> dict[str, str]:
    """CORS headers from settings, shared by the middleware and the 500 handler."""
    return {
        "Access-Control-Allow-Origin": settings.cors.allow_origin,
        "Access-Control-Allow-Methods": settings.cors.allow_methods,
        "Access-Control-Allow-Headers": settings.cors.allow_headers,
    }


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add fixed CORS headers to every response.

    Preflight requests are answered by the OPTIONS routes (204); this
    middleware only decorates responses, so OPTIONS on unknown paths still
    gets a 404/405. Unhandled errors bypass it (they are rendered outside
    the middleware stack), so unhandled_error_handler adds the same headers.
    """

    def __init__(self, app, headers: dict[str, str]):
        super().__init__(app)
        self.cors_headers = headers

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(self.cors_headers)
        return response


async def init_database(db: PostgresService) -> None:
    """
    Open the pool and bootstrap the users table.

    Any failure is fatal: logged at CRITICAL, then SystemExit(1).
    """
    if not db.connection_string.strip():
        logger.critical("DATABASE_URL environment variable is not set or is empty")
        raise SystemExit(1)

    try:
        await db.connect()
    except Exception as e:
        logger.critical(f"Error connecting to database: {e}")
        raise SystemExit(1) from e

    try:
        await UserRepository(db).init_schema()
    except Exception as e:
        logger.critical(f"Error creating users table: {e}")
        await db.disconnect()
        raise SystemExit(1) from e


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Opens the shared pool on startup and closes it on shutdown.
    """
    logger.info(f"Starting User API ({settings.environment})")
    db: PostgresService = app.state.db

    await init_database(db)

    yield

    logger.info("Shutting down User API")
    await db.disconnect()


async def user_service_error_handler(request: Request, exc: UserServiceError) -> JSONResponse:
    """Render domain errors as {"error": message} with their status."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors (unknown path, wrong method) in the same shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the detail, return a generic message."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
        headers=cors_headers(),
    )


def create_app(db: PostgresService | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        db: Optional PostgresService (built from settings if None). The pool
            is not opened until the lifespan starts.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="User API",
        description="CRUD service for users backed by PostgreSQL",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.db = db or get_postgres_service()

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Add CORS middleware LAST (runs first in middleware chain)
    app.add_middleware(
        CORSHeadersMiddleware,
        headers=cors_headers(),
    )

    app.add_exception_handler(UserServiceError, user_service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(users_router)

    return app


# Create application instance
app = create_app()


# Main entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "usersvc.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )
