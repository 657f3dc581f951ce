"""FastAPI application entry point."""

import asyncio
import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, AsyncGenerator, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.v1 import router as api_v1_router
from app.config import Settings, get_settings
from app.core.errors import AppError
from app.core.logging import configure_logging
from app.core.security.masking import mask_url
from app.core.security.passwords import PasswordHasher
from app.core.security.tokens import TokenService
from app.db.session import Database, get_database
from app.repositories.users import SQLUserRepository
from app.services.bootstrap import bootstrap_admin_if_needed

logger = logging.getLogger("app.main")

HEALTH_DB_TIMEOUT_SECONDS = 3.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager."""
    settings: Settings = app.state.settings
    # Startup
    if not settings.is_serverless:
        database = Database.from_settings(settings)
        app.state.database = database
        logger.info("Database engine created for %s", mask_url(str(settings.database_url)))
        async with database.session() as session:
            await bootstrap_admin_if_needed(
                settings, SQLUserRepository(session), app.state.password_hasher
            )
    yield
    # Shutdown
    database = getattr(app.state, "database", None)
    if database is not None:
        await database.dispose()


def _error_body(request: Request, status_code: int, message: str, error: str) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "message": message,
        "error": error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
    }


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "Invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Validation failed"


def _request_context(request: Request) -> tuple[str, str, str, str]:
    """Return request id, method, path and the authenticated user id (or "-")."""
    return (
        getattr(request.state, "request_id", "-"),
        request.method,
        request.url.path,
        str(getattr(request.state, "user_id", None) or "-"),
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Attach a request id and log one line per request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id
        start = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.monotonic() - start) * 1000
            logger.error(
                "%s %s -> 500 (%.1fms)",
                request.method,
                request.url.path,
                elapsed_ms,
                extra={"request_id": request_id},
            )
            raise
        elapsed_ms = (time.monotonic() - start) * 1000
        logger.info(
            "%s %s -> %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            extra={"request_id": request_id},
        )
        response.headers["X-Request-ID"] = request_id
        return response


def _install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> Response:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, exc.status_code, exc.message, exc.error),
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        """Give 404/405 from routing the same shape as application errors."""
        phrase = HTTPStatus(exc.status_code).phrase
        message = exc.detail if isinstance(exc.detail, str) else phrase
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, exc.status_code, message, phrase),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
        status_code = HTTPStatus.BAD_REQUEST
        return JSONResponse(
            status_code=status_code,
            content=_error_body(
                request, status_code, _format_validation_errors(exc), status_code.phrase
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        """Log with request context and return a sanitised 500."""
        request_id, method, path, user_id = _request_context(request)
        logger.exception(
            "Unhandled exception on %s %s (user %s): %s",
            method,
            path,
            user_id,
            exc,
            extra={"request_id": request_id},
        )
        status_code = HTTPStatus.INTERNAL_SERVER_ERROR
        return JSONResponse(
            status_code=status_code,
            content=_error_body(request, status_code, "Internal server error", status_code.phrase),
        )


def create_application(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The same factory serves both deployment targets: ``standalone`` builds a
    pooled engine in the lifespan handler, ``serverless`` creates a
    non-pooling engine lazily on the first request that needs it.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Authentication and user management: registration, login, JWT and RBAC",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Read-only after startup
    app.state.settings = settings
    app.state.database = None
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_service = TokenService.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    _install_exception_handlers(app)

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check(request: Request) -> dict[str, Any]:
        """Liveness plus a database round trip."""
        result: dict[str, Any] = {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.app_name,
            "version": settings.app_version,
        }

        try:
            database = get_database(request)
            await asyncio.wait_for(database.ping(), timeout=HEALTH_DB_TIMEOUT_SECONDS)
            result["database"] = "ok"
        except Exception as exc:
            logger.warning("Health check database ping failed: %s", exc)
            result["database"] = "unavailable"
            result["status"] = "degraded"

        return result

    # Include API routers
    app.include_router(api_v1_router, prefix=settings.api_prefix)

    return app


app = create_application()
