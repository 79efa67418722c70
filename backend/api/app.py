"""
FastAPI application factory.

Creates and configures the FastAPI application instance. Every error
leaves the API in one shape:

    {"error": {"code": "...", "message": "...", "details": ...}}
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config import get_settings
from shared.exceptions import CookbookError, RateLimitExceededError, ServerError
from modules.activity.routes import router as activities_router
from modules.auth.routes import router as auth_router
from modules.comments.routes import router as comments_router
from modules.recipes.routes import router as recipes_router

from .middleware.body_size import AuthBodySizeLimit
from .routes import health, users

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    413: "PAYLOAD_TOO_LARGE",
    429: "RATE_LIMIT_EXCEEDED",
    503: "SERVICE_UNAVAILABLE",
}


def error_body(code: str, message: str, details: Optional[Any] = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"error": error}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"({settings.environment}, storage={settings.storage_backend})"
    )
    if not settings.jwt_secret:
        logger.warning("COOKBOOK_JWT_SECRET is not set; sign-in and registration will fail")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


async def handle_cookbook_error(request: Request, exc: CookbookError) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimitExceededError):
        headers = {"Retry-After": str(exc.retry_after)}
    content = exc.to_dict()
    if isinstance(exc, ServerError) and not get_settings().is_development:
        content["error"].pop("details", None)
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        details.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return JSONResponse(
        status_code=400,
        content=error_body("VALIDATION_ERROR", "Invalid request", details),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = HTTP_ERROR_CODES.get(exc.status_code, "SERVER_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    details = str(exc) if get_settings().is_development else None
    return JSONResponse(
        status_code=500,
        content=error_body("SERVER_ERROR", "Server error", details),
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-user recipe manager with soft delete and a live activity feed",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    app.add_exception_handler(CookbookError, handle_cookbook_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.add_middleware(AuthBodySizeLimit)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(recipes_router, prefix="/api/recipes", tags=["recipes"])
    app.include_router(activities_router, prefix="/api/activities", tags=["activities"])
    app.include_router(comments_router, prefix="/api/comments", tags=["comments"])

    return app


# Application instance for uvicorn
app = create_app()
