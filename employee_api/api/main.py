from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import partial
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_api.container import Container, ContainerProvider, build_file_container
from employee_api.core.access import Identity
from employee_api.core.deps import get_optional_user
from employee_api.core.exceptions import AppError
from employee_api.core.logging import configure_logging, correlation_id_var
from employee_api.core.settings import DEFAULT_JWT_SECRET, AppSettings, get_app_settings
from employee_api.schemas.common import ErrorResponse

# Routers
from employee_api.api.routes.auth import router as auth_router
from employee_api.api.routes.employees import router as employees_router

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "Health", "description": "Liveness probe."},
    {"name": "System", "description": "API index."},
    {"name": "Auth", "description": "Login, registration and current user."},
    {"name": "Employees", "description": "Employee records, availability checks and statistics."},
]

API_ENDPOINTS = {
    "auth": {
        "login": "POST /api/auth/login",
        "register": "POST /api/auth/register",
        "profile": "GET /api/auth/me",
        "logout": "POST /api/auth/logout",
    },
    "employees": {
        "getAll": "GET /api/employees",
        "getById": "GET /api/employees/:id",
        "create": "POST /api/employees (Admin)",
        "update": "PUT /api/employees/:id (Admin)",
        "delete": "DELETE /api/employees/:id (Admin)",
        "checkUsername": "GET /api/employees/check/username (Admin)",
        "checkEmail": "GET /api/employees/check/email (Admin)",
        "stats": "GET /api/employees/stats (Admin)",
    },
}


def _build_error_response(
    request: Request,
    status_code: int,
    message: str,
    errors: Optional[List[Any]] = None,
    detail: Any | None = None,
) -> JSONResponse:
    """Build a standardized ErrorResponse JSONResponse."""
    err = ErrorResponse(
        message=message,
        errors=errors,
        detail=detail,
        correlation_id=getattr(request.state, "correlation_id", None),
        path=request.url.path,
        method=request.method,
        timestamp=datetime.now(tz=timezone.utc),
    )
    return JSONResponse(
        status_code=status_code,
        content=err.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def _field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    result = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        result.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    return result


def _register_exception_handlers(app: FastAPI, settings: AppSettings) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """Typed domain failures map to their fixed status code and message."""
        if exc.status_code >= 500:
            # File paths and similar specifics stay in the log
            logger.error("%s: %s", type(exc).__name__, exc.message)
            detail = None
            if not settings.is_production:
                detail = {"type": type(exc).__name__, "error": exc.message}
            return _build_error_response(request, exc.status_code, exc.default_message, detail=detail)
        return _build_error_response(request, exc.status_code, exc.message, errors=exc.errors)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies or query parameters."""
        return _build_error_response(request, 400, "Validation Error", errors=_field_errors(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Framework-level HTTP errors (unknown route, wrong method)."""
        if exc.status_code == 404:
            message = "Route not found"
        else:
            message = exc.detail if isinstance(exc.detail, str) else "HTTP Error"
        return _build_error_response(request, exc.status_code, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        """
        Catch-all handler returning a generic 500. Outside production the
        exception type and message are included for debugging.
        """
        logger.exception("Unhandled error processing request")
        detail = None
        if not settings.is_production:
            detail = {"type": type(exc).__name__, "error": str(exc)}
        return _build_error_response(request, 500, "Internal Server Error", detail=detail)


# PUBLIC_INTERFACE
def create_app(
    settings: Optional[AppSettings] = None,
    container: Optional[Container] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Parameters:
        settings: application settings. When omitted, the container's settings
            are used, or the environment's when there is no container either.
        container: repositories/services to serve. Defaults to JSON file
            stores under DATA_DIR, built from `settings` on the first request.
    """
    if settings is None:
        settings = container.settings if container is not None else get_app_settings()
    elif container is not None and container.settings != settings:
        logger.warning("Container was built with different settings; tokens follow the container's.")
    provider = ContainerProvider(partial(build_file_container, settings), container)

    if settings.is_production and settings.JWT_SECRET_KEY == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET_KEY is the built-in default; set a real secret in production.")

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.state.container_provider = provider

    # CORS - avoid wildcard with credentials
    cors_allow_credentials = settings.CORS_ALLOW_CREDENTIALS
    if settings.CORS_ORIGINS == ["*"] and cors_allow_credentials:
        logger.warning("CORS_ALLOW_CREDENTIALS=True with '*' origins is not permitted; disabling credentials.")
        cors_allow_credentials = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """
        Attach a correlation_id to the request for logging and error responses.
        Adds 'X-Correlation-ID' to every response.
        """
        corr = request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID") or str(uuid4())
        token_corr = correlation_id_var.set(corr)
        request.state.correlation_id = corr

        logger.info("Incoming request %s %s", request.method, request.url.path)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token_corr)
        response.headers["X-Correlation-ID"] = corr
        return response

    _register_exception_handlers(app, settings)

    # PUBLIC_INTERFACE
    @app.get("/health", summary="Health Check", tags=["Health"])
    def health_check() -> Dict[str, str]:
        """Basic liveness health check endpoint."""
        return {
            "status": "OK",
            "message": f"{settings.APP_NAME} is running",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    api = APIRouter(prefix="/api")

    # PUBLIC_INTERFACE
    @api.get("", summary="API index", tags=["System"])
    def api_index(user: Optional[Identity] = Depends(get_optional_user)) -> Dict[str, Any]:
        """
        List the available endpoints. Works with or without a token; when a
        valid token is supplied the caller's identity is echoed back.
        """
        return {
            "success": True,
            "message": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "endpoints": API_ENDPOINTS,
            "authenticated": user is not None,
            "user": user.as_dict() if user else None,
        }

    api.include_router(auth_router)
    api.include_router(employees_router)
    app.include_router(api)

    logger.info("Application ready (%s)", settings.ENVIRONMENT)
    return app


# Configure structured logging once at import
configure_logging(get_app_settings().LOG_LEVEL)

app = create_app()
