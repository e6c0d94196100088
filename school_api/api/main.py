from __future__ import annotations

import asyncio
import logging
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from school_api.core.deps import get_current_session
from school_api.core.logging import configure_logging, correlation_id_var, school_id_var
from school_api.core.settings import get_app_settings
from school_api.db.run_migrations import main as run_alembic
from school_api.db.seed import seed_all
from school_api.db.session import dispose_engine
from school_api.schemas.auth import SessionUser
from school_api.schemas.common import ErrorResponse, MessageResponse

# Routers
from school_api.api.routes.academic import router as academic_router
from school_api.api.routes.dashboard import router as dashboard_router
from school_api.api.routes.employee import router as employee_router
from school_api.api.routes.operations import router as operations_router
from school_api.api.routes.reports import router as reports_router
from school_api.api.routes.students import router as students_router

# Configure structured logging once at import
configure_logging()
logger = logging.getLogger(__name__)

settings = get_app_settings()

openapi_tags = [
    {"name": "Health", "description": "Liveness and session probes."},
    {"name": "Academic", "description": "Attendance sheets and grade lists."},
    {"name": "Students", "description": "Student roster."},
    {"name": "Employees", "description": "Employee listing, summary and school_id back-fill."},
    {"name": "Dashboard", "description": "Per-school dashboard statistics."},
    {"name": "Operations", "description": "Facility maintenance."},
    {"name": "Reports", "description": "Exportable rosters (CSV/Excel/PDF)."},
]

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    openapi_tags=openapi_tags,
)

# CORS - avoid wildcard with credentials
cors_allow_credentials = settings.CORS_ALLOW_CREDENTIALS
if settings.CORS_ORIGINS == ["*"] and cors_allow_credentials:
    logger.warning("CORS_ALLOW_CREDENTIALS=True with '*' origins is not permitted; disabling credentials.")
    cors_allow_credentials = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=cors_allow_credentials,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """
    Bind a correlation id to the request for logging and echo it as 'X-Correlation-ID'.
    """
    corr = request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID") or str(uuid4())
    token_corr = correlation_id_var.set(corr)
    token_school = school_id_var.set(None)
    request.state.correlation_id = corr

    logger.info("Incoming request %s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token_corr)
        school_id_var.reset(token_school)

    response.headers["X-Correlation-ID"] = corr
    return response


def _build_error_response(
    request: Request,
    status_code: int,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    """Build an ErrorResponse JSONResponse; 'details' is omitted when empty."""
    err = ErrorResponse(error=message, details=details)
    headers = {}
    corr = getattr(request.state, "correlation_id", None)
    if corr:
        headers["X-Correlation-ID"] = corr
    return JSONResponse(
        status_code=status_code,
        content=err.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Global handler for HTTP errors raised by guards and handlers.
    """
    if isinstance(exc.detail, str):
        return _build_error_response(request, exc.status_code, exc.detail)
    return _build_error_response(request, exc.status_code, "HTTP Error", details=exc.detail)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Malformed query parameters are client errors and map to 400.
    """
    return _build_error_response(
        request,
        400,
        "Invalid request parameters",
        details=jsonable_encoder(exc.errors()),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler; the cause is logged and never returned to the client.
    """
    logger.exception("Unhandled error processing %s %s", request.method, request.url.path)
    return _build_error_response(request, 500, "Internal server error")


@app.on_event("startup")
async def on_startup() -> None:
    """
    Run migrations and optional seeding on service startup.

    This ensures the database schema is up to date. Seeding is opt-in via settings.
    """
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        try:
            logger.info("Running Alembic migrations: upgrade head")
            # env.py runs its own event loop
            await asyncio.to_thread(run_alembic, ["upgrade", "head"])
            logger.info("Migrations completed.")
        except Exception as exc:
            logger.exception("Migration step failed: %s", exc)

    if settings.AUTO_SEED:
        try:
            logger.info("Seeding demo school...")
            await seed_all()
            logger.info("Seeding completed.")
        except Exception as exc:
            logger.exception("Seeding step failed: %s", exc)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await dispose_engine()


api = APIRouter(prefix="/api")


# PUBLIC_INTERFACE
@api.get(
    "/health",
    response_model=MessageResponse,
    summary="Health Check",
    tags=["Health"],
)
def health_check() -> MessageResponse:
    """
    Basic liveness health check endpoint.

    Returns:
        MessageResponse: Simple confirmation that the service is running.
    """
    return MessageResponse(message="Healthy")


# PUBLIC_INTERFACE
@api.get(
    "/health/session",
    response_model=SessionUser,
    summary="Session Echo",
    description="Echoes the resolved session to verify cookie/bearer handling.",
    tags=["Health"],
)
async def session_health_echo(user: SessionUser = Depends(get_current_session)) -> SessionUser:
    return user


api.include_router(academic_router)
api.include_router(students_router)
api.include_router(employee_router)
api.include_router(dashboard_router)
api.include_router(operations_router)
api.include_router(reports_router)

app.include_router(api)
