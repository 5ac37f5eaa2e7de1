"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dosing.presentation import router as dosing_router
from iam.application.services.session_trust_gate import DEV_BYPASS_ENVIRONMENTS
from iam.dependencies.user import (
    DEV_USER_ID_HEADER,
    SSO_PAYLOAD_HEADER,
    SSO_SIGNATURE_HEADER,
)
from infrastructure.database.dependencies import (
    check_database_connection,
    close_database_connections,
    init_database,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.settings import get_app_settings, get_sso_settings
from infrastructure.version import __version__


def validate_startup_settings(probe: StartupProbe) -> None:
    """Check settings that must hold before the app accepts traffic.

    Raises:
        RuntimeError: If production is configured without an SSO secret
    """
    app_settings = get_app_settings()
    sso_settings = get_sso_settings()

    if not sso_settings.has_secret:
        if app_settings.is_production:
            raise RuntimeError(
                "PEPPLANNER_SSO_SECRET (or DISCOURSE_SSO_SECRET) must be set in production"
            )
        probe.sso_secret_missing(environment=app_settings.environment)

    if sso_settings.allow_unsigned_payloads:
        probe.unsigned_payloads_enabled()

    if app_settings.environment in DEV_BYPASS_ENVIRONMENTS:
        probe.dev_bypass_enabled(environment=app_settings.environment)


@asynccontextmanager
async def pepplanner_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration and settings validation
    - Database engine lifecycle (created on startup, disposed on shutdown)
    """
    app_settings = get_app_settings()
    configure_logging(app_settings.log_level)

    probe = DefaultStartupProbe()
    probe.application_starting(
        environment=app_settings.environment, version=__version__
    )
    validate_startup_settings(probe)
    init_database()

    try:
        yield
    finally:
        await close_database_connections()
        probe.application_stopped()


app = FastAPI(
    title=get_app_settings().app_name,
    description="Dosing-schedule tracker gated by Discourse SSO",
    version=__version__,
    lifespan=pepplanner_lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_app_settings().cors_origin],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        SSO_PAYLOAD_HEADER,
        SSO_SIGNATURE_HEADER,
        DEV_USER_ID_HEADER,
    ],
)

# Include Dosing bounded context routes
app.include_router(dosing_router, prefix="/api")


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/api/health")
async def health_db() -> JSONResponse:
    """Check database connection health with ``SELECT 1``."""
    if await check_database_connection():
        return JSONResponse({"status": "ok", "database": "connected"})
    return JSONResponse(
        {"status": "error", "database": "disconnected"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
