"""RiskBoard — FastAPI application entry point."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from riskboard.api.dashboard import router as dashboard_router
from riskboard.api.risks import router as risks_router
from riskboard.config import Settings, settings as default_settings
from riskboard.database import Database
from riskboard.errors import register_exception_handlers
from riskboard.logging_config import setup_logging
from riskboard.seed import seed_default_risks
from riskboard.store import RiskStore

logger = logging.getLogger("riskboard")

SERVICE_NAME = "riskboard"
VERSION = "0.1.0"


def _startup_checks(app_settings: Settings) -> None:
    """Log warnings for misconfigured settings."""
    if app_settings.is_production and not app_settings.cors_origins_list:
        logger.warning("⚠  APP_ENV=production but CORS_ORIGINS is empty")

    if app_settings.is_production and app_settings.is_sqlite:
        logger.warning("⚠  APP_ENV=production with SQLite; use PostgreSQL for reliability")

    if not app_settings.rate_limit_enabled:
        logger.info("○ Rate limiting disabled (RATE_LIMIT_ENABLED=false)")
    if not app_settings.seed_default_risks:
        logger.info("○ Default risk seeding disabled (SEED_DEFAULT_RISKS=false)")


async def _open_database(app_settings: Settings) -> Database:
    database = Database(app_settings.database_url)
    if app_settings.auto_create_schema:
        await database.create_schema()
    else:
        logger.info("Skipping Base.metadata.create_all (AUTO_CREATE_SCHEMA=false)")

    if app_settings.seed_default_risks:
        async with database.sessionmaker() as session:
            await seed_default_risks(RiskStore(session))
    return database


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup / shutdown lifecycle."""
        setup_logging(app_settings.log_level)
        _startup_checks(app_settings)

        app.state.database = await _open_database(app_settings)
        logger.info("✦ RiskBoard API started")
        logger.info(f"  Database: {app_settings.database_url_masked}")

        yield

        await app.state.database.dispose()
        logger.info("✦ RiskBoard API shutting down")

    app = FastAPI(
        title="RiskBoard",
        description="GRC risk assessment register — scoring, heatmap and summary statistics",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    register_exception_handlers(app)

    # Rate limiting
    app.state.limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[app_settings.rate_limit_default],
        enabled=app_settings.rate_limit_enabled,
    )
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    # Request tracing + access log middleware
    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()

        response: Response = await call_next(request)

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response

    # Security headers middleware
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if app_settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Routers
    app.include_router(risks_router)
    app.include_router(dashboard_router)

    @app.get("/")
    async def root():
        return JSONResponse(
            {
                "service": SERVICE_NAME,
                "status": "ok",
                "endpoints": {
                    "assess": "/assess-risk",
                    "risks": "/risks",
                    "stats": "/stats",
                    "heatmap": "/heatmap",
                    "health": "/health",
                    "docs": "/docs",
                },
            }
        )

    @app.get("/health")
    async def health_check(request: Request):
        database: Database | None = getattr(request.app.state, "database", None)
        database_ready = await database.ping() if database is not None else False
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "version": VERSION,
            "database_ready": database_ready,
        }

    @app.get("/health/ready")
    async def readiness_check(request: Request, response: Response):
        database: Database | None = getattr(request.app.state, "database", None)
        ready = await database.ping() if database is not None else False
        if not ready:
            response.status_code = 503
        return {
            "status": "ready" if ready else "not_ready",
            "checks": {"database": ready},
        }

    return app


app = create_app()


def run() -> None:
    """Serve the module-level app with uvicorn."""
    import uvicorn

    uvicorn.run("riskboard.main:app", host=default_settings.host, port=default_settings.port)
