"""
main.py — Link-in-bio FastAPI application entry point.

Start with: uvicorn linkinbio.main:app --reload --port 8000
(run from the repository root)
"""
import logging
import os
import subprocess
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pydantic.json_schema import models_json_schema
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkinbio.config import settings
from linkinbio.errors import (
    VALIDATION_FAILED,
    PayloadInvalid,
    ResourceNotFound,
    Unauthenticated,
    error_response,
    flatten_errors,
)

# ---------------------------------------------------------------------------
# Logging: configured before anything else
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


def run_migrations() -> None:
    """Apply Alembic migrations up to head (alembic.ini lives beside this file)."""
    package_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=True,
        text=True,
        cwd=package_dir,
    )
    if result.returncode != 0:
        logger.error("Alembic migration failed:\n%s", result.stderr)
        raise RuntimeError(f"Alembic migration failed: {result.stderr}")
    msg = result.stdout.strip() or "No pending migrations"
    logger.info("Alembic: %s", msg)


# ---------------------------------------------------------------------------
# Lifespan: startup & shutdown hooks
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
      1. Run Alembic migrations (unless RUN_MIGRATIONS_ON_STARTUP=false)
      2. Initialize Redis connection pool (studio drafts)
    Shutdown:
      1. Close Redis pool
    """
    if settings.run_migrations_on_startup:
        run_migrations()

    from linkinbio.cache import create_redis_pool
    app.state.redis = await create_redis_pool()

    logger.info("Link-in-bio v%s starting up", settings.app_version)
    yield

    await app.state.redis.aclose()
    logger.info("Redis connection pool closed")
    logger.info("Link-in-bio shutting down")


# ---------------------------------------------------------------------------
# FastAPI application instance
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Link-in-Bio API",
    version=settings.app_version,
    description=(
        "Link-in-bio micro-site service: owner CRUD for profiles, links, blocks, "
        "digital products, orders, affiliates and subscriptions, plus public profile pages."
    ),
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Global exception handlers: registered BEFORE routers
# ---------------------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema violations in body/query → 400 with every issue, grouped by field."""
    return error_response(VALIDATION_FAILED, 400, issues=flatten_errors(exc.errors()))


@app.exception_handler(ValidationError)
async def model_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Bodies validated inside a route (type-dependent ?type= payloads)."""
    return error_response(VALIDATION_FAILED, 400, issues=flatten_errors(exc.errors()))


@app.exception_handler(PayloadInvalid)
async def payload_invalid_handler(request: Request, exc: PayloadInvalid) -> JSONResponse:
    return error_response(exc.message, 400, issues=exc.issues)


@app.exception_handler(ResourceNotFound)
async def not_found_handler(request: Request, exc: ResourceNotFound) -> JSONResponse:
    return error_response(str(exc), 404)


@app.exception_handler(Unauthenticated)
async def unauthenticated_handler(request: Request, exc: Unauthenticated) -> JSONResponse:
    return error_response("Unauthorized", 401)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Unique / foreign-key violations that slipped past the explicit checks."""
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return error_response("Request conflicts with existing data", 400)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(str(exc.detail), exc.status_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all for unexpected errors.
    DEBUG=true  → includes exception type & message (dev only).
    DEBUG=false → generic message; full traceback logged server-side only.
    """
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        exc_info=True,
    )
    if settings.debug:
        return error_response("Internal server error", 500, detail=f"{type(exc).__name__}: {exc}")
    return error_response("Internal server error", 500)


# ---------------------------------------------------------------------------
# Health endpoint (no auth required)
# ---------------------------------------------------------------------------
@app.get("/api/health", tags=["System"])
async def health_check() -> dict:
    return {
        "status": "ok",
        "version": settings.app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ---------------------------------------------------------------------------
# Resource routers
# ---------------------------------------------------------------------------
from linkinbio.resources.profiles.routes import router as profiles_router
from linkinbio.resources.links.routes import router as links_router
from linkinbio.resources.blocks.routes import router as blocks_router
from linkinbio.resources.products.routes import router as products_router
from linkinbio.resources.orders.routes import router as orders_router
from linkinbio.resources.affiliates.routes import router as affiliates_router
from linkinbio.resources.subscriptions.routes import router as subscriptions_router
from linkinbio.resources.templates.routes import router as templates_router
from linkinbio.resources.analytics.routes import router as analytics_router
from linkinbio.studio.routes import router as studio_router
from linkinbio.public.routes import router as public_router

app.include_router(profiles_router)
app.include_router(links_router)
app.include_router(blocks_router)
app.include_router(products_router)
app.include_router(orders_router)
app.include_router(affiliates_router)
app.include_router(subscriptions_router)
app.include_router(templates_router)
app.include_router(analytics_router)
app.include_router(studio_router)

# Catch-all /{username}; must stay last.
app.include_router(public_router)


# ---------------------------------------------------------------------------
# OpenAPI document
# ---------------------------------------------------------------------------
from linkinbio.resources.common import typed_body_models


def custom_openapi() -> dict:
    """Generated document plus the schemas of ?type=-dispatched request bodies."""
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    _, extra = models_json_schema(
        [(model, "validation") for model in typed_body_models()],
        ref_template="#/components/schemas/{model}",
    )
    components = schema.setdefault("components", {}).setdefault("schemas", {})
    for name, definition in extra.get("$defs", {}).items():
        components.setdefault(name, definition)
    app.openapi_schema = schema
    return schema


app.openapi = custom_openapi
