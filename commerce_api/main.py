"""Commerce API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CommerceError -> uniform JSON envelope
    - CORS and session cookie configured from settings (not hardcoded)
    - Database, feature flags and service container initialized on startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - SessionMiddleware (signed cookie) backs both admin and store sessions
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from commerce_api.api.dependencies import get_feature_flags
from commerce_api.api.error_handlers import register_error_handlers
from commerce_api.api.routes import (
    admin_auth,
    admin_currencies,
    admin_shipping_options,
    health,
    store_auth,
    store_customers,
)
from commerce_api.config import get_settings
from commerce_api.infrastructure import database
from commerce_api.infrastructure.observability import setup_logging
from commerce_api.services import get_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    flags = get_feature_flags()
    get_services()
    logger.info(
        "Commerce API started (feature flags: %s, policy: %s)",
        ", ".join(flags.enabled_flags()) or "none",
        settings.feature_flag_policy.value,
    )
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Commerce API shutting down")


app = FastAPI(
    title="Commerce API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.cookie_secret,
    session_cookie=settings.session_cookie_name,
    max_age=settings.session_max_age_seconds,
    https_only=settings.session_https_only,
)

# Routes - explicit registration
app.include_router(health.router)
app.include_router(admin_auth.router)
app.include_router(admin_currencies.router)
app.include_router(admin_shipping_options.router)
app.include_router(store_auth.router)
app.include_router(store_customers.router)

register_error_handlers(app)
