from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meetdesk.api.bookings import router as bookings_router
from meetdesk.api.health import router as health_router
from meetdesk.api.orgs import router as orgs_router
from meetdesk.api.signup import router as signup_router
from meetdesk.core.config import SETTINGS, Settings
from meetdesk.core.logging import setup_logging
from meetdesk.middleware.metrics import MetricsMiddleware
from meetdesk.middleware.request_context import (
    RequestContextMiddleware,
    install_request_context_filter,
)
from meetdesk.services.conference_provider import (
    ConferenceProvider,
    provider_from_settings,
)
from meetdesk.services.store import OrgStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings = SETTINGS,
    *,
    store: OrgStore | None = None,
    conference_provider: ConferenceProvider | None = None,
) -> FastAPI:
    """Build the application with its own, empty session store.

    ``conference_provider`` overrides the one derived from settings.
    """
    app = FastAPI(
        title="meetdesk",
        docs_url="/docs" if settings.is_dev else None,
        redoc_url="/redoc" if settings.is_dev else None,
    )

    app.state.settings = settings
    app.state.store = store if store is not None else OrgStore()
    app.state.conference_provider = (
        conference_provider
        if conference_provider is not None
        else provider_from_settings(settings)
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Middleware execution order: last-added runs first (outermost layer).
    # RequestContext (outermost) → Metrics → CORS → route handler
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestContextMiddleware)

    app.include_router(health_router)
    app.include_router(signup_router)
    app.include_router(orgs_router)
    app.include_router(bookings_router)

    return app


# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
install_request_context_filter()

app = create_app()

logger.info(
    "meetdesk started  env=%s log_level=%s port=%d docs=%s conference=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "on" if SETTINGS.is_dev else "off",
    "on" if SETTINGS.conference_enabled else "off",
)
