"""GRC Dashboard — FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from grc.config import Settings, get_settings
from grc.middleware import (
    configure_cors,
    configure_error_handlers,
    configure_rate_limiting,
    lifespan,
    logging_middleware,
)
from grc.routers import compliance, controls, health, integrations, organizations, risks, users
from grc.services.integrations import OutcomeSource, RandomOutcomeSource


def create_app(settings: Settings | None = None, outcome_source: OutcomeSource | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Governance, risk and compliance tracking for multi-tenant organizations",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Store settings on app state
    app.state.settings = settings
    app.state.outcome_source = outcome_source or RandomOutcomeSource(settings.integration_success_rate)

    # Middleware
    configure_cors(app, settings)
    configure_rate_limiting(app, settings)
    configure_error_handlers(app)
    app.middleware("http")(logging_middleware)

    # Routers
    app.include_router(health.router)
    app.include_router(users.router, prefix=settings.api_prefix)
    app.include_router(organizations.router, prefix=settings.api_prefix)
    app.include_router(risks.router, prefix=settings.api_prefix)
    app.include_router(controls.router, prefix=settings.api_prefix)
    app.include_router(compliance.router, prefix=settings.api_prefix)
    app.include_router(integrations.router, prefix=settings.api_prefix)

    return app


# Default app instance for uvicorn
app = create_app()
