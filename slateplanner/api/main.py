"""FastAPI application factory."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from slateplanner import __version__
from slateplanner.api.routers import estimate, plans
from slateplanner.core.logging import setup_logging
from slateplanner.core.observability import configure_observability
from slateplanner.core.plans import get_catalog
from slateplanner.core.rate_limiter import setup_rate_limiting
from slateplanner.core.settings import get_settings


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)
    # fail at start-up on a broken catalog file rather than on first request
    get_catalog()

    app = FastAPI(title=settings.app_name, version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_rate_limiting(app)
    configure_observability(app)

    app.include_router(estimate.router)
    app.include_router(plans.router)

    @app.get("/healthz", tags=["monitoring"])
    def healthcheck() -> dict[str, str]:  # pragma: no cover - simple endpoint
        return {"status": "ok"}

    return app


__all__ = ["create_app"]
