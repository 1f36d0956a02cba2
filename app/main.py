"""
LegalEase File - FastAPI Application
Court document analysis, emergency-filing validation and filing records
for the Massachusetts courts.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.database import close_db, init_db
from app.core.logging_config import setup_logging
from app.routers import cases, catalog, courts, documents, emergency, filings, health


# =============================================================================
# Lifespan (Startup/Shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger = logging.getLogger(__name__)

    await init_db()
    logger.info(
        "%s %s started (default court %s, emergency judge %s)",
        settings.app_name,
        settings.app_version,
        settings.default_court_id,
        settings.emergency_judge,
    )
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set: uploads will be stored without AI analysis")

    yield

    await close_db()
    logger.info("%s stopped", settings.app_name)


# =============================================================================
# Application Factory
# =============================================================================

def create_app() -> FastAPI:
    """
    Application factory.
    Creates and configures the FastAPI application.
    """
    settings = get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Document compliance analysis and CM/ECF filing support for Massachusetts courts.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
    )

    # =========================================================================
    # Rate Limiting
    # =========================================================================
    from app.core.rate_limit import setup_rate_limiting
    setup_rate_limiting(app, settings)

    # =========================================================================
    # Middleware (order matters - first added = last to run)
    # =========================================================================

    # Request timeout (prevents hung requests)
    from app.core.timeout import TimeoutMiddleware
    app.add_middleware(TimeoutMiddleware, timeout=settings.request_timeout_seconds)

    # Request logging and X-Request-Id
    from app.core.logging_middleware import RequestLoggingMiddleware
    app.add_middleware(RequestLoggingMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================
    from app.core.errors import setup_exception_handlers
    setup_exception_handlers(app)

    # =========================================================================
    # Register Routers
    # =========================================================================
    app.include_router(health.router)
    app.include_router(documents.router, prefix="/api")
    app.include_router(emergency.router, prefix="/api")
    app.include_router(courts.router, prefix="/api")
    app.include_router(catalog.router, prefix="/api")
    app.include_router(filings.router, prefix="/api")
    app.include_router(cases.router, prefix="/api")

    return app


# Create the app instance
app = create_app()


# =============================================================================
# Development Server
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
