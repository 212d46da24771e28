from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from maintenance_portal.api.v1.router import router as api_v1_router
from maintenance_portal.config.settings import settings
from maintenance_portal.core.logging import get_logger, setup_logging
from maintenance_portal.core.middleware import register_exception_handlers, register_middlewares
from maintenance_portal.db.init_db import init_db, seed_demo_profiles

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    - Serves locally stored uploads when the upload base URL is a path.
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    origins = settings.get_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register shared core middlewares (request ID, timing, error logging)
    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    if settings.UPLOAD_BASE_URL.startswith("/"):
        app.mount(
            settings.UPLOAD_BASE_URL,
            StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
            name="uploads",
        )

    @app.get("/health", tags=["Health"])
    def health() -> dict:
        return {"status": "ok", "app": settings.APP_NAME, "version": settings.API_VERSION}

    # Schema creation for dev/demo only; production uses migrations
    @app.on_event("startup")
    async def on_startup() -> None:
        if not settings.is_production():
            init_db()
            seed_demo_profiles()
            logger.info("Development database ready", extra={"environment": settings.ENVIRONMENT})

    return app


app = create_app()
