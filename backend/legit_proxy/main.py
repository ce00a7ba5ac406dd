"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import router, register_error_handlers
from .api.routes import get_upstream_config, get_legit_client
from .config import get_settings
from . import __version__

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - handles startup and shutdown."""
    # Startup
    logger.info("Starting Legit App Proxy...")
    config = get_upstream_config()

    if not config.base_url:
        logger.warning("LEGIT_APP_API_URL is not set - upstream calls will fail")
    if not config.secret_key:
        logger.warning("LEGIT_APP_DEVELOPER_SECRET_KEY is not set - upstream will reject calls")

    # Keep one pooled upstream client for the process
    client = get_legit_client()
    logger.info(f"API ready - Version {__version__}, upstream {config.base_url}")

    yield

    # Shutdown
    logger.info("Shutting down Legit App Proxy...")
    await client.aclose()
    get_legit_client.cache_clear()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
## Legit App Proxy

Server-side pass-through to the Legit App authentication API.

### Features
- **Catalog**: categories, brands, models and authentication sets
- **Image Upload**: relay product photos to the upstream asset store
- **Authentication**: submit authentications and additional photos
- **Webhook**: acknowledge upstream event notifications

Failures are always returned as `{"message": ..., "details": ...}` with the
upstream status code, or 500 when the upstream API could not be reached.
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": "Legit App Proxy",
            "version": __version__,
            "docs": "/docs"
        }

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured port."""
    settings = get_settings()
    uvicorn.run(
        "legit_proxy.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
