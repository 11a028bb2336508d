"""
Exchange Relay - Kea to Azure OpenAI
FastAPI application relaying chat completions with CORS support.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from exchange_relay.api.routers import api_router, home_router
from exchange_relay.config.settings import get_settings
from exchange_relay.middleware.cors import CorsPolicyMiddleware
from exchange_relay.middleware.error_handling import ErrorHandlingMiddleware
from exchange_relay.middleware.request_logging import RequestLoggingMiddleware

API_PREFIX = "/kea/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager."""
    settings = get_settings()
    logging.info(f"Starting {settings.app_name} version {settings.relay_version}")

    # Chat requests re-check this per call; startup only reports it
    missing = [
        name
        for name, value in (
            ("AOAI_ENDPOINT", settings.aoai_endpoint),
            ("AOAI_API_VERSION", settings.aoai_api_version),
            ("AOAI_API_KEY", settings.aoai_api_key),
        )
        if not value
    ]
    if missing:
        logging.error(f"Azure OpenAI configuration missing! Check {', '.join(missing)}")
    else:
        logging.info(f"Azure OpenAI configured for environment: {settings.environment}")

    yield

    logging.info("Shutting down...")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Exchange Relay",
        description="Minimal relay forwarding Kea chat requests to Azure OpenAI",
        version=settings.relay_version,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # Last added runs first: logging -> CORS -> error handling -> routes,
    # so error responses still get CORS headers.
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(CorsPolicyMiddleware)
    app.add_middleware(RequestLoggingMiddleware, enabled=settings.enable_request_logging)

    app.include_router(home_router)
    app.include_router(api_router, prefix=API_PREFIX)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
