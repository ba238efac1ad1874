import logging
import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from commgate import __version__
from commgate.api.dependencies import get_provider_clients
from commgate.api.errors import gateway_error_handler, request_validation_handler
from commgate.api.routes import chat, email, health, media, sms, voice, webhooks
from commgate.core.domain.errors import GatewayError

# Configure logging based on LOGLEVEL environment variable
loglevel = os.getenv("LOGLEVEL", "INFO").upper()
log_level_map = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}
log_level = log_level_map.get(loglevel, logging.INFO)

# Configure Python logging
logging.basicConfig(level=log_level, format="%(message)s")

# Configure structlog with the same level
structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build provider clients before serving and close them on shutdown.

    Missing credentials raise here, so the server never accepts a
    connection without them.
    """
    provide_clients = app.dependency_overrides.get(get_provider_clients, get_provider_clients)
    clients = provide_clients()
    await logger.ainfo(
        "fastapi.startup",
        message="Communication gateway starting...",
        version=__version__,
    )
    yield
    await logger.ainfo("fastapi.shutdown", message="Communication gateway shutting down...")
    await clients.aclose()
    get_provider_clients.cache_clear()


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Communication Gateway API",
        description=(
            "Single HTTP facade over conversation, SMS, voice "
            "and transactional email providers"
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(chat.router, tags=["chat"])
    app.include_router(media.router, tags=["media"])
    app.include_router(sms.router, tags=["sms"])
    app.include_router(voice.router, tags=["voice"])
    app.include_router(email.router, tags=["email"])
    app.include_router(webhooks.router)
    app.include_router(health.router, tags=["health"])

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
