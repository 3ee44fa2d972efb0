"""
Launchpad hypermedia API application.

Main application entry point with all routers and middleware.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from launchpad.api import api_keys_router, auth_router, root_router, sessions_router, users_router
from launchpad.core.constants import (
    API_DESCRIPTION,
    API_TITLE,
    API_VERSION,
    CONTACT_NAME,
    CONTACT_URL,
    CORS_ALLOW_CREDENTIALS,
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    CORS_ALLOW_ORIGINS,
    CORS_EXPOSE_HEADERS,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    ENV_HOST,
    ENV_PORT,
    SERVER_START_MESSAGE,
    SHUTDOWN_MESSAGE,
    STARTUP_MESSAGE,
)
from launchpad.core.error_handlers import register_exception_handlers
from launchpad.core.logging_config import configure_logging, request_logging_middleware
from launchpad.routing.registration import build_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def application_lifespan(app: FastAPI):
    """Log startup and shutdown around the application's lifetime."""
    logger.info(STARTUP_MESSAGE)
    yield
    logger.info(SHUTDOWN_MESSAGE)


def create_fastapi_application() -> FastAPI:
    return FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        contact={
            "name": CONTACT_NAME,
            "url": CONTACT_URL,
        },
        lifespan=application_lifespan,
    )


def configure_cors_middleware(application: FastAPI) -> None:
    """Configure CORS middleware with constants."""
    application.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=CORS_ALLOW_CREDENTIALS,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
        expose_headers=CORS_EXPOSE_HEADERS,
    )


API_ROUTERS = (root_router, auth_router, users_router, api_keys_router, sessions_router)


def register_api_routers(application: FastAPI) -> None:
    """Register all API routers with the application."""
    for api_router in API_ROUTERS:
        application.include_router(api_router)


def create_app() -> FastAPI:
    """
    Create and configure the application.

    The route table is built last, once every router is included, so that
    adapters can reverse-route to any named endpoint.
    """
    configure_logging()

    application = create_fastapi_application()
    configure_cors_middleware(application)
    application.middleware("http")(request_logging_middleware)
    register_exception_handlers(application)
    register_api_routers(application)

    application.state.router = build_router(API_ROUTERS)
    return application


def get_server_configuration() -> tuple[str, int]:
    """Get server host and port from environment variables."""
    host = os.getenv(ENV_HOST, DEFAULT_HOST)
    port = int(os.getenv(ENV_PORT, DEFAULT_PORT))
    return host, port


def start_development_server() -> None:
    """Start development server with configuration from environment."""
    import uvicorn

    host, port = get_server_configuration()
    logger.info(f"{SERVER_START_MESSAGE} on {host}:{port}")

    uvicorn.run(
        "launchpad.main:app",
        host=host,
        port=port,
        reload=True,
        log_level=DEFAULT_LOG_LEVEL,
    )


app = create_app()


if __name__ == "__main__":
    start_development_server()
