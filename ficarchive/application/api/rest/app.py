import logging
import secrets
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from ficarchive.application.api.v1.errors import register_error_handlers
from ficarchive.application.api.v1.lifecycle import RequestLifecycleMiddleware
from ficarchive.application.api.v1.routes import (
    admin,
    health,
    pages,
    questions,
    sessions,
    tags,
    users,
)
from ficarchive.application.di import create_container
from ficarchive.config import Config, configure_logging
from ficarchive.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app.state.dishka_container.close()


def _session_secret(config: Config) -> str:
    if config.session.secret_key:
        return config.session.secret_key
    if config.server.environment == "production":
        logger.error("ARCHIVE_SESSION__SECRET_KEY is not set; sessions will not survive a restart")
    else:
        logger.warning("No session secret configured, using a random one")
    return secrets.token_urlsafe(32)


def create_app(config: Config | None = None, container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting archive: %s v%s", config.server.name, config.server.version)

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    logfire.instrument_fastapi(app_instance)

    # Middleware added last runs first: session, then DI container, then lifecycle hooks
    app_instance.add_middleware(
        RequestLifecycleMiddleware, secure_cookies=config.session.https_only
    )
    setup_dishka(container or create_container(config), app_instance)
    app_instance.add_middleware(
        SessionMiddleware,
        secret_key=_session_secret(config),
        session_cookie=config.session.cookie_name,
        same_site=config.session.same_site,
        https_only=config.session.https_only,
    )

    app_instance.include_router(health.router)
    app_instance.include_router(pages.router)
    app_instance.include_router(sessions.router)
    app_instance.include_router(users.router)
    app_instance.include_router(admin.router)
    app_instance.include_router(tags.router)
    app_instance.include_router(questions.router)

    register_error_handlers(app_instance, config)

    return app_instance
