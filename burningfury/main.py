#!/usr/bin/env python3
"""
BurningFury API - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Wires routes, the authentication gate and error handlers

All business logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Optional

import httpx
import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from burningfury import __version__
from burningfury.config.provider import ConfigProvider, EnvConfigProvider
from burningfury.logging_config import configure_logging, get_logging_config
from burningfury.modules.api.auth_routes import create_auth_router
from burningfury.modules.api.errors import register_exception_handlers
from burningfury.modules.api.feedback import create_feedback_router
from burningfury.modules.api.players import create_players_router
from burningfury.modules.api.public_players import create_public_players_router
from burningfury.modules.auth.factory import AuthFactory
from burningfury.modules.auth.service import AuthenticationService
from burningfury.modules.feedback import FeedbackService, SlidingWindowRateLimiter
from burningfury.modules.middleware import AnonymousAwareAuthMiddleware, RouteVisibilityTable, allow_anonymous
from burningfury.modules.players import PlayerStore
from burningfury.modules.storage import StorageModule

logger = logging.getLogger(__name__)


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    redis_client=None,
    http_client: Optional[httpx.AsyncClient] = None,
    auth_service: Optional[AuthenticationService] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config_provider: Configuration source (environment by default)
        redis_client: Pre-built Redis client; otherwise one is created at startup
        http_client: Pre-built HTTP client for the feedback webhook
        auth_service: Pre-built authentication pipeline; otherwise built from config

    Returns:
        Configured FastAPI application
    """
    config_provider = config_provider or EnvConfigProvider()
    api_config = config_provider.get_api_config()
    auth_config = config_provider.get_auth_config()
    feedback_config = config_provider.get_feedback_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - initialize and cleanup resources.
        """
        logger.info("Starting BurningFury API...")

        storage = None
        client = redis_client
        if client is None:
            storage = StorageModule(config_provider.get_storage_config())
            client = await storage.connect()

        webhook_client = http_client or httpx.AsyncClient(timeout=feedback_config.timeout_seconds)

        app.state.player_store = PlayerStore(client)
        app.state.feedback_rate_limiter = SlidingWindowRateLimiter(
            client,
            limit=feedback_config.rate_limit,
            window_seconds=feedback_config.rate_window_seconds,
        )
        app.state.feedback_service = FeedbackService(webhook_client, feedback_config.webhook_url)

        logger.info("BurningFury API started successfully")

        yield

        logger.info("Shutting down BurningFury API...")
        if http_client is None:
            await webhook_client.aclose()
        if storage:
            await storage.disconnect()
        logger.info("BurningFury API shutdown complete")

    visibility = RouteVisibilityTable()
    gate = AnonymousAwareAuthMiddleware(
        auth_service=auth_service or AuthFactory.build(config_provider),
        visibility=visibility,
        suppress_challenge=auth_config.suppress_challenge,
    )

    app = FastAPI(
        title="BurningFury API",
        description="API for managing BurningFury players with bearer token and API key authentication",
        version=__version__,
        lifespan=lifespan,
        dependencies=[Depends(gate.enforce)],
    )

    register_exception_handlers(app, expose_details=api_config.is_development)

    routers = [
        create_auth_router(config_provider.get_auth0_config(), api_config),
        create_players_router(),
        create_public_players_router(),
        create_feedback_router(),
    ]
    for router in routers:
        visibility.register(router.routes)
        app.include_router(router)

    @app.get("/health")
    @allow_anonymous
    async def health():
        """Liveness probe."""
        return {"status": "Healthy", "timestamp": datetime.now(UTC).isoformat()}

    # App-level routes; included routers were registered above
    visibility.register(app.router.routes)
    app.middleware("http")(gate)

    # CORS outermost so preflight requests never reach the gate
    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


if __name__ == "__main__":
    provider = EnvConfigProvider()
    api_config = provider.get_api_config()
    configure_logging(api_config.log_level)
    uvicorn.run(
        create_app(provider),
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        log_config=get_logging_config(api_config.log_level),
    )
