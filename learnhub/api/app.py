# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the LearnHub API.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from learnhub import __version__
from learnhub.api.routes import health
from learnhub.api.v1 import router as v1_router
from learnhub.core.config import Settings, get_settings
from learnhub.domains.auth.jwt import IdentityTokenManager
from learnhub.domains.auth.password import PasswordHasher
from learnhub.domains.identity.google import GoogleTokenVerifier
from learnhub.domains.identity.local import LocalIdentityBackend
from learnhub.domains.profile.redis_store import RedisDocumentStore
from learnhub.domains.profile.store import DocumentStore, InMemoryDocumentStore
from learnhub.infrastructure.cache import RedisClient, RedisError
from learnhub.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def build_identity_backend(settings: Settings) -> LocalIdentityBackend:
    """Create the identity backend described by the settings."""
    return LocalIdentityBackend(
        IdentityTokenManager(settings.jwt),
        PasswordHasher(rounds=settings.identity.bcrypt_rounds),
        min_password_length=settings.identity.provider_min_password_length,
        federated_verifier=GoogleTokenVerifier(settings.identity.google_client_id),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Connects the Redis document store when it is configured and no store was
    injected, and closes it on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting LearnHub API",
        extra={"environment": settings.environment, "debug": settings.debug},
    )

    # =========================================================================
    # Startup
    # =========================================================================

    if app.state.document_store is None:
        if settings.store.backend == "redis":
            redis_client = RedisClient(settings)
            try:
                await redis_client.connect()
                logger.info("Redis connection initialized")
            except RedisError as e:
                logger.warning("Failed to initialize Redis: %s", str(e))
            app.state.redis = redis_client
            app.state.document_store = RedisDocumentStore(redis_client)
        else:
            app.state.document_store = InMemoryDocumentStore()
        logger.info("Document store: %s", settings.store.backend)

    yield

    # =========================================================================
    # Shutdown
    # =========================================================================

    redis_client = app.state.redis
    if redis_client is not None:
        try:
            await redis_client.close()
            logger.info("Redis connection closed")
        except RedisError as e:
            logger.warning("Error closing Redis: %s", str(e))

    logger.info("Shutting down LearnHub API")


def create_app(
    settings: Settings | None = None,
    identity_backend: LocalIdentityBackend | None = None,
    document_store: DocumentStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. Defaults to get_settings().
        identity_backend: Identity backend to use instead of a new one.
        document_store: Document store to use instead of the configured one.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="LearnHub API",
        description="Learning platform session and registration backend",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # =========================================================================
    # State
    # =========================================================================
    app.state.settings = settings
    app.state.identity_backend = identity_backend or build_identity_backend(settings)
    app.state.document_store = document_store
    app.state.redis = None

    # =========================================================================
    # Middleware
    # =========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app
