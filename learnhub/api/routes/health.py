# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoints.

This module provides health and readiness endpoints for the API.
"""

import logging
import time
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from learnhub import __version__
from learnhub.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class ComponentHealth(BaseModel):
    """Individual component health status."""
    status: str = Field(description="Component status")
    backend: str | None = Field(None, description="Backend implementation")
    latency_ms: float | None = Field(None, description="Response latency in ms")
    message: str | None = Field(None, description="Additional status message")


class ComponentsHealth(BaseModel):
    """All components health status."""
    document_store: ComponentHealth | None = None


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")
    components: ComponentsHealth = Field(default_factory=ComponentsHealth)


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    ready: bool = Field(description="Whether the service is ready")
    checks: dict[str, Any] = Field(description="Individual check results")


async def check_document_store(request: Request) -> ComponentHealth:
    """Check the profile document store.

    The in-memory store is always healthy; the Redis store is pinged.
    """
    redis_client = getattr(request.app.state, "redis", None)
    if redis_client is None:
        return ComponentHealth(status="healthy", backend="memory")

    start = time.time()
    if not await redis_client.ping():
        logger.error("Document store health check failed: Redis did not answer")
        return ComponentHealth(status="unhealthy", backend="redis", message="Redis did not answer")

    latency = (time.time() - start) * 1000
    return ComponentHealth(status="healthy", backend="redis", latency_ms=round(latency, 2))


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Check if the API is healthy with component details.

    Returns:
        HealthResponse with detailed status.
    """
    settings = request.app.state.settings
    store_health = await check_document_store(request)

    return HealthResponse(
        status="healthy" if store_health.status == "healthy" else "unhealthy",
        timestamp=utc_now(),
        version=__version__,
        environment=settings.environment,
        uptime_seconds=int(time.time() - _server_start_time),
        components=ComponentsHealth(document_store=store_health),
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> ReadinessResponse:
    """Check if the API is ready to accept traffic."""
    store_health = await check_document_store(request)
    checks = {
        "document_store": {"status": store_health.status, "latency_ms": store_health.latency_ms},
    }
    return ReadinessResponse(ready=store_health.status == "healthy", checks=checks)
