"""FastAPI application factory for the deployer runtime."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

from fastapi import FastAPI

from deployer.adapters import PlatformHealthPort
from deployer.config import DeployerSettings
from deployer.jobs import JobOrchestratorPort

from .routers import api_create_deployment_router, api_create_health_router


def create_api_application(
    settings: DeployerSettings,
    platform_health_service: PlatformHealthPort,
    deployment_orchestrator: JobOrchestratorPort,
    on_shutdown: Callable[[], Awaitable[None]] | None = None,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated settings used for runtime metadata.
        platform_health_service: Platform health service used by health endpoints.
        deployment_orchestrator: Job orchestrator for deployment trigger execution.
        on_shutdown: Optional coroutine factory awaited when the application stops.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        RuntimeError: Raised if application initialization fails.
    """

    @asynccontextmanager
    async def api_lifespan(_application: FastAPI) -> AsyncIterator[None]:
        yield
        if on_shutdown is not None:
            await on_shutdown()

    application = FastAPI(title="Cloud Foundry Application Deployer", lifespan=api_lifespan)

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal service banner.

        Returns:
            dict[str, str]: Service name, status and environment.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": "cf-app-deployer",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(platform_health_service=platform_health_service))
    application.include_router(api_create_deployment_router(deployment_orchestrator=deployment_orchestrator))

    return application
