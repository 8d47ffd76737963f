"""Health endpoint router composition for app and platform checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from deployer.adapters import PlatformApiError, PlatformHealthPort


def api_create_health_router(platform_health_service: PlatformHealthPort) -> APIRouter:
    """Create health-check router with app and platform reachability status.

    Args:
        platform_health_service: Adapter-layer health service interface.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when platform_health_service is invalid.
    """

    if platform_health_service is None:
        raise ValueError("platform_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    async def api_health_status() -> JSONResponse:
        """Return application and platform health state.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.

        Raises:
            RuntimeError: Raised if the health payload cannot be built.
        """

        try:
            platform_health = await platform_health_service.platform_check_health()
            payload = {
                "status": "ok",
                "app": "up",
                "platform": platform_health.status,
                "detail": platform_health.detail,
                "target": platform_health_service.platform_connection_label(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_200_OK)
        except (PlatformApiError, ConnectionError, TimeoutError) as error:
            payload = {
                "status": "degraded",
                "app": "up",
                "platform": "down",
                "detail": str(error),
                "target": platform_health_service.platform_connection_label(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return router
