"""Service instance binding to a deployed application."""

from __future__ import annotations

from deployer.adapters import PlatformClientPort


class ServiceBinder:
    """Attaches a provisioned service instance to an application.

    No existing-binding check is performed; binding an already-bound pair
    surfaces the platform's `BindConflictError`.
    """

    def __init__(self, platform_client: PlatformClientPort):
        if platform_client is None:
            raise ValueError("platform_client must not be None")
        self._platform_client = platform_client

    async def job_bind(self, application_name: str, instance_name: str) -> bool:
        """Bind the named service instance to the named application.

        Args:
            application_name: Application name.
            instance_name: Service instance name.

        Returns:
            bool: Always True once the platform accepted the binding.

        Raises:
            BindConflictError: Raised when the binding already exists.
            PlatformApiError: Raised when the platform call fails.
        """

        await self._platform_client.platform_bind_service(
            application_name=application_name,
            instance_name=instance_name,
        )
        return True
