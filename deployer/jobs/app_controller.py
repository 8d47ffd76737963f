"""Application lifecycle control."""

from __future__ import annotations

from deployer.adapters import PlatformClientPort


class AppController:
    """Restarts an application so bound resources take effect."""

    def __init__(self, platform_client: PlatformClientPort):
        if platform_client is None:
            raise ValueError("platform_client must not be None")
        self._platform_client = platform_client

    async def job_restart(self, application_name: str) -> bool:
        """Request a restart and return once the platform accepted it.

        Args:
            application_name: Application name.

        Returns:
            bool: Always True once the restart was accepted.

        Raises:
            PlatformApiError: Raised unchanged when the platform rejects the restart.
        """

        await self._platform_client.platform_restart_application(application_name)
        return True
