"""Typed interfaces for platform adapter responsibilities."""

from typing import AsyncIterator, Protocol

from deployer.domain import (
    ApplicationDetail,
    HealthStatus,
    PushSpec,
    ServiceInstanceSummary,
    ServiceOffering,
)


class PlatformClientPort(Protocol):
    """Port definition for the application platform operations used by deployment jobs.

    Every method may raise `PlatformApiError` (or one of its subclasses) at any
    point; callers treat such errors as fatal to the current deployment run.
    """

    def platform_list_service_instances(self) -> AsyncIterator[ServiceInstanceSummary]:
        """Stream service instances visible in the target space.

        Returns:
            AsyncIterator[ServiceInstanceSummary]: Asynchronous stream of instance summaries.

        Raises:
            PlatformApiError: Raised when listing fails.
        """

    def platform_list_service_offerings(self) -> AsyncIterator[ServiceOffering]:
        """Stream service offerings from the marketplace with their plans.

        Returns:
            AsyncIterator[ServiceOffering]: Asynchronous stream of offerings.

        Raises:
            PlatformApiError: Raised when listing fails.
        """

    async def platform_create_service_instance(
        self,
        offering_label: str,
        plan_name: str,
        instance_name: str,
    ) -> None:
        """Create one managed service instance.

        Args:
            offering_label: Offering label.
            plan_name: Selected plan name.
            instance_name: Desired service instance name.

        Raises:
            PlatformApiError: Raised when creation fails.
        """

    async def platform_push_application(self, push_spec: PushSpec) -> None:
        """Upload an artifact and register it as a new or updated application.

        Args:
            push_spec: Push request contract.

        Raises:
            PlatformApiError: Raised when any push step fails.
        """

    async def platform_get_application(self, application_name: str) -> ApplicationDetail:
        """Fetch authoritative application detail by name.

        Args:
            application_name: Application name.

        Returns:
            ApplicationDetail: Application detail.

        Raises:
            PlatformResourceNotFoundError: Raised when the application does not exist.
        """

    async def platform_bind_service(self, application_name: str, instance_name: str) -> None:
        """Bind a service instance to an application.

        Args:
            application_name: Application name.
            instance_name: Service instance name.

        Raises:
            BindConflictError: Raised when the binding already exists.
        """

    async def platform_restart_application(self, application_name: str) -> None:
        """Request an application restart.

        Args:
            application_name: Application name.

        Raises:
            PlatformApiError: Raised when the restart request is rejected.
        """


class PlatformHealthPort(Protocol):
    """Port definition for platform reachability checks."""

    def platform_connection_label(self) -> str:
        """Return a stable label for the configured platform target.

        Returns:
            str: Platform target label for diagnostics.

        Raises:
            RuntimeError: Raised when target metadata is unavailable.
        """

    async def platform_check_health(self) -> HealthStatus:
        """Check platform reachability and return deterministic health payload.

        Returns:
            HealthStatus: Platform health status payload.

        Raises:
            ConnectionError: Raised when the platform cannot be reached.
        """
