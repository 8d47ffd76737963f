"""Shared test doubles for deployment job and API tests."""

from __future__ import annotations

from typing import AsyncIterator

import pytest

from deployer.domain import (
    ApplicationDetail,
    ApplicationState,
    DeploymentOutcome,
    PushSpec,
    ServiceInstanceSummary,
    ServiceOffering,
    ServicePlan,
)


class RecordingPlatformClient:
    """In-memory platform double that records every call in order."""

    def __init__(self):
        """Initialize platform double state.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This double does not raise runtime errors.
        """

        self.calls: list[str] = []
        self.service_instances: list[ServiceInstanceSummary] = []
        self.service_offerings: list[ServiceOffering] = [
            ServiceOffering(
                label="p-mysql",
                plans=(ServicePlan(name="free-tier", is_free=True),),
            )
        ]
        self.create_requests: list[tuple[str, str, str]] = []
        self.push_requests: list[PushSpec] = []
        self.bind_requests: list[tuple[str, str]] = []
        self.restart_requests: list[str] = []
        self.failures: dict[str, Exception] = {}
        self.returned_application_name: str | None = None
        self.create_makes_instance_visible = True

    async def platform_list_service_instances(self) -> AsyncIterator[ServiceInstanceSummary]:
        self._record("list_service_instances")
        for instance in list(self.service_instances):
            yield instance

    async def platform_list_service_offerings(self) -> AsyncIterator[ServiceOffering]:
        self._record("list_service_offerings")
        for offering in list(self.service_offerings):
            yield offering

    async def platform_create_service_instance(self, offering_label: str, plan_name: str, instance_name: str) -> None:
        self._record("create_service_instance")
        self.create_requests.append((offering_label, plan_name, instance_name))
        if self.create_makes_instance_visible:
            self.service_instances.append(ServiceInstanceSummary(name=instance_name))

    async def platform_push_application(self, push_spec: PushSpec) -> None:
        self._record("push_application")
        self.push_requests.append(push_spec)

    async def platform_get_application(self, application_name: str) -> ApplicationDetail:
        self._record("get_application")
        return ApplicationDetail(
            name=self.returned_application_name or application_name,
            state=ApplicationState.STOPPED,
            guid="app-guid",
            instances=1,
        )

    async def platform_bind_service(self, application_name: str, instance_name: str) -> None:
        self._record("bind_service")
        self.bind_requests.append((application_name, instance_name))

    async def platform_restart_application(self, application_name: str) -> None:
        self._record("restart_application")
        self.restart_requests.append(application_name)

    def _record(self, operation: str) -> None:
        """Append the operation to the call log and raise a configured failure.

        Args:
            operation: Operation name.

        Returns:
            None: Records as side effect.

        Raises:
            Exception: Raised when a failure is configured for the operation.
        """

        self.calls.append(operation)
        failure = self.failures.get(operation)
        if failure is not None:
            raise failure


class RecordingReporter:
    """Reporter double capturing every reported outcome."""

    def __init__(self):
        self.outcomes: list[DeploymentOutcome] = []

    def reporting_deployment_completed(self, outcome: DeploymentOutcome) -> None:
        self.outcomes.append(outcome)


@pytest.fixture
def platform_client() -> RecordingPlatformClient:
    """Return a fresh recording platform double.

    Returns:
        RecordingPlatformClient: Platform double with one free `p-mysql` offering.

    Raises:
        RuntimeError: This fixture does not raise runtime errors.
    """

    return RecordingPlatformClient()


@pytest.fixture
def reporter() -> RecordingReporter:
    """Return a fresh recording reporter double."""

    return RecordingReporter()


@pytest.fixture
def artifact_file(tmp_path):
    """Create a small readable artifact file.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        pathlib.Path: Path of the artifact file.

    Raises:
        RuntimeError: This fixture does not raise runtime errors.
    """

    artifact_path = tmp_path / "in.jar"
    artifact_path.write_bytes(b"PK\x03\x04artifact")
    return artifact_path
