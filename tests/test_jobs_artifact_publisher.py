"""Regression tests for artifact publishing preconditions and push contract."""

from __future__ import annotations

import pytest

from deployer.adapters import PlatformContractError, PlatformTimeoutError
from deployer.domain import ApplicationState
from deployer.jobs import ArtifactNotFoundError, ArtifactPublisher


@pytest.mark.asyncio
async def test_jobs_artifact_publisher_fails_fast_for_missing_artifact(platform_client, tmp_path) -> None:
    """Raise ArtifactNotFoundError without any remote call when the artifact is missing.

    Args:
        platform_client: Recording platform double fixture.
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate fail-fast behavior.

    Raises:
        AssertionError: Raised when a push request is observed.
    """

    publisher = ArtifactPublisher(platform_client)

    with pytest.raises(ArtifactNotFoundError):
        await publisher.job_publish("demo-app", 1, tmp_path / "missing.jar", defer_start=True)

    assert platform_client.calls == []
    assert platform_client.push_requests == []


@pytest.mark.asyncio
async def test_jobs_artifact_publisher_rejects_directories(platform_client, tmp_path) -> None:
    """Treat a directory path as a missing artifact."""

    publisher = ArtifactPublisher(platform_client)

    with pytest.raises(ArtifactNotFoundError):
        await publisher.job_publish("demo-app", 1, tmp_path, defer_start=True)

    assert platform_client.calls == []


@pytest.mark.asyncio
async def test_jobs_artifact_publisher_pushes_then_fetches_detail_by_name(platform_client, artifact_file) -> None:
    """Push with absolute path and random route, then return the detail for the same name.

    Args:
        platform_client: Recording platform double fixture.
        artifact_file: Readable artifact fixture.

    Returns:
        None: Assertions validate push contract and round-trip identity.

    Raises:
        AssertionError: Raised when push contract is violated.
    """

    publisher = ArtifactPublisher(platform_client)

    detail = await publisher.job_publish("demo-app", 2, artifact_file, defer_start=True)

    assert platform_client.calls == ["push_application", "get_application"]
    push_spec = platform_client.push_requests[0]
    assert push_spec.application_name == "demo-app"
    assert push_spec.artifact_path.is_absolute()
    assert push_spec.artifact_path == artifact_file.absolute()
    assert push_spec.replica_count == 2
    assert push_spec.defer_start is True
    assert push_spec.use_random_route is True
    assert detail.name == "demo-app"
    assert detail.state is ApplicationState.STOPPED


@pytest.mark.asyncio
async def test_jobs_artifact_publisher_rejects_mismatched_application_detail(platform_client, artifact_file) -> None:
    """Raise PlatformContractError when the fetched detail names another application."""

    platform_client.returned_application_name = "ghost-app"
    publisher = ArtifactPublisher(platform_client)

    with pytest.raises(PlatformContractError, match="ghost-app"):
        await publisher.job_publish("demo-app", 1, artifact_file, defer_start=False)


@pytest.mark.asyncio
async def test_jobs_artifact_publisher_rejects_zero_replicas(platform_client, artifact_file) -> None:
    """Reject replica counts below one before any remote call."""

    publisher = ArtifactPublisher(platform_client)

    with pytest.raises(ValueError, match="replica_count"):
        await publisher.job_publish("demo-app", 0, artifact_file, defer_start=True)

    assert platform_client.calls == []


@pytest.mark.asyncio
async def test_jobs_artifact_publisher_does_not_retry_failed_push(platform_client, artifact_file) -> None:
    """Propagate push failures after exactly one attempt."""

    platform_client.failures["push_application"] = PlatformTimeoutError("staging timed out")
    publisher = ArtifactPublisher(platform_client)

    with pytest.raises(PlatformTimeoutError):
        await publisher.job_publish("demo-app", 1, artifact_file, defer_start=True)

    assert platform_client.calls == ["push_application"]
