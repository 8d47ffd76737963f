"""Regression tests for service binding and application restart components."""

from __future__ import annotations

import pytest

from deployer.adapters import BindConflictError, PlatformApiError
from deployer.jobs import AppController, ServiceBinder


@pytest.mark.asyncio
async def test_jobs_service_binder_binds_without_pre_check(platform_client) -> None:
    """Issue exactly one bind request and return True."""

    binder = ServiceBinder(platform_client)

    assert await binder.job_bind("demo-app", "demo-db") is True
    assert platform_client.calls == ["bind_service"]
    assert platform_client.bind_requests == [("demo-app", "demo-db")]


@pytest.mark.asyncio
async def test_jobs_service_binder_surfaces_bind_conflict(platform_client) -> None:
    """Propagate the platform conflict when the pair is already bound.

    Args:
        platform_client: Recording platform double fixture.

    Returns:
        None: Assertions validate conflict propagation.

    Raises:
        AssertionError: Raised when the conflict is swallowed.
    """

    platform_client.failures["bind_service"] = BindConflictError("already bound", status_code=422)
    binder = ServiceBinder(platform_client)

    with pytest.raises(BindConflictError):
        await binder.job_bind("demo-app", "demo-db")


@pytest.mark.asyncio
async def test_jobs_app_controller_restarts_once(platform_client) -> None:
    """Issue exactly one restart request and return True."""

    controller = AppController(platform_client)

    assert await controller.job_restart("demo-app") is True
    assert platform_client.restart_requests == ["demo-app"]


@pytest.mark.asyncio
async def test_jobs_app_controller_propagates_platform_error_unchanged(platform_client) -> None:
    """Raise the exact platform error instance."""

    failure = PlatformApiError("restart rejected", status_code=500)
    platform_client.failures["restart_application"] = failure
    controller = AppController(platform_client)

    with pytest.raises(PlatformApiError) as error_info:
        await controller.job_restart("demo-app")

    assert error_info.value is failure


def test_jobs_components_reject_missing_platform_client() -> None:
    """Reject construction without a platform client."""

    with pytest.raises(ValueError):
        ServiceBinder(None)
    with pytest.raises(ValueError):
        AppController(None)
