"""Artifact upload as a new or updated platform application."""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from deployer.adapters import PlatformClientPort, PlatformContractError
from deployer.domain import ApplicationDetail, PushSpec

logger = structlog.get_logger(__name__)


class ArtifactNotFoundError(FileNotFoundError):
    """Raised when the artifact to publish does not exist or cannot be read."""


class ArtifactPublisher:
    """Pushes an artifact and returns the authoritative application detail."""

    def __init__(self, platform_client: PlatformClientPort):
        if platform_client is None:
            raise ValueError("platform_client must not be None")
        self._platform_client = platform_client

    async def job_publish(
        self,
        application_name: str,
        replica_count: int,
        artifact_path: Path | str,
        defer_start: bool,
    ) -> ApplicationDetail:
        """Upload the artifact with a random route and return the application detail.

        Args:
            application_name: Target application name.
            replica_count: Number of instances, at least one.
            artifact_path: Artifact file location.
            defer_start: Leave the application stopped after upload when True.

        Returns:
            ApplicationDetail: Detail fetched by name after the push.

        Raises:
            ArtifactNotFoundError: Raised before any remote call when the artifact is missing or unreadable.
            ValueError: Raised when name is blank or replica count is below one.
            PlatformContractError: Raised when the fetched detail names a different application.
            PlatformApiError: Raised when a platform call fails.
        """

        resolved_artifact_path = job_resolve_artifact_path(artifact_path)
        push_spec = PushSpec(
            application_name=application_name.strip(),
            artifact_path=resolved_artifact_path,
            replica_count=replica_count,
            defer_start=defer_start,
            use_random_route=True,
        )

        logger.info(
            "application_pushing",
            application_name=push_spec.application_name,
            artifact_path=str(push_spec.artifact_path),
            replica_count=push_spec.replica_count,
            defer_start=push_spec.defer_start,
        )
        await self._platform_client.platform_push_application(push_spec)
        application_detail = await self._platform_client.platform_get_application(push_spec.application_name)
        if application_detail.name != push_spec.application_name:
            raise PlatformContractError(
                f"pushed application '{push_spec.application_name}' but platform returned '{application_detail.name}'"
            )
        return application_detail


def job_resolve_artifact_path(artifact_path: Path | str) -> Path:
    """Validate that the artifact is an existing readable file and return its absolute path.

    Args:
        artifact_path: Candidate artifact location; `~` is expanded.

    Returns:
        Path: Absolute artifact path.

    Raises:
        ArtifactNotFoundError: Raised when the path is missing, not a file, or unreadable.
    """

    candidate_path = Path(artifact_path).expanduser()
    if not candidate_path.is_file():
        raise ArtifactNotFoundError(f"artifact '{candidate_path}' does not exist or is not a file")
    if not os.access(candidate_path, os.R_OK):
        raise ArtifactNotFoundError(f"artifact '{candidate_path}' is not readable")
    return candidate_path.absolute()
