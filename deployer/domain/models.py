"""Typed domain models shared across runtime layers.

This module provides immutable data contracts exchanged between the platform
adapter, the deployment job components, and the outer API/entrypoint surfaces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class ServicePlan:
    """One tier of a platform service offering.

    Attributes:
        name: Plan name as published by the service broker.
        is_free: Whether the plan is advertised as free of charge.
    """

    name: str
    is_free: bool


@dataclass(frozen=True)
class ServiceOffering:
    """Catalog entry describing a service type and its plans.

    Attributes:
        label: Offering label used to address the service type.
        plans: Ordered plans published for the offering.
    """

    label: str
    plans: tuple[ServicePlan, ...] = ()


@dataclass(frozen=True)
class ServiceInstanceSummary:
    """Provisioned service instance identified by name within the target space.

    Attributes:
        name: Service instance name.
    """

    name: str

    def domain_matches_name(self, candidate_name: str) -> bool:
        """Return whether the instance name matches the candidate case-insensitively.

        Args:
            candidate_name: Name to compare against.

        Returns:
            bool: True when names are equal ignoring case.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return self.name.casefold() == candidate_name.casefold()


@dataclass(frozen=True)
class PushSpec:
    """Input contract for one application push request.

    Attributes:
        application_name: Target application name.
        artifact_path: Absolute path of the artifact to upload.
        replica_count: Number of application instances, at least one.
        defer_start: Whether the application is left stopped after upload.
        use_random_route: Whether a random externally-reachable route is mapped.
    """

    application_name: str
    artifact_path: Path
    replica_count: int = 1
    defer_start: bool = False
    use_random_route: bool = True

    def __post_init__(self) -> None:
        if not self.application_name.strip():
            raise ValueError("application_name must not be blank")
        if self.replica_count < 1:
            raise ValueError("replica_count must be >= 1")


class ApplicationState(str, Enum):
    """Application lifecycle state reported by the platform."""

    STOPPED = "STOPPED"
    STARTED = "STARTED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def domain_from_platform(cls, value: object) -> ApplicationState:
        """Map a raw platform state value onto the enum.

        Args:
            value: Raw state value from the platform payload.

        Returns:
            ApplicationState: Matching state, or UNKNOWN for unrecognized values.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        normalized_value = str(value or "").strip().upper()
        for state in cls:
            if state.value == normalized_value:
                return state
        return cls.UNKNOWN


@dataclass(frozen=True)
class ApplicationDetail:
    """Authoritative application detail returned by the platform after push.

    Attributes:
        name: Application name.
        state: Current lifecycle state.
        guid: Platform identifier of the application.
        instances: Requested instance count of the web process.
        urls: Routes mapped to the application.
    """

    name: str
    state: ApplicationState
    guid: str = ""
    instances: int = 0
    urls: tuple[str, ...] = ()


class DeploymentStage(str, Enum):
    """Linear deployment state machine positions."""

    START = "start"
    SERVICE_ENSURED = "service_ensured"
    PUBLISHED = "published"
    BOUND = "bound"
    RESTARTED = "restarted"
    DEPLOYED = "deployed"
    FAILED = "failed"


@dataclass(frozen=True)
class DeploymentOutcome:
    """Terminal result of one deployment run.

    Attributes:
        application_name: Deployed application name.
        service_name: Service instance bound to the application.
        elapsed_millis: Wall-clock duration of the run in milliseconds.
        success: Whether every stage completed.
        failure_reason: Message of the originating error when failed.
        error: Originating exception when failed.
        error_code: Deterministic failure code when failed.
        final_stage: Terminal state machine position.
        stage_timeline: Structured stage events captured during the run.
    """

    application_name: str
    service_name: str
    elapsed_millis: int
    success: bool
    failure_reason: str | None = None
    error: Exception | None = None
    error_code: str | None = None
    final_stage: DeploymentStage = DeploymentStage.DEPLOYED
    stage_timeline: list[dict[str, object]] = field(default_factory=list)

    def domain_to_payload(self) -> dict[str, object]:
        """Return a JSON-serializable representation of the outcome.

        Returns:
            dict[str, object]: Outcome payload without the exception object.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return {
            "status": "success" if self.success else "failed",
            "application_name": self.application_name,
            "service_name": self.service_name,
            "elapsed_ms": self.elapsed_millis,
            "final_stage": self.final_stage.value,
            "error_code": self.error_code,
            "failure_reason": self.failure_reason,
        }


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for platform reachability.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


def domain_plan_is_free(plan: ServicePlan) -> bool:
    """Default plan selector choosing free tiers.

    Args:
        plan: Candidate service plan.

    Returns:
        bool: True when the plan is free.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return plan.is_free
