"""Job-layer deployment orchestrator with a strict linear stage sequence."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Awaitable, Callable, TypeVar

from deployer.adapters import (
    BindConflictError,
    PlatformApiError,
    PlatformAuthenticationError,
    PlatformClientPort,
    PlatformConnectionError,
    PlatformContractError,
    PlatformTimeoutError,
)
from deployer.domain import (
    DeploymentOutcome,
    DeploymentStage,
    domain_build_stage_event,
    domain_elapsed_millis,
    domain_plan_is_free,
)

from .app_controller import AppController
from .artifact_publisher import ArtifactNotFoundError, ArtifactPublisher
from .interfaces import DeploymentReporterPort, JobOrchestratorPort, PlanSelector
from .service_binder import ServiceBinder
from .service_provisioner import NoMatchingPlanError, ServiceInstanceNotVisibleError, ServiceProvisioner

_StageResult = TypeVar("_StageResult")


@dataclass(frozen=True)
class DeploymentOrchestratorConfig:
    """Configuration values for configured deployment runs.

    Attributes:
        service_offering_label: Marketplace offering label of the backing service.
        service_instance_name: Service instance to ensure and bind.
        application_name: Application to push and restart.
        artifact_path: Artifact file to upload.
        plan_selector: Predicate choosing the service plan.
    """

    service_offering_label: str
    service_instance_name: str
    application_name: str
    artifact_path: Path
    plan_selector: PlanSelector = field(default=domain_plan_is_free)


class DeploymentOrchestrator(JobOrchestratorPort):
    """Composes provisioning, publishing, binding and restart into one deployment run."""

    _DEPLOYMENT_JOB_NAME = "deployment_run"
    _PUBLISH_REPLICA_COUNT = 1

    def __init__(
        self,
        platform_client: PlatformClientPort,
        reporter: DeploymentReporterPort,
        config: DeploymentOrchestratorConfig | None = None,
    ):
        """Initialize orchestrator dependencies.

        Args:
            platform_client: Platform operations shared by every stage component.
            reporter: Sink invoked exactly once per run with the terminal outcome.
            config: Optional defaults used by `job_execute`.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are missing.
        """

        if platform_client is None:
            raise ValueError("platform_client must not be None")
        if reporter is None:
            raise ValueError("reporter must not be None")

        self._service_provisioner = ServiceProvisioner(platform_client)
        self._artifact_publisher = ArtifactPublisher(platform_client)
        self._service_binder = ServiceBinder(platform_client)
        self._app_controller = AppController(platform_client)
        self._reporter = reporter
        self._config = config

    def job_supported_names(self) -> tuple[str, ...]:
        """Return supported job names.

        Returns:
            tuple[str, ...]: Supported job names.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return (self._DEPLOYMENT_JOB_NAME,)

    async def job_execute(self, job_name: str) -> DeploymentOutcome:
        """Execute the configured deployment run.

        Args:
            job_name: Name of job to execute.

        Returns:
            DeploymentOutcome: Terminal outcome of the run.

        Raises:
            ValueError: Raised when job name is unsupported or no config was provided.
        """

        normalized_job_name = job_name.strip()
        if normalized_job_name != self._DEPLOYMENT_JOB_NAME:
            raise ValueError(f"unsupported job_name={normalized_job_name}")
        if self._config is None:
            raise ValueError("orchestrator was created without a deployment config")

        return await self.job_deploy(
            service_offering=self._config.service_offering_label,
            service_instance_name=self._config.service_instance_name,
            application_name=self._config.application_name,
            artifact_path=self._config.artifact_path,
            plan_selector=self._config.plan_selector,
        )

    async def job_deploy(
        self,
        service_offering: str,
        service_instance_name: str,
        application_name: str,
        artifact_path: Path | str,
        plan_selector: PlanSelector = domain_plan_is_free,
    ) -> DeploymentOutcome:
        """Run ensure, publish, bind and restart in order and report the outcome.

        Each stage starts only after the previous one succeeded. The first
        failure ends the run; side effects of completed stages are left in
        place.

        Args:
            service_offering: Offering label of the backing service.
            service_instance_name: Service instance name.
            application_name: Application name.
            artifact_path: Artifact file to upload.
            plan_selector: Predicate choosing the service plan.

        Returns:
            DeploymentOutcome: Success outcome, or failure outcome carrying the originating error.

        Raises:
            RuntimeError: This method reports failures through the outcome instead of raising.
        """

        started_at = datetime.now(timezone.utc)
        timeline: list[dict[str, object]] = [
            domain_build_stage_event(
                stage=DeploymentStage.START.value,
                status="started",
                details={"application_name": application_name, "service_name": service_instance_name},
            )
        ]
        current_stage = DeploymentStage.START

        try:
            service_instance = await self._job_run_stage(
                timeline,
                DeploymentStage.SERVICE_ENSURED,
                lambda: self._service_provisioner.job_ensure_service_instance(
                    offering_label=service_offering,
                    instance_name=service_instance_name,
                    plan_selector=plan_selector,
                ),
            )
            current_stage = DeploymentStage.SERVICE_ENSURED

            application_detail = await self._job_run_stage(
                timeline,
                DeploymentStage.PUBLISHED,
                lambda: self._artifact_publisher.job_publish(
                    application_name=application_name,
                    replica_count=self._PUBLISH_REPLICA_COUNT,
                    artifact_path=artifact_path,
                    defer_start=True,
                ),
            )
            current_stage = DeploymentStage.PUBLISHED

            await self._job_run_stage(
                timeline,
                DeploymentStage.BOUND,
                lambda: self._service_binder.job_bind(
                    application_name=application_detail.name,
                    instance_name=service_instance.name,
                ),
            )
            current_stage = DeploymentStage.BOUND

            await self._job_run_stage(
                timeline,
                DeploymentStage.RESTARTED,
                lambda: self._app_controller.job_restart(application_detail.name),
            )
            current_stage = DeploymentStage.RESTARTED
        except Exception as error:
            error_code = self._job_error_code_for_exception(error)
            timeline.append(
                domain_build_stage_event(
                    stage=DeploymentStage.FAILED.value,
                    status="failed",
                    details={
                        "last_completed_stage": current_stage.value,
                        "error_code": error_code,
                        "error_type": type(error).__name__,
                        "error_message": str(error),
                    },
                )
            )
            outcome = DeploymentOutcome(
                application_name=application_name,
                service_name=service_instance_name,
                elapsed_millis=domain_elapsed_millis(started_at),
                success=False,
                failure_reason=str(error),
                error=error,
                error_code=error_code,
                final_stage=DeploymentStage.FAILED,
                stage_timeline=timeline,
            )
            self._reporter.reporting_deployment_completed(outcome)
            return outcome

        timeline.append(domain_build_stage_event(stage=DeploymentStage.DEPLOYED.value, status="completed"))
        outcome = DeploymentOutcome(
            application_name=application_detail.name,
            service_name=service_instance.name,
            elapsed_millis=domain_elapsed_millis(started_at),
            success=True,
            final_stage=DeploymentStage.DEPLOYED,
            stage_timeline=timeline,
        )
        self._reporter.reporting_deployment_completed(outcome)
        return outcome

    async def _job_run_stage(
        self,
        timeline: list[dict[str, object]],
        stage: DeploymentStage,
        step: Callable[[], Awaitable[_StageResult]],
    ) -> _StageResult:
        """Await one stage step and record its timeline events.

        Args:
            timeline: Mutable run timeline.
            stage: State reached when the step succeeds.
            step: Factory of the stage coroutine; invoked only when this stage begins.

        Returns:
            _StageResult: Result of the stage step.

        Raises:
            Exception: Any error raised by the step propagates unchanged.
        """

        timeline.append(domain_build_stage_event(stage=stage.value, status="started"))
        stage_started_at = datetime.now(timezone.utc)
        stage_result = await step()
        timeline.append(
            domain_build_stage_event(
                stage=stage.value,
                status="completed",
                details={"stage_duration_ms": domain_elapsed_millis(stage_started_at)},
            )
        )
        return stage_result

    def _job_error_code_for_exception(self, error: Exception) -> str:
        """Map a stage exception to a deterministic deployment failure code.

        Args:
            error: Caught stage exception.

        Returns:
            str: Deterministic error code.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if isinstance(error, ArtifactNotFoundError):
            return "DEPLOY_ARTIFACT_NOT_FOUND"
        if isinstance(error, NoMatchingPlanError):
            return "DEPLOY_NO_MATCHING_PLAN"
        if isinstance(error, ServiceInstanceNotVisibleError):
            return "DEPLOY_SERVICE_NOT_VISIBLE"
        if isinstance(error, BindConflictError):
            return "DEPLOY_BIND_CONFLICT"
        if isinstance(error, PlatformTimeoutError):
            return "DEPLOY_PLATFORM_TIMEOUT"
        if isinstance(error, PlatformConnectionError):
            return "DEPLOY_PLATFORM_CONNECTION"
        if isinstance(error, PlatformAuthenticationError):
            return "DEPLOY_PLATFORM_AUTH"
        if isinstance(error, PlatformContractError):
            return "DEPLOY_CONTRACT_ERROR"
        if isinstance(error, PlatformApiError):
            return "DEPLOY_PLATFORM_ERROR"
        if isinstance(error, ValueError):
            return "DEPLOY_INVALID_REQUEST"
        return "DEPLOY_UNEXPECTED_ERROR"
