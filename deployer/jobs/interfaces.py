"""Typed interfaces for job-layer orchestration responsibilities."""

from typing import Callable, Protocol

from deployer.domain import DeploymentOutcome, ServicePlan

PlanSelector = Callable[[ServicePlan], bool]


class DeploymentReporterPort(Protocol):
    """Port definition for reporting the terminal outcome of one deployment run."""

    def reporting_deployment_completed(self, outcome: DeploymentOutcome) -> None:
        """Report one terminal deployment outcome.

        Args:
            outcome: Terminal outcome of the run, successful or failed.

        Raises:
            RuntimeError: Raised when the reporting sink is unavailable.
        """


class JobOrchestratorPort(Protocol):
    """Port definition for orchestrating deployment jobs."""

    def job_supported_names(self) -> tuple[str, ...]:
        """Return the set of workflow names this orchestrator can execute.

        Returns:
            tuple[str, ...]: Deterministic list of supported job names.

        Raises:
            RuntimeError: Raised when supported job metadata is unavailable.
        """

    async def job_execute(self, job_name: str) -> DeploymentOutcome:
        """Execute one named workflow in the job layer.

        Args:
            job_name: Workflow name.

        Returns:
            DeploymentOutcome: Terminal outcome payload.

        Raises:
            ValueError: Raised when the job name is unsupported.
        """
