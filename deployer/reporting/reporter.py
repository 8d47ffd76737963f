"""Deployment outcome reporter writing one structured log event per run."""

from __future__ import annotations

import structlog

from deployer.domain import DeploymentOutcome
from deployer.jobs import DeploymentReporterPort


class StructlogDeploymentReporter(DeploymentReporterPort):
    """Reports deployment completion through structlog."""

    def __init__(self, logger: structlog.typing.FilteringBoundLogger | None = None):
        self._logger = logger or structlog.get_logger("deployer.deployment")

    def reporting_deployment_completed(self, outcome: DeploymentOutcome) -> None:
        """Emit `deployment_completed` on success or `deployment_failed` on failure.

        Args:
            outcome: Terminal outcome of the run.

        Returns:
            None: Logs as side effect.

        Raises:
            RuntimeError: This reporter does not raise runtime errors.
        """

        if outcome.success:
            self._logger.info(
                "deployment_completed",
                application_name=outcome.application_name,
                service_name=outcome.service_name,
                elapsed_ms=outcome.elapsed_millis,
                message=(
                    f"your application '{outcome.application_name}' has been deployed and bound to the service "
                    f"'{outcome.service_name}'. It took {outcome.elapsed_millis} ms to complete."
                ),
            )
            return

        self._logger.error(
            "deployment_failed",
            application_name=outcome.application_name,
            service_name=outcome.service_name,
            elapsed_ms=outcome.elapsed_millis,
            error_code=outcome.error_code,
            failure_reason=outcome.failure_reason,
        )
