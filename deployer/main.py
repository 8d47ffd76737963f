"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either runs one deployment
or launches the FastAPI service.
"""

import argparse
import asyncio
from pathlib import Path

import uvicorn

from deployer.bootstrap import (
    bootstrap_create_application,
    bootstrap_create_deployment_config,
    bootstrap_create_deployment_orchestrator,
    bootstrap_create_platform_client,
)
from deployer.config import DeployerSettings, config_load_settings
from deployer.domain import DeploymentOutcome
from deployer.reporting import reporting_configure_logging


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with status 1 when a deployment run fails.
    """

    argument_parser = argparse.ArgumentParser(description="Cloud Foundry application deployer")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="deploy",
        choices=("deploy", "api"),
        help="Runtime command: `deploy` runs one deployment, `api` starts the HTTP trigger server",
        type=str,
    )
    argument_parser.add_argument(
        "--artifact",
        dest="artifact_path",
        type=Path,
        help="Artifact file override (defaults to ARTIFACT or ~/Desktop/in.jar)",
    )
    argument_parser.add_argument("--application-name", dest="application_name", type=str)
    argument_parser.add_argument("--service-instance", dest="service_instance_name", type=str)
    argument_parser.add_argument("--service-offering", dest="service_offering_label", type=str)
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()

    if parsed_arguments.command == "deploy":
        reporting_configure_logging(level=settings.log_level, log_format=settings.log_format)
        outcome = asyncio.run(
            main_run_deployment(
                settings=settings,
                artifact_path=parsed_arguments.artifact_path,
                application_name=parsed_arguments.application_name,
                service_instance_name=parsed_arguments.service_instance_name,
                service_offering_label=parsed_arguments.service_offering_label,
            )
        )
        if not outcome.success:
            raise SystemExit(1)
        return

    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


async def main_run_deployment(
    settings: DeployerSettings,
    artifact_path: Path | None = None,
    application_name: str | None = None,
    service_instance_name: str | None = None,
    service_offering_label: str | None = None,
) -> DeploymentOutcome:
    """Run one deployment and close the platform client afterwards.

    Args:
        settings: Validated runtime settings.
        artifact_path: Optional artifact override.
        application_name: Optional application name override.
        service_instance_name: Optional service instance override.
        service_offering_label: Optional offering label override.

    Returns:
        DeploymentOutcome: Terminal outcome of the run.

    Raises:
        ValueError: Raised when platform settings are invalid.
    """

    deployment_config = bootstrap_create_deployment_config(
        settings,
        artifact_path=artifact_path,
        application_name=application_name,
        service_instance_name=service_instance_name,
        service_offering_label=service_offering_label,
    )
    async with bootstrap_create_platform_client(settings) as platform_client:
        orchestrator = bootstrap_create_deployment_orchestrator(
            platform_client=platform_client,
            config=deployment_config,
        )
        return await orchestrator.job_execute(job_name="deployment_run")


if __name__ == "__main__":
    main()
