"""Application bootstrap wiring for startup validation and dependency assembly."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from fastapi import FastAPI

from deployer.adapters import CloudFoundryPlatformClient
from deployer.api import create_api_application
from deployer.config import DeployerSettings, config_load_settings
from deployer.jobs import DeploymentOrchestrator, DeploymentOrchestratorConfig
from deployer.reporting import StructlogDeploymentReporter, reporting_configure_logging


def bootstrap_create_platform_client(settings: DeployerSettings) -> CloudFoundryPlatformClient:
    """Build the Cloud Foundry platform client from validated settings.

    Args:
        settings: Validated runtime settings.

    Returns:
        CloudFoundryPlatformClient: Platform client; caller owns closing it.

    Raises:
        ValueError: Raised when platform settings are invalid.
    """

    return CloudFoundryPlatformClient(
        api_url=settings.cf_api_url,
        organization_name=settings.cf_organization,
        space_name=settings.cf_space,
        access_token=settings.cf_access_token,
        username=settings.cf_username,
        password=settings.cf_password,
        uaa_url=settings.cf_uaa_url,
        request_timeout_seconds=settings.cf_request_timeout_seconds,
        poll_interval_seconds=settings.cf_poll_interval_seconds,
        poll_timeout_seconds=settings.cf_poll_timeout_seconds,
    )


def bootstrap_create_deployment_config(
    settings: DeployerSettings,
    artifact_path: Path | None = None,
    application_name: str | None = None,
    service_instance_name: str | None = None,
    service_offering_label: str | None = None,
) -> DeploymentOrchestratorConfig:
    """Build deployment defaults from settings with optional per-run overrides.

    Args:
        settings: Validated runtime settings.
        artifact_path: Optional artifact override.
        application_name: Optional application name override.
        service_instance_name: Optional service instance name override.
        service_offering_label: Optional offering label override.

    Returns:
        DeploymentOrchestratorConfig: Deployment configuration.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    config = DeploymentOrchestratorConfig(
        service_offering_label=settings.service_offering_label,
        service_instance_name=settings.service_instance_name,
        application_name=settings.application_name,
        artifact_path=settings.artifact_path,
    )
    overrides: dict[str, object] = {}
    if artifact_path is not None:
        overrides["artifact_path"] = artifact_path.expanduser()
    if application_name:
        overrides["application_name"] = application_name.strip()
    if service_instance_name:
        overrides["service_instance_name"] = service_instance_name.strip()
    if service_offering_label:
        overrides["service_offering_label"] = service_offering_label.strip()
    return replace(config, **overrides) if overrides else config


def bootstrap_create_deployment_orchestrator(
    platform_client: CloudFoundryPlatformClient,
    config: DeploymentOrchestratorConfig,
) -> DeploymentOrchestrator:
    """Build the deployment orchestrator with the structlog reporter.

    Args:
        platform_client: Platform client shared by all stages.
        config: Deployment configuration.

    Returns:
        DeploymentOrchestrator: Fully wired orchestrator instance.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    return DeploymentOrchestrator(
        platform_client=platform_client,
        reporter=StructlogDeploymentReporter(),
        config=config,
    )


def bootstrap_create_application(settings: DeployerSettings | None = None) -> FastAPI:
    """Assemble the API application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    reporting_configure_logging(level=resolved_settings.log_level, log_format=resolved_settings.log_format)
    platform_client = bootstrap_create_platform_client(resolved_settings)
    deployment_orchestrator = bootstrap_create_deployment_orchestrator(
        platform_client=platform_client,
        config=bootstrap_create_deployment_config(resolved_settings),
    )
    return create_api_application(
        settings=resolved_settings,
        platform_health_service=platform_client,
        deployment_orchestrator=deployment_orchestrator,
        on_shutdown=platform_client.platform_close,
    )
