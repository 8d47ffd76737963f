"""Job layer package for deployment workflow orchestration boundaries."""

from .app_controller import AppController
from .artifact_publisher import ArtifactNotFoundError, ArtifactPublisher, job_resolve_artifact_path
from .deployment_orchestrator import DeploymentOrchestrator, DeploymentOrchestratorConfig
from .interfaces import DeploymentReporterPort, JobOrchestratorPort, PlanSelector
from .service_binder import ServiceBinder
from .service_provisioner import (
	NoMatchingPlanError,
	ServiceInstanceNotVisibleError,
	ServiceOfferingNotFoundError,
	ServiceProvisioner,
)

__all__ = [
	"AppController",
	"ArtifactNotFoundError",
	"ArtifactPublisher",
	"DeploymentOrchestrator",
	"DeploymentOrchestratorConfig",
	"DeploymentReporterPort",
	"JobOrchestratorPort",
	"NoMatchingPlanError",
	"PlanSelector",
	"ServiceBinder",
	"ServiceInstanceNotVisibleError",
	"ServiceOfferingNotFoundError",
	"ServiceProvisioner",
	"job_resolve_artifact_path",
]
