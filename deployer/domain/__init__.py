"""Domain models used across application layer boundaries."""

from .models import (
	ApplicationDetail,
	ApplicationState,
	DeploymentOutcome,
	DeploymentStage,
	HealthStatus,
	PushSpec,
	ServiceInstanceSummary,
	ServiceOffering,
	ServicePlan,
	domain_plan_is_free,
)
from .timeline import domain_build_stage_event, domain_elapsed_millis

__all__ = [
	"ApplicationDetail",
	"ApplicationState",
	"DeploymentOutcome",
	"DeploymentStage",
	"HealthStatus",
	"PushSpec",
	"ServiceInstanceSummary",
	"ServiceOffering",
	"ServicePlan",
	"domain_build_stage_event",
	"domain_elapsed_millis",
	"domain_plan_is_free",
]
