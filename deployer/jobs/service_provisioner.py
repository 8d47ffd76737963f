"""Service instance provisioning with an existence check before creation."""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Callable, TypeVar

import structlog

from deployer.adapters import PlatformClientPort
from deployer.domain import ServiceInstanceSummary, ServiceOffering, ServicePlan, domain_plan_is_free

from .interfaces import PlanSelector

logger = structlog.get_logger(__name__)

_StreamItem = TypeVar("_StreamItem")


class NoMatchingPlanError(LookupError):
    """Raised when no plan of the matched offering satisfies the plan selector."""


class ServiceOfferingNotFoundError(NoMatchingPlanError):
    """Raised when no marketplace offering matches the requested label."""


class ServiceInstanceNotVisibleError(RuntimeError):
    """Raised when a just-created service instance is not returned by the existence lookup."""


class ServiceProvisioner:
    """Guarantees a named service instance exists, creating it when absent."""

    def __init__(self, platform_client: PlatformClientPort):
        """Initialize provisioner dependencies.

        Args:
            platform_client: Platform operations used for lookup and creation.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when platform_client is missing.
        """

        if platform_client is None:
            raise ValueError("platform_client must not be None")
        self._platform_client = platform_client

    async def job_ensure_service_instance(
        self,
        offering_label: str,
        instance_name: str,
        plan_selector: PlanSelector = domain_plan_is_free,
    ) -> ServiceInstanceSummary:
        """Return the named service instance, creating it from a selected plan if missing.

        The existence lookup and the offering lookup run concurrently; creation
        is only attempted when the existence lookup is empty, so repeated calls
        never create twice once the instance exists.

        Args:
            offering_label: Offering label, matched case-insensitively.
            instance_name: Service instance name, matched case-insensitively.
            plan_selector: Predicate choosing the plan to provision.

        Returns:
            ServiceInstanceSummary: Existing or newly created instance.

        Raises:
            ValueError: Raised when label or name are blank.
            ServiceOfferingNotFoundError: Raised when no offering matches the label.
            NoMatchingPlanError: Raised when no plan satisfies the selector.
            ServiceInstanceNotVisibleError: Raised when the created instance cannot be found.
            PlatformApiError: Raised when a platform call fails.
        """

        normalized_offering_label = offering_label.strip()
        normalized_instance_name = instance_name.strip()
        if not normalized_offering_label:
            raise ValueError("offering_label must not be blank")
        if not normalized_instance_name:
            raise ValueError("instance_name must not be blank")

        existing_instances, matching_offerings = await asyncio.gather(
            self._job_find_instances(normalized_instance_name),
            _job_collect(
                self._platform_client.platform_list_service_offerings(),
                lambda offering: offering.label.casefold() == normalized_offering_label.casefold(),
            ),
        )
        if existing_instances:
            logger.info("service_instance_exists", instance_name=existing_instances[0].name)
            return existing_instances[0]

        if not matching_offerings:
            raise ServiceOfferingNotFoundError(f"no service offering matches label '{normalized_offering_label}'")
        offering = matching_offerings[0]
        selected_plan = self._job_select_plan(offering=offering, plan_selector=plan_selector)

        logger.info(
            "service_instance_creating",
            offering_label=offering.label,
            plan_name=selected_plan.name,
            instance_name=normalized_instance_name,
        )
        await self._platform_client.platform_create_service_instance(
            offering_label=offering.label,
            plan_name=selected_plan.name,
            instance_name=normalized_instance_name,
        )

        created_instances = await self._job_find_instances(normalized_instance_name)
        if not created_instances:
            raise ServiceInstanceNotVisibleError(
                f"service instance '{normalized_instance_name}' was created but is not listed"
            )
        return created_instances[0]

    async def _job_find_instances(self, instance_name: str) -> list[ServiceInstanceSummary]:
        return await _job_collect(
            self._platform_client.platform_list_service_instances(),
            lambda instance: instance.domain_matches_name(instance_name),
        )

    def _job_select_plan(self, offering: ServiceOffering, plan_selector: PlanSelector) -> ServicePlan:
        """Select the first plan of the offering accepted by the selector.

        Args:
            offering: Matched service offering.
            plan_selector: Plan predicate.

        Returns:
            ServicePlan: First accepted plan in offering order.

        Raises:
            NoMatchingPlanError: Raised when the selector rejects every plan.
        """

        for plan in offering.plans:
            if plan_selector(plan):
                return plan
        raise NoMatchingPlanError(f"no plan of offering '{offering.label}' satisfies the plan selector")


async def _job_collect(
    stream: AsyncIterator[_StreamItem],
    predicate: Callable[[_StreamItem], bool],
) -> list[_StreamItem]:
    """Drain an asynchronous stream keeping items accepted by the predicate."""

    return [item async for item in stream if predicate(item)]
