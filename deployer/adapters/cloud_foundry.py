"""Cloud Foundry v3 API adapter implementation for deployment operations."""

from __future__ import annotations

import asyncio
import re
import time
from typing import Any, AsyncIterator, Awaitable, Callable, Final
from uuid import uuid4

import httpx
import structlog

from deployer.domain import (
    ApplicationDetail,
    ApplicationState,
    HealthStatus,
    PushSpec,
    ServiceInstanceSummary,
    ServiceOffering,
    ServicePlan,
)

from .interfaces import PlatformClientPort, PlatformHealthPort
from .platform_errors import (
    BindConflictError,
    PlatformApiError,
    PlatformAuthenticationError,
    PlatformConnectionError,
    PlatformContractError,
    PlatformResourceNotFoundError,
    PlatformTimeoutError,
)

logger = structlog.get_logger(__name__)


class CloudFoundryPlatformClient(PlatformClientPort, PlatformHealthPort):
    """Adapter implementation for the Cloud Foundry v3 REST API."""

    _USER_AGENT: Final[str] = "cf-app-deployer/1.0 (Python/httpx)"
    _UAA_CLIENT_ID: Final[str] = "cf"
    _WEB_PROCESS_TYPE: Final[str] = "web"
    _BIND_CONFLICT_STATUS_CODE: Final[int] = 422
    _JOB_COMPLETE_STATES: Final[frozenset[str]] = frozenset({"COMPLETE"})
    _JOB_FAILED_STATES: Final[frozenset[str]] = frozenset({"FAILED"})
    _PACKAGE_READY_STATES: Final[frozenset[str]] = frozenset({"READY"})
    _PACKAGE_FAILED_STATES: Final[frozenset[str]] = frozenset({"FAILED", "EXPIRED"})
    _BUILD_READY_STATES: Final[frozenset[str]] = frozenset({"STAGED"})
    _BUILD_FAILED_STATES: Final[frozenset[str]] = frozenset({"FAILED"})

    def __init__(
        self,
        api_url: str,
        organization_name: str,
        space_name: str,
        access_token: str | None = None,
        username: str | None = None,
        password: str | None = None,
        uaa_url: str | None = None,
        request_timeout_seconds: float = 30.0,
        poll_interval_seconds: float = 2.0,
        poll_timeout_seconds: float = 300.0,
        transport: httpx.AsyncBaseTransport | None = None,
        route_host_suffix_provider: Callable[[], str] | None = None,
        sleep_provider: Callable[[float], Awaitable[None]] | None = None,
        monotonic_provider: Callable[[], float] | None = None,
    ):
        """Initialize Cloud Foundry platform adapter.

        Args:
            api_url: Cloud Controller API base URL.
            organization_name: Target organization name.
            space_name: Target space name.
            access_token: Optional pre-issued bearer token.
            username: Username for the UAA password grant when no token is given.
            password: Password for the UAA password grant when no token is given.
            uaa_url: Optional UAA base URL; discovered from the API root when omitted.
            request_timeout_seconds: HTTP request timeout in seconds.
            poll_interval_seconds: Delay between polls of asynchronous platform jobs.
            poll_timeout_seconds: Overall deadline for one asynchronous platform job.
            transport: Optional httpx transport override.
            route_host_suffix_provider: Optional provider of random route host suffixes.
            sleep_provider: Optional awaitable sleep used between polls.
            monotonic_provider: Optional monotonic clock used for poll deadlines.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_api_url = api_url.strip().rstrip("/")
        normalized_organization_name = organization_name.strip()
        normalized_space_name = space_name.strip()
        normalized_access_token = self._platform_normalize_token(access_token)

        if not normalized_api_url:
            raise ValueError("api_url must not be blank")
        if not normalized_organization_name:
            raise ValueError("organization_name must not be blank")
        if not normalized_space_name:
            raise ValueError("space_name must not be blank")
        if normalized_access_token is None and not (username and password):
            raise ValueError("either access_token or username and password must be provided")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")
        if poll_interval_seconds < 0:
            raise ValueError("poll_interval_seconds must be >= 0")
        if poll_timeout_seconds <= 0:
            raise ValueError("poll_timeout_seconds must be > 0")

        self._api_url = normalized_api_url
        self._organization_name = normalized_organization_name
        self._space_name = normalized_space_name
        self._access_token = normalized_access_token
        self._username = username
        self._password = password
        self._uaa_url = uaa_url.strip().rstrip("/") if uaa_url else None
        self._poll_interval_seconds = poll_interval_seconds
        self._poll_timeout_seconds = poll_timeout_seconds
        self._route_host_suffix_provider = route_host_suffix_provider or (lambda: uuid4().hex[:8])
        self._sleep_provider = sleep_provider or asyncio.sleep
        self._monotonic_provider = monotonic_provider or time.monotonic
        self._organization_guid: str | None = None
        self._space_guid: str | None = None
        self._http_client = httpx.AsyncClient(
            base_url=normalized_api_url,
            timeout=request_timeout_seconds,
            transport=transport,
            headers={"User-Agent": self._USER_AGENT, "Accept": "application/json"},
        )

    async def __aenter__(self) -> CloudFoundryPlatformClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.platform_close()

    async def platform_close(self) -> None:
        """Close the underlying HTTP connection pool."""

        await self._http_client.aclose()

    def platform_connection_label(self) -> str:
        """Return stable platform target label.

        Returns:
            str: API URL with organization and space.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return f"{self._api_url} ({self._organization_name}/{self._space_name})"

    async def platform_check_health(self) -> HealthStatus:
        """Check that the Cloud Controller root endpoint answers.

        Returns:
            HealthStatus: Healthy status with advertised API version.

        Raises:
            PlatformApiError: Raised when the platform cannot be reached or rejects the call.
        """

        root_payload = self._platform_json(await self._platform_request("GET", "/", authenticated=False))
        api_version = (((root_payload.get("links") or {}).get("cloud_controller_v3") or {}).get("meta") or {}).get(
            "version", "unknown"
        )
        return HealthStatus(status="ok", detail=f"platform api reachable (v3 version {api_version})")

    async def platform_list_service_instances(self) -> AsyncIterator[ServiceInstanceSummary]:
        """Stream service instances in the target space.

        Returns:
            AsyncIterator[ServiceInstanceSummary]: Instance summaries in platform order.

        Raises:
            PlatformApiError: Raised when listing fails.
        """

        space_guid = await self._platform_resolve_space_guid()
        async for resource in self._platform_paginate("/v3/service_instances", {"space_guids": space_guid}):
            yield ServiceInstanceSummary(name=str(resource.get("name", "")))

    async def platform_list_service_offerings(self) -> AsyncIterator[ServiceOffering]:
        """Stream marketplace offerings with the plans visible to the target space.

        Returns:
            AsyncIterator[ServiceOffering]: Offerings with ordered plans.

        Raises:
            PlatformApiError: Raised when listing fails.
        """

        space_guid = await self._platform_resolve_space_guid()
        async for offering_resource in self._platform_paginate("/v3/service_offerings", {"space_guids": space_guid}):
            plans = [
                ServicePlan(name=str(plan_resource.get("name", "")), is_free=bool(plan_resource.get("free", False)))
                async for plan_resource in self._platform_paginate(
                    "/v3/service_plans",
                    {"service_offering_guids": offering_resource["guid"], "space_guids": space_guid},
                )
            ]
            yield ServiceOffering(label=str(offering_resource.get("name", "")), plans=tuple(plans))

    async def platform_create_service_instance(
        self,
        offering_label: str,
        plan_name: str,
        instance_name: str,
    ) -> None:
        """Create a managed service instance and wait for the provisioning job.

        Args:
            offering_label: Offering label.
            plan_name: Plan name within the offering.
            instance_name: Desired service instance name.

        Raises:
            PlatformResourceNotFoundError: Raised when offering or plan cannot be found.
            PlatformApiError: Raised when provisioning fails.
        """

        space_guid = await self._platform_resolve_space_guid()
        offering_resource = await self._platform_single_resource(
            "/v3/service_offerings",
            {"names": offering_label},
            description=f"service offering '{offering_label}'",
        )
        plan_resource = await self._platform_single_resource(
            "/v3/service_plans",
            {"names": plan_name, "service_offering_guids": offering_resource["guid"], "space_guids": space_guid},
            description=f"service plan '{plan_name}' of '{offering_label}'",
        )
        response = await self._platform_request(
            "POST",
            "/v3/service_instances",
            json={
                "type": "managed",
                "name": instance_name,
                "relationships": {
                    "space": {"data": {"guid": space_guid}},
                    "service_plan": {"data": {"guid": plan_resource["guid"]}},
                },
            },
        )
        await self._platform_await_job(response, context=f"create service instance '{instance_name}'")

    async def platform_push_application(self, push_spec: PushSpec) -> None:
        """Upload the artifact, stage it, and configure the application.

        Args:
            push_spec: Push request contract.

        Raises:
            PlatformApiError: Raised when any push step fails.
            PlatformTimeoutError: Raised when package processing or staging does not finish in time.
        """

        space_guid = await self._platform_resolve_space_guid()
        application_resource = await self._platform_find_resource(
            "/v3/apps",
            {"names": push_spec.application_name, "space_guids": space_guid},
        )
        if application_resource is None:
            application_resource = self._platform_json(
                await self._platform_request(
                    "POST",
                    "/v3/apps",
                    json={
                        "name": push_spec.application_name,
                        "relationships": {"space": {"data": {"guid": space_guid}}},
                    },
                )
            )
        application_guid = str(application_resource["guid"])
        application_state = ApplicationState.domain_from_platform(application_resource.get("state"))

        package_resource = self._platform_json(
            await self._platform_request(
                "POST",
                "/v3/packages",
                json={"type": "bits", "relationships": {"app": {"data": {"guid": application_guid}}}},
            )
        )
        package_guid = str(package_resource["guid"])
        artifact_bytes = await asyncio.to_thread(push_spec.artifact_path.read_bytes)
        await self._platform_request(
            "POST",
            f"/v3/packages/{package_guid}/upload",
            data={"resources": "[]"},
            files={"bits": (push_spec.artifact_path.name, artifact_bytes, "application/zip")},
        )
        await self._platform_poll_state(
            f"/v3/packages/{package_guid}",
            ready_states=self._PACKAGE_READY_STATES,
            failed_states=self._PACKAGE_FAILED_STATES,
            context=f"package processing for '{push_spec.application_name}'",
        )

        build_resource = self._platform_json(
            await self._platform_request("POST", "/v3/builds", json={"package": {"guid": package_guid}})
        )
        staged_build = await self._platform_poll_state(
            f"/v3/builds/{build_resource['guid']}",
            ready_states=self._BUILD_READY_STATES,
            failed_states=self._BUILD_FAILED_STATES,
            context=f"staging for '{push_spec.application_name}'",
        )
        droplet_guid = (staged_build.get("droplet") or {}).get("guid")
        if not droplet_guid:
            raise PlatformContractError(f"staged build for '{push_spec.application_name}' has no droplet")

        await self._platform_request(
            "PATCH",
            f"/v3/apps/{application_guid}/relationships/current_droplet",
            json={"data": {"guid": droplet_guid}},
        )
        await self._platform_request(
            "POST",
            f"/v3/apps/{application_guid}/processes/{self._WEB_PROCESS_TYPE}/actions/scale",
            json={"instances": push_spec.replica_count},
        )
        if push_spec.use_random_route:
            await self._platform_ensure_random_route(
                application_guid=application_guid,
                application_name=push_spec.application_name,
                space_guid=space_guid,
            )

        if not push_spec.defer_start:
            action = "restart" if application_state is ApplicationState.STARTED else "start"
            await self._platform_request("POST", f"/v3/apps/{application_guid}/actions/{action}")
        elif application_state is ApplicationState.STARTED:
            await self._platform_request("POST", f"/v3/apps/{application_guid}/actions/stop")

    async def platform_get_application(self, application_name: str) -> ApplicationDetail:
        """Fetch application detail with web process scale and mapped routes.

        Args:
            application_name: Application name.

        Returns:
            ApplicationDetail: Authoritative application detail.

        Raises:
            PlatformResourceNotFoundError: Raised when the application does not exist.
        """

        application_resource = await self._platform_find_application(application_name)
        application_guid = str(application_resource["guid"])
        process_resource = self._platform_json(
            await self._platform_request("GET", f"/v3/apps/{application_guid}/processes/{self._WEB_PROCESS_TYPE}")
        )
        urls = [
            str(route_resource.get("url", ""))
            async for route_resource in self._platform_paginate(f"/v3/apps/{application_guid}/routes", None)
        ]
        return ApplicationDetail(
            name=str(application_resource.get("name", "")),
            state=ApplicationState.domain_from_platform(application_resource.get("state")),
            guid=application_guid,
            instances=int(process_resource.get("instances") or 0),
            urls=tuple(urls),
        )

    async def platform_bind_service(self, application_name: str, instance_name: str) -> None:
        """Create an app credential binding between application and service instance.

        Args:
            application_name: Application name.
            instance_name: Service instance name.

        Raises:
            BindConflictError: Raised when the platform rejects the binding as unprocessable.
            PlatformResourceNotFoundError: Raised when app or instance does not exist.
        """

        space_guid = await self._platform_resolve_space_guid()
        application_resource = await self._platform_find_application(application_name)
        instance_resource = await self._platform_single_resource(
            "/v3/service_instances",
            {"names": instance_name, "space_guids": space_guid},
            description=f"service instance '{instance_name}'",
        )
        try:
            response = await self._platform_request(
                "POST",
                "/v3/service_credential_bindings",
                json={
                    "type": "app",
                    "relationships": {
                        "app": {"data": {"guid": application_resource["guid"]}},
                        "service_instance": {"data": {"guid": instance_resource["guid"]}},
                    },
                },
            )
        except PlatformApiError as error:
            if error.status_code == self._BIND_CONFLICT_STATUS_CODE:
                raise BindConflictError(
                    f"application '{application_name}' is already bound to '{instance_name}': {error}",
                    status_code=error.status_code,
                    error_code=error.error_code,
                ) from error
            raise
        await self._platform_await_job(response, context=f"bind '{instance_name}' to '{application_name}'")

    async def platform_restart_application(self, application_name: str) -> None:
        """Request an application restart without waiting for instances to run.

        Args:
            application_name: Application name.

        Raises:
            PlatformResourceNotFoundError: Raised when the application does not exist.
        """

        application_resource = await self._platform_find_application(application_name)
        await self._platform_request("POST", f"/v3/apps/{application_resource['guid']}/actions/restart")

    async def _platform_ensure_random_route(self, application_guid: str, application_name: str, space_guid: str) -> None:
        """Map a random route on the default domain when the application has none.

        Args:
            application_guid: Application identifier.
            application_name: Application name used as host prefix.
            space_guid: Target space identifier.

        Raises:
            PlatformApiError: Raised when route creation or mapping fails.
        """

        existing_route = await self._platform_find_resource(f"/v3/apps/{application_guid}/routes", None)
        if existing_route is not None:
            return

        organization_guid = await self._platform_resolve_organization_guid()
        domain_resource = self._platform_json(
            await self._platform_request("GET", f"/v3/organizations/{organization_guid}/domains/default")
        )
        host_prefix = re.sub(r"[^a-z0-9-]+", "-", application_name.lower()).strip("-") or "app"
        route_host = f"{host_prefix}-{self._route_host_suffix_provider()}"
        route_resource = self._platform_json(
            await self._platform_request(
                "POST",
                "/v3/routes",
                json={
                    "host": route_host,
                    "relationships": {
                        "space": {"data": {"guid": space_guid}},
                        "domain": {"data": {"guid": domain_resource["guid"]}},
                    },
                },
            )
        )
        await self._platform_request(
            "POST",
            f"/v3/routes/{route_resource['guid']}/destinations",
            json={"destinations": [{"app": {"guid": application_guid}}]},
        )
        logger.info("platform_route_mapped", application_name=application_name, host=route_host)

    async def _platform_find_application(self, application_name: str) -> dict[str, Any]:
        space_guid = await self._platform_resolve_space_guid()
        return await self._platform_single_resource(
            "/v3/apps",
            {"names": application_name, "space_guids": space_guid},
            description=f"application '{application_name}'",
        )

    async def _platform_resolve_organization_guid(self) -> str:
        """Resolve and cache the target organization identifier.

        Returns:
            str: Organization GUID.

        Raises:
            PlatformResourceNotFoundError: Raised when the organization does not exist.
        """

        if self._organization_guid is None:
            organization_resource = await self._platform_single_resource(
                "/v3/organizations",
                {"names": self._organization_name},
                description=f"organization '{self._organization_name}'",
            )
            self._organization_guid = str(organization_resource["guid"])
        return self._organization_guid

    async def _platform_resolve_space_guid(self) -> str:
        """Resolve and cache the target space identifier.

        Returns:
            str: Space GUID.

        Raises:
            PlatformResourceNotFoundError: Raised when the space does not exist in the organization.
        """

        if self._space_guid is None:
            organization_guid = await self._platform_resolve_organization_guid()
            space_resource = await self._platform_single_resource(
                "/v3/spaces",
                {"names": self._space_name, "organization_guids": organization_guid},
                description=f"space '{self._space_name}'",
            )
            self._space_guid = str(space_resource["guid"])
        return self._space_guid

    async def _platform_find_resource(self, path: str, params: dict[str, str] | None) -> dict[str, Any] | None:
        page_payload = self._platform_json(await self._platform_request("GET", path, params=params))
        resources = page_payload.get("resources") or []
        return resources[0] if resources else None

    async def _platform_single_resource(
        self,
        path: str,
        params: dict[str, str] | None,
        description: str,
    ) -> dict[str, Any]:
        resource = await self._platform_find_resource(path, params)
        if resource is None:
            raise PlatformResourceNotFoundError(f"{description} not found", status_code=404)
        return resource

    async def _platform_paginate(
        self,
        path: str,
        params: dict[str, str] | None,
    ) -> AsyncIterator[dict[str, Any]]:
        """Iterate resources across all result pages.

        Args:
            path: First page path.
            params: Query parameters for the first page.

        Returns:
            AsyncIterator[dict[str, Any]]: Resource payloads in platform order.

        Raises:
            PlatformApiError: Raised when any page request fails.
        """

        next_url: str | None = path
        next_params = params
        while next_url:
            page_payload = self._platform_json(await self._platform_request("GET", next_url, params=next_params))
            for resource in page_payload.get("resources") or []:
                yield resource
            next_link = (page_payload.get("pagination") or {}).get("next")
            next_url = next_link.get("href") if next_link else None
            next_params = None

    async def _platform_await_job(self, response: httpx.Response, context: str) -> None:
        """Wait for the asynchronous job referenced by an accepted response.

        Args:
            response: Response that may carry a job `Location` header.
            context: Context label for error messages.

        Raises:
            PlatformApiError: Raised when the job fails.
            PlatformTimeoutError: Raised when the job does not finish before the poll deadline.
        """

        job_url = response.headers.get("Location")
        if response.status_code != 202 or not job_url:
            return
        await self._platform_poll_state(
            job_url,
            ready_states=self._JOB_COMPLETE_STATES,
            failed_states=self._JOB_FAILED_STATES,
            context=context,
        )

    async def _platform_poll_state(
        self,
        url: str,
        ready_states: frozenset[str],
        failed_states: frozenset[str],
        context: str,
    ) -> dict[str, Any]:
        """Poll one resource until its `state` reaches a terminal value.

        Args:
            url: Resource URL or path.
            ready_states: States treated as success.
            failed_states: States treated as failure.
            context: Context label for error messages.

        Returns:
            dict[str, Any]: Resource payload in its ready state.

        Raises:
            PlatformApiError: Raised when the resource reaches a failed state.
            PlatformTimeoutError: Raised when no terminal state is reached before the deadline.
        """

        deadline = self._monotonic_provider() + self._poll_timeout_seconds
        while True:
            resource = self._platform_json(await self._platform_request("GET", url))
            state = str(resource.get("state", "")).upper()
            if state in ready_states:
                return resource
            if state in failed_states:
                error_title, error_detail = self._platform_extract_error(resource, fallback=resource.get("error"))
                raise PlatformApiError(f"{context} failed: {error_detail}", error_code=error_title)
            if self._monotonic_provider() >= deadline:
                raise PlatformTimeoutError(f"{context} did not finish within {self._poll_timeout_seconds}s")
            logger.debug("platform_poll_pending", context=context, state=state)
            await self._sleep_provider(self._poll_interval_seconds)

    async def _platform_request(
        self,
        method: str,
        url: str,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        data: dict[str, str] | None = None,
        files: dict[str, Any] | None = None,
        authenticated: bool = True,
        auth: httpx.Auth | None = None,
    ) -> httpx.Response:
        """Execute one HTTP request and map transport/status failures to platform errors.

        Args:
            method: HTTP method.
            url: Path relative to the API URL, or an absolute URL.
            params: Optional query parameters.
            json: Optional JSON body.
            data: Optional form fields.
            files: Optional multipart files.
            authenticated: Whether to send the bearer token.
            auth: Optional explicit httpx auth (used for the UAA client credentials).

        Returns:
            httpx.Response: Successful response.

        Raises:
            PlatformTimeoutError: Raised when the transport times out.
            PlatformConnectionError: Raised for network failures.
            PlatformApiError: Raised for HTTP status >= 400.
        """

        headers: dict[str, str] = {}
        if authenticated:
            headers["Authorization"] = await self._platform_authorization_header()
        try:
            response = await self._http_client.request(
                method,
                url,
                params=params,
                json=json,
                data=data,
                files=files,
                headers=headers,
                auth=auth if auth is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.TimeoutException as error:
            raise PlatformTimeoutError(f"platform request timed out: {method} {url}") from error
        except httpx.TransportError as error:
            raise PlatformConnectionError(f"platform request failed: {method} {url}: {error}") from error
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as error:
            raise PlatformApiError(f"platform request could not be completed: {method} {url}: {error}") from error

        logger.debug("platform_request", method=method, url=str(response.request.url), status_code=response.status_code)
        if response.status_code >= 400:
            raise self._platform_error_for_response(response, context=f"{method} {url}")
        return response

    async def _platform_authorization_header(self) -> str:
        if self._access_token is None:
            self._access_token = await self._platform_fetch_password_grant_token()
        return f"bearer {self._access_token}"

    async def _platform_fetch_password_grant_token(self) -> str:
        """Obtain an access token from UAA using the password grant.

        Returns:
            str: Access token.

        Raises:
            PlatformAuthenticationError: Raised when UAA rejects the credentials.
            PlatformContractError: Raised when the token response has no access token.
        """

        uaa_url = self._uaa_url or await self._platform_discover_uaa_url()
        try:
            response = await self._platform_request(
                "POST",
                f"{uaa_url}/oauth/token",
                data={
                    "grant_type": "password",
                    "username": self._username or "",
                    "password": self._password or "",
                },
                authenticated=False,
                auth=httpx.BasicAuth(self._UAA_CLIENT_ID, ""),
            )
        except PlatformApiError as error:
            if isinstance(error, (PlatformConnectionError, PlatformTimeoutError)):
                raise
            raise PlatformAuthenticationError(
                f"token request rejected: {error}",
                status_code=error.status_code,
                error_code=error.error_code,
            ) from error

        access_token = self._platform_normalize_token(self._platform_json(response).get("access_token"))
        if access_token is None:
            raise PlatformContractError("token response missing access_token")
        logger.debug("platform_token_acquired", uaa_url=uaa_url)
        return access_token

    async def _platform_discover_uaa_url(self) -> str:
        root_payload = self._platform_json(await self._platform_request("GET", "/", authenticated=False))
        links = root_payload.get("links") or {}
        uaa_link = links.get("uaa") or links.get("login") or {}
        uaa_href = str(uaa_link.get("href") or "").rstrip("/")
        if not uaa_href:
            raise PlatformContractError("platform root does not advertise a UAA endpoint")
        self._uaa_url = uaa_href
        return uaa_href

    def _platform_error_for_response(self, response: httpx.Response, context: str) -> PlatformApiError:
        """Build the typed platform error for a failed HTTP response.

        Args:
            response: Failed HTTP response.
            context: Request label for error messages.

        Returns:
            PlatformApiError: Typed error carrying status code and platform error title.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        try:
            error_payload = response.json()
        except ValueError:
            error_payload = {}
        if not isinstance(error_payload, dict):
            error_payload = {}
        error_title, error_detail = self._platform_extract_error(
            error_payload,
            fallback=error_payload.get("error_description") or response.reason_phrase,
        )
        message = f"platform returned HTTP {response.status_code} for {context}: {error_detail}"
        if response.status_code in (401, 403):
            return PlatformAuthenticationError(message, status_code=response.status_code, error_code=error_title)
        if response.status_code == 404:
            return PlatformResourceNotFoundError(message, status_code=response.status_code, error_code=error_title)
        return PlatformApiError(message, status_code=response.status_code, error_code=error_title)

    def _platform_extract_error(self, payload: dict[str, Any], fallback: object = None) -> tuple[str | None, str]:
        """Extract the first platform error title and detail from a payload.

        Args:
            payload: Response or job payload.
            fallback: Detail to use when the payload carries no `errors` list.

        Returns:
            tuple[str | None, str]: Error title and detail message.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        errors = payload.get("errors") or []
        if errors and isinstance(errors[0], dict):
            first_error = errors[0]
            return first_error.get("title"), str(first_error.get("detail") or first_error.get("title") or "")
        return None, str(fallback or "unexpected platform response")

    def _platform_json(self, response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as error:
            raise PlatformContractError(
                f"platform response is not valid JSON: {response.request.method} {response.request.url}"
            ) from error
        if not isinstance(payload, dict):
            raise PlatformContractError("platform response is not a JSON object")
        return payload

    @staticmethod
    def _platform_normalize_token(token: object) -> str | None:
        normalized_token = str(token or "").strip()
        if normalized_token.lower().startswith("bearer "):
            normalized_token = normalized_token[len("bearer ") :].strip()
        return normalized_token or None
