"""Deployment API router composition for run trigger endpoints."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from deployer.jobs import JobOrchestratorPort


def api_create_deployment_router(deployment_orchestrator: JobOrchestratorPort) -> APIRouter:
    """Create deployment router with a single-flight run trigger.

    Args:
        deployment_orchestrator: Job orchestrator for deployment execution.

    Returns:
        APIRouter: Router exposing deployment APIs.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if deployment_orchestrator is None:
        raise ValueError("deployment_orchestrator must not be None")

    router = APIRouter(prefix="/deployments", tags=["deployments"])
    active_run_lock = asyncio.Lock()

    @router.post("/run")
    async def api_deployment_run_trigger() -> JSONResponse:
        """Trigger one configured deployment run.

        Returns:
            JSONResponse: Outcome payload, or 409 while another run is active.

        Raises:
            RuntimeError: Raised when execution fails unexpectedly.
        """

        if active_run_lock.locked():
            payload = {
                "status": "error",
                "message": "deployment already active",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_409_CONFLICT)

        async with active_run_lock:
            outcome = await deployment_orchestrator.job_execute(job_name="deployment_run")
        return JSONResponse(content=outcome.domain_to_payload(), status_code=status.HTTP_200_OK)

    return router
