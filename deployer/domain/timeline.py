"""Shared deployment timeline helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def domain_build_stage_event(
    stage: str,
    status: str,
    details: dict[str, Any] | None = None,
) -> dict[str, object]:
    """Build one structured deployment timeline event payload.

    Args:
        stage: Deployment stage name.
        status: Stage status marker (`started`, `completed`, `failed`).
        details: Optional structured details object.

    Returns:
        dict[str, object]: Structured timeline event.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    event_payload: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": datetime.now(timezone.utc).isoformat(),
    }
    if details is not None:
        event_payload["details"] = details
    return event_payload


def domain_elapsed_millis(started_at: datetime) -> int:
    """Return non-negative wall-clock milliseconds elapsed since `started_at`.

    Args:
        started_at: Timezone-aware UTC start timestamp.

    Returns:
        int: Elapsed milliseconds, floored at zero.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return max(0, int((datetime.now(timezone.utc) - started_at).total_seconds() * 1000))
