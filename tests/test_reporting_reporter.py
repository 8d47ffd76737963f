"""Regression tests for deployment outcome reporting and logging setup."""

from __future__ import annotations

import pytest
import structlog
from structlog.testing import capture_logs

from deployer.domain import DeploymentOutcome, DeploymentStage
from deployer.reporting import StructlogDeploymentReporter, reporting_configure_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


def test_reporting_reporter_logs_success_summary() -> None:
    """Log one `deployment_completed` event naming app, service, and elapsed time.

    Returns:
        None: Assertions validate captured log event.

    Raises:
        AssertionError: Raised when the summary is missing or malformed.
    """

    outcome = DeploymentOutcome(application_name="cnj-hda", service_name="cnj-mysql", elapsed_millis=4210, success=True)

    with capture_logs() as captured_events:
        StructlogDeploymentReporter().reporting_deployment_completed(outcome)

    assert len(captured_events) == 1
    event = captured_events[0]
    assert event["event"] == "deployment_completed"
    assert event["log_level"] == "info"
    assert event["elapsed_ms"] == 4210
    assert event["message"] == (
        "your application 'cnj-hda' has been deployed and bound to the service 'cnj-mysql'. "
        "It took 4210 ms to complete."
    )


def test_reporting_reporter_logs_failure_with_code_and_reason() -> None:
    """Log `deployment_failed` at error level for failed outcomes."""

    outcome = DeploymentOutcome(
        application_name="cnj-hda",
        service_name="cnj-mysql",
        elapsed_millis=12,
        success=False,
        failure_reason="artifact not found: /tmp/in.jar",
        error_code="DEPLOY_ARTIFACT_NOT_FOUND",
        final_stage=DeploymentStage.FAILED,
    )

    with capture_logs() as captured_events:
        StructlogDeploymentReporter().reporting_deployment_completed(outcome)

    assert [event["event"] for event in captured_events] == ["deployment_failed"]
    assert captured_events[0]["log_level"] == "error"
    assert captured_events[0]["error_code"] == "DEPLOY_ARTIFACT_NOT_FOUND"
    assert "message" not in captured_events[0]


def test_reporting_configure_logging_renders_json_lines(capsys) -> None:
    """Render events as JSON with level and timestamp when json format is selected."""

    reporting_configure_logging(level="INFO", log_format="json")

    structlog.get_logger("deployer.test").info("deployment_started", application_name="cnj-hda")
    structlog.get_logger("deployer.test").debug("hidden_event")

    output = capsys.readouterr().out
    assert '"event": "deployment_started"' in output
    assert '"level": "info"' in output
    assert '"timestamp"' in output
    assert "hidden_event" not in output


def test_reporting_configure_logging_rejects_unknown_level() -> None:
    """Raise ValueError for unknown level names."""

    with pytest.raises(ValueError, match="unknown log level"):
        reporting_configure_logging(level="verbose")
