"""Reporting package for logging configuration and deployment outcome sinks."""

from .logging_config import reporting_configure_logging
from .reporter import StructlogDeploymentReporter

__all__ = ["StructlogDeploymentReporter", "reporting_configure_logging"]
