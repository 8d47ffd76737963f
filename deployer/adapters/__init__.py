"""Adapter layer package for application platform integration boundaries."""

from .cloud_foundry import CloudFoundryPlatformClient
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

__all__ = [
	"BindConflictError",
	"CloudFoundryPlatformClient",
	"PlatformApiError",
	"PlatformAuthenticationError",
	"PlatformClientPort",
	"PlatformConnectionError",
	"PlatformContractError",
	"PlatformHealthPort",
	"PlatformResourceNotFoundError",
	"PlatformTimeoutError",
]
