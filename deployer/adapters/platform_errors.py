"""Project-native typed exceptions for platform API failures."""

from __future__ import annotations


class PlatformApiError(RuntimeError):
    """Base exception for any failed remote call to the application platform.

    Attributes:
        status_code: HTTP status code when the platform answered.
        error_code: Platform error title (for example `CF-ResourceNotFound`).
    """

    def __init__(self, message: str, status_code: int | None = None, error_code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class PlatformConnectionError(PlatformApiError, ConnectionError):
    """Transport-level connectivity failure during platform communication."""


class PlatformTimeoutError(PlatformApiError, TimeoutError):
    """Transport timeout, or an asynchronous platform job that did not finish in time."""


class PlatformAuthenticationError(PlatformApiError):
    """Credentials were rejected or the token could not be obtained."""


class PlatformResourceNotFoundError(PlatformApiError, LookupError):
    """A named platform resource (org, space, app, plan, instance) does not exist."""


class PlatformContractError(PlatformApiError):
    """The platform answered with a payload that violates the expected contract."""


class BindConflictError(PlatformApiError):
    """The application is already bound to the service instance."""
