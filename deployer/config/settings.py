"""Typed runtime settings with dotenv support and startup validation."""

from pathlib import Path

from pydantic import AliasChoices, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


def _config_default_artifact_path() -> Path:
    return Path.home() / "Desktop" / "in.jar"


class DeployerSettings(BaseSettings):
    """Deployer settings for platform access, deployment targets and runtime surfaces.

    Environment variable names map directly to field names in uppercase.
    Example: `cf_api_url` reads from `CF_API_URL`. The artifact location is
    read from `ARTIFACT` and falls back to `~/Desktop/in.jar`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        cf_api_url: Cloud Controller API base URL.
        cf_uaa_url: Optional UAA URL; discovered from the API root when unset.
        cf_access_token: Optional pre-issued bearer token.
        cf_username: Username for the UAA password grant.
        cf_password: Password for the UAA password grant.
        cf_organization: Target organization name.
        cf_space: Target space name.
        cf_request_timeout_seconds: HTTP request timeout.
        cf_poll_interval_seconds: Delay between polls of asynchronous platform jobs.
        cf_poll_timeout_seconds: Deadline for one asynchronous platform job.
        artifact_path: Artifact file to deploy.
        service_offering_label: Marketplace offering label of the backing service.
        service_instance_name: Service instance to ensure and bind.
        application_name: Application to push and restart.
        log_level: Minimum log level.
        log_format: Log renderer (`console` or `json`).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    cf_api_url: str = Field(min_length=1)
    cf_uaa_url: str | None = Field(default=None)
    cf_access_token: str | None = Field(default=None)
    cf_username: str | None = Field(default=None)
    cf_password: str | None = Field(default=None)
    cf_organization: str = Field(min_length=1)
    cf_space: str = Field(min_length=1)
    cf_request_timeout_seconds: float = Field(default=30.0, gt=0)
    cf_poll_interval_seconds: float = Field(default=2.0, ge=0)
    cf_poll_timeout_seconds: float = Field(default=300.0, gt=0)
    artifact_path: Path = Field(
        default_factory=_config_default_artifact_path,
        validation_alias=AliasChoices("artifact", "artifact_path"),
    )
    service_offering_label: str = Field(default="p-mysql", min_length=1)
    service_instance_name: str = Field(default="cnj-mysql", min_length=1)
    application_name: str = Field(default="cnj-hda", min_length=1)
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    @field_validator(
        "cf_api_url",
        "cf_organization",
        "cf_space",
        "service_offering_label",
        "service_instance_name",
        "application_name",
    )
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("artifact_path")
    @classmethod
    def _validate_artifact_path(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return normalized_value

    @field_validator("log_format")
    @classmethod
    def _validate_log_format(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if normalized_value not in {"console", "json"}:
            raise ValueError("log_format must be `console` or `json`")
        return normalized_value

    @model_validator(mode="after")
    def _validate_credentials(self) -> "DeployerSettings":
        has_token = bool((self.cf_access_token or "").strip())
        has_password_grant = bool((self.cf_username or "").strip()) and bool(self.cf_password)
        if not has_token and not has_password_grant:
            raise ValueError("either CF_ACCESS_TOKEN or both CF_USERNAME and CF_PASSWORD must be set")
        return self


def config_load_settings() -> DeployerSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        DeployerSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return DeployerSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
