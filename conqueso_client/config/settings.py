"""Typed client settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from conqueso_client.errors import ConfigurationError


class SettingsLoadError(ConfigurationError):
    """Raised when client settings cannot be loaded or validated."""


class ConquesoSettings(BaseSettings):
    """Client settings for registration and registry queries.

    Environment variable names are field names in uppercase with the
    `CONQUESO_` prefix. Example: `url` reads from `CONQUESO_URL`.

    Attributes:
        url: Conqueso server base URL, or a comma-separated list of URLs.
        json_urls: Comma-separated JSON definition file URLs.
        override_properties_urls: Comma-separated override properties file URLs.
        collection_delimiter: Delimiter used to encode list, set and map defaults.
        request_timeout_seconds: Timeout for Conqueso server HTTP calls.
        metadata_service_url: Base URL of the cloud instance metadata service.
        metadata_timeout_seconds: Timeout for cloud instance metadata calls.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONQUESO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    url: str | None = Field(default=None)
    json_urls: str | None = Field(default=None)
    override_properties_urls: str | None = Field(default=None)
    collection_delimiter: str = Field(default=",", min_length=1)
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    metadata_service_url: str = Field(default="http://169.254.169.254", min_length=1)
    metadata_timeout_seconds: float = Field(default=2.0, gt=0)

    @field_validator("url", "json_urls", "override_properties_urls")
    @classmethod
    def _validate_optional_string(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped_value = value.strip()
        return stripped_value or None

    @field_validator("metadata_service_url")
    @classmethod
    def _validate_service_url(cls, value: str) -> str:
        stripped_value = value.strip().rstrip("/")
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value


def config_load_settings() -> ConquesoSettings:
    """Load and validate client settings from environment and dotenv.

    Returns:
        ConquesoSettings: Validated settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return ConquesoSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Conqueso client configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
