"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Verification API
    api_base_url: str = Field(
        description="Base URL of the election verification API",
    )
    election_id: str = Field(
        default="",
        description="Default election to search ballots in",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            msg = "api_base_url must be an http or https URL"
            raise ValueError(msg)
        return v.rstrip("/")

    # Tracker search
    search_minimum_query_length: int = Field(
        default=3,
        description="Minimum normalized query length before a lookup is dispatched",
        gt=0,
    )
    search_debounce_ms: int = Field(
        default=250,
        description="Quiet period in milliseconds before a typed query is searched",
        ge=0,
    )
    search_max_suggestions: int = Field(
        default=5,
        description="Maximum number of suggestions shown for a partial tracker code",
        gt=0,
    )

    @property
    def search_debounce_seconds(self) -> float:
        """Debounce delay converted to seconds for the event loop."""
        return self.search_debounce_ms / 1000

    # Lookup cache / transport
    lookup_timeout: float = Field(
        default=10.0,
        description="HTTP request timeout in seconds",
        gt=0,
    )
    lookup_retry_attempts: int = Field(
        default=3,
        description="Retries after a failed lookup before the error is recorded",
        ge=0,
    )
    lookup_retry_delay: float = Field(
        default=0.5,
        description="Base delay in seconds between lookup retries (multiplied by attempt number)",
        ge=0,
    )
    lookup_stale_after: float = Field(
        default=30.0,
        description="Seconds before cached search results are refetched in the background",
        ge=0,
    )
    lookup_max_entries: int = Field(
        default=100,
        description="Search keys kept in the lookup cache before the least recently used are evicted",
        gt=0,
    )
    track_wait_timeout: float = Field(
        default=15.0,
        description="Seconds the track command waits for a tracker to resolve",
        gt=0,
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]
