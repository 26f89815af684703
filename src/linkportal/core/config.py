"""LinkPortal settings.

Read from LINKPORTAL_* environment variables and an optional .env file.
List settings accept comma-separated strings.
"""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Validated service settings. Cache durations are in seconds."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LINKPORTAL_",
        case_sensitive=False,
        extra="ignore",
    )

    # Service
    app_name: str = "LinkPortal"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Database Settings (link storage)
    database_url: str = "sqlite+aiosqlite:///./lp_data/linkportal.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # GitHub Settings
    github_api_url: str = "https://api.github.com"
    github_token: str | None = Field(
        default=None,
        description="Central operations token used for organization management calls",
    )
    github_timeout_seconds: float = 30.0
    github_retries: int = 3
    organizations: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Managed organizations, in the order memberships are processed",
    )

    # Cache Settings
    account_detail_stale_seconds: int = 60 * 60 * 24
    org_membership_stale_seconds: int = 60
    link_cache_ttl_seconds: int = 300

    # Workflow Settings
    membership_lookup_concurrency: int = 2

    # Corporate directory
    corporate_profile_prefix: str | None = None

    # API Settings
    api_key_header: str = "X-API-Key"
    supported_api_versions: Annotated[list[str], NoDecode] = Field(
        default=["2019-02-01", "2017-09-01", "2017-03-08", "2016-12-01"]
    )
    retired_api_versions: Annotated[list[str], NoDecode] = Field(
        default=["2016-09-22_Preview"]
    )

    @field_validator(
        "organizations", "supported_api_versions", "retired_api_versions", mode="before"
    )
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Accept "a, b,c" as well as a list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("membership_lookup_concurrency")
    @classmethod
    def validate_concurrency(cls, v: int) -> int:
        """Concurrency must allow at least one lookup at a time."""
        if v < 1:
            raise ValueError("membership_lookup_concurrency must be at least 1")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1. "
                "Either use --workers 1 or switch to PostgreSQL."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Settings loaded once per process."""
    return Settings()
