"""
Configuration settings using Pydantic Settings.

Every value can be overridden through environment variables or a local
.env file. Nothing here is required; defaults suit an interactive editor.
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """Runtime options for the embed checker."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # init kwargs > .env > process env > secrets dir
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ):
        return init_settings, dotenv_settings, env_settings, file_secret_settings

    image_probe_enabled: bool = Field(True, alias="IMAGE_PROBE_ENABLED")
    image_probe_timeout_seconds: float = Field(
        10.0,
        gt=0,
        alias="IMAGE_PROBE_TIMEOUT_SECONDS",
        description="Total budget for one image GET; expiry counts as unreachable",
    )
    image_probe_user_agent: str = Field(
        "embedcheck/0.1 (+image-probe)",
        validation_alias=AliasChoices("IMAGE_PROBE_USER_AGENT", "HTTP_USER_AGENT"),
    )
    image_probe_max_concurrency: int = Field(8, ge=1, alias="IMAGE_PROBE_MAX_CONCURRENCY")

    # None keeps checked links for the whole session
    image_cache_ttl_seconds: float | None = Field(None, gt=0, alias="IMAGE_CACHE_TTL_SECONDS")

    app_name: str = Field("embedcheck", alias="APP_NAME")
    app_env: str = Field("development", alias="APP_ENV")
    app_log_level: str = Field("INFO", alias="APP_LOG_LEVEL")

    @field_validator("app_log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return settings
