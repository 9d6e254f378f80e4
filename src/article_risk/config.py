"""Runtime configuration for the article risk console."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Console settings loaded from environment variables."""

    service_name: str = "article-risk-console"
    service_version: str = "0.1.0"
    log_level: str = "INFO"
    metrics_enabled: bool = True

    analysis_base_url: str = "http://127.0.0.1:8000"
    analysis_timeout_seconds: float = Field(default=30.0, gt=0)

    # A local .env is optional; environment variables take precedence.
    model_config = SettingsConfigDict(
        env_prefix="ARTICLE_RISK_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )


def get_settings() -> Settings:
    """Return settings object."""

    return Settings()
