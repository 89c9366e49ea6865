"""
Shared configuration management for the artifact client.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import RuntimeTokenError


class ArtifactConfig(BaseSettings):
    """Runner-provided settings, read from ``ACTIONS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ACTIONS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Runner
    runtime_token: Optional[str] = Field(default=None)
    results_url: Optional[str] = Field(default=None)

    # Logging
    step_debug: bool = Field(default=False)
    log_level: str = Field(default="info")

    @property
    def effective_log_level(self) -> str:
        """Log level, forced to debug when step debugging is enabled."""
        if self.step_debug:
            return "debug"
        return self.log_level


def get_config() -> ArtifactConfig:
    """Load configuration from the environment."""
    return ArtifactConfig()


def get_runtime_token(config: Optional[ArtifactConfig] = None) -> str:
    """Return the workflow runtime token or raise if the runner did not provide one."""
    config = config or get_config()
    if not config.runtime_token:
        raise RuntimeTokenError()
    return config.runtime_token
