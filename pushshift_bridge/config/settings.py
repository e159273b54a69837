from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Define the root directory of the pushshift_bridge package
SERVICE_ROOT_DIR = Path(__file__).parent.parent.resolve()
# Path to the repository root (one level above the package)
PROJECT_ROOT_DIR = SERVICE_ROOT_DIR.parent


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "PushshiftBridge"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8002

    # Secrets supplied by the hosting environment
    PUSHSHIFT_BRIDGE_URL: Optional[str] = None
    PUSHSHIFT_MCP_KEY: Optional[str] = None

    # Upstream call settings. No timeout unless the deployment sets one.
    UPSTREAM_TIMEOUT_SECONDS: Optional[float] = None
    UPSTREAM_DETAIL_LIMIT: int = 500

    # Logging configuration path (can be overridden by env var)
    LOGGING_CONFIG_PATH: str = str(SERVICE_ROOT_DIR / "config" / "logging_config.yaml")

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT_DIR / ".env"),  # Load variables from project root .env
        env_file_encoding='utf-8',
        extra='ignore'
    )

    @field_validator("PUSHSHIFT_BRIDGE_URL", "PUSHSHIFT_MCP_KEY", mode='before')
    @classmethod
    def blank_is_missing(cls, v: Optional[str]) -> Optional[str]:
        # An exported-but-empty variable counts as not configured
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def missing_secrets(self) -> List[str]:
        """
        Return the names of required secrets that are not configured.

        Returns:
            List of environment variable names, bridge URL first.
        """
        missing = []
        if not self.PUSHSHIFT_BRIDGE_URL:
            missing.append("PUSHSHIFT_BRIDGE_URL")
        if not self.PUSHSHIFT_MCP_KEY:
            missing.append("PUSHSHIFT_MCP_KEY")
        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Configured settings instance
    """
    return Settings()


@dataclass(frozen=True)
class BridgeConfig:
    """Read-only values the search pipeline is constructed with."""

    bridge_url: Optional[str] = None
    api_key: Optional[str] = None
    timeout_seconds: Optional[float] = None
    detail_limit: int = 500

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "BridgeConfig":
        settings = settings or get_settings()
        return cls(
            bridge_url=settings.PUSHSHIFT_BRIDGE_URL,
            api_key=settings.PUSHSHIFT_MCP_KEY,
            timeout_seconds=settings.UPSTREAM_TIMEOUT_SECONDS,
            detail_limit=settings.UPSTREAM_DETAIL_LIMIT,
        )
