"""
Application settings with environment variable support.

Server settings can be overridden via HARVEST_MCP_* environment variables.
Ambient Harvest credentials come from HARVEST_ACCESS_TOKEN and
HARVEST_ACCOUNT_ID and are read once at startup.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


HARVEST_API_URL = "https://api.harvestapp.com/v2"


@dataclass(frozen=True)
class Credentials:
    """Harvest token and account id used for one invocation."""

    token: Optional[str] = None
    account_id: Optional[str] = None

    @property
    def complete(self) -> bool:
        return bool(self.token) and bool(self.account_id)

    def __repr__(self) -> str:
        token = "***" if self.token else None
        return f"Credentials(token={token!r}, account_id={self.account_id!r})"


class Settings(BaseSettings):
    """Harvest MCP configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HARVEST_MCP_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    # Ambient credentials (fallback for tool calls without explicit ones)
    access_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("HARVEST_ACCESS_TOKEN", "HARVEST_MCP_ACCESS_TOKEN"),
    )
    account_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("HARVEST_ACCOUNT_ID", "HARVEST_MCP_ACCOUNT_ID"),
    )

    # Harvest API
    base_url: str = HARVEST_API_URL
    user_agent: str = "harvest-mcp"
    timeout: float = 30.0

    # Transport mode
    transport_mode: Literal["stdio", "http"] = "stdio"
    http_host: str = "0.0.0.0"
    http_port: int = 8000

    # API key for HTTP transport
    api_key: Optional[str] = None

    log_level: str = "INFO"

    def ambient_credentials(self) -> Credentials:
        """Get environment credentials as an immutable value."""
        return Credentials(token=self.access_token or None, account_id=self.account_id or None)


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
