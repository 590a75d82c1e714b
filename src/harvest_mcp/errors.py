"""
Error types for Harvest MCP.

Every error raised while handling a tool call derives from HarvestMCPError
and is converted to an error response at the dispatcher boundary.
"""

from typing import Optional


class HarvestMCPError(Exception):
    """Base class for tool invocation errors."""
    pass


class MissingCredentialsError(HarvestMCPError):
    """Neither tool arguments nor environment supply token and account id."""

    def __init__(self, missing: Optional[list[str]] = None):
        self.missing = missing or ["access_token", "account_id"]
        super().__init__(
            "Missing required credentials: access_token and account_id must be provided "
            "either as arguments or via HARVEST_ACCESS_TOKEN and HARVEST_ACCOUNT_ID "
            "environment variables."
        )


class HarvestAPIError(HarvestMCPError):
    """
    Harvest API call failed.

    Raised for HTTP error statuses and transport failures alike.
    status_code is None when the request never got a response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": "harvest_api_error",
            "status_code": self.status_code,
            "message": self.message,
        }


class ToolNotFoundError(HarvestMCPError):
    """Invocation names a tool outside the registered set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: '{name}'")


class InvalidArgumentsError(HarvestMCPError):
    """Required tool arguments are missing."""

    def __init__(self, tool: str, missing: list[str]):
        self.tool = tool
        self.missing = missing
        super().__init__(
            f"Missing required arguments for '{tool}': {', '.join(missing)}"
        )
