"""
Tool dispatcher.

Runs every tool through the same steps:
1. Resolve credentials (tool arguments override environment, per field)
2. Check required arguments, resolve and default date arguments
3. Open a Harvest client and run the tool's single API call
4. Convert the result, or any error, into a ToolResponse
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from harvest_mcp.api.client import HarvestClient
from harvest_mcp.errors import (
    HarvestMCPError,
    InvalidArgumentsError,
    MissingCredentialsError,
    ToolNotFoundError,
)
from harvest_mcp.settings import Credentials
from harvest_mcp.tools.base import Tool
from harvest_mcp.tools import profile, projects, time_entries, timers
from harvest_mcp.utils.dates import resolve_date


logger = logging.getLogger(__name__)


ALL_TOOLS: list[Tool] = [
    *profile.TOOLS,
    *projects.TOOLS,
    *time_entries.TOOLS,
    *timers.TOOLS,
]


@dataclass(frozen=True)
class ToolResponse:
    """Single textual result of a tool invocation."""

    is_error: bool
    content: str

    @classmethod
    def ok(cls, content: str) -> "ToolResponse":
        return cls(is_error=False, content=content)

    @classmethod
    def error(cls, content: str) -> "ToolResponse":
        return cls(is_error=True, content=content)


def resolve_credentials(args: dict, ambient: Credentials) -> Credentials:
    """
    Combine explicit tool arguments with ambient credentials.

    A non-empty access_token / account_id argument wins over the ambient
    value for that field.

    Raises:
        MissingCredentialsError: If token or account id is still missing.
    """
    token = args.get("access_token") or ambient.token
    account_id = args.get("account_id") or ambient.account_id

    missing = []
    if not token:
        missing.append("access_token")
    if not account_id:
        missing.append("account_id")
    if missing:
        raise MissingCredentialsError(missing)

    return Credentials(token=token, account_id=str(account_id))


def normalize_arguments(tool: Tool, args: dict, today: date) -> dict:
    """
    Check required arguments and resolve date fields.

    spent_date and from default to today; to defaults to the resolved from.

    Raises:
        InvalidArgumentsError: If a required argument is missing.
    """
    missing = [name for name in tool.required if args.get(name) is None]
    if missing:
        raise InvalidArgumentsError(tool.name, missing)

    normalized = dict(args)
    normalized.pop("access_token", None)
    normalized.pop("account_id", None)

    for name in ("spent_date", "from"):
        if name in tool.date_fields:
            value = args.get(name)
            normalized[name] = resolve_date(value, today) if value else today.isoformat()

    if "to" in tool.date_fields:
        value = args.get("to")
        normalized["to"] = resolve_date(value, today) if value else normalized["from"]

    return normalized


ClientFactory = Callable[[Credentials], HarvestClient]


class ToolDispatcher:
    """
    Executes Harvest tools by name.

    Args:
        ambient: Credentials read from the environment at startup
        client_factory: Builds a HarvestClient for resolved credentials
        tools: Tool set (default: all Harvest tools)
        clock: Returns the local calendar day used for date resolution
    """

    def __init__(
        self,
        ambient: Credentials,
        client_factory: ClientFactory = HarvestClient,
        tools: Optional[list[Tool]] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.ambient = ambient
        self.client_factory = client_factory
        self.tools = {tool.name: tool for tool in (tools if tools is not None else ALL_TOOLS)}
        self.clock = clock

    def invoke(self, name: str, args: Optional[dict] = None) -> ToolResponse:
        """Run one tool call. Never raises."""
        args = args or {}
        try:
            tool = self.tools.get(name)
            if tool is None:
                raise ToolNotFoundError(name)

            credentials = resolve_credentials(args, self.ambient)
            normalized = normalize_arguments(tool, args, self.clock())

            with self.client_factory(credentials) as client:
                return ToolResponse.ok(tool.handler(client, normalized))

        except HarvestMCPError as e:
            logger.warning(f"Tool '{name}' failed: {e}")
            return ToolResponse.error(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error in tool '{name}'")
            return ToolResponse.error(f"Unexpected error in '{name}': {e}")
