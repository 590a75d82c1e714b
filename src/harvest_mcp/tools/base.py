"""
Tool definition shared by all Harvest tools.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable

from harvest_mcp.api.client import HarvestClient


# Handler receives an open client and normalized arguments, returns display text
Handler = Callable[[HarvestClient, dict], str]


@dataclass(frozen=True)
class Tool:
    """
    A named Harvest operation.

    Attributes:
        name: Tool name used by the agent host
        handler: Function doing the single Harvest call and formatting
        required: Argument names that must be present
        date_fields: Date-bearing arguments this tool accepts
    """

    name: str
    handler: Handler
    required: tuple[str, ...] = ()
    date_fields: tuple[str, ...] = ()


def dump(data: Any) -> str:
    """Pretty JSON for tool output."""
    return json.dumps(data, indent=2, ensure_ascii=False)
