"""
get_my_profile tool.

Verify credentials and show who they belong to.
"""

from harvest_mcp.api.client import HarvestClient
from harvest_mcp.tools.base import Tool


def get_my_profile(client: HarvestClient, args: dict) -> str:
    user = client.get("/users/me")
    name = f"{user.get('first_name', '')} {user.get('last_name', '')}".strip()
    if user.get("email"):
        return f"Authenticated as: {name} ({user['email']})"
    return f"Authenticated as: {name}"


TOOLS = [
    Tool(
        name="get_my_profile",
        handler=get_my_profile,
    ),
]
