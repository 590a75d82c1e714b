"""
Harvest MCP Server.

FastMCP server exposing Harvest time tracking tools.
Supports both stdio (local) and HTTP (cloud) transport modes.

Tools (9 total):
- get_my_profile: Verify credentials
- list_active_projects: Projects and task ids available for logging
- log_time, get_time_entries, delete_time_entry: Time entries
- start_timer, stop_timer, restart_timer, get_running_timer: Timers
"""

import logging
import sys
from functools import partial
from typing import Annotated, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from harvest_mcp.api.client import HarvestClient
from harvest_mcp.settings import get_settings
from harvest_mcp.tools.dispatcher import ToolDispatcher


logger = logging.getLogger(__name__)

DATE_HELP = "YYYY-MM-DD or relative ('today', 'yesterday', '3 days ago', 'last monday', 'this friday')"


def create_dispatcher() -> ToolDispatcher:
    """Build the dispatcher from settings (credentials read once here)."""
    settings = get_settings()
    client_factory = partial(
        HarvestClient,
        base_url=settings.base_url,
        user_agent=settings.user_agent,
        timeout=settings.timeout,
    )
    return ToolDispatcher(settings.ambient_credentials(), client_factory=client_factory)


dispatcher = create_dispatcher()


def _run(name: str, **args) -> str:
    """Invoke a tool and raise ToolError so the host sees isError=true."""
    response = dispatcher.invoke(name, {k: v for k, v in args.items() if v is not None})
    if response.is_error:
        raise ToolError(response.content)
    return response.content


# Create server
mcp = FastMCP(
    name="harvest",
    instructions=f"""Harvest time tracking.

CREDENTIALS:
access_token and account_id are optional on every tool when
HARVEST_ACCESS_TOKEN / HARVEST_ACCOUNT_ID are set for the server.

WORKFLOW:
1. list_active_projects to find project_id and task_id
2. log_time for completed work, or start_timer / stop_timer for live tracking
3. get_time_entries to review (from/to default to today)

DATES: {DATE_HELP}"""
)


@mcp.tool()
def get_my_profile(
    access_token: Optional[str] = None,
    account_id: Optional[str] = None,
) -> str:
    """
    Verify credentials and get details of the authenticated user.

    Args:
        access_token: Harvest Personal Access Token (optional if set via env)
        account_id: Harvest Account ID (optional if set via env)
    """
    return _run("get_my_profile", access_token=access_token, account_id=account_id)


@mcp.tool()
def list_active_projects(
    format: Literal["compact", "full"] = "compact",
    access_token: Optional[str] = None,
    account_id: Optional[str] = None,
) -> str:
    """
    List active projects and their tasks.

    Args:
        format: 'compact' groups client -> project -> task ids; 'full' returns raw assignments
        access_token: Harvest Personal Access Token (optional if set via env)
        account_id: Harvest Account ID (optional if set via env)
    """
    return _run("list_active_projects", format=format, access_token=access_token, account_id=account_id)


@mcp.tool()
def log_time(
    project_id: int,
    task_id: int,
    hours: float,
    spent_date: Optional[str] = None,
    notes: Optional[str] = None,
    access_token: Optional[str] = None,
    account_id: Optional[str] = None,
) -> str:
    """
    Log completed time for a project and task.

    Args:
        project_id: The ID of the project
        task_id: The ID of the task
        hours: Number of hours to log
        spent_date: Date of the work, defaults to today. YYYY-MM-DD or relative ('yesterday', 'last monday')
        notes: Notes for the time entry
        access_token: Harvest Personal Access Token (optional if set via env)
        account_id: Harvest Account ID (optional if set via env)
    """
    return _run(
        "log_time",
        project_id=project_id,
        task_id=task_id,
        hours=hours,
        spent_date=spent_date,
        notes=notes,
        access_token=access_token,
        account_id=account_id,
    )


@mcp.tool()
def get_time_entries(
    from_: Annotated[Optional[str], Field(alias="from")] = None,
    to: Optional[str] = None,
    project_id: Optional[int] = None,
    user_id: Optional[int] = None,
    access_token: Optional[str] = None,
    account_id: Optional[str] = None,
) -> str:
    """
    Get time entries for a date or date range, with count and total hours.

    Args:
        from: Start date, defaults to today. YYYY-MM-DD or relative ('yesterday', '1 week ago')
        to: End date, defaults to the start date. YYYY-MM-DD or relative
        project_id: Filter by project ID
        user_id: Filter by user ID
        access_token: Harvest Personal Access Token (optional if set via env)
        account_id: Harvest Account ID (optional if set via env)
    """
    # 'from' is a keyword, so it arrives through the alias
    args = {
        "from": from_,
        "to": to,
        "project_id": project_id,
        "user_id": user_id,
        "access_token": access_token,
        "account_id": account_id,
    }
    return _run("get_time_entries", **args)


@mcp.tool()
def delete_time_entry(
    time_entry_id: int,
    access_token: Optional[str] = None,
    account_id: Optional[str] = None,
) -> str:
    """
    Delete a specific time entry.

    Args:
        time_entry_id: The ID of the time entry to delete
        access_token: Harvest Personal Access Token (optional if set via env)
        account_id: Harvest Account ID (optional if set via env)
    """
    return _run("delete_time_entry", time_entry_id=time_entry_id, access_token=access_token, account_id=account_id)


@mcp.tool()
def start_timer(
    project_id: int,
    task_id: int,
    spent_date: Optional[str] = None,
    notes: Optional[str] = None,
    access_token: Optional[str] = None,
    account_id: Optional[str] = None,
) -> str:
    """
    Start a running timer for a project and task.

    Args:
        project_id: The ID of the project
        task_id: The ID of the task
        spent_date: Date for the entry, defaults to today. YYYY-MM-DD or relative
        notes: Notes for the time entry
        access_token: Harvest Personal Access Token (optional if set via env)
        account_id: Harvest Account ID (optional if set via env)
    """
    return _run(
        "start_timer",
        project_id=project_id,
        task_id=task_id,
        spent_date=spent_date,
        notes=notes,
        access_token=access_token,
        account_id=account_id,
    )


@mcp.tool()
def stop_timer(
    time_entry_id: int,
    access_token: Optional[str] = None,
    account_id: Optional[str] = None,
) -> str:
    """
    Stop a running timer and record its elapsed hours.

    Args:
        time_entry_id: The ID of the running time entry
        access_token: Harvest Personal Access Token (optional if set via env)
        account_id: Harvest Account ID (optional if set via env)
    """
    return _run("stop_timer", time_entry_id=time_entry_id, access_token=access_token, account_id=account_id)


@mcp.tool()
def restart_timer(
    time_entry_id: int,
    access_token: Optional[str] = None,
    account_id: Optional[str] = None,
) -> str:
    """
    Resume tracking on a stopped time entry.

    Args:
        time_entry_id: The ID of the stopped time entry
        access_token: Harvest Personal Access Token (optional if set via env)
        account_id: Harvest Account ID (optional if set via env)
    """
    return _run("restart_timer", time_entry_id=time_entry_id, access_token=access_token, account_id=account_id)


@mcp.tool()
def get_running_timer(
    access_token: Optional[str] = None,
    account_id: Optional[str] = None,
) -> str:
    """
    Show the currently running timer and its elapsed hours.

    Args:
        access_token: Harvest Personal Access Token (optional if set via env)
        account_id: Harvest Account ID (optional if set via env)
    """
    return _run("get_running_timer", access_token=access_token, account_id=account_id)


def create_http_app():
    """
    Create FastAPI app for HTTP transport mode.

    Includes:
    - API key authentication middleware
    - Health check
    - MCP endpoints under /mcp/harvest
    """
    from fastapi import FastAPI, Request
    from fastapi.responses import JSONResponse

    settings = get_settings()

    # Get MCP app first to access its lifespan
    mcp_app = mcp.http_app()

    app = FastAPI(
        title="Harvest MCP",
        description="MCP server for Harvest time tracking",
        version="0.1.0",
        lifespan=mcp_app.lifespan,
    )

    @app.middleware("http")
    async def check_auth(request: Request, call_next):
        if request.url.path in ["/health", "/mcp/harvest/health"]:
            return await call_next(request)

        # No auth configured, allow all
        if not settings.api_key:
            return await call_next(request)

        api_key = None
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            api_key = auth_header[7:]
        if not api_key:
            api_key = request.headers.get("X-API-Key")
        if not api_key:
            api_key = request.query_params.get("api_key")

        if api_key == settings.api_key:
            return await call_next(request)

        return JSONResponse(
            {"error": "Unauthorized", "message": "Invalid or missing API key"},
            status_code=401,
        )

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "transport": "http", "service": "harvest-mcp"}

    @app.get("/mcp/harvest/health")
    async def harvest_health_check():
        return {"status": "ok", "transport": "http", "service": "harvest-mcp"}

    app.mount("/mcp/harvest", mcp_app)

    return app


def configure_logging(level: str) -> None:
    """Log to stderr; stdout belongs to the stdio transport."""
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def serve():
    """Run MCP server with configured transport."""
    settings = get_settings()
    configure_logging(settings.log_level)

    if not settings.ambient_credentials().complete:
        logger.info("HARVEST_ACCESS_TOKEN/HARVEST_ACCOUNT_ID not set; tools need explicit credentials")

    if settings.transport_mode == "http":
        import uvicorn

        app = create_http_app()
        uvicorn.run(
            app,
            host=settings.http_host,
            port=settings.http_port,
            log_level=settings.log_level.lower(),
        )
    else:
        mcp.run()


if __name__ == "__main__":
    serve()
