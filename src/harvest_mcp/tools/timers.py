"""
Timer tools: start_timer, stop_timer, restart_timer, get_running_timer.

A timer is a Harvest time entry with is_running=true. Its state lives in
Harvest only:

    none -> running (start) -> stopped (stop) -> running (restart) -> ...
"""

from harvest_mcp.api.client import HarvestClient
from harvest_mcp.tools.base import Tool


def describe_entry(entry: dict) -> str:
    """One-line summary: id, project / task, hours, notes."""
    project = (entry.get("project") or {}).get("name") or "Unknown project"
    task = (entry.get("task") or {}).get("name") or "Unknown task"
    hours = entry.get("hours") or 0
    line = f"Time entry {entry.get('id')}: {project} / {task}, {hours:.2f} hours"
    if entry.get("notes"):
        line += f" ({entry['notes']})"
    return line


def start_timer(client: HarvestClient, args: dict) -> str:
    # Omitting hours makes Harvest start the entry running
    payload = {
        "project_id": args["project_id"],
        "task_id": args["task_id"],
        "spent_date": args["spent_date"],
    }
    if args.get("notes") is not None:
        payload["notes"] = args["notes"]

    entry = client.post("/time_entries", payload)
    return f"Timer started! Time entry ID: {entry['id']}"


def stop_timer(client: HarvestClient, args: dict) -> str:
    entry_id = args["time_entry_id"]
    entry = client.patch(f"/time_entries/{entry_id}/stop")
    return f"Timer stopped. Time entry {entry_id} logged {entry.get('hours') or 0:.2f} hours."


def restart_timer(client: HarvestClient, args: dict) -> str:
    entry_id = args["time_entry_id"]
    client.patch(f"/time_entries/{entry_id}/restart")
    return f"Timer restarted for time entry {entry_id}."


def get_running_timer(client: HarvestClient, args: dict) -> str:
    result = client.get("/time_entries", {"is_running": "true"})
    entries = result.get("time_entries") or []

    if not entries:
        return "No timer is currently running."

    return "Running: " + describe_entry(entries[0])


TOOLS = [
    Tool(
        name="start_timer",
        handler=start_timer,
        required=("project_id", "task_id"),
        date_fields=("spent_date",),
    ),
    Tool(
        name="stop_timer",
        handler=stop_timer,
        required=("time_entry_id",),
    ),
    Tool(
        name="restart_timer",
        handler=restart_timer,
        required=("time_entry_id",),
    ),
    Tool(
        name="get_running_timer",
        handler=get_running_timer,
    ),
]
