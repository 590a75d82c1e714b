"""
Time entry tools: log_time, get_time_entries, delete_time_entry.
"""

from harvest_mcp.api.client import HarvestClient
from harvest_mcp.tools.base import Tool, dump


# Largest page Harvest serves; the tool makes a single request
MAX_PER_PAGE = 2000


def format_range(date_from: str, date_to: str) -> str:
    return date_from if date_from == date_to else f"{date_from} to {date_to}"


def log_time(client: HarvestClient, args: dict) -> str:
    payload = {
        "project_id": args["project_id"],
        "task_id": args["task_id"],
        "spent_date": args["spent_date"],
        "hours": args["hours"],
    }
    if args.get("notes") is not None:
        payload["notes"] = args["notes"]

    entry = client.post("/time_entries", payload)
    return f"Success! Time entry created with ID: {entry['id']}"


def get_time_entries(client: HarvestClient, args: dict) -> str:
    params = {"from": args["from"], "to": args["to"], "per_page": MAX_PER_PAGE}
    if args.get("project_id"):
        params["project_id"] = args["project_id"]
    if args.get("user_id"):
        params["user_id"] = args["user_id"]

    result = client.get("/time_entries", params)
    entries = result.get("time_entries") or []
    date_range = format_range(params["from"], params["to"])

    if not entries:
        return f"No time entries found for {date_range}."

    total_hours = sum(entry.get("hours") or 0 for entry in entries)
    noun = "entry" if len(entries) == 1 else "entries"
    summary = f"Found {len(entries)} time {noun} for {date_range}:\n\nTotal hours: {total_hours:.2f}\n\n"

    if result.get("next_page"):
        total = result.get("total_entries", "more")
        summary += (
            f"Note: only the first {len(entries)} of {total} entries are included; "
            f"narrow the date range for complete totals.\n\n"
        )

    return summary + dump(entries)


def delete_time_entry(client: HarvestClient, args: dict) -> str:
    entry_id = args["time_entry_id"]
    client.delete(f"/time_entries/{entry_id}")
    return f"Success! Time entry {entry_id} has been deleted."


TOOLS = [
    Tool(
        name="log_time",
        handler=log_time,
        required=("project_id", "task_id", "hours"),
        date_fields=("spent_date",),
    ),
    Tool(
        name="get_time_entries",
        handler=get_time_entries,
        date_fields=("from", "to"),
    ),
    Tool(
        name="delete_time_entry",
        handler=delete_time_entry,
        required=("time_entry_id",),
    ),
]
