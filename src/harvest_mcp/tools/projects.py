"""
list_active_projects tool.

Project and task assignments of the authenticated user, needed to pick
project_id / task_id for log_time and start_timer.
"""

from harvest_mcp.api.client import HarvestClient
from harvest_mcp.tools.base import Tool, dump


def compact_assignments(assignments: list[dict]) -> dict:
    """
    Group assignments by client, then project, listing task ids.

    Returns:
        {
            "Client name": [
                {"project_id": 1, "project": "Website", "code": "WEB",
                 "tasks": [{"id": 10, "name": "Design"}]}
            ]
        }
    """
    grouped: dict[str, list[dict]] = {}

    for assignment in assignments:
        if assignment.get("is_active") is False:
            continue

        project = assignment.get("project") or {}
        client_name = (assignment.get("client") or {}).get("name") or "No client"

        tasks = []
        for task_assignment in assignment.get("task_assignments", []):
            if task_assignment.get("is_active") is False:
                continue
            task = task_assignment.get("task") or {}
            tasks.append({"id": task.get("id"), "name": task.get("name")})

        grouped.setdefault(client_name, []).append({
            "project_id": project.get("id"),
            "project": project.get("name"),
            "code": project.get("code"),
            "tasks": tasks,
        })

    return grouped


def list_active_projects(client: HarvestClient, args: dict) -> str:
    result = client.get("/users/me/project_assignments")
    assignments = result.get("project_assignments", [])

    if args.get("format") == "full":
        return dump(assignments)

    return dump(compact_assignments(assignments))


TOOLS = [
    Tool(
        name="list_active_projects",
        handler=list_active_projects,
    ),
]
