"""Tool catalog passed to the model on every non-guardrailed turn.

Tool names and argument names are the dispatch keys of the tool executor;
``tests/test_tools.py`` checks that both sides stay in step.
"""

from __future__ import annotations

from typing import Any

from .config import CASE_STATUSES, CLIENT_STATUSES, PRIORITIES, ROLES, TASK_STATUSES
from .models import ToolDef

CATALOG_VERSION = "2024.2"


def _optional(kind: str, description: str, enum: tuple[str, ...] | None = None) -> dict[str, Any]:
    prop: dict[str, Any] = {"type": [kind, "null"], "description": description}
    if enum:
        prop["enum"] = list(enum)
    return prop


def _required(kind: str, description: str, enum: tuple[str, ...] | None = None) -> dict[str, Any]:
    prop: dict[str, Any] = {"type": kind, "description": description}
    if enum:
        prop["enum"] = list(enum)
    return prop


def _object(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required or []}


TOOL_CATALOG: list[ToolDef] = [
    # ===== CLIENT TOOLS =====
    ToolDef(
        name="list_clients",
        description="Get a list of all clients with optional status filter",
        parameters=_object(
            {"status": _optional("string", "Filter by client status (optional)", CLIENT_STATUSES)},
        ),
    ),
    ToolDef(
        name="get_client_info",
        description="Get detailed information about a specific client by name",
        parameters=_object(
            {"clientName": _required("string", "Name of the client to look up")},
            ["clientName"],
        ),
    ),
    ToolDef(
        name="create_client",
        description="Create a new client in the system",
        parameters=_object(
            {
                "name": _required("string", "Client name"),
                "email": _required("string", "Client email address"),
                "phone": _optional("string", "Client phone number (optional)"),
                "companyName": _optional("string", "Company name (optional)"),
                "status": _optional("string", "Client status (optional)", CLIENT_STATUSES),
            },
            ["name", "email"],
        ),
    ),
    ToolDef(
        name="update_client",
        description="Update an existing client's information",
        parameters=_object(
            {
                "clientName": _required("string", "Current name of the client to update"),
                "newName": _optional("string", "New name (optional)"),
                "email": _optional("string", "New email (optional)"),
                "phone": _optional("string", "New phone (optional)"),
                "status": _optional("string", "New status (optional)", CLIENT_STATUSES),
            },
            ["clientName"],
        ),
    ),
    ToolDef(
        name="add_client_note",
        description="Add a note to a client's profile",
        parameters=_object(
            {
                "clientName": _required("string", "Name of the client"),
                "noteContent": _required("string", "Content of the note"),
            },
            ["clientName", "noteContent"],
        ),
    ),
    # ===== CASE TOOLS =====
    ToolDef(
        name="list_cases",
        description="Get a list of all cases with optional filters",
        parameters=_object(
            {
                "status": _optional("string", "Filter by case status (optional)", CASE_STATUSES),
                "priority": _optional("string", "Filter by priority (optional)", PRIORITIES),
            },
        ),
    ),
    ToolDef(
        name="get_case_info",
        description="Get detailed information about a specific case by title or case number",
        parameters=_object(
            {"caseIdentifier": _required("string", "Case title or case number")},
            ["caseIdentifier"],
        ),
    ),
    ToolDef(
        name="update_case_status",
        description="Update the status of a case (move it through the workflow)",
        parameters=_object(
            {
                "caseIdentifier": _required("string", "Case title or case number"),
                "newStatus": _required("string", "New status for the case", CASE_STATUSES),
            },
            ["caseIdentifier", "newStatus"],
        ),
    ),
    ToolDef(
        name="update_case_priority",
        description="Change the priority of an existing case",
        parameters=_object(
            {
                "caseIdentifier": _required("string", "Case title or case number"),
                "newPriority": _required("string", "New priority for the case", PRIORITIES),
            },
            ["caseIdentifier", "newPriority"],
        ),
    ),
    ToolDef(
        name="create_case",
        description="Create a new legal case in the system",
        parameters=_object(
            {
                "title": _required("string", "Title of the case (e.g., 'Smith vs. Jones')"),
                "clientName": _required("string", "Name of the client this case is for"),
                "description": _optional("string", "Description of the case (optional)"),
                "priority": _optional("string", "Priority level of the case (optional)", PRIORITIES),
                "status": _optional(
                    "string", "Initial status of the case (defaults to intake, optional)", CASE_STATUSES
                ),
            },
            ["title", "clientName"],
        ),
    ),
    # ===== TASK TOOLS =====
    ToolDef(
        name="list_tasks",
        description="Get a list of all tasks with optional filters",
        parameters=_object(
            {
                "status": _optional("string", "Filter by task status (optional)", TASK_STATUSES),
                "priority": _optional("string", "Filter by priority (optional)", PRIORITIES),
                "assigneeName": _optional("string", "Filter by assignee name (optional)"),
            },
        ),
    ),
    ToolDef(
        name="get_task_info",
        description="Get detailed information about a specific task by title",
        parameters=_object(
            {"taskTitle": _required("string", "Title of the task")},
            ["taskTitle"],
        ),
    ),
    ToolDef(
        name="create_task",
        description="Create a new task",
        parameters=_object(
            {
                "title": _required("string", "Task title"),
                "description": _optional("string", "Task description (optional)"),
                "assigneeName": _required("string", "Name of the team member to assign"),
                "priority": _optional("string", "Task priority (optional)", PRIORITIES),
                "dueDate": _optional("string", "Due date in YYYY-MM-DD format (optional)"),
                "caseName": _optional("string", "Related case title (optional)"),
            },
            ["title", "assigneeName"],
        ),
    ),
    ToolDef(
        name="update_task_status",
        description="Update the status of a task",
        parameters=_object(
            {
                "taskTitle": _required("string", "Title of the task"),
                "newStatus": _required("string", "New status", TASK_STATUSES),
            },
            ["taskTitle", "newStatus"],
        ),
    ),
    # ===== TEAM TOOLS =====
    ToolDef(
        name="list_team_members",
        description="Get a list of all team members with optional role filter",
        parameters=_object(
            {"role": _optional("string", "Filter by role (optional)", ROLES)},
        ),
    ),
    ToolDef(
        name="get_team_member_info",
        description="Get detailed information about a team member",
        parameters=_object(
            {"memberName": _required("string", "Name of the team member")},
            ["memberName"],
        ),
    ),
    # ===== DASHBOARD TOOLS =====
    ToolDef(
        name="get_dashboard_summary",
        description=(
            "Get a summary of the firm's current status including counts of clients, "
            "cases, tasks, and team members"
        ),
        parameters=_object({}),
    ),
]

def tool_schemas() -> list[dict[str, Any]]:
    """The catalog in function-calling format, in declaration order."""
    return [t.to_tool_schema() for t in TOOL_CATALOG]
