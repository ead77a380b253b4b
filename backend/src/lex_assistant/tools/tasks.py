"""Task tools."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone

from src.firm_data import EntityKind

from ..config import DEFAULT_TASK_DUE_DAYS, SUCCESS_MARKER
from ..links import TASKS_LINK, TEAM_LINK
from ..models import ToolResult
from .base import (
    BaseTool,
    NonEmptyStr,
    OptionalStr,
    PriorityArg,
    RequiredTaskStatus,
    TaskStatusArg,
    ToolArgs,
    fmt_date,
    to_json,
)

logger = logging.getLogger(__name__)


def task_not_found(title: str) -> ToolResult:
    return ToolResult.fail(f'Task "{title}" not found. {TASKS_LINK}')


def parse_due_date(raw: str | None) -> datetime:
    """``YYYY-MM-DD`` at midnight UTC, or the default horizon when absent or unreadable."""
    if raw:
        try:
            return datetime.combine(date.fromisoformat(raw.strip()[:10]), time.min, tzinfo=timezone.utc)
        except ValueError:
            logger.warning("Ignoring unreadable due date %r", raw)
    return datetime.now(timezone.utc) + timedelta(days=DEFAULT_TASK_DUE_DAYS)


class ListTasksArgs(ToolArgs):
    status: TaskStatusArg = None
    priority: PriorityArg = None
    assignee_name: OptionalStr = None


class ListTasksTool(BaseTool):
    name = "list_tasks"
    args_model = ListTasksArgs

    async def run(self, args: ListTasksArgs) -> ToolResult:
        flt = {k: v for k, v in (("status", args.status), ("priority", args.priority)) if v}
        tasks = await self._gateway.find(EntityKind.TASK, flt)
        members = {m.id: m.name for m in await self._gateway.find(EntityKind.TEAM_MEMBER)}
        cases = {c.id: c.title for c in await self._gateway.find(EntityKind.CASE)}

        if args.assignee_name:
            needle = args.assignee_name.lower()
            tasks = [t for t in tasks if needle in members.get(t.assigned_to, "").lower()]

        if not tasks:
            return ToolResult.ok("No tasks found matching the criteria.")
        return ToolResult.ok(
            to_json(
                [
                    {
                        "title": t.title,
                        "description": t.description,
                        "status": t.status,
                        "priority": t.priority,
                        "dueDate": t.due_date.isoformat() if t.due_date else None,
                        "assignedTo": members.get(t.assigned_to, "Unassigned"),
                        "relatedCase": cases.get(t.related_case or "", "None"),
                    }
                    for t in tasks
                ]
            )
        )


class TaskLookupArgs(ToolArgs):
    task_title: NonEmptyStr


class GetTaskInfoTool(BaseTool):
    name = "get_task_info"
    args_model = TaskLookupArgs

    async def run(self, args: TaskLookupArgs) -> ToolResult:
        task = await self._gateway.find_one_fuzzy(EntityKind.TASK, args.task_title)
        if task is None:
            return task_not_found(args.task_title)
        assignee = await self._gateway.get(EntityKind.TEAM_MEMBER, task.assigned_to)
        case = await self._gateway.get(EntityKind.CASE, task.related_case)
        return ToolResult.ok(
            f"📝 **Task: {task.title}**\n"
            f"- **Status:** {task.status}\n"
            f"- **Priority:** {task.priority}\n"
            f"- **Assigned To:** {assignee.name if assignee else 'Unassigned'}\n"
            f"- **Related Case:** {case.title if case else 'None'}\n"
            f"- **Due:** {fmt_date(task.due_date)}\n"
            f"- **Description:** {task.description or 'No description'}\n"
            f"\n{TASKS_LINK}"
        )


class CreateTaskArgs(ToolArgs):
    title: NonEmptyStr
    assignee_name: NonEmptyStr
    description: OptionalStr = None
    priority: PriorityArg = None
    due_date: OptionalStr = None
    case_name: OptionalStr = None


class CreateTaskTool(BaseTool):
    name = "create_task"
    args_model = CreateTaskArgs

    async def run(self, args: CreateTaskArgs) -> ToolResult:
        assignee = await self._gateway.find_one_fuzzy(EntityKind.TEAM_MEMBER, args.assignee_name)
        if assignee is None:
            return ToolResult.fail(
                f'Team member "{args.assignee_name}" not found. Cannot create task. {TEAM_LINK}'
            )

        # An unresolved case name leaves the task unlinked
        related_case_id = None
        if args.case_name:
            related = await self._gateway.find_one_fuzzy(EntityKind.CASE, args.case_name)
            if related is not None:
                related_case_id = related.id

        task = await self._gateway.create(
            EntityKind.TASK,
            {
                "title": args.title,
                "description": args.description or "",
                "assigned_to": assignee.id,
                "priority": args.priority or "medium",
                "status": "pending",
                "due_date": parse_due_date(args.due_date),
                "related_case": related_case_id,
            },
        )
        return ToolResult.ok(
            f'{SUCCESS_MARKER} Task "{task.title}" created and assigned to {assignee.name}. {TASKS_LINK}'
        )


class UpdateTaskStatusArgs(TaskLookupArgs):
    new_status: RequiredTaskStatus


class UpdateTaskStatusTool(BaseTool):
    name = "update_task_status"
    args_model = UpdateTaskStatusArgs

    async def run(self, args: UpdateTaskStatusArgs) -> ToolResult:
        task = await self._gateway.find_one_fuzzy(EntityKind.TASK, args.task_title)
        if task is None:
            return task_not_found(args.task_title)
        old_status = task.status
        task = await self._gateway.update(EntityKind.TASK, task.id, {"status": args.new_status})
        return ToolResult.ok(
            f'{SUCCESS_MARKER} Task "{task.title}" status updated from "{old_status}" to '
            f'"{args.new_status}". {TASKS_LINK}'
        )
