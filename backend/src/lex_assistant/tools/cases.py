"""Case tools: list, look up, open cases and move them through the workflow."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from src.firm_data import Client, EntityKind

from ..config import DEFAULT_CASE_DEADLINE_DAYS, SUCCESS_MARKER
from ..links import CASES_LINK, CLIENTS_LINK, case_link
from ..models import ToolResult
from .base import (
    BaseTool,
    CaseStatusArg,
    NonEmptyStr,
    OptionalStr,
    PriorityArg,
    RequiredCaseStatus,
    RequiredPriority,
    ToolArgs,
    fmt_date,
    to_json,
)


def case_not_found(identifier: str) -> ToolResult:
    return ToolResult.fail(f'Case "{identifier}" not found. {CASES_LINK}')


def _count_new_matter(client: Client) -> None:
    client.total_matters += 1


def next_case_number(title: str, existing_count: int, year: int | None = None) -> str:
    """``<first two letters of title>-<year>-<count+1, three digits>``."""
    prefix = title[:2].upper()
    year = year or datetime.now(timezone.utc).year
    return f"{prefix}-{year}-{existing_count + 1:03d}"


class ListCasesArgs(ToolArgs):
    status: CaseStatusArg = None
    priority: PriorityArg = None


class ListCasesTool(BaseTool):
    name = "list_cases"
    args_model = ListCasesArgs

    async def run(self, args: ListCasesArgs) -> ToolResult:
        flt = {k: v for k, v in (("status", args.status), ("priority", args.priority)) if v}
        cases = await self._gateway.find(EntityKind.CASE, flt)
        if not cases:
            return ToolResult.ok("No cases found matching the criteria.")
        client_names = {c.id: c.name for c in await self._gateway.find(EntityKind.CLIENT)}
        return ToolResult.ok(
            to_json(
                [
                    {
                        "id": c.id,
                        "title": c.title,
                        "caseNumber": c.case_number,
                        "status": c.status,
                        "priority": c.priority,
                        "deadline": c.deadline.isoformat() if c.deadline else None,
                        "client": client_names.get(c.client, "Unknown"),
                        "link": f"/cases/{c.id}",
                    }
                    for c in cases
                ]
            )
        )


class CaseLookupArgs(ToolArgs):
    case_identifier: NonEmptyStr


class GetCaseInfoTool(BaseTool):
    name = "get_case_info"
    args_model = CaseLookupArgs

    async def run(self, args: CaseLookupArgs) -> ToolResult:
        case = await self._gateway.find_one_fuzzy(EntityKind.CASE, args.case_identifier)
        if case is None:
            return case_not_found(args.case_identifier)
        client = await self._gateway.get(EntityKind.CLIENT, case.client)
        team = [
            m.name
            for m in await self._gateway.find(EntityKind.TEAM_MEMBER)
            if m.id in case.assigned_team
        ]
        return ToolResult.ok(
            f"📋 **Case: {case.title}** ({case.case_number})\n"
            f"- **Status:** {case.status}\n"
            f"- **Priority:** {case.priority}\n"
            f"- **Client:** {client.name if client else 'Unknown'}\n"
            f"- **Assigned Team:** {', '.join(team) or 'None'}\n"
            f"- **Deadline:** {fmt_date(case.deadline)}\n"
            f"- **Description:** {case.description or 'No description'}\n"
            f"\n{case_link(case.id, 'View Case Details')}"
        )


class UpdateCaseStatusArgs(CaseLookupArgs):
    new_status: RequiredCaseStatus


class UpdateCaseStatusTool(BaseTool):
    name = "update_case_status"
    args_model = UpdateCaseStatusArgs

    async def run(self, args: UpdateCaseStatusArgs) -> ToolResult:
        case = await self._gateway.find_one_fuzzy(EntityKind.CASE, args.case_identifier)
        if case is None:
            return case_not_found(args.case_identifier)
        old_status = case.status
        case = await self._gateway.update(EntityKind.CASE, case.id, {"status": args.new_status})
        return ToolResult.ok(
            f'{SUCCESS_MARKER} Case "{case.title}" ({case.case_number}) status updated from '
            f'"{old_status}" to "{args.new_status}". {case_link(case.id)}'
        )


class UpdateCasePriorityArgs(CaseLookupArgs):
    new_priority: RequiredPriority


class UpdateCasePriorityTool(BaseTool):
    name = "update_case_priority"
    args_model = UpdateCasePriorityArgs

    async def run(self, args: UpdateCasePriorityArgs) -> ToolResult:
        case = await self._gateway.find_one_fuzzy(EntityKind.CASE, args.case_identifier)
        if case is None:
            return case_not_found(args.case_identifier)
        old_priority = case.priority
        case = await self._gateway.update(EntityKind.CASE, case.id, {"priority": args.new_priority})
        return ToolResult.ok(
            f'{SUCCESS_MARKER} Case "{case.title}" ({case.case_number}) priority changed from '
            f'"{old_priority}" to "{args.new_priority}". {case_link(case.id)}'
        )


class CreateCaseArgs(ToolArgs):
    title: NonEmptyStr
    client_name: NonEmptyStr
    description: OptionalStr = None
    priority: PriorityArg = None
    status: CaseStatusArg = None


class CreateCaseTool(BaseTool):
    name = "create_case"
    args_model = CreateCaseArgs

    async def run(self, args: CreateCaseArgs) -> ToolResult:
        client = await self._gateway.find_one_fuzzy(EntityKind.CLIENT, args.client_name)
        if client is None:
            return ToolResult.fail(
                f'Client "{args.client_name}" not found. Please create the client first '
                f"or check the spelling. {CLIENTS_LINK}"
            )

        async with self._gateway.locked(EntityKind.CASE):
            case_count = await self._gateway.count(EntityKind.CASE)
            case = await self._gateway.create(
                EntityKind.CASE,
                {
                    "title": args.title,
                    "case_number": next_case_number(args.title, case_count),
                    "client": client.id,
                    "description": args.description or "",
                    "priority": args.priority or "medium",
                    "status": args.status or "intake",
                    "assigned_team": [],
                    "deadline": datetime.now(timezone.utc) + timedelta(days=DEFAULT_CASE_DEADLINE_DAYS),
                },
            )

        client = await self._gateway.modify(EntityKind.CLIENT, client.id, _count_new_matter)

        return ToolResult.ok(
            f'{SUCCESS_MARKER} Case "{case.title}" ({case.case_number}) created successfully for '
            f"client {client.name}. Status: {case.status}, Priority: {case.priority}. "
            f"{case_link(case.id)}"
        )
