"""Team member tools."""

from __future__ import annotations

import asyncio

from src.firm_data import EntityKind

from ..links import TEAM_LINK
from ..models import ToolResult
from .base import BaseTool, NonEmptyStr, RoleArg, ToolArgs, to_json


class ListTeamMembersArgs(ToolArgs):
    role: RoleArg = None


class ListTeamMembersTool(BaseTool):
    name = "list_team_members"
    args_model = ListTeamMembersArgs

    async def run(self, args: ListTeamMembersArgs) -> ToolResult:
        flt = {"role": args.role} if args.role else {}
        members = await self._gateway.find(EntityKind.TEAM_MEMBER, flt)
        if not members:
            return ToolResult.ok("No team members found matching the criteria.")
        return ToolResult.ok(
            to_json(
                [
                    {"name": m.name, "email": m.email, "role": m.role, "specialties": m.specialties}
                    for m in members
                ]
            )
        )


class GetTeamMemberInfoArgs(ToolArgs):
    member_name: NonEmptyStr


class GetTeamMemberInfoTool(BaseTool):
    name = "get_team_member_info"
    args_model = GetTeamMemberInfoArgs

    async def run(self, args: GetTeamMemberInfoArgs) -> ToolResult:
        member = await self._gateway.find_one_fuzzy(EntityKind.TEAM_MEMBER, args.member_name)
        if member is None:
            return ToolResult.fail(
                f'Team member "{args.member_name}" not found. {TEAM_LINK}'
            )
        tasks_count, cases_count = await asyncio.gather(
            self._gateway.count(EntityKind.TASK, {"assigned_to": member.id}),
            self._gateway.count(EntityKind.CASE, {"assigned_team": member.id}),
        )
        return ToolResult.ok(
            to_json(
                {
                    "name": member.name,
                    "email": member.email,
                    "role": member.role,
                    "specialties": member.specialties,
                    "assignedTasksCount": tasks_count,
                    "assignedCasesCount": cases_count,
                }
            )
        )
