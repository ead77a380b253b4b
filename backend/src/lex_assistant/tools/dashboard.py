"""Firm-wide summary tool."""

from __future__ import annotations

import asyncio

from src.firm_data import EntityKind

from ..models import ToolResult
from .base import BaseTool, ToolArgs, to_json


class GetDashboardSummaryTool(BaseTool):
    name = "get_dashboard_summary"

    async def run(self, args: ToolArgs) -> ToolResult:
        count = self._gateway.count
        (
            clients,
            cases,
            tasks,
            team,
            active_cases,
            pending_tasks,
            high_priority_tasks,
        ) = await asyncio.gather(
            count(EntityKind.CLIENT),
            count(EntityKind.CASE),
            count(EntityKind.TASK),
            count(EntityKind.TEAM_MEMBER),
            count(EntityKind.CASE, {"status": {"$ne": "closed"}}),
            count(EntityKind.TASK, {"status": "pending"}),
            count(EntityKind.TASK, {"priority": "high", "status": {"$ne": "completed"}}),
        )
        return ToolResult.ok(
            to_json(
                {
                    "totalClients": clients,
                    "totalCases": cases,
                    "totalTasks": tasks,
                    "totalTeamMembers": team,
                    "activeCases": active_cases,
                    "pendingTasks": pending_tasks,
                    "highPriorityTasks": high_priority_tasks,
                }
            )
        )
