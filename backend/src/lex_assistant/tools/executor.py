"""Tool executor: dispatches a tool call by name and folds every outcome into a ToolResult."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from pydantic import ValidationError

from src.firm_data import FirmGateway

from ..models import ToolResult
from .base import BaseTool
from .cases import (
    CreateCaseTool,
    GetCaseInfoTool,
    ListCasesTool,
    UpdateCasePriorityTool,
    UpdateCaseStatusTool,
)
from .clients import (
    AddClientNoteTool,
    CreateClientTool,
    GetClientInfoTool,
    ListClientsTool,
    UpdateClientTool,
)
from .dashboard import GetDashboardSummaryTool
from .tasks import CreateTaskTool, GetTaskInfoTool, ListTasksTool, UpdateTaskStatusTool
from .team import GetTeamMemberInfoTool, ListTeamMembersTool

logger = logging.getLogger(__name__)

DEFAULT_TOOL_CLASSES: tuple[type[BaseTool], ...] = (
    ListClientsTool,
    GetClientInfoTool,
    CreateClientTool,
    UpdateClientTool,
    AddClientNoteTool,
    ListCasesTool,
    GetCaseInfoTool,
    UpdateCaseStatusTool,
    UpdateCasePriorityTool,
    CreateCaseTool,
    ListTasksTool,
    GetTaskInfoTool,
    CreateTaskTool,
    UpdateTaskStatusTool,
    ListTeamMembersTool,
    GetTeamMemberInfoTool,
    GetDashboardSummaryTool,
)


def build_default_tools(gateway: FirmGateway) -> list[BaseTool]:
    """One instance of every Lex tool, bound to ``gateway``."""
    return [cls(gateway) for cls in DEFAULT_TOOL_CLASSES]


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err.get("loc", ())) or "arguments"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


class ToolExecutor:
    """Runs Lex tools by name against the firm gateway.

    ``execute`` never raises: unknown names, bad arguments and gateway
    failures all come back as failed results.
    """

    def __init__(self, gateway: FirmGateway, tools: Iterable[BaseTool] | None = None) -> None:
        self.gateway = gateway
        self._tools: dict[str, BaseTool] = {
            t.name: t for t in (tools if tools is not None else build_default_tools(gateway))
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    async def execute(self, name: str, args: dict[str, Any] | str | None = None) -> ToolResult:
        tool = self._tools.get(name)
        if tool is None:
            logger.warning("Unknown function requested: %s", name)
            return ToolResult.fail(f"Unknown function: {name}")

        if isinstance(args, str):
            try:
                args = json.loads(args) if args.strip() else {}
            except json.JSONDecodeError as e:
                return ToolResult.fail(f"Invalid arguments for {name}: {e}")
        if not isinstance(args, dict):
            args = {}

        logger.info("Executing tool %s with args %s", name, args)
        try:
            result = await tool.execute(args)
        except ValidationError as e:
            return ToolResult.fail(f"Invalid arguments for {name}: {_format_validation_error(e)}")
        except Exception as e:
            logger.exception("Tool %s failed", name)
            return ToolResult.fail(f"Error executing {name}: {e}")

        if not result.success:
            logger.info("Tool %s returned: %s", name, result.error)
        return result

    async def run(self, name: str, args: dict[str, Any] | str | None = None) -> str:
        """Execute and return the single user-facing text."""
        return (await self.execute(name, args)).text
