"""Lex: the law firm assistant dialogue engine."""

from .catalog import CATALOG_VERSION, TOOL_CATALOG, tool_schemas
from .config import AssistantSettings
from .guardrails import GuardrailLayer
from .handler import ChatTurnHandler
from .loop import DialogueDriver, DriverOptions
from .models import ChatRequest, ErrorResponse, ToolDef, ToolResult
from .tools import ToolExecutor

__all__ = [
    "AssistantSettings",
    "CATALOG_VERSION",
    "ChatRequest",
    "ChatTurnHandler",
    "DialogueDriver",
    "DriverOptions",
    "ErrorResponse",
    "GuardrailLayer",
    "TOOL_CATALOG",
    "ToolDef",
    "ToolExecutor",
    "ToolResult",
    "tool_schemas",
]
