"""Firm tools and the executor that dispatches them."""

from .base import BaseTool, ToolArgs
from .executor import DEFAULT_TOOL_CLASSES, ToolExecutor, build_default_tools

__all__ = [
    "BaseTool",
    "DEFAULT_TOOL_CLASSES",
    "ToolArgs",
    "ToolExecutor",
    "build_default_tools",
]
