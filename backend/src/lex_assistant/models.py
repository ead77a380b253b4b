"""Data models for tools and chat turns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

from src.llm_core import Message


# ---------------------------------------------------------------------------
# HTTP payloads
# ---------------------------------------------------------------------------


class ChatRequest(BaseModel):
    """Request body for POST /api/ai/chat: the full client-side history."""

    messages: list[Message] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@dataclass
class ToolResult:
    """Result of a single tool execution.

    Not-found answers, clarifying questions and caught exceptions are all
    failed results; ``text`` folds either side into the reply string.
    """

    success: bool
    content: str | None = None
    error: str | None = None

    @property
    def text(self) -> str:
        return (self.content if self.success else self.error) or ""

    @classmethod
    def ok(cls, content: str) -> ToolResult:
        return cls(success=True, content=content)

    @classmethod
    def fail(cls, error: str) -> ToolResult:
        return cls(success=False, error=error)


@dataclass
class ToolDef:
    """Tool definition for the executor and the LLM."""

    name: str
    description: str
    parameters: dict[str, Any]  # JSON Schema

    def to_tool_schema(self) -> dict[str, Any]:
        """Standard function-calling schema (OpenAI-style) for any LLM provider."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }
