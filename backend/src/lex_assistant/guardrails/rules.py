"""Guardrail rule protocol: turn context, shared services and the rule record."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from src.firm_data import FirmGateway
from src.llm_core import Message

from ..tools import ToolExecutor


@dataclass
class TurnContext:
    """The incoming history plus the two messages every rule looks at."""

    messages: list[Message]
    last_user: Optional[str] = None
    prev_assistant: Optional[str] = None

    @classmethod
    def from_messages(cls, messages: list[Message]) -> TurnContext:
        last_user = None
        prev_assistant = None
        if messages and messages[-1].role == "user":
            last_user = messages[-1].content
        if len(messages) >= 2 and messages[-2].role == "assistant":
            prev_assistant = messages[-2].content
        return cls(messages=list(messages), last_user=last_user, prev_assistant=prev_assistant)

    @property
    def text(self) -> str:
        """The last user message, lower-cased and stripped."""
        return (self.last_user or "").lower().strip()

    def scan_assistant(self, pattern: re.Pattern[str]) -> Optional[re.Match[str]]:
        """Most recent assistant message matching ``pattern``, searching backward."""
        for msg in reversed(self.messages):
            if msg.role != "assistant":
                continue
            found = pattern.search(msg.content or "")
            if found:
                return found
        return None


@dataclass
class GuardrailServices:
    gateway: FirmGateway
    executor: ToolExecutor


# The predicate's truthy value (often a regex match) is handed to the handler.
# A handler returning None lets evaluation continue with the next rule.
Predicate = Callable[[TurnContext], Any]
Handler = Callable[[TurnContext, Any, GuardrailServices], Awaitable[Optional[str]]]


@dataclass(frozen=True)
class GuardrailRule:
    name: str
    predicate: Predicate
    handler: Handler
