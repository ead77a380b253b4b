"""Model dialogue driver: one model call, tool execution, at most one finalization call."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from src.llm_core import LLMProvider, Message, chat

from .catalog import tool_schemas
from .config import SUCCESS_MARKER
from .system_prompt_loader import get_default_system_prompt
from .tools import ToolExecutor

logger = logging.getLogger(__name__)

MARKDOWN_LINK_RE = re.compile(r"\[[^\]]+\]\([^)]+\)")


def should_bypass_finalization(tool_output: str) -> bool:
    """True when tool output already reads as a confirmed mutation with a link.

    Such output is returned as-is: a second model pass tends to drop the link.
    """
    return SUCCESS_MARKER in tool_output and bool(MARKDOWN_LINK_RE.search(tool_output))


@dataclass
class DriverOptions:
    """Options for the dialogue driver."""

    system_prompt: str | None = None
    timeout: float | None = None


class DialogueDriver:
    """Runs a turn through the model when no guardrail answered it."""

    def __init__(
        self,
        provider: LLMProvider,
        executor: ToolExecutor,
        options: DriverOptions | None = None,
        tools: list[dict[str, Any]] | None = None,
    ) -> None:
        self._provider = provider
        self._executor = executor
        self._options = options or DriverOptions()
        self._tools = tools if tools is not None else tool_schemas()

    def _with_system_prompt(self, messages: list[Message]) -> list[Message]:
        history = list(messages)
        if not any(m.role == "system" for m in history):
            prompt = self._options.system_prompt or get_default_system_prompt()
            history.insert(0, Message(role="system", content=prompt))
        return history

    async def _call(self, history: list[Message]) -> Message:
        return await chat(self._provider, history, tools=self._tools, timeout=self._options.timeout)

    async def run(self, messages: list[Message]) -> Message:
        """
        Call the model with the history and the tool catalog. Tool calls are
        executed in order and their results appended; the joined tool output
        is returned directly when it carries a success marker and a link,
        otherwise the model is called once more to phrase the answer.
        """
        history = self._with_system_prompt(messages)
        reply = await self._call(history)
        if not reply.tool_calls:
            return Message(role="assistant", content=reply.content or "")

        history.append(
            Message(role="assistant", content=reply.content or "", tool_calls=reply.tool_calls)
        )
        outputs: list[str] = []
        for tc in reply.tool_calls:
            text = await self._executor.run(tc.function.name, tc.function.arguments)
            outputs.append(text)
            history.append(
                Message(role="tool", content=text, name=tc.function.name, tool_call_id=tc.id)
            )

        combined = "\n\n".join(outputs)
        if should_bypass_finalization(combined):
            return Message(role="assistant", content=combined)

        final = await self._call(history)
        if final.tool_calls:
            logger.warning(
                "Dropping %d tool call(s) requested in the finalization reply: %s",
                len(final.tool_calls),
                ", ".join(tc.function.name for tc in final.tool_calls),
            )
        content = (final.content or "").strip()
        return Message(role="assistant", content=final.content if content else combined)
