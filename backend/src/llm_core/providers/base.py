"""Abstract LLM provider interface for the Lex dialogue driver."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..models import Message


class LLMProvider(ABC):
    """
    Abstract LLM provider. Implement this to plug in a chat backend.

    The dialogue driver only depends on this interface. Request and response
    normalization (argument encoding, call ids) belongs to the implementation.
    """

    name: str = "llm"

    @abstractmethod
    async def chat(
        self,
        messages: list[Message],
        *,
        tools: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> Message:
        """
        Non-streaming chat. Returns the assistant message.

        ``tool_calls`` on the result always carry decoded argument objects;
        ``id`` is set only when the backend supplies one.
        """
        ...
