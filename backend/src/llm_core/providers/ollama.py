"""Ollama LLM provider implementation."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from ollama import AsyncClient, ResponseError

from ..errors import BackendServerError, BackendUnavailableError, LLMBackendError
from ..models import FunctionCall, Message, ToolCall
from .base import LLMProvider

logger = logging.getLogger(__name__)


def _message_to_chat(m: Message) -> dict[str, Any]:
    """Convert our Message to Ollama chat format."""
    out: dict[str, Any] = {"role": m.role, "content": m.content or ""}
    if m.tool_calls:
        out["tool_calls"] = [
            {
                "function": {
                    "name": tc.function.name,
                    "arguments": tc.function.arguments or {},
                },
            }
            for tc in m.tool_calls
        ]
    if m.role == "tool" and m.name:
        out["tool_name"] = m.name
    return out


def _decode_arguments(args: Any) -> dict[str, Any]:
    if isinstance(args, str):
        try:
            args = json.loads(args) if args.strip() else {}
        except json.JSONDecodeError:
            logger.warning("Dropping undecodable tool arguments from Ollama: %r", args)
            args = {}
    if not isinstance(args, dict):
        return dict(args) if hasattr(args, "items") else {}
    return args


def _parse_tool_calls(msg: Any) -> list[ToolCall]:
    """Map Ollama tool_calls into normalized ToolCall objects (no ids)."""
    tool_calls: list[ToolCall] = []
    for tc in getattr(msg, "tool_calls", None) or []:
        fn = getattr(tc, "function", None)
        if fn is None:
            continue
        tool_calls.append(
            ToolCall(
                id=getattr(tc, "id", None) or None,
                function=FunctionCall(
                    name=getattr(fn, "name", "") or "",
                    arguments=_decode_arguments(getattr(fn, "arguments", None)),
                ),
            )
        )
    return tool_calls


class OllamaProvider(LLMProvider):
    """Ollama-backed LLM provider (local open-weights models)."""

    name = "ollama"

    def __init__(
        self,
        default_model: str = "llama3",
        base_url: str | None = None,
        client: AsyncClient | None = None,
    ):
        self.default_model = default_model
        self.base_url = base_url or "http://localhost:11434"
        self._client = client

    def _get_client(self) -> AsyncClient:
        if self._client is None:
            self._client = AsyncClient(host=self.base_url)
        return self._client

    async def chat(
        self,
        messages: list[Message],
        *,
        tools: list[dict[str, Any]] | None = None,
        model: str | None = None,
        **kwargs: Any,
    ) -> Message:
        client = self._get_client()
        try:
            resp = await client.chat(
                model=model or self.default_model,
                messages=[_message_to_chat(m) for m in messages],
                tools=tools or None,
                stream=False,
                **kwargs,
            )
        except (ConnectionError, httpx.ConnectError) as e:
            raise BackendUnavailableError(
                "Ollama is not running. Please start Ollama."
            ) from e
        except ResponseError as e:
            if getattr(e, "status_code", 0) >= 500:
                raise BackendServerError(f"Ollama server error: {e.error}") from e
            raise LLMBackendError(f"Ollama error: {e.error}") from e

        msg = getattr(resp, "message", None)
        if msg is None:
            return Message(role="assistant", content="")
        tool_calls = _parse_tool_calls(msg)
        return Message(
            role="assistant",
            content=getattr(msg, "content", None) or "",
            tool_calls=tool_calls or None,
        )
