"""OpenAI LLM provider implementation (hosted backend)."""

from __future__ import annotations

import json
import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from ..errors import (
    BackendAuthenticationError,
    BackendConfigurationError,
    BackendRateLimitError,
    BackendRequestError,
    BackendServerError,
    BackendTimeoutError,
    BackendUnavailableError,
    LLMBackendError,
)
from ..models import FunctionCall, Message, ToolCall
from .base import LLMProvider

logger = logging.getLogger(__name__)

_PLACEHOLDER_KEYS = {"", "your-openai-api-key-here"}


def _error_detail(exc: openai.APIStatusError) -> str:
    body = getattr(exc, "body", None)
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "Bad request"


class OpenAIProvider(LLMProvider):
    """OpenAI-backed LLM provider using the Chat Completions API."""

    name = "openai"

    def __init__(
        self,
        default_model: str = "gpt-4o-mini",
        api_key: str | None = None,
        base_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        self.default_model = default_model
        self.api_key = api_key or ""
        self.base_url = base_url
        self._client: Any | None = client

    def _get_client(self) -> Any:
        if self.api_key.strip() in _PLACEHOLDER_KEYS:
            raise BackendConfigurationError(
                "OpenAI API key not configured. Please set OPENAI_API_KEY in your .env file. "
                "Get your API key at: https://platform.openai.com/api-keys"
            )
        if not self._client:
            # Retries are left to the user; a failed turn surfaces immediately.
            kwargs: dict[str, Any] = {"api_key": self.api_key, "max_retries": 0}
            if self.base_url:
                kwargs["base_url"] = self.base_url
            self._client = AsyncOpenAI(**kwargs)
        return self._client

    @staticmethod
    def _to_openai_messages(messages: list[Message]) -> list[dict[str, Any]]:
        """Convert internal Message objects into OpenAI chat message dicts."""
        out: list[dict[str, Any]] = []
        for m in messages:
            base: dict[str, Any] = {"role": m.role, "content": m.content or ""}
            # OpenAI expects tool-call arguments as JSON strings
            if m.role == "assistant" and m.tool_calls:
                base["tool_calls"] = [
                    {
                        "id": tc.id or "",
                        "type": "function",
                        "function": {
                            "name": tc.function.name,
                            "arguments": json.dumps(tc.function.arguments or {}),
                        },
                    }
                    for tc in m.tool_calls
                ]
            if m.role == "tool":
                if m.tool_call_id:
                    base["tool_call_id"] = m.tool_call_id
                if m.name:
                    base["name"] = m.name
            out.append(base)
        return out

    @staticmethod
    def _parse_tool_calls(choice_message: Any) -> list[ToolCall]:
        """Map OpenAI tool_calls into normalized ToolCall objects."""
        tool_calls: list[ToolCall] = []
        for tc in getattr(choice_message, "tool_calls", None) or []:
            fn = getattr(tc, "function", None)
            name = getattr(fn, "name", "") if fn is not None else ""
            raw_args = getattr(fn, "arguments", None) if fn is not None else None
            if isinstance(raw_args, str):
                try:
                    params = json.loads(raw_args or "{}")
                except json.JSONDecodeError:
                    logger.warning("Dropping undecodable tool arguments for %s: %r", name, raw_args)
                    params = {}
            elif isinstance(raw_args, dict):
                params = raw_args
            else:
                params = {}
            tool_calls.append(
                ToolCall(
                    id=getattr(tc, "id", None) or None,
                    function=FunctionCall(name=name or "", arguments=params if isinstance(params, dict) else {}),
                )
            )
        return tool_calls

    def build_request(
        self,
        messages: list[Message],
        tools: list[dict[str, Any]] | None = None,
        model: str | None = None,
    ) -> dict[str, Any]:
        """Chat Completions payload for one call.

        Tools are withheld when the last message is a tool result so the model
        answers in text instead of requesting another tool round.
        """
        openai_messages = self._to_openai_messages(messages)
        params: dict[str, Any] = {
            "model": model or self.default_model,
            "messages": openai_messages,
        }
        has_tool_result = bool(messages) and messages[-1].role == "tool"
        if tools and not has_tool_result:
            params["tools"] = tools
            params["tool_choice"] = "auto"
        return params

    async def chat(
        self,
        messages: list[Message],
        *,
        tools: list[dict[str, Any]] | None = None,
        model: str | None = None,
        **kwargs: Any,
    ) -> Message:
        """Non-streaming chat using OpenAI Chat Completions."""
        client = self._get_client()
        params = self.build_request(messages, tools=tools, model=model)
        params.update(kwargs)

        try:
            resp = await client.chat.completions.create(**params)
        except openai.APITimeoutError as e:
            raise BackendTimeoutError("OpenAI request timed out. Please try again.") from e
        except openai.APIConnectionError as e:
            raise BackendUnavailableError(
                "Could not reach the OpenAI API. Please check your network connection."
            ) from e
        except openai.BadRequestError as e:
            logger.error("OpenAI API error details: %s", getattr(e, "body", None))
            raise BackendRequestError(f"OpenAI API error: {_error_detail(e)}") from e
        except openai.AuthenticationError as e:
            raise BackendAuthenticationError(
                "Invalid OpenAI API key. Please check your OPENAI_API_KEY."
            ) from e
        except openai.RateLimitError as e:
            raise BackendRateLimitError(
                "OpenAI rate limit exceeded. Please wait a moment and try again."
            ) from e
        except openai.InternalServerError as e:
            raise BackendServerError("OpenAI server error. Please try again in a moment.") from e

        if not resp.choices:
            raise LLMBackendError("No response from OpenAI API")

        choice = resp.choices[0].message
        tool_calls = self._parse_tool_calls(choice)
        return Message(
            role="assistant",
            content=choice.content or "",
            tool_calls=tool_calls or None,
        )
