from __future__ import annotations

import asyncio
import logging
from typing import Any

from .config import LLMCoreConfig
from .errors import BackendTimeoutError
from .models import Message
from .providers import LLMProvider, OllamaProvider, OpenAIProvider

logger = logging.getLogger(__name__)


def build_provider(config: LLMCoreConfig) -> LLMProvider:
    """Return the provider selected by ``config.use_local_llm``."""
    if config.use_local_llm:
        logger.info("Using Ollama (local) model %s at %s", config.ollama_model, config.ollama_host)
        return OllamaProvider(default_model=config.ollama_model, base_url=config.ollama_host)
    logger.info("Using OpenAI (cloud) model %s", config.openai_model)
    return OpenAIProvider(
        default_model=config.openai_model,
        api_key=config.openai_api_key,
        base_url=config.openai_base_url,
    )


async def chat(
    provider: LLMProvider,
    messages: list[Message],
    *,
    tools: list[dict[str, Any]] | None = None,
    timeout: float | None = None,
    **kwargs: Any,
) -> Message:
    """Non-streaming chat bounded by ``timeout`` seconds."""
    try:
        return await asyncio.wait_for(
            provider.chat(messages, tools=tools, **kwargs),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        raise BackendTimeoutError(
            f"The {provider.name} model did not respond within {timeout:g} seconds."
        ) from e
