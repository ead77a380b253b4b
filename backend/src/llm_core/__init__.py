"""Model backend layer: message shapes, provider adapters and typed errors."""

from .config import LLMCoreConfig
from .core import build_provider, chat
from .errors import (
    BackendAuthenticationError,
    BackendConfigurationError,
    BackendRateLimitError,
    BackendRequestError,
    BackendServerError,
    BackendTimeoutError,
    BackendUnavailableError,
    LLMBackendError,
)
from .models import FunctionCall, Message, ToolCall
from .providers import LLMProvider, OllamaProvider, OpenAIProvider

__all__ = [
    "Message",
    "ToolCall",
    "FunctionCall",
    "LLMCoreConfig",
    "LLMProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "build_provider",
    "chat",
    "LLMBackendError",
    "BackendAuthenticationError",
    "BackendConfigurationError",
    "BackendRateLimitError",
    "BackendRequestError",
    "BackendServerError",
    "BackendTimeoutError",
    "BackendUnavailableError",
]
