from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("false", "0", "no", "off")


class LLMCoreConfig(BaseModel):
    """Backend selection and connection settings for the model providers."""

    use_local_llm: bool = Field(
        default=True,
        description="Use the local Ollama server instead of the hosted OpenAI API.",
    )
    ollama_host: str = Field(default="http://localhost:11434")
    ollama_model: str = Field(default="llama3")
    openai_api_key: str = Field(default="", repr=False)
    openai_model: str = Field(default="gpt-4o-mini")
    openai_base_url: str | None = None
    timeout_seconds: float = Field(
        default=60.0,
        description="Upper bound for a single backend call.",
    )

    @classmethod
    def from_env(cls) -> LLMCoreConfig:
        """Build from environment variables (a .env file is honoured)."""
        return cls(
            use_local_llm=_env_flag("USE_LOCAL_LLM", True),
            ollama_host=os.getenv("OLLAMA_HOST", "http://localhost:11434"),
            ollama_model=os.getenv("OLLAMA_MODEL", "llama3"),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            timeout_seconds=float(os.getenv("LLM_TIMEOUT_SECONDS", "60")),
        )
