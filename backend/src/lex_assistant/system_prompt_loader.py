"""Utilities for loading the system prompt from disk."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import DEFAULT_SYSTEM_PROMPT_PATH
from .prompts import SYSTEM_PROMPT

_cached_prompt: Optional[str] = None


def _read_file(path: Path) -> str:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return ""
    return text.strip()


def get_default_system_prompt() -> str:
    """Return the system prompt text, cached after first read.

    A non-empty file at ``DEFAULT_SYSTEM_PROMPT_PATH`` overrides the built-in prompt.
    """
    global _cached_prompt
    if _cached_prompt is None:
        _cached_prompt = _read_file(DEFAULT_SYSTEM_PROMPT_PATH) or SYSTEM_PROMPT
    return _cached_prompt
