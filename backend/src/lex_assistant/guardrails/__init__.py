"""Deterministic guardrails for navigation and multi-turn workflows."""

from .layer import DEFAULT_RULES, GuardrailLayer
from .rules import GuardrailRule, GuardrailServices, TurnContext

__all__ = [
    "DEFAULT_RULES",
    "GuardrailLayer",
    "GuardrailRule",
    "GuardrailServices",
    "TurnContext",
]
