"""Deterministic guardrail layer evaluated before the model on every turn."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from src.firm_data import FirmGateway
from src.llm_core import Message

from ..tools import ToolExecutor
from . import cases, navigation, notes, tasks
from .rules import GuardrailRule, GuardrailServices, TurnContext

logger = logging.getLogger(__name__)

DEFAULT_RULES: tuple[GuardrailRule, ...] = (
    *navigation.RULES,
    *notes.RULES,
    *tasks.RULES,
    *cases.RULES,
)


class GuardrailLayer:
    """Ordered rule list; the first rule whose handler answers wins.

    Workflows that local models tend to get wrong (list navigation, note
    taking, task creation, case status moves) are answered here from the
    chat history alone, without a model call.
    """

    def __init__(
        self,
        gateway: FirmGateway,
        executor: ToolExecutor | None = None,
        rules: Sequence[GuardrailRule] | None = None,
    ) -> None:
        self._services = GuardrailServices(gateway=gateway, executor=executor or ToolExecutor(gateway))
        self._rules = tuple(rules) if rules is not None else DEFAULT_RULES

    async def respond(self, messages: list[Message]) -> Optional[str]:
        """Reply text when a rule handles the turn, else None."""
        ctx = TurnContext.from_messages(messages)
        if ctx.last_user is None:
            return None
        for rule in self._rules:
            hit = rule.predicate(ctx)
            if not hit:
                continue
            reply = await rule.handler(ctx, hit, self._services)
            if reply is not None:
                logger.info("Guardrail %s answered the turn", rule.name)
                return reply
        return None
