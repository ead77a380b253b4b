"""Chat turn handler: guardrails first, then the model."""

from __future__ import annotations

import logging

from src.firm_data import FirmGateway
from src.llm_core import LLMCoreConfig, LLMProvider, Message

from .guardrails import GuardrailLayer
from .loop import DialogueDriver, DriverOptions
from .tools import ToolExecutor

logger = logging.getLogger(__name__)


class ChatTurnHandler:
    """Answers one chat turn from the full client-side history.

    No dialogue state is kept between turns; everything a workflow needs is
    read back from the messages.
    """

    def __init__(
        self,
        gateway: FirmGateway,
        provider: LLMProvider,
        config: LLMCoreConfig | None = None,
        system_prompt: str | None = None,
    ) -> None:
        config = config or LLMCoreConfig()
        self.executor = ToolExecutor(gateway)
        self.guardrails = GuardrailLayer(gateway, self.executor)
        self.driver = DialogueDriver(
            provider,
            self.executor,
            DriverOptions(system_prompt=system_prompt, timeout=config.timeout_seconds),
        )

    async def handle(self, messages: list[Message]) -> Message:
        reply = await self.guardrails.respond(messages)
        if reply is not None:
            return Message(role="assistant", content=reply)
        logger.debug("No guardrail matched; calling the model")
        return await self.driver.run(messages)
