"""HTTP tests for POST /api/ai/chat with the handler swapped through dependency overrides."""
from __future__ import annotations

import unittest
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from main import app
from src.firm_data import InMemoryFirmGateway
from src.lex_assistant import ChatTurnHandler
from src.llm_core import BackendUnavailableError, LLMProvider, Message
from src.routers.chat import get_chat_handler


class TestChatEndpoint(unittest.TestCase):
    def setUp(self) -> None:
        self.provider = AsyncMock(spec=LLMProvider)
        self.handler = ChatTurnHandler(InMemoryFirmGateway(), self.provider)
        app.dependency_overrides[get_chat_handler] = lambda: self.handler
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def test_guardrail_reply(self) -> None:
        resp = self.client.post("/api/ai/chat", json={"messages": [{"role": "user", "content": "add a note"}]})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {"role": "assistant", "content": "Would you like to add a note to a **client** or a **case**?"},
        )
        self.provider.chat.assert_not_awaited()

    def test_model_reply(self) -> None:
        self.provider.chat.return_value = Message(role="assistant", content="Hello! How can I help?")
        resp = self.client.post("/api/ai/chat", json={"messages": [{"role": "user", "content": "hello"}]})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["content"], "Hello! How can I help?")
        self.assertNotIn("tool_calls", resp.json())

    def test_backend_failure_is_500_with_message(self) -> None:
        self.provider.chat.side_effect = BackendUnavailableError("Ollama is not running. Please start Ollama.")
        resp = self.client.post("/api/ai/chat", json={"messages": [{"role": "user", "content": "hello"}]})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"message": "Ollama is not running. Please start Ollama."})

    def test_health(self) -> None:
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("running", resp.text)


if __name__ == "__main__":
    unittest.main()
