"""Conversation tests for the guardrail layer: every scripted workflow runs without a model call."""
from __future__ import annotations

import unittest
from unittest.mock import AsyncMock, patch

from src.firm_data import EntityKind, InMemoryFirmGateway, seed_demo_firm
from src.lex_assistant import ChatTurnHandler
from src.lex_assistant.guardrails import GuardrailLayer, TurnContext
from src.llm_core import LLMProvider, Message


class GuardrailConversationTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.gateway = InMemoryFirmGateway()
        await seed_demo_firm(self.gateway)
        self.provider = AsyncMock(spec=LLMProvider)
        self.handler = ChatTurnHandler(self.gateway, self.provider)
        self.history: list[Message] = []

    async def say(self, text: str) -> str:
        self.history.append(Message(role="user", content=text))
        reply = await self.handler.handle(self.history)
        self.history.append(reply)
        return reply.content

    def assertNoModelCalls(self) -> None:
        self.provider.chat.assert_not_awaited()


class TestTurnContext(unittest.TestCase):
    def test_last_user_and_previous_assistant(self) -> None:
        ctx = TurnContext.from_messages(
            [
                Message(role="user", content="hi"),
                Message(role="assistant", content="Hello"),
                Message(role="user", content="  Show Cases "),
            ]
        )
        self.assertEqual(ctx.last_user, "  Show Cases ")
        self.assertEqual(ctx.prev_assistant, "Hello")
        self.assertEqual(ctx.text, "show cases")

    def test_last_message_not_from_user(self) -> None:
        ctx = TurnContext.from_messages([Message(role="assistant", content="Hello")])
        self.assertIsNone(ctx.last_user)
        self.assertIsNone(ctx.prev_assistant)


class TestNavigation(GuardrailConversationTestCase):
    async def test_filtered_case_count(self) -> None:
        reply = await self.say("Show me all high priority cases")
        self.assertEqual(reply, "You have **3 high priority cases**. [View High Cases →](/cases?priority=high)")
        self.assertNoModelCalls()

    async def test_status_filtered_cases(self) -> None:
        reply = await self.say("list discovery cases")
        self.assertEqual(reply, "You have **3 discovery status cases**. [View Discovery Cases →](/cases?status=discovery)")

    async def test_all_clients(self) -> None:
        reply = await self.say("What clients do we have?")
        self.assertEqual(reply, "You have **6 clients** in the system. [View All Clients →](/clients)")

    async def test_clients_by_status(self) -> None:
        reply = await self.say("show active clients")
        self.assertEqual(reply, "You have **4 active clients**. [View Active Clients →](/clients?status=active)")

    async def test_all_cases(self) -> None:
        reply = await self.say("show me the cases")
        self.assertEqual(reply, "You have **7 cases** total (6 active). [View All Cases →](/cases)")

    async def test_all_tasks(self) -> None:
        reply = await self.say("list all tasks")
        self.assertEqual(reply, "You have **5 tasks** total (2 pending). [View All Tasks →](/tasks)")

    async def test_filtered_tasks(self) -> None:
        reply = await self.say("show pending tasks")
        self.assertEqual(reply, "You have **2 pending status tasks**. [View Pending Tasks →](/tasks?status=pending)")

    async def test_team(self) -> None:
        reply = await self.say("Who's on the team?")
        self.assertEqual(reply, "You have **8 team members**. [View Team Page →](/team)")

    async def test_team_by_role(self) -> None:
        reply = await self.say("show partners")
        self.assertEqual(reply, "You have **3 partner(s)** on the team. [View Partners →](/team?role=partner)")
        self.assertNoModelCalls()

    async def test_team_with_trailing_punctuation(self) -> None:
        reply = await self.say("Show me the team members?")
        self.assertEqual(reply, "You have **8 team members**. [View Team Page →](/team)")


class TestNoteWorkflow(GuardrailConversationTestCase):
    async def test_ambiguous_note_asks_client_or_case(self) -> None:
        reply = await self.say("Add a note")
        self.assertEqual(reply, "Would you like to add a note to a **client** or a **case**?")
        self.assertNoModelCalls()

    async def test_full_note_conversation(self) -> None:
        await self.say("add note")
        self.assertEqual(await self.say("a client"), "Which client would you like to add the note to?")
        self.assertEqual(
            await self.say("Elizabeth Hartwell"), 'What note would you like to add to "Elizabeth Hartwell"?'
        )
        reply = await self.say("Prefers contact by email")
        self.assertTrue(reply.startswith('✅ Note added to client "Elizabeth Hartwell"'))
        self.assertIn("[View Client Notes →](/clients/", reply)
        client = await self.gateway.find_one_fuzzy(EntityKind.CLIENT, "Elizabeth")
        self.assertEqual(client.notes[-1].content, "Prefers contact by email")
        self.assertNoModelCalls()

    async def test_case_notes_unsupported(self) -> None:
        await self.say("add a note")
        self.assertEqual(
            await self.say("case"),
            "Adding notes to cases is not yet supported. Would you like to add a note to a client instead?",
        )

    async def test_unknown_client_reply(self) -> None:
        self.history = [
            Message(role="user", content="add a note"),
            Message(role="assistant", content="Which client would you like to add the note to?"),
        ]
        reply = await self.say("Ghost Corp")
        self.assertEqual(
            reply,
            'Client "Ghost Corp" not found. Please check the name and try again, or '
            "[View All Clients →](/clients) to see available clients.",
        )

    async def test_partial_note_unknown_client(self) -> None:
        reply = await self.say("Add a note to NonExistentClient_123")
        self.assertEqual(
            reply,
            'Client "NonExistentClient_123" not found. Please check the name and try again, or '
            "[View All Clients →](/clients) to see available clients.",
        )
        self.assertNoModelCalls()

    async def test_partial_note_known_client_then_content(self) -> None:
        reply = await self.say("add a note to global tech client")
        self.assertEqual(reply, 'What note would you like to add to "Global Tech Solutions LLC"?')
        reply = await self.say("Renewal due in March")
        self.assertTrue(reply.startswith("✅"))

    async def test_one_shot_note(self) -> None:
        reply = await self.say("Add a note to Meridian: Called about the invoice")
        self.assertTrue(reply.startswith('✅ Note added to client "Meridian Manufacturing Inc.": "Called about the invoice".'))
        self.assertNoModelCalls()


class TestTaskWorkflow(GuardrailConversationTestCase):
    async def asyncSetUp(self) -> None:
        await super().asyncSetUp()
        patcher = patch.object(
            self.handler.executor, "execute", side_effect=self.handler.executor.execute
        )
        self.execute_spy = patcher.start()
        self.addCleanup(patcher.stop)

    def create_task_calls(self) -> list:
        return [c for c in self.execute_spy.await_args_list if c.args[0] == "create_task"]

    async def test_four_turn_task_creation(self) -> None:
        self.assertEqual(
            await self.say("create a task"), "I'd be happy to create a task! What should the task title be?"
        )
        self.assertEqual(
            await self.say("Fix the bug"), 'Got it! Task: "Fix the bug". Who should this task be assigned to?'
        )
        self.assertEqual(
            await self.say("Margaret Chen"),
            'Task "Fix the bug" will be assigned to Margaret Chen. What priority should it have? (high, medium, or low)',
        )
        self.assertEqual(
            await self.say("high"),
            '✅ Task "Fix the bug" created and assigned to Margaret Chen with high priority. [View Tasks →](/tasks)',
        )
        self.assertEqual(len(self.create_task_calls()), 1)
        task = await self.gateway.find_one_fuzzy(EntityKind.TASK, "Fix the bug")
        self.assertEqual(task.priority, "high")
        self.assertNoModelCalls()

    async def test_invalid_priority_reprompts_then_recovers(self) -> None:
        for turn in ("make a new task", "Draft settlement letter", "amanda"):
            await self.say(turn)
        self.assertEqual(await self.say("urgent"), "Please choose a priority: **high**, **medium**, or **low**.")
        self.assertEqual(self.create_task_calls(), [])
        reply = await self.say("Low")
        self.assertEqual(
            reply,
            '✅ Task "Draft settlement letter" created and assigned to Amanda Foster with low priority. [View Tasks →](/tasks)',
        )
        self.assertEqual(len(self.create_task_calls()), 1)

    async def test_quoted_title_keeps_the_flow_deterministic(self) -> None:
        await self.say("create a task")
        self.assertEqual(
            await self.say('Call "Bob" back'),
            "Got it! Task: \"Call 'Bob' back\". Who should this task be assigned to?",
        )
        self.assertEqual(
            await self.say("Margaret Chen"),
            "Task \"Call 'Bob' back\" will be assigned to Margaret Chen. "
            "What priority should it have? (high, medium, or low)",
        )
        reply = await self.say("medium")
        self.assertTrue(reply.startswith("✅ Task \"Call 'Bob' back\" created"))
        self.assertEqual(len(self.create_task_calls()), 1)
        self.assertNoModelCalls()

    async def test_unknown_assignee_then_retry(self) -> None:
        await self.say("add task")
        await self.say("Review lease")
        reply = await self.say("Nobody Here")
        self.assertEqual(
            reply,
            'Team member "Nobody Here" not found. [View Team Page →](/team) to see available team members. '
            "Who should this task be assigned to?",
        )
        reply = await self.say("Robert")
        self.assertEqual(
            reply,
            'Task "Review lease" will be assigned to Robert Nakamura. What priority should it have? (high, medium, or low)',
        )
        self.assertNoModelCalls()


class TestCaseStatusWorkflow(GuardrailConversationTestCase):
    async def test_case_status_update(self) -> None:
        self.assertEqual(
            await self.say("update case"),
            "Which case would you like to update? Please provide the case title or case number.",
        )
        self.assertEqual(
            await self.say("Contract Dispute"),
            'Found case "Contract Dispute - Vendor Agreement" (MM-2024-001). Current status: **discovery**. '
            "What would you like to change the status to? (intake, discovery, trial, or closed)",
        )
        reply = await self.say("trial")
        self.assertTrue(reply.startswith("✅"))
        self.assertRegex(reply, r"\[View Case →\]\(/cases/[0-9a-f]+\)")
        case = await self.gateway.find_one_fuzzy(EntityKind.CASE, "MM-2024-001")
        self.assertEqual(case.status, "trial")
        self.assertNoModelCalls()

    async def test_invalid_status_reprompts_then_recovers(self) -> None:
        await self.say("change the case")
        await self.say("Zoning")
        self.assertEqual(
            await self.say("archived"),
            "Please choose a valid status: **intake**, **discovery**, **trial**, or **closed**.",
        )
        reply = await self.say("closed")
        self.assertTrue(reply.startswith("✅"))
        case = await self.gateway.find_one_fuzzy(EntityKind.CASE, "Zoning")
        self.assertEqual(case.status, "closed")

    async def test_unknown_case(self) -> None:
        await self.say("modify case")
        self.assertEqual(
            await self.say("XYZ-000"), 'Case "XYZ-000" not found. [View Cases Page →](/cases) to see all cases.'
        )


class TestFallThrough(unittest.IsolatedAsyncioTestCase):
    async def test_unmatched_turn_returns_none(self) -> None:
        layer = GuardrailLayer(InMemoryFirmGateway())
        reply = await layer.respond([Message(role="user", content="Summarize the Hartwell matter")])
        self.assertIsNone(reply)

    async def test_assistant_last_returns_none(self) -> None:
        layer = GuardrailLayer(InMemoryFirmGateway())
        self.assertIsNone(await layer.respond([Message(role="assistant", content="Hi")]))

    async def test_team_member_lookup_is_not_navigation(self) -> None:
        layer = GuardrailLayer(InMemoryFirmGateway())
        for text in ("get team member info for Margaret Chen", "show team members on the Zoning case"):
            with self.subTest(text=text):
                self.assertIsNone(await layer.respond([Message(role="user", content=text)]))

    async def test_unrelated_answer_to_note_target_falls_through(self) -> None:
        layer = GuardrailLayer(InMemoryFirmGateway())
        reply = await layer.respond(
            [
                Message(role="user", content="add a note"),
                Message(role="assistant", content="Would you like to add a note to a **client** or a **case**?"),
                Message(role="user", content="never mind"),
            ]
        )
        self.assertIsNone(reply)


if __name__ == "__main__":
    unittest.main()
