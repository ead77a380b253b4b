"""Unit tests for firm_data: filters, fuzzy lookups, the in-memory and SQLite stores, seeding."""
from __future__ import annotations

import asyncio
import tempfile
import unittest
from pathlib import Path

from src.firm_data import (
    EntityKind,
    EntityNotFoundError,
    InMemoryFirmGateway,
    Note,
    SQLiteFirmGateway,
    seed_demo_firm,
)
from src.firm_data.gateway import matches


class TestFilters(unittest.TestCase):
    def test_equality(self) -> None:
        self.assertTrue(matches({"status": "active"}, {"status": "active"}))
        self.assertFalse(matches({"status": "inactive"}, {"status": "active"}))

    def test_empty_filter_matches_everything(self) -> None:
        self.assertTrue(matches({"status": "active"}, None))
        self.assertTrue(matches({"status": "active"}, {}))

    def test_not_equal(self) -> None:
        self.assertTrue(matches({"status": "trial"}, {"status": {"$ne": "closed"}}))
        self.assertFalse(matches({"status": "closed"}, {"status": {"$ne": "closed"}}))

    def test_list_field_matches_by_containment(self) -> None:
        doc = {"assigned_team": ["a", "b"]}
        self.assertTrue(matches(doc, {"assigned_team": "b"}))
        self.assertFalse(matches(doc, {"assigned_team": "c"}))


class TestInMemoryGateway(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.gateway = InMemoryFirmGateway()

    async def test_create_find_count(self) -> None:
        await self.gateway.create(EntityKind.CLIENT, {"name": "Acme Corp", "email": "a@acme.com", "status": "active"})
        await self.gateway.create(EntityKind.CLIENT, {"name": "Beta LLC", "email": "b@beta.com"})
        self.assertEqual(await self.gateway.count(EntityKind.CLIENT), 2)
        active = await self.gateway.find(EntityKind.CLIENT, {"status": "active"})
        self.assertEqual([c.name for c in active], ["Acme Corp"])
        prospects = await self.gateway.find(EntityKind.CLIENT, {"status": "prospect"})
        self.assertEqual([c.name for c in prospects], ["Beta LLC"])

    async def test_fuzzy_is_case_insensitive_substring_first_match_wins(self) -> None:
        await self.gateway.create(EntityKind.TEAM_MEMBER, {"name": "Sarah Mitchell", "email": "s@x.com"})
        await self.gateway.create(EntityKind.TEAM_MEMBER, {"name": "Sarah Connor", "email": "c@x.com"})
        found = await self.gateway.find_one_fuzzy(EntityKind.TEAM_MEMBER, "sarah")
        self.assertEqual(found.name, "Sarah Mitchell")
        found = await self.gateway.find_one_fuzzy(EntityKind.TEAM_MEMBER, "CONNOR")
        self.assertEqual(found.name, "Sarah Connor")

    async def test_fuzzy_treats_pattern_literally(self) -> None:
        await self.gateway.create(EntityKind.CLIENT, {"name": "Smith (Holdings)", "email": "s@h.com"})
        found = await self.gateway.find_one_fuzzy(EntityKind.CLIENT, "(Holdings")
        self.assertEqual(found.name, "Smith (Holdings)")
        self.assertIsNone(await self.gateway.find_one_fuzzy(EntityKind.CLIENT, "S.*h"))

    async def test_fuzzy_blank_pattern_finds_nothing(self) -> None:
        await self.gateway.create(EntityKind.CLIENT, {"name": "Acme", "email": "a@a.com"})
        self.assertIsNone(await self.gateway.find_one_fuzzy(EntityKind.CLIENT, "   "))

    async def test_case_fuzzy_searches_case_number(self) -> None:
        client = await self.gateway.create(EntityKind.CLIENT, {"name": "Acme", "email": "a@a.com"})
        await self.gateway.create(
            EntityKind.CASE, {"title": "Acme v. Beta", "case_number": "AC-2024-001", "client": client.id}
        )
        found = await self.gateway.find_one_fuzzy(EntityKind.CASE, "ac-2024")
        self.assertEqual(found.title, "Acme v. Beta")

    async def test_update_merges_patch(self) -> None:
        client = await self.gateway.create(EntityKind.CLIENT, {"name": "Acme", "email": "a@a.com"})
        updated = await self.gateway.update(EntityKind.CLIENT, client.id, {"status": "inactive"})
        self.assertEqual(updated.status, "inactive")
        self.assertEqual(updated.email, "a@a.com")
        stored = await self.gateway.get(EntityKind.CLIENT, client.id)
        self.assertEqual(stored.status, "inactive")

    async def test_update_unknown_id_raises(self) -> None:
        with self.assertRaises(EntityNotFoundError):
            await self.gateway.update(EntityKind.CLIENT, "missing", {"status": "active"})

    async def test_save_persists_in_place_edits(self) -> None:
        client = await self.gateway.create(EntityKind.CLIENT, {"name": "Acme", "email": "a@a.com"})
        client.notes.append(Note(content="Called", author="Tester"))
        client.total_matters += 1
        await self.gateway.save(client)
        stored = await self.gateway.get(EntityKind.CLIENT, client.id)
        self.assertEqual(len(stored.notes), 1)
        self.assertEqual(stored.notes[0].content, "Called")
        self.assertEqual(stored.total_matters, 1)

    async def test_modify_applies_callback_and_returns_entity(self) -> None:
        client = await self.gateway.create(EntityKind.CLIENT, {"name": "Acme", "email": "a@a.com"})
        updated = await self.gateway.modify(
            EntityKind.CLIENT, client.id, lambda c: c.notes.append(Note(content="Met", author="Tester"))
        )
        self.assertEqual(updated.notes[0].content, "Met")
        stored = await self.gateway.get(EntityKind.CLIENT, client.id)
        self.assertEqual(len(stored.notes), 1)
        with self.assertRaises(EntityNotFoundError):
            await self.gateway.modify(EntityKind.CLIENT, "missing", lambda c: None)

    async def test_returned_entities_are_copies(self) -> None:
        client = await self.gateway.create(EntityKind.CLIENT, {"name": "Acme", "email": "a@a.com"})
        fetched = await self.gateway.get(EntityKind.CLIENT, client.id)
        fetched.name = "Changed"
        again = await self.gateway.get(EntityKind.CLIENT, client.id)
        self.assertEqual(again.name, "Acme")

    async def test_get_without_id_is_none(self) -> None:
        self.assertIsNone(await self.gateway.get(EntityKind.CASE, None))


class TestSQLiteGateway(unittest.IsolatedAsyncioTestCase):
    async def test_round_trip_and_reopen(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            db_path = Path(tmp) / "firm.db"
            gateway = SQLiteFirmGateway(db_path)
            member = await gateway.create(
                EntityKind.TEAM_MEMBER, {"name": "Amanda Foster", "email": "af@x.com", "role": "associate"}
            )
            await gateway.create(EntityKind.TEAM_MEMBER, {"name": "Amanda Jones", "email": "aj@x.com"})
            await gateway.update(EntityKind.TEAM_MEMBER, member.id, {"role": "partner"})

            reopened = SQLiteFirmGateway(db_path)
            self.assertEqual(await reopened.count(EntityKind.TEAM_MEMBER), 2)
            first = await reopened.find_one_fuzzy(EntityKind.TEAM_MEMBER, "amanda")
            self.assertEqual(first.name, "Amanda Foster")
            self.assertEqual(first.role, "partner")

    async def test_concurrent_modify_keeps_every_change(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            gateway = SQLiteFirmGateway(Path(tmp) / "firm.db")
            client = await gateway.create(EntityKind.CLIENT, {"name": "Acme", "email": "a@a.com"})

            def bump(entity) -> None:
                entity.total_matters += 1

            await asyncio.gather(*(gateway.modify(EntityKind.CLIENT, client.id, bump) for _ in range(8)))
            stored = await gateway.get(EntityKind.CLIENT, client.id)
            self.assertEqual(stored.total_matters, 8)

    async def test_save_inserts_new_entity(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            gateway = SQLiteFirmGateway(Path(tmp) / "firm.db")
            client = await gateway.create(EntityKind.CLIENT, {"name": "Acme", "email": "a@a.com"})
            client.status = "active"
            await gateway.save(client)
            self.assertEqual(await gateway.count(EntityKind.CLIENT, {"status": "active"}), 1)


class TestSeed(unittest.IsolatedAsyncioTestCase):
    async def test_seed_loads_demo_firm_once(self) -> None:
        gateway = InMemoryFirmGateway()
        self.assertTrue(await seed_demo_firm(gateway))
        self.assertFalse(await seed_demo_firm(gateway))
        self.assertEqual(await gateway.count(EntityKind.TEAM_MEMBER), 8)
        self.assertEqual(await gateway.count(EntityKind.CLIENT), 6)
        self.assertEqual(await gateway.count(EntityKind.CASE), 7)
        self.assertEqual(await gateway.count(EntityKind.TASK), 5)

    async def test_seeded_references_resolve(self) -> None:
        gateway = InMemoryFirmGateway()
        await seed_demo_firm(gateway)
        for task in await gateway.find(EntityKind.TASK):
            self.assertIsNotNone(await gateway.get(EntityKind.TEAM_MEMBER, task.assigned_to))
            self.assertIsNotNone(await gateway.get(EntityKind.CASE, task.related_case))
        for case in await gateway.find(EntityKind.CASE):
            self.assertIsNotNone(await gateway.get(EntityKind.CLIENT, case.client))


if __name__ == "__main__":
    unittest.main()
