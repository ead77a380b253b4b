"""Domain data gateway: the find/count/create/update contract used by Lex.

Filters are equality maps over entity fields. A list-valued field matches
when it contains the expected value, and ``{"$ne": value}`` negates a match.
Fuzzy lookups are case-insensitive substring matches; the first entity in
insertion order wins.
"""

from __future__ import annotations

import asyncio
import re
from abc import ABC, abstractmethod
from typing import Any, Callable

from .models import (
    FUZZY_FIELDS,
    EntityKind,
    Entity,
    from_document,
    kind_of,
    to_document,
)

Filter = dict[str, Any]


class EntityNotFoundError(LookupError):
    """Raised by ``update`` when the target id does not exist."""


def _field_matches(value: Any, expected: Any) -> bool:
    if isinstance(expected, dict) and "$ne" in expected:
        return not _field_matches(value, expected["$ne"])
    if isinstance(value, list):
        return expected in value
    return value == expected


def matches(doc: dict[str, Any], flt: Filter | None) -> bool:
    """True when ``doc`` satisfies every clause of ``flt``."""
    for key, expected in (flt or {}).items():
        if not _field_matches(doc.get(key), expected):
            return False
    return True


def fuzzy_matches(doc: dict[str, Any], fields: tuple[str, ...], pattern: str) -> bool:
    needle = re.compile(re.escape(pattern.strip()), re.IGNORECASE)
    return any(needle.search(str(doc.get(f) or "")) for f in fields)


class FirmGateway(ABC):
    """Async CRUD interface over the four firm entity kinds.

    Writes that depend on what was just read go through ``modify`` or run
    inside ``locked(kind)``; one lock per kind serialises them.
    """

    def __init__(self) -> None:
        self._kind_locks: dict[EntityKind, asyncio.Lock] = {k: asyncio.Lock() for k in EntityKind}

    def locked(self, kind: EntityKind) -> asyncio.Lock:
        """The write lock for ``kind``. Not re-entrant."""
        return self._kind_locks[kind]

    @abstractmethod
    async def find(self, kind: EntityKind, flt: Filter | None = None) -> list[Entity]:
        ...

    @abstractmethod
    async def find_one_fuzzy(self, kind: EntityKind, pattern: str) -> Entity | None:
        ...

    @abstractmethod
    async def count(self, kind: EntityKind, flt: Filter | None = None) -> int:
        ...

    @abstractmethod
    async def create(self, kind: EntityKind, fields: dict[str, Any]) -> Entity:
        ...

    @abstractmethod
    async def update(self, kind: EntityKind, entity_id: str, patch: dict[str, Any]) -> Entity:
        ...

    @abstractmethod
    async def save(self, entity: Entity) -> Entity:
        ...

    @abstractmethod
    async def modify(
        self, kind: EntityKind, entity_id: str, mutate: Callable[[Entity], None]
    ) -> Entity:
        """Apply ``mutate`` to the stored entity and write it back atomically."""

    async def get(self, kind: EntityKind, entity_id: str | None) -> Entity | None:
        if not entity_id:
            return None
        found = await self.find(kind, {"id": entity_id})
        return found[0] if found else None


class DocumentGateway(FirmGateway):
    """Gateway over a store of JSON documents, one collection per kind.

    Subclasses provide the four storage primitives and ``_run``, which
    decides whether they execute inline or in a worker thread.
    """

    @abstractmethod
    def _load_all(self, kind: EntityKind) -> list[dict[str, Any]]:
        """All documents of ``kind`` in insertion order."""

    @abstractmethod
    def _insert(self, kind: EntityKind, doc: dict[str, Any]) -> None:
        ...

    @abstractmethod
    def _replace(self, kind: EntityKind, doc: dict[str, Any]) -> bool:
        """Overwrite the document with ``doc['id']``; False if it is missing."""

    @abstractmethod
    async def _run(self, fn: Any, *args: Any) -> Any:
        ...

    async def find(self, kind: EntityKind, flt: Filter | None = None) -> list[Entity]:
        docs = await self._run(self._load_all, kind)
        return [from_document(kind, d) for d in docs if matches(d, flt)]

    async def find_one_fuzzy(self, kind: EntityKind, pattern: str) -> Entity | None:
        if not pattern or not pattern.strip():
            return None
        fields = FUZZY_FIELDS[kind]
        for doc in await self._run(self._load_all, kind):
            if fuzzy_matches(doc, fields, pattern):
                return from_document(kind, doc)
        return None

    async def count(self, kind: EntityKind, flt: Filter | None = None) -> int:
        docs = await self._run(self._load_all, kind)
        return sum(1 for d in docs if matches(d, flt))

    async def create(self, kind: EntityKind, fields: dict[str, Any]) -> Entity:
        entity = from_document(kind, fields)
        await self._run(self._insert, kind, to_document(entity))
        return entity

    async def _load_for_write(self, kind: EntityKind, entity_id: str) -> Entity:
        current = await self.get(kind, entity_id)
        if current is None:
            raise EntityNotFoundError(f"{kind.value} {entity_id} does not exist")
        return current

    async def _write(self, kind: EntityKind, doc: dict[str, Any]) -> Entity:
        # Round-trip through validation so in-place edits are type-checked
        checked = from_document(kind, doc)
        doc = to_document(checked)
        replaced = await self._run(self._replace, kind, doc)
        if not replaced:
            await self._run(self._insert, kind, doc)
        return checked

    async def update(self, kind: EntityKind, entity_id: str, patch: dict[str, Any]) -> Entity:
        async with self.locked(kind):
            current = await self._load_for_write(kind, entity_id)
            return await self._write(kind, {**to_document(current), **patch, "id": entity_id})

    async def modify(
        self, kind: EntityKind, entity_id: str, mutate: Callable[[Entity], None]
    ) -> Entity:
        async with self.locked(kind):
            current = await self._load_for_write(kind, entity_id)
            mutate(current)
            return await self._write(kind, current.model_dump())

    async def save(self, entity: Entity) -> Entity:
        kind = kind_of(entity)
        async with self.locked(kind):
            return await self._write(kind, entity.model_dump())
