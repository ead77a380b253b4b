"""In-process gateway; used by tests and ephemeral runs."""

from __future__ import annotations

import copy
from typing import Any

from .gateway import DocumentGateway
from .models import EntityKind


class InMemoryFirmGateway(DocumentGateway):
    """Keeps every collection as a list of documents in memory."""

    def __init__(self) -> None:
        super().__init__()
        self._collections: dict[EntityKind, list[dict[str, Any]]] = {k: [] for k in EntityKind}

    async def _run(self, fn: Any, *args: Any) -> Any:
        return fn(*args)

    def _load_all(self, kind: EntityKind) -> list[dict[str, Any]]:
        return copy.deepcopy(self._collections[kind])

    def _insert(self, kind: EntityKind, doc: dict[str, Any]) -> None:
        self._collections[kind].append(copy.deepcopy(doc))

    def _replace(self, kind: EntityKind, doc: dict[str, Any]) -> bool:
        docs = self._collections[kind]
        for i, existing in enumerate(docs):
            if existing.get("id") == doc.get("id"):
                docs[i] = copy.deepcopy(doc)
                return True
        return False
