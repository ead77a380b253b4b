"""SQLite document store for firm entities (one table per entity kind)."""

from __future__ import annotations

import asyncio
import json
import sqlite3
import threading
from pathlib import Path
from typing import Any

from .gateway import DocumentGateway
from .models import EntityKind

_TABLES: dict[EntityKind, str] = {
    EntityKind.CLIENT: "clients",
    EntityKind.CASE: "cases",
    EntityKind.TASK: "tasks",
    EntityKind.TEAM_MEMBER: "team_members",
}


class SQLiteFirmGateway(DocumentGateway):
    """Stores each entity as a JSON document keyed by id.

    Rows keep their insertion ``seq`` so fuzzy lookups see entities in the
    order they were created.
    """

    def __init__(self, db_path: Path | str) -> None:
        super().__init__()
        self._path = Path(db_path)
        self._lock = threading.Lock()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            conn = self._conn()
            for table in _TABLES.values():
                conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {table} (
                        seq INTEGER PRIMARY KEY AUTOINCREMENT,
                        id TEXT NOT NULL UNIQUE,
                        doc_json TEXT NOT NULL
                    )
                    """
                )
            conn.commit()
            conn.close()

    def _conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._path), check_same_thread=False)
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        return conn

    async def _run(self, fn: Any, *args: Any) -> Any:
        return await asyncio.to_thread(fn, *args)

    def _load_all(self, kind: EntityKind) -> list[dict[str, Any]]:
        with self._lock:
            conn = self._conn()
            rows = conn.execute(
                f"SELECT doc_json FROM {_TABLES[kind]} ORDER BY seq"
            ).fetchall()
            conn.close()
        return [json.loads(r[0]) for r in rows]

    def _insert(self, kind: EntityKind, doc: dict[str, Any]) -> None:
        with self._lock:
            conn = self._conn()
            conn.execute(
                f"INSERT INTO {_TABLES[kind]} (id, doc_json) VALUES (?, ?)",
                (doc["id"], json.dumps(doc)),
            )
            conn.commit()
            conn.close()

    def _replace(self, kind: EntityKind, doc: dict[str, Any]) -> bool:
        with self._lock:
            conn = self._conn()
            cur = conn.execute(
                f"UPDATE {_TABLES[kind]} SET doc_json = ? WHERE id = ?",
                (json.dumps(doc), doc["id"]),
            )
            conn.commit()
            conn.close()
        return cur.rowcount > 0
