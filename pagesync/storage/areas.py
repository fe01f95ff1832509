from __future__ import annotations

import copy
import datetime as dt
import json
import logging
import sqlite3
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

from .. import db

logger = logging.getLogger(__name__)


class StorageArea(Protocol):
    """One key-value tier, shaped like a browser `storage.<area>` object."""

    def get(self, key: str) -> tuple[bool, Any]: ...

    def set(self, items: Mapping[str, Any]) -> None: ...

    def remove(self, keys: Iterable[str]) -> None: ...

    def clear(self) -> None: ...

    def keys(self) -> list[str]: ...


class MemoryArea:
    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._items: dict[str, Any] = copy.deepcopy(dict(initial or {}))

    def get(self, key: str) -> tuple[bool, Any]:
        if key not in self._items:
            return False, None
        return True, copy.deepcopy(self._items[key])

    def set(self, items: Mapping[str, Any]) -> None:
        for key, value in items.items():
            self._items[key] = copy.deepcopy(value)

    def remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> list[str]:
        return sorted(self._items)


class SqliteArea:
    def __init__(self, db_path: Path | str, *, name: str = "local") -> None:
        self.db_path = Path(db_path).expanduser()
        self.name = name
        self.conn = db.connect(self.db_path)
        db.initialize_schema(self.conn)

    def close(self) -> None:
        self.conn.close()

    def get(self, key: str) -> tuple[bool, Any]:
        row = self.conn.execute(
            "SELECT value_json FROM storage_items WHERE key = ?",
            (key,),
        ).fetchone()
        if row is None:
            return False, None
        try:
            return True, json.loads(row["value_json"])
        except json.JSONDecodeError:
            # Unreadable rows behave like missing keys so callers fall back to defaults.
            logger.warning("corrupt value for %s in %s storage", key, self.name)
            return False, None

    def set(self, items: Mapping[str, Any]) -> None:
        now = dt.datetime.now(dt.UTC).isoformat()
        rows = [
            (key, json.dumps(value, ensure_ascii=False), now) for key, value in items.items()
        ]
        try:
            self.conn.executemany(
                """
                INSERT INTO storage_items(key, value_json, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value_json = excluded.value_json,
                    updated_at = excluded.updated_at
                """,
                rows,
            )
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise
        logger.debug("wrote %d item(s) to %s storage", len(rows), self.name)

    def remove(self, keys: Iterable[str]) -> None:
        try:
            self.conn.executemany(
                "DELETE FROM storage_items WHERE key = ?",
                [(key,) for key in keys],
            )
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise

    def clear(self) -> None:
        try:
            self.conn.execute("DELETE FROM storage_items")
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise
        logger.debug("cleared %s storage", self.name)

    def keys(self) -> list[str]:
        rows = self.conn.execute("SELECT key FROM storage_items ORDER BY key").fetchall()
        return [str(row["key"]) for row in rows]
