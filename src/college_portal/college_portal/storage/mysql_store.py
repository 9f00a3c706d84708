from __future__ import annotations

import json
from typing import Any, Optional

from ..common.logging import get_logger
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .store import KeyValueStore

logger = get_logger("storage.mysql")


class MySQLKeyValueStore(KeyValueStore):
    """Key-value store on the ``kv_store`` table (see database/schema.sql)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[Any]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT store_value FROM kv_store WHERE store_key=%s", (key,))
            r = fetchone(cur)
        if not r:
            return None
        try:
            return json.loads(r["store_value"])
        except ValueError:
            logger.warning("Stored value for %r is not valid JSON, treating as missing", key)
            return None

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv_store(store_key, store_value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE store_value=VALUES(store_value)
                """,
                (key, payload),
            )

    def remove(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM kv_store WHERE store_key=%s", (key,))
