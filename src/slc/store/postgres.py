# SPDX-License-Identifier: MIT
"""
PostgreSQL state store.

One row per user in ``user_state``; property collections are stored as JSONB
arrays and re-normalized when the state is rebuilt.
"""
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

import psycopg
from psycopg.types.json import Jsonb
from psycopg_pool import ConnectionPool

from slc.core.exceptions import StoreError
from slc.core.models import UserRecord

logger = logging.getLogger(__name__)

SCHEMA_DDL = """
CREATE TABLE IF NOT EXISTS user_state (
    user_id       VARCHAR(128) PRIMARY KEY,
    class1_name   VARCHAR(255) NOT NULL DEFAULT '',
    class2_name   VARCHAR(255) NOT NULL DEFAULT '',
    class1_props  JSONB        NOT NULL DEFAULT '[]'::jsonb,
    class2_props  JSONB        NOT NULL DEFAULT '[]'::jsonb,
    general_props JSONB        NOT NULL DEFAULT '[]'::jsonb,
    none_props    JSONB        NOT NULL DEFAULT '[]'::jsonb,
    updated_at    TIMESTAMPTZ  NOT NULL DEFAULT now()
)
"""

SELECT_STATE = """
SELECT class1_name, class2_name, class1_props, class2_props, general_props, none_props
FROM user_state
WHERE user_id = %s
"""

UPSERT_STATE = """
INSERT INTO user_state
    (user_id, class1_name, class2_name, class1_props, class2_props, general_props, none_props)
VALUES (%s, %s, %s, %s, %s, %s, %s)
ON CONFLICT (user_id) DO UPDATE SET
    class1_name = EXCLUDED.class1_name,
    class2_name = EXCLUDED.class2_name,
    class1_props = EXCLUDED.class1_props,
    class2_props = EXCLUDED.class2_props,
    general_props = EXCLUDED.general_props,
    none_props = EXCLUDED.none_props,
    updated_at = now()
"""

DELETE_STATE = "DELETE FROM user_state WHERE user_id = %s"


def _decode_props(value: Any) -> List[str]:
    """JSONB arrays arrive as lists; anything unreadable decodes to empty."""
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


class PostgresStore:
    """StateStore backed by a psycopg connection pool."""

    name = "postgres"

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    @classmethod
    def from_dsn(
        cls,
        dsn: str,
        min_size: int = 1,
        max_size: int = 4,
        connect_timeout: int = 5,
    ) -> "PostgresStore":
        try:
            pool = ConnectionPool(
                dsn,
                min_size=min_size,
                max_size=max_size,
                kwargs={"connect_timeout": connect_timeout},
            )
        except psycopg.Error as e:
            raise StoreError(f"cannot open connection pool: {e}", operation="connect")
        return cls(pool)

    def ensure_schema(self) -> None:
        try:
            with self.pool.connection() as conn, conn.cursor() as cur:
                cur.execute(SCHEMA_DDL)
                conn.commit()
        except psycopg.Error as e:
            raise StoreError(f"schema setup failed: {e}", operation="schema")
        logger.info("user_state schema ready")

    def load(self, user_id: str) -> Optional[UserRecord]:
        try:
            with self.pool.connection() as conn, conn.cursor() as cur:
                cur.execute(SELECT_STATE, (user_id,))
                row = cur.fetchone()
        except psycopg.Error as e:
            raise StoreError(f"load failed: {e}", user_id=user_id, operation="load")

        if row is None:
            return None
        return UserRecord(
            user_id=user_id,
            class1_name=row[0] or "",
            class2_name=row[1] or "",
            class1_props=_decode_props(row[2]),
            class2_props=_decode_props(row[3]),
            general_props=_decode_props(row[4]),
            none_props=_decode_props(row[5]),
        )

    def save(self, user_id: str, record: UserRecord) -> None:
        params = (
            user_id,
            record.class1_name,
            record.class2_name,
            Jsonb(list(record.class1_props)),
            Jsonb(list(record.class2_props)),
            Jsonb(list(record.general_props)),
            Jsonb(list(record.none_props)),
        )
        try:
            with self.pool.connection() as conn, conn.cursor() as cur:
                cur.execute(UPSERT_STATE, params)
                conn.commit()
        except psycopg.Error as e:
            raise StoreError(f"save failed: {e}", user_id=user_id, operation="save")

    def delete(self, user_id: str) -> None:
        try:
            with self.pool.connection() as conn, conn.cursor() as cur:
                cur.execute(DELETE_STATE, (user_id,))
                conn.commit()
        except psycopg.Error as e:
            raise StoreError(f"delete failed: {e}", user_id=user_id, operation="delete")

    def ping(self) -> bool:
        # quick DB check
        try:
            with self.pool.connection() as conn, conn.cursor() as cur:
                cur.execute("SELECT 1")
                cur.fetchone()
            return True
        except psycopg.Error:
            return False

    def close(self) -> None:
        self.pool.close()
