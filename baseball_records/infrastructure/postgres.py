"""
PostgreSQL-backed persistence provider.

Keeps every blob in one table::

    CREATE TABLE record_blobs (
        key        TEXT PRIMARY KEY,
        blob       TEXT NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    );

The table is created on first use. Writes are upserts, so the latest save
always replaces the previous one.
"""

from __future__ import annotations

from typing import Callable, Optional

import psycopg
from psycopg import Connection, sql

from baseball_records.errors import PersistenceError
from baseball_records.infrastructure.db_factory import get_sync_connection
from baseball_records.utils.logging import get_logger

log = get_logger(__name__)


class PostgresPersistenceProvider:
    """
    Store blobs in a PostgreSQL key/blob table.

    Parameters
    ----------
    dsn : str | None
        Connection string; defaults to the DSN built from settings.
    table : str
        Table name holding the blobs.
    connect : callable, optional
        Connection factory taking a DSN (or None). Defaults to
        `get_sync_connection`, which retries transient failures.
    """

    def __init__(
        self,
        dsn: Optional[str] = None,
        table: str = "record_blobs",
        connect: Optional[Callable[[Optional[str]], Connection]] = None,
    ) -> None:
        self._dsn = dsn
        self._table = sql.Identifier(table)
        self._connect = connect or get_sync_connection
        self._table_ready = False

    def _ensure_table(self, conn: Connection) -> None:
        if self._table_ready:
            return
        with conn.cursor() as cur:
            cur.execute(
                sql.SQL(
                    "CREATE TABLE IF NOT EXISTS {} ("
                    "key TEXT PRIMARY KEY, "
                    "blob TEXT NOT NULL, "
                    "updated_at TIMESTAMPTZ NOT NULL DEFAULT now())"
                ).format(self._table)
            )
        conn.commit()
        self._table_ready = True

    def read(self, key: str) -> Optional[str]:
        try:
            conn = self._connect(self._dsn)
            try:
                self._ensure_table(conn)
                with conn.cursor() as cur:
                    cur.execute(
                        sql.SQL("SELECT blob FROM {} WHERE key = %s").format(self._table),
                        (key,),
                    )
                    row = cur.fetchone()
            finally:
                conn.close()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to read key '{key}': {exc}") from exc
        return row[0] if row else None

    def write(self, key: str, blob: str) -> None:
        try:
            conn = self._connect(self._dsn)
            try:
                self._ensure_table(conn)
                with conn.cursor() as cur:
                    cur.execute(
                        sql.SQL(
                            "INSERT INTO {} (key, blob) VALUES (%s, %s) "
                            "ON CONFLICT (key) DO UPDATE "
                            "SET blob = EXCLUDED.blob, updated_at = now()"
                        ).format(self._table),
                        (key, blob),
                    )
                conn.commit()
            finally:
                conn.close()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to write key '{key}': {exc}") from exc
        log.debug("Blob upserted", extra={"key": key, "bytes": len(blob)})


__all__ = ["PostgresPersistenceProvider"]
