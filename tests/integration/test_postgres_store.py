"""
Integration tests for the PostgreSQL storage backend.

These tests run against a real PostgreSQL instance and verify that:
1. Blobs round-trip through the key/blob table
2. A record store saved through Postgres reloads identically

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os
import uuid

import psycopg
import pytest
from psycopg import sql

from baseball_records.infrastructure.db_factory import build_dsn
from baseball_records.infrastructure.postgres import PostgresPersistenceProvider
from baseball_records.store import RecordStore

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable Postgres",
)


@pytest.fixture
def table_name():
    """
    A throwaway table per test, dropped afterwards.
    """
    name = f"record_blobs_{uuid.uuid4().hex[:8]}"
    yield name
    with psycopg.connect(build_dsn()) as conn:
        conn.execute(sql.SQL("DROP TABLE IF EXISTS {}").format(sql.Identifier(name)))


def test_blob_round_trip(table_name):
    provider = PostgresPersistenceProvider(table=table_name)

    assert provider.read("records") is None
    provider.write("records", '{"m3e": []}')
    provider.write("records", '{"m4e": []}')
    assert provider.read("records") == '{"m4e": []}'


def test_store_reloads_from_postgres(table_name):
    store = RecordStore(PostgresPersistenceProvider(table=table_name))
    store.load()
    for attempts in (7, 3, 5):
        store.submit_result("m4i", attempts)

    reloaded = RecordStore(PostgresPersistenceProvider(table=table_name))
    reloaded.load()

    assert reloaded.get_leaderboard("m4i") == store.get_leaderboard("m4i")
    assert [e.attempts for e in reloaded.get_leaderboard("m4i")] == [3, 5, 7]
