"""
Infrastructure package for Baseball Records.

Centralizes durable storage concerns (file, in-memory and PostgreSQL
providers, connection factories). Keep this layer focused on I/O, decoupled
from ranking and statistics logic.
"""

from baseball_records.infrastructure.db_factory import build_dsn, get_sync_connection
from baseball_records.infrastructure.persistence import (
    FilePersistenceProvider,
    InMemoryPersistenceProvider,
    PersistenceProvider,
    available_backends,
    get_persistence_provider,
)
from baseball_records.infrastructure.postgres import PostgresPersistenceProvider

__all__ = [
    "FilePersistenceProvider",
    "InMemoryPersistenceProvider",
    "PersistenceProvider",
    "PostgresPersistenceProvider",
    "available_backends",
    "build_dsn",
    "get_persistence_provider",
    "get_sync_connection",
]
