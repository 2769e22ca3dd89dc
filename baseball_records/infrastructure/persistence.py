"""
Persistence providers for the record store.

The store talks to durable storage only through the `PersistenceProvider`
protocol: a string blob read and written under a key. Concrete providers:

- `InMemoryPersistenceProvider` for tests and dry runs
- `FilePersistenceProvider` keeping one JSON file per key
- `PostgresPersistenceProvider` (see `baseball_records.infrastructure.postgres`)

`get_persistence_provider` resolves the backend named in settings.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable

from baseball_records.config import Settings, get_settings
from baseball_records.errors import PersistenceError
from baseball_records.infrastructure.db_factory import build_dsn
from baseball_records.infrastructure.postgres import PostgresPersistenceProvider
from baseball_records.utils.logging import get_logger

log = get_logger(__name__)


@runtime_checkable
class PersistenceProvider(Protocol):
    """
    Key/blob storage used by the record store.

    Implementations raise `PersistenceError` for I/O failures; a missing key is
    not a failure and reads as None.
    """

    def read(self, key: str) -> Optional[str]:
        """Return the blob stored under `key`, or None if nothing is stored."""
        ...

    def write(self, key: str, blob: str) -> None:
        """Replace the blob stored under `key`."""
        ...


class InMemoryPersistenceProvider:
    """Dict-backed provider; state lives as long as the instance."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._blobs: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self._blobs[key] = blob
        self.writes += 1


class FilePersistenceProvider:
    """
    Store each key as `<directory>/<key>.json`.

    Writes go to a temporary file in the same directory and are moved into
    place with `os.replace`, so readers never see a half-written blob.
    """

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ValueError(f"Invalid storage key '{key}'")
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            with path.open("r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Failed to read {path}: {exc}") from exc

    def write(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        tmp_name: Optional[str] = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
            # mkstemp creates 0600; keep the existing file's mode or use 0644.
            mode = path.stat().st_mode & 0o777 if path.exists() else 0o644
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise PersistenceError(f"Failed to write {path}: {exc}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        log.debug("Blob written", extra={"path": str(path), "bytes": len(blob)})


def _provider_factories() -> Dict[str, Callable[[Settings], PersistenceProvider]]:
    """Registry of available storage backends."""
    return {
        "memory": lambda settings: InMemoryPersistenceProvider(),
        "file": lambda settings: FilePersistenceProvider(settings.storage_dir),
        "postgres": lambda settings: PostgresPersistenceProvider(
            dsn=build_dsn(settings), table=settings.db_table
        ),
    }


def available_backends() -> List[str]:
    """List available storage backend names."""
    return sorted(_provider_factories().keys())


def get_persistence_provider(settings: Optional[Settings] = None) -> PersistenceProvider:
    """
    Build the provider named by `settings.storage_backend`.

    Raises
    ------
    ValueError
        If the backend name is not registered.
    """
    settings = settings or get_settings()
    factories = _provider_factories()
    name = settings.storage_backend.lower()
    if name not in factories:
        raise ValueError(
            f"Unknown storage backend '{settings.storage_backend}'. "
            f"Available: {', '.join(sorted(factories))}"
        )
    return factories[name](settings)


__all__ = [
    "PersistenceProvider",
    "InMemoryPersistenceProvider",
    "FilePersistenceProvider",
    "available_backends",
    "get_persistence_provider",
]
