"""
Baseball Records - leaderboards and statistics for number baseball.

Tracks the best results of four game variants (3 or 4 secret digits, with or
without zero), keeping the top ten per variant and deriving statistics:

- Ranking with stable tie-breaks by insertion order
- Top-N retention per variant
- Per-variant and pooled statistics, recent records and monthly counts

Storage is pluggable through persistence providers (in-memory, JSON file,
PostgreSQL).
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from baseball_records.config import Settings, get_settings
from baseball_records.domain.models import (
    AllStatistics,
    LeaderboardEntry,
    RecentRecord,
    Record,
    SubmitOutcome,
    VariantStatistics,
    VariantSummary,
)
from baseball_records.domain.variants import Variant, variant_label
from baseball_records.errors import (
    InvalidAttemptsError,
    PersistenceError,
    RecordNotPersistedError,
    RecordsError,
)
from baseball_records.infrastructure.persistence import (
    FilePersistenceProvider,
    InMemoryPersistenceProvider,
    PersistenceProvider,
    get_persistence_provider,
)
from baseball_records.store import RecordStore, open_record_store
from baseball_records.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Store
    "RecordStore",
    "open_record_store",
    # Domain
    "Variant",
    "variant_label",
    "Record",
    "SubmitOutcome",
    "LeaderboardEntry",
    "VariantStatistics",
    "VariantSummary",
    "AllStatistics",
    "RecentRecord",
    # Persistence
    "PersistenceProvider",
    "InMemoryPersistenceProvider",
    "FilePersistenceProvider",
    "get_persistence_provider",
    # Errors
    "RecordsError",
    "InvalidAttemptsError",
    "PersistenceError",
    "RecordNotPersistedError",
    # Logging
    "configure_logging",
    "get_logger",
]
