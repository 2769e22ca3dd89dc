"""
Record store: per-variant leaderboards, ranking and statistics.

The store owns a table of leaderboards keyed by variant. Each leaderboard is
kept sorted ascending by attempts (fewer is better) with ties in insertion
order, and never holds more than `capacity` records. Every accepted result
triggers a full re-save through the injected persistence provider.

Usage:
    from baseball_records.infrastructure.persistence import FilePersistenceProvider
    from baseball_records.store import RecordStore

    store = RecordStore(FilePersistenceProvider("data"))
    store.load()
    outcome = store.submit_result("m3e", 6)
    store.get_leaderboard("m3e")
"""

from __future__ import annotations

from collections import Counter
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, List, Optional

from pydantic import ValidationError

from baseball_records.clock import InsertionClock
from baseball_records.config import Settings, get_settings
from baseball_records.domain.models import (
    AllStatistics,
    LeaderboardEntry,
    RecentRecord,
    Record,
    SubmitOutcome,
    VariantStatistics,
    VariantSummary,
    deserialize_store,
    serialize_store,
)
from baseball_records.domain.variants import (
    VariantKey,
    known_variant_keys,
    variant_key,
    variant_label,
)
from baseball_records.errors import InvalidAttemptsError, PersistenceError, RecordNotPersistedError
from baseball_records.infrastructure.persistence import (
    PersistenceProvider,
    get_persistence_provider,
)
from baseball_records.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_STORAGE_KEY = "baseballRecordsMultiMode"
DEFAULT_CAPACITY = 10
EMPTY_DATE_PLACEHOLDER = "-"


def _round_average(values: Iterable[int]) -> float:
    """Mean rounded half-up to one decimal place; 0 for no values."""
    values = list(values)
    if not values:
        return 0.0
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _validate_attempts(attempts: object) -> int:
    if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
        raise InvalidAttemptsError(attempts)
    return attempts


class RecordStore:
    """
    Leaderboards for every game variant, backed by a persistence provider.

    Parameters
    ----------
    provider : PersistenceProvider
        Where the serialized store is read from and written to.
    storage_key : str
        Key under which the whole store is saved.
    capacity : int
        Maximum records kept per variant.
    date_format : str
        `strftime` format used for display dates.
    today : callable, optional
        Source of the current local date. Defaults to `date.today`.
    clock : InsertionClock, optional
        Source of strictly increasing insertion timestamps.
    """

    def __init__(
        self,
        provider: PersistenceProvider,
        storage_key: str = DEFAULT_STORAGE_KEY,
        capacity: int = DEFAULT_CAPACITY,
        date_format: str = "%Y.%m.%d",
        today: Optional[Callable[[], date]] = None,
        clock: Optional[InsertionClock] = None,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._provider = provider
        self._storage_key = storage_key
        self._capacity = capacity
        self._date_format = date_format
        self._today = today or date.today
        self._clock = clock or InsertionClock()
        self._boards: Dict[str, List[Record]] = self._empty_boards()

    @property
    def capacity(self) -> int:
        return self._capacity

    @staticmethod
    def _empty_boards() -> Dict[str, List[Record]]:
        return {key: [] for key in known_variant_keys()}

    def _format_date(self, record: Record) -> str:
        return record.played_on.strftime(self._date_format)

    def _board(self, variant: VariantKey) -> List[Record]:
        return self._boards.get(variant_key(variant), [])

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """
        Replace in-memory state with the persisted store.

        Never raises for bad data: a missing, unreadable or malformed blob
        leaves every variant with an empty leaderboard.
        """
        self._boards = self._empty_boards()
        try:
            blob = self._provider.read(self._storage_key)
        except PersistenceError:
            log.warning(
                "Could not read stored records; starting empty",
                exc_info=True,
                extra={"storage_key": self._storage_key},
            )
            return
        if blob is None:
            log.info("No stored records found", extra={"storage_key": self._storage_key})
            return

        try:
            snapshot = deserialize_store(blob)
        except ValidationError as exc:
            log.warning(
                "Stored records are corrupt; starting empty",
                extra={"storage_key": self._storage_key, "errors": exc.error_count()},
            )
            return

        for key, records in snapshot.items():
            board = sorted(records, key=lambda r: r.attempts)
            if len(board) > self._capacity:
                log.warning(
                    "Trimming oversized leaderboard",
                    extra={"variant": key, "stored": len(board), "capacity": self._capacity},
                )
                del board[self._capacity :]
            for record in board:
                self._clock.observe(record.created_at)
            self._boards[key] = board

        log.info(
            "Records loaded",
            extra={
                "storage_key": self._storage_key,
                "records": sum(len(b) for b in self._boards.values()),
            },
        )

    def save(self) -> None:
        """
        Overwrite the persisted store with the full in-memory state.

        Raises
        ------
        PersistenceError
            If the provider cannot write the blob.
        """
        self._provider.write(self._storage_key, serialize_store(self._boards))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def qualifies(self, variant: VariantKey, attempts: int) -> bool:
        """Whether `attempts` would earn a place on the variant's leaderboard."""
        board = self._board(variant)
        return len(board) < self._capacity or attempts < board[self._capacity - 1].attempts

    def submit_result(self, variant: VariantKey, attempts: int) -> SubmitOutcome:
        """
        Record a finished game if it makes the leaderboard.

        Parameters
        ----------
        variant : Variant | str
            Variant played. Unknown keys start a new, empty leaderboard.
        attempts : int
            Guesses needed to win; must be a positive integer.

        Returns
        -------
        SubmitOutcome
            `is_new_record` and, when it qualified, the 1-based rank.

        Raises
        ------
        InvalidAttemptsError
            If `attempts` is not a positive integer.
        RecordNotPersistedError
            If the result was ranked but saving the store failed. The ranking
            stays in memory and the outcome is attached to the error.
        """
        attempts = _validate_attempts(attempts)
        key = variant_key(variant)

        if not self.qualifies(key, attempts):
            log.debug("Result did not qualify", extra={"variant": key, "attempts": attempts})
            return SubmitOutcome(is_new_record=False)

        record = Record(attempts=attempts, played_on=self._today(), created_at=self._clock.next())
        board = self._boards.setdefault(key, [])
        board.append(record)
        board.sort(key=lambda r: r.attempts)
        del board[self._capacity :]

        rank = next(i for i, r in enumerate(board, start=1) if r is record)
        outcome = SubmitOutcome(is_new_record=True, rank=rank)
        log.info("New record", extra={"variant": key, "attempts": attempts, "rank": rank})

        try:
            self.save()
        except PersistenceError as exc:
            log.exception("New record not saved", extra={"variant": key, "rank": rank})
            raise RecordNotPersistedError(outcome, exc) from exc
        return outcome

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def variants(self) -> List[str]:
        """Variant keys held by the store, known variants first."""
        return list(self._boards)

    def get_leaderboard(self, variant: VariantKey) -> List[LeaderboardEntry]:
        return [
            LeaderboardEntry(rank=rank, attempts=record.attempts, date=self._format_date(record))
            for rank, record in enumerate(self._board(variant), start=1)
        ]

    def get_statistics(self, variant: VariantKey) -> VariantStatistics:
        board = self._board(variant)
        if not board:
            return VariantStatistics(
                total_records=0,
                best_record=0,
                average_attempts=0,
                recent_record=EMPTY_DATE_PLACEHOLDER,
            )
        attempts = [r.attempts for r in board]
        return VariantStatistics(
            total_records=len(board),
            best_record=min(attempts),
            average_attempts=_round_average(attempts),
            recent_record=self._format_date(board[-1]),
        )

    def get_all_statistics(self) -> AllStatistics:
        per_variant: Dict[str, VariantSummary] = {}
        pooled: List[int] = []
        for key, board in self._boards.items():
            stats = self.get_statistics(key)
            per_variant[key] = VariantSummary(name=variant_label(key), **stats.model_dump())
            pooled.extend(r.attempts for r in board)
        return AllStatistics(
            total_games=len(pooled),
            overall_average=_round_average(pooled),
            per_variant_stats=per_variant,
        )

    def get_recent_records(self, limit: int = 10) -> List[RecentRecord]:
        """
        Most recently inserted records across all variants, newest first.

        Records without an insertion timestamp sort as the oldest.
        """
        if limit < 0:
            raise ValueError(f"limit must not be negative, got {limit}")
        pooled = [
            RecentRecord(
                attempts=record.attempts,
                date=self._format_date(record),
                timestamp=record.created_at,
                variant=key,
                variant_name=variant_label(key),
            )
            for key, board in self._boards.items()
            for record in board
        ]
        pooled.sort(key=lambda r: r.timestamp or 0, reverse=True)
        return pooled[:limit]

    def get_monthly_stats(self) -> Dict[str, int]:
        """Record counts per calendar month ("YYYY.MM"), oldest month first."""
        counts = Counter(
            f"{record.played_on.year:04d}.{record.played_on.month:02d}"
            for board in self._boards.values()
            for record in board
        )
        return dict(sorted(counts.items()))


def open_record_store(settings: Optional[Settings] = None) -> RecordStore:
    """
    Build a loaded store from settings.

    Resolves the configured persistence backend, constructs the store with the
    configured retention and display format, and loads persisted records.
    """
    settings = settings or get_settings()
    store = RecordStore(
        get_persistence_provider(settings),
        storage_key=settings.storage_key,
        capacity=settings.leaderboard_size,
        date_format=settings.display_date_format,
    )
    store.load()
    return store


__all__ = [
    "DEFAULT_CAPACITY",
    "DEFAULT_STORAGE_KEY",
    "RecordStore",
    "open_record_store",
]
