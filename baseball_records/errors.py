"""
Exception hierarchy for Baseball Records.

Callers can catch `RecordsError` for anything raised by this package, or the
narrower classes when they need to tell validation problems apart from
durability problems.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from baseball_records.domain.models import SubmitOutcome


class RecordsError(Exception):
    """Base class for all errors raised by the records package."""


class InvalidAttemptsError(RecordsError, ValueError):
    """An attempts value that is not a positive integer."""

    def __init__(self, attempts: object) -> None:
        super().__init__(f"attempts must be a positive integer, got {attempts!r}")
        self.attempts = attempts


class PersistenceError(RecordsError):
    """A persistence provider failed to read or write a blob."""


class RecordNotPersistedError(PersistenceError):
    """
    A result qualified and was ranked in memory, but saving the store failed.

    The outcome of the submission is kept on `outcome` so callers can still
    report the rank while treating the result as not durable.
    """

    def __init__(self, outcome: "SubmitOutcome", cause: Optional[BaseException] = None) -> None:
        message = f"record qualified at rank {outcome.rank} but was not durably saved"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.outcome = outcome


__all__ = [
    "RecordsError",
    "InvalidAttemptsError",
    "PersistenceError",
    "RecordNotPersistedError",
]
