"""
Domain models for Baseball Records.

Defines the persisted `Record` shape plus the read-side value objects returned
by the record store. The serialized store is a JSON object mapping variant
keys to arrays of `{"attempts", "date", "timestamp"}` objects; the helpers at
the bottom of this module are the only place that format is produced or
parsed.
"""
from __future__ import annotations

from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field, TypeAdapter

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}


class Record(BaseModel):
    """
    One qualifying game result on a leaderboard.
    """

    attempts: int = Field(..., ge=1, description="Guesses needed to win.")
    played_on: date = Field(..., alias="date", description="Local calendar date of the game.")
    created_at: Optional[int] = Field(
        None,
        alias="timestamp",
        description="Insertion timestamp in epoch milliseconds; missing on legacy rows.",
    )

    model_config = _FROZEN


class SubmitOutcome(BaseModel):
    """Result of submitting a finished game."""

    is_new_record: bool
    rank: Optional[int] = Field(None, ge=1, description="1-based rank when the result qualified.")

    model_config = _FROZEN


class LeaderboardEntry(BaseModel):
    rank: int
    attempts: int
    date: str

    model_config = _FROZEN


class VariantStatistics(BaseModel):
    """
    Aggregates over one leaderboard.

    `recent_record` is the display date of the worst-ranked surviving record,
    or "-" for an empty leaderboard.
    """

    total_records: int = 0
    best_record: int = 0
    average_attempts: float = 0
    recent_record: str = "-"

    model_config = _FROZEN


class VariantSummary(VariantStatistics):
    name: str

    model_config = _FROZEN


class AllStatistics(BaseModel):
    total_games: int = 0
    overall_average: float = 0
    per_variant_stats: Dict[str, VariantSummary] = Field(default_factory=dict)

    model_config = _FROZEN


class RecentRecord(BaseModel):
    """A record pooled across variants, tagged with where it came from."""

    attempts: int
    date: str
    timestamp: Optional[int] = None
    variant: str
    variant_name: str

    model_config = _FROZEN


StoreSnapshot = Dict[str, List[Record]]

_STORE_ADAPTER: TypeAdapter[Dict[str, List[Record]]] = TypeAdapter(Dict[str, List[Record]])


def serialize_store(store: Mapping[str, Sequence[Record]]) -> str:
    """Render the whole store as its persisted JSON blob."""
    snapshot = {key: list(records) for key, records in store.items()}
    return _STORE_ADAPTER.dump_json(snapshot, by_alias=True).decode("utf-8")


def deserialize_store(blob: Union[str, bytes]) -> StoreSnapshot:
    """
    Parse a persisted JSON blob.

    Raises
    ------
    pydantic.ValidationError
        If the blob is not valid JSON or does not match the store shape.
    """
    return _STORE_ADAPTER.validate_json(blob)


__all__ = [
    "Record",
    "SubmitOutcome",
    "LeaderboardEntry",
    "VariantStatistics",
    "VariantSummary",
    "AllStatistics",
    "RecentRecord",
    "StoreSnapshot",
    "serialize_store",
    "deserialize_store",
]
