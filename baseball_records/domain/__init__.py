"""
Domain package for Baseball Records.

Exports the game variants and the value objects shared by the store, the CLI
and the reporters. Keep this package focused on data definitions and
validation concerns.
"""

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
from baseball_records.domain.variants import Variant, variant_key, variant_label

__all__ = [
    "AllStatistics",
    "LeaderboardEntry",
    "RecentRecord",
    "Record",
    "SubmitOutcome",
    "Variant",
    "VariantStatistics",
    "VariantSummary",
    "deserialize_store",
    "serialize_store",
    "variant_key",
    "variant_label",
]
