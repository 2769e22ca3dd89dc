"""
Game variants of number baseball.

Each variant fixes the number of secret digits and whether zero may appear in
the secret. Every variant keeps its own independent leaderboard.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Union


class Variant(str, Enum):
    """Known game configurations, keyed by their short storage key."""

    M3E = "m3e"
    M3I = "m3i"
    M4E = "m4e"
    M4I = "m4i"

    @property
    def digits(self) -> int:
        return int(self.value[1])

    @property
    def allows_zero(self) -> bool:
        return self.value.endswith("i")

    @property
    def label(self) -> str:
        zero = "with zero" if self.allows_zero else "no zero"
        return f"{self.digits} digits, {zero}"


VariantKey = Union[Variant, str]


def variant_key(variant: VariantKey) -> str:
    """Normalize a Variant member or raw string to its storage key."""
    if isinstance(variant, Variant):
        return variant.value
    return str(variant)


def variant_label(variant: VariantKey) -> str:
    """Display name for a variant; unknown keys are shown as-is."""
    key = variant_key(variant)
    try:
        return Variant(key).label
    except ValueError:
        return key


def known_variant_keys() -> List[str]:
    return [v.value for v in Variant]


__all__ = ["Variant", "VariantKey", "variant_key", "variant_label", "known_variant_keys"]
