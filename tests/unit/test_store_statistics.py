from __future__ import annotations

from datetime import date

import pytest

from baseball_records.domain.models import VariantStatistics
from baseball_records.domain.variants import Variant

EMPTY_STATS = {
    "total_records": 0,
    "best_record": 0,
    "average_attempts": 0,
    "recent_record": "-",
}


def test_statistics_of_empty_variant(store) -> None:
    stats = store.get_statistics(Variant.M4E)

    assert stats == VariantStatistics(**EMPTY_STATS)
    assert stats.model_dump() == EMPTY_STATS


def test_statistics_of_unknown_variant_are_empty(store) -> None:
    assert store.get_statistics("zz").model_dump() == EMPTY_STATS


def test_statistics_summarize_leaderboard(make_store) -> None:
    store = make_store(dates=[date(2026, 10, 1), date(2026, 10, 2), date(2026, 10, 3)])
    store.submit_result("m3e", 7)
    store.submit_result("m3e", 3)
    store.submit_result("m3e", 4)

    stats = store.get_statistics("m3e")

    assert stats.total_records == 3
    assert stats.best_record == 3
    assert stats.average_attempts == 4.7
    # Date of the worst-ranked record, not of the latest insertion.
    assert stats.recent_record == "2026.10.01"


def test_average_rounds_half_up_to_one_decimal(store) -> None:
    for attempts in (1, 1, 1, 2):
        store.submit_result("m3i", attempts)

    assert store.get_statistics("m3i").average_attempts == 1.3


def test_average_rounds_exact_mean_not_binary_double(make_store) -> None:
    # 23/20 is 1.15 exactly; the double nearest to it is just below 1.15.
    store = make_store(capacity=20)
    for attempts in [1] * 17 + [2] * 3:
        store.submit_result("m3i", attempts)

    assert store.get_statistics("m3i").average_attempts == 1.2


def test_display_date_format_is_configurable(make_store) -> None:
    store = make_store(date_format="%d/%m/%Y")
    store.submit_result("m3e", 5)

    assert store.get_statistics("m3e").recent_record == "18/10/2026"
    assert store.get_leaderboard("m3e")[0].date == "18/10/2026"


def test_leaderboard_entries_carry_rank_attempts_and_date(store) -> None:
    store.submit_result("m4i", 9)
    store.submit_result("m4i", 6)

    entries = [entry.model_dump() for entry in store.get_leaderboard("m4i")]

    assert entries == [
        {"rank": 1, "attempts": 6, "date": "2026.10.18"},
        {"rank": 2, "attempts": 9, "date": "2026.10.18"},
    ]


def test_all_statistics_when_empty(store) -> None:
    all_stats = store.get_all_statistics()

    assert all_stats.total_games == 0
    assert all_stats.overall_average == 0
    assert list(all_stats.per_variant_stats) == ["m3e", "m3i", "m4e", "m4i"]
    for summary in all_stats.per_variant_stats.values():
        assert summary.total_records == 0
        assert summary.recent_record == "-"


def test_all_statistics_pool_every_variant(store) -> None:
    for attempts in (3, 4, 7):
        store.submit_result("m3e", attempts)
    store.submit_result("m4i", 10)
    store.submit_result("m4e", 5)

    all_stats = store.get_all_statistics()

    pooled = [3, 4, 7, 10, 5]
    assert all_stats.total_games == len(pooled)
    assert all_stats.overall_average == round(sum(pooled) / len(pooled), 1)
    m3e = all_stats.per_variant_stats["m3e"]
    assert m3e.name == "3 digits, no zero"
    assert (m3e.total_records, m3e.best_record, m3e.average_attempts) == (3, 3, 4.7)
    assert all_stats.per_variant_stats["m4i"].name == "4 digits, with zero"


def test_all_statistics_include_unknown_variants_last(store) -> None:
    store.submit_result("x9", 2)

    all_stats = store.get_all_statistics()

    assert list(all_stats.per_variant_stats)[-1] == "x9"
    assert all_stats.per_variant_stats["x9"].name == "x9"
    assert all_stats.total_games == 1


def test_recent_records_newest_first_across_variants(store, now_ms) -> None:
    store.submit_result("m3e", 5)
    store.submit_result("m4e", 6)
    store.submit_result("m3i", 7)

    recent = store.get_recent_records()

    assert [(r.variant, r.attempts, r.timestamp) for r in recent] == [
        ("m3i", 7, now_ms + 2),
        ("m4e", 6, now_ms + 1),
        ("m3e", 5, now_ms),
    ]
    assert recent[0].variant_name == "3 digits, with zero"
    assert recent[0].date == "2026.10.18"


def test_recent_records_respect_limit(store) -> None:
    for attempts in range(1, 16):
        store.submit_result("m4i", attempts)

    assert len(store.get_recent_records()) == 10
    assert [r.attempts for r in store.get_recent_records(limit=2)] == [10, 9]
    assert store.get_recent_records(limit=0) == []


def test_recent_records_reject_negative_limit(store) -> None:
    with pytest.raises(ValueError, match="limit"):
        store.get_recent_records(limit=-1)


def test_monthly_stats_count_records_per_month(make_store) -> None:
    store = make_store(
        dates=[date(2026, 10, 18), date(2025, 12, 31), date(2026, 9, 30), date(2026, 10, 1)]
    )
    store.submit_result("m3e", 4)
    store.submit_result("m3i", 5)
    store.submit_result("m4e", 6)
    store.submit_result("m4e", 9)

    monthly = store.get_monthly_stats()

    assert monthly == {"2025.12": 1, "2026.09": 1, "2026.10": 2}
    assert list(monthly) == ["2025.12", "2026.09", "2026.10"]


def test_monthly_stats_empty_store(store) -> None:
    assert store.get_monthly_stats() == {}
