"""
Seed a record store with simulated number baseball games.

Implements deterministic pseudo-random game results (attempt counts scaled by
variant difficulty) and submits them through the record store, so the normal
qualification and retention rules decide what is kept.
"""

from __future__ import annotations

import random
import sys
import time
from typing import Dict, List, Optional

import typer

from baseball_records.config import get_settings
from baseball_records.domain.variants import Variant
from baseball_records.infrastructure.persistence import InMemoryPersistenceProvider
from baseball_records.store import RecordStore, open_record_store
from baseball_records.utils.logging import configure_logging

app = typer.Typer(help="Simulate games and submit them to the record store.")


def _simulate_attempts(rng: random.Random, variant: Variant) -> int:
    # Four-digit secrets and secrets allowing zero take longer to crack.
    mean = 5.5 + 2.0 * (variant.digits - 3) + (0.8 if variant.allows_zero else 0.0)
    return max(1, round(rng.gauss(mean, 1.8)))


def _seed_store(
    store: RecordStore,
    games: int,
    seed: int,
    variants: Optional[List[Variant]] = None,
) -> Dict[str, int]:
    """
    Submit `games` simulated results per variant.

    Returns the number of new records per variant key.
    """
    rng = random.Random(seed)
    targets = variants or list(Variant)
    new_records = {variant.value: 0 for variant in targets}
    for _ in range(games):
        for variant in targets:
            outcome = store.submit_result(variant, _simulate_attempts(rng, variant))
            if outcome.is_new_record:
                new_records[variant.value] += 1
    return new_records


@app.command()
def main(
    games: int = typer.Option(
        50,
        "--games",
        "-g",
        min=1,
        help="Number of games to simulate per variant.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    variant: Optional[Variant] = typer.Option(
        None,
        "--variant",
        "-v",
        help="Only seed this variant (default: all).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Use an in-memory store; nothing is persisted.",
    ),
) -> None:
    """
    Simulate games and report how many results became new records.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)

    if dry_run:
        store = RecordStore(
            InMemoryPersistenceProvider(),
            capacity=settings.leaderboard_size,
            date_format=settings.display_date_format,
        )
    else:
        store = open_record_store(settings)

    start = time.perf_counter()
    targets = [variant] if variant else None
    new_records = _seed_store(store, games=games, seed=seed, variants=targets)
    duration = time.perf_counter() - start

    for key, count in new_records.items():
        typer.echo(f"{key}: {count} new records out of {games} games")
    typer.echo(f"Seeding completed in {duration:.2f}s" + (" (dry run)." if dry_run else "."))


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
