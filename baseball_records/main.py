from __future__ import annotations

import json
import sys
from typing import Any, Optional

import typer

from baseball_records import reporter
from baseball_records.config import get_settings
from baseball_records.domain.variants import Variant, variant_label
from baseball_records.errors import InvalidAttemptsError, RecordNotPersistedError
from baseball_records.store import RecordStore, open_record_store
from baseball_records.utils.logging import configure_logging

app = typer.Typer(help="Baseball Records CLI: leaderboards and statistics for number baseball.")

JSON_OPTION = typer.Option(False, "--json", help="Print JSON instead of a table.")


def _open_store() -> RecordStore:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    return open_record_store(settings)


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    location = (
        f"{settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name}"
        f" table={settings.db_table}"
        if settings.storage_backend == "postgres"
        else str(settings.storage_dir)
    )
    typer.echo(
        f"backend={settings.storage_backend} ({location}) | key={settings.storage_key} | "
        f"leaderboard_size={settings.leaderboard_size} date_format={settings.display_date_format}"
    )


@app.command()
def variants() -> None:
    """
    List the game variants.
    """
    for variant in Variant:
        typer.echo(f"{variant.value}\t{variant.label}")


@app.command()
def submit(
    variant: str = typer.Argument(..., help="Variant key (e.g., m3e, m3i, m4e, m4i)."),
    attempts: int = typer.Argument(..., help="Guesses needed to win."),
    as_json: bool = JSON_OPTION,
) -> None:
    """
    Submit a finished game and report whether it made the leaderboard.
    """
    store = _open_store()
    try:
        outcome = store.submit_result(variant, attempts)
    except InvalidAttemptsError as exc:
        raise typer.BadParameter(str(exc), param_hint="ATTEMPTS") from exc
    except RecordNotPersistedError as exc:
        typer.echo(f"Rank {exc.outcome.rank} reached but not saved: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if as_json:
        _echo_json(outcome.model_dump(mode="json"))
    elif outcome.is_new_record:
        typer.echo(f"New record for {variant_label(variant)}! Rank {outcome.rank}.")
    else:
        typer.echo(f"No new record for {variant_label(variant)}.")


@app.command()
def leaderboard(
    variant: str = typer.Argument(..., help="Variant key."),
    as_json: bool = JSON_OPTION,
) -> None:
    """
    Show the leaderboard of one variant.
    """
    entries = _open_store().get_leaderboard(variant)
    if as_json:
        _echo_json([entry.model_dump(mode="json") for entry in entries])
        return
    reporter.print_leaderboard(variant_label(variant), entries)


@app.command()
def stats(
    variant: Optional[str] = typer.Option(
        None,
        "--variant",
        "-v",
        help="Show a single variant instead of the overall summary.",
    ),
    as_json: bool = JSON_OPTION,
) -> None:
    """
    Show statistics for one variant or for all of them.
    """
    store = _open_store()
    if variant is not None:
        variant_stats = store.get_statistics(variant)
        if as_json:
            _echo_json(variant_stats.model_dump(mode="json"))
            return
        reporter.print_variant_statistics(variant_label(variant), variant_stats)
        return

    all_stats = store.get_all_statistics()
    if as_json:
        _echo_json(all_stats.model_dump(mode="json"))
        return
    reporter.print_all_statistics(all_stats)


@app.command()
def recent(
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        min=0,
        help="Maximum records to show (default from settings).",
    ),
    as_json: bool = JSON_OPTION,
) -> None:
    """
    Show the most recently set records across all variants.
    """
    effective_limit = get_settings().recent_records_limit if limit is None else limit
    records = _open_store().get_recent_records(effective_limit)
    if as_json:
        _echo_json([record.model_dump(mode="json") for record in records])
        return
    reporter.print_recent_records(records)


@app.command()
def monthly(as_json: bool = JSON_OPTION) -> None:
    """
    Show how many records were set in each month.
    """
    counts = _open_store().get_monthly_stats()
    if as_json:
        _echo_json(counts)
        return
    reporter.print_monthly_stats(counts)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
