from __future__ import annotations

from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from baseball_records.domain.models import (
    AllStatistics,
    LeaderboardEntry,
    RecentRecord,
    VariantStatistics,
)


def _console(console: Optional[Console]) -> Console:
    return console or Console()


def _medal(rank: int) -> str:
    return {1: "🥇", 2: "🥈", 3: "🥉"}.get(rank, str(rank))


def print_leaderboard(
    title: str, entries: List[LeaderboardEntry], console: Optional[Console] = None
) -> None:
    """
    Render one variant's leaderboard, best result first.
    """
    console = _console(console)

    if not entries:
        console.print(f"[yellow]No records yet for {title}.[/yellow]")
        return

    table = Table(title=f"Leaderboard: {title}", box=box.ROUNDED)
    table.add_column("Rank", justify="right", style="cyan", no_wrap=True)
    table.add_column("Attempts", justify="right", style="bold green")
    table.add_column("Date", style="magenta")

    for entry in entries:
        table.add_row(_medal(entry.rank), str(entry.attempts), entry.date)

    console.print(table)


def print_variant_statistics(
    title: str, stats: VariantStatistics, console: Optional[Console] = None
) -> None:
    console = _console(console)
    table = Table(title=f"Statistics: {title}", box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Records", str(stats.total_records))
    table.add_row("Best", str(stats.best_record))
    table.add_row("Average attempts", f"{stats.average_attempts:.1f}")
    table.add_row("Last place date", stats.recent_record)
    console.print(table)


def print_all_statistics(stats: AllStatistics, console: Optional[Console] = None) -> None:
    """
    Render per-variant statistics with the pooled totals in the caption.
    """
    console = _console(console)

    table = Table(
        title="Baseball Records Statistics",
        box=box.ROUNDED,
        caption=f"Total records: {stats.total_games} │ Overall average: {stats.overall_average:.1f}",
    )
    table.add_column("Variant", style="cyan", no_wrap=True)
    table.add_column("Name", style="blue")
    table.add_column("Records", justify="right", style="magenta")
    table.add_column("Best", justify="right", style="bold green")
    table.add_column("Average", justify="right", style="green")
    table.add_column("Last place date", style="yellow")

    for key, summary in stats.per_variant_stats.items():
        table.add_row(
            key,
            summary.name,
            str(summary.total_records),
            str(summary.best_record),
            f"{summary.average_attempts:.1f}",
            summary.recent_record,
        )

    console.print(table)


def print_recent_records(records: List[RecentRecord], console: Optional[Console] = None) -> None:
    console = _console(console)

    if not records:
        console.print("[yellow]No records to display.[/yellow]")
        return

    table = Table(title="Recent Records", box=box.ROUNDED, caption="Newest first")
    table.add_column("Variant", style="cyan", no_wrap=True)
    table.add_column("Attempts", justify="right", style="bold green")
    table.add_column("Date", style="magenta")

    for record in records:
        table.add_row(record.variant_name, str(record.attempts), record.date)

    console.print(table)


def print_monthly_stats(counts: Dict[str, int], console: Optional[Console] = None) -> None:
    console = _console(console)

    if not counts:
        console.print("[yellow]No records to display.[/yellow]")
        return

    table = Table(title="Records per Month", box=box.ROUNDED)
    table.add_column("Month", style="cyan")
    table.add_column("Records", justify="right", style="green")
    for month, count in counts.items():
        table.add_row(month, str(count))

    console.print(table)
