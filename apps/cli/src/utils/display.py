"""Rich display utilities for CLI output."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from packages.core import HistoryEntry, Locale, TranslationResult, format_duration, method_label

console = Console()


def confidence_color(confidence: float) -> str:
    """Get color for a confidence score."""
    if confidence >= 0.8:
        return "green"
    if confidence >= 0.5:
        return "yellow"
    return "red"


def print_result(result: TranslationResult, locale: Locale = Locale.EN, verbose: bool = False) -> None:
    """Print a translation result panel."""
    color = confidence_color(result.confidence)
    lines = [
        f"[bold]{result.translation or '-'}[/bold]",
        "",
        f"[dim]Gloss:[/] {result.gloss or '-'}",
        f"[dim]Confidence:[/] [{color}]{result.confidence:.0%}[/]",
        f"[dim]Method:[/] {result.method_label or method_label(result.method, locale)}",
    ]

    if verbose:
        if result.processing_time is not None:
            lines.append(f"[dim]Server time:[/] {result.processing_time}")
        lines.append(f"[dim]Round trip:[/] {format_duration(result.round_trip_ms)}")
        if result.landmarks_shape:
            lines.append(f"[dim]Landmarks shape:[/] {list(result.landmarks_shape)}")

    console.print(Panel("\n".join(lines), title="Translation", expand=False))


def print_history_table(entries: list[HistoryEntry], locale: Locale = Locale.EN) -> None:
    """Print history entries, newest first."""
    if not entries:
        console.print("[dim]No translation history[/]")
        return

    table = Table(title="Translation History")
    table.add_column("ID", style="dim")
    table.add_column("Time")
    table.add_column("Translation", style="bold")
    table.add_column("Confidence", justify="right")
    table.add_column("Method")

    for entry in entries:
        color = confidence_color(entry.confidence)
        table.add_row(
            str(entry.id),
            entry.time,
            entry.translation or "-",
            f"[{color}]{entry.confidence:.0%}[/]",
            method_label(entry.method, locale) if entry.method else "-",
        )

    console.print(table)


def print_logs(logs: list[str]) -> None:
    """Print the diagnostic log lines."""
    for line in logs:
        console.print(f"[dim]{line}[/]", highlight=False)
