"""Show and clear the translation history."""

import json

import typer

from ..utils.config import get_history, get_locale
from ..utils.display import console, print_history_table


def history(
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Maximum entries to show"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON records"),
) -> None:
    """Show recent translations, newest first.

    Example:
        signtranslator history
        signtranslator history --json
    """
    entries = get_history().entries[:limit]

    if as_json:
        console.print_json(json.dumps([entry.to_dict() for entry in entries]))
        return

    print_history_table(entries, get_locale())


def clear_history(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete all saved translations.

    Example:
        signtranslator clear-history --force
    """
    store = get_history()
    if len(store) == 0:
        console.print("[dim]History is already empty[/]")
        return

    if not force and not typer.confirm(f"Delete {len(store)} saved translations?"):
        raise typer.Exit(0)

    store.clear()
    console.print("[green]History cleared[/]")
