"""Translation methods and display language."""

from typing import Optional

import typer
from rich.table import Table

from packages.core import Locale, available_methods, get_config

from ..utils.config import get_locale, get_preferences
from ..utils.display import console


def methods() -> None:
    """List the translation methods the service supports.

    Example:
        signtranslator methods
    """
    default = get_config().default_method

    table = Table(title="Translation Methods")
    table.add_column("Key", style="bold")
    table.add_column("Description")
    table.add_column("Default", justify="center")

    for key, label in available_methods(get_locale()).items():
        table.add_row(key, label, "[green]✓[/]" if key == default else "")

    console.print(table)


def language(
    code: Optional[str] = typer.Argument(None, help="Language code to switch to: en, de"),
) -> None:
    """Show or change the display language.

    Example:
        signtranslator language
        signtranslator language de
    """
    prefs = get_preferences()

    if code is None:
        console.print(f"Language: [bold]{prefs.language.value}[/]")
        return

    supported = [locale.value for locale in Locale]
    if code.strip().lower() not in supported:
        console.print(f"[red]Unsupported language:[/] {code} (choose from {', '.join(supported)})")
        raise typer.Exit(1)

    prefs.language = Locale.parse(code)
    console.print(f"[green]Language set to {prefs.language.value}[/]")
