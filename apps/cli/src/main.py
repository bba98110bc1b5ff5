"""Sign Translator CLI - translate sign-language video to text.

Usage:
    signtranslator <command> [options]

Commands:
    translate       Translate a video file
    record          Record from the camera and translate
    history         Show recent translations
    clear-history   Delete saved translations
    methods         List translation methods
    language        Show or change the display language
"""

import typer

from packages.core import get_config, setup_logging

from . import __version__
from .commands.history import clear_history, history
from .commands.record import record
from .commands.settings import language, methods
from .commands.translate import translate
from .utils.display import console

# Create the main app
app = typer.Typer(
    name="signtranslator",
    help="Sign Translator CLI - sign-language video to text",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"Sign Translator CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Sign Translator CLI - sign-language video to text."""
    setup_logging("DEBUG" if verbose else get_config().log_level.value)


# Register commands
app.command("translate")(translate)
app.command("record")(record)
app.command("history")(history)
app.command("clear-history")(clear_history)
app.command("methods")(methods)
app.command("language")(language)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
