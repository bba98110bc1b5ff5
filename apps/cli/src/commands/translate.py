"""Translate a sign-language video file."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from packages.core import (
    MessageKey,
    SignTranslatorError,
    TranslationResult,
    available_methods,
    get_config,
    message,
)
from packages.session import SessionController
from packages.translation import Stage, TranslationOrchestrator

from ..utils.config import build_orchestrator, build_session, build_speech, get_locale
from ..utils.display import console, print_logs, print_result

STAGE_MESSAGES = {
    Stage.EXTRACTING: MessageKey.EXTRACTING_LANDMARKS,
    Stage.TRANSLATING: MessageKey.TRANSLATING,
}


async def run_with_progress(
    orchestrator: TranslationOrchestrator, clip=None
) -> TranslationResult:
    """Run a translation while rendering its staged progress."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.percentage:>3.0f}%"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(
            message(MessageKey.EXTRACTING_LANDMARKS, orchestrator.locale), total=100
        )

        def on_progress(percent: int, stage: Stage) -> None:
            progress.update(
                task,
                completed=percent,
                description=message(STAGE_MESSAGES[stage], orchestrator.locale),
            )

        orchestrator.add_progress_listener(on_progress)
        return await orchestrator.translate(clip)


async def translate_file(
    session: SessionController, orchestrator: TranslationOrchestrator, video: Path
) -> TranslationResult:
    async with session:
        session.select_file(video)
        return await run_with_progress(orchestrator)


def check_method(method: Optional[str], locale) -> None:
    if method and method not in available_methods(locale):
        console.print(f"[red]Unknown method:[/] {method}")
        console.print(f"[dim]Available:[/] {', '.join(available_methods(locale))}")
        raise typer.Exit(1)


def translate(
    video: Path = typer.Argument(..., help="Video file to translate"),
    method: Optional[str] = typer.Option(
        None, "--method", "-m", help="Translation method key (see `methods`)"
    ),
    show_log: bool = typer.Option(
        False, "--log", "-l", help="Show the processing log and timing details"
    ),
    speak: bool = typer.Option(False, "--speak", "-s", help="Read the translation aloud"),
) -> None:
    """Translate a recorded sign-language video.

    Extracts hand landmarks frame by frame, normalizes them to a fixed
    length and sends them to the translation service.

    Example:
        signtranslator translate clip.mp4
        signtranslator translate clip.webm --method s2g_greedy_g2t --log
    """
    config = get_config()
    locale = get_locale()
    check_method(method, locale)

    session = build_session(config, locale)
    speech = build_speech(config) if speak else None
    if speak and speech is None:
        console.print("[yellow]No speech program found, continuing without speech[/]")
    orchestrator = build_orchestrator(session, config, locale, method=method, speech=speech)

    try:
        result = asyncio.run(translate_file(session, orchestrator, video))
    except SignTranslatorError as e:
        console.print(f"[red]Error:[/] {e.message}")
        if show_log:
            print_logs(orchestrator.logs)
        raise typer.Exit(1)

    print_result(result, locale, verbose=show_log)
    if show_log:
        print_logs(orchestrator.logs)
    if speech is not None:
        speech.speaker.wait(timeout=30)
