"""Record from the camera and translate the clip."""

import asyncio
from typing import Optional

import typer

from packages.core import SessionState, SignTranslatorError, format_duration, get_config
from packages.session import RecordingArtifact, SessionController
from packages.translation import TranslationOrchestrator

from ..utils.config import build_orchestrator, build_session, build_speech, get_locale
from ..utils.display import console, print_logs, print_result
from .translate import check_method, run_with_progress


async def record_clip(
    session: SessionController, duration: Optional[float] = None
) -> Optional[RecordingArtifact]:
    """Record until `duration` elapses or the session auto-stops."""
    await session.enter_live_mode()

    stopped = asyncio.Event()

    def on_state(state: SessionState) -> None:
        if state in (SessionState.CAMERA_ACTIVE, SessionState.IDLE):
            stopped.set()

    session.add_state_listener(on_state)
    session.add_countdown_listener(lambda seconds: console.print(f"[dim]{seconds}s remaining[/]"))

    await session.start_recording()
    console.print("[bold red]● Recording[/]")
    try:
        await asyncio.wait_for(stopped.wait(), timeout=duration)
    except asyncio.TimeoutError:
        await session.stop_recording()

    clip = session.clip
    return clip if isinstance(clip, RecordingArtifact) else None


async def record_and_translate(
    session: SessionController,
    orchestrator: Optional[TranslationOrchestrator],
    duration: Optional[float] = None,
):
    async with session:
        artifact = await record_clip(session, duration)
        if artifact is None:
            return None, None
        # Release the camera before the translation runs.
        await session.enter_upload_mode()
        if orchestrator is None:
            return artifact, None
        return artifact, await run_with_progress(orchestrator, artifact)


def record(
    duration: Optional[float] = typer.Option(
        None, "--duration", "-d", min=0.5, help="Seconds to record (default: until auto-stop)"
    ),
    translate_after: bool = typer.Option(
        True, "--translate/--no-translate", help="Translate the clip after recording"
    ),
    method: Optional[str] = typer.Option(
        None, "--method", "-m", help="Method for clips re-processed from file"
    ),
    show_log: bool = typer.Option(
        False, "--log", "-l", help="Show the processing log and timing details"
    ),
    speak: bool = typer.Option(False, "--speak", "-s", help="Read the translation aloud"),
) -> None:
    """Record a sign from the camera and translate it.

    Recording stops automatically after the configured maximum.

    Example:
        signtranslator record
        signtranslator record --duration 4 --no-translate
    """
    config = get_config()
    locale = get_locale()
    check_method(method, locale)

    session = build_session(config, locale)
    speech = build_speech(config) if speak and translate_after else None
    orchestrator = (
        build_orchestrator(session, config, locale, method=method, speech=speech)
        if translate_after
        else None
    )

    try:
        artifact, result = asyncio.run(record_and_translate(session, orchestrator, duration))
    except SignTranslatorError as e:
        console.print(f"[red]Error:[/] {e.message}")
        if show_log and orchestrator is not None:
            print_logs(orchestrator.logs)
        raise typer.Exit(1)

    if artifact is None:
        console.print(f"[red]{session.error or 'Recording produced no clip'}[/]")
        raise typer.Exit(1)

    console.print(
        f"[green]Recorded {format_duration(artifact.duration_s * 1000)}[/] "
        f"({artifact.frame_count} live frames) -> {artifact.path or '-'}"
    )
    if result is not None:
        print_result(result, locale, verbose=show_log)
        if show_log:
            print_logs(orchestrator.logs)
        if speech is not None:
            speech.speaker.wait(timeout=30)
