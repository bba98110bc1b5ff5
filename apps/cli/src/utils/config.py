"""Factories wiring configuration to the library objects the commands use."""

from functools import lru_cache
from typing import Optional

from packages.capture import (
    BatchExtractor,
    MediaPipeHandDetector,
    OpenCVCameraProvider,
    OpenCVMediaRecorder,
)
from packages.core import Locale, TranslatorConfig, get_config
from packages.session import CommandSpeaker, SessionController, SpeechToggle, find_speech_command
from packages.storage import JsonKeyValueStore, Preferences, TranslationHistory
from packages.translation import TranslationClient, TranslationOrchestrator


@lru_cache
def get_store() -> JsonKeyValueStore:
    """Get the JSON state store."""
    return JsonKeyValueStore(get_config().state_file)


@lru_cache
def get_history() -> TranslationHistory:
    """Get the persisted translation history."""
    return TranslationHistory(get_store())


@lru_cache
def get_preferences() -> Preferences:
    """Get persisted preferences."""
    return Preferences(get_store(), default_language=get_config().language)


def get_locale() -> Locale:
    return get_preferences().language


def build_speech(config: TranslatorConfig) -> Optional[SpeechToggle]:
    """Speech output for results, None when no speech program is installed."""
    command = find_speech_command()
    if command is None:
        return None
    return SpeechToggle(CommandSpeaker(command), lang=config.speech_lang)


def build_session(config: TranslatorConfig, locale: Locale) -> SessionController:
    """Create a session bound to the configured camera."""
    return SessionController(
        camera_provider=OpenCVCameraProvider(config.camera_index),
        recorder_factory=lambda stream: OpenCVMediaRecorder(stream, config.recordings_dir),
        detector_factory=lambda: MediaPipeHandDetector.from_config(config),
        target_fps=config.target_fps,
        record_max_seconds=config.record_max_seconds,
        locale=locale,
    )


def build_orchestrator(
    session: SessionController,
    config: TranslatorConfig,
    locale: Locale,
    method: Optional[str] = None,
    speech: Optional[SpeechToggle] = None,
) -> TranslationOrchestrator:
    """Create an orchestrator for `session` using the configured backend."""
    return TranslationOrchestrator(
        session=session,
        extractor=BatchExtractor.from_config(config),
        client=TranslationClient(
            url=config.backend_url, timeout=config.request_timeout, locale=locale
        ),
        history=get_history(),
        speech=speech,
        max_seq_len=config.max_seq_len,
        method=method or config.default_method,
        live_method=config.default_method,
        locale=locale,
    )
