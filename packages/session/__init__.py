"""Session package - camera, recording and UI state lifecycle."""

from .controller import Clip, RecordingArtifact, SessionController
from .speech import CommandSpeaker, find_speech_command
from .ui_state import (
    RESULTS_SECTION,
    SectionState,
    SectionStates,
    SpeechToggle,
)

__all__ = [
    "Clip",
    "RecordingArtifact",
    "SessionController",
    "CommandSpeaker",
    "find_speech_command",
    "RESULTS_SECTION",
    "SectionState",
    "SectionStates",
    "SpeechToggle",
]
