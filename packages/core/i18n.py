"""Localized message catalog.

Messages are looked up through a typed key enum and a locale enum.
Lookup is total: a missing translation falls back to English, and an
unknown key yields a generic placeholder instead of the raw key.

Usage:
    from packages.core.i18n import Locale, MessageKey, message

    message(MessageKey.LOG_VIDEO_DURATION, Locale.DE, "2.40")
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Any, Union

logger = logging.getLogger(__name__)

MISSING_MESSAGE = "(message unavailable)"

_PLACEHOLDER = re.compile(r"\{(\d+)\}")


class Locale(str, Enum):
    """Supported display languages."""

    EN = "en"
    DE = "de"

    @classmethod
    def parse(cls, value: str) -> "Locale":
        """Parse a language code, defaulting to English."""
        try:
            return cls(value.strip().lower()[:2])
        except ValueError:
            return cls.EN


class MessageKey(str, Enum):
    """Keys of every user-visible message."""

    EXTRACTING_LANDMARKS = "extracting_landmarks"
    TRANSLATING = "translating"
    TRANSLATION_FAILED = "translation_failed"
    NO_FILE_UPLOAD = "no_file_upload"
    NO_FILE_RECORD = "no_file_record"
    INVALID_VIDEO_FILE = "invalid_video_file"

    LOG_STARTING_EXTRACTION = "log_starting_extraction"
    LOG_INITIALIZING_DETECTOR = "log_initializing_detector"
    LOG_DETECTOR_INITIALIZED = "log_detector_initialized"
    LOG_VIDEO_DURATION = "log_video_duration"
    LOG_EXTRACT_FRAMES = "log_extract_frames"
    LOG_EXTRACTED_FRAMES = "log_extracted_frames"
    LOG_USING_LIVE_FRAMES = "log_using_live_frames"
    LOG_TRUNCATING = "log_truncating"
    LOG_PADDING = "log_padding"
    LOG_FINAL_SEQUENCE = "log_final_sequence"
    LOG_EXTRACTION_COMPLETE = "log_extraction_complete"
    LOG_SENDING_LANDMARKS = "log_sending_landmarks"
    LOG_TRANSLATION_COMPLETE = "log_translation_complete"
    LOG_ERROR = "log_error"


MESSAGES: dict[Locale, dict[MessageKey, str]] = {
    Locale.EN: {
        MessageKey.EXTRACTING_LANDMARKS: "Extracting hand landmarks...",
        MessageKey.TRANSLATING: "Translating sign language...",
        MessageKey.TRANSLATION_FAILED: "Translation failed. Please try again.",
        MessageKey.NO_FILE_UPLOAD: "Please select a video file first",
        MessageKey.NO_FILE_RECORD: "Please record a video first",
        MessageKey.INVALID_VIDEO_FILE: "Please select a valid video file",
        MessageKey.LOG_STARTING_EXTRACTION: "Starting landmark extraction",
        MessageKey.LOG_INITIALIZING_DETECTOR: "Initializing hand detector...",
        MessageKey.LOG_DETECTOR_INITIALIZED: "Hand detector initialized",
        MessageKey.LOG_VIDEO_DURATION: "Video duration: {0}s",
        MessageKey.LOG_EXTRACT_FRAMES: "Extracting {0} frames at {1} fps",
        MessageKey.LOG_EXTRACTED_FRAMES: "Extracted landmarks from {0} frames",
        MessageKey.LOG_USING_LIVE_FRAMES: "Using {0} frames captured during recording",
        MessageKey.LOG_TRUNCATING: "Uniformly sampling {0} frames down to {1}",
        MessageKey.LOG_PADDING: "Padding {0} frames to {1} ({2} pad frames)",
        MessageKey.LOG_FINAL_SEQUENCE: "Final sequence length: {0}",
        MessageKey.LOG_EXTRACTION_COMPLETE: "Landmark extraction complete",
        MessageKey.LOG_SENDING_LANDMARKS: "Sending landmarks to translation service",
        MessageKey.LOG_TRANSLATION_COMPLETE: "Translation complete",
        MessageKey.LOG_ERROR: "Error: {0}",
    },
    Locale.DE: {
        MessageKey.EXTRACTING_LANDMARKS: "Handmerkmale werden extrahiert...",
        MessageKey.TRANSLATING: "Gebärdensprache wird übersetzt...",
        MessageKey.TRANSLATION_FAILED: "Übersetzung fehlgeschlagen. Bitte erneut versuchen.",
        MessageKey.NO_FILE_UPLOAD: "Bitte zuerst eine Videodatei auswählen",
        MessageKey.NO_FILE_RECORD: "Bitte zuerst ein Video aufnehmen",
        MessageKey.INVALID_VIDEO_FILE: "Bitte eine gültige Videodatei auswählen",
        MessageKey.LOG_STARTING_EXTRACTION: "Extraktion der Merkmale startet",
        MessageKey.LOG_INITIALIZING_DETECTOR: "Handerkennung wird initialisiert...",
        MessageKey.LOG_DETECTOR_INITIALIZED: "Handerkennung initialisiert",
        MessageKey.LOG_VIDEO_DURATION: "Videodauer: {0}s",
        MessageKey.LOG_EXTRACT_FRAMES: "{0} Frames bei {1} fps werden extrahiert",
        MessageKey.LOG_EXTRACTED_FRAMES: "Merkmale aus {0} Frames extrahiert",
        MessageKey.LOG_USING_LIVE_FRAMES: "{0} während der Aufnahme erfasste Frames werden verwendet",
        MessageKey.LOG_TRUNCATING: "{0} Frames werden gleichmäßig auf {1} reduziert",
        MessageKey.LOG_PADDING: "{0} Frames werden auf {1} aufgefüllt ({2} Füllframes)",
        MessageKey.LOG_FINAL_SEQUENCE: "Endgültige Sequenzlänge: {0}",
        MessageKey.LOG_EXTRACTION_COMPLETE: "Extraktion der Merkmale abgeschlossen",
        MessageKey.LOG_SENDING_LANDMARKS: "Merkmale werden an den Übersetzungsdienst gesendet",
        MessageKey.LOG_TRANSLATION_COMPLETE: "Übersetzung abgeschlossen",
        MessageKey.LOG_ERROR: "Fehler: {0}",
    },
}

# Method keys are sent to the backend; labels are display-only.
TRANSLATION_METHODS: dict[Locale, dict[str, str]] = {
    Locale.EN: {
        "s2g_greedy_g2t": "Sign2Gloss (greedy) + Gloss2Text",
        "s2g_beam_g2t": "Sign2Gloss (beam search) + Gloss2Text",
        "reranked_s2g_beam_g2t": "Reranked beam Sign2Gloss + Gloss2Text",
    },
    Locale.DE: {
        "s2g_greedy_g2t": "Sign2Gloss (Greedy) + Gloss2Text",
        "s2g_beam_g2t": "Sign2Gloss (Beam-Suche) + Gloss2Text",
        "reranked_s2g_beam_g2t": "Neu bewertete Beam-Suche Sign2Gloss + Gloss2Text",
    },
}


def _format(template: str, args: tuple[Any, ...]) -> str:
    """Fill {0}, {1}, ... placeholders, leaving unmatched ones intact."""
    if not args:
        return template

    def replace(match: re.Match) -> str:
        index = int(match.group(1))
        return str(args[index]) if index < len(args) else match.group(0)

    return _PLACEHOLDER.sub(replace, template)


def message(key: Union[MessageKey, str], locale: Locale = Locale.EN, *args: Any) -> str:
    """Look up a localized message.

    Args:
        key: Message key (enum member or its string value)
        locale: Display language
        *args: Positional values for {0}, {1}, ... placeholders

    Returns:
        The formatted message, the English text when the locale lacks it,
        or MISSING_MESSAGE for an unknown key
    """
    try:
        key = MessageKey(key)
    except ValueError:
        logger.warning("Unknown message key: %s", key)
        return MISSING_MESSAGE

    template = MESSAGES.get(locale, {}).get(key) or MESSAGES[Locale.EN].get(key)
    if template is None:
        return MISSING_MESSAGE
    return _format(template, args)


def method_label(method: str, locale: Locale = Locale.EN) -> str:
    """Display label of a translation method, the key itself if unlisted."""
    labels = TRANSLATION_METHODS.get(locale) or TRANSLATION_METHODS[Locale.EN]
    return labels.get(method) or TRANSLATION_METHODS[Locale.EN].get(method) or method


def available_methods(locale: Locale = Locale.EN) -> dict[str, str]:
    """All known method keys with their labels."""
    return dict(TRANSLATION_METHODS.get(locale) or TRANSLATION_METHODS[Locale.EN])
