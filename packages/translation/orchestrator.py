"""Translation orchestration: clip -> landmarks -> remote service -> result.

One translation at a time. Progress runs in two stages, "extracting"
(0-50%) and "translating" (50-100%). Every step is appended to a
timestamped diagnostic log that the caller can display verbatim.
"""

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from packages.capture import (
    BatchExtractor,
    FrameRecord,
    VideoFileSource,
    normalize,
    to_landmark_rows,
)
from packages.core import (
    DEFAULT_METHOD,
    MAX_SEQ_LEN,
    FrameSource,
    InputMode,
    InvalidStateError,
    Locale,
    MessageKey,
    NoInputError,
    SignTranslatorError,
    TranslationResult,
    message,
    timestamped,
)
from packages.session import RESULTS_SECTION, Clip, RecordingArtifact, SessionController, SpeechToggle
from packages.storage import TranslationHistory

from .client import TranslationClient

logger = logging.getLogger(__name__)

SourceFactory = Callable[[Path], FrameSource]
ProgressListener = Callable[[int, "Stage"], None]

EXTRACTION_SHARE = 50


class Stage(str, Enum):
    EXTRACTING = "extracting"
    TRANSLATING = "translating"


class TranslationOrchestrator:
    """Runs one translation end to end and records the outcome.

    Recordings that carry live-sampled frames skip batch extraction and
    are sent with `live_method`; everything else goes through the batch
    extractor and is sent with the selected `method`.
    """

    def __init__(
        self,
        session: SessionController,
        extractor: BatchExtractor,
        client: TranslationClient,
        history: TranslationHistory,
        speech: Optional[SpeechToggle] = None,
        source_factory: SourceFactory = VideoFileSource,
        max_seq_len: int = MAX_SEQ_LEN,
        method: str = DEFAULT_METHOD,
        live_method: str = DEFAULT_METHOD,
        locale: Locale = Locale.EN,
    ):
        self.session = session
        self.extractor = extractor
        self.client = client
        self.history = history
        self.speech = speech
        self.source_factory = source_factory
        self.max_seq_len = max_seq_len
        self.method = method
        self.live_method = live_method
        self.locale = locale

        self.is_processing = False
        self.stage: Optional[Stage] = None
        self.progress = 0
        self.logs: list[str] = []
        self.result: Optional[TranslationResult] = None
        self.error: Optional[str] = None
        self._progress_listeners: list[ProgressListener] = []

    def add_progress_listener(self, listener: ProgressListener) -> None:
        self._progress_listeners.append(listener)

    def _set_progress(self, percent: int, stage: Stage) -> None:
        self.progress = percent
        self.stage = stage
        for listener in list(self._progress_listeners):
            listener(percent, stage)

    def _log(self, key: MessageKey, *args) -> None:
        text = message(key, self.locale, *args)
        logger.debug(text)
        self.logs.append(timestamped(text))

    def _no_input(self) -> NoInputError:
        key = MessageKey.NO_FILE_RECORD if self.session.mode is InputMode.LIVE else MessageKey.NO_FILE_UPLOAD
        return NoInputError(message(key, self.locale))

    # ============ Pipeline ============

    async def _extract_file(self, path: Path) -> list[FrameRecord]:
        def on_frame(done: int, total: int) -> None:
            if total > 0:
                self._set_progress(done * EXTRACTION_SHARE // total, Stage.EXTRACTING)

        source = self.source_factory(path)
        try:
            outcome = await self.extractor.extract(source, on_frame=on_frame)
        finally:
            source.close()
        self.logs.extend(outcome.logs)
        return outcome.frames

    async def _raw_sequence(self, clip: Clip) -> tuple[list[FrameRecord], str]:
        """Pick the extraction path and the method key that goes with it."""
        if isinstance(clip, RecordingArtifact):
            if clip.has_frames:
                self._log(MessageKey.LOG_USING_LIVE_FRAMES, clip.frame_count)
                return list(clip.frames), self.live_method
            if clip.path is None:
                raise self._no_input()
            return await self._extract_file(clip.path), self.method
        return await self._extract_file(Path(clip)), self.method

    def _normalize(self, raw: list[FrameRecord]) -> list[FrameRecord]:
        count, target = len(raw), self.max_seq_len
        if count > target:
            self._log(MessageKey.LOG_TRUNCATING, count, target)
        elif count < target:
            self._log(MessageKey.LOG_PADDING, count, target, target - count)
        sequence = normalize(raw, target)
        self._log(MessageKey.LOG_FINAL_SEQUENCE, len(sequence))
        return sequence

    async def translate(self, clip: Optional[Clip] = None) -> TranslationResult:
        """Translate `clip`, or the session's current clip when omitted.

        Raises:
            NoInputError: If there is nothing to translate
            InvalidStateError: If a translation or recording is in progress
            ExtractionError: If landmarks could not be extracted
            ServiceError: If the remote service failed
        """
        if self.is_processing:
            raise InvalidStateError("translate", "already processing")
        if self.session.is_recording:
            raise InvalidStateError("translate", "recording")

        clip = clip if clip is not None else self.session.clip
        if clip is None:
            error = self._no_input()
            self.error = error.message
            raise error

        self.is_processing = True
        self.error = None
        self.result = None
        self.logs = []
        token = await self.session.suspend()
        try:
            self._set_progress(0, Stage.EXTRACTING)
            self._log(MessageKey.LOG_STARTING_EXTRACTION)
            raw, method = await self._raw_sequence(clip)
            sequence = self._normalize(raw)
            self._log(MessageKey.LOG_EXTRACTION_COMPLETE)

            self._set_progress(EXTRACTION_SHARE, Stage.TRANSLATING)
            self._log(MessageKey.LOG_SENDING_LANDMARKS)
            result = await asyncio.to_thread(self.client.translate, to_landmark_rows(sequence), method)

            self._set_progress(100, Stage.TRANSLATING)
            self._log(MessageKey.LOG_TRANSLATION_COMPLETE)
            logger.info(
                "Translated with %s in %.0f ms: %r", method, result.round_trip_ms, result.translation
            )
            self.result = result
            self.history.add_result(result)
            if self.speech is not None and result.translation:
                self.speech.speak(RESULTS_SECTION, result.translation)
            return result
        except Exception as e:
            text = e.message if isinstance(e, SignTranslatorError) else str(e) or type(e).__name__
            self.error = text
            self._log(MessageKey.LOG_ERROR, text)
            logger.error("Translation failed: %s", text)
            raise
        finally:
            self.is_processing = False
            self.stage = None
            await self.session.resume(token)
