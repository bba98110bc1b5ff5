"""Capture session lifecycle.

The controller is the only owner of the camera stream, the media
recorder, the live extractor and the recording timers. Every path out of
CameraActive or Recording releases the camera, including teardown
through `async with`.

States:
    IDLE -> CAMERA_STARTING -> CAMERA_ACTIVE -> RECORDING -> STOPPING -> CAMERA_ACTIVE
    CAMERA_STARTING -> IDLE  (camera access failed)
    CAMERA_ACTIVE / RECORDING -> IDLE  (upload mode, suspend, teardown)
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from packages.capture import FrameRecord, LiveExtractor
from packages.core import (
    RECORD_MAX_SECONDS,
    TARGET_FPS,
    CameraAccessError,
    CameraNotActiveError,
    CameraProvider,
    DetectorInitError,
    HandDetector,
    InputMode,
    InvalidStateError,
    Locale,
    MediaRecorder,
    MediaStream,
    MessageKey,
    NoInputError,
    RecordingError,
    RecordingSaveError,
    SessionState,
    is_video_file,
    message,
)

logger = logging.getLogger(__name__)

RecorderFactory = Callable[[MediaStream], MediaRecorder]
DetectorFactory = Callable[[], HandDetector]
StateListener = Callable[[SessionState], None]
CountdownListener = Callable[[int], None]


@dataclass(frozen=True)
class RecordingArtifact:
    """A finished recording and the landmarks sampled while it ran.

    Both cover the same Recording window.
    """
    path: Optional[Path]
    frames: tuple[FrameRecord, ...] = ()
    duration_s: float = 0.0
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def has_frames(self) -> bool:
        return bool(self.frames)


Clip = Union[Path, RecordingArtifact]


class SessionController:
    """State machine over camera, recorder, live extractor and timers."""

    def __init__(
        self,
        camera_provider: CameraProvider,
        recorder_factory: RecorderFactory,
        detector_factory: Optional[DetectorFactory] = None,
        target_fps: int = TARGET_FPS,
        record_max_seconds: float = RECORD_MAX_SECONDS,
        locale: Locale = Locale.EN,
    ):
        self.camera_provider = camera_provider
        self.recorder_factory = recorder_factory
        self.detector_factory = detector_factory
        self.target_fps = target_fps
        self.record_max_seconds = record_max_seconds
        self.locale = locale

        self.mode = InputMode.UPLOAD
        self.clip: Optional[Clip] = None
        self.preview_path: Optional[Path] = None
        self.error: Optional[str] = None
        self.remaining_seconds = 0
        self.recordings_finalized = 0

        self._state = SessionState.IDLE
        self._stream: Optional[MediaStream] = None
        self._recorder: Optional[MediaRecorder] = None
        self._detector: Optional[HandDetector] = None
        self._live: Optional[LiveExtractor] = None
        self._countdown: Optional[asyncio.Task] = None
        self._auto_stop: Optional[asyncio.TimerHandle] = None
        self._auto_stop_task: Optional[asyncio.Task] = None
        self._recording_started = 0.0
        self._generation = 0
        self._closed = False
        self._state_listeners: list[StateListener] = []
        self._countdown_listeners: list[CountdownListener] = []

    # ============ Observation ============

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def stream(self) -> Optional[MediaStream]:
        return self._stream

    @property
    def active_tracks(self) -> int:
        return self._stream.active_tracks if self._stream is not None else 0

    @property
    def is_recording(self) -> bool:
        return self._state is SessionState.RECORDING

    @property
    def live_frame_count(self) -> int:
        return self._live.frame_count if self._live is not None else 0

    @property
    def auto_stop_pending(self) -> bool:
        return self._auto_stop is not None

    def add_state_listener(self, listener: StateListener) -> None:
        self._state_listeners.append(listener)

    def add_countdown_listener(self, listener: CountdownListener) -> None:
        self._countdown_listeners.append(listener)

    def _set_state(self, state: SessionState) -> None:
        if state is self._state:
            return
        logger.debug("Session %s -> %s", self._state.value, state.value)
        self._state = state
        for listener in list(self._state_listeners):
            listener(state)

    def _set_remaining(self, seconds: int) -> None:
        self.remaining_seconds = seconds
        for listener in list(self._countdown_listeners):
            listener(seconds)

    # ============ Input modes ============

    def _reset_selection(self) -> None:
        self.clip = None
        self.preview_path = None
        self.error = None

    async def enter_live_mode(self) -> None:
        """Switch to live capture and start the camera.

        Raises:
            CameraAccessError: If the camera cannot be acquired; the
                session is back in IDLE with `error` set
        """
        if self._closed:
            raise InvalidStateError("enter live mode", "closed")
        if self.mode is InputMode.LIVE and self._state is not SessionState.IDLE:
            return
        self._generation += 1
        self.mode = InputMode.LIVE
        self._reset_selection()
        await self._start_camera()

    async def enter_upload_mode(self) -> None:
        """Switch to file upload, releasing the camera if it is held."""
        self._generation += 1
        self.mode = InputMode.UPLOAD
        self._reset_selection()
        await self._release_camera()

    def select_file(self, path: Union[str, Path]) -> Path:
        """Select an uploaded clip for translation."""
        if self.mode is not InputMode.UPLOAD:
            raise InvalidStateError("select a file", f"in {self.mode.value} mode")
        path = Path(path)
        if not path.is_file() or not is_video_file(path):
            self.error = message(MessageKey.INVALID_VIDEO_FILE, self.locale)
            raise NoInputError(self.error)
        self._reset_selection()
        self.clip = path
        self.preview_path = path
        return path

    # ============ Camera ============

    async def _ensure_detector(self) -> None:
        """Create and initialize the live detector once per session.

        Any failure leaves live extraction unavailable; the camera still
        comes up and recordings are re-processed from the file.
        """
        if self._live is not None or self.detector_factory is None:
            return
        try:
            detector = self.detector_factory()
        except Exception as e:
            logger.warning("Live extraction unavailable, recordings will be re-processed: %s", e)
            return
        try:
            await detector.initialize()
        except Exception as e:
            detector.close()
            reason = e.message if isinstance(e, DetectorInitError) else str(e)
            logger.warning("Live extraction unavailable, recordings will be re-processed: %s", reason)
            return
        self._detector = detector
        self._live = LiveExtractor(detector, target_fps=self.target_fps)

    def _superseded(self, generation: int) -> bool:
        return self._closed or self.mode is not InputMode.LIVE or generation != self._generation

    async def _start_camera(self) -> None:
        generation = self._generation
        self._set_state(SessionState.CAMERA_STARTING)
        try:
            stream = await self.camera_provider.open()
        except CameraAccessError as e:
            logger.error("Camera access failed: %s", e.reason)
            self.error = e.message
            if not self._superseded(generation):
                self._set_state(SessionState.IDLE)
            raise

        if self._superseded(generation):
            # Mode changed while the camera was being acquired.
            stream.stop()
            return

        self._stream = stream
        await self._ensure_detector()
        if self._superseded(generation) or self._stream is not stream:
            return
        self.error = None
        self._set_state(SessionState.CAMERA_ACTIVE)

    async def _release_camera(self) -> None:
        """Stop everything bound to the camera and release all tracks."""
        self._cancel_timers()
        if self._live is not None and self._live.active:
            self._live.stop()

        stream, self._stream = self._stream, None
        recorder, self._recorder = self._recorder, None
        try:
            if recorder is not None and recorder.state != "inactive":
                # Abandoned recordings are finalized but never selected.
                await recorder.stop()
        finally:
            if stream is not None:
                stream.stop()
            self._set_state(SessionState.IDLE)

    # ============ Recording ============

    def _cancel_timers(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None
        if self._auto_stop is not None:
            self._auto_stop.cancel()
            self._auto_stop = None
        self.remaining_seconds = 0

    async def _run_countdown(self) -> None:
        while self.remaining_seconds > 0:
            await asyncio.sleep(1)
            self._set_remaining(max(self.remaining_seconds - 1, 0))

    def _on_auto_stop(self) -> None:
        self._auto_stop = None
        if self._state is SessionState.RECORDING:
            logger.info("Recording reached %ss limit", self.record_max_seconds)
            task = asyncio.get_running_loop().create_task(self.stop_recording())
            task.add_done_callback(self._collect_auto_stop)
            self._auto_stop_task = task

    @staticmethod
    def _collect_auto_stop(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Automatic stop failed: %s", error)

    async def start_recording(self) -> None:
        """Start recording the active camera stream.

        Raises:
            CameraNotActiveError: If no camera stream is attached
            InvalidStateError: If the session is not CAMERA_ACTIVE
            RecordingError: If the recorder cannot be created or started
        """
        if self._stream is None:
            self.error = CameraNotActiveError().message
            raise CameraNotActiveError()
        if self._state is not SessionState.CAMERA_ACTIVE:
            raise InvalidStateError("start recording", self._state.value)

        try:
            recorder = self.recorder_factory(self._stream)
            recorder.start()
        except RecordingError as e:
            logger.error("Recorder failed to start: %s", e.reason)
            self.error = e.message
            raise

        self._recorder = recorder
        if self._live is not None:
            self._live.start(self._stream)

        loop = asyncio.get_running_loop()
        self._cancel_timers()
        self._set_remaining(int(self.record_max_seconds))
        self._countdown = loop.create_task(self._run_countdown())
        self._auto_stop = loop.call_later(self.record_max_seconds, self._on_auto_stop)
        self._recording_started = time.monotonic()
        self.error = None
        self._set_state(SessionState.RECORDING)

    async def stop_recording(self) -> Optional[RecordingArtifact]:
        """Stop recording and publish the finished clip.

        A no-op returning None when not recording, so a late auto-stop
        cannot finalize twice. The session leaves STOPPING even when the
        file cannot be written.

        Raises:
            RecordingSaveError: If the recorder fails to finalize the file
        """
        if self._state is not SessionState.RECORDING:
            return None

        # Timers go first so a pending auto-stop cannot fire a second stop.
        self._cancel_timers()
        self._set_state(SessionState.STOPPING)

        frames = self._live.stop() if self._live is not None else []
        duration = time.monotonic() - self._recording_started
        recorder, self._recorder = self._recorder, None
        artifact = None
        try:
            path = await recorder.stop() if recorder is not None else None
            self.recordings_finalized += 1
            artifact = RecordingArtifact(path=path, frames=tuple(frames), duration_s=duration)
            logger.info(
                "Recorded %.1fs clip with %d live frames -> %s", duration, artifact.frame_count, path
            )
        except RecordingSaveError as e:
            logger.error("Failed to finalize recording: %s", e.reason)
            self.error = e.message
            raise
        except OSError as e:
            logger.error("Failed to finalize recording: %s", e)
            error = RecordingSaveError(str(e))
            self.error = error.message
            raise error from e
        finally:
            if self._state is SessionState.STOPPING:
                if artifact is not None:
                    self.clip = artifact
                    self.preview_path = artifact.path
                self._set_state(
                    SessionState.CAMERA_ACTIVE if self._stream is not None else SessionState.IDLE
                )
        return artifact

    # ============ Translation hand-off ============

    async def suspend(self) -> Optional[int]:
        """Release the camera for processing while staying in live mode.

        Returns:
            A token for `resume`, or None when not in live mode
        """
        if self.mode is not InputMode.LIVE:
            return None
        await self._release_camera()
        return self._generation

    async def resume(self, token: Optional[int]) -> None:
        """Re-enter CAMERA_ACTIVE after processing, unless the mode changed meanwhile."""
        if token is None or self._closed:
            return
        if self.mode is not InputMode.LIVE or token != self._generation:
            return
        if self._state is not SessionState.IDLE:
            return
        try:
            await self._start_camera()
        except CameraAccessError as e:
            logger.warning("Failed to restart camera: %s", e.reason)

    # ============ Teardown ============

    async def close(self) -> None:
        """Release the camera and the live detector."""
        self._closed = True
        self._generation += 1
        try:
            await self._release_camera()
        finally:
            if self._auto_stop_task is not None and not self._auto_stop_task.done():
                self._auto_stop_task.cancel()
            if self._live is not None:
                self._live.cancel_in_flight()
                self._live = None
            if self._detector is not None:
                self._detector.close()
                self._detector = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()
