"""Fakes for session controller tests."""

import asyncio
from pathlib import Path
from typing import Optional

import numpy as np
import pytest

from packages.capture.frame_encoder import HandDetectionResult
from packages.core import CameraAccessError, DetectorInitError, RecordingError


class FakeStream:
    """Camera stream with a frame always available until stopped."""

    def __init__(self):
        self.stopped = False
        self.stop_calls = 0
        self.subscribers = []

    @property
    def active_tracks(self) -> int:
        return 0 if self.stopped else 1

    @property
    def has_frame_data(self) -> bool:
        return not self.stopped

    def snapshot(self, size):
        width, height = size
        return np.zeros((height, width, 3), dtype=np.uint8)

    def subscribe(self, callback):
        self.subscribers.append(callback)
        return lambda: self.subscribers.remove(callback)

    def stop(self) -> None:
        self.stop_calls += 1
        self.stopped = True
        self.subscribers.clear()


class FakeCameraProvider:
    """Hands out FakeStreams; can deny access or hold the open until released."""

    def __init__(self, deny: bool = False):
        self.deny = deny
        self.gate: Optional[asyncio.Event] = None
        self.streams: list[FakeStream] = []

    def hold(self) -> None:
        self.gate = asyncio.Event()

    async def open(self) -> FakeStream:
        if self.gate is not None:
            await self.gate.wait()
        if self.deny:
            raise CameraAccessError("Permission denied")
        stream = FakeStream()
        self.streams.append(stream)
        return stream


class FakeRecorder:
    def __init__(self, stream, output: Path, fail_start: bool = False, fail_stop: bool = False):
        self.stream = stream
        self.output = output
        self.fail_start = fail_start
        self.fail_stop = fail_stop
        self.state = "inactive"
        self.stop_calls = 0

    def start(self) -> None:
        if self.fail_start:
            raise RecordingError("codec 'vp9' unavailable")
        self.state = "recording"

    async def stop(self) -> Optional[Path]:
        self.stop_calls += 1
        if self.state != "recording":
            return None
        self.state = "inactive"
        await asyncio.sleep(0)
        if self.fail_stop:
            raise OSError("No space left on device")
        return self.output


class RecorderFactory:
    """Callable recorder factory that remembers what it built."""

    def __init__(self, output: Path, fail_start: bool = False, fail_stop: bool = False):
        self.output = output
        self.fail_start = fail_start
        self.fail_stop = fail_stop
        self.built: list[FakeRecorder] = []

    def __call__(self, stream) -> FakeRecorder:
        recorder = FakeRecorder(stream, self.output, self.fail_start, self.fail_stop)
        self.built.append(recorder)
        return recorder


class FakeDetector:
    """Answers every send with an empty detection."""

    def __init__(self, fail_init: bool = False, init_error: Optional[Exception] = None):
        self.fail_init = fail_init
        self.init_error = init_error
        self.init_calls = 0
        self.closed = False
        self._callback = None

    def on_results(self, callback) -> None:
        self._callback = callback

    async def initialize(self) -> None:
        self.init_calls += 1
        if self.init_error is not None:
            raise self.init_error
        if self.fail_init:
            raise DetectorInitError("no model")

    async def send(self, image) -> None:
        await asyncio.sleep(0)
        self._callback(HandDetectionResult())

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def camera():
    return FakeCameraProvider()


@pytest.fixture
def recorder_factory(tmp_path):
    return RecorderFactory(tmp_path / "recording-1.mp4")


@pytest.fixture
def detectors():
    """Every detector the session asked for, in order."""
    return []


@pytest.fixture
def detector_factory(detectors):
    def build():
        detector = FakeDetector()
        detectors.append(detector)
        return detector
    return build


@pytest.fixture
def make_session(camera, recorder_factory, detector_factory):
    from packages.session.controller import SessionController

    def build(**overrides):
        args = dict(
            camera_provider=camera,
            recorder_factory=recorder_factory,
            detector_factory=detector_factory,
            target_fps=100,
            record_max_seconds=8,
        )
        args.update(overrides)
        return SessionController(**args)

    return build


@pytest.fixture
def fake_detector_cls():
    return FakeDetector


@pytest.fixture
def recorder_factory_cls():
    return RecorderFactory
