"""Shared fakes for capture tests."""

import asyncio
from typing import Optional

import numpy as np
import pytest

from packages.capture.frame_encoder import DetectedHand, HandDetectionResult
from packages.core import DetectorInitError


def hand(label: str, value: float) -> DetectedHand:
    """A hand whose 21 points all equal (value, value, value)."""
    return DetectedHand(label=label, landmarks=((value, value, value),) * 21)


class FakeDetector:
    """Answers each send with the next scripted result, empty once exhausted."""

    def __init__(self, results=None, fail_init: bool = False, fail_send_at: Optional[int] = None):
        self.results = list(results or [])
        self.fail_init = fail_init
        self.fail_send_at = fail_send_at
        self.sent: list[np.ndarray] = []
        self.init_calls = 0
        self.closed = False
        self._callback = None

    def on_results(self, callback) -> None:
        self._callback = callback

    async def initialize(self) -> None:
        self.init_calls += 1
        if self.fail_init:
            raise DetectorInitError("model files missing")

    async def send(self, image: np.ndarray) -> None:
        index = len(self.sent)
        self.sent.append(image)
        if self.fail_send_at is not None and index == self.fail_send_at:
            raise RuntimeError("graph crashed")
        await asyncio.sleep(0)
        result = self.results.pop(0) if self.results else HandDetectionResult()
        if self._callback is not None:
            self._callback(result)

    def close(self) -> None:
        self.closed = True


class FakeSource:
    """Seekable clip of a fixed duration."""

    def __init__(self, duration: float = 10.0, error: Optional[Exception] = None):
        self.duration = duration
        self.error = error
        self.seeks: list[float] = []
        self.closed = False

    async def wait_for_metadata(self) -> float:
        if self.error is not None:
            raise self.error
        return self.duration

    async def seek(self, timestamp: float) -> None:
        self.seeks.append(timestamp)

    def snapshot(self, size: tuple[int, int]) -> np.ndarray:
        width, height = size
        return np.zeros((height, width, 3), dtype=np.uint8)

    def close(self) -> None:
        self.closed = True


class FakeStream:
    """Camera stream that always has a frame once `has_frame_data` is set."""

    def __init__(self, has_frame_data: bool = True):
        self.has_frame_data = has_frame_data
        self.snapshots = 0
        self.stopped = False

    @property
    def active_tracks(self) -> int:
        return 0 if self.stopped else 1

    def snapshot(self, size: tuple[int, int]) -> np.ndarray:
        self.snapshots += 1
        width, height = size
        return np.zeros((height, width, 3), dtype=np.uint8)

    def subscribe(self, callback):
        return lambda: None

    def stop(self) -> None:
        self.stopped = True


@pytest.fixture
def fake_detector():
    return FakeDetector()


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
def fake_stream():
    return FakeStream()


@pytest.fixture
def make_hand():
    return hand


@pytest.fixture
def make_detector():
    return FakeDetector


@pytest.fixture
def make_source():
    return FakeSource


@pytest.fixture
def make_stream():
    return FakeStream
