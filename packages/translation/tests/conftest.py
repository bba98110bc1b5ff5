"""Fakes for orchestrator tests."""

import asyncio
from unittest.mock import MagicMock

import numpy as np
import pytest

from packages.capture import BatchExtractor
from packages.capture.frame_encoder import HandDetectionResult
from packages.core import InputMode, TranslationResult
from packages.storage import JsonKeyValueStore, TranslationHistory


class FakeSession:
    """Records suspend/resume calls; owns a clip and a mode."""

    def __init__(self):
        self.mode = InputMode.UPLOAD
        self.clip = None
        self.is_recording = False
        self.calls: list[tuple] = []

    async def suspend(self):
        token = 7 if self.mode is InputMode.LIVE else None
        self.calls.append(("suspend", token))
        return token

    async def resume(self, token):
        self.calls.append(("resume", token))


class FakeDetector:
    def __init__(self):
        self._callback = None
        self.closed = False

    def on_results(self, callback):
        self._callback = callback

    async def initialize(self):
        pass

    async def send(self, image):
        await asyncio.sleep(0)
        self._callback(HandDetectionResult())

    def close(self):
        self.closed = True


class FakeSource:
    def __init__(self, path, duration=1.0):
        self.path = path
        self.duration = duration
        self.closed = False

    async def wait_for_metadata(self):
        return self.duration

    async def seek(self, timestamp):
        pass

    def snapshot(self, size):
        width, height = size
        return np.zeros((height, width, 3), dtype=np.uint8)

    def close(self):
        self.closed = True


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def sources():
    return []


@pytest.fixture
def source_factory(sources):
    def build(path):
        source = FakeSource(path)
        sources.append(source)
        return source
    return build


@pytest.fixture
def extractor():
    return BatchExtractor(detector_factory=FakeDetector, target_fps=25)


@pytest.fixture
def client():
    client = MagicMock()
    client.translate.side_effect = lambda rows, method: TranslationResult(
        gloss="HALLO", translation="Hallo", confidence=0.9, method=method
    )
    return client


@pytest.fixture
def history(tmp_path):
    return TranslationHistory(JsonKeyValueStore(tmp_path / "state.json"))


@pytest.fixture
def make_orchestrator(session, extractor, client, history, source_factory):
    from packages.translation.orchestrator import TranslationOrchestrator

    def build(**overrides):
        args = dict(
            session=session,
            extractor=extractor,
            client=client,
            history=history,
            source_factory=source_factory,
            method="s2g_beam_g2t",
            live_method="reranked_s2g_beam_g2t",
        )
        args.update(overrides)
        return TranslationOrchestrator(**args)

    return build
