"""Hand-pose detection using MediaPipe Hands.

The detector follows a callback boundary: `send` submits an image and the
result is delivered to the callback registered with `on_results`.
`DetectionChannel` turns that boundary back into request/response pairs,
correlated by submission order.
"""

import asyncio
import logging
from collections import deque
from typing import Callable, Optional

import numpy as np

from packages.core import DetectorInitError, HandDetector, TranslatorConfig

from .frame_encoder import HandDetectionResult

try:
    import mediapipe as mp
    MEDIAPIPE_AVAILABLE = True
except ImportError:
    MEDIAPIPE_AVAILABLE = False

logger = logging.getLogger(__name__)

ResultCallback = Callable[[HandDetectionResult], None]


class MediaPipeHandDetector:
    """Detect up to two hands per image with MediaPipe Hands."""

    def __init__(
        self,
        max_num_hands: int = 2,
        model_complexity: int = 1,
        min_detection_confidence: float = 0.4,
        min_tracking_confidence: float = 0.4,
    ):
        if not MEDIAPIPE_AVAILABLE:
            raise ImportError("MediaPipe not installed. Run: pip install mediapipe")

        self.options = {
            "max_num_hands": max_num_hands,
            "model_complexity": model_complexity,
            "min_detection_confidence": min_detection_confidence,
            "min_tracking_confidence": min_tracking_confidence,
        }
        self._hands = None
        self._callback: Optional[ResultCallback] = None
        # The graph is not re-entrant; overlapping sends queue here.
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(cls, config: TranslatorConfig) -> "MediaPipeHandDetector":
        return cls(
            max_num_hands=config.max_num_hands,
            model_complexity=config.model_complexity,
            min_detection_confidence=config.min_detection_confidence,
            min_tracking_confidence=config.min_tracking_confidence,
        )

    @property
    def initialized(self) -> bool:
        return self._hands is not None

    def on_results(self, callback: ResultCallback) -> None:
        self._callback = callback

    async def initialize(self) -> None:
        """Load the hands model; a no-op when already loaded."""
        if self._hands is not None:
            return
        try:
            self._hands = await asyncio.to_thread(mp.solutions.hands.Hands, **self.options)
        except Exception as e:
            raise DetectorInitError(str(e)) from e
        logger.debug("MediaPipe hands initialized with %s", self.options)

    async def send(self, image: np.ndarray) -> None:
        """Run detection on an RGB image and dispatch the result."""
        if self._hands is None:
            raise DetectorInitError("detector used before initialize()")
        async with self._lock:
            results = await asyncio.to_thread(self._hands.process, image)
        result = HandDetectionResult.from_mediapipe(results)
        if self._callback is not None:
            self._callback(result)

    def close(self) -> None:
        """Release MediaPipe resources."""
        if self._hands is not None:
            self._hands.close()
            self._hands = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, *args):
        self.close()


class DetectionChannel:
    """Request/response view over a callback-based detector.

    Each `detect` call registers a single-slot future before submitting,
    and the callback resolves the oldest pending future. Awaiting every
    `detect` before the next one keeps at most one detection in flight.
    """

    def __init__(self, detector: HandDetector):
        self.detector = detector
        self._pending: deque[asyncio.Future] = deque()
        detector.on_results(self._dispatch)

    def _dispatch(self, result: HandDetectionResult) -> None:
        while self._pending:
            future = self._pending.popleft()
            if not future.done():
                future.set_result(result)
                return
        logger.warning("Dropping detection result with no pending request")

    async def detect(self, image: np.ndarray) -> HandDetectionResult:
        """Submit one image and wait for its result."""
        future = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        try:
            await self.detector.send(image)
            return await future
        finally:
            if not future.done():
                future.cancel()
            if future in self._pending:
                self._pending.remove(future)
