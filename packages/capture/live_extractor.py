"""Timer-driven landmark sampling from a live camera stream.

Sampling is best-effort: the timer fires every 1000 / fps ms regardless
of whether the previous detection has completed, so submissions may
overlap and a tick may produce no frame. At most `max_in_flight`
detections are pending; a tick beyond that is skipped. Results are
appended through the detector's callback in the order they complete.
"""

import asyncio
import logging
from typing import Optional

import numpy as np

from packages.core import IMG_SIZE, TARGET_FPS, HandDetector, MediaStream

from .frame_encoder import FrameRecord, HandDetectionResult, encode

logger = logging.getLogger(__name__)


class LiveExtractor:
    """Accumulates FrameRecords from a camera stream while active.

    The detector is shared across activations; the controller owns its
    lifecycle.
    """

    def __init__(
        self,
        detector: HandDetector,
        target_fps: int = TARGET_FPS,
        img_size: tuple[int, int] = IMG_SIZE,
        max_in_flight: int = 2,
    ):
        self.detector = detector
        self.period = 1.0 / target_fps
        self.img_size = img_size
        # one detection running plus one queued behind it
        self.max_in_flight = max_in_flight
        self.ticks = 0
        self.submissions = 0
        self.skipped = 0
        self._frames: list[FrameRecord] = []
        self._stream: Optional[MediaStream] = None
        self._timer: Optional[asyncio.Task] = None
        self._in_flight: set[asyncio.Task] = set()
        detector.on_results(self._on_results)

    @property
    def active(self) -> bool:
        return self._timer is not None

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    @property
    def frames(self) -> list[FrameRecord]:
        return list(self._frames)

    def _on_results(self, result: HandDetectionResult) -> None:
        self._frames.append(encode(result))

    def start(self, stream: MediaStream) -> None:
        """Reset the accumulator and start sampling `stream`.

        Detections left over from the previous activation are cancelled
        so they cannot land in the new accumulator.
        """
        if self._timer is not None:
            self.stop()
        self.cancel_in_flight()
        self._frames = []
        self.ticks = 0
        self.submissions = 0
        self.skipped = 0
        self._stream = stream
        self._timer = asyncio.get_running_loop().create_task(self._run())
        logger.debug("Live sampling every %.1f ms", self.period * 1000)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.period)
            self.tick()

    def tick(self) -> None:
        """Sample one frame if the stream has data; does not wait for detection."""
        self.ticks += 1
        stream = self._stream
        if stream is None or not stream.has_frame_data:
            return
        if len(self._in_flight) >= self.max_in_flight:
            self.skipped += 1
            return
        image = stream.snapshot(self.img_size)
        task = asyncio.get_running_loop().create_task(self._submit(image))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        self.submissions += 1

    async def _submit(self, image: np.ndarray) -> None:
        try:
            await self.detector.send(image)
        except Exception as e:
            # A dropped sample is acceptable; the timer keeps going.
            logger.warning("Live detection dropped a frame: %s", e)

    def stop(self) -> list[FrameRecord]:
        """Stop the timer immediately and return the frames gathered so far.

        Detections already in flight may still append a trailing frame
        until the next `start`.
        """
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._stream = None
        logger.debug(
            "Live sampling stopped: %d ticks, %d submissions, %d skipped, %d frames",
            self.ticks, self.submissions, self.skipped, len(self._frames),
        )
        return self.frames

    def cancel_in_flight(self) -> None:
        """Abandon pending detections."""
        for task in list(self._in_flight):
            task.cancel()
        self._in_flight.clear()
