"""Live camera stream backed by OpenCV.

The stream pumps frames on a background task so readers (the live
extractor and the recorder) only ever observe the latest frame. Only the
session controller opens and stops streams.
"""

import asyncio
import logging
import threading
from typing import Callable, Optional

import cv2
import numpy as np

from packages.core import CameraAccessError

from .video_source import to_model_input

logger = logging.getLogger(__name__)

FrameCallback = Callable[[np.ndarray], None]


class CameraStream:
    """An open camera device delivering BGR frames."""

    def __init__(self, capture: cv2.VideoCapture, device: int = 0):
        self.device = device
        self._capture = capture
        self._io_lock = threading.Lock()
        self._latest: Optional[np.ndarray] = None
        self._subscribers: list[FrameCallback] = []
        self._running = True
        self._task: Optional[asyncio.Task] = None

    @property
    def active_tracks(self) -> int:
        return 1 if self._running else 0

    @property
    def has_frame_data(self) -> bool:
        return self._running and self._latest is not None

    @property
    def frame_size(self) -> tuple[int, int]:
        """(width, height) of delivered frames."""
        if self._latest is not None:
            height, width = self._latest.shape[:2]
            return (width, height)
        return (
            int(self._capture.get(cv2.CAP_PROP_FRAME_WIDTH)),
            int(self._capture.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        )

    @property
    def fps(self) -> float:
        fps = self._capture.get(cv2.CAP_PROP_FPS)
        return fps if fps and fps > 0 else 30.0

    def start(self) -> None:
        """Begin pumping frames on the running event loop."""
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._pump())

    def _read(self) -> tuple[bool, Optional[np.ndarray]]:
        with self._io_lock:
            if not self._running:
                return False, None
            return self._capture.read()

    async def _pump(self) -> None:
        while self._running:
            ok, frame = await asyncio.to_thread(self._read)
            if not self._running:
                break
            if not ok:
                logger.warning("Camera %s returned no frame", self.device)
                await asyncio.sleep(0.05)
                continue
            self._latest = frame
            for callback in list(self._subscribers):
                callback(frame)

    def snapshot(self, size: tuple[int, int]) -> np.ndarray:
        return to_model_input(self._latest, size)

    def subscribe(self, callback: FrameCallback) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def stop(self) -> None:
        """Stop the track and release the device. Safe to call repeatedly."""
        if not self._running:
            return
        self._running = False
        self._subscribers.clear()
        if self._task is not None:
            self._task.cancel()
        with self._io_lock:
            self._capture.release()
        logger.debug("Camera %s released", self.device)


class OpenCVCameraProvider:
    """Opens local cameras by OpenCV device index."""

    def __init__(self, index: int = 0):
        self.index = index

    async def open(self) -> CameraStream:
        capture = await asyncio.to_thread(cv2.VideoCapture, self.index)
        if not capture.isOpened():
            capture.release()
            raise CameraAccessError("device could not be opened", device=self.index)
        stream = CameraStream(capture, device=self.index)
        stream.start()
        return stream
