"""Seekable video file source backed by OpenCV."""

import asyncio
import logging
import threading
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from packages.core import VideoLoadError, VideoMetadataError

logger = logging.getLogger(__name__)


def to_model_input(frame: Optional[np.ndarray], size: tuple[int, int]) -> np.ndarray:
    """Resize a BGR frame to (width, height) and convert to RGB.

    A missing frame draws as a black image, like snapshotting a video
    element before its first frame is decoded.
    """
    width, height = size
    if frame is None:
        return np.zeros((height, width, 3), dtype=np.uint8)
    resized = cv2.resize(frame, (width, height), interpolation=cv2.INTER_LINEAR)
    return cv2.cvtColor(resized, cv2.COLOR_BGR2RGB)


class VideoFileSource:
    """A loaded clip that can be seeked to timestamps and snapshotted."""

    def __init__(self, path: str | Path, metadata_timeout: float = 10.0):
        self.path = Path(path)
        self.metadata_timeout = metadata_timeout
        self.duration: Optional[float] = None
        self._capture: Optional[cv2.VideoCapture] = None
        self._frame: Optional[np.ndarray] = None
        self._open_lock = threading.Lock()
        self._attempt = 0
        self._opened: Optional[cv2.VideoCapture] = None

    def _open(self, attempt: int) -> Optional[cv2.VideoCapture]:
        capture = cv2.VideoCapture(str(self.path))
        if not capture.isOpened():
            capture.release()
            raise VideoLoadError(str(self.path), "could not open video")
        with self._open_lock:
            if attempt != self._attempt:
                # The caller timed out and no longer owns this capture.
                capture.release()
                return None
            self._opened = capture
        return capture

    async def wait_for_metadata(self) -> float:
        """Open the file and read its duration in seconds."""
        if self.duration is not None:
            return self.duration
        if not self.path.exists():
            raise VideoLoadError(str(self.path), "file not found")

        attempt = self._attempt
        try:
            self._capture = await asyncio.wait_for(
                asyncio.to_thread(self._open, attempt), timeout=self.metadata_timeout
            )
        except asyncio.TimeoutError:
            with self._open_lock:
                self._attempt += 1
                late, self._opened = self._opened, None
            if late is not None:
                late.release()
            raise VideoMetadataError(str(self.path), "timed out waiting for metadata")
        self._opened = None

        fps = self._capture.get(cv2.CAP_PROP_FPS)
        frame_count = self._capture.get(cv2.CAP_PROP_FRAME_COUNT)
        if fps <= 0 or frame_count <= 0:
            raise VideoMetadataError(str(self.path), "duration unknown")

        self.duration = frame_count / fps
        logger.debug("%s: %.2fs at %.2f fps", self.path.name, self.duration, fps)
        return self.duration

    def _seek_and_read(self, timestamp: float) -> None:
        self._capture.set(cv2.CAP_PROP_POS_MSEC, timestamp * 1000)
        ok, frame = self._capture.read()
        if ok:
            self._frame = frame
        else:
            logger.debug("No frame decoded at %.3fs, keeping previous frame", timestamp)

    async def seek(self, timestamp: float) -> None:
        """Seek and decode; returns once the frame at `timestamp` is current."""
        if self._capture is None:
            await self.wait_for_metadata()
        await asyncio.to_thread(self._seek_and_read, timestamp)

    def snapshot(self, size: tuple[int, int]) -> np.ndarray:
        return to_model_input(self._frame, size)

    def close(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
