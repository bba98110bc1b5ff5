"""Record a camera stream into a single video file."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Callable, Optional

import cv2
import numpy as np

from packages.core import RecordingError, RecordingSaveError, ensure_dir

from .camera import CameraStream

logger = logging.getLogger(__name__)


class OpenCVMediaRecorder:
    """Buffers frames from a stream and writes them out as one clip on stop.

    The writer is opened in `start` so an unusable codec or output path
    fails before anything is recorded.
    """

    def __init__(
        self,
        stream: CameraStream,
        output_dir: Path,
        fourcc: str = "mp4v",
        extension: str = ".mp4",
        fps: Optional[float] = None,
    ):
        self.stream = stream
        self.output_dir = Path(output_dir)
        self.fourcc = fourcc
        self.extension = extension
        self.fps = fps or stream.fps
        self.output_path: Optional[Path] = None
        self._chunks: list[np.ndarray] = []
        self._writer: Optional[cv2.VideoWriter] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._frame_size = (0, 0)
        self._state = "inactive"

    @property
    def state(self) -> str:
        return self._state

    @property
    def chunk_count(self) -> int:
        return len(self._chunks)

    def _on_frame(self, frame: np.ndarray) -> None:
        if self._state == "recording" and frame is not None and frame.size > 0:
            self._chunks.append(frame.copy())

    def start(self) -> None:
        if self._state == "recording":
            raise RecordingError("recorder already started")

        try:
            ensure_dir(self.output_dir)
            codec = cv2.VideoWriter_fourcc(*self.fourcc)
        except (OSError, TypeError, cv2.error) as e:
            raise RecordingError(str(e)) from e

        self.output_path = self.output_dir / f"recording-{int(time.time() * 1000)}{self.extension}"
        self._frame_size = self.stream.frame_size
        self._writer = cv2.VideoWriter(str(self.output_path), codec, self.fps, self._frame_size)
        if not self._writer.isOpened():
            self._writer.release()
            self._writer = None
            raise RecordingError(f"codec {self.fourcc!r} unavailable for {self.extension}")

        self._chunks = []
        self._unsubscribe = self.stream.subscribe(self._on_frame)
        self._state = "recording"
        logger.debug("Recording to %s at %.1f fps", self.output_path, self.fps)

    def _write_chunks(self) -> None:
        width, height = self._frame_size
        try:
            for frame in self._chunks:
                if frame.shape[1] != width or frame.shape[0] != height:
                    frame = cv2.resize(frame, (width, height))
                self._writer.write(frame)
        finally:
            self._writer.release()

    async def stop(self) -> Optional[Path]:
        """Stop buffering and concatenate the chunks into the output file."""
        if self._state != "recording":
            return None
        self._state = "inactive"
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        logger.debug("Writing %d recorded frames", len(self._chunks))
        try:
            await asyncio.to_thread(self._write_chunks)
        except (OSError, cv2.error) as e:
            raise RecordingSaveError(str(e)) from e
        finally:
            self._writer = None
            self._chunks = []
        return self.output_path
