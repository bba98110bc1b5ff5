"""Protocol definitions for the capture pipeline's collaborators.

Protocols define interfaces for duck typing, allowing the pipeline to
depend on behaviors rather than concrete OpenCV / MediaPipe objects.
Tests satisfy them with small fakes.

Usage:
    from packages.core import HandDetector

    async def sample(detector: HandDetector, image) -> None:
        detector.on_results(print)
        await detector.initialize()
        await detector.send(image)
"""

from pathlib import Path
from typing import Any, Callable, Optional, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class HandDetector(Protocol):
    """Hand-pose estimator boundary.

    Results are delivered out-of-band through the callback registered
    with on_results, once per completed send.

    Example:
        class MyDetector:
            def on_results(self, callback): ...
            async def initialize(self): ...
            async def send(self, image): ...
            def close(self): ...
    """

    def on_results(self, callback: Callable[[Any], None]) -> None:
        """Register the callback receiving each HandDetectionResult."""
        ...

    async def initialize(self) -> None:
        """Load the model.

        Raises:
            DetectorInitError: If the model cannot be loaded
        """
        ...

    async def send(self, image: np.ndarray) -> None:
        """Submit one RGB image; returns once its result was dispatched."""
        ...

    def close(self) -> None:
        """Release model resources."""
        ...


@runtime_checkable
class FrameSource(Protocol):
    """A loaded video that can be seeked and snapshotted (the batch path)."""

    async def wait_for_metadata(self) -> float:
        """Wait until the duration is known.

        Returns:
            Duration in seconds

        Raises:
            VideoMetadataError: If metadata never becomes available
        """
        ...

    async def seek(self, timestamp: float) -> None:
        """Seek to a timestamp in seconds; returns once the seek completed."""
        ...

    def snapshot(self, size: tuple[int, int]) -> np.ndarray:
        """Current frame as an RGB image resized to (width, height)."""
        ...

    def close(self) -> None:
        """Release the underlying file handle."""
        ...


@runtime_checkable
class MediaStream(Protocol):
    """Live camera stream owned by the session controller.

    Readers (live extractor, recorder) may only observe it.
    """

    @property
    def active_tracks(self) -> int:
        """Number of tracks still delivering frames."""
        ...

    @property
    def has_frame_data(self) -> bool:
        """True once at least one frame is available to snapshot."""
        ...

    def snapshot(self, size: tuple[int, int]) -> np.ndarray:
        """Latest frame as an RGB image resized to (width, height)."""
        ...

    def subscribe(self, callback: Callable[[np.ndarray], None]) -> Callable[[], None]:
        """Receive every raw BGR frame; returns an unsubscribe function."""
        ...

    def stop(self) -> None:
        """Stop all tracks and release the device."""
        ...


@runtime_checkable
class CameraProvider(Protocol):
    """Grants access to a camera."""

    async def open(self) -> MediaStream:
        """Acquire the camera.

        Raises:
            CameraAccessError: If access is denied or the device fails
        """
        ...


@runtime_checkable
class MediaRecorder(Protocol):
    """Records a media stream into a single clip."""

    @property
    def state(self) -> str:
        """'inactive' or 'recording'."""
        ...

    def start(self) -> None:
        """Begin buffering chunks.

        Raises:
            RecordingError: If the recorder cannot start
        """
        ...

    async def stop(self) -> Optional[Path]:
        """Stop and concatenate the buffered chunks into one file."""
        ...


@runtime_checkable
class Speaker(Protocol):
    """Text-to-speech output."""

    def speak(self, text: str, lang: str) -> None:
        """Start speaking text, interrupting anything already spoken."""
        ...

    def stop(self) -> None:
        """Stop speaking."""
        ...
