"""Frame-by-frame landmark extraction from a loaded video.

Frames are processed in strict lock-step: seek, snapshot, detect, and
only then request the next frame. At most one detection is ever in
flight, so results line up with frames by construction.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from packages.core import (
    IMG_SIZE,
    TARGET_FPS,
    ExtractionError,
    FrameSource,
    HandDetector,
    Locale,
    MessageKey,
    SignTranslatorError,
    TranslatorConfig,
    frames_for_duration,
    message,
    timestamped,
)

from .detector import DetectionChannel, MediaPipeHandDetector
from .frame_encoder import FrameRecord, encode

logger = logging.getLogger(__name__)

DetectorFactory = Callable[[], HandDetector]
FrameProgress = Callable[[int, int], None]


@dataclass
class ExtractionOutcome:
    """Raw landmark sequence plus the human-readable steps taken."""
    frames: list[FrameRecord]
    logs: list[str] = field(default_factory=list)


class BatchExtractor:
    """Extract a RawSequence from a seekable video source."""

    def __init__(
        self,
        detector_factory: DetectorFactory,
        target_fps: int = TARGET_FPS,
        img_size: tuple[int, int] = IMG_SIZE,
        locale: Locale = Locale.EN,
    ):
        self.detector_factory = detector_factory
        self.target_fps = target_fps
        self.img_size = img_size
        self.locale = locale

    @classmethod
    def from_config(
        cls,
        config: TranslatorConfig,
        detector_factory: Optional[DetectorFactory] = None,
    ) -> "BatchExtractor":
        return cls(
            detector_factory=detector_factory or (lambda: MediaPipeHandDetector.from_config(config)),
            target_fps=config.target_fps,
            img_size=config.img_size,
            locale=config.language,
        )

    async def extract(
        self,
        source: FrameSource,
        on_frame: Optional[FrameProgress] = None,
    ) -> ExtractionOutcome:
        """Run detection over every sampled frame of `source`.

        Args:
            source: Video to sample; the caller owns and closes it
            on_frame: Optional callback receiving (frames_done, total_frames)

        Returns:
            The complete raw sequence and step log

        Raises:
            ExtractionError: On any failure; no partial sequence is returned
        """
        logs: list[str] = []

        def log(key: MessageKey, *args) -> None:
            text = message(key, self.locale, *args)
            logger.debug(text)
            logs.append(timestamped(text))

        detector: Optional[HandDetector] = None
        try:
            log(MessageKey.LOG_INITIALIZING_DETECTOR)
            detector = self.detector_factory()
            channel = DetectionChannel(detector)
            await detector.initialize()
            log(MessageKey.LOG_DETECTOR_INITIALIZED)

            duration = await source.wait_for_metadata()
            total_frames = frames_for_duration(duration, self.target_fps)
            log(MessageKey.LOG_VIDEO_DURATION, f"{duration:.2f}")
            log(MessageKey.LOG_EXTRACT_FRAMES, total_frames, self.target_fps)

            frames: list[FrameRecord] = []
            for i in range(total_frames):
                await source.seek(i / self.target_fps)
                image = source.snapshot(self.img_size)
                result = await channel.detect(image)
                frames.append(encode(result))
                if on_frame is not None:
                    on_frame(i + 1, total_frames)

            log(MessageKey.LOG_EXTRACTED_FRAMES, len(frames))
            return ExtractionOutcome(frames=frames, logs=logs)
        except ExtractionError:
            raise
        except SignTranslatorError as e:
            raise ExtractionError(e.message) from e
        except Exception as e:
            raise ExtractionError(str(e) or type(e).__name__) from e
        finally:
            if detector is not None:
                detector.close()
