"""Shared type definitions for the sign translator.

Contains canonical type definitions used across packages.
Domain-specific types should remain in their respective packages.

Core Types (shared across packages):
- HandSlot: Left/right slot of a frame record
- SessionState: Lifecycle states of a capture session
- InputMode: Upload vs live camera input
- TranslationResult: Result returned by the remote translator
- HistoryEntry: Persisted snapshot of a translation

Domain-Specific Types (remain in packages):
- capture.FrameRecord: Two-hand landmark record for one frame
- capture.HandDetectionResult: Detector output for one image
- session.RecordingArtifact: Recorded clip plus its landmark sequence
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

# ============ Pipeline Constants ============

LANDMARKS_PER_HAND = 21
COORDS_PER_LANDMARK = 3
HANDS_PER_FRAME = 2
FRAME_VECTOR_SIZE = LANDMARKS_PER_HAND * COORDS_PER_LANDMARK * HANDS_PER_FRAME  # 126
PAD_VALUE = -10.0

TARGET_FPS = 25
MAX_SEQ_LEN = 190
RECORD_MAX_SECONDS = 8
IMG_SIZE = (224, 224)

HISTORY_LIMIT = 10


# ============ Enums ============


class HandSlot(Enum):
    """Slot a detected hand is written to.

    Assigned from the detector's handedness label, which is relative to
    the camera: the LEFT slot may hold the subject's anatomical right hand.
    """

    LEFT = "Left"
    RIGHT = "Right"

    @classmethod
    def from_label(cls, label: str) -> Optional["HandSlot"]:
        """Map a handedness label to a slot, None for unknown labels."""
        for slot in cls:
            if slot.value == label:
                return slot
        return None


class SessionState(Enum):
    """Capture session lifecycle states.

    Idle -> CameraStarting -> CameraActive -> Recording -> Stopping -> CameraActive
    """

    IDLE = "idle"
    CAMERA_STARTING = "camera_starting"
    CAMERA_ACTIVE = "camera_active"
    RECORDING = "recording"
    STOPPING = "stopping"


class InputMode(Enum):
    """Where the clip to translate comes from."""

    UPLOAD = "upload"
    LIVE = "live"


# ============ Dataclasses ============


@dataclass(frozen=True)
class TranslationResult:
    """Translation returned by the remote service.

    Immutable once created.
    """

    gloss: str
    translation: str
    confidence: float
    method: str
    method_label: str = ""
    processing_time: Optional[Any] = None  # server timing.total, unit is server-defined
    landmarks_shape: Optional[tuple[int, ...]] = None
    round_trip_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "gloss": self.gloss,
            "translation": self.translation,
            "confidence": self.confidence,
            "method": self.method,
            "method_label": self.method_label,
            "processing_time": self.processing_time,
            "landmarks_shape": list(self.landmarks_shape) if self.landmarks_shape else None,
            "round_trip_ms": self.round_trip_ms,
        }


def confidence_value(raw: Any) -> float:
    """Read a confidence that may be stored as a number or an object.

    Older history records stored the whole ``{"overall": x}`` object.
    """
    if not raw:
        return 0.0
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, dict):
        value = raw.get("overall", raw.get("value", 0))
        return float(value or 0)
    return 0.0


@dataclass
class HistoryEntry:
    """Timestamped snapshot of a translation kept in the history list.

    Stores the method KEY so labels follow the current display language.
    """

    id: int
    time: str
    translation: str
    confidence: float = 0.0
    method: str = ""

    @classmethod
    def from_result(cls, result: TranslationResult, now: Optional[datetime] = None) -> "HistoryEntry":
        """Create an entry for a fresh translation result."""
        now = now or datetime.now()
        return cls(
            id=int(now.timestamp() * 1000),
            time=now.strftime("%Y-%m-%d %H:%M:%S"),
            translation=result.translation,
            confidence=result.confidence,
            method=result.method,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "time": self.time,
            "translation": self.translation,
            "confidence": self.confidence,
            "method": self.method,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        """Create from dictionary."""
        return cls(
            id=int(data.get("id", 0)),
            time=str(data.get("time", "")),
            translation=str(data.get("translation", "")),
            confidence=confidence_value(data.get("confidence")),
            method=str(data.get("method", "")),
        )
