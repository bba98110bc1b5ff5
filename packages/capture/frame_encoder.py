"""Encode hand detections into fixed-shape per-frame landmark records."""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

import numpy as np

from packages.core import FRAME_VECTOR_SIZE, LANDMARKS_PER_HAND, PAD_VALUE, HandSlot

logger = logging.getLogger(__name__)

Point3 = tuple[float, float, float]
HandPoints = tuple[Point3, ...]

ZERO_HAND: HandPoints = ((0.0, 0.0, 0.0),) * LANDMARKS_PER_HAND
PAD_HAND: HandPoints = ((PAD_VALUE, PAD_VALUE, PAD_VALUE),) * LANDMARKS_PER_HAND


@dataclass(frozen=True)
class DetectedHand:
    """One hand reported by the detector."""
    label: str  # "Left" / "Right", camera-relative
    landmarks: HandPoints
    score: float = 1.0


@dataclass(frozen=True)
class HandDetectionResult:
    """Detector output for one image: zero or more hands."""
    hands: tuple[DetectedHand, ...] = ()

    @classmethod
    def from_mediapipe(cls, results: Any) -> "HandDetectionResult":
        """Convert MediaPipe Hands output (multi_hand_landmarks / multi_handedness)."""
        landmark_lists = getattr(results, "multi_hand_landmarks", None) or []
        handedness = getattr(results, "multi_handedness", None) or []

        hands = []
        for hand_landmarks, classification in zip(landmark_lists, handedness):
            category = classification.classification[0]
            hands.append(
                DetectedHand(
                    label=category.label,
                    landmarks=tuple((lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark),
                    score=category.score,
                )
            )
        return cls(hands=tuple(hands))


@dataclass(frozen=True)
class FrameRecord:
    """Two-hand landmark record for one frame.

    Each slot holds exactly 21 (x, y, z) points; the flattened vector is
    left slot then right slot, 126 floats.
    """
    left: HandPoints = ZERO_HAND
    right: HandPoints = ZERO_HAND

    @classmethod
    def zeros(cls) -> "FrameRecord":
        return cls()

    @classmethod
    def pad(cls) -> "FrameRecord":
        """Sentinel frame used only to pad short sequences."""
        return cls(left=PAD_HAND, right=PAD_HAND)

    @property
    def is_pad(self) -> bool:
        return self.left == PAD_HAND and self.right == PAD_HAND

    def slot(self, slot: HandSlot) -> HandPoints:
        return self.left if slot is HandSlot.LEFT else self.right

    def to_vector(self) -> list[float]:
        """Flatten to the 126-wide row sent to the translator."""
        return [float(c) for point in (*self.left, *self.right) for c in point]

    def to_array(self) -> np.ndarray:
        return np.asarray(self.to_vector(), dtype=np.float32)

    @classmethod
    def from_vector(cls, values: Iterable[float]) -> "FrameRecord":
        """Rebuild a record from a flat 126-wide row."""
        flat = [float(v) for v in values]
        if len(flat) != FRAME_VECTOR_SIZE:
            raise ValueError(f"Expected {FRAME_VECTOR_SIZE} values, got {len(flat)}")
        points = [tuple(flat[i:i + 3]) for i in range(0, FRAME_VECTOR_SIZE, 3)]
        return cls(
            left=tuple(points[:LANDMARKS_PER_HAND]),
            right=tuple(points[LANDMARKS_PER_HAND:]),
        )


def _as_hand_points(landmarks: Iterable[Iterable[float]]) -> Optional[HandPoints]:
    points = tuple(tuple(float(c) for c in point) for point in landmarks)
    if len(points) != LANDMARKS_PER_HAND or any(len(p) != 3 for p in points):
        return None
    return points


def encode(result: HandDetectionResult) -> FrameRecord:
    """Encode one detection result into a FrameRecord.

    Hands are placed by handedness label, not by detection order. When a
    label repeats within one result, the later hand wins the slot. Slots
    without a detection stay all-zero, so an empty result is a valid
    all-zero record.
    """
    slots: dict[HandSlot, HandPoints] = {}
    for hand in result.hands:
        slot = HandSlot.from_label(hand.label)
        if slot is None:
            logger.debug("Ignoring hand with unknown label %r", hand.label)
            continue
        points = _as_hand_points(hand.landmarks)
        if points is None:
            logger.debug("Ignoring %s hand with malformed landmarks", hand.label)
            continue
        slots[slot] = points

    return FrameRecord(
        left=slots.get(HandSlot.LEFT, ZERO_HAND),
        right=slots.get(HandSlot.RIGHT, ZERO_HAND),
    )
