"""Resample variable-length landmark sequences to a fixed length.

Long sequences are uniformly sampled (no interpolation between frames),
short ones are padded at the end with sentinel frames.
"""

from typing import Sequence

import numpy as np

from packages.core import FRAME_VECTOR_SIZE

from .frame_encoder import FrameRecord


def uniform_indices(length: int, target_len: int) -> list[int]:
    """Source indices selected when sampling `length` frames down to `target_len`.

    Index i maps to floor(i * (length - 1) / max(target_len - 1, 1)), which
    keeps the first and last frames whenever target_len > 1.

    Examples:
        >>> uniform_indices(5, 3)
        [0, 2, 4]
    """
    if target_len <= 0 or length <= 0:
        return []
    denominator = max(target_len - 1, 1)
    return [(i * (length - 1)) // denominator for i in range(target_len)]


def normalize(raw: Sequence[FrameRecord], target_len: int) -> list[FrameRecord]:
    """Resample a raw sequence to exactly `target_len` frames.

    Args:
        raw: Frames in capture order
        target_len: Required output length

    Returns:
        A new list of exactly max(target_len, 0) frames; every element is an
        original frame or a pad frame
    """
    if target_len <= 0:
        return []

    length = len(raw)
    if length == target_len:
        return list(raw)
    if length > target_len:
        return [raw[i] for i in uniform_indices(length, target_len)]

    pad = FrameRecord.pad()
    return list(raw) + [pad] * (target_len - length)


def to_landmark_rows(sequence: Sequence[FrameRecord]) -> list[list[float]]:
    """Flatten frames to 126-wide rows for the translation request."""
    return [frame.to_vector() for frame in sequence]


def to_array(sequence: Sequence[FrameRecord]) -> np.ndarray:
    """Stack frames into a (frames, 126) float32 array."""
    if not sequence:
        return np.empty((0, FRAME_VECTOR_SIZE), dtype=np.float32)
    return np.stack([frame.to_array() for frame in sequence])
