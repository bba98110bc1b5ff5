"""Capture package - from video to fixed-length landmark sequences.

Components:
- frame_encoder: detection result -> 126-value FrameRecord
- normalizer: raw sequence -> exactly MAX_SEQ_LEN frames
- batch_extractor: seek/snapshot/detect over a video file
- live_extractor: timer-driven sampling of a camera stream
- detector, camera, video_source, recorder: MediaPipe / OpenCV adapters
"""

from .batch_extractor import BatchExtractor, ExtractionOutcome
from .camera import CameraStream, OpenCVCameraProvider
from .detector import DetectionChannel, MediaPipeHandDetector
from .frame_encoder import (
    DetectedHand,
    FrameRecord,
    HandDetectionResult,
    encode,
)
from .live_extractor import LiveExtractor
from .normalizer import normalize, to_array, to_landmark_rows, uniform_indices
from .recorder import OpenCVMediaRecorder
from .video_source import VideoFileSource

__all__ = [
    "BatchExtractor",
    "ExtractionOutcome",
    "CameraStream",
    "OpenCVCameraProvider",
    "DetectionChannel",
    "MediaPipeHandDetector",
    "DetectedHand",
    "FrameRecord",
    "HandDetectionResult",
    "encode",
    "LiveExtractor",
    "normalize",
    "to_array",
    "to_landmark_rows",
    "uniform_indices",
    "OpenCVMediaRecorder",
    "VideoFileSource",
]
