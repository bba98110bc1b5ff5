"""Core package - shared utilities, types, and configuration.

This package provides common functionality used across all packages:
- Configuration management
- Shared type definitions and pipeline constants
- Protocol interfaces for detector, camera and recorder
- Custom exceptions
- Localized messages
- Utility functions

Example usage:
    from packages.core import get_config, SessionState, CameraAccessError

    config = get_config()
    print(f"Sampling at {config.target_fps} fps")
"""

# Configuration
from .config import (
    DEFAULT_BACKEND_URL,
    DEFAULT_METHOD,
    Environment,
    LogLevel,
    TranslatorConfig,
    clear_config_cache,
    get_config,
)

# Types
from .types import (
    FRAME_VECTOR_SIZE,
    HISTORY_LIMIT,
    IMG_SIZE,
    LANDMARKS_PER_HAND,
    MAX_SEQ_LEN,
    PAD_VALUE,
    RECORD_MAX_SECONDS,
    TARGET_FPS,
    HandSlot,
    HistoryEntry,
    InputMode,
    SessionState,
    TranslationResult,
    confidence_value,
)

# Protocols
from .protocols import (
    CameraProvider,
    FrameSource,
    HandDetector,
    MediaRecorder,
    MediaStream,
    Speaker,
)

# Errors
from .errors import (
    CameraAccessError,
    CameraNotActiveError,
    CaptureError,
    ConfigurationError,
    DetectorInitError,
    ExtractionError,
    InvalidStateError,
    NoInputError,
    RecordingError,
    RecordingSaveError,
    ServiceError,
    ServiceResponseError,
    SignTranslatorError,
    StorageError,
    TranslationError,
    VideoLoadError,
    VideoMetadataError,
)

# Localization
from .i18n import Locale, MessageKey, available_methods, message, method_label

# Utilities
from .utils import (
    ensure_dir,
    format_duration,
    frames_for_duration,
    is_video_file,
    safe_json_load,
    setup_logging,
    timestamped,
)

__all__ = [
    # Config
    "DEFAULT_BACKEND_URL",
    "DEFAULT_METHOD",
    "Environment",
    "LogLevel",
    "TranslatorConfig",
    "get_config",
    "clear_config_cache",
    # Types
    "FRAME_VECTOR_SIZE",
    "HISTORY_LIMIT",
    "IMG_SIZE",
    "LANDMARKS_PER_HAND",
    "MAX_SEQ_LEN",
    "PAD_VALUE",
    "RECORD_MAX_SECONDS",
    "TARGET_FPS",
    "HandSlot",
    "HistoryEntry",
    "InputMode",
    "SessionState",
    "TranslationResult",
    "confidence_value",
    # Protocols
    "CameraProvider",
    "FrameSource",
    "HandDetector",
    "MediaRecorder",
    "MediaStream",
    "Speaker",
    # Errors
    "SignTranslatorError",
    "ConfigurationError",
    "CaptureError",
    "CameraAccessError",
    "CameraNotActiveError",
    "RecordingError",
    "RecordingSaveError",
    "InvalidStateError",
    "ExtractionError",
    "DetectorInitError",
    "VideoLoadError",
    "VideoMetadataError",
    "TranslationError",
    "NoInputError",
    "ServiceError",
    "ServiceResponseError",
    "StorageError",
    # Localization
    "Locale",
    "MessageKey",
    "message",
    "method_label",
    "available_methods",
    # Utils
    "ensure_dir",
    "format_duration",
    "frames_for_duration",
    "is_video_file",
    "safe_json_load",
    "setup_logging",
    "timestamped",
]
