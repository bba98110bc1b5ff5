"""Custom exception classes for the sign translator.

Exception Hierarchy:
    SignTranslatorError (base)
    ├── ConfigurationError
    ├── CaptureError
    │   ├── CameraAccessError
    │   ├── CameraNotActiveError
    │   ├── RecordingError
│   ├── RecordingSaveError
    │   └── InvalidStateError
    ├── ExtractionError
    │   ├── DetectorInitError
    │   ├── VideoLoadError
    │   └── VideoMetadataError
    ├── TranslationError
    │   ├── NoInputError
    │   ├── ServiceError
    │   └── ServiceResponseError
    └── StorageError
"""

from typing import Any, Optional


class SignTranslatorError(Exception):
    """Base exception for all sign translator errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for display or logging."""
        result: dict[str, Any] = {
            "error": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# ============ Configuration Errors ============


class ConfigurationError(SignTranslatorError):
    """Error in application configuration."""

    def __init__(self, config_key: str, value: str, reason: str):
        super().__init__(
            message=f"Invalid configuration for {config_key}={value!r}: {reason}",
            code="configuration_error",
            details={"config_key": config_key, "value": value, "reason": reason},
        )


# ============ Capture Errors ============


class CaptureError(SignTranslatorError):
    """Base class for camera and recording errors."""

    pass


class CameraAccessError(CaptureError):
    """Camera permission was denied or the device failed to open."""

    def __init__(self, reason: str, device: Optional[int] = None):
        super().__init__(
            message="Failed to access camera. Please ensure permissions are granted.",
            code="camera_access_error",
            details={"reason": reason, "device": device},
        )
        self.reason = reason


class CameraNotActiveError(CaptureError):
    """An operation needed a live camera stream but none is attached."""

    def __init__(self) -> None:
        super().__init__(message="Camera not active.", code="camera_not_active")


class RecordingError(CaptureError):
    """Media recorder could not be constructed or started."""

    def __init__(self, reason: str):
        super().__init__(
            message="Recording not supported with the available codecs",
            code="recording_error",
            details={"reason": reason},
        )
        self.reason = reason


class RecordingSaveError(CaptureError):
    """A finished recording could not be written out."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Failed to save recording: {reason}",
            code="recording_save_error",
            details={"reason": reason},
        )
        self.reason = reason


class InvalidStateError(CaptureError):
    """Requested transition is not allowed from the current session state."""

    def __init__(self, action: str, state: str):
        super().__init__(
            message=f"Cannot {action} while session is {state}",
            code="invalid_state",
            details={"action": action, "state": state},
        )


# ============ Extraction Errors ============


class ExtractionError(SignTranslatorError):
    """Landmark extraction failed; no partial sequence is produced."""

    def __init__(self, message: str, code: str = "extraction_error", **details: Any):
        super().__init__(message=message, code=code, details=details)


class DetectorInitError(ExtractionError):
    """The hand-pose detector could not be initialized."""

    def __init__(self, reason: str):
        super().__init__(
            f"Hand detector failed to initialize: {reason}",
            code="detector_init_error",
            reason=reason,
        )


class VideoLoadError(ExtractionError):
    """Failed to open a video file."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Failed to load video '{path}': {reason}",
            code="video_load_error",
            path=path,
            reason=reason,
        )


class VideoMetadataError(ExtractionError):
    """Video metadata (duration) never became available."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Video metadata unavailable for '{path}': {reason}",
            code="video_metadata_error",
            path=path,
            reason=reason,
        )


# ============ Translation Errors ============


class TranslationError(SignTranslatorError):
    """Base class for translation-related errors."""

    pass


class NoInputError(TranslationError):
    """Translate was requested with no clip or file present."""

    def __init__(self, message: str = "Please select a video file first"):
        super().__init__(message=message, code="no_input")


class ServiceError(TranslationError):
    """The remote translation service rejected or failed the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message=message,
            code="service_error",
            details={"status_code": status_code},
        )
        self.status_code = status_code


class ServiceResponseError(TranslationError):
    """The service answered 2xx but the body was not a valid result."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Invalid response from translation service: {reason}",
            code="service_response_error",
            details={"reason": reason},
        )


# ============ Storage Errors ============


class StorageError(SignTranslatorError):
    """Error reading/writing persisted state."""

    def __init__(self, operation: str, path: str, reason: str):
        super().__init__(
            message=f"Storage {operation} failed for '{path}': {reason}",
            code="storage_error",
            details={"operation": operation, "path": path, "reason": reason},
        )
