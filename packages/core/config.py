"""Environment and path configuration for the sign translator.

Provides centralized configuration with sensible defaults.
All configuration is loaded from environment variables.

Usage:
    from packages.core import get_config

    config = get_config()
    print(f"Backend: {config.backend_url}")
    print(f"Sequence length: {config.max_seq_len}")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path

from .errors import ConfigurationError
from .i18n import Locale
from .types import IMG_SIZE, MAX_SEQ_LEN, RECORD_MAX_SECONDS, TARGET_FPS

DEFAULT_BACKEND_URL = "https://suencheah-DGS-CSLT-backend.hf.space/api/translate_landmarks"
DEFAULT_METHOD = "reranked_s2g_beam_g2t"


class Environment(Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class TranslatorConfig:
    """Application configuration.

    Immutable configuration object created from environment variables.

    Attributes:
        data_dir: Base data directory
        recordings_dir: Where finalized camera recordings are written
        state_file: JSON file holding history and preferences
        env: Current environment (development/production/testing)
        log_level: Logging level
        debug: Debug mode enabled
        backend_url: Remote landmark translation endpoint
        request_timeout: Seconds to wait for the translation service
        target_fps: Frame sampling rate for extraction
        max_seq_len: Frames in a normalized sequence
        record_max_seconds: Auto-stop timeout for live recordings
        img_size: Detector input (width, height)
        camera_index: OpenCV device index for live capture
        max_num_hands: Hands the detector looks for
        min_detection_confidence: Detector confidence threshold
        min_tracking_confidence: Tracker confidence threshold
        model_complexity: MediaPipe hands model complexity
        default_method: Translation method for uploads (and the fixed live method)
        language: Display language for messages
        speech_lang: Language tag used when speaking results
    """

    # Paths
    data_dir: Path
    recordings_dir: Path
    state_file: Path

    # Environment
    env: Environment
    log_level: LogLevel
    debug: bool

    # Remote service
    backend_url: str = DEFAULT_BACKEND_URL
    request_timeout: float = 60.0

    # Pipeline
    target_fps: int = TARGET_FPS
    max_seq_len: int = MAX_SEQ_LEN
    record_max_seconds: int = RECORD_MAX_SECONDS
    img_size: tuple[int, int] = IMG_SIZE
    camera_index: int = 0

    # Detector
    max_num_hands: int = 2
    min_detection_confidence: float = 0.4
    min_tracking_confidence: float = 0.4
    model_complexity: int = 1

    # Presentation
    default_method: str = DEFAULT_METHOD
    language: Locale = Locale.EN
    speech_lang: str = "de-DE"

    def __post_init__(self) -> None:
        """Ensure directories exist in non-testing environments."""
        if not self.is_testing:
            for path in [self.data_dir, self.recordings_dir]:
                path.mkdir(parents=True, exist_ok=True)

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.env == Environment.TESTING


def _find_project_root() -> Path:
    """Find project root by looking for packages/ directory.

    Walks up from the current file's location to find the project root.
    Falls back to current working directory if not found.
    """
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "packages").exists():
            return parent
    return Path.cwd()


def _get_env_path(var: str, default: Path) -> Path:
    """Get path from environment variable or use default.

    Relative paths are resolved against the project root.
    """
    value = os.environ.get(var)
    if value:
        path = Path(value)
        if not path.is_absolute():
            path = _find_project_root() / path
        return path
    return default


def _get_env_number(var: str, default: float, cast: type = int, minimum: float = 0) -> float:
    """Read a numeric environment variable.

    Raises:
        ConfigurationError: If the value is not a number or is below minimum
    """
    value = os.environ.get(var)
    if value is None or value.strip() == "":
        return default
    try:
        number = cast(value)
    except ValueError:
        raise ConfigurationError(var, value, "not a number")
    if number < minimum:
        raise ConfigurationError(var, value, f"must be >= {minimum}")
    return number


@lru_cache(maxsize=1)
def get_config() -> TranslatorConfig:
    """Get the application configuration (singleton).

    Configuration is loaded from environment variables:
    - SIGNTRANSLATOR_DATA_DIR: Base data directory
    - SIGNTRANSLATOR_RECORDINGS_DIR: Finalized recordings directory
    - SIGNTRANSLATOR_STATE_FILE: History/preferences JSON file
    - SIGNTRANSLATOR_ENV: Environment (development/production/testing)
    - SIGNTRANSLATOR_LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR)
    - SIGNTRANSLATOR_DEBUG: Enable debug mode (1/true/yes)
    - SIGNTRANSLATOR_BACKEND_URL: Translation endpoint
    - SIGNTRANSLATOR_REQUEST_TIMEOUT: Request timeout in seconds
    - SIGNTRANSLATOR_TARGET_FPS: Sampling rate (default: 25)
    - SIGNTRANSLATOR_MAX_SEQ_LEN: Normalized sequence length (default: 190)
    - SIGNTRANSLATOR_RECORD_MAX_SECONDS: Recording auto-stop (default: 8)
    - SIGNTRANSLATOR_CAMERA_INDEX: OpenCV camera index (default: 0)
    - SIGNTRANSLATOR_METHOD: Default translation method
    - SIGNTRANSLATOR_LANGUAGE: Display language (en/de)

    Returns:
        Immutable TranslatorConfig instance
    """
    project_root = _find_project_root()

    env_str = os.environ.get("SIGNTRANSLATOR_ENV", "development").lower()
    try:
        env = Environment(env_str)
    except ValueError:
        env = Environment.DEVELOPMENT

    log_str = os.environ.get("SIGNTRANSLATOR_LOG_LEVEL", "INFO").upper()
    try:
        log_level = LogLevel(log_str)
    except ValueError:
        log_level = LogLevel.INFO

    debug_str = os.environ.get("SIGNTRANSLATOR_DEBUG", "").lower()
    debug = debug_str in ("1", "true", "yes") or env == Environment.DEVELOPMENT

    data_dir = _get_env_path("SIGNTRANSLATOR_DATA_DIR", project_root / "data")
    recordings_dir = _get_env_path("SIGNTRANSLATOR_RECORDINGS_DIR", data_dir / "recordings")
    state_file = _get_env_path("SIGNTRANSLATOR_STATE_FILE", data_dir / "state.json")

    language = Locale.parse(os.environ.get("SIGNTRANSLATOR_LANGUAGE", "en"))

    return TranslatorConfig(
        data_dir=data_dir,
        recordings_dir=recordings_dir,
        state_file=state_file,
        env=env,
        log_level=log_level,
        debug=debug,
        backend_url=os.environ.get("SIGNTRANSLATOR_BACKEND_URL", DEFAULT_BACKEND_URL),
        request_timeout=_get_env_number("SIGNTRANSLATOR_REQUEST_TIMEOUT", 60.0, float, 1),
        target_fps=_get_env_number("SIGNTRANSLATOR_TARGET_FPS", TARGET_FPS, int, 1),
        max_seq_len=_get_env_number("SIGNTRANSLATOR_MAX_SEQ_LEN", MAX_SEQ_LEN, int, 1),
        record_max_seconds=_get_env_number(
            "SIGNTRANSLATOR_RECORD_MAX_SECONDS", RECORD_MAX_SECONDS, int, 1
        ),
        camera_index=_get_env_number("SIGNTRANSLATOR_CAMERA_INDEX", 0, int, 0),
        default_method=os.environ.get("SIGNTRANSLATOR_METHOD", DEFAULT_METHOD),
        language=language,
    )


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing when environment variables change
    between test cases.
    """
    get_config.cache_clear()
