"""Common utility functions for the sign translator.

Provides helper functions used across multiple packages.
"""

from __future__ import annotations

import json
import logging
import mimetypes
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, TypeVar

from rich.logging import RichHandler

T = TypeVar("T")

VIDEO_EXTENSIONS = (".mp4", ".webm", ".mov", ".avi", ".mkv")


# ============ Logging ============


def setup_logging(level: str = "INFO") -> None:
    """Route package loggers through a rich console handler.

    Args:
        level: Logging level name (DEBUG/INFO/WARNING/ERROR)
    """
    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("packages")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


# ============ Time Utilities ============


def timestamped(message: str, now: Optional[datetime] = None) -> str:
    """Prefix a diagnostic log line with the local wall-clock time.

    Examples:
        >>> timestamped("done", datetime(2024, 1, 1, 9, 5, 3))
        '09:05:03: done'
    """
    now = now or datetime.now()
    return f"{now.strftime('%H:%M:%S')}: {message}"


def frames_for_duration(duration_s: float, fps: float) -> int:
    """Number of frames sampled from a clip.

    Args:
        duration_s: Duration in seconds
        fps: Sampling rate

    Returns:
        floor(duration * fps), never negative
    """
    if duration_s <= 0 or fps <= 0:
        return 0
    return max(0, int(duration_s * fps))


def format_duration(ms: float) -> str:
    """Format milliseconds as human-readable duration.

    Returns:
        Formatted string (e.g., "1.5s", "2m 30s")
    """
    seconds = ms / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    remaining_seconds = seconds % 60
    return f"{minutes}m {remaining_seconds:.0f}s"


# ============ File Utilities ============


def is_video_file(path: Path) -> bool:
    """Check whether a path looks like a video by MIME type or extension."""
    mime, _ = mimetypes.guess_type(str(path))
    if mime and mime.startswith("video/"):
        return True
    return path.suffix.lower() in VIDEO_EXTENSIONS


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists, creating if necessary.

    Returns:
        The path (for chaining)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def safe_json_load(path: Path, default: T | None = None) -> Any:
    """Safely load JSON file, returning default on error.

    Args:
        path: Path to JSON file
        default: Value to return if file doesn't exist or is invalid

    Returns:
        Parsed JSON or default value
    """
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return default

