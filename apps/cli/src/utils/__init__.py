"""CLI utilities."""

from .config import (
    build_orchestrator,
    build_session,
    build_speech,
    get_history,
    get_locale,
    get_preferences,
    get_store,
)
from .display import console, print_history_table, print_logs, print_result

__all__ = [
    "build_orchestrator",
    "build_session",
    "build_speech",
    "get_history",
    "get_locale",
    "get_preferences",
    "get_store",
    "console",
    "print_history_table",
    "print_logs",
    "print_result",
]
