"""Storage package - persisted history and preferences."""

from .history import HISTORY_KEY, TranslationHistory
from .kv_store import JsonKeyValueStore
from .preferences import LANGUAGE_KEY, Preferences

__all__ = [
    "HISTORY_KEY",
    "LANGUAGE_KEY",
    "JsonKeyValueStore",
    "Preferences",
    "TranslationHistory",
]
