"""CLI commands."""

from .history import clear_history, history
from .record import record
from .settings import language, methods
from .translate import translate

__all__ = [
    "clear_history",
    "history",
    "record",
    "language",
    "methods",
    "translate",
]
