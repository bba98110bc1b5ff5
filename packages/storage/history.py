"""Capped, most-recent-first translation history."""

import logging
from typing import Optional

from packages.core import HISTORY_LIMIT, HistoryEntry, StorageError, TranslationResult

from .kv_store import JsonKeyValueStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "translationHistory"


class TranslationHistory:
    """In-memory history list mirrored to a key-value store.

    A failed save is logged and the in-memory list stays authoritative
    for the rest of the session.
    """

    def __init__(self, store: JsonKeyValueStore, limit: int = HISTORY_LIMIT):
        self.store = store
        self.limit = limit
        self._entries = self._load()

    def _load(self) -> list[HistoryEntry]:
        raw = self.store.get(HISTORY_KEY, [])
        if not isinstance(raw, list):
            logger.warning("Discarding malformed %s value", HISTORY_KEY)
            return []
        entries = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            try:
                entries.append(HistoryEntry.from_dict(item))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping malformed history record: %s", e)
        return entries[: self.limit]

    def _persist(self) -> None:
        try:
            self.store.set(HISTORY_KEY, [entry.to_dict() for entry in self._entries])
        except StorageError as e:
            logger.warning("Failed to save history: %s", e.message)

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entry: HistoryEntry) -> HistoryEntry:
        """Prepend an entry, dropping the oldest beyond the limit."""
        self._entries = [entry, *self._entries][: self.limit]
        self._persist()
        return entry

    def add_result(self, result: TranslationResult) -> HistoryEntry:
        return self.add(HistoryEntry.from_result(result))

    def get(self, entry_id: int) -> Optional[HistoryEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def clear(self) -> None:
        self._entries = []
        try:
            self.store.remove(HISTORY_KEY)
        except StorageError as e:
            logger.warning("Failed to clear history: %s", e.message)
