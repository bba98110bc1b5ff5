"""Tests for the capped translation history."""

import logging

from packages.core import HistoryEntry, StorageError, TranslationResult
from packages.storage.history import HISTORY_KEY, TranslationHistory
from packages.storage.kv_store import JsonKeyValueStore


def entry(n: int) -> HistoryEntry:
    return HistoryEntry(id=n, time=f"2026-01-01 10:00:{n:02d}", translation=f"Satz {n}", confidence=0.5, method="avg")


class BrokenStore(JsonKeyValueStore):
    """Reads fine, refuses every write."""

    def _save(self, data):
        raise StorageError("write", str(self.path), "disk full")


class TestTranslationHistory:
    def test_starts_empty(self, store):
        assert len(TranslationHistory(store)) == 0

    def test_newest_first(self, store):
        history = TranslationHistory(store)

        history.add(entry(1))
        history.add(entry(2))

        assert [e.id for e in history.entries] == [2, 1]

    def test_eleventh_entry_drops_oldest(self, store):
        history = TranslationHistory(store)

        for n in range(1, 12):
            history.add(entry(n))

        assert len(history) == 10
        assert history.entries[0].id == 11
        assert history.get(1) is None
        assert history.get(2) is not None

    def test_persists_across_instances(self, store, state_file):
        TranslationHistory(store).add(entry(7))

        reloaded = TranslationHistory(JsonKeyValueStore(state_file))

        assert reloaded.entries == [entry(7)]

    def test_add_result(self, store):
        history = TranslationHistory(store)
        result = TranslationResult(gloss="HALLO", translation="Hallo", confidence=0.91, method="attention")

        added = history.add_result(result)

        assert added.translation == "Hallo"
        assert added.method == "attention"
        assert added.confidence == 0.91
        assert history.get(added.id) == added

    def test_legacy_confidence_object(self, store):
        store.set(HISTORY_KEY, [
            {"id": 1, "time": "t", "translation": "Hallo", "confidence": {"overall": 0.8}, "method": "avg"},
            "garbage",
        ])

        history = TranslationHistory(store)

        assert len(history) == 1
        assert history.entries[0].confidence == 0.8

    def test_malformed_records_skipped(self, store, caplog):
        store.set(HISTORY_KEY, [
            {"id": "abc", "time": "t", "translation": "Eins", "confidence": 0.5, "method": "avg"},
            {"id": 2, "time": "t", "translation": "Zwei", "confidence": {"overall": "high"}, "method": "avg"},
            {"id": None, "time": "t", "translation": "Drei", "confidence": 0.5, "method": "avg"},
            {"id": 4, "time": "t", "translation": "Vier", "confidence": 0.4, "method": "avg"},
        ])

        with caplog.at_level(logging.WARNING):
            history = TranslationHistory(store)

        assert [e.translation for e in history.entries] == ["Vier"]
        assert caplog.text.count("Skipping malformed history record") == 3

    def test_malformed_value_discarded(self, store, caplog):
        store.set(HISTORY_KEY, {"not": "a list"})

        assert len(TranslationHistory(store)) == 0
        assert "malformed" in caplog.text

    def test_clear(self, store):
        history = TranslationHistory(store)
        history.add(entry(1))

        history.clear()

        assert len(history) == 0
        assert store.get(HISTORY_KEY) is None

    def test_save_failure_keeps_memory(self, state_file, caplog):
        history = TranslationHistory(BrokenStore(state_file))

        with caplog.at_level(logging.WARNING):
            history.add(entry(1))

        assert len(history) == 1
        assert "Failed to save history" in caplog.text
