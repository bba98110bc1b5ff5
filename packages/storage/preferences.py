"""Persisted user preferences."""

import logging

from packages.core import Locale, StorageError

from .kv_store import JsonKeyValueStore

logger = logging.getLogger(__name__)

LANGUAGE_KEY = "preferredLanguage"


class Preferences:
    def __init__(self, store: JsonKeyValueStore, default_language: Locale = Locale.EN):
        self.store = store
        self.default_language = default_language

    @property
    def language(self) -> Locale:
        value = self.store.get(LANGUAGE_KEY)
        if not value:
            return self.default_language
        return Locale.parse(str(value))

    @language.setter
    def language(self, locale: Locale) -> None:
        try:
            self.store.set(LANGUAGE_KEY, locale.value)
        except StorageError as e:
            logger.warning("Failed to save language preference: %s", e.message)
