"""JSON-file key-value store for persisted client state."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from packages.core import StorageError, ensure_dir, safe_json_load

logger = logging.getLogger(__name__)


class JsonKeyValueStore:
    """A flat string-keyed mapping kept in a single JSON file.

    Reads tolerate a missing or corrupt file (treated as empty). Writes
    raise StorageError so callers decide whether a failed save matters.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        data = safe_json_load(self.path, default={})
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed state file %s", self.path)
            return {}
        return data

    def _save(self, data: dict[str, Any]) -> None:
        try:
            ensure_dir(self.path.parent)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            tmp.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError("write", str(self.path), str(e)) from e

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def keys(self) -> list[str]:
        return list(self._load().keys())
