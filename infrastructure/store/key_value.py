"""
Key-value blob store implementations.

This module implements the KeyValueStore protocol twice:
- InMemoryKeyValueStore: process-local dict, used by tests and dry runs.
- JsonFileKeyValueStore: one JSON document on disk holding every key,
  rewritten atomically (temp file in the same directory, then replace).
"""
from typing import Dict, List, Mapping, Optional
from pathlib import Path
from tempfile import NamedTemporaryFile
import json
import logging

from application.exceptions import StorageError

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """
    In-memory implementation of KeyValueStore.

    Values are kept as the same JSON text a persistent backend would store,
    so parsing paths are exercised identically.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    def keys(self) -> List[str]:
        return list(self._data.keys())


class JsonFileKeyValueStore:
    """
    File-backed implementation of KeyValueStore.

    The whole store is a single JSON object ``{key: text}``. Every write
    loads the current document, applies the change and atomically replaces
    the file, so a crash never leaves a half-written store behind.
    """

    def __init__(self, path: Path):
        """
        Initialize with the path of the store document.

        Args:
            path: JSON file location (created on first write)
        """
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, key: str) -> Optional[str]:
        return self._load(strict=False).get(key)

    def keys(self) -> List[str]:
        return list(self._load(strict=False).keys())

    # =========================================================================
    # Writes
    # =========================================================================

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        if not items:
            return
        data = self._load(strict=True)
        data.update(items)
        self._write(data)

    # =========================================================================
    # File handling
    # =========================================================================

    def _load(self, *, strict: bool) -> Dict[str, str]:
        """
        Read the store document.

        Non-strict loads (reads) degrade to an empty store when the file is
        missing or unreadable. Strict loads (before a write) raise
        StorageError instead, so an unreadable file is never overwritten.
        """
        if not self._path.exists():
            return {}

        try:
            raw = self._path.read_text(encoding="utf-8").strip() or "{}"
            data = json.loads(raw)
        except (OSError, ValueError) as e:
            # ValueError covers both bad JSON and bytes that are not UTF-8
            if strict:
                raise StorageError(f"Could not read store {self._path}: {e}") from e
            logger.warning(f"Unreadable store file {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            if strict:
                raise StorageError(f"{self._path} must contain a JSON object")
            logger.warning(f"Store file {self._path} is not a JSON object, ignoring")
            return {}

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Mapping[str, str]) -> None:
        payload = json.dumps(dict(data), indent=2, sort_keys=True) + "\n"
        temp_path: Optional[Path] = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                "w", dir=self._path.parent, delete=False, encoding="utf-8"
            ) as tmp:
                temp_path = Path(tmp.name)
                tmp.write(payload)
            temp_path.replace(self._path)
        except OSError as e:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise StorageError(f"Could not write store {self._path}: {e}") from e
