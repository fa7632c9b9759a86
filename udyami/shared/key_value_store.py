"""Key-value storage abstraction backing the local record store."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Protocol for string key-value storage.

    Implementations hold one serialized value per key (one key per record
    collection). There are no transactions across keys.
    """

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error."""
        ...


class InMemoryStore:
    """Dict-backed implementation of KeyValueStore."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileStore:
    """Local filesystem implementation of KeyValueStore.

    Each key is stored in its own ``<key>.json`` file under ``base_dir``.
    """

    def __init__(self, base_dir: str | Path):
        """Initialize the file store.

        Args:
            base_dir: Directory holding one file per key (created if missing)
        """
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _sanitize_key(self, key: str) -> str:
        """Reduce a key to a safe file name.

        Args:
            key: Storage key

        Returns:
            File name stem safe for filesystem use
        """
        key = Path(key).name
        key = re.sub(r'[<>:"/\\|?*\s]', "_", key)
        key = key.strip(". ")
        return key[:200] or "item"

    def _get_path(self, key: str) -> Path:
        """Resolve the file path for a key.

        Raises:
            ValueError: If the path escapes the base directory
        """
        full_path = (self.base_dir / f"{self._sanitize_key(key)}.json").resolve()
        base_resolved = self.base_dir.resolve()
        if full_path.parent != base_resolved:
            raise ValueError("Invalid key: directory traversal detected")
        return full_path

    def get_item(self, key: str) -> str | None:
        """Read the value stored for a key.

        Raises:
            OSError: If the file exists but cannot be read
        """
        path = self._get_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        """Write the value for a key.

        The value is written to a temporary file first and then moved into
        place, so a reader never sees a half-written file.

        Raises:
            OSError: If the file cannot be written
        """
        path = self._get_path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
            logger.debug(f"Wrote {len(value)} bytes to {path}")
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise

    def remove_item(self, key: str) -> None:
        """Delete the file for a key, if present.

        Raises:
            OSError: If the file exists but cannot be deleted
        """
        path = self._get_path(key)
        if path.exists():
            path.unlink()
            logger.debug(f"Removed {path}")
