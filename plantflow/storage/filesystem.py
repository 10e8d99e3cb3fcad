import json
import logging
import os
import re
from typing import Any, Optional

from plantflow.storage.interface import KeyValueStore

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FilesystemKeyValueStore(KeyValueStore):
    """
    Implements the side channel as one JSON file per key in a local directory.
    """

    def __init__(self, base_dir: str = None):
        """
        Initialize filesystem storage.

        Args:
            base_dir: Directory holding the entries.
                      If None, uses 'storage/results' in the current working directory.
        """
        if base_dir is None:
            base_dir = os.path.join(os.getcwd(), "storage", "results")

        self.base_dir = base_dir
        os.makedirs(self.base_dir, exist_ok=True)

    def _path(self, key: str) -> str:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return os.path.join(self.base_dir, f"{key}.json")

    def put(self, key: str, value: Any) -> None:
        path = self._path(key)
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(value, f, indent=2)
        os.replace(tmp_path, path)

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not os.path.exists(path):
            return None

        with open(path, "r", encoding="utf-8") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError:
                logger.warning("Ignoring unreadable entry %s at %s", key, path)
                return None

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not os.path.exists(path):
            return False
        os.remove(path)
        return True
