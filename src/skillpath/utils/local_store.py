"""
Local Scoped Key-Value Store.

This module provides the local fallback storage used for wizard sessions and
for published profile snapshots when the remote store is unavailable.

Values are JSON documents stored under a scope prefix, e.g.
"skillpath_profile_{share_id}". Without a directory, entries live in memory.
When a directory is configured, each key is one JSON file named by the SHA-256
of the key, entries survive a process restart and memory only holds values
whose file could not be written.

Environment Variables:
    LOCAL_STORE_DIR: Directory for the JSON files (default: in-memory only)
"""

import copy
import hashlib
import json
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from skillpath.utils.logger import get_logger

logger = get_logger(__name__)

# Key scopes
PROFILE_SCOPE = "skillpath_profile_"
SESSION_SCOPE = "skillpath_session_"


class KeyValueStore:
    """JSON key-value store with an optional directory backing.

    Args:
        directory (Optional[str]): Directory for the JSON files. When empty or
            None, entries live in memory only.
    """

    def __init__(self, directory: Optional[str] = None):
        self._data: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self.directory = Path(directory) if directory else None
        if self.directory is not None:
            try:
                os.makedirs(self.directory, exist_ok=True)
            except OSError as e:
                logger.warning(
                    "Local store directory not writable, using memory only",
                    extra={
                        "extra_fields": {
                            "directory": str(self.directory),
                            "error": str(e),
                        }
                    },
                )
                self.directory = None

    # ------------------------------
    # Public interface
    # ------------------------------
    def get(self, key: str) -> Optional[Any]:
        """Return a copy of the value stored under key, or None."""
        with self._lock:
            if key in self._data:
                return copy.deepcopy(self._data[key])
            return self._read_file(key)

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key (overwrites)."""
        # Round-trip through JSON so stored values never alias caller objects
        encoded = json.dumps(value, default=str)
        with self._lock:
            if self._write_file(key, encoded):
                self._data.pop(key, None)
            else:
                self._data[key] = json.loads(encoded)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)
        path = self._path_for(key)
        if path is not None and path.exists():
            try:
                path.unlink()
            except OSError as e:
                logger.warning(
                    "Failed to delete local store file",
                    extra={"extra_fields": {"key": key, "error": str(e)}},
                )

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    # ------------------------------
    # Internal functions
    # ------------------------------
    def _path_for(self, key: str) -> Optional[Path]:
        if self.directory is None:
            return None
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.directory / f"{digest}.json"

    def _read_file(self, key: str) -> Optional[Any]:
        path = self._path_for(key)
        if path is None or not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as file:
                return json.load(file)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(
                "Failed to read local store file",
                extra={"extra_fields": {"key": key, "error": str(e)}},
            )
            return None

    def _write_file(self, key: str, encoded: str) -> bool:
        path = self._path_for(key)
        if path is None:
            return False
        try:
            with open(path, "w", encoding="utf-8") as file:
                file.write(encoded)
        except OSError as e:
            # Kept in memory instead
            logger.error(
                "Failed to write local store file",
                extra={"extra_fields": {"key": key, "error": str(e)}},
            )
            return False
        return True
