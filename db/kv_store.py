# db/kv_store.py - Tiny string->string key-value stores backing the saved session.
# MemoryStore is a plain dict (tests, throwaway sessions).
# JsonFileStore keeps one flat JSON object on disk, e.g. data/session.json.
# ⚠️ The in-memory cache never refreshes if the file changes outside this process.

import json
import os
import sys
import threading
from typing import Dict, Optional


def default_session_path() -> str:
    """SESSION_FILE if set, else DATA_DIR/session.json. Read at call time so .env is honoured."""
    data_dir = os.getenv("DATA_DIR", "data")
    return os.getenv("SESSION_FILE", os.path.join(data_dir, "session.json"))


class KeyValueStore:
    """Interface: get a string by key (None when absent), set a string by key."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = str(value)


class JsonFileStore(KeyValueStore):
    def __init__(self, path: Optional[str] = None):
        self.path = path or default_session_path()
        self._lock = threading.Lock()
        self._cache: Optional[Dict[str, str]] = None

    # ---------------- internals ----------------

    def _ensure_dir(self) -> None:
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)

    def _load(self) -> Dict[str, str]:
        """Load the mapping into memory (once) and return it."""
        if self._cache is None:
            data = {}
            if os.path.exists(self.path):
                with open(self.path, "r", encoding="utf-8") as f:
                    try:
                        data = json.load(f)
                    except ValueError as e:
                        print(f"Warning: {self.path} is not valid JSON, starting empty. {e}", file=sys.stderr)
                if not isinstance(data, dict):
                    print(f"Warning: {self.path} does not hold a JSON object, starting empty.", file=sys.stderr)
                    data = {}
            # the next set() rewrites a bad file
            self._cache = {str(k): str(v) for k, v in data.items()}
        return self._cache

    def _save(self, data: Dict[str, str]) -> None:
        """Persist the mapping to disk."""
        self._ensure_dir()
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(dict(sorted(data.items())), f, ensure_ascii=False, indent=2)

    # ---------------- interface ----------------

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            value = str(value)
            if data.get(key) == value and os.path.exists(self.path):
                return
            data[key] = value
            self._save(data)
