# db/session_store.py - Saves/restores the last-entered calculator fields and the helper-banner flag.
# Five keys, all text: volume, material, existing, target, helperVisible ("true"/"false").
# `material` belongs to raw mode, `existing` to dilute mode; each survives while the other mode is active.

import sys
from dataclasses import dataclass
from typing import Optional

from agent.agent_tools.calculator import Mode
from .kv_store import KeyValueStore, JsonFileStore

TEXT_KEYS = ("volume", "material", "existing", "target")
HELPER_KEY = "helperVisible"


@dataclass(frozen=True)
class PersistedSession:
    volume: str = ""
    material: str = ""
    existing: str = ""
    target: str = ""
    helper_visible: bool = True

    def current_strength(self, mode: Mode) -> str:
        """The strength field that is active for `mode`."""
        return self.material if mode == Mode.RAW else self.existing


class SessionStore:
    def __init__(self, store: Optional[KeyValueStore] = None):
        self.store = store if store is not None else JsonFileStore()

    def _get(self, key: str) -> Optional[str]:
        try:
            return self.store.get(key)
        except (OSError, ValueError) as e:
            print(f"Warning: Could not read '{key}' from the session store. {e}", file=sys.stderr)
            return None

    def _set(self, key: str, value: str) -> None:
        try:
            self.store.set(key, value)
        except (OSError, ValueError) as e:
            print(f"Warning: Could not write '{key}' to the session store. {e}", file=sys.stderr)

    def load(self) -> PersistedSession:
        """Missing or empty keys come back as defaults; never raises on store trouble."""
        fields = {key: self._get(key) or "" for key in TEXT_KEYS}
        helper = self._get(HELPER_KEY)
        return PersistedSession(
            helper_visible=True if helper is None else helper == "true",
            **fields,
        )

    def save(self, session: PersistedSession, mode: Mode) -> None:
        """Writes the tracked fields; only the active mode's strength field is written."""
        self._set("volume", session.volume)
        if mode == Mode.RAW:
            self._set("material", session.material)
        else:
            self._set("existing", session.existing)
        self._set("target", session.target)
        self._set(HELPER_KEY, "true" if session.helper_visible else "false")
