"""
In-Memory Preference Store

Per-user option storage read by the mail gate.
"""

import threading
from typing import Any, Dict, Protocol

ENABLE_OPTION = "gpgmail-enable"
KEY_OPTION = "gpgmail-key"

DEFAULT_OPTIONS: Dict[str, Any] = {
    ENABLE_OPTION: False,
    KEY_OPTION: "",
}


class PreferenceLookup(Protocol):
    """Read-only view of user options."""

    def get_bool_option(self, user: str, name: str) -> bool: ...

    def get_option(self, user: str, name: str) -> Any: ...


class MemoryPreferenceStore:
    """
    Thread-safe in-memory user option storage.

    Unknown users and unset options read as the defaults.
    """

    def __init__(self, defaults: Dict[str, Any] = None):
        self._store: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.RLock()
        self._defaults = dict(DEFAULT_OPTIONS if defaults is None else defaults)

    def get_option(self, user: str, name: str) -> Any:
        """Get an option value, falling back to its default."""
        with self._lock:
            options = self._store.get(user, {})
            if name in options:
                return options[name]
            return self._defaults.get(name)

    def get_bool_option(self, user: str, name: str) -> bool:
        return bool(self.get_option(user, name))

    def set_option(self, user: str, name: str, value: Any) -> None:
        with self._lock:
            self._store.setdefault(user, {})[name] = value

    def get_options(self, user: str) -> Dict[str, Any]:
        """Get all options for a user, defaults included."""
        with self._lock:
            options = dict(self._defaults)
            options.update(self._store.get(user, {}))
            return options

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
