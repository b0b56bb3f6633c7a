from .store import (
    ENABLE_OPTION,
    KEY_OPTION,
    DEFAULT_OPTIONS,
    PreferenceLookup,
    MemoryPreferenceStore,
)

__all__ = [
    "ENABLE_OPTION",
    "KEY_OPTION",
    "DEFAULT_OPTIONS",
    "PreferenceLookup",
    "MemoryPreferenceStore",
]
