"""
Operation Status

Result of a gate operation: a success flag plus an ordered list of
error messages. Merging two statuses concatenates their messages.
"""

from dataclasses import dataclass, field
from typing import List

ENCRYPT_ERROR_MESSAGE = "Encryption failed: the GPG engine returned no output."


@dataclass
class Status:
    ok: bool = True
    errors: List[str] = field(default_factory=list)

    @classmethod
    def good(cls) -> "Status":
        return cls()

    @classmethod
    def fatal(cls, message: str) -> "Status":
        return cls(ok=False, errors=[message])

    def merge(self, other: "Status") -> "Status":
        """Fold another status into this one and return self."""
        self.ok = self.ok and other.ok
        self.errors.extend(other.errors)
        return self

    def is_ok(self) -> bool:
        return self.ok

    @property
    def text(self) -> str:
        """All error messages, one per line."""
        return "\n".join(self.errors)
