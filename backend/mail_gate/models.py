"""
Mail Gate Models

Transient per-message values passed between the host pipeline and the gate.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

Body = Union[str, Dict[str, str]]


class EncryptionMode(Enum):
    INLINE = "inline"
    PGP_MIME = "pgp_mime"


@dataclass(frozen=True)
class GateConfig:
    """Process-wide gate configuration, built once at startup."""
    mode: EncryptionMode = EncryptionMode.INLINE
    gpg_binary: Optional[str] = None
    temp_dir: Optional[Path] = None

    @classmethod
    def from_settings(cls, settings) -> "GateConfig":
        return cls(
            mode=EncryptionMode.PGP_MIME if settings.use_pgp_mime else EncryptionMode.INLINE,
            gpg_binary=settings.gpg_binary,
            temp_dir=settings.temp_dir,
        )


@dataclass(frozen=True)
class MailAddress:
    address: str
    name: str = ""

    @property
    def user(self) -> str:
        """Preference store key for this address."""
        return self.name or self.address


@dataclass(frozen=True)
class Recipient:
    address: str
    encryption_enabled: bool
    public_key_text: str = ""


@dataclass
class HookResult:
    """Outcome of a transform hook, carrying the possibly replaced values."""
    ok: bool
    body: Body
    headers: Mapping[str, str] = field(default_factory=dict)
    error: Optional[str] = None
