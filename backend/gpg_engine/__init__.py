"""
GPG Engine Package

Narrow interface to GnuPG used by the mail gate:
- Inline encryption of text to a single public key
- PGP/MIME (RFC 3156) packaging of whole messages
- Structural validation of pasted keys
"""

from .engine import GpgEngine, KeyKind, INVALID_KEY_MESSAGE
from .exceptions import (
    GpgEngineError,
    InvalidKeyError,
    GpgBinaryNotFoundError,
    EncryptionFailedError,
)
from .pgp_mime import PgpMime

__all__ = [
    "GpgEngine",
    "KeyKind",
    "INVALID_KEY_MESSAGE",
    "GpgEngineError",
    "InvalidKeyError",
    "GpgBinaryNotFoundError",
    "EncryptionFailedError",
    "PgpMime",
]
