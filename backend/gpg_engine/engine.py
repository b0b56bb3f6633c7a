"""
GnuPG Engine

Thin layer over python-gnupg. Every operation runs against a throwaway
keyring so no key material outlives the call.
"""

import logging
import tempfile
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Union

import gnupg

from .exceptions import EncryptionFailedError, GpgBinaryNotFoundError, InvalidKeyError

logger = logging.getLogger("gpglib")

DEFAULT_GPG_BINARY = "gpg"
INVALID_KEY_MESSAGE = "Invalid GPG public key"


class KeyKind(Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class GpgEngine:
    """
    Encrypts text for a single recipient key and validates pasted keys.

    The recipient key is passed as ASCII-armored text on every call; the
    engine keeps no keyring of its own.
    """

    def __init__(
        self,
        gpg_binary: Optional[str] = None,
        temp_dir: Optional[Union[str, Path]] = None,
    ):
        self.gpg_binary = gpg_binary or DEFAULT_GPG_BINARY
        self.temp_dir = Path(temp_dir) if temp_dir else None

    @contextmanager
    def _keyring(self) -> Iterator[gnupg.GPG]:
        """Yield a GPG instance bound to an empty temporary home directory."""
        with tempfile.TemporaryDirectory(prefix="gpgmail-", dir=self.temp_dir) as home:
            try:
                gpg = gnupg.GPG(gpgbinary=self.gpg_binary, gnupghome=home)
            except OSError as e:
                logger.error("Unable to run gpg binary %s: %s", self.gpg_binary, e)
                raise GpgBinaryNotFoundError(
                    f"Unable to run gpg ({self.gpg_binary}) - it may not be available."
                ) from e
            gpg.encoding = "utf-8"
            yield gpg

    def _import(self, gpg: gnupg.GPG, key_text: str) -> List[str]:
        result = gpg.import_keys(key_text or "")
        fingerprints = [fp for fp in result.fingerprints if fp]
        logger.debug("Imported %d key(s) into scratch keyring", len(fingerprints))
        return fingerprints

    def encrypt(self, plaintext: str, public_key_text: str) -> str:
        """
        Encrypt plaintext to the given public key.

        Args:
            plaintext: Text to encrypt
            public_key_text: ASCII-armored OpenPGP public key

        Returns:
            ASCII-armored ciphertext. An empty string means gpg produced
            no output; callers must treat it as a failure.

        Raises:
            InvalidKeyError: The key text holds no usable public key
            EncryptionFailedError: gpg refused to encrypt
            GpgBinaryNotFoundError: gpg could not be run
        """
        with self._keyring() as gpg:
            fingerprints = self._import(gpg, public_key_text)
            if not fingerprints or not gpg.list_keys():
                raise InvalidKeyError(INVALID_KEY_MESSAGE)

            result = gpg.encrypt(
                plaintext,
                fingerprints,
                always_trust=True,
                armor=True,
            )
            if not result.ok:
                logger.warning("gpg encryption failed: %s", result.status)
                raise EncryptionFailedError(f"GPG encryption failed: {result.status}")

            return str(result)

    def validate_key(self, text: str, kind: KeyKind = KeyKind.PUBLIC) -> bool:
        """
        Check that text is exactly one structurally valid key of the given kind.

        No network lookups are made. Secret key material is rejected when a
        public key is requested.
        """
        if not text or not text.strip():
            return False

        with self._keyring() as gpg:
            result = gpg.import_keys(text)
            if kind is KeyKind.PRIVATE:
                keys = gpg.list_keys(secret=True)
            else:
                if getattr(result, "sec_imported", 0):
                    logger.warning("Secret key material submitted as a public key")
                    return False
                keys = gpg.list_keys()

            return len(keys) == 1
