"""
Encryption Decision Gate

Decides, per outgoing message, whether the recipient asked for encrypted
mail, which encoding applies, and how much of a failure the sender may see.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from gpg_engine import GpgEngine, GpgEngineError, KeyKind, PgpMime
from preferences import ENABLE_OPTION, KEY_OPTION, PreferenceLookup

from .exceptions import InvalidRecipientError
from .models import Body, EncryptionMode, GateConfig, MailAddress, Recipient
from .status import ENCRYPT_ERROR_MESSAGE, Status

logger = logging.getLogger(__name__)


class EncryptionGate:
    """
    Per-recipient encryption policy.

    Holds no state between calls. Every operation takes fresh inputs and
    returns new values instead of mutating the caller's.
    """

    def __init__(
        self,
        config: GateConfig,
        preferences: PreferenceLookup,
        engine: Optional[GpgEngine] = None,
        pgp_mime: Optional[PgpMime] = None,
    ):
        self.config = config
        self.preferences = preferences
        self.engine = engine or GpgEngine(
            gpg_binary=config.gpg_binary,
            temp_dir=config.temp_dir,
        )
        self.pgp_mime = pgp_mime or PgpMime(self.engine)

    @property
    def use_pgp_mime(self) -> bool:
        return self.config.mode is EncryptionMode.PGP_MIME

    def recipient_for(self, to: Any) -> Recipient:
        """
        Look up the encryption preferences of a mail address.

        Raises:
            InvalidRecipientError: to is not a MailAddress with an address
        """
        if not isinstance(to, MailAddress) or not to.address:
            raise InvalidRecipientError(f"invalid address: {to!r}")

        return Recipient(
            address=to.address,
            encryption_enabled=self.preferences.get_bool_option(to.user, ENABLE_OPTION),
            public_key_text=self.preferences.get_option(to.user, KEY_OPTION) or "",
        )

    def should_filter_recipient(self, to: Any) -> bool:
        """True if the recipient must be removed from a bulk send."""
        try:
            return self.recipient_for(to).encryption_enabled
        except InvalidRecipientError:
            logger.warning("invalid address: %r", to)
            return False

    def encrypt_body(self, body: Body, recipient: Recipient) -> Tuple[Status, Body]:
        """
        Encrypt a plaintext body inline.

        A {"text": ..., "html": ...} body has each part encrypted on its
        own; any failing part fails the whole body.

        Returns:
            Tuple of (status, body). The body is the ciphertext on success
            and the untouched input otherwise.
        """
        if not recipient.encryption_enabled or self.use_pgp_mime:
            return Status.good(), body

        if isinstance(body, dict):
            status = Status.good()
            encrypted: Dict[str, str] = {}
            for part, content in body.items():
                part_status, encrypted[part] = self._encrypt_text(content, recipient)
                status.merge(part_status)
            if not status.is_ok():
                return status, body
            return status, encrypted

        status, ciphertext = self._encrypt_text(body, recipient)
        if not status.is_ok():
            return status, body
        return status, ciphertext

    def _encrypt_text(self, text: str, recipient: Recipient) -> Tuple[Status, str]:
        try:
            ciphertext = self.engine.encrypt(text, recipient.public_key_text)
        except GpgEngineError as e:
            logger.info("Inline encryption to %s failed: %s", recipient.address, e)
            return Status.fatal(str(e)), text
        if not ciphertext:
            logger.info("Inline encryption to %s returned no ciphertext", recipient.address)
            return Status.fatal(ENCRYPT_ERROR_MESSAGE), text
        return Status.good(), ciphertext

    def encrypt_mime(
        self,
        headers: Dict[str, str],
        body: str,
        recipient: Recipient,
    ) -> Tuple[Status, Dict[str, str], str]:
        """
        Wrap a MIME-encoded message as PGP/MIME.

        Returns:
            Tuple of (status, headers, body). Headers and body are the
            multipart/encrypted replacement on success and the untouched
            input otherwise.
        """
        if not recipient.encryption_enabled or not self.use_pgp_mime:
            return Status.good(), headers, body

        try:
            new_headers, new_body = self.pgp_mime.encrypt(
                headers, body, recipient.public_key_text
            )
        except GpgEngineError as e:
            logger.info("PGP/MIME encryption to %s failed: %s", recipient.address, e)
            return Status.fatal(str(e)), headers, body

        if not new_body:
            logger.info("PGP/MIME encryption to %s returned no body", recipient.address)
            return Status.fatal(ENCRYPT_ERROR_MESSAGE), headers, body

        return Status.good(), new_headers, new_body

    def error_for_sender(
        self,
        status: Status,
        to: Sequence[MailAddress],
        sender: MailAddress,
    ) -> Optional[str]:
        """
        Error text the sender may see for a failed send.

        Only people mailing themselves learn why; anyone else would
        otherwise be able to probe other users' encryption settings.
        """
        if status.is_ok():
            return None
        if len(to) == 1 and to[0].address == sender.address:
            return status.text
        return None

    def validate_key(self, text: str, enabled: bool) -> bool:
        """Check a public key submitted in the preferences form."""
        if not enabled:
            return True
        return self.engine.validate_key(text, KeyKind.PUBLIC)
