"""
Mail Pipeline Hooks

Entry points called by the host's outgoing mail pipeline and preference
form. Each hook translates the host's calling convention into gate calls.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from gpg_engine import INVALID_KEY_MESSAGE, GpgEngineError
from preferences import ENABLE_OPTION, KEY_OPTION

from .exceptions import InvalidRecipientError
from .gate import EncryptionGate
from .models import Body, HookResult, MailAddress, Recipient

logger = logging.getLogger(__name__)

PREFERENCES_SECTION = "personal/email"


class MailHooks:
    """Hook handlers bound to one EncryptionGate."""

    def __init__(self, gate: EncryptionGate):
        self.gate = gate

    def on_get_preferences(self, user: str, preferences: Dict[str, Any]) -> Dict[str, Any]:
        """Add the encryption toggle and key field to the preferences form."""
        preferences[ENABLE_OPTION] = {
            "type": "toggle",
            "label-message": "gpgmail-pref-enable",
            "section": PREFERENCES_SECTION,
        }
        preferences[KEY_OPTION] = {
            "type": "textarea",
            "label-message": "gpgmail-pref-key",
            "help-message": "gpgmail-pref-key-help",
            "section": PREFERENCES_SECTION,
            "validation-callback": self.validate_key_field,
            "hide-if": ["===", ENABLE_OPTION, ""],
        }
        return preferences

    def on_split_to(self, to: Sequence[Any]) -> List[Any]:
        """Drop users who requested encryption from a bulk send."""
        return [single_to for single_to in to if not self.gate.should_filter_recipient(single_to)]

    def on_transform_content(
        self,
        to: Sequence[MailAddress],
        sender: MailAddress,
        body: Body,
    ) -> HookResult:
        """Inline-encrypt the plaintext body for a single recipient."""
        if len(to) != 1:
            # recipients who requested encryption were split out by on_split_to
            logger.debug("Skipping content transform for %d recipients", len(to))
            return HookResult(ok=True, body=body)

        recipient = self._recipient(to[0])
        if recipient is None:
            return HookResult(ok=False, body=body)
        status, new_body = self.gate.encrypt_body(body, recipient)

        if not status.is_ok():
            return HookResult(
                ok=False,
                body=body,
                error=self.gate.error_for_sender(status, to, sender),
            )
        return HookResult(ok=True, body=new_body)

    def on_transform_message(
        self,
        to: Sequence[MailAddress],
        sender: MailAddress,
        subject: str,
        headers: Mapping[str, str],
        body: str,
    ) -> HookResult:
        """PGP/MIME-encrypt a fully encoded message for a single recipient."""
        if len(to) != 1:
            logger.debug("Skipping message transform for %d recipients", len(to))
            return HookResult(ok=True, body=body, headers=headers)

        recipient = self._recipient(to[0])
        if recipient is None:
            return HookResult(ok=False, body=body, headers=headers)
        status, new_headers, new_body = self.gate.encrypt_mime(dict(headers), body, recipient)

        if not status.is_ok():
            return HookResult(
                ok=False,
                body=body,
                headers=headers,
                error=self.gate.error_for_sender(status, to, sender),
            )
        return HookResult(ok=True, body=new_body, headers=new_headers)

    def _recipient(self, to: Any) -> Optional[Recipient]:
        try:
            return self.gate.recipient_for(to)
        except InvalidRecipientError:
            logger.warning("invalid address: %r", to)
            return None

    def validate_key_field(self, value: str, all_data: Mapping[str, Any]) -> Union[bool, str]:
        """Form validation callback for the key field."""
        try:
            valid = self.gate.validate_key(value, bool(all_data.get(ENABLE_OPTION)))
        except GpgEngineError as e:
            logger.error("Key validation unavailable: %s", e)
            valid = False
        return True if valid else INVALID_KEY_MESSAGE
