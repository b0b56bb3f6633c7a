"""
User Mailer

Host side of the outgoing mail pipeline. Splits opted-in recipients out
of bulk sends and runs every message through the mail gate hooks before
handing it to the transport.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from mail_gate import Body, MailAddress, MailHooks

from .mime_builder import build_message, render_message
from .smtp_handler import MailDeliveryError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    async def send(self, sender: str, recipients: List[str], message: str) -> None: ...


@dataclass
class SendResult:
    """Aggregate outcome of one send() call."""
    sent: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def error(self) -> Optional[str]:
        return "\n".join(self.errors) if self.errors else None


class UserMailer:
    def __init__(self, hooks: MailHooks, transport: Transport):
        self.hooks = hooks
        self.transport = transport

    async def send(
        self,
        to: Sequence[MailAddress],
        sender: MailAddress,
        subject: str,
        body: Body,
    ) -> SendResult:
        """
        Send a mail to one or more recipients.

        Recipients who requested encryption each get their own message;
        everyone else shares one. A rejected message does not stop the
        others from being sent.
        """
        result = SendResult()
        recipients = list(to)

        bulk = self.hooks.on_split_to(recipients)
        batches = [[single_to] for single_to in recipients if single_to not in bulk]
        if bulk:
            batches.insert(0, bulk)

        for batch in batches:
            await self._send_batch(batch, sender, subject, body, result)

        return result

    async def _send_batch(
        self,
        batch: List[MailAddress],
        sender: MailAddress,
        subject: str,
        body: Body,
        result: SendResult,
    ) -> None:
        valid = [t for t in batch if isinstance(t, MailAddress) and t.address]
        invalid = [t for t in batch if t not in valid]
        if invalid:
            logger.warning("Not sending to %d invalid recipient(s)", len(invalid))
            result.failed.extend(str(t) for t in invalid)
        if not valid:
            return
        addresses = [t.address for t in valid]

        content = self.hooks.on_transform_content(valid, sender, body)
        if not content.ok:
            self._reject(result, addresses, content.error)
            return

        headers, mime_body = build_message(sender, valid, subject, content.body)

        message = self.hooks.on_transform_message(valid, sender, subject, headers, mime_body)
        if not message.ok:
            self._reject(result, addresses, message.error)
            return

        try:
            await self.transport.send(
                sender.address,
                addresses,
                render_message(message.headers, message.body),
            )
        except MailDeliveryError as e:
            logger.error("Delivery to %d recipient(s) failed: %s", len(addresses), e)
            result.failed.extend(addresses)
            return

        result.sent.extend(addresses)

    def _reject(self, result: SendResult, addresses: List[str], error: Optional[str]) -> None:
        logger.info("Mail gate rejected a message to %d recipient(s)", len(addresses))
        result.failed.extend(addresses)
        if error:
            result.errors.append(error)
