import logging
from typing import List

import aiosmtplib

from config import settings

logger = logging.getLogger(__name__)


class MailDeliveryError(Exception):
    """The SMTP server did not accept the message."""
    pass


class SmtpTransport:
    """Delivers rendered messages to the configured SMTP relay."""

    def __init__(
        self,
        hostname: str = None,
        port: int = None,
        username: str = None,
        password: str = None,
        start_tls: bool = None,
    ):
        self.hostname = hostname or settings.smtp_host
        self.port = port or settings.smtp_port
        self.username = username if username is not None else settings.smtp_username
        self.password = password if password is not None else settings.smtp_password
        self.start_tls = settings.smtp_start_tls if start_tls is None else start_tls

    async def send(self, sender: str, recipients: List[str], message: str) -> None:
        try:
            await aiosmtplib.send(
                message.encode("utf-8"),
                sender=sender,
                recipients=recipients,
                hostname=self.hostname,
                port=self.port,
                username=self.username,
                password=self.password,
                start_tls=self.start_tls,
            )
        except aiosmtplib.SMTPAuthenticationError as e:
            logger.error("SMTP authentication failed: %s", e)
            raise MailDeliveryError("SMTP authentication failed") from e
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error("Failed to deliver mail via %s:%d: %s", self.hostname, self.port, e)
            raise MailDeliveryError(str(e)) from e

        logger.info("Mail delivered for %d recipient(s)", len(recipients))
