"""
PGP/MIME Packaging

Wraps an already MIME-encoded message body into an RFC 3156
multipart/encrypted message.
"""

from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from typing import Dict, Tuple
from uuid import uuid4

from .engine import GpgEngine

PGP_ENCRYPTED_PROTOCOL = "application/pgp-encrypted"
PGP_MIME_PREAMBLE = "This is an OpenPGP/MIME encrypted message (RFC 4880 and 3156)"
DEFAULT_CONTENT_TYPE = "text/plain; charset=UTF-8"


def _is_content_header(name: str) -> bool:
    return name.lower().startswith("content-")


def _make_boundary() -> str:
    return f"=_GPGMail_{uuid4().hex}"


class PgpMime:
    """Builds RFC 3156 encrypted messages using a GpgEngine."""

    def __init__(self, engine: GpgEngine):
        self.engine = engine

    def encrypt(
        self,
        headers: Dict[str, str],
        body: str,
        public_key_text: str,
    ) -> Tuple[Dict[str, str], str]:
        """
        Encrypt a MIME message for one recipient.

        The Content-* headers describe the body, so they move into the
        encrypted entity together with it. All other headers are kept on
        the outer message.

        Args:
            headers: Message headers
            body: MIME-encoded message body
            public_key_text: Recipient's ASCII-armored public key

        Returns:
            Tuple of (new headers, new body). The body is empty if the
            engine returned no ciphertext.
        """
        content_headers = {k: v for k, v in headers.items() if _is_content_header(k)}
        if not any(k.lower() == "content-type" for k in content_headers):
            content_headers["Content-Type"] = DEFAULT_CONTENT_TYPE

        entity = "".join(f"{k}: {v}\n" for k, v in content_headers.items())
        entity += "\n" + body

        ciphertext = self.engine.encrypt(entity, public_key_text)
        if not ciphertext:
            return dict(headers), ""

        message = self._build(ciphertext)

        new_headers = {
            k: v for k, v in headers.items()
            if not _is_content_header(k) and k.lower() != "mime-version"
        }
        new_headers["MIME-Version"] = "1.0"
        new_headers["Content-Type"] = message["Content-Type"]

        _, _, new_body = message.as_string().partition("\n\n")
        return new_headers, new_body

    def _build(self, ciphertext: str) -> MIMEMultipart:
        message = MIMEMultipart(
            "encrypted",
            boundary=_make_boundary(),
            protocol=PGP_ENCRYPTED_PROTOCOL,
        )
        message.preamble = PGP_MIME_PREAMBLE

        version = MIMEBase("application", "pgp-encrypted")
        del version["MIME-Version"]
        version["Content-Description"] = "PGP/MIME version identification"
        version.set_payload("Version: 1\n")
        message.attach(version)

        encrypted = MIMEBase("application", "octet-stream", name="encrypted.asc")
        del encrypted["MIME-Version"]
        encrypted["Content-Description"] = "OpenPGP encrypted message"
        encrypted["Content-Disposition"] = 'inline; filename="encrypted.asc"'
        encrypted.set_payload(ciphertext)
        message.attach(encrypted)

        return message
