"""
MIME Message Builder

Renders an outgoing mail into a header mapping and a MIME-encoded body,
the shape the message transform hook works on.
"""

from email.header import Header
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate
from typing import Dict, Mapping, Sequence, Tuple
from uuid import uuid4

from mail_gate import Body, MailAddress

MESSAGE_ID_DOMAIN = "gpgmail.local"


def _make_boundary() -> str:
    return f"=_GPGMail_Alt_{uuid4().hex}"


def _format_address(address: MailAddress) -> str:
    if address.name and address.name.isascii():
        return f'"{address.name}" <{address.address}>'
    return address.address


def _encode_subject(subject: str) -> str:
    if subject.isascii():
        return subject
    return Header(subject, "utf-8").encode()


def build_message(
    sender: MailAddress,
    to: Sequence[MailAddress],
    subject: str,
    body: Body,
) -> Tuple[Dict[str, str], str]:
    """
    Build the MIME rendering of a mail.

    A {"text": ..., "html": ...} body becomes multipart/alternative,
    a plain string becomes a single text/plain part.

    Returns:
        Tuple of (headers, MIME-encoded body)
    """
    if isinstance(body, dict):
        message = MIMEMultipart("alternative", boundary=_make_boundary())
        if body.get("text") is not None:
            message.attach(MIMEText(body["text"], "plain", "utf-8"))
        if body.get("html") is not None:
            message.attach(MIMEText(body["html"], "html", "utf-8"))
    else:
        message = MIMEText(body, "plain", "utf-8")

    message["From"] = _format_address(sender)
    message["To"] = ", ".join(_format_address(t) for t in to)
    message["Subject"] = _encode_subject(subject)
    message["Date"] = formatdate(localtime=True)
    message["Message-ID"] = f"<{uuid4()}@{MESSAGE_ID_DOMAIN}>"

    _, _, mime_body = message.as_string().partition("\n\n")
    headers = {name: str(value) for name, value in message.items()}
    return headers, mime_body


def render_message(headers: Mapping[str, str], body: str) -> str:
    """Join headers and body into a message ready for the transport."""
    head = "".join(f"{name}: {value}\n" for name, value in headers.items())
    return f"{head}\n{body}"
