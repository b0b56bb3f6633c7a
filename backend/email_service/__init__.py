from .mailer import SendResult, UserMailer
from .mime_builder import build_message, render_message
from .smtp_handler import MailDeliveryError, SmtpTransport

__all__ = [
    "SendResult",
    "UserMailer",
    "build_message",
    "render_message",
    "MailDeliveryError",
    "SmtpTransport",
]
