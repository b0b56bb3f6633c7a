"""
Mail Gate Package

Decides per outgoing message whether and how to encrypt it for the
recipient, and how failures are reported back to the sender.
"""

from .bootstrap import create_hooks, load_extension
from .exceptions import InvalidRecipientError
from .gate import EncryptionGate
from .hooks import MailHooks
from .models import (
    Body,
    EncryptionMode,
    GateConfig,
    HookResult,
    MailAddress,
    Recipient,
)
from .status import ENCRYPT_ERROR_MESSAGE, Status

__all__ = [
    "create_hooks",
    "load_extension",
    "InvalidRecipientError",
    "EncryptionGate",
    "MailHooks",
    "Body",
    "EncryptionMode",
    "GateConfig",
    "HookResult",
    "MailAddress",
    "Recipient",
    "ENCRYPT_ERROR_MESSAGE",
    "Status",
]
