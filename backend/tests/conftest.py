import os
import sys
from base64 import b64decode, b64encode
from pathlib import Path

import pytest

backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))

os.environ.setdefault("GPGMAIL_SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("GPGMAIL_API_TOKEN", "test-api-token")
os.environ.setdefault("GPGMAIL_USE_PGP_MIME", "false")

from gpg_engine import INVALID_KEY_MESSAGE, InvalidKeyError, KeyKind  # noqa: E402
from mail_gate import EncryptionGate, EncryptionMode, GateConfig, MailAddress, MailHooks  # noqa: E402
from preferences import ENABLE_OPTION, KEY_OPTION, MemoryPreferenceStore  # noqa: E402

VALID_KEY = (
    "-----BEGIN PGP PUBLIC KEY BLOCK-----\n"
    "\n"
    "mDMEZfakekeyFakeKeyFakeKeyFakeKeyFakeKey\n"
    "-----END PGP PUBLIC KEY BLOCK-----\n"
)


def fake_decrypt(armored: str) -> str:
    """Undo FakeEngine.encrypt."""
    payload = armored.split("\n\n", 1)[1].split("\n-----END", 1)[0]
    return b64decode(payload.strip())[::-1].decode("utf-8")


class FakeEngine:
    """Stands in for GpgEngine; accepts only VALID_KEY."""

    def __init__(self, empty: bool = False, error: Exception = None):
        self.empty = empty
        self.error = error
        self.calls = []

    def encrypt(self, plaintext, public_key_text):
        self.calls.append((plaintext, public_key_text))
        if self.error is not None:
            raise self.error
        if public_key_text != VALID_KEY:
            raise InvalidKeyError(INVALID_KEY_MESSAGE)
        if self.empty:
            return ""
        armored = b64encode(plaintext.encode("utf-8")[::-1]).decode("ascii")
        return f"-----BEGIN PGP MESSAGE-----\n\n{armored}\n-----END PGP MESSAGE-----\n"

    def validate_key(self, text, kind=KeyKind.PUBLIC):
        return text == VALID_KEY


@pytest.fixture
def valid_key():
    return VALID_KEY


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def store():
    return MemoryPreferenceStore()


@pytest.fixture
def sender():
    return MailAddress("a@x.com", "Alice")


@pytest.fixture
def third_party():
    return MailAddress("b@y.com", "Bob")


@pytest.fixture
def opt_in(store):
    """Turn on encryption for a user with the given key."""
    def _opt_in(address: MailAddress, key: str = VALID_KEY):
        store.set_option(address.user, ENABLE_OPTION, True)
        store.set_option(address.user, KEY_OPTION, key)
    return _opt_in


@pytest.fixture
def make_gate(store, fake_engine):
    def _make_gate(mode: EncryptionMode = EncryptionMode.INLINE, engine=None):
        return EncryptionGate(GateConfig(mode=mode), store, engine=engine or fake_engine)
    return _make_gate


@pytest.fixture
def inline_hooks(make_gate):
    return MailHooks(make_gate(EncryptionMode.INLINE))


@pytest.fixture
def mime_hooks(make_gate):
    return MailHooks(make_gate(EncryptionMode.PGP_MIME))
