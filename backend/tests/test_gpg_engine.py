import os
from unittest.mock import MagicMock, patch

import pytest

from gpg_engine import (
    EncryptionFailedError,
    GpgBinaryNotFoundError,
    GpgEngine,
    INVALID_KEY_MESSAGE,
    InvalidKeyError,
    KeyKind,
)

CIPHERTEXT = "-----BEGIN PGP MESSAGE-----\n\nhQEMA\n-----END PGP MESSAGE-----\n"


def import_result(fingerprints=("ABCDEF0123456789",), sec_imported=0):
    return MagicMock(fingerprints=list(fingerprints), sec_imported=sec_imported)


def crypt_result(ok=True, data=CIPHERTEXT, status_text="encryption ok"):
    crypt = MagicMock(ok=ok, status=status_text)
    crypt.__str__.return_value = data
    return crypt


@pytest.fixture
def mock_gpg():
    with patch("gpg_engine.engine.gnupg.GPG") as gpg_cls:
        gpg = gpg_cls.return_value
        gpg.import_keys.return_value = import_result()
        gpg.list_keys.return_value = [{"fingerprint": "ABCDEF0123456789"}]
        gpg.encrypt.return_value = crypt_result()
        yield gpg_cls


class TestEncrypt:

    def test_returns_armored_ciphertext(self, mock_gpg):
        assert GpgEngine().encrypt("Hello", "KEY") == CIPHERTEXT

    def test_encrypts_to_imported_key(self, mock_gpg):
        GpgEngine().encrypt("Hello", "KEY")
        gpg = mock_gpg.return_value
        gpg.import_keys.assert_called_once_with("KEY")
        args, kwargs = gpg.encrypt.call_args
        assert args == ("Hello", ["ABCDEF0123456789"])
        assert kwargs["always_trust"] is True
        assert kwargs["armor"] is True

    def test_uses_configured_binary(self, mock_gpg):
        GpgEngine(gpg_binary="/opt/gnupg/bin/gpg2").encrypt("Hello", "KEY")
        assert mock_gpg.call_args.kwargs["gpgbinary"] == "/opt/gnupg/bin/gpg2"

    def test_default_binary(self, mock_gpg):
        GpgEngine().encrypt("Hello", "KEY")
        assert mock_gpg.call_args.kwargs["gpgbinary"] == "gpg"

    def test_scratch_keyring_under_temp_dir_is_removed(self, mock_gpg, tmp_path):
        GpgEngine(temp_dir=tmp_path).encrypt("Hello", "KEY")
        home = mock_gpg.call_args.kwargs["gnupghome"]
        assert os.path.dirname(home) == str(tmp_path)
        assert not os.path.exists(home)

    def test_no_key_imported_raises_invalid_key(self, mock_gpg):
        mock_gpg.return_value.import_keys.return_value = import_result(fingerprints=())
        with pytest.raises(InvalidKeyError, match=INVALID_KEY_MESSAGE):
            GpgEngine().encrypt("Hello", "garbage")
        mock_gpg.return_value.encrypt.assert_not_called()

    def test_gpg_failure_raises(self, mock_gpg):
        mock_gpg.return_value.encrypt.return_value = crypt_result(ok=False, data="", status_text="invalid recipient")
        with pytest.raises(EncryptionFailedError, match="invalid recipient"):
            GpgEngine().encrypt("Hello", "KEY")

    def test_empty_output_is_returned_as_is(self, mock_gpg):
        mock_gpg.return_value.encrypt.return_value = crypt_result(data="")
        assert GpgEngine().encrypt("Hello", "KEY") == ""

    def test_missing_binary_raises(self, mock_gpg):
        mock_gpg.side_effect = OSError("Unable to run gpg (gpg) - it may not be available.")
        with pytest.raises(GpgBinaryNotFoundError):
            GpgEngine().encrypt("Hello", "KEY")


class TestValidateKey:

    @pytest.mark.parametrize("text", ["", "   \n", None])
    def test_blank_text_is_invalid_without_running_gpg(self, mock_gpg, text):
        assert GpgEngine().validate_key(text) is False
        mock_gpg.assert_not_called()

    def test_single_public_key_is_valid(self, mock_gpg):
        assert GpgEngine().validate_key("KEY") is True

    def test_garbage_is_invalid(self, mock_gpg):
        mock_gpg.return_value.import_keys.return_value = import_result(fingerprints=())
        mock_gpg.return_value.list_keys.return_value = []
        assert GpgEngine().validate_key("garbage") is False

    def test_multiple_keys_are_invalid(self, mock_gpg):
        mock_gpg.return_value.list_keys.return_value = [{"fingerprint": "A"}, {"fingerprint": "B"}]
        assert GpgEngine().validate_key("KEYS") is False

    def test_secret_key_rejected_as_public_key(self, mock_gpg):
        mock_gpg.return_value.import_keys.return_value = import_result(sec_imported=1)
        assert GpgEngine().validate_key("SECRET", KeyKind.PUBLIC) is False

    def test_private_kind_lists_secret_keys(self, mock_gpg):
        mock_gpg.return_value.import_keys.return_value = import_result(sec_imported=1)
        assert GpgEngine().validate_key("SECRET", KeyKind.PRIVATE) is True
        mock_gpg.return_value.list_keys.assert_called_once_with(secret=True)

    def test_missing_binary_raises(self, mock_gpg):
        mock_gpg.side_effect = OSError("Unable to run gpg")
        with pytest.raises(GpgBinaryNotFoundError):
            GpgEngine().validate_key("KEY")
