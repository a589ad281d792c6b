"""Tests for payment key encryption."""
import pytest

from freelancehub.core import encryption
from freelancehub.core.config import settings
from freelancehub.core.encryption import EncryptedValueFormatError, decrypt, encrypt


def test_round_trip_restores_plaintext():
    secret = "cf_live_5f2a9c-ÄÖÜ-🔑"
    assert decrypt(encrypt(secret)) == secret


def test_output_is_three_hex_segments():
    iv, tag, ciphertext = encrypt("abc").split(":")
    assert len(bytes.fromhex(iv)) == encryption.IV_LENGTH
    assert len(bytes.fromhex(tag)) == encryption.AUTH_TAG_LENGTH
    assert len(bytes.fromhex(ciphertext)) == 3


def test_same_plaintext_encrypts_differently():
    assert encrypt("same") != encrypt("same")


@pytest.mark.parametrize("value", ["nocolons", "a:b", "a:b:c:d", ""])
def test_wrong_segment_count_is_format_error(value):
    with pytest.raises(EncryptedValueFormatError):
        decrypt(value)


def test_non_hex_segment_is_format_error():
    with pytest.raises(EncryptedValueFormatError):
        decrypt("zz:zz:zz")


def test_tampered_ciphertext_is_rejected():
    iv, tag, ciphertext = encrypt("payload").split(":")
    flipped = format(int(ciphertext[:2], 16) ^ 0x01, "02x") + ciphertext[2:]
    with pytest.raises(ValueError, match="Invalid or corrupted"):
        decrypt(f"{iv}:{tag}:{flipped}")


def test_wrong_key_is_rejected(monkeypatch):
    token = encrypt("payload")
    monkeypatch.setattr(settings, "ENCRYPTION_SECRET", "another-secret")
    encryption.reset_key_cache()
    try:
        with pytest.raises(ValueError, match="Invalid or corrupted"):
            decrypt(token)
    finally:
        monkeypatch.undo()
        encryption.reset_key_cache()


def test_missing_secret_raises_runtime_error(monkeypatch):
    monkeypatch.setattr(settings, "ENCRYPTION_SECRET", "")
    encryption.reset_key_cache()
    try:
        assert not encryption.is_encryption_configured()
        with pytest.raises(RuntimeError):
            encrypt("payload")
    finally:
        monkeypatch.undo()
        encryption.reset_key_cache()
