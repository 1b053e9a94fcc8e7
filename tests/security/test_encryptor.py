"""Magento compatible decryption."""

import base64

import pytest

from storeconfig.domain.errors import DecryptionError
from storeconfig.security.encryptor import MagentoDecryptor, parse_keys

KEY = "0123456789abcdef0123456789abcdef"
OTHER_KEY = "fedcba9876543210fedcba9876543210"


class TestParseKeys:
    def test_whitespace_separated_keys(self):
        assert parse_keys(f"{KEY}\n{OTHER_KEY}") == [KEY.encode(), OTHER_KEY.encode()]

    def test_base64_prefixed_key(self):
        raw = bytes(range(32))
        encoded = "base64" + base64.b64encode(raw).decode()

        assert parse_keys(encoded) == [raw]

    def test_invalid_base64_key(self):
        with pytest.raises(DecryptionError):
            parse_keys("base64!!!")


class TestMagentoDecryptor:
    def test_decrypts_sodium_value(self, encrypt):
        decryptor = MagentoDecryptor(KEY)

        assert decryptor.decrypt(encrypt("secret-password")) == "secret-password"

    def test_strips_whitespace(self, encrypt):
        assert MagentoDecryptor(KEY).decrypt(encrypt("  padded \n")) == "padded"

    def test_key_rotation_uses_key_version(self, encrypt):
        decryptor = MagentoDecryptor(f"{KEY} {OTHER_KEY}")
        ciphertext = encrypt("rotated", key=OTHER_KEY.encode(), key_version=1)

        assert decryptor.decrypt(ciphertext) == "rotated"

    def test_two_part_value_uses_first_key(self, encrypt):
        ciphertext = encrypt("legacy layout").split(":", 1)[1]

        assert MagentoDecryptor(KEY).decrypt(ciphertext) == "legacy layout"

    def test_empty_value(self):
        assert MagentoDecryptor(KEY).decrypt("") == ""

    def test_wrong_key_fails(self, encrypt):
        ciphertext = encrypt("secret", key=OTHER_KEY.encode())

        with pytest.raises(DecryptionError):
            MagentoDecryptor(KEY).decrypt(ciphertext)

    def test_unknown_key_version_fails(self, encrypt):
        with pytest.raises(DecryptionError, match="key version 4"):
            MagentoDecryptor(KEY).decrypt(encrypt("secret", key_version=4))

    def test_unsupported_cipher_fails(self):
        with pytest.raises(DecryptionError, match="Unsupported cipher version 2"):
            MagentoDecryptor(KEY).decrypt("0:2:abcd")

    @pytest.mark.parametrize(
        "ciphertext",
        ["plain value", "http://example.com", "0:3:not base64!", "0:3:" + base64.b64encode(b"short").decode()],
    )
    def test_malformed_values_fail(self, ciphertext):
        with pytest.raises(DecryptionError):
            MagentoDecryptor(KEY).decrypt(ciphertext)

    def test_requires_key(self):
        with pytest.raises(DecryptionError):
            MagentoDecryptor("   ")

    def test_key_of_wrong_length_fails(self, encrypt):
        with pytest.raises(DecryptionError, match="32 bytes"):
            MagentoDecryptor("tooshort").decrypt(encrypt("secret"))
