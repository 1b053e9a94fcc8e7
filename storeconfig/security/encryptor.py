"""Decryption of values stored with Magento's encryptor.

Encrypted values look like ``<key version>:<cipher version>:<base64>``.
Cipher version 3 is ChaCha20-Poly1305 (IETF): the decoded payload starts
with the 12-byte nonce, which is also passed as associated data. The crypt
key may hold several whitespace separated keys; the key version indexes
into that list. Keys written by recent Magento releases carry a ``base64``
prefix followed by the encoded key bytes.
"""

import base64
import binascii

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from storeconfig.domain.errors import DecryptionError
from storeconfig.logger.logger import get_logger
from storeconfig.logger.types import Category, param

CIPHER_AEAD_CHACHA20POLY1305 = 3
NONCE_SIZE = 12
KEY_SIZE = 32
ENCODED_KEY_PREFIX = "base64"


def parse_keys(crypt_key: str) -> list[bytes]:
    """Split the configured crypt key into the per-version key list."""
    keys = []
    for key in crypt_key.split():
        if key.startswith(ENCODED_KEY_PREFIX):
            try:
                keys.append(base64.b64decode(key[len(ENCODED_KEY_PREFIX):], validate=True))
            except binascii.Error as e:
                raise DecryptionError(f"Invalid base64 crypt key: {e}") from e
        else:
            keys.append(key.encode())
    return keys


class MagentoDecryptor:
    """Decrypts values written by Magento's ``Encryptor::encrypt``."""

    def __init__(self, crypt_key: str) -> None:
        self.keys = parse_keys(crypt_key)
        if not self.keys:
            raise DecryptionError("No crypt key configured")
        self.logger = get_logger().with_category(Category.SECURITY)

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt a single stored value.

        Args:
            ciphertext: Value as stored in ``core_config_data``

        Returns:
            Plaintext with surrounding whitespace stripped

        Raises:
            DecryptionError: Malformed value, unknown key, unsupported cipher
                or failed authentication
        """
        if not ciphertext:
            return ""

        key_version, cipher_version, payload = self._split(ciphertext)

        if cipher_version != CIPHER_AEAD_CHACHA20POLY1305:
            raise DecryptionError(f"Unsupported cipher version {cipher_version}")
        if not 0 <= key_version < len(self.keys):
            raise DecryptionError(f"No crypt key for key version {key_version}")

        key = self.keys[key_version]
        if len(key) != KEY_SIZE:
            raise DecryptionError(
                f"Crypt key version {key_version} must be {KEY_SIZE} bytes, got {len(key)}"
            )

        try:
            data = base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise DecryptionError(f"Encrypted payload is not valid base64: {e}") from e

        if len(data) <= NONCE_SIZE:
            raise DecryptionError("Encrypted payload is too short")

        nonce, sealed = data[:NONCE_SIZE], data[NONCE_SIZE:]
        try:
            plaintext = ChaCha20Poly1305(key).decrypt(nonce, sealed, nonce)
        except InvalidTag as e:
            self.logger.warn(
                "Value failed authentication",
                param("key_version", key_version),
            )
            raise DecryptionError("Value could not be decrypted with the configured key") from e

        try:
            return plaintext.decode().strip()
        except UnicodeDecodeError as e:
            raise DecryptionError("Decrypted value is not valid UTF-8") from e

    @staticmethod
    def _split(ciphertext: str) -> tuple[int, int, str]:
        parts = ciphertext.split(":", 3)
        try:
            if len(parts) == 3:
                return int(parts[0]), int(parts[1]), parts[2]
            if len(parts) == 2:
                return 0, int(parts[0]), parts[1]
        except ValueError as e:
            raise DecryptionError(f"Malformed encrypted value: {e}") from e
        raise DecryptionError(
            "Malformed encrypted value: expected <key version>:<cipher version>:<payload>"
        )
