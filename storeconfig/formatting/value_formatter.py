"""Prepare raw config values for display."""

from typing import Protocol

from storeconfig.domain.errors import DecryptionError


class Decryptor(Protocol):
    def decrypt(self, ciphertext: str) -> str: ...


class ValueFormatter:
    """Optionally decrypts values; nulls pass through untouched."""

    def __init__(self, decryptor: Decryptor | None = None) -> None:
        self.decryptor = decryptor

    def format(self, raw: str | None, decrypt: bool = False) -> str | None:
        if raw is None or not decrypt:
            return raw
        if self.decryptor is None:
            raise DecryptionError("Decryption requested but no crypt key is configured")
        return self.decryptor.decrypt(raw)
