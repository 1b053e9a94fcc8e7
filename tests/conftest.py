"""Shared fixtures."""

import base64
import os

import pytest
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from storeconfig.domain.config import ConfigEntry, Scope
from storeconfig.logger.logger import init_logger
from storeconfig.logger.writer import NullWriter
from storeconfig.repository.inmemory import InMemoryConfigStore

CRYPT_KEY = "0123456789abcdef0123456789abcdef"


def magento_encrypt(plaintext: str, key: bytes = CRYPT_KEY.encode(), key_version: int = 0) -> str:
    """Encrypt the way Magento's sodium adapter does."""
    nonce = os.urandom(12)
    sealed = ChaCha20Poly1305(key).encrypt(nonce, plaintext.encode(), nonce)
    return f"{key_version}:3:{base64.b64encode(nonce + sealed).decode()}"


@pytest.fixture(autouse=True)
def silent_logger():
    """Keep log records out of the test output."""
    return init_logger("storeconfig-test", "test", NullWriter())


@pytest.fixture
def entries():
    return [
        ConfigEntry("web/unsecure/base_url", Scope.STORES, 1, "http://y"),
        ConfigEntry("web/unsecure/base_url", Scope.DEFAULT, 0, "http://x"),
        ConfigEntry("web/secure/base_url", Scope.WEBSITES, 2, "https://w2"),
        ConfigEntry("web/secure/base_url", Scope.STORES, 3, "https://s3"),
        ConfigEntry("web/secure/base_url", Scope.WEBSITES, 1, "https://w1"),
        ConfigEntry("web/secure/base_url", Scope.DEFAULT, 0, "https://x"),
        ConfigEntry("web/cookie/cookie_domain", Scope.DEFAULT, 0, None),
        ConfigEntry("general/locale/code", Scope.DEFAULT, 0, "en_US"),
        ConfigEntry("general/locale/code", Scope.STORES, 0, "de_DE"),
    ]


@pytest.fixture
def store(entries):
    return InMemoryConfigStore(entries)


@pytest.fixture
def encrypt():
    return magento_encrypt
