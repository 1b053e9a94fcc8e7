"""Settings module for storeconfig."""

import os

from storeconfig.config.secrets import read_secret
from storeconfig.database.mysql import MagentoDbConfig


class CryptConfig:
    """Magento crypt key (``crypt/key`` in app/etc/env.php)."""

    def __init__(self, key: str | None = None) -> None:
        self.key = key or read_secret("magento_crypt_key", "MAGENTO_CRYPT_KEY")

    @property
    def is_configured(self) -> bool:
        """Check if a crypt key is available."""
        return bool(self.key and self.key.strip())


class Settings:
    """Application settings."""

    def __init__(self) -> None:
        # Service info
        self.environment = os.getenv("ENVIRONMENT", "dev")
        self.service_name = os.getenv("SERVICE_NAME", "storeconfig")
        self.service_version = os.getenv("SERVICE_VERSION", "0.1.0")
        self.log_level = os.getenv("LOG_LEVEL", "warn")

        # Magento database (core_config_data)
        self.database = MagentoDbConfig()

        # Decryption of backend-encrypted values
        self.crypt = CryptConfig()
