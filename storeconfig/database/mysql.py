"""MySQL client for the Magento database.

Magento keeps its configuration in MySQL/MariaDB, so we connect through PyMySQL.
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import pymysql
from pymysql.connections import Connection
from pymysql.cursors import DictCursor

from storeconfig.config.secrets import read_secret
from storeconfig.domain.errors import StoreError
from storeconfig.logger.logger import get_logger
from storeconfig.logger.types import Category, param


class MagentoDbConfig:
    """Magento database connection configuration."""

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        database: str | None = None,
        user: str | None = None,
        password: str | None = None,
        table_prefix: str | None = None,
        connect_timeout: int = 10,
        read_timeout: int = 30,
        charset: str = "utf8mb4",
    ) -> None:
        self.host = host or os.getenv("MAGENTO_DB_HOST", "localhost")
        self.port = port or int(os.getenv("MAGENTO_DB_PORT", "3306"))
        self.database = database or os.getenv("MAGENTO_DB_NAME", "magento")
        self.user = user or read_secret("magento_db_user", "MAGENTO_DB_USER", "magento")
        self.password = (
            password
            if password is not None
            else read_secret("magento_db_password", "MAGENTO_DB_PASSWORD", "")
        )
        self.table_prefix = (
            table_prefix
            if table_prefix is not None
            else os.getenv("MAGENTO_DB_TABLE_PREFIX", "")
        )
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.charset = charset

    def to_dict(self) -> dict[str, Any]:
        """Convert config to PyMySQL connection kwargs."""
        return {
            "host": self.host,
            "port": self.port,
            "database": self.database,
            "user": self.user,
            "password": self.password,
            "charset": self.charset,
            "connect_timeout": self.connect_timeout,
            "read_timeout": self.read_timeout,
            "cursorclass": DictCursor,
            "autocommit": True,
        }


class MysqlClient:
    """Read-only MySQL client holding a single connection."""

    def __init__(self, config: MagentoDbConfig | None = None) -> None:
        """
        Initialize MySQL client.

        Args:
            config: MagentoDbConfig instance or None for defaults
        """
        self.config = config or MagentoDbConfig()
        self._connection: Connection | None = None
        self.logger = get_logger().with_category(Category.DATABASE)

    def connect(self) -> None:
        """Connect to MySQL."""
        try:
            self._connection = pymysql.connect(**self.config.to_dict())
            self.logger.debug(
                "Connected to MySQL",
                param("host", self.config.host),
                param("port", self.config.port),
                param("database", self.config.database),
            )
        except pymysql.Error as e:
            self.logger.error(
                "Failed to connect to MySQL",
                e,
                param("host", self.config.host),
                param("port", self.config.port),
            )
            raise StoreError(f"Failed to connect to MySQL: {e}") from e

    def close(self) -> None:
        """Close MySQL connection."""
        if self._connection:
            try:
                self._connection.close()
            except pymysql.Error as e:
                self.logger.warn("Error while closing MySQL connection", param("error", str(e)))
            finally:
                self._connection = None

    def __enter__(self) -> "MysqlClient":
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @contextmanager
    def cursor(self) -> Generator[DictCursor, None, None]:
        """Get cursor context manager."""
        if self._connection is None:
            raise RuntimeError("MySQL not connected. Call connect() first.")
        cursor = self._connection.cursor()
        try:
            yield cursor
        finally:
            cursor.close()

    def fetch_all(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> list[dict[str, Any]]:
        """
        Execute query and fetch all results.

        Args:
            query: SQL query
            params: Query parameters

        Returns:
            List of dicts with column names as keys
        """
        try:
            with self.cursor() as cursor:
                cursor.execute(query, params)
                return list(cursor.fetchall())
        except pymysql.Error as e:
            self.logger.error("Query failed", e, param("query", query))
            raise StoreError(f"Query failed: {e}") from e
