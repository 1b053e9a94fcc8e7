"""Configuration repository for the Magento ``core_config_data`` table."""

from collections.abc import Sequence
from typing import Any, Protocol

from storeconfig.database.mysql import MysqlClient
from storeconfig.domain.config import ConfigEntry, Scope, ScopeFilter
from storeconfig.logger.logger import get_logger
from storeconfig.logger.types import Category, param
from storeconfig.query.path_matcher import FilterPattern


class ConfigStore(Protocol):
    """Read-only source of configuration entries."""

    def query(
        self, pattern: FilterPattern, scope_filter: ScopeFilter
    ) -> Sequence[ConfigEntry]: ...


def entry_from_row(row: dict[str, Any]) -> ConfigEntry:
    """Build a ConfigEntry from a ``core_config_data`` row."""
    return ConfigEntry(
        path=row["path"],
        scope=Scope(row["scope"]),
        scope_id=int(row["scope_id"]),
        value=row["value"],
    )


class ConfigDataRepository:
    """ConfigStore backed by ``core_config_data`` in MySQL."""

    TABLE = "core_config_data"

    def __init__(self, mysql_client: MysqlClient, table_prefix: str = "") -> None:
        """
        Initialize ConfigDataRepository.

        Args:
            mysql_client: Connected MySQL client
            table_prefix: Magento table prefix (``db/table_prefix`` in env.php)
        """
        self.mysql = mysql_client
        self.table = f"{table_prefix}{self.TABLE}"
        self.logger = get_logger().with_category(Category.DATABASE)

    def query(self, pattern: FilterPattern, scope_filter: ScopeFilter) -> list[ConfigEntry]:
        """
        Fetch entries whose path matches the pattern.

        Args:
            pattern: Compiled path filter, its ``LIKE`` operand goes to MySQL
            scope_filter: Exact scope / scope id constraints

        Returns:
            Matching entries in no particular order
        """
        conditions = ["path LIKE %s"]
        params: list[Any] = [pattern.like]

        if scope_filter.scope is not None:
            conditions.append("scope = %s")
            params.append(scope_filter.scope.value)

        if scope_filter.scope_id is not None:
            conditions.append("scope_id = %s")
            params.append(scope_filter.scope_id)

        query = (
            f"SELECT path, scope, scope_id, value FROM `{self.table}` "
            f"WHERE {' AND '.join(conditions)}"
        )
        self.logger.debug(
            "Querying config data",
            param("table", self.table),
            param("path_like", pattern.like),
            param("scope", scope_filter.scope.value if scope_filter.scope else None),
            param("scope_id", scope_filter.scope_id),
        )

        rows = self.mysql.fetch_all(query, tuple(params))
        return [entry_from_row(row) for row in rows]
