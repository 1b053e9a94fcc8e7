"""Fetch config entries and put them in override order."""

import time

from storeconfig.domain.config import ConfigEntry, ScopeFilter
from storeconfig.logger.logger import get_logger
from storeconfig.logger.types import Category, duration_ms, param
from storeconfig.query.path_matcher import FilterPattern
from storeconfig.repository.config_repository import ConfigStore


class ConfigQuery:
    """Runs a filtered store query and imposes the canonical ordering.

    Entries are ordered by path, then by scope rank
    (``default < websites < stores``, the order in which Magento applies
    overrides), then by scope id.
    """

    def __init__(self, store: ConfigStore) -> None:
        self.store = store
        self.logger = get_logger().with_category(Category.DATABASE)

    def fetch(
        self,
        pattern: FilterPattern,
        scope_filter: ScopeFilter | None = None,
    ) -> list[ConfigEntry]:
        """
        Fetch matching entries.

        Args:
            pattern: Compiled path filter
            scope_filter: Exact scope / scope id constraints, none by default

        Returns:
            Ordered entries, empty when nothing matches
        """
        scope_filter = scope_filter or ScopeFilter()
        started = time.monotonic()
        entries = sorted(
            self.store.query(pattern, scope_filter),
            key=lambda entry: entry.sort_key,
        )
        self.logger.info(
            "Config entries fetched",
            param("path", pattern.expression),
            param("rows", len(entries)),
            duration_ms(int((time.monotonic() - started) * 1000)),
        )
        return entries
