"""In-memory ConfigStore, used for tests and fixtures."""

from collections.abc import Iterable

from storeconfig.domain.config import ConfigEntry, ScopeFilter
from storeconfig.query.path_matcher import FilterPattern


class InMemoryConfigStore:
    """ConfigStore over a fixed list of entries."""

    def __init__(self, entries: Iterable[ConfigEntry] = ()) -> None:
        self.entries: list[ConfigEntry] = list(entries)
        self.queries: list[tuple[FilterPattern, ScopeFilter]] = []

    def query(self, pattern: FilterPattern, scope_filter: ScopeFilter) -> list[ConfigEntry]:
        self.queries.append((pattern, scope_filter))
        return [
            entry
            for entry in self.entries
            if pattern.matches(entry.path)
            and (scope_filter.scope is None or entry.scope == scope_filter.scope)
            and (scope_filter.scope_id is None or entry.scope_id == scope_filter.scope_id)
        ]
