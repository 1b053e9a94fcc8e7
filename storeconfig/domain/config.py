"""Configuration domain models."""

from dataclasses import dataclass
from enum import Enum


class Scope(str, Enum):
    """Applicability level of a configuration value."""

    DEFAULT = "default"
    WEBSITES = "websites"
    STORES = "stores"

    @property
    def rank(self) -> int:
        """Override precedence: store values override website values, which override the default."""
        return SCOPE_RANK[self]


SCOPE_RANK: dict[Scope, int] = {
    Scope.DEFAULT: 0,
    Scope.WEBSITES: 1,
    Scope.STORES: 2,
}


@dataclass(frozen=True)
class ConfigEntry:
    """Single row of ``core_config_data``."""

    path: str
    scope: Scope
    scope_id: int
    value: str | None = None

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("ConfigEntry.path must not be empty")

    @property
    def sort_key(self) -> tuple[str, int, int]:
        return (self.path, self.scope.rank, self.scope_id)


@dataclass(frozen=True)
class ScopeFilter:
    """Optional scope / scope-id constraints, each applied only when set."""

    scope: Scope | None = None
    scope_id: int | None = None


@dataclass(frozen=True)
class RenderRow:
    """Formatted projection of a ConfigEntry; ``display_value`` is None when no value is set."""

    path: str
    scope: Scope
    scope_id: int
    display_value: str | None
