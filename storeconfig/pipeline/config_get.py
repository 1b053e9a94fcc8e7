"""``config:store:get`` pipeline: query, format, render, write."""

from dataclasses import dataclass
from typing import Protocol

from storeconfig.domain.config import ConfigEntry, RenderRow, Scope, ScopeFilter
from storeconfig.domain.errors import DecryptionError
from storeconfig.formatting.value_formatter import ValueFormatter
from storeconfig.logger.logger import get_logger
from storeconfig.logger.types import Category, param
from storeconfig.query.config_query import ConfigQuery
from storeconfig.query.path_matcher import compile_path
from storeconfig.render.modes import resolve_mode
from storeconfig.render.renderer import render
from storeconfig.repository.config_repository import ConfigStore

NOT_FOUND_MESSAGE = 'Couldn\'t find a config value for "{path}"'


class OutputSink(Protocol):
    def writeln(self, line: str) -> None: ...


class ListSink:
    """Collects written lines."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def writeln(self, line: str) -> None:
        self.lines.append(line)


@dataclass(frozen=True)
class ConfigGetRequest:
    path: str | None = None
    scope: Scope | None = None
    scope_id: int | None = None
    decrypt: bool = False
    update_script: bool = False
    magerun_script: bool = False
    table_format: str | None = None

    @property
    def scope_filter(self) -> ScopeFilter:
        return ScopeFilter(scope=self.scope, scope_id=self.scope_id)


class ConfigGetPipeline:
    """Composes path matching, querying, value formatting and rendering.

    Every line is rendered before the first one is written, so a failure
    (unknown format, undecryptable value) never leaves partial output.
    """

    def __init__(
        self,
        store: ConfigStore,
        formatter: ValueFormatter,
        sink: OutputSink,
    ) -> None:
        self.query = ConfigQuery(store)
        self.formatter = formatter
        self.sink = sink
        self.logger = get_logger().with_category(Category.PIPELINE)

    def run(self, request: ConfigGetRequest) -> int:
        """
        Execute the request.

        Args:
            request: Parsed command input

        Returns:
            Number of entries written, 0 when nothing matched
        """
        pattern = compile_path(request.path)
        logger = self.logger.with_fields(param("path", pattern.expression))
        entries = self.query.fetch(pattern, request.scope_filter)

        if not entries:
            logger.info("No config entries matched")
            self.sink.writeln(NOT_FOUND_MESSAGE.format(path=request.path or ""))
            return 0

        rows = [self._to_row(entry, request.decrypt) for entry in entries]
        mode = resolve_mode(request.update_script, request.magerun_script)
        lines = render(mode, rows, request.table_format)

        for line in lines:
            self.sink.writeln(line)
        logger.debug("Config entries written", param("rows", len(rows)), param("mode", mode.value))
        return len(rows)

    def _to_row(self, entry: ConfigEntry, decrypt: bool) -> RenderRow:
        try:
            display_value = self.formatter.format(entry.value, decrypt)
        except DecryptionError as e:
            self.logger.error(
                "Failed to decrypt config value",
                e,
                param("path", entry.path),
                param("scope", entry.scope.value),
                param("scope_id", entry.scope_id),
            )
            raise DecryptionError(
                f"Cannot decrypt {entry.path} ({entry.scope.value}/{entry.scope_id}): {e}"
            ) from e
        return RenderRow(
            path=entry.path,
            scope=entry.scope,
            scope_id=entry.scope_id,
            display_value=display_value,
        )
