"""Replayable script output.

The update script is PHP source for a Magento setup/installer context; the
shell script is a list of ``config:store:set`` invocations.
"""

from collections.abc import Sequence

from storeconfig.domain.config import RenderRow, Scope

UPDATE_SCRIPT_HEADER = (
    "<?php",
    "$installer = $this;",
    "# generated by storeconfig",
)
NULL_TOKEN = "NULL"
NO_NULL_FLAG = "--no-null"


def php_export(value: str | int | None) -> str:
    """Render ``value`` as a PHP literal, matching ``var_export``."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return "'" + escaped.replace("\0", "' . \"\\0\" . '") + "'"


def shell_quote(value: str) -> str:
    """Quote ``value`` for a POSIX shell, always wrapping it in single quotes."""
    return "'" + value.replace("'", "'\\''") + "'"


def render_update_script(rows: Sequence[RenderRow]) -> list[str]:
    lines = list(UPDATE_SCRIPT_HEADER)
    for row in rows:
        if row.scope is Scope.DEFAULT:
            args = (php_export(row.path), php_export(row.display_value))
        else:
            args = (
                php_export(row.path),
                php_export(row.display_value),
                php_export(row.scope.value),
                php_export(str(row.scope_id)),
            )
        lines.append(f"$installer->setConfigData({', '.join(args)});")
    return lines


def escape_line_breaks(value: str) -> str:
    return value.replace("\n", "\\n").replace("\r", "\\r")


def render_shell_script(rows: Sequence[RenderRow]) -> list[str]:
    """
    Render one ``config:store:set`` command per row.

    Line breaks inside values are written as the two characters ``\\n`` /
    ``\\r``. A null value is the bare token ``NULL``; a value that is the
    string ``NULL`` gets ``--no-null`` so that replay keeps it a string.
    """
    lines = []
    for row in rows:
        value = row.display_value
        if value is not None:
            value = escape_line_breaks(value)

        display_value = NULL_TOKEN if value is None else shell_quote(value)
        protect_null_string = f"{NO_NULL_FLAG} " if value == NULL_TOKEN else ""

        lines.append(
            f"config:store:set {protect_null_string}--scope-id={row.scope_id} "
            f"--scope={row.scope.value} -- {shell_quote(row.path)} {display_value}"
        )
    return lines
