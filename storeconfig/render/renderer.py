"""Single entry point for every output mode."""

from collections.abc import Sequence

from storeconfig.domain.config import RenderRow
from storeconfig.logger.logger import get_logger
from storeconfig.logger.types import Category, param
from storeconfig.render.modes import RenderMode
from storeconfig.render.scripts import render_shell_script, render_update_script
from storeconfig.render.table import render_table


def render(
    mode: RenderMode,
    rows: Sequence[RenderRow],
    table_format: str | None = None,
) -> list[str]:
    """
    Render ordered rows in the given mode.

    Args:
        mode: Active output mode
        rows: Rows in canonical order
        table_format: Table sub-format, only used by ``RenderMode.TABLE``

    Returns:
        Output lines, without trailing newlines
    """
    get_logger().with_category(Category.RENDER).debug(
        "Rendering rows",
        param("mode", mode.value),
        param("format", table_format),
        param("rows", len(rows)),
    )
    if mode is RenderMode.UPDATE_SCRIPT:
        return render_update_script(rows)
    if mode is RenderMode.SHELL_SCRIPT:
        return render_shell_script(rows)
    return render_table(rows, table_format)
