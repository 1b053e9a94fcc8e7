"""Output modes of ``config:store:get``."""

from enum import Enum


class RenderMode(str, Enum):
    TABLE = "table"
    UPDATE_SCRIPT = "update-script"
    SHELL_SCRIPT = "magerun-script"


def resolve_mode(update_script: bool = False, magerun_script: bool = False) -> RenderMode:
    """Pick the active mode; ``--update-script`` wins over ``--magerun-script``."""
    if update_script:
        return RenderMode.UPDATE_SCRIPT
    if magerun_script:
        return RenderMode.SHELL_SCRIPT
    return RenderMode.TABLE
