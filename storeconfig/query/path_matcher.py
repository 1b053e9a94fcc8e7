"""Compile user supplied config path expressions into filter patterns.

``*`` matches any substring, a trailing ``/`` lists all children
(``web/`` is the same as ``web/*``) and an empty expression matches every
path. All other characters, including SQL wildcards, match literally.
"""

import re
from dataclasses import dataclass, field

WILDCARD = "*"
LIKE_ESCAPE = "\\"


def _escape_like(literal: str) -> str:
    return (
        literal.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def like_to_regex(path_like: str) -> re.Pattern[str]:
    """Translate a backslash escaped SQL ``LIKE`` operand into an anchored regex."""
    parts: list[str] = []
    escaped = False
    for char in path_like:
        if escaped:
            parts.append(re.escape(char))
            escaped = False
        elif char == LIKE_ESCAPE:
            escaped = True
        elif char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    if escaped:
        parts.append(re.escape(LIKE_ESCAPE))
    return re.compile("".join(parts), re.DOTALL)


@dataclass(frozen=True)
class FilterPattern:
    """Compiled path filter usable both as a SQL ``LIKE`` operand and in memory."""

    expression: str
    like: str
    regex: re.Pattern[str] = field(repr=False, compare=False)

    def matches(self, path: str) -> bool:
        return self.regex.fullmatch(path) is not None


def compile_path(path_arg: str | None) -> FilterPattern:
    """
    Compile a path expression.

    Args:
        path_arg: Path as given on the command line, may be None

    Returns:
        FilterPattern for the expression
    """
    expression = path_arg or ""
    if not expression:
        expression = WILDCARD
    elif expression.endswith("/"):
        expression += WILDCARD

    like = "%".join(_escape_like(part) for part in expression.split(WILDCARD))
    return FilterPattern(expression=expression, like=like, regex=like_to_regex(like))
