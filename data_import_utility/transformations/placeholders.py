"""Positional ``${n}`` placeholder substitution.

A placeholder whose index has no supplied value is left verbatim, so a
partially specified format stays visibly unfinished.
"""

from __future__ import annotations

from collections.abc import Sequence
import re

from ..constants import Patterns

_PLACEHOLDER_PATTERN = re.compile(Patterns.PLACEHOLDER)


def substitute_placeholders(template: str, values: Sequence[str | None]) -> str:
    """Replace ``${i}`` with ``values[i]``; ``None`` values render empty.

    Example:
        >>> substitute_placeholders("${0} ${1}", ["Test Input"])
        'Test Input ${1}'
    """

    def _replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index >= len(values):
            return match.group(0)
        value = values[index]
        return "" if value is None else value

    return _PLACEHOLDER_PATTERN.sub(_replace, template)


def fill_unresolved_placeholders(template: str, filler: str = "0") -> str:
    return _PLACEHOLDER_PATTERN.sub(filler, template)


def has_placeholders(template: str) -> bool:
    return _PLACEHOLDER_PATTERN.search(template) is not None
