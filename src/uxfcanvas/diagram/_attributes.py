# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Parsers for the ``key=value`` micro-format of panel attributes."""
from __future__ import annotations

__all__ = ["ParsedAttributes", "parse_attributes", "parse_help_text"]

import dataclasses
import re

RE_PROPERTY = re.compile(r"(?P<key>[^=\s]+|^)=(?P<value>.*)")
RE_HELP_PROPERTY = re.compile(r"(?P<key>[^=]*)=(?P<value>.*)")


@dataclasses.dataclass(frozen=True)
class ParsedAttributes:
    """Literal text lines and properties found in an attribute block."""

    lines: tuple[str, ...] = ()
    extras: dict[str, str] = dataclasses.field(default_factory=dict)


def _parse(source: str, pattern: re.Pattern[str]) -> ParsedAttributes:
    lines: list[str] = []
    extras: dict[str, str] = {}
    for line in source.split("\n"):
        match = pattern.search(line)
        if match is None:
            lines.append(line)
        else:
            extras[match.group("key").strip()] = match.group("value")
    return ParsedAttributes(tuple(lines), extras)


def parse_attributes(source: str) -> ParsedAttributes:
    """Split a panel attribute block into text lines and properties.

    A line is a property if it contains a key made of anything but
    whitespace and ``=``, directly followed by ``=``. The value is the
    rest of the line and is not trimmed. The key may only be empty if
    the line starts with ``=``, so ``=value`` is a property with the key
    ``""`` and does not show up in the text, while ``count: int = 0``
    stays a text line. Later duplicates override earlier ones.

    Examples
    --------
    >>> parsed = parse_attributes("bg=red\\nTitle\\n--\\nfield: int")
    >>> parsed.lines
    ('Title', '--', 'field: int')
    >>> parsed.extras
    {'bg': 'red'}
    """
    return _parse(source, RE_PROPERTY)


def parse_help_text(source: str) -> dict[str, str]:
    """Parse the diagram-wide help text into its properties.

    Unlike :func:`parse_attributes`, keys may contain whitespace and are
    stripped, so ``fontsize = 12`` is understood as well.
    """
    return _parse(source, RE_HELP_PROPERTY).extras
